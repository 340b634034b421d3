"""
threads_app: tasks, observable state and simulated execution contexts.

Components:
- tasks/: data model, observable task store, async operations engine
- core/: observable values, task scope (cancellation), ports, session state
- cli/ + connectors/: console front end (presentation only)
"""

__version__ = "0.1.0"
