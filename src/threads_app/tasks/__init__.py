"""
Task subsystem.

Components:
- task_models.py: data structures (Task, ExecutionContext, samples, priority names)
- task_store.py: in-memory observable store (task list + status line + id counter)
- task_operations.py: async operations engine and the priority sort
"""
