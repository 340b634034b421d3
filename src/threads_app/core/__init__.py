"""
Core building blocks shared by the task subsystem and the front end.

Components:
- observable.py: current value + change stream
- scope.py: structured concurrency (TaskScope, CancellationToken)
- ports.py: Protocols the engine and connectors depend on
- state.py: AppState (one session)
"""
