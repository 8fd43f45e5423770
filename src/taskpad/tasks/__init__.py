"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority)
- ordering.py: display-order projection (never mutates the store)
- notification_scheduler.py: failure-tolerant reminder scheduling
- persistence.py: failure-tolerant load/save of the whole task list
- task_store.py: authoritative in-memory list + detached side effects
"""
