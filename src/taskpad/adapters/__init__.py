"""
Concrete implementations of the core ports.

- file_storage.py: key/value Storage Service backed by JSON files
- local_reminders.py: in-process Notification Service driven by the asyncio loop
"""
