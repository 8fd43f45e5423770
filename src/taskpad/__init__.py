"""Personal task list with delayed reminders and durable local storage."""

__version__ = "0.1.0"
