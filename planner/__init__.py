"""Day planner backend: tasks, habits, events and followed sports in one timeline."""

__version__ = "0.1.0"
