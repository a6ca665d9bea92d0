"""Kill task tracker: follows kill-task progress from game chat lines."""

__version__ = "0.1.0"
