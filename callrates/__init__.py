"""
Call Rates Scheduler - Server Package

Creators publish weekly voice/video call availability with a per-session
price; viewers read the resolved calendar. SQLite storage, REST API.
"""

__version__ = "0.1.0"

__all__ = [
    "availability",
    "errors",
    "models",
    "schedules",
    "server",
    "slots",
    "storage",
    "timecodec",
]
