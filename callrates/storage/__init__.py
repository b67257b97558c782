from ._schema import SCHEMA_VERSION, SCHEMA_SQL
from .schedules import ScheduleRepo
from .manager import StorageManager

__all__ = [
    "SCHEMA_VERSION",
    "SCHEMA_SQL",
    "ScheduleRepo",
    "StorageManager",
]
