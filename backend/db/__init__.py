"""Database package."""

from backend.db.base import (
    Base,
    create_db_engine,
    create_session_factory,
    get_db,
    init_db,
    store_call,
)
from backend.db.tables import JOB_STATUSES, JOB_TYPES, Job, User

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "get_db",
    "init_db",
    "store_call",
    "JOB_STATUSES",
    "JOB_TYPES",
    "Job",
    "User",
]
