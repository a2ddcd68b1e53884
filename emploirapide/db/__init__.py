"""Database package."""

from emploirapide.db.base import Base, JSONText, get_db, init_db
from emploirapide.db.tables import (
    CV,
    Application,
    ExternalApplication,
    Job,
    SavedJob,
    User,
)

__all__ = [
    "Base",
    "JSONText",
    "get_db",
    "init_db",
    "User",
    "Job",
    "Application",
    "ExternalApplication",
    "SavedJob",
    "CV",
]
