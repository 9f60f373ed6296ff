"""SQLite persistence for job applications."""

from jobtracker.store.database import Database
from jobtracker.store.queries import QueryResult

__all__ = ["Database", "QueryResult"]
