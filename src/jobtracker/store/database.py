"""SQLite connection holder for the job application table."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Optional, Union

from jobtracker.errors import StoreError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS job_applications (
    id INTEGER PRIMARY KEY,
    company_name TEXT NOT NULL,
    position TEXT NOT NULL,
    position_category TEXT NOT NULL,
    work_type TEXT NOT NULL,
    location TEXT NOT NULL,
    location_type TEXT NOT NULL,
    application_date TEXT NOT NULL,
    status TEXT NOT NULL,
    is_active BOOLEAN NOT NULL,
    notes TEXT,
    contact_info TEXT,
    url TEXT,
    files TEXT NOT NULL
);
"""


class Database:
    """An open SQLite database.

    Use as a context manager, or call :meth:`close` when done:

        with Database(path) as db:
            db.create()
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path) if str(path) != ":memory:" else path
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def connection(self) -> sqlite3.Connection:
        """The live connection, opened on first use.

        Raises:
            StoreError: If the file cannot be opened.
        """
        if self._conn is None:
            if isinstance(self.path, Path):
                self.path.parent.mkdir(parents=True, exist_ok=True)
            try:
                self._conn = sqlite3.connect(str(self.path), timeout=10.0)
            except sqlite3.Error as exc:
                raise StoreError(f"Cannot open database {self.path}: {exc}") from exc
            self._conn.row_factory = sqlite3.Row
            logger.debug("Opened database %s", self.path)
        return self._conn

    def create(self) -> None:
        """Create the schema if it does not exist."""
        try:
            with self.connection:
                self.connection.executescript(SCHEMA)
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot create schema: {exc}") from exc

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("Closed database %s", self.path)

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
