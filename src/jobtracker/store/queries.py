"""Queries over the job_applications table.

Reads never fail on a bad row: rows that do not parse are collected in
:attr:`QueryResult.failures` next to the records that did.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from typing import Any, Optional

from jobtracker.errors import RecordParseError, StoreError
from jobtracker.models.job import ApplicationStatus, JobApplication, PositionCategory
from jobtracker.store.database import Database

logger = logging.getLogger(__name__)

COLUMNS = (
    "id, company_name, position, position_category, work_type, location, "
    "location_type, application_date, status, is_active, notes, contact_info, "
    "url, files"
)

_SELECT = f"SELECT {COLUMNS} FROM job_applications"


@dataclass
class QueryResult:
    """Parsed records plus the rows that failed to parse."""
    applications: list[JobApplication] = field(default_factory=list)
    failures: list[RecordParseError] = field(default_factory=list)


def _execute(db: Database, sql: str, params: Any = ()) -> sqlite3.Cursor:
    try:
        return db.connection.execute(sql, params)
    except sqlite3.Error as exc:
        raise StoreError(f"Query failed: {exc}", details={"sql": sql}) from exc


def _collect(rows: list[sqlite3.Row]) -> QueryResult:
    result = QueryResult()
    for row in rows:
        try:
            result.applications.append(JobApplication.from_row(row))
        except RecordParseError as exc:
            logger.warning("Skipping malformed row: %s", exc.message)
            result.failures.append(exc)
    return result


def _select(db: Database, where: str = "", params: Any = ()) -> QueryResult:
    sql = f"{_SELECT} {where} ORDER BY id".strip()
    return _collect(_execute(db, sql, params).fetchall())


def fetch_applications(
    db: Database, status: Optional[ApplicationStatus] = None
) -> QueryResult:
    """All applications, optionally only those with ``status``."""
    if status is None:
        return _select(db)
    return _select(db, "WHERE status = ?", (status.value,))


def get_application_by_id(db: Database, application_id: int) -> Optional[JobApplication]:
    """One application, or None if the id is unknown.

    Raises:
        RecordParseError: If the stored row is malformed.
    """
    row = _execute(db, f"{_SELECT} WHERE id = ?", (application_id,)).fetchone()
    return JobApplication.from_row(row) if row is not None else None


def get_application_by_company(db: Database, company_name: str) -> QueryResult:
    return _select(db, "WHERE company_name = ?", (company_name,))


def get_application_by_category(db: Database, category: PositionCategory) -> QueryResult:
    return _select(db, "WHERE position_category = ?", (category.value,))


def add_application(db: Database, application: JobApplication) -> int:
    """Insert ``application`` and return its new id (any set id is ignored)."""
    params = application.to_params()
    params.pop("id")
    with db.connection:
        cursor = _execute(
            db,
            "INSERT INTO job_applications (company_name, position, position_category, "
            "work_type, location, location_type, application_date, status, is_active, "
            "notes, contact_info, url, files) VALUES (:company_name, :position, "
            ":position_category, :work_type, :location, :location_type, "
            ":application_date, :status, :is_active, :notes, :contact_info, :url, :files)",
            params,
        )
    logger.info("Added application %s (%s)", cursor.lastrowid, application.company_name)
    return int(cursor.lastrowid)


def update_application(db: Database, application: JobApplication) -> None:
    """Overwrite the stored record with the same id.

    Raises:
        StoreError: If ``application.id`` is None or matches no row.
    """
    if application.id is None:
        raise StoreError("Cannot update an application without an id")
    with db.connection:
        cursor = _execute(
            db,
            "UPDATE job_applications SET company_name = :company_name, "
            "position = :position, position_category = :position_category, "
            "work_type = :work_type, location = :location, "
            "location_type = :location_type, application_date = :application_date, "
            "status = :status, is_active = :is_active, notes = :notes, "
            "contact_info = :contact_info, url = :url, files = :files WHERE id = :id",
            application.to_params(),
        )
    if cursor.rowcount == 0:
        raise StoreError(f"No application with id {application.id}")
    logger.info("Updated application %s", application.id)


def update_notes(db: Database, application_id: int, notes: str) -> None:
    with db.connection:
        cursor = _execute(
            db,
            "UPDATE job_applications SET notes = ? WHERE id = ?",
            (notes, application_id),
        )
    if cursor.rowcount == 0:
        raise StoreError(f"No application with id {application_id}")
    logger.info("Updated notes of application %s", application_id)


def delete_application(db: Database, application_id: int) -> None:
    with db.connection:
        cursor = _execute(
            db, "DELETE FROM job_applications WHERE id = ?", (application_id,)
        )
    if cursor.rowcount == 0:
        raise StoreError(f"No application with id {application_id}")
    logger.info("Deleted application %s", application_id)
