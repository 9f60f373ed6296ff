"""Job application record and its enumerations.

Enum values are the strings stored in the database, which are also the
labels shown in the UI ("Data Science", "Full Time", "On Site").
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from jobtracker.errors import RecordParseError


class PositionCategory(str, Enum):
    ENGINEERING = "Engineering"
    DEVELOPMENT = "Development"
    SUPPORT = "Support"
    DATA_SCIENCE = "Data Science"
    ANALYST = "Analyst"
    DESIGN = "Design"


class WorkType(str, Enum):
    FULL_TIME = "Full Time"
    PART_TIME = "Part Time"
    INTERNSHIP = "Internship"
    CONTRACT = "Contract"
    TEMPORARY = "Temporary"
    VOLUNTEER = "Volunteer"
    OTHER = "Other"


class LocationType(str, Enum):
    REMOTE = "Remote"
    ON_SITE = "On Site"
    HYBRID = "Hybrid"


class ApplicationStatus(str, Enum):
    APPLIED = "Applied"
    INTERVIEWING = "Interviewing"
    OFFERED = "Offered"
    REJECTED = "Rejected"
    WITHDRAWN = "Withdrawn"
    ACCEPTED = "Accepted"

    @classmethod
    def parse(cls, text: str) -> "ApplicationStatus":
        """Case-insensitive lookup by label or member name ("applied", "Applied")."""
        wanted = text.strip().lower()
        for status in cls:
            if wanted in (status.value.lower(), status.name.lower()):
                return status
        raise ValueError(f"Unknown application status '{text}'")

    @property
    def is_final(self) -> bool:
        """Final statuses close the application."""
        return self in {
            ApplicationStatus.REJECTED,
            ApplicationStatus.WITHDRAWN,
            ApplicationStatus.ACCEPTED,
        }

    @property
    def colour(self) -> str:
        return _STATUS_COLOURS[self]


_STATUS_COLOURS = {
    ApplicationStatus.APPLIED: "cyan",
    ApplicationStatus.INTERVIEWING: "blue",
    ApplicationStatus.OFFERED: "green",
    ApplicationStatus.REJECTED: "red",
    ApplicationStatus.WITHDRAWN: "magenta",
    ApplicationStatus.ACCEPTED: "bright_blue",
}


class Files(BaseModel):
    """Documents attached to an application."""

    model_config = ConfigDict(frozen=True)

    cv: str = ""
    cover_letter: str = ""
    additional_documents: tuple[str, ...] = ()

    def to_storage(self) -> str:
        """Serialize as "cv,cover_letter,doc1,doc2"."""
        return ",".join([self.cv, self.cover_letter, *self.additional_documents])

    @classmethod
    def from_storage(cls, text: Optional[str]) -> "Files":
        parts = [part.strip() for part in (text or "").split(",")]
        return cls(
            cv=parts[0] if parts else "",
            cover_letter=parts[1] if len(parts) > 1 else "",
            additional_documents=tuple(p for p in parts[2:] if p),
        )


class JobApplication(BaseModel):
    """A single job application.

    Instances are immutable so they can travel inside actions; use
    ``model_copy(update=...)`` to derive a modified record.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    company_name: str = ""
    position: str = ""
    position_category: PositionCategory = PositionCategory.ENGINEERING
    work_type: WorkType = WorkType.FULL_TIME
    location: str = ""
    location_type: LocationType = LocationType.REMOTE
    application_date: str = ""
    status: ApplicationStatus = ApplicationStatus.APPLIED
    is_active: bool = True
    notes: Optional[str] = None
    contact_info: Optional[str] = None
    url: Optional[str] = None
    files: Files = Files()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "JobApplication":
        """Build a record from a database row.

        Raises:
            RecordParseError: If an enum column holds an unknown value or a
                column has the wrong type.
        """
        record_id = row["id"]
        enum_columns = {
            "position_category": PositionCategory,
            "work_type": WorkType,
            "location_type": LocationType,
            "status": ApplicationStatus,
        }
        values: dict[str, Any] = {}
        for column, enum_cls in enum_columns.items():
            raw = row[column]
            try:
                values[column] = enum_cls(raw)
            except ValueError as exc:
                raise RecordParseError(record_id, column, raw) from exc

        try:
            return cls(
                id=record_id,
                company_name=row["company_name"],
                position=row["position"],
                location=row["location"],
                application_date=row["application_date"],
                is_active=bool(row["is_active"]),
                notes=row["notes"],
                contact_info=row["contact_info"],
                url=row["url"],
                files=Files.from_storage(row["files"]),
                **values,
            )
        except ValidationError as exc:
            loc = exc.errors()[0]["loc"]
            column = str(loc[0]) if loc else "?"
            value = row[column] if column in row.keys() else None
            raise RecordParseError(record_id, column, value) from exc

    def to_params(self) -> dict[str, Any]:
        """Named SQL parameters for insert/update statements."""
        return {
            "id": self.id,
            "company_name": self.company_name,
            "position": self.position,
            "position_category": self.position_category.value,
            "work_type": self.work_type.value,
            "location": self.location,
            "location_type": self.location_type.value,
            "application_date": self.application_date,
            "status": self.status.value,
            "is_active": self.is_active,
            "notes": self.notes,
            "contact_info": self.contact_info,
            "url": self.url,
            "files": self.files.to_storage(),
        }

    @classmethod
    def sample(cls, record_id: int) -> "JobApplication":
        """Demo record used by ``jobtracker seed``."""
        return cls(
            id=record_id,
            company_name=f"Acme Inc {record_id}",
            position=f"Backend Developer {record_id}",
            position_category=PositionCategory.ENGINEERING,
            work_type=WorkType.FULL_TIME,
            location="San Francisco, CA",
            location_type=LocationType.REMOTE,
            application_date="2024-05-20",
            status=ApplicationStatus.INTERVIEWING,
            is_active=True,
            notes="Interview scheduled for next week.",
            contact_info="recruiter@acme.com",
            url="https://acme.com/jobs/123",
            files=Files(
                cv="acme_cv.pdf",
                cover_letter="acme_cover.pdf",
                additional_documents=("portfolio.pdf",),
            ),
        )
