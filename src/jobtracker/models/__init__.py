"""Record models for jobtracker."""

from jobtracker.models.job import (
    ApplicationStatus,
    Files,
    JobApplication,
    LocationType,
    PositionCategory,
    WorkType,
)

__all__ = [
    "ApplicationStatus",
    "Files",
    "JobApplication",
    "LocationType",
    "PositionCategory",
    "WorkType",
]
