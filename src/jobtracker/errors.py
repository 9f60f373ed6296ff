"""Exception hierarchy shared across jobtracker."""

from __future__ import annotations

from typing import Any, Optional


class JobTrackerError(Exception):
    """Base class for jobtracker errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ChannelClosedError(JobTrackerError):
    """The action consumer is gone; nothing can be dispatched any more."""

    def __init__(self, action_kind: str):
        super().__init__(
            f"Action channel closed while sending '{action_kind}'",
            details={"action": action_kind},
        )


class ConfigError(JobTrackerError):
    """Configuration or keymap could not be parsed."""


class StoreError(JobTrackerError):
    """The record store rejected an operation."""


class RecordParseError(StoreError):
    """A persisted record does not parse into a JobApplication."""

    def __init__(self, record_id: Any, column: str, value: Any):
        super().__init__(
            f"Record {record_id}: invalid value {value!r} for column '{column}'",
            details={"record_id": record_id, "column": column, "value": value},
        )
        self.record_id = record_id
        self.column = column


class TerminalError(JobTrackerError):
    """The terminal driver could not be acquired, released or suspended."""
