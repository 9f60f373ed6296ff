"""Connects the action queue to the SQLite store."""

from __future__ import annotations

import logging
from typing import Optional

from jobtracker.errors import ChannelClosedError, StoreError
from jobtracker.models.job import ApplicationStatus
from jobtracker.store import queries
from jobtracker.store.database import Database
from jobtracker.ui.core.action import (
    Action,
    DeleteJob,
    DispatchJobSearch,
    Error,
    JobResults,
    NotesPopupData,
    SaveJob,
)
from jobtracker.ui.core.channel import ActionSender

logger = logging.getLogger(__name__)


class JobStoreBridge:
    """Service answering read requests and carrying out write intents.

    Every write is followed by a refresh using the last status filter, so
    the job list always reflects the store. Store failures become Error
    actions and never reach the app loop.
    """

    def __init__(self, database: Database):
        self._database = database
        self._sender: Optional[ActionSender] = None
        self._status: Optional[ApplicationStatus] = None

    def register_action_sink(self, sender: ActionSender) -> None:
        self._sender = sender

    def update(self, action: Action) -> Optional[Action]:
        try:
            if isinstance(action, DispatchJobSearch):
                self._status = action.status
                self._search()
            elif isinstance(action, SaveJob):
                if action.job.id is None:
                    queries.add_application(self._database, action.job)
                else:
                    queries.update_application(self._database, action.job)
                return self._refresh()
            elif isinstance(action, DeleteJob):
                queries.delete_application(self._database, action.job_id)
                return self._refresh()
            elif isinstance(action, NotesPopupData):
                if action.job_id is None:
                    return None
                queries.update_notes(self._database, action.job_id, action.notes)
                return self._refresh()
        except StoreError as exc:
            logger.error("Store failure on %s: %s", action.kind, exc.message)
            return Error(message=exc.message)
        return None

    def _refresh(self) -> DispatchJobSearch:
        return DispatchJobSearch(status=self._status)

    def _search(self) -> None:
        result = queries.fetch_applications(self._database, self._status)
        self._send(JobResults(jobs=tuple(result.applications)))
        for failure in result.failures:
            self._send(Error(message=failure.message))

    def _send(self, action: Action) -> None:
        if self._sender is None:
            raise ChannelClosedError(action.kind)
        self._sender.send(action)
