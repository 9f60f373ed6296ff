"""Unbounded FIFO action channel.

Any number of senders, one consumer (the app loop). Once the consumer
closes the channel, every send raises ChannelClosedError.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Optional

from jobtracker.errors import ChannelClosedError
from jobtracker.ui.core.action import Action

logger = logging.getLogger(__name__)


class ActionChannel:
    """Queue of actions drained by the app loop."""

    def __init__(self) -> None:
        self._queue: deque[Action] = deque()
        self._closed = False

    def sender(self) -> "ActionSender":
        return ActionSender(self)

    def _push(self, action: Action) -> None:
        if self._closed:
            raise ChannelClosedError(action.kind)
        self._queue.append(action)

    def try_recv(self) -> Optional[Action]:
        """Pop the oldest action, or None if the queue is empty."""
        if not self._queue:
            return None
        return self._queue.popleft()

    def pending(self) -> tuple[Action, ...]:
        """Snapshot of queued actions, oldest first."""
        return tuple(self._queue)

    def close(self) -> None:
        if not self._closed:
            logger.debug("Action channel closed with %d pending", len(self._queue))
        self._closed = True
        self._queue.clear()

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._queue)


class ActionSender:
    """Handle given to components for emitting actions."""

    def __init__(self, channel: ActionChannel):
        self._channel = channel

    def send(self, action: Action) -> None:
        """Enqueue ``action``.

        Raises:
            ChannelClosedError: If the consumer is gone.
        """
        self._channel._push(action)
