"""EventQueue — single FIFO ingress for display events."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable  # noqa: TC003
from typing import TYPE_CHECKING

from alwayson.core.models import DisplayEvent, DisplayState, EventType

if TYPE_CHECKING:
    from alwayson.core.controller import DisplayController

logger = logging.getLogger(__name__)


class EventQueue:
    """Delivers wake / sleep / tick / ambient_update events strictly in arrival order.

    Each event runs to completion before the next one is taken.
    """

    def __init__(self, controller: DisplayController) -> None:
        self._controller = controller
        self._pending: deque[DisplayEvent] = deque()

    def __len__(self) -> int:
        return len(self._pending)

    def post(self, event: DisplayEvent) -> None:
        """Append an event to the queue."""
        self._pending.append(event)

    def post_many(self, events: Iterable[DisplayEvent]) -> None:
        """Append events in iteration order."""
        self._pending.extend(events)

    def process_next(self) -> DisplayState | None:
        """Deliver the oldest event.

        Returns:
            The display state after the event, or None if the queue was empty.

        Raises:
            PreconditionError: If the event carries an instant earlier than
                the last drawn one. The event is already dequeued.
        """
        if not self._pending:
            return None
        event = self._pending.popleft()
        logger.debug("Dispatching %s", event.type)
        return self._dispatch(event)

    def drain(self) -> list[DisplayState]:
        """Deliver every pending event. Returns the state after each one."""
        states: list[DisplayState] = []
        while self._pending:
            state = self.process_next()
            if state is not None:
                states.append(state)
        return states

    def _dispatch(self, event: DisplayEvent) -> DisplayState:
        if event.type == EventType.WAKE:
            return self._controller.wake()
        if event.type == EventType.SLEEP:
            return self._controller.sleep()
        if event.type == EventType.TICK:
            return self._controller.tick(event.instant_ms)
        return self._controller.ambient_update(event.instant_ms)
