"""RefreshScheduler — virtual-time advances to refresh events.

Active mode: one tick per epoch-aligned active interval crossed.
Ambient mode: nothing is self-scheduled. The scheduler only reports when
the next platform broadcast alarm is due; the broadcast itself arrives
from outside through deliver_ambient_update().
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from alwayson.core.clock import next_boundary
from alwayson.core.exceptions import PreconditionError
from alwayson.core.models import DisplayConfig, DisplayMode, RefreshEvent, RefreshSource

if TYPE_CHECKING:
    from alwayson.core.clock import ManualClock
    from alwayson.core.controller import DisplayController

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Drives a DisplayController from a ManualClock."""

    def __init__(
        self,
        controller: DisplayController,
        clock: ManualClock,
        config: DisplayConfig | None = None,
    ) -> None:
        self._controller = controller
        self._clock = clock
        self._config = config or controller.config

    def advance(self, duration_ms: int) -> list[RefreshEvent]:
        """Move the clock forward, delivering active ticks on the way.

        Args:
            duration_ms: Virtual time to advance. Must not be negative.

        Returns:
            Refresh events accepted by the controller, in order.

        Raises:
            PreconditionError: If duration_ms is negative.
        """
        if duration_ms < 0:
            msg = f"Cannot advance by a negative duration: {duration_ms}ms"
            raise PreconditionError(msg)

        target = self._clock.now_ms() + duration_ms
        interval = self._config.active_interval_ms
        events: list[RefreshEvent] = []

        while self._controller.mode == DisplayMode.ACTIVE:
            due = next_boundary(self._clock.now_ms(), interval)
            if due > target:
                break
            self._clock.set(due)
            before = self._controller.draw_count
            self._controller.tick(due)
            if self._controller.draw_count > before:
                events.append(RefreshEvent(instant_ms=due, source=RefreshSource.ACTIVE))

        self._clock.set(target)
        logger.debug("Advanced %dms to %d, %d tick(s)", duration_ms, target, len(events))
        return events

    def deliver_ambient_update(self) -> RefreshEvent | None:
        """Forward an external ambient broadcast at the current instant.

        Returns:
            The accepted refresh event, or None if the controller is Active.
        """
        now = self._clock.now_ms()
        before = self._controller.draw_count
        self._controller.ambient_update(now)
        if self._controller.draw_count == before:
            return None
        return RefreshEvent(instant_ms=now, source=RefreshSource.AMBIENT)

    def next_tick_ms(self) -> int | None:
        """Instant of the next active tick, or None while Ambient."""
        if self._controller.mode != DisplayMode.ACTIVE:
            return None
        return next_boundary(self._clock.now_ms(), self._config.active_interval_ms)

    def next_ambient_update_ms(self) -> int | None:
        """Instant at which the platform alarm should fire the next broadcast.

        None while Active.
        """
        if self._controller.mode != DisplayMode.AMBIENT:
            return None
        return next_boundary(
            self._controller.state.instant_ms, self._config.ambient_interval_ms
        )
