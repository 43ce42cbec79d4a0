"""DisplayController — owns the display mode, the instant and the draw count.

Redraw rules:
    - construction draws once (draw count 1)
    - wake / sleep redraw once, only when the mode actually changes
    - tick redraws only while Active
    - ambient_update redraws only while Ambient
Out-of-mode events are silent no-ops.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from alwayson.core.clock import format_elapsed
from alwayson.core.exceptions import PreconditionError
from alwayson.core.models import DisplayConfig, DisplayMode, DisplayState

if TYPE_CHECKING:
    from alwayson.core.clock import Clock
    from alwayson.core.renderers import DisplayRenderer

logger = logging.getLogger(__name__)


class DisplayController:
    """Display refresh state machine."""

    def __init__(
        self,
        clock: Clock,
        config: DisplayConfig | None = None,
        renderers: list[DisplayRenderer] | None = None,
    ) -> None:
        self._clock = clock
        self._config = config or DisplayConfig()
        self._renderers: list[DisplayRenderer] = list(renderers or [])
        self._start_ms = clock.now_ms()
        self._mode = DisplayMode.ACTIVE
        self._state = self._build_state(self._start_ms, draw_count=1)
        logger.debug("Display started at %d in %s mode", self._start_ms, self._mode)
        self._notify()

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def state(self) -> DisplayState:
        return self._state

    @property
    def mode(self) -> DisplayMode:
        return self._mode

    @property
    def start_instant_ms(self) -> int:
        return self._start_ms

    @property
    def draw_count(self) -> int:
        return self._state.draw_count

    @property
    def config(self) -> DisplayConfig:
        return self._config

    def add_renderer(self, renderer: DisplayRenderer) -> None:
        """Register a renderer. It receives states drawn from now on."""
        self._renderers.append(renderer)

    # ------------------------------------------------------------------
    # Power signals
    # ------------------------------------------------------------------

    def wake(self) -> DisplayState:
        """Enter Active mode and redraw immediately.

        The redraw happens at the clock instant, or at the last drawn instant
        if an explicit refresh instant has already moved past the clock.
        """
        if self._mode == DisplayMode.ACTIVE:
            logger.debug("wake ignored: already active")
            return self._state
        logger.info("Entering active mode")
        return self._redraw(self._transition_instant(), mode=DisplayMode.ACTIVE)

    def sleep(self) -> DisplayState:
        """Enter Ambient mode. Draws once to show the transition."""
        if self._mode == DisplayMode.AMBIENT:
            logger.debug("sleep ignored: already ambient")
            return self._state
        logger.info("Entering ambient mode")
        return self._redraw(self._transition_instant(), mode=DisplayMode.AMBIENT)

    # ------------------------------------------------------------------
    # Refresh triggers
    # ------------------------------------------------------------------

    def tick(self, instant_ms: int | None = None) -> DisplayState:
        """High-frequency refresh. No-op while Ambient."""
        if self._mode != DisplayMode.ACTIVE:
            logger.debug("tick ignored in %s mode", self._mode)
            return self._state
        return self._redraw(self._resolve(instant_ms))

    def ambient_update(self, instant_ms: int | None = None) -> DisplayState:
        """Low-frequency broadcast refresh. No-op while Active."""
        if self._mode != DisplayMode.AMBIENT:
            logger.debug("ambient update ignored in %s mode", self._mode)
            return self._state
        return self._redraw(self._resolve(instant_ms))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve(self, instant_ms: int | None) -> int:
        return self._clock.now_ms() if instant_ms is None else instant_ms

    def _transition_instant(self) -> int:
        # explicit tick / ambient_update instants may run ahead of the clock
        return max(self._clock.now_ms(), self._state.instant_ms)

    def _redraw(self, instant_ms: int, mode: DisplayMode | None = None) -> DisplayState:
        if instant_ms < self._state.instant_ms:
            msg = (
                f"Instant {instant_ms} is earlier than the last drawn instant "
                f"{self._state.instant_ms}"
            )
            raise PreconditionError(msg)
        if mode is not None:
            self._mode = mode
        self._state = self._build_state(instant_ms, draw_count=self._state.draw_count + 1)
        logger.debug(
            "Draw #%d at %s (%s)", self._state.draw_count, self._state.time_text, self._mode
        )
        self._notify()
        return self._state

    def _build_state(self, instant_ms: int, draw_count: int) -> DisplayState:
        return DisplayState(
            time_text=format_elapsed(instant_ms - self._start_ms),
            instant_ms=instant_ms,
            mode=self._mode,
            mode_label=self._config.label_for(self._mode),
            draw_count=draw_count,
        )

    def _notify(self) -> None:
        for renderer in self._renderers:
            renderer.render(self._state)
