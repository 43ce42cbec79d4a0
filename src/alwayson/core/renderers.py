"""Display renderers.

The host UI layer is modelled as an observer: the controller hands every
new DisplayState to each registered renderer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import typer

from alwayson.core.models import DisplayMode

if TYPE_CHECKING:
    from alwayson.core.models import DisplayConfig, DisplayState


def format_display_lines(state: DisplayState, config: DisplayConfig) -> list[str]:
    """Render a state as its four observable lines: time, timestamp, mode, draw count."""
    return [
        state.time_text,
        config.timestamp_label.format(instant_ms=state.instant_ms),
        state.mode_label,
        config.draw_count_label.format(draw_count=state.draw_count),
    ]


class DisplayRenderer(ABC):
    """Receives each new display state.

    Subclass this to draw to a terminal, a framebuffer, a web page.
    """

    @abstractmethod
    def render(self, state: DisplayState) -> None:
        """Draw a new display state."""
        ...


class CLIRenderer(DisplayRenderer):
    """Terminal output renderer using typer."""

    def __init__(self, config: DisplayConfig) -> None:
        self._config = config

    def render(self, state: DisplayState) -> None:
        color = typer.colors.GREEN if state.mode == DisplayMode.ACTIVE else typer.colors.BLUE
        lines = format_display_lines(state, self._config)
        clock_face = typer.style(f"  [{lines[0]}]", fg=color, bold=True)
        typer.echo(f"{clock_face}  " + "  |  ".join(lines[1:]))


class RecordingRenderer(DisplayRenderer):
    """Collects rendered states in order."""

    def __init__(self) -> None:
        self.frames: list[DisplayState] = []

    def render(self, state: DisplayState) -> None:
        self.frames.append(state)

    @property
    def last(self) -> DisplayState | None:
        return self.frames[-1] if self.frames else None

    def to_text(self, config: DisplayConfig) -> str:
        """Format all frames as plain text, one block per frame."""
        blocks = ["\n".join(format_display_lines(frame, config)) for frame in self.frames]
        return "\n\n".join(blocks)
