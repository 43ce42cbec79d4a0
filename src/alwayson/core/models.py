"""alwayson data models — Pydantic v2.

This module is a leaf: no internal project imports.
All Enum and Model definitions live here.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ============================================================
# Enums
# ============================================================


class DisplayMode(StrEnum):
    """Display power mode."""

    ACTIVE = "active"
    AMBIENT = "ambient"


class RefreshSource(StrEnum):
    """Origin of a redraw trigger."""

    ACTIVE = "active"  # high-frequency tick
    AMBIENT = "ambient"  # low-frequency platform broadcast


class EventType(StrEnum):
    """Event variants accepted by the event queue."""

    WAKE = "wake"
    SLEEP = "sleep"
    TICK = "tick"
    AMBIENT_UPDATE = "ambient_update"


class ScriptAction(StrEnum):
    """Display script step action."""

    ADVANCE = "advance"
    WAKE = "wake"
    SLEEP = "sleep"
    TICK = "tick"
    AMBIENT_UPDATE = "ambient_update"
    EXPECT = "expect"


class StepStatus(StrEnum):
    """Individual step execution status."""

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"
    SKIPPED = "skipped"


# Script actions delivered through the event queue
QUEUED_ACTIONS: dict[ScriptAction, EventType] = {
    ScriptAction.WAKE: EventType.WAKE,
    ScriptAction.SLEEP: EventType.SLEEP,
    ScriptAction.TICK: EventType.TICK,
    ScriptAction.AMBIENT_UPDATE: EventType.AMBIENT_UPDATE,
}

# Script actions that may carry an explicit instant
TIMED_ACTIONS: frozenset[ScriptAction] = frozenset(
    {ScriptAction.TICK, ScriptAction.AMBIENT_UPDATE}
)

# 2200-01-01T00:00:00Z, far enough ahead that no real alarm is ever due
DEFAULT_START_INSTANT_MS = 7258118400000


# ============================================================
# Config Models
# ============================================================


class DisplayConfig(BaseModel):
    """Refresh cadence and label configuration."""

    model_config = ConfigDict(extra="forbid")

    active_interval_ms: int = Field(default=1000, ge=1, le=60000)
    ambient_interval_ms: int = Field(default=10000, ge=1000, le=3600000)
    active_label: str = Field(default="Active mode", min_length=1)
    ambient_label: str = Field(default="Ambient mode", min_length=1)
    timestamp_label: str = Field(
        default="Timestamp: {instant_ms}",
        description="Format template, receives instant_ms",
    )
    draw_count_label: str = Field(
        default="Draw count: {draw_count}",
        description="Format template, receives draw_count",
    )

    def label_for(self, mode: DisplayMode) -> str:
        """Return the fixed label for a display mode."""
        return self.active_label if mode == DisplayMode.ACTIVE else self.ambient_label


class ClockConfig(BaseModel):
    """Clock source configuration."""

    model_config = ConfigDict(extra="forbid")

    start_instant_ms: int = Field(
        default=DEFAULT_START_INSTANT_MS,
        ge=0,
        description="Start instant for scripts that do not set their own",
    )


class Config(BaseSettings):
    """Project configuration. Merged from YAML + env var + CLI flag."""

    model_config = SettingsConfigDict(
        env_prefix="ALWAYSON_",
        env_nested_delimiter="__",
    )

    project_name: str = Field(default="alwayson-project")
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    clock: ClockConfig = Field(default_factory=ClockConfig)
    scripts_dir: str = Field(default="scripts")
    reports_dir: str = Field(default="reports")
    log_level: str = Field(default="WARNING", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


# ============================================================
# Display Models
# ============================================================


class RefreshEvent(BaseModel):
    """A discrete redraw trigger."""

    model_config = ConfigDict(frozen=True)

    instant_ms: int = Field(..., ge=0)
    source: RefreshSource


class DisplayEvent(BaseModel):
    """One item on the event queue.

    instant_ms only applies to tick / ambient_update; the controller
    reads its clock when it is omitted.
    """

    model_config = ConfigDict(frozen=True)

    type: EventType
    instant_ms: int | None = Field(default=None, ge=0)


class DisplayState(BaseModel):
    """Observable snapshot. Replaced on every accepted redraw."""

    model_config = ConfigDict(frozen=True)

    time_text: str
    instant_ms: int = Field(ge=0)
    mode: DisplayMode
    mode_label: str
    draw_count: int = Field(ge=1)


# ============================================================
# Script Models
# ============================================================


class ExpectedDisplay(BaseModel):
    """Expected display state. Unset fields are not compared."""

    time_text: str | None = Field(default=None, pattern=r"^\d{2,}:\d{2}:\d{2}$")
    instant_offset_ms: int | None = Field(
        default=None, ge=0, description="Instant relative to the script start"
    )
    mode: DisplayMode | None = Field(default=None)
    draw_count: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def at_least_one_field(self) -> ExpectedDisplay:
        if (
            self.time_text is None
            and self.instant_offset_ms is None
            and self.mode is None
            and self.draw_count is None
        ):
            msg = "expect requires at least one of: time_text, instant_offset_ms, mode, draw_count"
            raise ValueError(msg)
        return self


class ScriptStep(BaseModel):
    """Individual step within a display script."""

    step: int = Field(..., ge=1, description="Step number (1-based)")
    action: ScriptAction
    duration_ms: int | None = Field(default=None, ge=0)
    at_offset_ms: int | None = Field(
        default=None, ge=0, description="Explicit tick / ambient_update instant, relative to start"
    )
    description: str = Field(default="")
    expect: ExpectedDisplay | None = Field(default=None)

    @model_validator(mode="after")
    def validate_action_requirements(self) -> ScriptStep:
        if self.action == ScriptAction.ADVANCE and self.duration_ms is None:
            msg = "action=advance requires duration_ms"
            raise ValueError(msg)
        if self.action != ScriptAction.ADVANCE and self.duration_ms is not None:
            msg = f"action={self.action.value} does not accept duration_ms"
            raise ValueError(msg)
        if self.action == ScriptAction.EXPECT and self.expect is None:
            msg = "action=expect requires an expect block"
            raise ValueError(msg)
        if self.at_offset_ms is not None and self.action not in TIMED_ACTIONS:
            msg = f"action={self.action.value} does not accept at_offset_ms"
            raise ValueError(msg)
        return self


class Script(BaseModel):
    """Display script definition."""

    id: str = Field(..., pattern=r"^SC-\d{3,}$", description="Script ID: SC-001")
    name: str = Field(..., min_length=1)
    description: str = Field(default="")
    tags: list[str] = Field(default_factory=list)
    start_instant_ms: int | None = Field(default=None, ge=0)
    steps: list[ScriptStep] = Field(..., min_length=1)


# ============================================================
# Result Models
# ============================================================


class StepResult(BaseModel):
    """Individual step execution result."""

    step: int
    action: ScriptAction
    status: StepStatus
    description: str
    state: DisplayState | None = None
    refreshes: int = Field(default=0, ge=0, description="Redraws triggered by this step")
    error_message: str | None = None


class ScriptResult(BaseModel):
    """Single script execution result."""

    script_id: str
    script_name: str
    passed: bool
    steps: list[StepResult]
    total_steps: int = Field(ge=0)
    passed_steps: int = Field(ge=0)
    failed_steps: int = Field(ge=0)
    final_state: DisplayState | None = None
    timestamp: datetime = Field(default_factory=datetime.now)
