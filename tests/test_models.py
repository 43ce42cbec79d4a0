"""Tests for core data models."""

import pytest
from pydantic import ValidationError

from alwayson import __version__
from alwayson.core.models import (
    DEFAULT_START_INSTANT_MS,
    QUEUED_ACTIONS,
    ClockConfig,
    Config,
    DisplayConfig,
    DisplayEvent,
    DisplayMode,
    DisplayState,
    EventType,
    ExpectedDisplay,
    RefreshEvent,
    RefreshSource,
    Script,
    ScriptAction,
    ScriptStep,
    StepStatus,
)


def test_version() -> None:
    assert __version__ == "0.1.0"


# ── Enum Tests ──


class TestEnums:
    def test_display_mode(self) -> None:
        assert len(DisplayMode) == 2
        assert DisplayMode("active") is DisplayMode.ACTIVE
        assert DisplayMode.AMBIENT == "ambient"

    def test_event_type(self) -> None:
        assert {e.value for e in EventType} == {"wake", "sleep", "tick", "ambient_update"}

    def test_script_action(self) -> None:
        assert len(ScriptAction) == 6
        with pytest.raises(ValueError):
            ScriptAction("jump")

    def test_queued_actions_cover_event_types(self) -> None:
        assert set(QUEUED_ACTIONS.values()) == set(EventType)
        assert ScriptAction.ADVANCE not in QUEUED_ACTIONS

    def test_step_status(self) -> None:
        assert StepStatus.SKIPPED == "skipped"


# ── Config Models ──


class TestDisplayConfig:
    def test_defaults(self) -> None:
        config = DisplayConfig()
        assert config.active_interval_ms == 1000
        assert config.ambient_interval_ms == 10000
        assert config.active_label == "Active mode"
        assert config.ambient_label == "Ambient mode"

    def test_label_for(self) -> None:
        config = DisplayConfig()
        assert config.label_for(DisplayMode.ACTIVE) == "Active mode"
        assert config.label_for(DisplayMode.AMBIENT) == "Ambient mode"

    def test_invalid_interval(self) -> None:
        with pytest.raises(ValidationError):
            DisplayConfig(active_interval_ms=0)
        with pytest.raises(ValidationError):
            DisplayConfig(ambient_interval_ms=10)

    def test_empty_label(self) -> None:
        with pytest.raises(ValidationError):
            DisplayConfig(active_label="")


class TestClockConfig:
    def test_default_start(self) -> None:
        assert ClockConfig().start_instant_ms == DEFAULT_START_INSTANT_MS

    def test_negative_start(self) -> None:
        with pytest.raises(ValidationError):
            ClockConfig(start_instant_ms=-1)


class TestConfig:
    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError):
            Config(log_level="LOUD")


# ── Display Models ──


class TestDisplayModels:
    def test_state_is_frozen(self) -> None:
        state = DisplayState(
            time_text="00:00:00",
            instant_ms=0,
            mode=DisplayMode.ACTIVE,
            mode_label="Active mode",
            draw_count=1,
        )
        with pytest.raises(ValidationError):
            state.draw_count = 2  # type: ignore[misc]

    def test_state_draw_count_positive(self) -> None:
        with pytest.raises(ValidationError):
            DisplayState(
                time_text="00:00:00",
                instant_ms=0,
                mode=DisplayMode.ACTIVE,
                mode_label="Active mode",
                draw_count=0,
            )

    def test_refresh_event(self) -> None:
        event = RefreshEvent(instant_ms=1000, source="ambient")
        assert event.source is RefreshSource.AMBIENT

    def test_display_event_default_instant(self) -> None:
        event = DisplayEvent(type="wake")
        assert event.type is EventType.WAKE
        assert event.instant_ms is None

    def test_display_event_negative_instant(self) -> None:
        with pytest.raises(ValidationError):
            DisplayEvent(type="tick", instant_ms=-5)


# ── Script Models ──


class TestExpectedDisplay:
    def test_requires_one_field(self) -> None:
        with pytest.raises(ValidationError, match="at least one"):
            ExpectedDisplay()

    def test_time_text_pattern(self) -> None:
        assert ExpectedDisplay(time_text="100:00:00").time_text == "100:00:00"
        with pytest.raises(ValidationError):
            ExpectedDisplay(time_text="5s")


class TestScriptStep:
    def test_advance_requires_duration(self) -> None:
        with pytest.raises(ValidationError, match="duration_ms"):
            ScriptStep(step=1, action="advance")

    def test_negative_duration(self) -> None:
        with pytest.raises(ValidationError):
            ScriptStep(step=1, action="advance", duration_ms=-1)

    def test_duration_only_for_advance(self) -> None:
        with pytest.raises(ValidationError, match="does not accept duration_ms"):
            ScriptStep(step=1, action="tick", duration_ms=1000)
        with pytest.raises(ValidationError, match="does not accept duration_ms"):
            ScriptStep(step=1, action="sleep", duration_ms=0)

    def test_expect_requires_block(self) -> None:
        with pytest.raises(ValidationError, match="expect block"):
            ScriptStep(step=1, action="expect")

    def test_offset_only_for_timed_actions(self) -> None:
        ScriptStep(step=1, action="tick", at_offset_ms=1000)
        ScriptStep(step=1, action="ambient_update", at_offset_ms=1000)
        with pytest.raises(ValidationError, match="at_offset_ms"):
            ScriptStep(step=1, action="wake", at_offset_ms=1000)

    def test_power_step_with_expect(self) -> None:
        step = ScriptStep(step=2, action="sleep", expect={"mode": "ambient"})
        assert step.expect is not None
        assert step.expect.mode is DisplayMode.AMBIENT


class TestScript:
    def test_valid(self) -> None:
        script = Script(id="SC-001", name="Cycle", steps=[{"step": 1, "action": "wake"}])
        assert script.start_instant_ms is None
        assert script.tags == []

    def test_invalid_id(self) -> None:
        with pytest.raises(ValidationError):
            Script(id="cycle", name="Cycle", steps=[{"step": 1, "action": "wake"}])

    def test_requires_steps(self) -> None:
        with pytest.raises(ValidationError):
            Script(id="SC-001", name="Cycle", steps=[])
