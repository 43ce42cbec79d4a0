"""Tests for clock sources and elapsed-time formatting."""

from __future__ import annotations

import time

import pytest

from alwayson.core.clock import ManualClock, SystemClock, format_elapsed, next_boundary
from alwayson.core.exceptions import PreconditionError


class TestManualClock:
    def test_fixed_until_advanced(self) -> None:
        clock = ManualClock(1000)
        assert clock.now_ms() == 1000
        assert clock.now_ms() == 1000

    def test_advance(self) -> None:
        clock = ManualClock(1000)
        assert clock.advance(500) == 1500
        assert clock.now_ms() == 1500

    def test_negative_advance_rejected(self) -> None:
        clock = ManualClock(1000)
        with pytest.raises(PreconditionError):
            clock.advance(-1)
        assert clock.now_ms() == 1000

    def test_set_forward(self) -> None:
        clock = ManualClock(1000)
        clock.set(5000)
        assert clock.now_ms() == 5000

    def test_set_backwards_rejected(self) -> None:
        clock = ManualClock(5000)
        with pytest.raises(PreconditionError, match="backwards"):
            clock.set(4999)

    def test_negative_start_rejected(self) -> None:
        with pytest.raises(PreconditionError):
            ManualClock(-1)

    def test_precondition_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            ManualClock(0).advance(-10)


class TestSystemClock:
    def test_close_to_wall_clock(self) -> None:
        now = SystemClock().now_ms()
        assert abs(now - int(time.time() * 1000)) < 5000


class TestFormatElapsed:
    @pytest.mark.parametrize(
        ("elapsed_ms", "expected"),
        [
            (0, "00:00:00"),
            (999, "00:00:00"),
            (5000, "00:00:05"),
            (10_500, "00:00:10"),
            (61_000, "00:01:01"),
            (3_600_000, "01:00:00"),
            (100 * 3_600_000, "100:00:00"),
        ],
    )
    def test_format(self, elapsed_ms: int, expected: str) -> None:
        assert format_elapsed(elapsed_ms) == expected

    def test_negative_rejected(self) -> None:
        with pytest.raises(PreconditionError, match="negative"):
            format_elapsed(-1)


class TestNextBoundary:
    def test_on_boundary_moves_to_next(self) -> None:
        assert next_boundary(2000, 1000) == 3000

    def test_between_boundaries(self) -> None:
        assert next_boundary(2500, 1000) == 3000
        assert next_boundary(5500, 10_000) == 10_000
