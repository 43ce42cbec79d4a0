"""ScriptRunner — executes display scripts against a fresh state machine."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from alwayson.core.clock import ManualClock
from alwayson.core.controller import DisplayController
from alwayson.core.event_queue import EventQueue
from alwayson.core.exceptions import PreconditionError
from alwayson.core.models import (
    QUEUED_ACTIONS,
    Config,
    DisplayEvent,
    ScriptAction,
    ScriptResult,
    StepResult,
    StepStatus,
)
from alwayson.core.scheduler import RefreshScheduler

if TYPE_CHECKING:
    from alwayson.core.models import DisplayState, ExpectedDisplay, Script, ScriptStep
    from alwayson.core.renderers import DisplayRenderer

logger = logging.getLogger(__name__)


class ScriptRunner:
    """Runs each script on its own ManualClock, controller, scheduler and queue.

    A failed expectation does not stop the script. A precondition
    violation marks the step as error and skips the remaining steps.
    """

    def __init__(self, config: Config, renderers: list[DisplayRenderer] | None = None) -> None:
        self._config = config
        self._renderers = renderers or []

    def run(self, script: Script) -> ScriptResult:
        start = (
            script.start_instant_ms
            if script.start_instant_ms is not None
            else self._config.clock.start_instant_ms
        )
        clock = ManualClock(start)
        controller = DisplayController(clock, self._config.display, self._renderers)
        scheduler = RefreshScheduler(controller, clock, self._config.display)
        queue = EventQueue(controller)

        logger.info("Running script %s (%s) from %d", script.id, script.name, start)

        results: list[StepResult] = []
        aborted = False
        for step in script.steps:
            if aborted:
                results.append(
                    StepResult(
                        step=step.step,
                        action=step.action,
                        status=StepStatus.SKIPPED,
                        description=step.description,
                    )
                )
                continue

            before = controller.draw_count
            try:
                self._perform(step, clock, scheduler, queue, controller.start_instant_ms)
            except PreconditionError as e:
                logger.warning("Script %s step %d: %s", script.id, step.step, e)
                results.append(
                    StepResult(
                        step=step.step,
                        action=step.action,
                        status=StepStatus.ERROR,
                        description=step.description,
                        state=controller.state,
                        refreshes=controller.draw_count - before,
                        error_message=str(e),
                    )
                )
                aborted = True
                continue

            mismatches = (
                _compare(step.expect, controller.state, controller.start_instant_ms)
                if step.expect
                else []
            )
            results.append(
                StepResult(
                    step=step.step,
                    action=step.action,
                    status=StepStatus.FAILED if mismatches else StepStatus.PASSED,
                    description=step.description,
                    state=controller.state,
                    refreshes=controller.draw_count - before,
                    error_message="; ".join(mismatches) or None,
                )
            )

        passed_steps = sum(1 for r in results if r.status == StepStatus.PASSED)
        return ScriptResult(
            script_id=script.id,
            script_name=script.name,
            passed=passed_steps == len(results),
            steps=results,
            total_steps=len(results),
            passed_steps=passed_steps,
            failed_steps=len(results) - passed_steps,
            final_state=controller.state,
        )

    def _perform(
        self,
        step: ScriptStep,
        clock: ManualClock,
        scheduler: RefreshScheduler,
        queue: EventQueue,
        start_ms: int,
    ) -> None:
        if step.action == ScriptAction.ADVANCE:
            scheduler.advance(step.duration_ms or 0)
        elif step.action in QUEUED_ACTIONS:
            instant = clock.now_ms()
            if step.at_offset_ms is not None:
                instant = start_ms + step.at_offset_ms
                # an earlier instant is left for the controller to reject
                if instant > clock.now_ms():
                    clock.set(instant)
            queue.post(DisplayEvent(type=QUEUED_ACTIONS[step.action], instant_ms=instant))
            queue.drain()


def _compare(expected: ExpectedDisplay, state: DisplayState, start_ms: int) -> list[str]:
    """Return a description of every expected field that does not match."""
    mismatches: list[str] = []
    if expected.time_text is not None and expected.time_text != state.time_text:
        mismatches.append(f"time_text: expected {expected.time_text}, got {state.time_text}")
    if expected.instant_offset_ms is not None:
        offset = state.instant_ms - start_ms
        if expected.instant_offset_ms != offset:
            mismatches.append(
                f"instant_offset_ms: expected {expected.instant_offset_ms}, got {offset}"
            )
    if expected.mode is not None and expected.mode != state.mode:
        mismatches.append(f"mode: expected {expected.mode.value}, got {state.mode.value}")
    if expected.draw_count is not None and expected.draw_count != state.draw_count:
        mismatches.append(
            f"draw_count: expected {expected.draw_count}, got {state.draw_count}"
        )
    return mismatches
