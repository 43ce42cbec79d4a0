"""YAML display script loader — Script model conversion and step checks."""

from __future__ import annotations

import logging
from pathlib import Path  # noqa: TC003
from typing import Any

import yaml

from alwayson.core.clock import format_elapsed
from alwayson.core.exceptions import ScriptError
from alwayson.core.models import Script, ScriptAction

logger = logging.getLogger(__name__)


def load_script(path: Path) -> Script:
    """Load a single Script from a YAML file.

    Raises:
        ScriptError: If file cannot be read, parsed, or validated.
    """
    data = _load_yaml(path)
    try:
        return Script.model_validate(data)
    except Exception as e:
        msg = f"Script validation failed ({path.name}): {e}"
        raise ScriptError(msg) from e


def load_scripts(path: Path) -> list[Script]:
    """Load scripts from a file or directory.

    If path is a directory, scan for *.yaml / *.yml files (sorted by name).
    Files that fail to load are logged and skipped unless all of them fail.

    Raises:
        ScriptError: If path doesn't exist, no scripts are found, or none load.
    """
    if not path.exists():
        msg = f"Script path does not exist: {path}"
        raise ScriptError(msg)

    if path.is_file():
        return [load_script(path)]

    yaml_files = find_script_files(path)
    if not yaml_files:
        msg = f"No script YAML files found in: {path}"
        raise ScriptError(msg)

    scripts = []
    errors = []
    for yaml_file in yaml_files:
        try:
            scripts.append(load_script(yaml_file))
        except ScriptError as e:
            logger.warning("Skipping script %s: %s", yaml_file, e)
            errors.append(str(e))

    if errors and not scripts:
        msg = "All script files failed to load:\n" + "\n".join(errors)
        raise ScriptError(msg)

    return scripts


def find_script_files(directory: Path) -> list[Path]:
    """Return *.yaml / *.yml files under directory, sorted by path."""
    return sorted(
        f for f in directory.rglob("*") if f.suffix in (".yaml", ".yml") and f.is_file()
    )


def check_script(script: Script) -> list[str]:
    """Return step-level problems that model validation cannot see.

    The script clock is replayed from the steps alone: advance moves it
    forward and at_offset_ms moves it to that offset when later. Every
    drawn instant is at or before the script clock, so expectations
    beyond it can never pass.
    """
    problems: list[str] = []
    numbers = [step.step for step in script.steps]
    if numbers != list(range(1, len(numbers) + 1)):
        problems.append(f"step numbers should run 1..{len(numbers)} in order, got {numbers}")

    clock_ms = 0
    for step in script.steps:
        label = f"step {step.step} ({step.action.value})"
        if step.action == ScriptAction.ADVANCE:
            clock_ms += step.duration_ms or 0
        elif step.at_offset_ms is not None:
            if step.at_offset_ms < clock_ms:
                problems.append(
                    f"{label}: at_offset_ms {step.at_offset_ms} is behind the script clock "
                    f"({clock_ms} ms)"
                )
            else:
                clock_ms = step.at_offset_ms

        expect = step.expect
        if expect is None:
            continue
        if expect.instant_offset_ms is not None and expect.instant_offset_ms > clock_ms:
            problems.append(
                f"{label}: expects instant_offset_ms {expect.instant_offset_ms} "
                f"but the script clock is at {clock_ms} ms"
            )
        if expect.time_text is not None:
            if _time_text_ms(expect.time_text) > clock_ms:
                problems.append(
                    f"{label}: expects time_text {expect.time_text} "
                    f"but the script clock is at {format_elapsed(clock_ms)}"
                )
            if (
                expect.instant_offset_ms is not None
                and format_elapsed(expect.instant_offset_ms) != expect.time_text
            ):
                problems.append(
                    f"{label}: time_text {expect.time_text} does not match "
                    f"instant_offset_ms {expect.instant_offset_ms}"
                )
    return problems


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load and parse a YAML file."""
    try:
        with open(path, encoding="utf-8") as f:  # noqa: PTH123
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Failed to parse script YAML ({path.name}): {e}"
        raise ScriptError(msg) from e
    except OSError as e:
        msg = f"Failed to read script file ({path.name}): {e}"
        raise ScriptError(msg) from e

    if data is None:
        msg = f"Script file is empty: {path.name}"
        raise ScriptError(msg)
    if not isinstance(data, dict):
        msg = f"Script file must be a YAML mapping: {path.name}"
        raise ScriptError(msg)
    return data


def _time_text_ms(time_text: str) -> int:
    hours, minutes, seconds = (int(part) for part in time_text.split(":"))
    return ((hours * 60 + minutes) * 60 + seconds) * 1000
