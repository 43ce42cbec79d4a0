"""Tests for alwayson validate command."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003

import yaml
from typer.testing import CliRunner

from alwayson.cli.main import app

runner = CliRunner()

_VALID_SCRIPT = {
    "id": "SC-001",
    "name": "Sleep and wake",
    "steps": [
        {"step": 1, "action": "sleep"},
        {"step": 2, "action": "wake", "expect": {"mode": "active"}},
    ],
}

_INVALID_SCRIPT = {
    "id": "INVALID",  # Does not match SC-NNN pattern
    "name": "Bad script",
    "steps": [{"step": 1, "action": "wake"}],
}


def _write_yaml(path: Path, data: object) -> None:
    """Write data as YAML to path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False)


def test_validate_valid_file(tmp_path: Path) -> None:
    """alwayson validate succeeds with a valid script file."""
    script_file = tmp_path / "valid.yaml"
    _write_yaml(script_file, _VALID_SCRIPT)

    result = runner.invoke(app, ["validate", str(script_file)])
    assert result.exit_code == 0
    assert "1 OK" in result.output


def test_validate_invalid_file(tmp_path: Path) -> None:
    """alwayson validate fails with an invalid script file."""
    script_file = tmp_path / "invalid.yaml"
    _write_yaml(script_file, _INVALID_SCRIPT)

    result = runner.invoke(app, ["validate", str(script_file)])
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_validate_directory(tmp_path: Path) -> None:
    """alwayson validate processes all YAML files in a directory."""
    _write_yaml(tmp_path / "a.yaml", _VALID_SCRIPT)
    _write_yaml(tmp_path / "b.yaml", _INVALID_SCRIPT)

    result = runner.invoke(app, ["validate", str(tmp_path)])
    assert result.exit_code == 1
    assert "1 OK" in result.output
    assert "1 ERROR" in result.output


def test_validate_nonexistent_path() -> None:
    """alwayson validate fails with a nonexistent path."""
    result = runner.invoke(app, ["validate", "/nonexistent/path"])
    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_validate_empty_directory(tmp_path: Path) -> None:
    """alwayson validate fails when directory has no YAML files."""
    empty_dir = tmp_path / "empty"
    empty_dir.mkdir()

    result = runner.invoke(app, ["validate", str(empty_dir)])
    assert result.exit_code == 1
    assert "No YAML files" in result.output


_UNREACHABLE_SCRIPT = {
    "id": "SC-002",
    "name": "Expects the future",
    "steps": [
        {"step": 1, "action": "advance", "duration_ms": 2000},
        {"step": 2, "action": "expect", "expect": {"time_text": "00:00:05"}},
    ],
}


def test_validate_reports_script_summary(tmp_path: Path) -> None:
    """OK lines name the script and its step count."""
    script_file = tmp_path / "valid.yaml"
    _write_yaml(script_file, _VALID_SCRIPT)

    result = runner.invoke(app, ["validate", str(script_file)])
    assert "SC-001 Sleep and wake, 2 step(s)" in result.output


def test_validate_step_warnings(tmp_path: Path) -> None:
    """Step problems are listed but do not fail validation by default."""
    script_file = tmp_path / "future.yaml"
    _write_yaml(script_file, _UNREACHABLE_SCRIPT)

    result = runner.invoke(app, ["validate", str(script_file)])
    assert result.exit_code == 0
    assert "WARN" in result.output
    assert "step 2 (expect): expects time_text 00:00:05" in result.output
    assert "0 OK, 1 WARN, 0 ERROR" in result.output


def test_validate_strict_fails_on_warnings(tmp_path: Path) -> None:
    script_file = tmp_path / "future.yaml"
    _write_yaml(script_file, _UNREACHABLE_SCRIPT)

    result = runner.invoke(app, ["validate", str(script_file), "--strict"])
    assert result.exit_code == 1


def test_validate_duplicate_ids(tmp_path: Path) -> None:
    """Two files with the same script id are flagged."""
    _write_yaml(tmp_path / "a.yaml", _VALID_SCRIPT)
    _write_yaml(tmp_path / "b.yaml", _VALID_SCRIPT)

    result = runner.invoke(app, ["validate", str(tmp_path)])
    assert result.exit_code == 0
    assert "script id SC-001 is also used by a.yaml" in result.output
    assert "1 OK, 1 WARN" in result.output
