"""alwayson run — execute display scripts."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from alwayson.cli.log_setup import configure_logging
from alwayson.core.config import load_config
from alwayson.core.exceptions import AlwaysOnError
from alwayson.core.models import ScriptResult, StepStatus
from alwayson.core.renderers import CLIRenderer, DisplayRenderer
from alwayson.core.runner import ScriptRunner
from alwayson.core.script_loader import load_scripts
from alwayson.reporters import REPORTER_REGISTRY


def run_command(
    scripts_path: str = typer.Argument(help="Script file or directory path."),
    config_path: str | None = typer.Option(
        None, "--config", "-c", help="Config file path."
    ),
    report_dir: str | None = typer.Option(
        None, "--report-dir", "-r", help="Write a report to this directory."
    ),
    report_format: str = typer.Option(
        "markdown", "--format", "-f", help="Report format."
    ),
    show_frames: bool = typer.Option(
        False, "--show-frames", help="Print every redrawn frame."
    ),
) -> None:
    """Run display scripts."""
    try:
        results = _run(scripts_path, config_path, show_frames)
        if report_dir:
            report_path = asyncio.run(_report(results, Path(report_dir), report_format))
            typer.echo(f"Report: {report_path}")
    except AlwaysOnError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from None

    total_steps = sum(r.total_steps for r in results)
    total_passed = sum(r.passed_steps for r in results)
    total_failed = total_steps - total_passed
    typer.echo(f"\nSummary: {total_passed} passed, {total_failed} failed, {total_steps} total")

    if total_failed > 0:
        raise typer.Exit(code=1)


def _run(scripts_path: str, config_path: str | None, show_frames: bool) -> list[ScriptResult]:
    """Load config and scripts, execute each script and print step results."""
    cfg_path = Path(config_path) if config_path else None
    config = load_config(config_path=cfg_path)
    configure_logging(config.log_level)

    scripts = load_scripts(Path(scripts_path))

    renderers: list[DisplayRenderer] = [CLIRenderer(config.display)] if show_frames else []
    runner = ScriptRunner(config, renderers)

    results: list[ScriptResult] = []
    for script in scripts:
        typer.echo(f"\nScript: {script.id} — {script.name}")
        result = runner.run(script)
        results.append(result)

        for step in result.steps:
            if step.status == StepStatus.PASSED:
                status_str = typer.style("PASSED", fg=typer.colors.GREEN)
            elif step.status == StepStatus.SKIPPED:
                status_str = typer.style("SKIPPED", fg=typer.colors.YELLOW)
            else:
                status_str = typer.style(step.status.value.upper(), fg=typer.colors.RED)

            shown = ""
            if step.state:
                state = step.state
                shown = f" [{state.time_text} {state.mode.value} #{state.draw_count}]"
            typer.echo(f"  Step {step.step} {step.action.value}: {status_str}{shown}")

            if step.error_message:
                typer.echo(f"    Error: {step.error_message}")

    return results


async def _report(results: list[ScriptResult], output_dir: Path, report_format: str) -> Path:
    """Generate a report with the registered reporter for report_format."""
    reporter_cls = REPORTER_REGISTRY.get(report_format)
    if reporter_cls is None:
        typer.echo(f"Error: unknown report format: {report_format}", err=True)
        raise typer.Exit(code=1)
    reporter = reporter_cls()
    report_path: Path = await reporter.generate(results, output_dir)
    return report_path
