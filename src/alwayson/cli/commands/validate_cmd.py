"""alwayson validate — display script YAML validation."""

from __future__ import annotations

from pathlib import Path

import typer

from alwayson.core.exceptions import ScriptError
from alwayson.core.script_loader import check_script, find_script_files, load_script


def validate_command(
    path: str = typer.Argument(help="Script file or directory path."),
    strict: bool = typer.Option(
        False, "--strict", help="Treat step warnings as failures."
    ),
) -> None:
    """Validate display script YAML files and check their steps."""
    script_path = Path(path)

    if not script_path.exists():
        typer.echo(
            typer.style(f"Path does not exist: {path}", fg=typer.colors.RED),
            err=True,
        )
        raise typer.Exit(code=1)

    files = [script_path] if script_path.is_file() else find_script_files(script_path)

    if not files:
        typer.echo(
            typer.style(f"No YAML files found in: {path}", fg=typer.colors.RED),
            err=True,
        )
        raise typer.Exit(code=1)

    seen_ids: dict[str, str] = {}
    ok = warned = failed = 0
    for file in files:
        try:
            script = load_script(file)
        except ScriptError as e:
            typer.echo(f"  {file.name}: {typer.style('ERROR', fg=typer.colors.RED)} - {e}")
            failed += 1
            continue

        problems = check_script(script)
        if script.id in seen_ids:
            problems.append(f"script id {script.id} is also used by {seen_ids[script.id]}")
        seen_ids.setdefault(script.id, file.name)

        summary = f"{script.id} {script.name}, {len(script.steps)} step(s)"
        if problems:
            typer.echo(f"  {file.name}: {typer.style('WARN', fg=typer.colors.YELLOW)} {summary}")
            for problem in problems:
                typer.echo(f"    - {problem}")
            warned += 1
        else:
            typer.echo(f"  {file.name}: {typer.style('OK', fg=typer.colors.GREEN)} {summary}")
            ok += 1

    typer.echo("")
    typer.echo(f"Validated {len(files)} file(s): {ok} OK, {warned} WARN, {failed} ERROR")

    if failed or (strict and warned):
        raise typer.Exit(code=1)
