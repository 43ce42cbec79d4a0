"""alwayson config — inspect and edit display settings."""

from __future__ import annotations

from pathlib import Path

import typer
import yaml

from alwayson.core.config import (
    DEFAULT_CONFIG_FILENAME,
    find_config_file,
    load_config,
    parse_override,
    save_config,
)
from alwayson.core.exceptions import ConfigError

config_app = typer.Typer(
    name="config",
    help="Configuration management commands.",
    no_args_is_help=True,
)


@config_app.command(name="show")
def config_show(
    config_path: str | None = typer.Option(None, "--config", "-c", help="Config file path."),
) -> None:
    """Show the effective configuration (file + environment)."""
    try:
        path = Path(config_path) if config_path else find_config_file()
        config = load_config(config_path=path)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from None

    source = path if path is not None and path.exists() else "defaults"
    typer.echo(f"# source: {source}")
    typer.echo(
        yaml.dump(
            config.model_dump(mode="json"),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
    )


@config_app.command(name="set")
def config_set(
    key: str = typer.Argument(help="Dotted config key (e.g. display.active_interval_ms)."),
    value: str = typer.Argument(help="Value to set."),
    config_path: str | None = typer.Option(None, "--config", "-c", help="Config file path."),
) -> None:
    """Set one configuration value. The value is type-checked before saving."""
    path = Path(config_path) if config_path else _target_path()
    try:
        override = parse_override(key, value)
        config = load_config(config_path=path, overrides=override)
        save_config(config, path)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from None

    typer.echo(f"Set {key} = {value}")
    typer.echo(f"Saved: {path}")


def _target_path() -> Path:
    """Nearest existing config file, else alwayson.config.yaml in cwd."""
    return find_config_file() or Path.cwd() / DEFAULT_CONFIG_FILENAME
