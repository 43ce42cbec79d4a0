"""alwayson CLI entry point."""

import typer

from alwayson.cli.log_setup import configure_logging

app = typer.Typer(
    name="alwayson",
    help="alwayson — always-on display refresh simulator",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        from alwayson import __version__

        typer.echo(f"alwayson {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level: DEBUG, INFO, WARNING, ERROR. Defaults to config log_level.",
    ),
) -> None:
    """alwayson — always-on display refresh simulator."""
    if log_level:
        configure_logging(log_level)


# -- Register commands --------------------------------------------------------

from alwayson.cli.commands.config_cmd import config_app  # noqa: E402
from alwayson.cli.commands.run_cmd import run_command  # noqa: E402
from alwayson.cli.commands.validate_cmd import validate_command  # noqa: E402

app.command(name="run")(run_command)
app.command(name="validate")(validate_command)
app.add_typer(config_app, name="config")
