from __future__ import annotations

from typing import Annotated

import typer

from lanprobe.utils.logging import setup_logging

from . import config as config_cmd
from .interfaces import register as register_interfaces
from .scan import register as register_scan

app = typer.Typer(
    help="lanprobe - discover live hosts on local subnets", no_args_is_help=True
)

app.add_typer(config_cmd.app, name="config")

register_scan(app)
register_interfaces(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Log every probe and batch at DEBUG level"),
    ] = False,
) -> None:
    """lanprobe CLI."""
    setup_logging("DEBUG" if debug else None)

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"lanprobe version {get_version('lanprobe')}")
        raise typer.Exit()
