from __future__ import annotations

import typer
from rich.console import Console

from lanprobe.core import list_local_ranges


def register(app: typer.Typer) -> None:
    @app.command()
    def interfaces() -> None:
        """List the local /24 ranges that a scan would cover."""
        console = Console()
        ranges = list_local_ranges()
        if not ranges:
            console.print("No network interfaces found.")
            return
        for network in ranges:
            console.print(network)
