from __future__ import annotations

import asyncio
import logging

import psutil
import typer
from rich.console import Console
from rich.table import Table

from lanprobe.core import Scanner
from lanprobe.models import DeviceStatus, ScanReport
from lanprobe.utils.redaction import Redactor

from .common import load_settings_or_exit, select_ranges

logger = logging.getLogger(__name__)


def _render_report(console: Console, report: ScanReport, redactor: Redactor) -> None:
    console.print(f"\nScan completed in {report.elapsed:.2f} seconds")

    if not report.devices:
        console.print("No devices found in this range.")
        return

    table = Table(title=f"Discovered devices ({report.network})")
    table.add_column("IP", style="cyan")
    table.add_column("MAC Address")
    table.add_column("Hostname", style="green")
    table.add_column("Status")

    for device in report.devices:
        style = "green" if device.status is DeviceStatus.ONLINE else "yellow"
        table.add_row(
            redactor.redact_ip(device.ip),
            redactor.redact_mac(device.mac_address),
            redactor.redact_hostname(device.hostname, device.ip),
            f"[{style}]{device.status.value}[/{style}]",
        )

    console.print(table)
    console.print(f"[green]Found {len(report.devices)} device(s)[/green]")


async def _scan_all(
    console: Console, scanner: Scanner, subnets: list[str], redactor: Redactor
) -> None:
    for network in subnets:
        console.print(f"Scanning {network} network...")
        report = await scanner.scan(network)
        _render_report(console, report, redactor)


def register(app: typer.Typer) -> None:
    @app.command()
    def scan(
        networks: list[str] | None = typer.Argument(
            None,
            help=(
                "Networks to scan (e.g., 192.168.1.0/24). Uses config networks, "
                "then local interfaces, if omitted."
            ),
        ),
        redact: bool = typer.Option(
            False,
            "--redact",
            help="Redact sensitive values in output",
        ),
    ) -> None:
        """Discover live hosts and their MAC addresses and hostnames."""
        console = Console()
        settings = load_settings_or_exit()
        redactor = Redactor(enabled=redact)

        try:
            subnets = select_ranges(networks, settings)
            if not subnets:
                console.print("No network interfaces found.")
                return

            console.print("Starting network scan...")
            logger.info(
                "Scan settings: ping_concurrency=%d, detail_concurrency=%d, "
                "ping_timeout=%.2fs",
                settings.scanning.ping_concurrency,
                settings.scanning.detail_concurrency,
                settings.scanning.ping_timeout,
            )
            scanner = Scanner(settings.scanning)
            asyncio.run(_scan_all(console, scanner, subnets, redactor))
        except (RuntimeError, OSError, ValueError, psutil.Error) as exc:
            logger.debug("Scan aborted", exc_info=True)
            typer.echo(f"Scan error: {exc}", err=True)
            raise typer.Exit(1) from exc
