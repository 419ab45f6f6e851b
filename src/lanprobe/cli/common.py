from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import typer

from lanprobe.config import Settings, get_settings, resolve_config_path
from lanprobe.core import list_local_ranges, subnet_for


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def resolve_config_path_or_exit(allow_missing: bool = False) -> tuple[Path, bool]:
    try:
        return resolve_config_path(allow_missing=allow_missing)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def select_ranges(networks: Sequence[str] | None, settings: Settings) -> list[str]:
    """Pick the subnets to scan as normalized, de-duplicated /24 CIDRs.

    Command-line networks win over configured ones; local interfaces are the
    fallback. Raises ValueError for anything that is not an IPv4 /24.
    """
    requested = networks or settings.scanning.networks or list_local_ranges()
    subnets: list[str] = []
    for network in requested:
        subnet = str(subnet_for(network))
        if subnet not in subnets:
            subnets.append(subnet)
    return subnets
