from __future__ import annotations

import asyncio
import ipaddress
import logging
import time
from collections.abc import Sequence
from datetime import datetime, timezone

from lanprobe.config import ScanningConfig
from lanprobe.models import (
    UNKNOWN_MAC,
    DeviceRecord,
    DeviceStatus,
    PingResult,
    ScanReport,
)

from .batch import BatchRunner, Success
from .probes import Probes, SystemProbes

logger = logging.getLogger(__name__)

SUBNET_PREFIX = 24


def subnet_for(network: str) -> ipaddress.IPv4Network:
    """Return the /24 described by a CIDR string or a bare IPv4 address."""
    try:
        if "/" in network:
            net = ipaddress.ip_network(network.strip(), strict=False)
        else:
            net = ipaddress.ip_network(f"{network.strip()}/{SUBNET_PREFIX}", strict=False)
    except ValueError as exc:
        raise ValueError(f"Invalid network: {network!r}") from exc

    if not isinstance(net, ipaddress.IPv4Network):
        raise ValueError(f"Only IPv4 networks are supported: {network}")
    if net.prefixlen != SUBNET_PREFIX:
        raise ValueError(f"Only /{SUBNET_PREFIX} networks are supported: {network}")
    return net


def candidate_addresses(network: str) -> list[str]:
    return [str(host) for host in subnet_for(network).hosts()]


def _unresponsive(ip: str) -> DeviceRecord:
    return DeviceRecord(
        ip=ip, mac_address=UNKNOWN_MAC, hostname=ip, status=DeviceStatus.UNRESPONSIVE
    )


class Scanner:
    """Two-phase subnet scan: echo sweep, then detail lookups on live hosts."""

    def __init__(self, config: ScanningConfig, probes: Probes | None = None) -> None:
        self.config = config
        self.probes = probes if probes is not None else SystemProbes(config)

    async def sweep(self, addresses: Sequence[str]) -> list[str]:
        runner: BatchRunner[str, PingResult] = BatchRunner(
            self.probes.ping, self.config.ping_concurrency
        )
        outcomes = await runner.run(addresses)
        # Addresses come from the candidate list, never from the ping reply.
        return [
            outcome.item
            for outcome in outcomes
            if isinstance(outcome, Success) and outcome.value.reachable
        ]

    async def _describe(self, ip: str) -> DeviceRecord:
        try:
            async with asyncio.TaskGroup() as group:
                mac_task = group.create_task(self.probes.lookup_mac(ip))
                hostname_task = group.create_task(self.probes.resolve_hostname(ip))
        except Exception as exc:
            logger.warning("Detail lookup failed for %s: %r", ip, exc)
            return _unresponsive(ip)
        return DeviceRecord(
            ip=ip,
            mac_address=mac_task.result(),
            hostname=hostname_task.result(),
            status=DeviceStatus.ONLINE,
        )

    async def enrich(self, addresses: Sequence[str]) -> list[DeviceRecord]:
        runner: BatchRunner[str, DeviceRecord] = BatchRunner(
            self._describe, self.config.detail_concurrency
        )
        outcomes = await runner.run(addresses)
        return [
            outcome.value if isinstance(outcome, Success) else _unresponsive(outcome.item)
            for outcome in outcomes
        ]

    async def scan(self, network: str) -> ScanReport:
        net = subnet_for(network)
        started_at = datetime.now(timezone.utc)
        start = time.perf_counter()

        candidates = candidate_addresses(str(net))
        logger.debug(
            "Sweeping %s (%d hosts, %d concurrent pings)",
            net,
            len(candidates),
            self.config.ping_concurrency,
        )
        reachable = await self.sweep(candidates)
        logger.info("%d of %d hosts in %s answered", len(reachable), len(candidates), net)

        devices = await self.enrich(reachable)
        elapsed = time.perf_counter() - start
        logger.debug("Scan of %s complete in %.2fs", net, elapsed)
        return ScanReport(
            network=str(net),
            scan_timestamp=started_at,
            elapsed=elapsed,
            devices=devices,
        )
