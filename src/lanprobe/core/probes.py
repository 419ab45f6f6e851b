from __future__ import annotations

import asyncio
import contextlib
import logging
import platform
import re
from typing import Protocol

from lanprobe.config import ScanningConfig
from lanprobe.models import UNKNOWN_MAC, PingResult

from .timeouts import ProbeTimeoutError, with_timeout

logger = logging.getLogger(__name__)

MAC_PATTERN = re.compile(r"(?:[0-9A-Fa-f]{2}[:-]){5}[0-9A-Fa-f]{2}")
HOSTNAME_PATTERN = re.compile(r"name = (.+)\.")

# Upper bound for the echo reply wait passed to ping itself.
MAX_ECHO_WAIT = 1.0


class CommandError(RuntimeError):
    """An external utility exited with a non-zero status."""

    def __init__(self, argv: tuple[str, ...], returncode: int, stderr: str = "") -> None:
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(f"{argv[0]} exited with status {returncode}{detail}")
        self.argv = argv
        self.returncode = returncode
        self.stderr = stderr


class Probes(Protocol):
    async def ping(self, ip: str) -> PingResult: ...

    async def lookup_mac(self, ip: str) -> str: ...

    async def resolve_hostname(self, ip: str) -> str: ...


async def run_command(*argv: str) -> str:
    """Run ``argv`` and return its stdout.

    Raises CommandError on a non-zero exit and OSError when the executable
    cannot be started. If the awaiting task is cancelled the child process is
    killed and reaped before the cancellation propagates.
    """
    process = await asyncio.create_subprocess_exec(
        *argv,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await process.communicate()
    except asyncio.CancelledError:
        if process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
        raise

    if process.returncode != 0:
        raise CommandError(
            argv, process.returncode or 0, stderr.decode("utf-8", errors="replace")
        )
    return stdout.decode("utf-8", errors="replace")


def parse_mac(output: str) -> str | None:
    match = MAC_PATTERN.search(output)
    return match.group(0) if match else None


def parse_hostname(output: str) -> str | None:
    match = HOSTNAME_PATTERN.search(output)
    return match.group(1).strip() if match else None


class SystemProbes:
    """Probe hosts with the operating system's ping, arp and nslookup."""

    def __init__(self, config: ScanningConfig, system: str | None = None) -> None:
        self._config = config
        self._windows = (system or platform.system()) == "Windows"

    def ping_command(self, ip: str) -> tuple[str, ...]:
        wait = min(self._config.ping_timeout, MAX_ECHO_WAIT)
        if self._windows:
            return ("ping", "-n", "1", "-w", str(max(int(wait * 1000), 1)), ip)
        return ("ping", "-c", "1", "-W", str(max(int(wait), 1)), ip)

    def arp_command(self, ip: str) -> tuple[str, ...]:
        if self._windows:
            return ("arp", "-a", ip)
        return ("arp", "-n", ip)

    def nslookup_command(self, ip: str) -> tuple[str, ...]:
        return ("nslookup", ip)

    async def ping(self, ip: str) -> PingResult:
        try:
            await with_timeout(
                run_command(*self.ping_command(ip)), self._config.ping_timeout
            )
        except (ProbeTimeoutError, CommandError, OSError) as exc:
            logger.debug("No echo reply from %s: %s", ip, exc)
            return PingResult(ip=ip, reachable=False)
        logger.debug("Echo reply from %s", ip)
        return PingResult(ip=ip, reachable=True)

    async def lookup_mac(self, ip: str) -> str:
        try:
            output = await with_timeout(
                run_command(*self.arp_command(ip)), self._config.arp_timeout
            )
        except (ProbeTimeoutError, CommandError, OSError) as exc:
            logger.debug("Neighbor lookup failed for %s: %s", ip, exc)
            return UNKNOWN_MAC

        mac = parse_mac(output)
        if mac is None:
            logger.debug("No hardware address for %s in arp output", ip)
            return UNKNOWN_MAC
        return mac

    async def resolve_hostname(self, ip: str) -> str:
        try:
            output = await with_timeout(
                run_command(*self.nslookup_command(ip)), self._config.nslookup_timeout
            )
        except (ProbeTimeoutError, CommandError, OSError) as exc:
            logger.debug("Reverse lookup failed for %s: %s", ip, exc)
            return ip

        return parse_hostname(output) or ip
