from __future__ import annotations

import asyncio

import pytest

from lanprobe.config import get_settings
from lanprobe.models import UNKNOWN_MAC, PingResult


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    monkeypatch.delenv("LANPROBE_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeProbes:
    """In-memory stand-in for the system probes."""

    def __init__(
        self,
        reachable: set[str] | None = None,
        macs: dict[str, str] | None = None,
        hostnames: dict[str, str] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.reachable = reachable or set()
        self.macs = macs or {}
        self.hostnames = hostnames or {}
        self.failing = failing or set()
        self.pinged: list[str] = []
        self.described: list[str] = []

    async def ping(self, ip: str) -> PingResult:
        self.pinged.append(ip)
        await asyncio.sleep(0)
        return PingResult(ip=ip, reachable=ip in self.reachable)

    async def lookup_mac(self, ip: str) -> str:
        self.described.append(ip)
        if ip in self.failing:
            raise RuntimeError(f"neighbor table unavailable for {ip}")
        return self.macs.get(ip, UNKNOWN_MAC)

    async def resolve_hostname(self, ip: str) -> str:
        return self.hostnames.get(ip, ip)


@pytest.fixture
def fake_probes() -> type[FakeProbes]:
    return FakeProbes
