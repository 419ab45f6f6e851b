from __future__ import annotations

import socket
from types import SimpleNamespace

import pytest

from lanprobe.core import interfaces as interfaces_module
from lanprobe.core.interfaces import list_local_ranges


def _addr(family, address: str) -> SimpleNamespace:
    return SimpleNamespace(family=family, address=address, netmask=None)


def _patch_psutil(monkeypatch: pytest.MonkeyPatch, addrs: dict, stats: dict) -> None:
    monkeypatch.setattr(interfaces_module.psutil, "net_if_addrs", lambda: addrs)
    monkeypatch.setattr(interfaces_module.psutil, "net_if_stats", lambda: stats)


def test_lists_active_ipv4_ranges(monkeypatch: pytest.MonkeyPatch):
    addrs = {
        "lo": [_addr(socket.AF_INET, "127.0.0.1")],
        "eth0": [
            _addr(socket.AF_INET6, "fe80::1"),
            _addr(socket.AF_INET, "192.168.1.23"),
        ],
        "wlan0": [_addr(socket.AF_INET, "10.0.5.7")],
        "docker0": [_addr(socket.AF_INET, "172.17.0.1")],
        "eth1": [_addr(socket.AF_INET, "169.254.3.3")],
    }
    stats = {
        "lo": SimpleNamespace(isup=True),
        "eth0": SimpleNamespace(isup=True),
        "wlan0": SimpleNamespace(isup=True),
        "docker0": SimpleNamespace(isup=False),
        "eth1": SimpleNamespace(isup=True),
    }
    _patch_psutil(monkeypatch, addrs, stats)

    assert list_local_ranges() == ["192.168.1.0/24", "10.0.5.0/24"]


def test_shared_subnet_is_listed_once(monkeypatch: pytest.MonkeyPatch):
    addrs = {
        "eth0": [_addr(socket.AF_INET, "192.168.1.23")],
        "eth0:1": [_addr(socket.AF_INET, "192.168.1.24")],
    }
    _patch_psutil(monkeypatch, addrs, {})

    assert list_local_ranges() == ["192.168.1.0/24"]


def test_no_interfaces_gives_empty_list(monkeypatch: pytest.MonkeyPatch):
    _patch_psutil(monkeypatch, {"lo": [_addr(socket.AF_INET, "127.0.0.1")]}, {})

    assert list_local_ranges() == []
