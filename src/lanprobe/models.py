"""Data models for lanprobe."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel

UNKNOWN_MAC = "unknown"


class DeviceStatus(str, Enum):
    ONLINE = "Online"
    UNRESPONSIVE = "Unresponsive"


class PingResult(BaseModel):
    """Outcome of a single echo request."""

    model_config = {"frozen": True}

    ip: str
    reachable: bool


class DeviceRecord(BaseModel):
    """A host that answered the reachability sweep."""

    ip: str
    mac_address: str = UNKNOWN_MAC
    hostname: str
    status: DeviceStatus = DeviceStatus.ONLINE


class ScanReport(BaseModel):
    """Complete result of scanning one /24 subnet."""

    network: str
    scan_timestamp: datetime
    elapsed: float
    devices: list[DeviceRecord]
