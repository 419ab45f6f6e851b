"""lanprobe - discover and describe live hosts on local /24 subnets."""

from __future__ import annotations

from importlib.metadata import version

from .config import ScanningConfig, Settings, get_settings
from .models import DeviceRecord, DeviceStatus, PingResult, ScanReport

__all__ = [
    "DeviceRecord",
    "DeviceStatus",
    "PingResult",
    "ScanReport",
    "ScanningConfig",
    "Settings",
    "__version__",
    "get_settings",
]

__version__ = version("lanprobe")
