from __future__ import annotations

import re
from dataclasses import dataclass, field

MAC_SEPARATOR = re.compile(r"[:-]")


@dataclass
class Redactor:
    enabled: bool = True
    _mac_map: dict[str, int] = field(default_factory=dict)
    _mac_counter: int = 0

    def redact_ip(self, ip: str) -> str:
        if not self.enabled:
            return ip
        parts = ip.split(".")
        if len(parts) == 4 and all(part.isdigit() for part in parts):
            return f"x.x.x.{parts[3]}"
        return ip

    def redact_mac(self, mac: str) -> str:
        if not self.enabled:
            return mac
        parts = MAC_SEPARATOR.split(mac)
        if len(parts) != 6:
            return mac
        key = ":".join(parts).lower()
        counter = self._mac_map.get(key)
        if counter is None:
            self._mac_counter += 1
            counter = self._mac_counter
            self._mac_map[key] = counter
        return f"{':'.join(parts[:3])}:xx:xx:{counter:02d}"

    def redact_hostname(self, hostname: str, ip: str) -> str:
        if hostname == ip:
            return self.redact_ip(ip)
        return hostname
