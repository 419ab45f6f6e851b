from __future__ import annotations

import ipaddress
import logging
import socket

import psutil

logger = logging.getLogger(__name__)


def list_local_ranges() -> list[str]:
    """List the /24 ranges of active, non-loopback IPv4 interfaces."""
    stats = psutil.net_if_stats()
    ranges: list[str] = []
    for name, addresses in psutil.net_if_addrs().items():
        interface = stats.get(name)
        if interface is not None and not interface.isup:
            logger.debug("Skipping interface %s (down)", name)
            continue
        for address in addresses:
            if address.family != socket.AF_INET:
                continue
            ip = ipaddress.IPv4Address(address.address)
            if ip.is_loopback or ip.is_link_local:
                continue
            network = str(ipaddress.ip_network(f"{ip}/24", strict=False))
            if network not in ranges:
                logger.debug("Detected range %s on %s", network, name)
                ranges.append(network)
    return ranges
