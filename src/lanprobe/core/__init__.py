from __future__ import annotations

from .batch import BatchRunner, Failure, ItemState, Success, run_in_batches
from .interfaces import list_local_ranges
from .probes import CommandError, Probes, SystemProbes, run_command
from .scanner import Scanner, candidate_addresses, subnet_for
from .timeouts import ProbeTimeoutError, with_timeout

__all__ = [
    "BatchRunner",
    "CommandError",
    "Failure",
    "ItemState",
    "ProbeTimeoutError",
    "Probes",
    "Scanner",
    "Success",
    "SystemProbes",
    "candidate_addresses",
    "list_local_ranges",
    "run_command",
    "run_in_batches",
    "subnet_for",
    "with_timeout",
]
