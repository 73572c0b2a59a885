"""Data models for PortWatch samples and snapshots."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class HostStatus(str, Enum):
    """Reachability classification derived from the trailing window."""

    UNKNOWN = "Unknown"
    ONLINE = "Online"
    UNSTABLE = "Unstable"
    OFFLINE = "Offline"


@dataclass(frozen=True)
class HostConfig:
    """A monitored host and the port probed on it."""

    hostname: str
    port: int


@dataclass(frozen=True)
class CheckSample:
    """A single connection attempt result."""

    ts: datetime
    latency_ms: int | None  # None indicates a failed attempt

    @property
    def failed(self) -> bool:
        return self.latency_ms is None


@dataclass(frozen=True)
class HostSnapshot:
    """Derived per-host view, replaced as a whole on every update."""

    hostname: str
    status: HostStatus
    last_seen: datetime | None
    session_average_latency: int
    five_minute_average_latency: int
    five_minute_failures: int

    @classmethod
    def initial(cls, hostname: str) -> "HostSnapshot":
        """Snapshot for a host that has not reported any sample yet."""
        return cls(
            hostname=hostname,
            status=HostStatus.UNKNOWN,
            last_seen=None,
            session_average_latency=0,
            five_minute_average_latency=0,
            five_minute_failures=0,
        )


@dataclass(frozen=True)
class DashboardSnapshot:
    """Read-only session view handed to renderers."""

    session_start: datetime
    port: int
    hosts: Mapping[str, HostSnapshot]
