"""Session configuration and startup validation for PortWatch."""

from dataclasses import dataclass
from datetime import timedelta

from portwatch.models import HostConfig

DEFAULT_PORT = 80
DEFAULT_INTERVAL_MS = 5000
MIN_INTERVAL_MS = 1000  # exclusive lower bound
MAX_PORT = 65535

CONNECT_TIMEOUT_S = 1.0
RECENT_WINDOW = timedelta(minutes=5)


class ConfigError(ValueError):
    """Raised when the session configuration cannot start monitoring."""


def parse_hosts(text: str) -> tuple[str, ...]:
    """Split a whitespace-delimited host list.

    Blank entries are dropped and duplicates keep their first position, so
    every hostname maps to exactly one prober.

    Examples:
        >>> parse_hosts("  alpha beta  alpha ")
        ('alpha', 'beta')
    """
    hosts = []
    for host in (text or "").split():
        if host not in hosts:
            hosts.append(host)
    return tuple(hosts)


@dataclass(frozen=True)
class MonitorConfig:
    """Immutable settings for one monitoring session."""

    hosts: tuple[str, ...]
    port: int = DEFAULT_PORT
    interval_ms: int = DEFAULT_INTERVAL_MS

    def __post_init__(self):
        if not self.hosts:
            raise ConfigError("No hosts provided")
        if self.port <= 0 or self.port > MAX_PORT:
            raise ConfigError("Invalid port provided")
        if self.interval_ms <= MIN_INTERVAL_MS:
            raise ConfigError("Invalid interval provided")

    @classmethod
    def from_values(
        cls,
        hosts_text: str,
        port: int = DEFAULT_PORT,
        interval_ms: int = DEFAULT_INTERVAL_MS,
    ) -> "MonitorConfig":
        """Build a validated config from raw command-line values."""
        return cls(hosts=parse_hosts(hosts_text), port=port, interval_ms=interval_ms)

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000.0

    def host_configs(self) -> tuple[HostConfig, ...]:
        return tuple(HostConfig(hostname=host, port=self.port) for host in self.hosts)
