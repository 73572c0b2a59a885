"""Latest per-host snapshots, shared between the aggregator and renderers."""

from collections.abc import Iterable
from datetime import datetime
from types import MappingProxyType

from portwatch.models import DashboardSnapshot, HostSnapshot


class SnapshotStore:
    """Copy-on-write map from hostname to HostSnapshot.

    Only the aggregator calls publish(). Each publish builds a new dict and
    swaps the reference, and a published dict is never mutated afterwards, so
    readers holding an older snapshot keep a consistent view and the writer
    never waits on them. Hosts are updated independently; there is no
    cross-host consistency.
    """

    def __init__(self, session_start: datetime, port: int, hostnames: Iterable[str]):
        self.session_start = session_start
        self.port = port
        self._hosts = {hostname: HostSnapshot.initial(hostname) for hostname in hostnames}

    def publish(self, snapshot: HostSnapshot):
        """Replace the snapshot of one configured host."""
        if snapshot.hostname not in self._hosts:
            raise KeyError(f"Unknown host: {snapshot.hostname}")

        hosts = dict(self._hosts)
        hosts[snapshot.hostname] = snapshot
        self._hosts = hosts

    def get(self, hostname: str) -> HostSnapshot:
        return self._hosts[hostname]

    def hostnames(self) -> list[str]:
        return list(self._hosts)

    def snapshot(self) -> DashboardSnapshot:
        """Return an immutable view of the session as of now."""
        return DashboardSnapshot(
            session_start=self.session_start,
            port=self.port,
            hosts=MappingProxyType(self._hosts),
        )
