"""Simulated probe for PortWatch development and testing."""

import random
import threading
from datetime import datetime

from portwatch.models import CheckSample


class FakeProbe:
    """Generates plausible connect results without touching the network."""

    def __init__(self, seed: int | None = None):
        """Initialize with optional random seed for deterministic behavior."""
        # One instance is shared by every prober thread; draws happen under the lock
        self._random = random.Random(seed)
        self._lock = threading.Lock()

        # Simulation parameters
        self.base_latency = 25.0  # Base latency in ms
        self.latency_variance = 5.0
        self.spike_probability = 0.05
        self.spike_multiplier = 3.0
        self.failure_probability = 0.02

    def probe(self, host: str, port: int) -> CheckSample:
        """Generate a single connect result for host:port."""
        if not host or not host.strip():
            raise ValueError("Host cannot be empty")

        timestamp = datetime.now()

        with self._lock:
            if self._random.random() < self.failure_probability:
                return CheckSample(ts=timestamp, latency_ms=None)

            latency = self.base_latency + self._random.gauss(0, self.latency_variance)
            if self._random.random() < self.spike_probability:
                latency *= self.spike_multiplier

        return CheckSample(ts=timestamp, latency_ms=max(1, int(latency)))
