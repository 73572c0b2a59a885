"""TCP connect probe for PortWatch."""

import concurrent.futures
import logging
import socket
import time
from datetime import datetime
from typing import Protocol

from portwatch.config import CONNECT_TIMEOUT_S
from portwatch.models import CheckSample

logger = logging.getLogger(__name__)


class Probe(Protocol):
    """Protocol defining the interface for reachability probes."""

    def probe(self, host: str, port: int) -> CheckSample:
        """Attempt one connection to host:port and report the outcome."""
        ...


class TcpProbe:
    """Probe that times a plain TCP connect.

    The connection is closed as soon as it is established; no data is sent or
    read. One attempt per call, no retries.

    A single deadline covers name resolution and every resolved address, so
    an attempt never outlives the timeout. Resolution runs on a small helper
    pool because ``getaddrinfo`` cannot be interrupted; a lookup that misses
    the deadline is abandoned and finishes in the background.

    Timeouts, refusals and resolution errors are reported as failed samples
    rather than raised, so a failing host never stops its prober.
    """

    def __init__(self, timeout_s: float = CONNECT_TIMEOUT_S, resolver_threads: int = 4):
        """Initialize TCP probe with connect timeout.

        Args:
            timeout_s: Maximum duration of one attempt in seconds, resolution
                       included. Default is 1 second.
            resolver_threads: Size of the name resolution pool
        """
        if timeout_s <= 0:
            raise ValueError("timeout_s must be positive")

        self.timeout_s = timeout_s
        self._resolver = concurrent.futures.ThreadPoolExecutor(
            max_workers=resolver_threads, thread_name_prefix="portwatch-resolve"
        )

        logger.debug("TcpProbe initialized: timeout_s=%.1f", timeout_s)

    def probe(self, host: str, port: int) -> CheckSample:
        """Connect once to host:port.

        Args:
            host: Target hostname or IP address
            port: Target TCP port

        Returns:
            CheckSample with whole-millisecond latency, or latency_ms=None on failure
        """
        start = time.perf_counter()
        try:
            conn = self._connect(host, port, start + self.timeout_s)
        except OSError as e:
            logger.debug("Connection error: host=%s, port=%d, error=%s", host, port, e)
            return CheckSample(ts=datetime.now(), latency_ms=None)

        latency_ms = int((time.perf_counter() - start) * 1000)
        conn.close()

        logger.debug("Connected: host=%s, port=%d, latency=%dms", host, port, latency_ms)
        return CheckSample(ts=datetime.now(), latency_ms=latency_ms)

    def _connect(self, host: str, port: int, deadline: float) -> socket.socket:
        """Open a connection to the first reachable address before deadline."""
        future = self._resolver.submit(
            socket.getaddrinfo, host, port, 0, socket.SOCK_STREAM
        )
        try:
            addresses = future.result(timeout=max(0.0, deadline - time.perf_counter()))
        except concurrent.futures.TimeoutError:
            future.cancel()
            raise socket.timeout(f"name resolution timed out for {host}") from None

        last_error = None
        for family, sock_type, proto, _, address in addresses:
            remaining = deadline - time.perf_counter()
            if remaining <= 0:
                raise socket.timeout("timed out")

            sock = socket.socket(family, sock_type, proto)
            try:
                sock.settimeout(remaining)
                sock.connect(address)
                return sock
            except OSError as e:
                sock.close()
                last_error = e

        if last_error is None:
            raise OSError(f"no addresses found for {host}")
        raise last_error
