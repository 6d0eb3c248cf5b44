"""Pick the lowest-latency relays from a catalog."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from relay_select.config import PROBE_TIMEOUT_S
from relay_select.models import CandidateServer, LatencyMeasurement
from relay_select.ping_utils import ProbeError, probe_latency

logger = logging.getLogger(__name__)


def is_eligible(server: CandidateServer, country: str | None = None, diskless_only: bool = False) -> bool:
    if not server.active or server.diskless != diskless_only:
        return False
    if not server.probe_address:
        return False
    if country and server.country_code.lower() != country.lower():
        return False
    return True


def _measure(
    catalog: Iterable[CandidateServer],
    country: str | None,
    diskless_only: bool,
    timeout: float,
) -> Iterator[LatencyMeasurement]:
    """Probe eligible servers in catalog order, yielding each successful measurement."""
    for server in catalog:
        if not is_eligible(server, country, diskless_only):
            continue
        try:
            rtt_ms = probe_latency(server, timeout=timeout)
        except ProbeError as e:
            logger.warning("Skipping %s: %s", server.hostname, e)
            continue
        yield LatencyMeasurement(server=server, rtt_ms=rtt_ms)


def select_best(
    catalog: Iterable[CandidateServer],
    country: str | None = None,
    diskless_only: bool = False,
    *,
    timeout: float = PROBE_TIMEOUT_S,
) -> LatencyMeasurement | None:
    """Return the fastest eligible server, or None when no server qualified and answered."""
    best: LatencyMeasurement | None = None
    for measurement in _measure(catalog, country, diskless_only, timeout):
        if best is None or measurement.rtt_ms < best.rtt_ms:
            best = measurement

    if best is None:
        logger.info("No eligible server answered")
    else:
        logger.debug("Best latency server: %s (%.2fms)", best.server.hostname, best.rtt_ms)
    return best


def select_top_n(
    catalog: Iterable[CandidateServer],
    country: str | None = None,
    diskless_only: bool = False,
    n: int = 1,
    *,
    timeout: float = PROBE_TIMEOUT_S,
) -> list[LatencyMeasurement]:
    """Probe every eligible server and return up to ``n`` of them, fastest first.

    Equal latencies keep their catalog order. A shortlist shorter than ``n``
    is a normal result.
    """
    if n < 1:
        raise ValueError("n must be >= 1")

    measurements = list(_measure(catalog, country, diskless_only, timeout))
    measurements.sort(key=lambda m: m.rtt_ms)
    logger.info("Ranked %d servers", len(measurements))
    return measurements[:n]
