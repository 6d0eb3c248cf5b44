import ipaddress
import logging
import math
import platform
import re
import subprocess

from relay_select.config import PROBE_GRACE_S, PROBE_TIMEOUT_S

logger = logging.getLogger(__name__)

# Exit statuses meaning "ping ran, but no reply came back"
_NO_REPLY_CODES = {"darwin": (2,), "freebsd": (2,), "windows": (1,)}

# BSD-derived ping takes -W in milliseconds
_BSD_PING = ("darwin", "freebsd")


class ProbeError(OSError):
    """Raised when a probe cannot be constructed or run."""


def _ping_command(host, timeout):
    system = platform.system().lower()
    if system == "windows":
        return ['ping', '-n', '1', '-w', str(int(timeout * 1000)), host], re.compile(r'Average = (\d+)ms')
    if system in _BSD_PING:
        return ['ping', '-n', '-c', '1', '-W', str(int(timeout * 1000)), host], re.compile(r'time=(\d+\.?\d*) ms')
    return (
        ['ping', '-n', '-c', '1', '-W', str(max(1, math.ceil(timeout))), host],
        re.compile(r'time=(\d+\.?\d*) ms'),
    )


def ping_latency(host, timeout=PROBE_TIMEOUT_S):
    """Send one echo request to host and return the round-trip time in milliseconds.

    A ping that ran but recorded no reply, or a reply of 0 ms, counts as the
    full timeout so a lost packet never ranks ahead of a real measurement.
    """
    try:
        address = ipaddress.IPv4Address(host)
    except ValueError as e:
        raise ProbeError(f"invalid IPv4 address {host!r}") from e

    cmd, pattern = _ping_command(str(address), timeout)
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout + PROBE_GRACE_S)
    except subprocess.TimeoutExpired as e:
        raise ProbeError(f"ping to {host} did not finish") from e
    except OSError as e:
        raise ProbeError(f"cannot run ping for {host}: {e}") from e

    match = pattern.search(result.stdout)
    if match:
        latency = float(match.group(1))
        if latency > 0:
            return latency
        logger.debug("Zero latency reported for %s, using timeout", host)
        return timeout * 1000.0

    no_reply = _NO_REPLY_CODES.get(platform.system().lower(), (1,))
    if result.returncode in no_reply:
        logger.debug("No reply from %s within %.1fs", host, timeout)
        return timeout * 1000.0

    detail = (result.stderr or result.stdout).strip()
    raise ProbeError(f"ping to {host} failed with status {result.returncode}: {detail}")


def probe_latency(server, timeout=PROBE_TIMEOUT_S):
    """Probe a CandidateServer at its probe address."""
    latency = ping_latency(server.probe_address, timeout=timeout)
    logger.debug("Server: %s, IP: %s, RTT: %.2fms", server.hostname, server.probe_address, latency)
    return latency
