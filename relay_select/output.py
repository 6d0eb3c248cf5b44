"""Render selection results for the command line and the API."""

from __future__ import annotations

import json

from relay_select.config import HOSTNAME_SUFFIX
from relay_select.models import CandidateServer, LatencyMeasurement


def display_hostname(hostname: str, suffix: str = HOSTNAME_SUFFIX) -> str:
    if suffix and hostname.endswith(suffix):
        return hostname[: -len(suffix)]
    return hostname


def to_json(result: CandidateServer | LatencyMeasurement | list[LatencyMeasurement]) -> str:
    if isinstance(result, list):
        return json.dumps([m.to_dict() for m in result])
    return json.dumps(result.to_dict())


def format_ranked_table(shortlist: list[LatencyMeasurement]) -> str:
    """Return a readable text table for a ranked shortlist."""
    if not shortlist:
        return "(no ranked results)"

    header = f"{'rank':<4} {'hostname':<24} {'location':<18} {'rtt(ms)':>9}"
    lines = [header, "-" * len(header)]
    for idx, item in enumerate(shortlist, start=1):
        server = item.server
        location = f"{server.country_code}-{server.city_code}" if server.city_code else server.country_code
        lines.append(f"{idx:<4} {display_hostname(server.hostname):<24} {location:<18} {item.rtt_ms:>9.2f}")
    return "\n".join(lines)
