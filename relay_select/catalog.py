"""Fetch the relay catalog from the remote directory."""

from __future__ import annotations

import logging

import requests

from relay_select.config import CATALOG_URL, HTTP_TIMEOUT_S
from relay_select.models import CandidateServer

logger = logging.getLogger(__name__)


class RetrievalError(RuntimeError):
    """Raised when the catalog cannot be fetched or decoded."""


def catalog_url(server_type: str, base_url: str = CATALOG_URL) -> str:
    return f"{base_url.rstrip('/')}/{server_type}/"


def fetch_servers(
    server_type: str,
    *,
    base_url: str = CATALOG_URL,
    timeout: float = HTTP_TIMEOUT_S,
    session: requests.Session | None = None,
) -> list[CandidateServer]:
    """Return every server of ``server_type`` in catalog order."""
    url = catalog_url(server_type, base_url)
    http = session or requests
    logger.info("Fetching %s servers from %s", server_type, url)

    try:
        response = http.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise RetrievalError(f"cannot fetch {url}: {e}") from e

    try:
        payload = response.json()
    except ValueError as e:
        raise RetrievalError(f"malformed catalog from {url}: {e}") from e

    if not isinstance(payload, list):
        raise RetrievalError(f"malformed catalog from {url}: expected a list, got {type(payload).__name__}")

    try:
        servers = [CandidateServer.from_dict(record) for record in payload]
    except (TypeError, ValueError) as e:
        raise RetrievalError(f"malformed server record from {url}: {e}") from e

    logger.info("Catalog has %d %s servers", len(servers), server_type)
    return servers
