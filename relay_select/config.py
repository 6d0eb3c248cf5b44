"""
Configuration constants for relay selection.
"""
import os

# --- Catalog Configuration ---
CATALOG_URL = os.environ.get("RELAY_SELECT_CATALOG_URL", "https://api.mullvad.net/www/relays")
HTTP_TIMEOUT_S = float(os.environ.get("RELAY_SELECT_HTTP_TIMEOUT", "10"))
DEFAULT_SERVER_TYPE = "wireguard"

# --- Probe Configuration ---
PROBE_TIMEOUT_S = 1.0  # Per-probe wait for the echo reply
PROBE_GRACE_S = 2.0  # Extra time before a hung ping process is killed

# --- Output Configuration ---
HOSTNAME_SUFFIX = "-wireguard"

# --- Exit Codes ---
EXIT_OK = 0
EXIT_RETRIEVAL_FAILED = 1
EXIT_NO_RESULT = 3
