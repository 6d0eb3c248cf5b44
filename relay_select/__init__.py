from .catalog import RetrievalError, fetch_servers
from .models import CandidateServer, LatencyMeasurement
from .output import display_hostname, format_ranked_table, to_json
from .ping_utils import ProbeError, ping_latency, probe_latency
from .selector import is_eligible, select_best, select_top_n

__all__ = [
    "CandidateServer",
    "LatencyMeasurement",
    "RetrievalError",
    "ProbeError",
    "fetch_servers",
    "ping_latency",
    "probe_latency",
    "is_eligible",
    "select_best",
    "select_top_n",
    "display_hostname",
    "format_ranked_table",
    "to_json",
]
