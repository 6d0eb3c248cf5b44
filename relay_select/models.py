"""Relay records and latency measurements."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, Mapping

_NON_RECORD_FIELDS = ("extra",)


@dataclass(frozen=True)
class CandidateServer:
    """One relay endpoint from the catalog."""

    hostname: str
    country_code: str = ""
    country_name: str = ""
    city_code: str = ""
    city_name: str = ""
    active: bool = False
    owned: bool = False
    provider: str = ""
    ipv4_addr_in: str = ""
    ipv6_addr_in: str = ""
    network_port_speed: int = 0
    pubkey: str = ""
    multihop_port: int = 0
    socks_name: str = ""
    stboot: bool = False  # boots from volatile storage only
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def diskless(self) -> bool:
        return self.stboot

    @property
    def probe_address(self) -> str:
        return self.ipv4_addr_in

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> CandidateServer:
        if not isinstance(record, dict):
            raise ValueError(f"server record must be an object, got {type(record).__name__}")
        if not record.get("hostname"):
            raise ValueError("server record has no hostname")

        known = {f.name for f in fields(cls) if f.name not in _NON_RECORD_FIELDS}
        values: dict[str, Any] = {}
        for name in known:
            value = record.get(name)
            if value is not None:
                values[name] = value
        extra = {k: v for k, v in record.items() if k not in known}
        return cls(extra=extra, **values)

    def to_dict(self) -> dict[str, Any]:
        out = {f.name: getattr(self, f.name) for f in fields(self) if f.name not in _NON_RECORD_FIELDS}
        out.update(self.extra)
        return out


@dataclass(frozen=True)
class LatencyMeasurement:
    """Outcome of probing one server.

    The selector only records probes that answered, so ranked results always
    have ``succeeded`` set.
    """

    server: CandidateServer
    rtt_ms: float
    succeeded: bool = True

    def to_dict(self) -> dict[str, Any]:
        out = self.server.to_dict()
        out["rtt_ms"] = round(self.rtt_ms, 3)
        return out
