"""Proxy request and response models."""

from dataclasses import dataclass, field
from enum import StrEnum

ALLOWED_RESPONSE_HEADERS = ("content-type", "cache-control")


class CacheStatus(StrEnum):
    """How a proxied response was produced."""

    HIT = "HIT"
    MISS = "MISS"
    BYPASS = "BYPASS"


@dataclass(frozen=True)
class Credential:
    """Upstream credential resolved at startup."""

    value: str | None
    source: str | None

    @property
    def present(self) -> bool:
        return bool(self.value)


@dataclass(frozen=True)
class ProxyRequest:
    """Inbound request to forward upstream; sub_path is percent-encoded."""

    method: str
    sub_path: str = ""
    query: list[tuple[str, str]] = field(default_factory=list)
    body: object | None = None


@dataclass(frozen=True)
class UpstreamResponse:
    """Raw response returned by the upstream API."""

    status_code: int
    headers: dict[str, str]
    body: bytes

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")


@dataclass(frozen=True)
class ProxyResponse:
    """Response written back to the caller."""

    status_code: int
    headers: dict[str, str]
    body: bytes
    cache_status: CacheStatus
