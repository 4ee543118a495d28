"""Caching proxy for the upstream REST API."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

import httpx

from nps_proxy.adapters.upstream_client import UpstreamClient
from nps_proxy.domain.cache import CacheEntry
from nps_proxy.domain.errors import (
    ConfigurationError,
    InvalidUrlError,
    UpstreamUnavailable,
)
from nps_proxy.domain.proxy import (
    ALLOWED_RESPONSE_HEADERS,
    CacheStatus,
    Credential,
    ProxyRequest,
    ProxyResponse,
    UpstreamResponse,
)
from nps_proxy.services.cache import CacheStore, utcnow

_logger = logging.getLogger(__name__)


@dataclass
class ProxyService:
    """Forwards requests upstream with an injected credential and caches JSON GETs."""

    upstream_client: UpstreamClient
    cache: CacheStore
    credential: Credential
    base_url: str
    credential_param: str = "api_key"
    ttl_seconds: int = 300
    clock: Callable[[], datetime] = utcnow

    async def handle(self, request: ProxyRequest) -> ProxyResponse:
        """Serve one inbound request from cache or upstream."""
        if not self.credential.present:
            raise ConfigurationError
        method = request.method.upper()
        url = self.build_url(request.sub_path, request.query)
        cache_key = self.cache_key(url)

        if method == "GET":
            entry = self.cache.get(cache_key)
            if entry is not None:
                _logger.info("[cache] HIT %s", cache_key)
                return ProxyResponse(
                    status_code=entry.status_code,
                    headers=copy_allowed_headers(entry.headers),
                    body=entry.body,
                    cache_status=CacheStatus.HIT,
                )

        _logger.info("[proxy] -> %s %s", method, cache_key)
        body = request.body if method != "GET" else None
        try:
            upstream = await self.upstream_client.fetch(method, url, body)
        except UpstreamUnavailable:
            _logger.exception("Upstream request failed: %s %s", method, cache_key)
            raise

        headers = copy_allowed_headers(upstream.headers)
        cache_status = CacheStatus.BYPASS
        if method == "GET" and is_cacheable(upstream):
            self.cache.set(
                cache_key,
                CacheEntry(
                    expires_at=self.clock() + timedelta(seconds=self.ttl_seconds),
                    status_code=upstream.status_code,
                    headers=headers,
                    body=upstream.body,
                ),
            )
            cache_status = CacheStatus.MISS
            _logger.info("[cache] SET %s ttl_s=%s", cache_key, self.ttl_seconds)
        return ProxyResponse(
            status_code=upstream.status_code,
            headers=headers,
            body=upstream.body,
            cache_status=cache_status,
        )

    def build_url(self, sub_path: str, query: list[tuple[str, str]]) -> str:
        """Resolve the outbound URL; the configured credential always wins.

        sub_path is percent-encoded and forwarded as is, so encoded delimiters
        such as %3F or %2F stay part of the path.
        """
        sub_path = sub_path.lstrip("/")
        base = self.base_url.rstrip("/")
        target = f"{base}/{sub_path}" if sub_path else base
        params = [
            (key, value) for key, value in query if key != self.credential_param
        ]
        params.append((self.credential_param, self.credential.value or ""))
        try:
            return str(httpx.URL(target, params=params))
        except httpx.InvalidURL as exc:
            raise InvalidUrlError(str(exc)) from exc

    def cache_key(self, url: str) -> str:
        """Derive the cache key from a resolved URL, excluding the credential."""
        return str(httpx.URL(url).copy_remove_param(self.credential_param))


def copy_allowed_headers(headers: dict[str, str]) -> dict[str, str]:
    """Return only the response headers that may be forwarded to the caller."""
    allowed: dict[str, str] = {}
    for name in ALLOWED_RESPONSE_HEADERS:
        value = headers.get(name)
        if value:
            allowed[name] = value
    return allowed


def is_cacheable(response: UpstreamResponse) -> bool:
    """Only successful JSON responses are cached."""
    return (
        response.status_code == httpx.codes.OK
        and "application/json" in response.content_type.lower()
    )
