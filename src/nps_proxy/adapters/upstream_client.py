"""Upstream REST API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from nps_proxy.domain.errors import UpstreamUnavailable
from nps_proxy.domain.proxy import UpstreamResponse


class UpstreamClient(Protocol):
    """Interface for outbound calls to the upstream API."""

    async def fetch(
        self, method: str, url: str, body: object | None = None
    ) -> UpstreamResponse:
        """Perform one request and return the raw upstream response."""


@dataclass
class HttpxUpstreamClient(UpstreamClient):
    """HTTPX-backed upstream client."""

    http_client: httpx.AsyncClient
    user_agent: str = "nps-proxy/1.0"
    timeout_seconds: float = 15.0

    @classmethod
    def create(
        cls, user_agent: str, timeout_seconds: float
    ) -> "HttpxUpstreamClient":
        """Create an upstream client with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(),
            user_agent=user_agent,
            timeout_seconds=timeout_seconds,
        )

    async def fetch(
        self, method: str, url: str, body: object | None = None
    ) -> UpstreamResponse:
        """Send one request, mapping transport errors to UpstreamUnavailable."""
        headers = {"accept": "application/json", "user-agent": self.user_agent}
        kwargs: dict[str, object] = {}
        if method.upper() != "GET" and body is not None:
            headers["content-type"] = "application/json"
            kwargs["json"] = body
        try:
            response = await self.http_client.request(
                method.upper(),
                url,
                headers=headers,
                timeout=self.timeout_seconds,
                **kwargs,
            )
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable(str(exc)) from exc
        return UpstreamResponse(
            status_code=response.status_code,
            headers={key.lower(): value for key, value in response.headers.items()},
            body=response.content,
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
