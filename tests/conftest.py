"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from nps_proxy.adapters.json_catalog_repository import JsonFileCatalogRepository
from nps_proxy.adapters.upstream_client import UpstreamClient
from nps_proxy.config import Settings
from nps_proxy.containers import AppContainer
from nps_proxy.domain.errors import UpstreamUnavailable
from nps_proxy.domain.proxy import Credential, UpstreamResponse
from nps_proxy.services.cache import InMemoryCacheStore
from nps_proxy.services.catalog import CatalogService
from nps_proxy.services.proxy import ProxyService
from nps_proxy.services.rate_limit import FixedWindowRateLimiter

PARKS_BODY = json.dumps({"data": [{"id": "p1"}]}).encode()


@dataclass
class ManualClock:
    """Clock that only moves when told to."""

    now: datetime = field(
        default_factory=lambda: datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@dataclass
class FakeUpstreamClient(UpstreamClient):
    """Fake upstream client that records calls and replays a fixed response."""

    response: UpstreamResponse = field(
        default_factory=lambda: UpstreamResponse(
            status_code=200,
            headers={
                "content-type": "application/json; charset=utf-8",
                "cache-control": "max-age=60",
                "set-cookie": "session=secret",
            },
            body=PARKS_BODY,
        )
    )
    error: UpstreamUnavailable | None = None
    calls: list[tuple[str, str, object | None]] = field(default_factory=list)

    async def fetch(
        self, method: str, url: str, body: object | None = None
    ) -> UpstreamResponse:
        self.calls.append((method, url, body))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def settings() -> Settings:
    return Settings(
        upstream_base_url="https://upstream.test/api/v1",
        rate_limit_max_requests=1000,
    )


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def upstream_client() -> FakeUpstreamClient:
    return FakeUpstreamClient()


@pytest.fixture
def credential() -> Credential:
    return Credential(value="K1", source="NPS_API_KEY")


@pytest.fixture
def cache(clock: ManualClock) -> InMemoryCacheStore:
    return InMemoryCacheStore(clock=clock)


@pytest.fixture
def proxy_service(
    settings: Settings,
    upstream_client: FakeUpstreamClient,
    cache: InMemoryCacheStore,
    credential: Credential,
    clock: ManualClock,
) -> ProxyService:
    return ProxyService(
        upstream_client=upstream_client,
        cache=cache,
        credential=credential,
        base_url=settings.upstream_base_url,
        credential_param=settings.credential_param,
        ttl_seconds=settings.cache_ttl_seconds,
        clock=clock,
    )


@pytest.fixture
def container(
    settings: Settings,
    credential: Credential,
    cache: InMemoryCacheStore,
    upstream_client: FakeUpstreamClient,
    proxy_service: ProxyService,
    clock: ManualClock,
) -> AppContainer:
    catalog_service = CatalogService(
        JsonFileCatalogRepository(
            parks=[
                {"id": "yose", "name": "Yosemite National Park"},
                {"id": "grca", "name": "Grand Canyon National Park"},
            ],
            activities=[{"id": "hiking", "name": "Hiking"}],
        )
    )
    rate_limiter = FixedWindowRateLimiter(
        window_seconds=settings.rate_limit_window_seconds,
        max_requests=settings.rate_limit_max_requests,
        clock=clock,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        credential=credential,
        cache=cache,
        upstream_client=upstream_client,
        proxy_service=proxy_service,
        catalog_service=catalog_service,
        rate_limiter=rate_limiter,
        close_resources=close_resources,
    )
