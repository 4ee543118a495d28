"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass

from nps_proxy.adapters.json_catalog_repository import JsonFileCatalogRepository
from nps_proxy.adapters.upstream_client import HttpxUpstreamClient, UpstreamClient
from nps_proxy.config import Settings, environment_lookup
from nps_proxy.domain.proxy import Credential
from nps_proxy.services.cache import InMemoryCacheStore
from nps_proxy.services.catalog import CatalogService
from nps_proxy.services.credentials import resolve_credential
from nps_proxy.services.proxy import ProxyService
from nps_proxy.services.rate_limit import FixedWindowRateLimiter


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    credential: Credential
    cache: InMemoryCacheStore
    upstream_client: UpstreamClient
    proxy_service: ProxyService
    catalog_service: CatalogService
    rate_limiter: FixedWindowRateLimiter
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    environ: Mapping[str, str | None] | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    credential = resolve_credential(
        resolved_settings.credential_env_names,
        environ if environ is not None else environment_lookup(),
    )
    cache = InMemoryCacheStore()
    upstream_client = HttpxUpstreamClient.create(
        user_agent=resolved_settings.user_agent,
        timeout_seconds=resolved_settings.upstream_timeout_seconds,
    )
    proxy_service = ProxyService(
        upstream_client=upstream_client,
        cache=cache,
        credential=credential,
        base_url=resolved_settings.upstream_base_url,
        credential_param=resolved_settings.credential_param,
        ttl_seconds=resolved_settings.cache_ttl_seconds,
    )
    catalog_service = CatalogService(
        JsonFileCatalogRepository.load(resolved_settings.data_dir)
    )
    rate_limiter = FixedWindowRateLimiter(
        window_seconds=resolved_settings.rate_limit_window_seconds,
        max_requests=resolved_settings.rate_limit_max_requests,
    )

    async def close_resources() -> None:
        await upstream_client.close()

    return AppContainer(
        settings=resolved_settings,
        credential=credential,
        cache=cache,
        upstream_client=upstream_client,
        proxy_service=proxy_service,
        catalog_service=catalog_service,
        rate_limiter=rate_limiter,
        close_resources=close_resources,
    )
