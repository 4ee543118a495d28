"""FastAPI application factory."""

import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from nps_proxy.api.catalog import router as catalog_router
from nps_proxy.api.proxy import router as proxy_router
from nps_proxy.app_logging import configure_logging
from nps_proxy.containers import AppContainer
from nps_proxy.domain.errors import ProxyError
from nps_proxy.services.diagnostics import check_upstream


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    started_at = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.error})

    @app.middleware("http")
    async def admission_control(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Reject callers that exceed the request quota for the current window."""
        client_id = request.client.host if request.client else "unknown"
        decision = request.app.state.container.rate_limiter.check(client_id)
        if not decision.allowed:
            logger.warning("Rejected request from %s: %s", client_id, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"error": "too-many-requests"},
                headers={"Retry-After": str(decision.retry_after_seconds)},
            )
        return await call_next(request)

    app.include_router(catalog_router)
    app.include_router(proxy_router)

    @app.get("/api/health")
    async def health(request: Request) -> dict[str, object]:
        """Report liveness and whether an upstream key is configured."""
        state_container: AppContainer = request.app.state.container
        return {
            "ok": True,
            "uptime": time.monotonic() - started_at,
            "keyPresent": state_container.credential.present,
            "keyEnv": state_container.credential.source,
            "cacheEntries": len(state_container.cache),
        }

    @app.get("/api/api_key")
    async def api_key_check(request: Request) -> dict[str, object]:
        """Validate the proxy flow end to end with a one-item parks query."""
        state_container: AppContainer = request.app.state.container
        return await check_upstream(state_container.proxy_service)

    return app
