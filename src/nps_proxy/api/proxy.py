"""Generic upstream proxy endpoint."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from urllib.parse import quote

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from nps_proxy.domain.proxy import ProxyRequest

if TYPE_CHECKING:
    from nps_proxy.containers import AppContainer

router = APIRouter(prefix="/api/nps", tags=["proxy"])

_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@router.api_route("", methods=_METHODS)
@router.api_route("/{sub_path:path}", methods=_METHODS)
async def proxy(request: Request) -> Response:
    """Forward the request upstream, serving cached JSON for repeat GETs."""
    container: AppContainer = request.app.state.container
    sub_path = _encoded_sub_path(request)
    body: object | None = None
    if request.method != "GET":
        raw = await request.body()
        if raw:
            try:
                body = json.loads(raw)
            except ValueError:
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content={"error": "invalid-json"},
                )
    result = await container.proxy_service.handle(
        ProxyRequest(
            method=request.method,
            sub_path=sub_path,
            query=list(request.query_params.multi_items()),
            body=body,
        )
    )
    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=result.headers,
    )


def _encoded_sub_path(request: Request) -> str:
    """Return the path after the mount point as the caller sent it, still encoded."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.split(b"?", 1)[0].decode("latin-1")
        if path == router.prefix or path.startswith(f"{router.prefix}/"):
            return path[len(router.prefix) :]
    return quote(request.path_params.get("sub_path", ""), safe="/")
