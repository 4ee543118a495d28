"""Static catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

if TYPE_CHECKING:
    from nps_proxy.containers import AppContainer

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/parks")
async def list_parks(request: Request) -> list[dict]:
    container: AppContainer = request.app.state.container
    return container.catalog_service.list_parks()


@router.get("/activities")
async def list_activities(request: Request) -> list[dict]:
    container: AppContainer = request.app.state.container
    return container.catalog_service.list_activities()


@router.get("/parks/{park_id}")
async def get_park(park_id: str, request: Request) -> dict:
    """Return one park by id."""
    container: AppContainer = request.app.state.container
    return container.catalog_service.get_park(park_id)
