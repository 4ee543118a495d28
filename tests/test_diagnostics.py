"""Tests for health and upstream diagnostics."""

import asyncio

from fastapi.testclient import TestClient

from nps_proxy.api.app import create_app
from nps_proxy.domain.errors import UpstreamUnavailable
from nps_proxy.domain.proxy import Credential, UpstreamResponse
from nps_proxy.services.diagnostics import check_upstream


def test_check_reports_result_count(proxy_service) -> None:
    result = asyncio.run(check_upstream(proxy_service))

    assert result == {"ok": True, "provider": "nps", "results": 1}


def test_check_without_key_skips_upstream(proxy_service, upstream_client) -> None:
    proxy_service.credential = Credential(value=None, source=None)

    result = asyncio.run(check_upstream(proxy_service))

    assert result == {"ok": False, "reason": "no-key"}
    assert upstream_client.calls == []


def test_check_reports_upstream_error_status(proxy_service, upstream_client) -> None:
    upstream_client.response = UpstreamResponse(
        status_code=403,
        headers={"content-type": "application/json"},
        body=b'{"error": "API_KEY_INVALID"}',
    )

    result = asyncio.run(check_upstream(proxy_service))

    assert result == {
        "ok": False,
        "reason": "upstream-error",
        "status": 403,
        "body": '{"error": "API_KEY_INVALID"}',
    }


def test_check_reports_network_error(proxy_service, upstream_client) -> None:
    upstream_client.error = UpstreamUnavailable("connection refused")

    result = asyncio.run(check_upstream(proxy_service))

    assert result["ok"] is False
    assert result["reason"] == "network-error"
    assert "connection refused" in result["error"]


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))
    client.get("/api/nps/parks")

    response = client.get("/api/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is True
    assert payload["keyPresent"] is True
    assert payload["keyEnv"] == "NPS_API_KEY"
    assert payload["cacheEntries"] == 1
    assert payload["uptime"] >= 0


def test_api_key_endpoint_uses_proxy_flow(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/api/api_key")

    assert response.status_code == 200
    assert response.json()["ok"] is True
    assert len(container.upstream_client.calls) == 1
