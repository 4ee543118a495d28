"""Self-check of the upstream proxy flow."""

import json
import logging

from nps_proxy.domain.errors import UpstreamUnavailable
from nps_proxy.domain.proxy import ProxyRequest
from nps_proxy.services.proxy import ProxyService

_logger = logging.getLogger(__name__)

_PROBE = ProxyRequest(method="GET", sub_path="parks", query=[("limit", "1")])


async def check_upstream(proxy_service: ProxyService) -> dict[str, object]:
    """Run a small parks query through the proxy and report the outcome."""
    if not proxy_service.credential.present:
        return {"ok": False, "reason": "no-key"}
    try:
        response = await proxy_service.handle(_PROBE)
    except UpstreamUnavailable as exc:
        _logger.warning("[diag] network-error: %s", exc)
        return {"ok": False, "reason": "network-error", "error": str(exc)}

    if not 200 <= response.status_code < 300:  # noqa: PLR2004
        _logger.info("[diag] upstream-error %s", response.status_code)
        return {
            "ok": False,
            "reason": "upstream-error",
            "status": response.status_code,
            "body": response.body.decode("utf-8", errors="replace"),
        }
    try:
        payload = json.loads(response.body)
    except ValueError as exc:
        return {"ok": False, "reason": "network-error", "error": str(exc)}
    data = payload.get("data") if isinstance(payload, dict) else None
    return {
        "ok": True,
        "provider": "nps",
        "results": len(data) if isinstance(data, list) else 0,
    }
