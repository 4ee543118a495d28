"""Error types raised by proxy services."""


class ProxyError(Exception):
    """Base class for errors surfaced to the caller."""

    status_code = 500
    error = "proxy-error"


class ConfigurationError(ProxyError):
    """Raised when no upstream credential is configured."""

    status_code = 500
    error = "NPS_API_KEY not configured"


class UpstreamUnavailable(ProxyError):
    """Raised when the upstream API cannot be reached."""

    status_code = 502
    error = "upstream-failure"


class NotFoundError(ProxyError):
    """Raised when a local lookup has no matching record."""

    status_code = 404
    error = "Not found"


class InvalidUrlError(ProxyError):
    """Raised when the inbound path cannot form a valid upstream URL."""

    status_code = 400
    error = "invalid-url"
