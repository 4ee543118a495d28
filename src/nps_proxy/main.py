"""Command-line entrypoint that serves the proxy with uvicorn."""

import uvicorn

from nps_proxy.app_logging import configure_logging
from nps_proxy.config import Settings


def main() -> None:
    """Run the ASGI app on the configured host and port."""
    settings = Settings()
    configure_logging(settings.log_level)
    uvicorn.run("nps_proxy.api.asgi:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
