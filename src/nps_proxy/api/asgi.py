"""ASGI entrypoint for the proxy API."""

from nps_proxy.api.app import create_app
from nps_proxy.containers import build_container

app = create_app(build_container())
