"""Tests for container wiring."""

import asyncio
import json

import pytest

from nps_proxy.containers import build_container


@pytest.fixture
def data_settings(settings, tmp_path):
    (tmp_path / "parks.json").write_text(json.dumps([{"id": "yose"}]))
    (tmp_path / "activities.json").write_text(json.dumps([{"id": "hiking"}]))
    return settings.model_copy(update={"data_dir": str(tmp_path)})


def test_build_container_resolves_credential(data_settings) -> None:
    container = build_container(data_settings, environ={"API_KEY": "abc"})

    assert container.credential.value == "abc"
    assert container.credential.source == "API_KEY"
    assert container.proxy_service.cache is container.cache
    assert container.proxy_service.ttl_seconds == 300
    assert container.catalog_service.list_parks() == [{"id": "yose"}]
    assert container.catalog_service.list_activities() == [{"id": "hiking"}]
    asyncio.run(container.close_resources())


def test_build_container_without_credential(data_settings) -> None:
    container = build_container(data_settings, environ={})

    assert not container.credential.present
    assert not container.proxy_service.credential.present
    asyncio.run(container.close_resources())
