"""Tests for the HTTP grid endpoint."""

import copy
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from readme_icons import __version__
from readme_icons.config import DEFAULT_CONFIG
from readme_icons.server import create_app

NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(copy.deepcopy(DEFAULT_CONFIG)))


class TestIconsEndpoint:
    def test_renders_svg(self, client: TestClient) -> None:
        resp = client.get("/api/icons", params={"i": "python,react"})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("image/svg+xml")
        root = ET.fromstring(resp.text)
        assert len(root.findall(f"{NS}g")) == 2

    def test_cache_header(self, client: TestClient) -> None:
        resp = client.get("/api/icons", params={"i": "python"})
        assert resp.headers["cache-control"] == DEFAULT_CONFIG["server"]["cache_control"]

    def test_missing_param(self, client: TestClient) -> None:
        resp = client.get("/api/icons")
        assert resp.status_code == 400
        assert resp.text == 'Missing "i" parameter'

    def test_empty_param(self, client: TestClient) -> None:
        assert client.get("/api/icons?i=").status_code == 400

    def test_unknown_icons(self, client: TestClient) -> None:
        resp = client.get("/api/icons", params={"i": "not-a-real-icon"})
        assert resp.status_code == 404
        assert resp.text == "No valid icons found"

    def test_bad_numbers_fall_back(self, client: TestClient) -> None:
        resp = client.get("/api/icons", params={"i": "python", "size": "abc", "perline": "x"})
        assert resp.status_code == 200
        assert ET.fromstring(resp.text).get("width") == "48"

    def test_size_clamped(self, client: TestClient) -> None:
        resp = client.get("/api/icons", params={"i": "python", "size": "9999"})
        assert ET.fromstring(resp.text).get("width") == "128"

    def test_oversized_numbers_clamp(self, client: TestClient) -> None:
        resp = client.get("/api/icons", params={"i": "python", "size": "9" * 5000, "perline": "9" * 5000})
        assert resp.status_code == 200
        assert ET.fromstring(resp.text).get("width") == "128"

    def test_light_theme(self, client: TestClient) -> None:
        resp = client.get("/api/icons", params={"i": "python", "t": "light"})
        rect = ET.fromstring(resp.text).find(f"{NS}g/{NS}rect")
        assert rect.get("fill") == "white"

    def test_same_query_same_bytes(self, client: TestClient) -> None:
        params = {"i": "python,go,docker,rust", "perline": "3", "size": "40"}
        assert client.get("/api/icons", params=params).content == client.get("/api/icons", params=params).content


class TestAppSetup:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.json() == {"status": "ok", "version": __version__}

    def test_custom_catalog_and_cache_control(self, tmp_path: Path) -> None:
        catalog = tmp_path / "mine.yaml"
        catalog.write_text(
            "icons:\n  - slug: widget\n    title: Widget\n    hex: '123456'\n    path: M0 0h24v24H0z\n",
            encoding="utf-8",
        )
        config = copy.deepcopy(DEFAULT_CONFIG)
        config["catalog"]["path"] = str(catalog)
        config["server"]["cache_control"] = "no-cache"
        client = TestClient(create_app(config))

        resp = client.get("/api/icons", params={"i": "widget"})
        assert resp.status_code == 200
        assert resp.headers["cache-control"] == "no-cache"
        assert client.get("/api/icons", params={"i": "python"}).status_code == 404
