"""Tests for the development FastAPI application."""

from __future__ import annotations

from pathlib import Path
from typing import Callable
from unittest.mock import patch

from fastapi.testclient import TestClient

from docfind_site.config import PluginOptions
from docfind_site.plugin import DocfindPlugin
from docfind_site.web.app import create_app


def _plugin(docs_dir: Path, **kwargs: object) -> DocfindPlugin:
    return DocfindPlugin(PluginOptions(**kwargs), root=docs_dir.parent)


class TestCreateApp:
    """Tests for create_app."""

    def test_serves_site_and_assets(self, docs_dir: Path) -> None:
        plugin = _plugin(docs_dir)
        plugin.options.out_dir.mkdir(parents=True)
        (plugin.options.out_dir / "index.html").write_text("<html>site</html>")
        plugin.options.dev_index_dir.mkdir(parents=True)
        (plugin.options.dev_index_dir / "docfind.js").write_text("js")

        client = TestClient(create_app(plugin, watch=False))

        assert client.get("/").text == "<html>site</html>"
        response = client.get("/docfind/docfind.js")
        assert response.status_code == 200
        assert response.text == "js"

    def test_base_path(self, docs_dir: Path) -> None:
        plugin = _plugin(docs_dir, base="/kb/")
        plugin.options.out_dir.mkdir(parents=True)
        (plugin.options.out_dir / "index.html").write_text("<html>kb</html>")

        client = TestClient(create_app(plugin, watch=False))

        assert client.get("/kb/").text == "<html>kb</html>"
        assert client.get("/kb/docfind/docfind.js").status_code == 404

    def test_without_built_site(self, docs_dir: Path) -> None:
        client = TestClient(create_app(_plugin(docs_dir), watch=False))

        assert client.get("/").status_code == 404
        assert client.get("/docfind/docfind.js").status_code == 404

    def test_lifespan_starts_and_stops_dev(
        self, docs_dir: Path, make_indexer: Callable[..., str]
    ) -> None:
        plugin = _plugin(docs_dir, indexer=make_indexer())

        with patch.object(plugin, "start_dev") as mock_start, patch.object(
            plugin, "stop_dev"
        ) as mock_stop:
            with TestClient(create_app(plugin)):
                mock_start.assert_called_once()
            mock_stop.assert_called_once()
