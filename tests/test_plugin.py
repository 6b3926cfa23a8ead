"""Tests for the host lifecycle hooks."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable
from unittest.mock import patch

import pytest

from docfind_site.config import PluginOptions
from docfind_site.errors import ConfigurationError, IndexerError
from docfind_site.plugin import DocfindPlugin


class TestDocfindPlugin:
    """Tests for DocfindPlugin."""

    def test_configuration_error_at_init(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            DocfindPlugin(PluginOptions(docs_dir=Path("missing")), root=tmp_path)

    def test_close_bundle_builds_into_index_dir(
        self, docs_dir: Path, make_indexer: Callable[..., str]
    ) -> None:
        plugin = DocfindPlugin(PluginOptions(indexer=make_indexer()), root=docs_dir.parent)

        documents = asyncio.run(plugin.close_bundle())

        index_dir = docs_dir.resolve() / ".vitepress" / "dist" / "docfind"
        assert len(documents) == 3
        assert (index_dir / "documents.json").exists()
        assert (index_dir / "docfind.js").exists()

    def test_close_bundle_runs_once(self, docs_dir: Path, make_indexer: Callable[..., str]) -> None:
        plugin = DocfindPlugin(PluginOptions(indexer=make_indexer()), root=docs_dir.parent)
        asyncio.run(plugin.close_bundle())

        with pytest.raises(RuntimeError):
            asyncio.run(plugin.close_bundle())

    def test_close_bundle_failure_propagates(
        self, docs_dir: Path, make_indexer: Callable[..., str]
    ) -> None:
        plugin = DocfindPlugin(
            PluginOptions(indexer=make_indexer("broken-docfind", 2)), root=docs_dir.parent
        )

        with pytest.raises(IndexerError, match="exited with code 2"):
            asyncio.run(plugin.close_bundle())

    def test_start_dev_runs_initial_build(
        self, docs_dir: Path, make_indexer: Callable[..., str]
    ) -> None:
        plugin = DocfindPlugin(PluginOptions(indexer=make_indexer()), root=docs_dir.parent)

        async def scenario() -> None:
            with patch.object(plugin.watcher, "start") as mock_start:
                await plugin.start_dev()
                mock_start.assert_called_once()
            await plugin.coordinator.wait_idle()
            plugin.stop_dev()

        asyncio.run(scenario())

        assert plugin.coordinator.builds_started == 1
        assert (plugin.options.dev_index_dir / "documents.json").exists()
        assert not (plugin.options.index_dir / "documents.json").exists()

    def test_dev_failure_does_not_raise(
        self, docs_dir: Path, make_indexer: Callable[..., str]
    ) -> None:
        plugin = DocfindPlugin(
            PluginOptions(indexer=make_indexer("broken-docfind", 1)), root=docs_dir.parent
        )

        async def scenario() -> None:
            with patch.object(plugin.watcher, "start"):
                await plugin.start_dev()
            await plugin.coordinator.wait_idle()

        asyncio.run(scenario())

        assert plugin.coordinator.building is False
