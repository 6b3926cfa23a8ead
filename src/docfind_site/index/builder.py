"""Manifest writing and external indexer invocation."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from docfind_site.config import MANIFEST_FILENAME, BuildOptions
from docfind_site.errors import IndexerError
from docfind_site.index.collector import collect_documents, documents_to_json
from docfind_site.models import Document

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class IndexerResult:
    """Outcome of one indexer run. ``exit_code`` is None when it never started."""

    exit_code: int | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def _write_manifest(documents: Sequence[Document], target_dir: Path) -> Path:
    target_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = target_dir / MANIFEST_FILENAME
    manifest_path.write_text(documents_to_json(documents), encoding="utf-8")
    return manifest_path


async def write_manifest(documents: Sequence[Document], target_dir: Path) -> Path:
    """Write ``documents.json`` into ``target_dir``, creating the directory."""
    return await asyncio.to_thread(_write_manifest, documents, target_dir)


async def run_indexer(tool: str, manifest_path: Path, target_dir: Path) -> IndexerResult:
    """Run ``<tool> <manifest> <target_dir>`` with the parent's stdio."""
    LOGGER.debug("Running %s %s %s", tool, manifest_path, target_dir)
    try:
        process = await asyncio.create_subprocess_exec(tool, str(manifest_path), str(target_dir))
    except OSError as exc:
        return IndexerResult(exit_code=None, error=str(exc))
    try:
        exit_code = await process.wait()
    except asyncio.CancelledError:
        if process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.terminate()
            await process.wait()
        raise
    return IndexerResult(exit_code=exit_code)


async def build_index(options: BuildOptions, target_dir: Path) -> List[Document]:
    """Collect the corpus, write the manifest and index it into ``target_dir``."""
    documents = await asyncio.to_thread(collect_documents, options)
    manifest_path = await write_manifest(documents, target_dir)
    result = await run_indexer(options.indexer, manifest_path, target_dir)
    if not result.ok:
        raise IndexerError(options.indexer, result.exit_code, result.error)
    return documents
