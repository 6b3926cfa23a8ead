"""Plugin options and their resolved form."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel

from docfind_site.errors import ConfigurationError
from docfind_site.utils.urls import resolve_base

DEFAULT_DOCS_DIR = Path("docs")
DEFAULT_INCLUDE = ("**/*.md",)
DEFAULT_EXCLUDE = ("**/node_modules/**", "**/.vitepress/**")
DEFAULT_INDEXER = "docfind"
MANIFEST_FILENAME = "documents.json"
MOUNT_SEGMENT = "docfind"


class PluginOptions(BaseModel):
    """User supplied options, every field optional."""

    docs_dir: Optional[Path] = None
    out_dir: Optional[Path] = None
    index_dir: Optional[Path] = None
    dev_index_dir: Optional[Path] = None
    base: Optional[str] = None
    clean_urls: Optional[bool] = None
    include: Optional[List[str]] = None
    exclude: Optional[List[str]] = None
    indexer: Optional[str] = None
    default_category: Optional[str] = None


@dataclass(slots=True, frozen=True)
class BuildOptions:
    """Fully resolved configuration, fixed for the lifetime of a plugin instance."""

    docs_dir: Path
    out_dir: Path
    index_dir: Path
    dev_index_dir: Path
    base: str
    clean_urls: bool
    include: tuple[str, ...]
    exclude: tuple[str, ...]
    indexer: str = DEFAULT_INDEXER
    default_category: str | None = None

    @property
    def mount_prefix(self) -> str:
        """URL prefix under which dev index artifacts are served."""
        return f"{self.base}/{MOUNT_SEGMENT}/"


def _absolute(path: Path, base_dir: Path) -> Path:
    path = path.expanduser()
    if path.is_absolute():
        return path
    return base_dir / path


def resolve_options(options: PluginOptions | None = None, root: Path | None = None) -> BuildOptions:
    """Merge user options with defaults, anchoring relative paths at ``root``."""
    options = options or PluginOptions()
    root = (root or Path.cwd()).resolve()

    docs_dir = _absolute(options.docs_dir or DEFAULT_DOCS_DIR, root).resolve()
    if not docs_dir.exists():
        raise ConfigurationError(f"Source directory not found: {docs_dir}")
    if not docs_dir.is_dir():
        raise ConfigurationError(f"Source path is not a directory: {docs_dir}")

    out_dir = (
        _absolute(options.out_dir, root).resolve()
        if options.out_dir is not None
        else docs_dir / ".vitepress" / "dist"
    )
    index_dir = (
        _absolute(options.index_dir, root).resolve()
        if options.index_dir is not None
        else out_dir / MOUNT_SEGMENT
    )
    dev_index_dir = (
        _absolute(options.dev_index_dir, root).resolve()
        if options.dev_index_dir is not None
        else docs_dir / ".vitepress" / "cache" / MOUNT_SEGMENT
    )

    include = tuple(options.include) if options.include is not None else DEFAULT_INCLUDE
    if not include:
        raise ConfigurationError("At least one include pattern is required")
    exclude = tuple(options.exclude) if options.exclude is not None else DEFAULT_EXCLUDE

    return BuildOptions(
        docs_dir=docs_dir,
        out_dir=out_dir,
        index_dir=index_dir,
        dev_index_dir=dev_index_dir,
        base=resolve_base(options.base),
        clean_urls=True if options.clean_urls is None else options.clean_urls,
        include=include,
        exclude=exclude,
        indexer=options.indexer or DEFAULT_INDEXER,
        default_category=options.default_category,
    )
