"""Exception types raised while collecting and indexing documents."""

from __future__ import annotations

from pathlib import Path


class DocfindError(Exception):
    """Base class for all errors raised by docfind_site."""


class ConfigurationError(DocfindError):
    """Raised when plugin options cannot be resolved."""


class CollectionError(DocfindError):
    """Raised when a source file cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to collect {path}: {reason}")
        self.path = path
        self.reason = reason


class IndexerError(DocfindError):
    """Raised when the external indexer fails or cannot be launched."""

    def __init__(self, tool: str, exit_code: int | None, detail: str | None = None) -> None:
        if exit_code is None:
            message = f"Indexer '{tool}' could not be started"
        else:
            message = f"Indexer '{tool}' exited with code {exit_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.tool = tool
        self.exit_code = exit_code
