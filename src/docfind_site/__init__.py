"""Search corpus collection and incremental index builds for Markdown sites."""

from __future__ import annotations

__version__ = "0.1.0"
