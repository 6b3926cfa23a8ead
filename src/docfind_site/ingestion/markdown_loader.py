"""Markdown loading and front-matter extraction.

Uses python-frontmatter to split the YAML header from the page body.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Mapping

import frontmatter
import yaml

from docfind_site.errors import CollectionError
from docfind_site.models import Document

LOGGER = logging.getLogger(__name__)

UNTITLED = "Untitled"

_H1_LINE = re.compile(r"^#[ \t]+(\S.*?)[ \t]*$", re.MULTILINE)


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Return the metadata mapping and the remaining body of a Markdown file."""
    post = frontmatter.loads(text)
    return dict(post.metadata), post.content


def infer_title(metadata: Mapping[str, Any], body: str) -> str:
    title = metadata.get("title")
    if isinstance(title, str) and title.strip():
        return title
    match = _H1_LINE.search(body)
    if match:
        return match.group(1)
    return UNTITLED


def infer_category(metadata: Mapping[str, Any], default: str | None = None) -> str | None:
    category = metadata.get("category")
    if isinstance(category, str):
        return category
    return default


def is_searchable(metadata: Mapping[str, Any]) -> bool:
    """Pages opt out of the index with ``search: false`` in their front-matter."""
    return metadata.get("search") is not False


def extract_document(
    path: Path,
    text: str,
    href: str,
    *,
    default_category: str | None = None,
) -> Document | None:
    """Build a :class:`Document` from Markdown text, or ``None`` when excluded."""
    try:
        metadata, body = split_front_matter(text)
    except (yaml.YAMLError, ValueError, TypeError) as exc:
        raise CollectionError(path, f"invalid front-matter ({exc})") from exc

    if not is_searchable(metadata):
        LOGGER.debug("Skipping %s (search: false)", path)
        return None

    body = body.strip()
    return Document(
        title=infer_title(metadata, body),
        href=href,
        body=body,
        category=infer_category(metadata, default_category),
    )


def load_document(
    path: Path,
    href: str,
    *,
    default_category: str | None = None,
) -> Document | None:
    """Read a Markdown file as UTF-8 and extract its document."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CollectionError(path, str(exc)) from exc
    return extract_document(path, text, href, default_category=default_category)
