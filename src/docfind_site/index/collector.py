"""Corpus collection over the docs tree."""

from __future__ import annotations

import json
import logging
from typing import List, Sequence

from docfind_site.config import BuildOptions
from docfind_site.ingestion.markdown_loader import load_document
from docfind_site.models import Document
from docfind_site.utils.files import iter_markdown_paths
from docfind_site.utils.urls import file_to_href

LOGGER = logging.getLogger(__name__)


def collect_documents(options: BuildOptions) -> List[Document]:
    """Collect every searchable document under ``options.docs_dir``.

    The corpus keeps glob enumeration order. Any unreadable or malformed file
    aborts the whole collection with a :class:`CollectionError`.
    """
    documents: List[Document] = []
    skipped = 0
    for path, relative in iter_markdown_paths(options.docs_dir, options.include, options.exclude):
        href = file_to_href(relative, options.base, options.clean_urls)
        document = load_document(path, href, default_category=options.default_category)
        if document is None:
            skipped += 1
            continue
        documents.append(document)

    LOGGER.debug("Collected %d documents (%d opted out)", len(documents), skipped)
    return documents


def documents_to_json(documents: Sequence[Document]) -> str:
    """Serialize the corpus as the pretty-printed manifest array."""
    return json.dumps([doc.to_dict() for doc in documents], indent=2, ensure_ascii=False)


def documents_from_json(text: str) -> List[Document]:
    payload = json.loads(text)
    if not isinstance(payload, list):
        raise ValueError("Manifest must contain a JSON array")
    return [Document.from_dict(item) for item in payload]
