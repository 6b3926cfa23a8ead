"""Core docfind_site data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(slots=True, frozen=True)
class Document:
    """One searchable page of the site."""

    title: str
    href: str
    body: str
    category: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"title": self.title}
        if self.category is not None:
            payload["category"] = self.category
        payload["href"] = self.href
        payload["body"] = self.body
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Document":
        return cls(
            title=payload["title"],
            href=payload["href"],
            body=payload["body"],
            category=payload.get("category"),
        )
