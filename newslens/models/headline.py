from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(slots=True)
class Headline:
    """A raw item as returned by the upstream headline source."""

    title: Optional[str]
    url: Optional[str]
    description: Optional[str] = None
    content: Optional[str] = None
    source_name: Optional[str] = None
    url_to_image: Optional[str] = None
    published_at: Optional[str] = None

    @classmethod
    def from_newsapi(cls, item: Dict[str, Any]) -> "Headline":
        source = item.get("source") or {}
        return cls(
            title=item.get("title"),
            url=item.get("url"),
            description=item.get("description"),
            content=item.get("content"),
            source_name=source.get("name") if isinstance(source, dict) else None,
            url_to_image=item.get("urlToImage"),
            published_at=item.get("publishedAt"),
        )


@dataclass(frozen=True, slots=True)
class FetchContext:
    """A fetched headline paired with the category it was requested under."""

    headline: Headline
    category: str
