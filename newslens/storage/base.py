from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from ..models import Article, BIAS_LABELS


class DuplicateArticleError(Exception):
    """Raised by ``insert`` when an article with the same URL is already stored."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Article already stored: {url}")
        self.url = url


@dataclass(slots=True)
class ArticleQuery:
    """Feed filters. ``None`` (or "all") disables a filter."""

    categories: Optional[Sequence[str]] = None
    bias: Optional[str] = None
    source: Optional[str] = None
    page: int = 1
    limit: int = 20


@dataclass(slots=True)
class ArticlePage:
    articles: List[Article] = field(default_factory=list)
    total: int = 0
    total_pages: int = 0
    current_page: int = 1


class ArticleRepository(ABC):
    """Persistence boundary for ingested articles; URL is the identity key."""

    @abstractmethod
    def find_by_url(self, url: str) -> Optional[Article]:
        """Return the stored article for ``url`` or ``None``."""

    @abstractmethod
    def insert(self, article: Article) -> Article:
        """Store a new article, raising ``DuplicateArticleError`` if its URL exists."""

    @abstractmethod
    def all_articles(self) -> List[Article]:
        """Snapshot of every stored article."""

    def count_all(self) -> int:
        return len(self.all_articles())

    def distinct_categories(self) -> Set[str]:
        return {a.category for a in self.all_articles() if a.category}

    def distinct_sources(self) -> Set[str]:
        return {a.source for a in self.all_articles() if a.source}

    def count_by_bias_label(self) -> Dict[str, int]:
        return dict(Counter(a.bias.label for a in self.all_articles()))

    def find_articles(self, query: ArticleQuery) -> ArticlePage:
        """Filtered, newest-first, 1-based page of stored articles."""
        matched = [a for a in self.all_articles() if _matches(a, query)]
        matched.sort(key=lambda a: a.published_at, reverse=True)

        limit = max(1, query.limit)
        page = max(1, query.page)
        start = (page - 1) * limit
        return ArticlePage(
            articles=matched[start : start + limit],
            total=len(matched),
            total_pages=math.ceil(len(matched) / limit),
            current_page=page,
        )


def _active(value: Optional[str]) -> bool:
    return bool(value) and value != "all"


def _matches(article: Article, query: ArticleQuery) -> bool:
    if query.categories:
        wanted = [c for c in query.categories if _active(c)]
        if wanted and article.category not in wanted:
            return False
    if _active(query.bias) and article.bias.label != query.bias:
        return False
    if _active(query.source) and query.source.lower() not in (article.source or "").lower():
        return False
    return True


def bias_stats(repository: ArticleRepository) -> Dict[str, int]:
    """Article count per bias label, with every label present."""
    counts = repository.count_by_bias_label()
    return {label: counts.get(label, 0) for label in BIAS_LABELS}
