from __future__ import annotations

import threading
from typing import Dict, List, Optional

from ..models import Article
from .base import ArticleRepository, DuplicateArticleError


class InMemoryArticleRepository(ArticleRepository):
    """Process-local store; the lock makes insert-if-absent atomic."""

    def __init__(self) -> None:
        self._by_url: Dict[str, Article] = {}
        self._lock = threading.Lock()

    def find_by_url(self, url: str) -> Optional[Article]:
        with self._lock:
            return self._by_url.get(url)

    def insert(self, article: Article) -> Article:
        with self._lock:
            if article.url in self._by_url:
                raise DuplicateArticleError(article.url)
            self._by_url[article.url] = article
        return article

    def all_articles(self) -> List[Article]:
        with self._lock:
            return list(self._by_url.values())
