from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Dict, List, Optional

from ..models import Article
from ..utils.logging import get_logger
from .base import ArticleRepository, DuplicateArticleError

logger = get_logger("nl.storage.json")


class JsonArticleRepository(ArticleRepository):
    """File-backed article store.

    The whole collection lives in one JSON document, rewritten after every
    insert. Good enough for a single process; not meant for large archives.
    """

    def __init__(self, store_path: Path | str = ".cache/articles.json") -> None:
        self.store_path = Path(store_path)
        self.store_path.parent.mkdir(parents=True, exist_ok=True)
        self._by_url: Dict[str, Article] = {}
        self._lock = threading.Lock()
        self._load()

    def _load(self) -> None:
        if not self.store_path.exists():
            return
        try:
            rows = json.loads(self.store_path.read_text(encoding="utf-8"))
            if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
                raise ValueError("expected a list of article objects")
            for row in rows:
                article = Article.from_dict(row)
                self._by_url[article.url] = article
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            # Corrupt or unexpected format; start fresh
            logger.warning("Ignoring unreadable article store %s: %s", self.store_path, exc)
            self._by_url = {}

    def _persist(self) -> None:
        rows = [a.to_dict() for a in self._by_url.values()]
        tmp_path = self.store_path.with_suffix(self.store_path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(rows, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self.store_path)

    def find_by_url(self, url: str) -> Optional[Article]:
        with self._lock:
            return self._by_url.get(url)

    def insert(self, article: Article) -> Article:
        with self._lock:
            if article.url in self._by_url:
                raise DuplicateArticleError(article.url)
            self._by_url[article.url] = article
            try:
                self._persist()
            except OSError:
                del self._by_url[article.url]
                raise
        return article

    def all_articles(self) -> List[Article]:
        with self._lock:
            return list(self._by_url.values())
