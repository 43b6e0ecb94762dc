"""Article persistence."""

from __future__ import annotations

from pathlib import Path

from .base import ArticlePage, ArticleQuery, ArticleRepository, DuplicateArticleError, bias_stats
from .json_store import JsonArticleRepository
from .memory import InMemoryArticleRepository


def create_repository(kind: str = "memory", path: Path | str = ".cache/articles.json") -> ArticleRepository:
    """Create a repository by name: "memory" (default) or "json"."""
    selected = kind.lower()
    if selected == "memory":
        return InMemoryArticleRepository()
    if selected == "json":
        return JsonArticleRepository(path)
    raise ValueError(f"Unsupported article store '{kind}'. Use 'memory' or 'json'.")


__all__ = [
    "ArticlePage",
    "ArticleQuery",
    "ArticleRepository",
    "DuplicateArticleError",
    "InMemoryArticleRepository",
    "JsonArticleRepository",
    "bias_stats",
    "create_repository",
]
