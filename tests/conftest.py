from __future__ import annotations

from typing import Dict, List, Optional

import pytest

from newslens.fetchers import HeadlineSource, UpstreamError
from newslens.models import Headline
from newslens.storage import InMemoryArticleRepository


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    # No real credentials or retry sleeps leak into tests
    monkeypatch.delenv("NEWS_API_KEY", raising=False)
    monkeypatch.setenv("NEWSAPI_RETRIES", "0")
    monkeypatch.setenv("NEWSAPI_BACKOFF", "0")


def make_headline(url: str, title: str = "Quarterly update", **kwargs) -> Headline:
    kwargs.setdefault("source_name", "Wire")
    kwargs.setdefault("published_at", "2024-05-01T12:00:00Z")
    return Headline(title=title, url=url, **kwargs)


class FakeHeadlineSource(HeadlineSource):
    """Serves canned headlines per category; listed categories raise instead."""

    def __init__(
        self,
        by_category: Optional[Dict[str, List[Headline]]] = None,
        failing: tuple = (),
    ) -> None:
        self.by_category = by_category or {}
        self.failing = set(failing)
        self.calls: List[tuple] = []

    def fetch_top_headlines(self, category: str, page_size: int, country: str = "us") -> List[Headline]:
        self.calls.append((category, page_size, country))
        if category in self.failing:
            raise UpstreamError(f"quota exceeded for {category}", category=category, code="rateLimited")
        return list(self.by_category.get(category, []))


@pytest.fixture
def repository():
    return InMemoryArticleRepository()
