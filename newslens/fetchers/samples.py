from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from ..models import Article, BiasVerdict

# Fixed timestamp so the fallback set is identical on every call
_SAMPLE_PUBLISHED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)


def sample_articles() -> List[Article]:
    """Example articles served when no upstream credential is configured."""
    return [
        Article(
            title="Sample: Climate Bill Passes Senate",
            description="A landmark bill passes.",
            source="Reuters",
            url="https://example.com/sample/climate-bill-passes-senate",
            published_at=_SAMPLE_PUBLISHED_AT,
            category="politics",
            bias=BiasVerdict(score=0.1, label="neutral", confidence=0.0),
        ),
        Article(
            title="Sample: Tech Giant Unveils New AI",
            description="The new AI system is here.",
            source="TechNews",
            url="https://example.com/sample/tech-giant-unveils-new-ai",
            published_at=_SAMPLE_PUBLISHED_AT,
            category="technology",
            bias=BiasVerdict(score=0.0, label="center", confidence=0.0),
        ),
    ]
