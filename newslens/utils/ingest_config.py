from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_CATEGORIES = "technology,politics,business,entertainment,sports,health,science"
PLACEHOLDER_API_KEY = "your_newsapi_key_here"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes"}


def _csv(value: str) -> List[str]:
    return [c.strip().lower() for c in value.split(",") if c.strip()]


@dataclass(slots=True)
class IngestConfig:
    """Runtime settings for the ingestion core, defaulted from the environment."""

    api_key: str = field(default_factory=lambda: os.getenv("NEWS_API_KEY", ""))
    base_url: str = field(default_factory=lambda: os.getenv("NEWSAPI_BASE_URL", "https://newsapi.org/v2"))
    country: str = field(default_factory=lambda: os.getenv("NEWSAPI_COUNTRY", "us"))
    timeout: int = field(default_factory=lambda: int(os.getenv("NEWSAPI_TIMEOUT", "30")))
    interval_seconds: int = field(default_factory=lambda: int(os.getenv("FETCH_INTERVAL_SECONDS", "180")))
    target_total: int = field(default_factory=lambda: int(os.getenv("FETCH_TARGET_TOTAL", "70")))
    categories_csv: str = field(default_factory=lambda: os.getenv("FETCH_CATEGORIES", DEFAULT_CATEGORIES))
    max_workers: int = field(default_factory=lambda: int(os.getenv("FETCH_MAX_WORKERS", "8")))
    enable_scheduler: bool = field(default_factory=lambda: _env_bool("ENABLE_SCHEDULER", "true"))
    store: str = field(default_factory=lambda: os.getenv("ARTICLE_STORE", "memory").lower())
    store_path: str = field(default_factory=lambda: os.getenv("ARTICLE_STORE_PATH", ".cache/articles.json"))

    @property
    def categories(self) -> list[str]:
        return _csv(self.categories_csv)

    @property
    def has_credential(self) -> bool:
        return has_usable_credential(self.api_key)


def has_usable_credential(api_key: str | None) -> bool:
    """Blank keys and the sample-.env placeholder count as missing."""
    if not api_key or not api_key.strip():
        return False
    return api_key.strip() != PLACEHOLDER_API_KEY
