"""Client for the NewsAPI ``top-headlines`` endpoint."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from ..models import Headline
from ..utils.logging import get_logger
from .base import HeadlineSource, UpstreamError
from .retry import with_retries

logger = get_logger("nl.fetchers.newsapi")

DEFAULT_BASE_URL = "https://newsapi.org/v2"
# NewsAPI replaces takedowns with this title and a dead URL
REMOVED_TITLE = "[Removed]"
# Quota and auth failures will not heal within a retry window
_PERMANENT_CODES = {"apiKeyInvalid", "apiKeyDisabled", "apiKeyMissing", "apiKeyExhausted", "rateLimited"}

_DEFAULT_HEADERS: Dict[str, str] = {"User-Agent": "newslens/0.1 (+https://newsapi.org)"}


class _PermanentUpstreamError(UpstreamError):
    pass


class NewsAPIClient(HeadlineSource):
    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = session or requests

    def _get(self, category: str, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/top-headlines"
        try:
            resp = self._http.get(url, params=params, headers=_DEFAULT_HEADERS, timeout=self.timeout)
        except requests.RequestException as exc:
            raise UpstreamError(f"Request error for category {category}: {exc}", category=category) from exc

        try:
            data = resp.json()
        except ValueError:
            data = {}

        if resp.status_code >= 400 or data.get("status") == "error":
            code = data.get("code")
            message = data.get("message") or f"HTTP {resp.status_code}"
            err_cls = _PermanentUpstreamError if code in _PERMANENT_CODES else UpstreamError
            raise err_cls(
                f"NewsAPI error for category {category}: {message}",
                category=category,
                code=code,
                status=resp.status_code,
            )
        return data

    def fetch_top_headlines(self, category: str, page_size: int, country: str = "us") -> List[Headline]:
        params = {
            "category": category,
            "pageSize": page_size,
            "country": country,
            "apiKey": self.api_key,
        }
        logger.debug("Fetching top headlines category=%s pageSize=%s country=%s", category, page_size, country)
        data = with_retries(
            lambda: self._get(category, params),
            retry_on=(UpstreamError,),
            give_up_on=(_PermanentUpstreamError,),
        )

        items: List[Headline] = []
        for raw in data.get("articles") or []:
            if not isinstance(raw, dict):
                continue
            headline = Headline.from_newsapi(raw)
            if not headline.url or headline.title == REMOVED_TITLE:
                continue
            items.append(headline)

        logger.info("Fetched %d headlines for category %s", len(items), category)
        return items
