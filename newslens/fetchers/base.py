from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import Headline


class UpstreamError(Exception):
    """Transport, HTTP or quota failure reported by the headline source."""

    def __init__(
        self,
        message: str,
        *,
        category: Optional[str] = None,
        code: Optional[str] = None,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.code = code
        self.status = status


class HeadlineSource(ABC):
    """Abstract upstream headline provider."""

    @abstractmethod
    def fetch_top_headlines(self, category: str, page_size: int, country: str) -> List[Headline]:
        """Return raw headlines for one category, raising ``UpstreamError`` on failure."""
