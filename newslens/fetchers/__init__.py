"""Upstream headline sources."""

from .base import HeadlineSource, UpstreamError
from .newsapi import NewsAPIClient
from .samples import sample_articles

__all__ = ["HeadlineSource", "UpstreamError", "NewsAPIClient", "sample_articles"]
