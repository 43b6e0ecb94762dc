"""Typed models used across the application."""

from .article import (
    Article,
    BiasVerdict,
    BiasLabel,
    BIAS_LABELS,
    CATEGORIES,
    GENERIC_CATEGORY,
)
from .headline import Headline, FetchContext

__all__ = [
    "Article",
    "BiasVerdict",
    "BiasLabel",
    "BIAS_LABELS",
    "CATEGORIES",
    "GENERIC_CATEGORY",
    "Headline",
    "FetchContext",
]
