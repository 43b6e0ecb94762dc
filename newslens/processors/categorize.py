from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..models import CATEGORIES, GENERIC_CATEGORY

# Checked in this order; the first category with any substring hit wins. The
# order is a heuristic: "tech policy in Congress" resolves to technology.
CATEGORY_INDICATORS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("technology", ("tech", "ai", "software", "apple", "google", "microsoft", "startup", "crypto")),
    ("politics", ("politic", "election", "congress", "white house", "senate", "democrat", "republican")),
    ("business", ("business", "economy", "stocks", "market", "finance", "corporate", "wall street")),
    ("health", ("health", "medical", "fda", "covid", "disease", "hospital", "pandemic")),
    ("sports", ("sport", "nfl", "nba", "olympic", "soccer", "ufc", "mma", "game", "league")),
    ("entertainment", ("entertainment", "movie", "music", "hollywood", "celebrity", "film", "grammy")),
    ("science", ("science", "nasa", "space", "climate", "planet", "research", "discovery")),
)


def is_specific_category(category: Optional[str]) -> bool:
    return bool(category) and category != GENERIC_CATEGORY and category in CATEGORIES


def sniff_category(
    text: str,
    indicators: Sequence[Tuple[str, Sequence[str]]] = CATEGORY_INDICATORS,
) -> str:
    lowered = text.lower()
    for category, needles in indicators:
        if any(n in lowered for n in needles):
            return category
    return GENERIC_CATEGORY


def assign_category(
    title: Optional[str],
    description: Optional[str],
    context_category: Optional[str] = None,
) -> str:
    """Resolve the stored category for a fetched article.

    The category a headline was requested under is trusted as-is unless it is
    the generic placeholder; only then are title and description sniffed.
    """
    if is_specific_category(context_category):
        return context_category  # type: ignore[return-value]
    return sniff_category(f"{title or ''} {description or ''}")
