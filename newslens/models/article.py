from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional, Tuple

BiasLabel = Literal["left", "center", "right", "neutral"]

BIAS_LABELS: Tuple[BiasLabel, ...] = ("left", "center", "right", "neutral")

# Persisted category values. "general" doubles as the generic placeholder
# an upstream request may carry.
CATEGORIES: Tuple[str, ...] = (
    "general",
    "technology",
    "politics",
    "business",
    "entertainment",
    "sports",
    "health",
    "science",
)
GENERIC_CATEGORY = "general"


@dataclass(frozen=True, slots=True)
class BiasVerdict:
    """Keyword-weight verdict attached to an article at ingestion time."""

    score: float = 0.0
    label: BiasLabel = "center"
    confidence: float = 0.0
    keywords: Tuple[str, ...] = ()

    # Raw tallies behind the verdict; useful for explaining a label, not persisted.
    left_weight: int = field(default=0, compare=False)
    right_weight: int = field(default=0, compare=False)
    neutral_hits: int = field(default=0, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "label": self.label,
            "confidence": self.confidence,
            "keywords": list(self.keywords),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BiasVerdict":
        label = data.get("label") or "neutral"
        if label not in BIAS_LABELS:
            raise ValueError(f"Unknown bias label: {label!r}")
        return cls(
            score=float(data.get("score") or 0.0),
            label=label,
            confidence=float(data.get("confidence") or 0.0),
            keywords=tuple(str(k) for k in (data.get("keywords") or [])),
        )


@dataclass(slots=True)
class Article:
    title: str
    url: str
    source: str
    description: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    published_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    category: str = GENERIC_CATEGORY
    bias: BiasVerdict = field(default_factory=BiasVerdict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "source": self.source,
            "description": self.description,
            "content": self.content,
            "imageUrl": self.image_url,
            "publishedAt": self.published_at.isoformat(),
            "category": self.category,
            "bias": self.bias.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Article":
        published_raw = data.get("publishedAt")
        published_at = (
            datetime.fromisoformat(published_raw) if published_raw else datetime.now(timezone.utc)
        )
        category = data.get("category") or GENERIC_CATEGORY
        if category not in CATEGORIES:
            raise ValueError(f"Unknown category: {category!r}")
        return cls(
            title=data["title"],
            url=data["url"],
            source=data.get("source") or "Unknown",
            description=data.get("description"),
            content=data.get("content"),
            image_url=data.get("imageUrl"),
            published_at=published_at,
            category=category,
            bias=BiasVerdict.from_dict(data.get("bias") or {}),
        )
