from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .tokenize import stem_tokens, tokenize

LEFT_KEYWORDS: Dict[str, int] = {
    "progressive": 2,
    "social justice": 3,
    "equity": 2,
    "climate action": 2,
    "universal healthcare": 3,
    "wealth tax": 3,
    "green new deal": 3,
    "systemic": 1,
    "privilege": 1,
    "diversity": 1,
    "inclusion": 1,
    "union": 1,
    "worker rights": 2,
    "medicare for all": 3,
    "defund": 3,
    "reform": 1,
}

RIGHT_KEYWORDS: Dict[str, int] = {
    "conservative": 2,
    "free market": 2,
    "tax cuts": 2,
    "border security": 3,
    "second amendment": 3,
    "pro-life": 3,
    "traditional values": 3,
    "small government": 3,
    "deregulation": 2,
    "patriotism": 2,
    "national security": 1,
    "fiscal responsibility": 2,
    "states rights": 2,
    "constitutional": 1,
}

NEUTRAL_INDICATORS: Tuple[str, ...] = (
    "report",
    "study",
    "research",
    "data",
    "according to",
    "analysis",
    "findings",
    "survey",
    "results",
    "evidence",
    "statistics",
)

Stems = Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class LexiconEntry:
    phrase: str
    stems: Stems
    weight: int = 1


@dataclass(frozen=True, slots=True)
class Lexicon:
    """Stemmed keyword tables, longest phrase first within each class."""

    left: Tuple[LexiconEntry, ...]
    right: Tuple[LexiconEntry, ...]
    neutral: Tuple[LexiconEntry, ...]

    @property
    def max_phrase_length(self) -> int:
        entries = self.left + self.right + self.neutral
        return max((len(e.stems) for e in entries), default=0)


def _stem_phrase(phrase: str) -> Stems:
    stems = tuple(stem_tokens(tokenize(phrase)))
    if not stems:
        raise ValueError(f"Lexicon phrase has no word tokens: {phrase!r}")
    return stems


def _build_entries(weighted: Iterable[Tuple[str, int]]) -> Tuple[LexiconEntry, ...]:
    entries = []
    for phrase, weight in weighted:
        if isinstance(weight, bool) or not isinstance(weight, int) or not 1 <= weight <= 3:
            raise ValueError(f"Weight for {phrase!r} must be an integer in 1..3, got {weight!r}")
        entries.append(LexiconEntry(phrase=phrase.lower(), stems=_stem_phrase(phrase), weight=weight))
    # Longest match first; sorted() is stable so table order breaks ties
    return tuple(sorted(entries, key=lambda e: -len(e.stems)))


def build_lexicon(
    left: Mapping[str, int] = LEFT_KEYWORDS,
    right: Mapping[str, int] = RIGHT_KEYWORDS,
    neutral: Iterable[str] = NEUTRAL_INDICATORS,
) -> Lexicon:
    return Lexicon(
        left=_build_entries(left.items()),
        right=_build_entries(right.items()),
        neutral=_build_entries((phrase, 1) for phrase in neutral),
    )


_default: Optional[Lexicon] = None


def default_lexicon() -> Lexicon:
    global _default
    if _default is None:
        _default = build_lexicon()
    return _default
