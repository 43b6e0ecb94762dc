"""Keyword-weight political bias classification.

The classifier is a deterministic heuristic, not a model: every verdict can be
traced back to the lexicon phrases it matched. Scores run from -1 (left) to
+1 (right) and are the normalized difference of the weighted left and right
matches. Neutral indicators ("study", "according to", ...) never move the
score; they only reclassify a low-signal ``center`` verdict as ``neutral``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from ..models import Article, BiasLabel, BiasVerdict
from ..utils.logging import get_logger
from .lexicon import Lexicon, LexiconEntry, default_lexicon
from .tokenize import stem_tokens, tokenize

logger = get_logger("nl.processors.bias")

LOW_SIGNAL_MATCHES = 3
STRONG_THRESHOLD = 0.6
LEANING_THRESHOLD = 0.15
MAX_KEYWORDS = 5


class Leaning(Enum):
    LEFT = "left"
    LEANING_LEFT = "leaning-left"
    CENTER = "center"
    LEANING_RIGHT = "leaning-right"
    RIGHT = "right"
    NEUTRAL = "neutral"

    @property
    def label(self) -> BiasLabel:
        return _PERSISTED_LABELS[self]


_PERSISTED_LABELS: Dict[Leaning, BiasLabel] = {
    Leaning.LEFT: "left",
    Leaning.LEANING_LEFT: "left",
    Leaning.CENTER: "center",
    Leaning.LEANING_RIGHT: "right",
    Leaning.RIGHT: "right",
    Leaning.NEUTRAL: "neutral",
}


@dataclass(slots=True)
class MatchTally:
    left: int = 0
    right: int = 0
    neutral: int = 0
    matches: List[str] = field(default_factory=list)

    @property
    def total_bias(self) -> int:
        return self.left + self.right


def _match_at(entries: Sequence[LexiconEntry], window: tuple) -> Optional[LexiconEntry]:
    for entry in entries:
        if window[: len(entry.stems)] == entry.stems:
            return entry
    return None


def tally_matches(tokens: Sequence[str], lexicon: Lexicon) -> MatchTally:
    """Scan stemmed tokens against the lexicon, left before right before neutral.

    A matched phrase consumes its tokens, so one token never counts twice.
    """
    stems = stem_tokens(tokens)
    sides = (("left", lexicon.left), ("right", lexicon.right), ("neutral", lexicon.neutral))
    span = lexicon.max_phrase_length
    tally = MatchTally()
    pos = 0
    while pos < len(stems):
        entry = None
        window = tuple(stems[pos : pos + span])
        for side, entries in sides:
            entry = _match_at(entries, window)
            if entry is not None:
                break
        if entry is None:
            pos += 1
            continue

        width = len(entry.stems)
        if side == "neutral":
            tally.neutral += 1
        else:
            if side == "left":
                tally.left += entry.weight
            else:
                tally.right += entry.weight
            tally.matches.append(" ".join(tokens[pos : pos + width]))
        pos += width
    return tally


def resolve_leaning(bias_score: float, total_bias: int) -> tuple[Leaning, float]:
    """Threshold a score into a fine-grained leaning and its confidence."""
    if total_bias < LOW_SIGNAL_MATCHES:
        return Leaning.CENTER, (total_bias / LOW_SIGNAL_MATCHES) * 0.5
    magnitude = abs(bias_score)
    if bias_score < -STRONG_THRESHOLD:
        return Leaning.LEFT, magnitude
    if bias_score < -LEANING_THRESHOLD:
        return Leaning.LEANING_LEFT, magnitude
    if bias_score > STRONG_THRESHOLD:
        return Leaning.RIGHT, magnitude
    if bias_score > LEANING_THRESHOLD:
        return Leaning.LEANING_RIGHT, magnitude
    return Leaning.CENTER, 1.0 - (magnitude / LEANING_THRESHOLD)


def _dedupe(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


def classify_text(text: str | None, *, lexicon: Optional[Lexicon] = None) -> BiasVerdict:
    tokens = tokenize(text)
    if not tokens:
        return BiasVerdict(score=0.0, label="center", confidence=0.0, keywords=())

    tally = tally_matches(tokens, lexicon or default_lexicon())
    total = tally.total_bias
    bias_score = (tally.right - tally.left) / total if total > 0 else 0.0

    leaning, confidence = resolve_leaning(bias_score, total)
    if leaning.label == "center" and tally.neutral > total:
        leaning = Leaning.NEUTRAL
        confidence = min(1.0, tally.neutral / (total + 1))

    confidence = max(0.0, min(1.0, confidence))
    bias_score = max(-1.0, min(1.0, bias_score))
    keywords = tuple(_dedupe(tally.matches)[:MAX_KEYWORDS])

    logger.debug(
        "Bias tally left=%d right=%d neutral=%d -> %s (%.2f)",
        tally.left,
        tally.right,
        tally.neutral,
        leaning.value,
        bias_score,
    )
    return BiasVerdict(
        score=round(bias_score, 2),
        label=leaning.label,
        confidence=round(confidence, 2),
        keywords=keywords,
        left_weight=tally.left,
        right_weight=tally.right,
        neutral_hits=tally.neutral,
    )


def classify_article(
    title: str | None,
    description: str | None = None,
    content: str | None = None,
    *,
    lexicon: Optional[Lexicon] = None,
) -> BiasVerdict:
    """Classify the concatenated title, description and content of one article."""
    text = f"{title or ''} {description or ''} {content or ''}".lower()
    return classify_text(text, lexicon=lexicon)


def compare_articles(articles: Iterable[Article], *, lexicon: Optional[Lexicon] = None) -> List[dict]:
    """Classify several articles (typically one story from different outlets)."""
    rows = []
    for art in articles:
        verdict = classify_article(art.title, art.description, art.content, lexicon=lexicon)
        rows.append({"source": art.source, "title": art.title, "bias": verdict.to_dict()})
    return rows
