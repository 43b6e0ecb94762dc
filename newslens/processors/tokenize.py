"""Word tokenization and Porter stemming for keyword matching."""

from __future__ import annotations

import re
from collections import Counter
from functools import lru_cache
from typing import Iterable, List

from nltk.stem import PorterStemmer

_word_re = re.compile(r"\w+")
_stemmer = PorterStemmer()

# Tokens at or below this length still take part in lexicon matching, but are
# never reported as significant keywords.
MIN_TOKEN_LENGTH = 3

STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "as", "is", "are", "was", "were", "be",
        "been", "it", "its", "this", "that", "these", "those", "has", "have",
        "had", "not", "no", "so", "if", "than", "then", "into", "about",
    }
)


def tokenize(text: str | None) -> List[str]:
    """Split text into lowercase word tokens. Blank input yields ``[]``."""
    if not text:
        return []
    return _word_re.findall(text.lower())


@lru_cache(maxsize=20000)
def stem(token: str) -> str:
    return _stemmer.stem(token)


def stem_tokens(tokens: Iterable[str]) -> List[str]:
    return [stem(t) for t in tokens]


def is_stop_word(token: str) -> bool:
    return token in STOP_WORDS


def is_significant(token: str) -> bool:
    return len(token) >= MIN_TOKEN_LENGTH and not is_stop_word(token)


def significant_keywords(stems: Iterable[str], *, limit: int = 10) -> List[str]:
    """Most frequent significant stems, ties broken by first appearance."""
    counts = Counter(s for s in stems if is_significant(s))
    # Counter preserves insertion order and most_common() is a stable sort
    return [word for word, _ in counts.most_common(limit)]
