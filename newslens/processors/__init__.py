"""Processing steps: normalization, tokenization, bias classification, categorization."""

from .normalize import clean_html_to_text, normalize_plain_text, clean_field, parse_published_at
from .tokenize import tokenize, stem, stem_tokens, is_stop_word, is_significant, significant_keywords
from .lexicon import Lexicon, LexiconEntry, build_lexicon, default_lexicon
from .bias import Leaning, classify_text, classify_article, compare_articles
from .categorize import CATEGORY_INDICATORS, assign_category, sniff_category

__all__ = [
    "clean_html_to_text",
    "normalize_plain_text",
    "clean_field",
    "parse_published_at",
    "tokenize",
    "stem",
    "stem_tokens",
    "is_stop_word",
    "is_significant",
    "significant_keywords",
    "Lexicon",
    "LexiconEntry",
    "build_lexicon",
    "default_lexicon",
    "Leaning",
    "classify_text",
    "classify_article",
    "compare_articles",
    "CATEGORY_INDICATORS",
    "assign_category",
    "sniff_category",
]
