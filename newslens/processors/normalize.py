from __future__ import annotations

import html
import re
import unicodedata
from datetime import datetime, timezone
from typing import Optional

from bs4 import BeautifulSoup

_whitespace_re = re.compile(r"\s+")
_control_chars_re = re.compile(r"[\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F]")
# NewsAPI truncates content with a trailer like "... [+2345 chars]"
_truncation_re = re.compile(r"\s*\[\+\d+ chars\]\s*$")

_PUNCT_TRANSLATION = {
    ord("\u2018"): "'",  # left single quote
    ord("\u2019"): "'",  # right single quote
    ord("\u201C"): '"',  # left double quote
    ord("\u201D"): '"',  # right double quote
    ord("\u2013"): "-",  # en dash
    ord("\u2014"): "-",  # em dash
    ord("\u00A0"): " ",  # non-breaking space
}


def clean_html_to_text(raw_html: str | None) -> str:
    """Clean HTML to normalized plain text.

    - Strip tags
    - Unescape HTML entities
    - Collapse whitespace
    """
    if not raw_html:
        return ""

    if "<" not in raw_html and "&" not in raw_html:
        return _whitespace_re.sub(" ", raw_html).strip()

    soup = BeautifulSoup(raw_html, "html.parser")
    text = soup.get_text(" ")
    text = html.unescape(text)
    text = _whitespace_re.sub(" ", text)
    return text.strip()


def normalize_plain_text(text: str | None) -> str:
    """Normalize plain text for downstream processing.

    - Strip BOM
    - Replace curly quotes/dashes and non-breaking spaces
    - Unicode normalize (NFKC)
    - Remove control characters
    - Collapse whitespace
    """
    if not text:
        return ""

    if text.startswith("\ufeff"):
        text = text.lstrip("\ufeff")

    text = text.translate(_PUNCT_TRANSLATION)
    text = unicodedata.normalize("NFKC", text)
    text = _control_chars_re.sub(" ", text)
    return _whitespace_re.sub(" ", text).strip()


def clean_field(value: str | None) -> Optional[str]:
    """HTML-clean and normalize an optional article field; blank becomes None."""
    cleaned = normalize_plain_text(clean_html_to_text(value))
    cleaned = _truncation_re.sub("", cleaned)
    return cleaned or None


def parse_published_at(value: str | datetime | None, *, default: datetime | None = None) -> datetime:
    """Parse an upstream timestamp into an aware UTC datetime.

    Missing or unparseable values fall back to ``default`` (ingestion time).
    """
    fallback = default or datetime.now(timezone.utc)
    if value is None or value == "":
        return fallback
    if isinstance(value, datetime):
        parsed = value
    else:
        raw = value.strip()
        # fromisoformat() only accepts a trailing "Z" from Python 3.11 on
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            parsed = None
            for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%d.%m.%Y"):
                try:
                    parsed = datetime.strptime(raw, fmt)
                    break
                except ValueError:
                    continue
            if parsed is None:
                return fallback
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
