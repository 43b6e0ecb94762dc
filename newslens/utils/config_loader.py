from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import yaml

from ..models import CATEGORIES
from .ingest_config import IngestConfig


class ConfigError(Exception):
    """Raised when the configuration file is invalid or missing required fields."""


ALLOWED_STORES = {"memory", "json"}

# YAML key -> IngestConfig attribute
_FIELD_MAP = {
    "api_key": "api_key",
    "base_url": "base_url",
    "country": "country",
    "timeout": "timeout",
    "interval_seconds": "interval_seconds",
    "target_total": "target_total",
    "max_workers": "max_workers",
    "enable_scheduler": "enable_scheduler",
    "store": "store",
    "store_path": "store_path",
}
_POSITIVE_INTS = ("timeout", "interval_seconds", "target_total", "max_workers")


def validate_ingest_config(cfg: IngestConfig) -> None:
    """Check an ``IngestConfig`` for values the ingestion core cannot run with."""
    for name in _POSITIVE_INTS:
        value = getattr(cfg, name)
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ConfigError(f"'{name}' must be a positive integer, got {value!r}")

    categories = cfg.categories
    if not categories:
        raise ConfigError("At least one fetch category is required")
    invalid = [c for c in categories if c not in CATEGORIES]
    if invalid:
        raise ConfigError(
            "Invalid categories: "
            + ", ".join(sorted(set(invalid)))
            + f". Allowed: {sorted(CATEGORIES)}"
        )

    if cfg.store not in ALLOWED_STORES:
        raise ConfigError(f"Invalid store '{cfg.store}'. Must be one of {sorted(ALLOWED_STORES)}.")

    parsed = urlparse(cfg.base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"Invalid base_url '{cfg.base_url}'. Must be absolute http(s) URL.")


def _overlay(cfg: IngestConfig, section: Dict[str, Any]) -> IngestConfig:
    changes: Dict[str, Any] = {}
    for key, attr in _FIELD_MAP.items():
        if key in section and section[key] is not None:
            changes[attr] = section[key]
    if "categories" in section and section["categories"] is not None:
        cats = section["categories"]
        if not isinstance(cats, list) or not all(isinstance(c, str) for c in cats):
            raise ConfigError("'categories' must be a list of strings if provided")
        changes["categories_csv"] = ",".join(c.strip().lower() for c in cats)
    if "store" in changes:
        changes["store"] = str(changes["store"]).lower()
    return replace(cfg, **changes)


def load_ingest_config(path: Path | str | None = None, *, base: Optional[IngestConfig] = None) -> IngestConfig:
    """Load ingestion settings, overlaying an optional YAML file on env defaults.

    YAML structure:
      - Top-level mapping
      - Key ``ingest``: mapping with any of
          - categories: list of category names
          - interval_seconds, target_total, timeout, max_workers: positive ints
          - api_key, base_url, country: strings
          - enable_scheduler: bool
          - store: 'memory' | 'json'
          - store_path: string

    A missing ``path`` argument means env-only configuration. Unknown
    top-level keys are ignored for forward compatibility.
    """
    if base is None:
        try:
            base = IngestConfig()
        except ValueError as exc:
            raise ConfigError(f"Invalid numeric setting in environment: {exc}") from exc
    cfg = base
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be a mapping")

        section = data.get("ingest") or {}
        if not isinstance(section, dict):
            raise ConfigError("'ingest' must be a mapping in the YAML configuration")
        cfg = _overlay(cfg, section)

    validate_ingest_config(cfg)
    return cfg
