"""Command-line entrypoint for the NewsLens ingestion core.

Typical uses:
1) run one fetch cycle and exit (``--fetch-now``)
2) keep the scheduler running in the foreground (``--run-scheduler``)
3) inspect the classifier or the store (``--classify``, ``--stats``)
"""

from __future__ import annotations

import argparse
import json
import signal
import threading
from dataclasses import replace
from typing import List, Optional, Tuple

from .fetchers import NewsAPIClient
from .orchestrator import FetchOrchestrator
from .processors import classify_text, significant_keywords, stem_tokens, tokenize
from .scheduler import NewsScheduler
from .storage import ArticleRepository, bias_stats, create_repository
from .utils.config_loader import ConfigError, load_ingest_config, validate_ingest_config
from .utils.ingest_config import IngestConfig
from .utils.logging import configure_logging, get_logger


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="NewsLens - fetch headlines, tag political bias, and store them"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML configuration file (ingest: section); env vars are used otherwise",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: LOG_LEVEL env or INFO)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--fetch-now",
        action="store_true",
        help="Run a single fetch cycle and print how many articles were added",
    )
    mode.add_argument(
        "--run-scheduler",
        action="store_true",
        help="Start the periodic fetch scheduler and block until interrupted",
    )
    mode.add_argument(
        "--classify",
        metavar="TEXT",
        default=None,
        help="Print the bias verdict for TEXT as JSON and exit",
    )
    mode.add_argument(
        "--stats",
        action="store_true",
        help="Print bias label counts, categories and sources from the article store",
    )
    parser.add_argument(
        "--categories",
        default=None,
        help="Comma-separated categories to fetch (overrides config)",
    )
    parser.add_argument(
        "--target-total",
        type=int,
        default=None,
        help="Articles to request per cycle across all categories (overrides config)",
    )
    parser.add_argument(
        "--store",
        choices=["memory", "json"],
        default=None,
        help="Article store backend (overrides config)",
    )
    parser.add_argument(
        "--store-path",
        default=None,
        help="Path of the JSON article store",
    )
    return parser.parse_args(argv)


def apply_cli_overrides(cfg: IngestConfig, args: argparse.Namespace) -> IngestConfig:
    changes = {}
    if args.categories:
        changes["categories_csv"] = args.categories
    if args.target_total is not None:
        changes["target_total"] = args.target_total
    if args.store:
        changes["store"] = args.store
    if args.store_path:
        changes["store_path"] = args.store_path
    if not changes:
        return cfg
    cfg = replace(cfg, **changes)
    validate_ingest_config(cfg)
    return cfg


def build_components(cfg: IngestConfig) -> Tuple[ArticleRepository, FetchOrchestrator, NewsScheduler]:
    repository = create_repository(cfg.store, cfg.store_path)
    source = (
        NewsAPIClient(cfg.api_key.strip(), base_url=cfg.base_url, timeout=cfg.timeout)
        if cfg.has_credential
        else None
    )
    orchestrator = FetchOrchestrator(
        repository,
        source,
        api_key=cfg.api_key,
        country=cfg.country,
        max_workers=cfg.max_workers,
    )
    scheduler = NewsScheduler(
        orchestrator,
        repository,
        categories=cfg.categories,
        target_total=cfg.target_total,
        interval_seconds=cfg.interval_seconds,
    )
    return repository, orchestrator, scheduler


def run_scheduler_forever(scheduler: NewsScheduler) -> None:
    logger = get_logger("nl.main")
    stop_event = threading.Event()

    def _shutdown(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down gracefully", signum)
        stop_event.set()

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    scheduler.start()
    try:
        stop_event.wait()
    finally:
        scheduler.stop()


def main(argv: Optional[List[str]] = None) -> int:
    # Optional: load .env
    try:
        from dotenv import load_dotenv

        load_dotenv(override=False)
    except ImportError:
        pass
    args = parse_args(argv)
    configure_logging(level=args.log_level)
    logger = get_logger("nl.main")

    if args.classify is not None:
        verdict = classify_text(args.classify)
        payload = verdict.to_dict()
        payload["topics"] = significant_keywords(stem_tokens(tokenize(args.classify)), limit=5)
        print(json.dumps(payload, indent=2))
        return 0

    try:
        cfg = apply_cli_overrides(load_ingest_config(args.config), args)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    if not cfg.has_credential:
        logger.warning("NEWS_API_KEY is not set; fetch cycles will return sample articles")

    repository, orchestrator, scheduler = build_components(cfg)

    if args.stats:
        payload = {
            "total": repository.count_all(),
            "bias": bias_stats(repository),
            "categories": sorted(repository.distinct_categories()),
            "sources": sorted(repository.distinct_sources()),
        }
        print(json.dumps(payload, indent=2))
        return 0

    if args.fetch_now:
        count = scheduler.manual_fetch()
        print(f"Manual fetch completed - processed {count} articles")
        return 0

    if args.run_scheduler or cfg.enable_scheduler:
        run_scheduler_forever(scheduler)
        return 0

    logger.info("Scheduler disabled (ENABLE_SCHEDULER=false); nothing to do")
    return 0


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
