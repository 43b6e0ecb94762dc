from __future__ import annotations

import math
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from .fetchers import HeadlineSource, NewsAPIClient, sample_articles
from .models import Article, FetchContext, Headline
from .processors import assign_category, classify_article, clean_field, parse_published_at
from .processors.lexicon import Lexicon
from .storage import ArticleRepository, DuplicateArticleError
from .utils.ingest_config import has_usable_credential
from .utils.logging import get_logger

logger = get_logger("nl.orchestrator")


@dataclass(slots=True)
class CategoryFetchResult:
    """Outcome of one category request: headlines, or the error that replaced them."""

    category: str
    headlines: List[Headline] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class IngestReport:
    fetched: int = 0
    inserted: int = 0
    duplicates: int = 0
    failed: int = 0
    failed_categories: List[str] = field(default_factory=list)
    used_samples: bool = False
    duration_ms: float = 0.0


class FetchOrchestrator:
    """Fetch headlines per category, classify the new ones and persist them."""

    def __init__(
        self,
        repository: ArticleRepository,
        source: Optional[HeadlineSource] = None,
        *,
        api_key: Optional[str] = None,
        country: str = "us",
        max_workers: int = 8,
        lexicon: Optional[Lexicon] = None,
    ) -> None:
        self.repository = repository
        self.api_key = api_key
        self.country = country
        self.max_workers = max_workers
        self.lexicon = lexicon
        if source is None and has_usable_credential(api_key):
            source = NewsAPIClient(api_key.strip())  # type: ignore[union-attr]
        self.source = source
        self.last_report: Optional[IngestReport] = None

    @property
    def has_credential(self) -> bool:
        return has_usable_credential(self.api_key)

    # ---------------- Fetch -----------------
    def _fetch_category(self, category: str, page_size: int) -> CategoryFetchResult:
        assert self.source is not None
        try:
            headlines = self.source.fetch_top_headlines(category, page_size, self.country)
            return CategoryFetchResult(category=category, headlines=list(headlines or []))
        except Exception as exc:  # noqa: BLE001 - one category must not sink the cycle
            logger.error("Error fetching category %s: %s", category, exc)
            return CategoryFetchResult(category=category, error=exc)

    def fetch_all(self, categories: List[str], per_category: int) -> List[CategoryFetchResult]:
        """Fetch every category concurrently and wait for all of them to settle.

        Results come back in the order of ``categories`` regardless of which
        request finished first.
        """
        workers = max(1, min(self.max_workers, len(categories)))
        logger.debug("Starting concurrent fetch for %d categories (workers=%d)", len(categories), workers)
        settled: Dict[str, CategoryFetchResult] = {}
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="nl-fetch") as executor:
            future_map = {executor.submit(self._fetch_category, c, per_category): c for c in categories}
            for fut in as_completed(future_map):
                category = future_map[fut]
                try:
                    settled[category] = fut.result()
                except Exception as exc:  # noqa: BLE001
                    logger.exception("Fetch worker crashed for %s: %s", category, exc)
                    settled[category] = CategoryFetchResult(category=category, error=exc)
        return [settled[c] for c in categories]

    # ---------------- Per-article processing -----------------
    def build_article(self, ctx: FetchContext, *, now: Optional[datetime] = None) -> Article:
        """Category assignment, cleanup and classification for one headline."""
        item = ctx.headline
        title = clean_field(item.title) or ""
        description = clean_field(item.description)
        content = clean_field(item.content)
        verdict = classify_article(title, description, content, lexicon=self.lexicon)
        return Article(
            title=title,
            url=(item.url or "").strip(),
            source=(item.source_name or "").strip() or "Unknown",
            description=description,
            content=content,
            image_url=item.url_to_image or None,
            published_at=parse_published_at(item.published_at, default=now),
            category=assign_category(title, description, ctx.category),
            bias=verdict,
        )

    def process_item(self, ctx: FetchContext, report: IngestReport) -> Optional[Article]:
        """Persist one headline if its URL is new; ``None`` for skips and failures."""
        item = ctx.headline
        if not item.url or not (item.title or "").strip():
            logger.warning("Skipping headline without url/title in %s: %r", ctx.category, item.title)
            report.failed += 1
            return None
        try:
            if self.repository.find_by_url(item.url.strip()) is not None:
                report.duplicates += 1
                return None
            article = self.build_article(ctx, now=datetime.now(timezone.utc))
            saved = self.repository.insert(article)
        except DuplicateArticleError:
            # Another cycle stored the same URL between lookup and insert
            report.duplicates += 1
            return None
        except Exception as exc:  # noqa: BLE001
            logger.error("Error processing article %r: %s", item.title, exc)
            report.failed += 1
            return None
        report.inserted += 1
        logger.debug("Stored %s [%s/%s]", saved.url, saved.category, saved.bias.label)
        return saved

    # ---------------- Public API -----------------
    def fetch_and_ingest(self, categories: Iterable[str], target_total: int) -> List[Article]:
        """Run one fetch cycle and return the articles inserted by it.

        Without an upstream credential the fixed sample set is returned and
        nothing is fetched. Never raises: a failed cycle yields ``[]``.
        """
        report = IngestReport()
        t0 = time.perf_counter()
        try:
            return self._run_cycle(list(dict.fromkeys(categories)), target_total, report)
        except Exception as exc:  # noqa: BLE001 - callers must always get a result
            logger.exception("Fetch cycle failed: %s", exc)
            return []
        finally:
            report.duration_ms = (time.perf_counter() - t0) * 1000
            self.last_report = report
            logger.info(
                "Fetch cycle finished: fetched=%d, inserted=%d, duplicates=%d, failed=%d, failed_categories=%s, duration_ms=%.1f",
                report.fetched,
                report.inserted,
                report.duplicates,
                report.failed,
                report.failed_categories,
                report.duration_ms,
            )

    def _run_cycle(self, categories: List[str], target_total: int, report: IngestReport) -> List[Article]:
        if not self.has_credential or self.source is None:
            logger.warning("No upstream credential configured (NEWS_API_KEY); using sample articles")
            report.used_samples = True
            return sample_articles()
        if not categories:
            logger.info("No categories requested; nothing to fetch")
            return []

        per_category = max(1, math.ceil(target_total / len(categories)))
        results = self.fetch_all(categories, per_category)
        report.failed_categories = [r.category for r in results if not r.ok]

        worklist = [FetchContext(headline=h, category=r.category) for r in results for h in r.headlines]
        report.fetched = len(worklist)
        logger.info("Fetched %d headlines across %d categories", len(worklist), len(categories))

        inserted: List[Article] = []
        for ctx in worklist:
            saved = self.process_item(ctx, report)
            if saved is not None:
                inserted.append(saved)
        return inserted
