from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import schedule

from .models import Article
from .orchestrator import FetchOrchestrator
from .storage import ArticleRepository
from .utils.logging import get_logger

logger = get_logger("nl.scheduler")

DEFAULT_CATEGORIES = ("technology", "politics", "business", "entertainment", "sports", "health", "science")
DEFAULT_TARGET_TOTAL = 70
DEFAULT_INTERVAL_SECONDS = 180


class SchedulerState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


@dataclass(frozen=True, slots=True)
class SchedulerStatus:
    is_running: bool
    interval_seconds: int
    last_run_at: Optional[datetime] = None
    last_inserted: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isRunning": self.is_running,
            "period": self.interval_seconds,
            "lastRunAt": self.last_run_at.isoformat() if self.last_run_at else None,
            "lastInserted": self.last_inserted,
        }


class _PendingJobRunner(threading.Thread):
    """Polls ``jobs.run_pending()`` until cancelled."""

    def __init__(self, jobs: schedule.Scheduler, poll_seconds: float) -> None:
        super().__init__(name="nl-scheduler", daemon=True)
        self.jobs = jobs
        self.poll_seconds = poll_seconds
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    def run(self) -> None:
        while not self._cancelled.wait(self.poll_seconds):
            self.jobs.run_pending()


class NewsScheduler:
    """Drives fetch cycles on a fixed interval.

    Cycles started by the timer and by ``manual_fetch`` may overlap; the
    repository's URL uniqueness keeps that from storing anything twice.
    """

    def __init__(
        self,
        orchestrator: FetchOrchestrator,
        repository: Optional[ArticleRepository] = None,
        *,
        categories: Sequence[str] = DEFAULT_CATEGORIES,
        target_total: int = DEFAULT_TARGET_TOTAL,
        interval_seconds: int = DEFAULT_INTERVAL_SECONDS,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.orchestrator = orchestrator
        self.repository = repository or orchestrator.repository
        self.categories = list(categories)
        self.target_total = target_total
        self.interval_seconds = interval_seconds

        self._lock = threading.Lock()
        self._state = SchedulerState.STOPPED
        # One job registry per scheduler instead of the schedule module default
        self._jobs = schedule.Scheduler()
        self._timer: Optional[_PendingJobRunner] = None
        self._last_run_at: Optional[datetime] = None
        self._last_inserted: Optional[int] = None

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def timer_armed(self) -> bool:
        with self._lock:
            return self._timer is not None

    def start(self) -> bool:
        """Start the schedule; returns ``False`` if it was already running."""
        with self._lock:
            if self._state is SchedulerState.RUNNING:
                logger.info("News scheduler is already running")
                return False
            self._state = SchedulerState.RUNNING

        logger.info("Starting news scheduler (interval=%ss)", self.interval_seconds)
        self._run_cycle("startup")

        with self._lock:
            # stop() may have been called while the first cycle ran
            if self._state is SchedulerState.RUNNING and self._timer is None:
                self._jobs.every(self.interval_seconds).seconds.do(self._run_cycle, "scheduled")
                self._timer = _PendingJobRunner(self._jobs, min(1.0, self.interval_seconds))
                self._timer.start()
        logger.info("News scheduler started - fetching every %ss", self.interval_seconds)
        return True

    def stop(self) -> None:
        with self._lock:
            timer, self._timer = self._timer, None
            self._state = SchedulerState.STOPPED
            self._jobs.clear()
        if timer is not None:
            timer.cancel()
        logger.info("News scheduler stopped")

    def manual_fetch(self) -> int:
        """Run one cycle now, independent of the schedule; returns inserted count."""
        logger.info("Manual news fetch triggered")
        return len(self._run_cycle("manual"))

    def status(self) -> SchedulerStatus:
        with self._lock:
            return SchedulerStatus(
                is_running=self._state is SchedulerState.RUNNING,
                interval_seconds=self.interval_seconds,
                last_run_at=self._last_run_at,
                last_inserted=self._last_inserted,
            )

    def _run_cycle(self, trigger: str) -> List[Article]:
        logger.info("%s news fetch triggered", trigger.capitalize())
        try:
            new_articles = self.orchestrator.fetch_and_ingest(self.categories, self.target_total)
            total = self.repository.count_all()
        except Exception as exc:  # noqa: BLE001 - a cycle must not kill the timer thread
            logger.exception("%s news fetch failed: %s", trigger.capitalize(), exc)
            return []

        with self._lock:
            self._last_run_at = datetime.now(timezone.utc)
            self._last_inserted = len(new_articles)
        logger.info(
            "%s fetch completed: added %d new articles, %d in store",
            trigger.capitalize(),
            len(new_articles),
            total,
        )
        return new_articles
