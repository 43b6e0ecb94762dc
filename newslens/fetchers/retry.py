from __future__ import annotations

import os
import time
from typing import Callable, Optional, Tuple, Type, TypeVar

from ..utils.logging import get_logger

T = TypeVar("T")
logger = get_logger("nl.fetchers.retry")


def with_retries(
    fn: Callable[[], T],
    *,
    retries: int = 2,
    backoff: float = 1.5,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    give_up_on: Tuple[Type[BaseException], ...] = (),
    sleep: Optional[Callable[[float], None]] = None,
) -> T:
    # Environment overrides for quick runs: NEWSAPI_RETRIES, NEWSAPI_BACKOFF
    try:
        env_retries = os.getenv("NEWSAPI_RETRIES")
        if env_retries is not None:
            retries = int(env_retries)
    except ValueError:
        logger.warning("Ignoring invalid NEWSAPI_RETRIES=%r", os.getenv("NEWSAPI_RETRIES"))
    try:
        env_backoff = os.getenv("NEWSAPI_BACKOFF")
        if env_backoff is not None:
            backoff = float(env_backoff)
    except ValueError:
        logger.warning("Ignoring invalid NEWSAPI_BACKOFF=%r", os.getenv("NEWSAPI_BACKOFF"))

    last_exc: BaseException | None = None
    for attempt in range(retries + 1):
        try:
            return fn()
        except retry_on as exc:
            if isinstance(exc, give_up_on):
                raise
            last_exc = exc
            if attempt >= retries:
                break
            sleep_s = backoff ** attempt
            logger.warning(
                "Upstream call failed (attempt %s/%s): %s; retrying in %.1fs",
                attempt + 1,
                retries + 1,
                exc,
                sleep_s,
            )
            (sleep or time.sleep)(sleep_s)
    assert last_exc is not None
    raise last_exc
