"""
Name: Query Retry Policy (tenacity)

Responsibilities:
  - Decide which client failures are transient (retry) or permanent (fail fast)
  - Build the tenacity Retrying object used for queries

Collaborators:
  - tenacity
  - client.api: ApiError, TransportError
  - crosscutting.config.get_settings: query_retry_attempts

Constraints:
  - Only queries go through this policy; mutations never retry
  - 4xx answers are permanent except 408 and 429
"""

from __future__ import annotations

import time
from typing import Callable

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from .api import ApiError, TransportError

TRANSIENT_HTTP_CODES: frozenset[int] = frozenset({408, 429, 500, 502, 503, 504})


def is_transient_error(exception: BaseException) -> bool:
    if isinstance(exception, TransportError):
        return True
    if isinstance(exception, ApiError):
        return exception.status_code in TRANSIENT_HTTP_CODES
    return False


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    wait_time = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        "Retrying query",
        extra={
            "attempt": retry_state.attempt_number,
            "wait_seconds": round(float(wait_time), 2),
            "error": str(exc) if exc else None,
            "error_type": type(exc).__name__ if exc else None,
        },
    )


def create_query_retry(
    retries: int | None = None,
    *,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Retrying:
    """
    Retrying object for one query fetch.

    `retries` counts extra attempts after the first one (3 means up to four
    calls), matching the dashboard's query defaults.
    """
    _retries = get_settings().query_retry_attempts if retries is None else retries
    if _retries < 0:
        raise ValueError("retries must be >= 0")
    if base_delay < 0 or max_delay < 0:
        raise ValueError("delays must be >= 0")

    return Retrying(
        stop=stop_after_attempt(_retries + 1),
        wait=wait_exponential_jitter(initial=base_delay, max=max_delay, jitter=base_delay),
        retry=retry_if_exception(is_transient_error),
        before_sleep=_log_retry,
        sleep=sleep,
        reraise=True,
    )
