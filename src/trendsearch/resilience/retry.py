from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from tenacity import RetryCallState, Retrying, retry_if_exception, stop_after_attempt
from tenacity.wait import wait_base

from ..errors import RateLimitError

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Upper bound for honoring a server-sent Retry-After, in seconds.
MAX_RETRY_AFTER = 120.0


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff. Delays are in seconds; attempt 0 is the first call."""

    max_retries: int = 3
    base_delay: float = 0.5
    max_delay: float = 8.0


@dataclass(frozen=True)
class RetryDecision:
    retryable: bool
    reason: str = ""


def compute_delay(
    attempt: int, policy: RetryPolicy, rand: Optional[Callable[[], float]] = None
) -> float:
    rand = rand or random.random
    exp = min(policy.max_delay, policy.base_delay * (2 ** attempt))
    jitter = rand() * exp * 0.2
    return min(policy.max_delay, exp + jitter)


class RetryAfterBackoffWait(wait_base):
    """Exponential backoff with jitter, raised to a capped Retry-After on 429s."""

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy

    def __call__(self, retry_state: RetryCallState) -> float:
        delay = compute_delay(retry_state.attempt_number - 1, self.policy)

        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(exc, RateLimitError) and exc.retry_after is not None:
            delay = max(delay, min(exc.retry_after, MAX_RETRY_AFTER))
        return delay


def _log_retry(
    policy: RetryPolicy, should_retry: Callable[[BaseException], RetryDecision]
) -> Callable[[RetryCallState], None]:
    def before_sleep(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception()
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        reason = should_retry(exc).reason or "unclassified"
        logger.warning(
            f"Retrying after {type(exc).__name__} ({reason}); "
            f"attempt {retry_state.attempt_number}/{policy.max_retries} in {delay:.2f}s"
        )

    return before_sleep


def run_with_retry(
    task: Callable[[], T],
    policy: RetryPolicy,
    should_retry: Callable[[BaseException], RetryDecision],
    sleep: Optional[Callable[[float], None]] = None,
) -> T:
    """
    Call `task` until it succeeds, is deemed non-retryable, or retries run out.

    On a terminal failure the original exception object is re-raised, so
    callers can rely on identity and isinstance checks.
    """
    retrying = Retrying(
        retry=retry_if_exception(lambda exc: should_retry(exc).retryable),
        stop=stop_after_attempt(max(0, policy.max_retries) + 1),
        wait=RetryAfterBackoffWait(policy),
        sleep=sleep or time.sleep,
        reraise=True,
        before_sleep=_log_retry(policy, should_retry),
    )
    return retrying(task)
