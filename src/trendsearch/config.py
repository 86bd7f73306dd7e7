"""
TrendSearch - Client Configuration

Configuration:
--------------
Every field can be overridden from the process environment:

    TRENDSEARCH_BASE_URL             - Service origin (default: https://trends.google.com)
    TRENDSEARCH_HL                   - Default interface language (default: en-US)
    TRENDSEARCH_TZ                   - Default timezone offset in minutes (default: local)
    TRENDSEARCH_TIMEOUT_SEC          - Per-attempt request timeout (default: 15)
    TRENDSEARCH_MAX_RETRIES          - Retries after the first attempt (default: 3)
    TRENDSEARCH_RETRY_BASE_DELAY_SEC - Backoff base delay (default: 0.5)
    TRENDSEARCH_RETRY_MAX_DELAY_SEC  - Backoff ceiling (default: 8)
    TRENDSEARCH_MAX_CONCURRENT       - Concurrent requests per client (default: 1)
    TRENDSEARCH_MIN_DELAY_SEC        - Spacing between request starts (default: 1)
    TRENDSEARCH_USER_AGENT           - User-Agent header sent with every request
"""

from __future__ import annotations

import datetime as dt
import os
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Optional

from .errors import ConfigError
from .resilience.rate_limiter import RateLimitPolicy
from .resilience.retry import RetryPolicy

DEFAULT_BASE_URL = "https://trends.google.com"
DEFAULT_HL = "en-US"
DEFAULT_TIMEOUT = 15.0  # seconds

ENV_PREFIX = "TRENDSEARCH_"


def local_tz_offset() -> int:
    """Minutes to add to local time to get UTC (positive west of Greenwich)."""
    offset = dt.datetime.now().astimezone().utcoffset() or dt.timedelta(0)
    return -int(offset.total_seconds() // 60)


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    hl: str = DEFAULT_HL
    tz: int = field(default_factory=local_tz_offset)
    timeout: float = DEFAULT_TIMEOUT
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    rate_limit: RateLimitPolicy = field(default_factory=RateLimitPolicy)
    user_agent: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Defaults overridden by any TRENDSEARCH_* variables that are set."""
        env = os.environ if environ is None else environ
        base = cls()

        retry = RetryPolicy(
            max_retries=_env_value(env, "MAX_RETRIES", int, base.retry.max_retries),
            base_delay=_env_value(env, "RETRY_BASE_DELAY_SEC", float, base.retry.base_delay),
            max_delay=_env_value(env, "RETRY_MAX_DELAY_SEC", float, base.retry.max_delay),
        )
        rate_limit = RateLimitPolicy(
            max_concurrent=_env_value(
                env, "MAX_CONCURRENT", int, base.rate_limit.max_concurrent
            ),
            min_delay=_env_value(env, "MIN_DELAY_SEC", float, base.rate_limit.min_delay),
        )

        return replace(
            base,
            base_url=_env_value(env, "BASE_URL", str, base.base_url),
            hl=_env_value(env, "HL", str, base.hl),
            tz=_env_value(env, "TZ", int, base.tz, non_negative=False),
            timeout=_env_value(env, "TIMEOUT_SEC", float, base.timeout),
            retry=retry,
            rate_limit=rate_limit,
            user_agent=_env_value(env, "USER_AGENT", str, base.user_agent),
        )

    def merged(self, **overrides: Any) -> "ClientConfig":
        """Copy with the given fields replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _env_value(
    env: Mapping[str, str],
    name: str,
    cast: Callable[[str], Any],
    default: Any,
    non_negative: bool = True,
) -> Any:
    key = f"{ENV_PREFIX}{name}"
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default

    raw = raw.strip()
    try:
        value = cast(raw)
    except ValueError as e:
        raise ConfigError(
            f"{key} must be a valid {cast.__name__}, got '{raw}'.", key=key
        ) from e

    if non_negative and cast in (int, float) and value < 0:
        raise ConfigError(f"{key} must not be negative, got '{raw}'.", key=key)
    return value
