"""
TrendSearch - HTTP Transport

One HTTP exchange against the Trends service, plus the two composed
fetch helpers every endpoint goes through:

    fetch_text        rate limiter -> retry executor -> request_once
    fetch_google_json fetch_text -> optional prefix strip -> json.loads

Every failure leaving this module is a TrendSearchError subclass.
"""

from __future__ import annotations

import json
import logging
import math
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Callable, Dict, Mapping, Optional

import requests
from requests.structures import CaseInsensitiveDict

from ..errors import (
    EndpointUnavailableError,
    RateLimitError,
    SchemaValidationError,
    TransportError,
    UnexpectedResponseError,
)
from ..resilience.rate_limiter import RateLimiter
from ..resilience.retry import RetryDecision, RetryPolicy, run_with_retry
from .cookies import CookieStore, get_set_cookie_headers
from .prefix import strip_google_prefix
from .url import QueryValue, build_url


logger = logging.getLogger(__name__)

MAX_BODY_PREVIEW = 400
CHUNK_SIZE = 8192


@dataclass(frozen=True)
class RequestConfig:
    """One logical call as described by an endpoint collaborator."""

    endpoint: str
    path: str
    method: str = "GET"
    query: Optional[Mapping[str, QueryValue]] = None
    headers: Optional[Mapping[str, str]] = None
    body: Optional[str] = None
    strip_google_prefix: bool = False


@dataclass
class OutboundRequest:
    """The concrete request about to hit the wire; what a proxy hook may rewrite."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None


ProxyHook = Callable[[OutboundRequest], Optional[OutboundRequest]]


@dataclass
class FetchRuntime:
    """Per-client settings shared by every call made through that client."""

    base_url: str
    session: requests.Session
    timeout: float
    retry_policy: RetryPolicy
    rate_limiter: RateLimiter
    user_agent: Optional[str] = None
    cookie_store: Optional[CookieStore] = None
    proxy_hook: Optional[ProxyHook] = None
    clock: Callable[[], float] = time.monotonic


# ---------------------------------------------------
# Helpers
# ---------------------------------------------------
def truncate(text: str, max_length: int = MAX_BODY_PREVIEW) -> str:
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Retry-After as seconds; accepts delta-seconds or an HTTP date."""
    if not value or not value.strip():
        return None
    value = value.strip()
    try:
        seconds = float(value)
    except ValueError:
        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return None
        if when is None:
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        seconds = (when - datetime.now(timezone.utc)).total_seconds()
    if not math.isfinite(seconds):
        return None
    return max(0.0, seconds)


def classify_retry(exc: BaseException) -> RetryDecision:
    """Decide whether a failed attempt is worth repeating."""
    if isinstance(exc, RateLimitError):
        return RetryDecision(True, "rate-limit")

    if isinstance(exc, TransportError):
        if not exc.status:
            return RetryDecision(True, "network")
        if exc.status >= 500:
            return RetryDecision(True, "server-error")
        return RetryDecision(False, "client-error")

    # Retrying cannot change an already-received body.
    if isinstance(
        exc, (SchemaValidationError, UnexpectedResponseError, EndpointUnavailableError)
    ):
        return RetryDecision(False, "terminal")

    return RetryDecision(True, "unknown")


def build_request(runtime: FetchRuntime, request: RequestConfig) -> OutboundRequest:
    url = build_url(runtime.base_url, request.path, request.query)

    headers: CaseInsensitiveDict = CaseInsensitiveDict(request.headers or {})

    if runtime.user_agent and "user-agent" not in headers:
        headers["User-Agent"] = runtime.user_agent

    hl = (request.query or {}).get("hl")
    if isinstance(hl, str) and hl and "accept-language" not in headers:
        headers["Accept-Language"] = hl

    if runtime.cookie_store is not None and "cookie" not in headers:
        cookie_header = runtime.cookie_store.get_cookie_header(url)
        if cookie_header:
            headers["Cookie"] = cookie_header

    outbound = OutboundRequest(
        method=(request.method or "GET").upper(),
        url=url,
        headers=dict(headers),
        body=request.body,
    )

    if runtime.proxy_hook is None:
        return outbound

    proxied = runtime.proxy_hook(outbound)
    return proxied if proxied is not None else outbound


# ---------------------------------------------------
# Single attempt
# ---------------------------------------------------
def _timed_out(runtime: FetchRuntime, request: RequestConfig, url: str) -> TransportError:
    return TransportError(
        f"Network error while calling {request.endpoint}: "
        f"timed out after {runtime.timeout}s",
        url=url,
    )


def read_body(
    runtime: FetchRuntime,
    request: RequestConfig,
    response: requests.Response,
    url: str,
    deadline: float,
) -> str:
    """Read the streamed body, giving up once the attempt's deadline has passed."""
    chunks = []
    try:
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if runtime.clock() > deadline:
                raise _timed_out(runtime, request, url)
            if chunk:
                chunks.append(chunk)
    except requests.Timeout as e:
        raise _timed_out(runtime, request, url) from e
    except requests.RequestException as e:
        raise TransportError(
            f"Network error while calling {request.endpoint}: {e}",
            url=url,
        ) from e

    return b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")


def request_once(runtime: FetchRuntime, request: RequestConfig) -> str:
    outbound = build_request(runtime, request)
    url = outbound.url

    logger.debug(f"{outbound.method} {url} ({request.endpoint})")

    # The timeout bounds the whole attempt, body included.
    deadline = runtime.clock() + runtime.timeout
    try:
        response = runtime.session.request(
            outbound.method,
            url,
            headers=outbound.headers,
            data=outbound.body.encode("utf-8") if outbound.body is not None else None,
            timeout=runtime.timeout,
            stream=True,
        )
    except requests.Timeout as e:
        raise _timed_out(runtime, request, url) from e
    except requests.RequestException as e:
        raise TransportError(
            f"Network error while calling {request.endpoint}: {e}",
            url=url,
        ) from e

    try:
        if runtime.cookie_store is not None:
            set_cookies = get_set_cookie_headers(response)
            if set_cookies:
                runtime.cookie_store.set_cookie_headers(url, set_cookies)

        text = read_body(runtime, request, response, url, deadline)
    finally:
        response.close()

    status = response.status_code

    if status == 429:
        raise RateLimitError(
            f"Rate limited on {request.endpoint}.",
            url=url,
            status=status,
            retry_after=parse_retry_after((response.headers or {}).get("Retry-After")),
        )

    if not 200 <= status < 300:
        raise TransportError(
            f"HTTP {status} while calling {request.endpoint}.",
            url=url,
            status=status,
            response_body=truncate(text),
        )

    return text


# ---------------------------------------------------
# Composed fetches
# ---------------------------------------------------
def fetch_text(runtime: FetchRuntime, request: RequestConfig) -> str:
    return runtime.rate_limiter.schedule(
        lambda: run_with_retry(
            lambda: request_once(runtime, request),
            runtime.retry_policy,
            classify_retry,
        )
    )


def fetch_google_json(runtime: FetchRuntime, request: RequestConfig) -> Any:
    text = fetch_text(runtime, request)
    payload = strip_google_prefix(text) if request.strip_google_prefix else text

    try:
        return json.loads(payload)
    except ValueError as e:
        raise TransportError(
            f"Invalid JSON received from {request.endpoint}.",
            url=build_url(runtime.base_url, request.path, request.query),
            response_body=truncate(payload),
        ) from e

