"""
TrendSearch - Client Facade

Usage:
------
    from trendsearch import TrendSearchClient

    with TrendSearchClient() as client:
        topics = client.autocomplete(keyword="python").data["topics"]
        timeline = client.interest_over_time(keywords=["python"], geo="US").data["timeline"]

One client owns one requests.Session, one rate limiter and one retry
policy; every endpoint call made through it shares them.
"""

from __future__ import annotations

import logging
from http import cookiejar
from typing import Any, Callable, Dict, Mapping, Optional

import requests
from pydantic import BaseModel
from requests.adapters import HTTPAdapter

from . import endpoints
from .config import ClientConfig
from .endpoints import EndpointContext, EndpointResult
from .http.cookies import CookieStore
from .http.transport import (
    FetchRuntime,
    ProxyHook,
    RequestConfig,
    fetch_google_json,
    fetch_text,
)
from .http.url import QueryValue
from .resilience.rate_limiter import RateLimiter


logger = logging.getLogger(__name__)

EndpointFn = Callable[[EndpointContext, Any, bool], EndpointResult]


class BlockAllCookies(cookiejar.CookiePolicy):
    """Cookie policy that neither stores nor returns any cookie."""

    return_ok = set_ok = domain_return_ok = path_return_ok = (
        lambda self, *args, **kwargs: False
    )
    netscape = True
    rfc2965 = hide_cookie2 = False


class TrendSearchClient:
    """
    Blocking Google Trends client.

    Safe to share between threads: admission goes through the client's
    rate limiter, which serializes starts and bounds concurrency.
    """

    DEFAULT_HEADERS = {"Accept": "application/json, text/plain, */*"}

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
        cookie_store: Optional[CookieStore] = None,
        proxy_hook: Optional[ProxyHook] = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._owns_session = session is None

        if session is None:
            session = requests.Session()
            session.headers.update(self.DEFAULT_HEADERS)
            # Cookies are replayed only through an explicit cookie_store.
            session.cookies.set_policy(BlockAllCookies())

            pool_size = max(10, self.config.rate_limit.max_concurrent)
            adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
            session.mount("https://", adapter)
            session.mount("http://", adapter)

        self.session = session
        self.rate_limiter = RateLimiter.from_policy(self.config.rate_limit)

        self.runtime = FetchRuntime(
            base_url=self.config.base_url,
            session=self.session,
            timeout=self.config.timeout,
            retry_policy=self.config.retry,
            rate_limiter=self.rate_limiter,
            user_agent=self.config.user_agent,
            cookie_store=cookie_store,
            proxy_hook=proxy_hook,
        )

        logger.info(
            f"TrendSearchClient initialized for {self.config.base_url} "
            f"(hl={self.config.hl}, tz={self.config.tz}, "
            f"max_retries={self.config.retry.max_retries}, "
            f"max_concurrent={self.rate_limiter.max_concurrent})"
        )

    # ---------------------------------------------------
    # Core request primitives
    # ---------------------------------------------------
    def request_json(
        self,
        endpoint: str,
        path: str,
        method: str = "GET",
        query: Optional[Mapping[str, QueryValue]] = None,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
        strip_google_prefix: bool = False,
    ) -> Any:
        """Rate-limited, retried request; returns the decoded JSON body."""
        return fetch_google_json(
            self.runtime,
            RequestConfig(
                endpoint=endpoint,
                path=path,
                method=method,
                query=query,
                headers=headers,
                body=body,
                strip_google_prefix=strip_google_prefix,
            ),
        )

    def request_text(
        self,
        endpoint: str,
        path: str,
        method: str = "GET",
        query: Optional[Mapping[str, QueryValue]] = None,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
    ) -> str:
        """Rate-limited, retried request; returns the raw body text."""
        return fetch_text(
            self.runtime,
            RequestConfig(
                endpoint=endpoint,
                path=path,
                method=method,
                query=query,
                headers=headers,
                body=body,
            ),
        )

    @property
    def context(self) -> EndpointContext:
        return EndpointContext(
            default_hl=self.config.hl,
            default_tz=self.config.tz,
            request_json=self.request_json,
            request_text=self.request_text,
        )

    def _call(
        self,
        fn: EndpointFn,
        params: Any,
        debug_raw: bool,
        kwargs: Dict[str, Any],
    ) -> EndpointResult:
        if params is None:
            params = kwargs
        elif kwargs:
            if isinstance(params, BaseModel):
                params = params.model_dump(exclude_none=True)
            params = {**params, **kwargs}
        return fn(self.context, params, debug_raw)

    # ---------------------------------------------------
    # Endpoints
    # ---------------------------------------------------
    def autocomplete(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.autocomplete, params, debug_raw, kwargs)

    def explore(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.explore, params, debug_raw, kwargs)

    def interest_over_time(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.interest_over_time, params, debug_raw, kwargs)

    def interest_by_region(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.interest_by_region, params, debug_raw, kwargs)

    def related_queries(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.related_queries, params, debug_raw, kwargs)

    def related_topics(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.related_topics, params, debug_raw, kwargs)

    def daily_trends(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.daily_trends, params, debug_raw, kwargs)

    def trending_now(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.trending_now, params, debug_raw, kwargs)

    def trending_articles(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.trending_articles, params, debug_raw, kwargs)

    def interest_over_time_multirange(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.interest_over_time_multirange, params, debug_raw, kwargs)

    def real_time_trends(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.real_time_trends, params, debug_raw, kwargs)

    def top_charts(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.top_charts, params, debug_raw, kwargs)

    def geo_picker(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.geo_picker, params, debug_raw, kwargs)

    def category_picker(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.category_picker, params, debug_raw, kwargs)

    def hot_trends_legacy(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.hot_trends_legacy, params, debug_raw, kwargs)

    def interest_over_time_csv(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.interest_over_time_csv, params, debug_raw, kwargs)

    def interest_over_time_multirange_csv(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.interest_over_time_multirange_csv, params, debug_raw, kwargs)

    def interest_by_region_csv(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.interest_by_region_csv, params, debug_raw, kwargs)

    def related_queries_csv(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.related_queries_csv, params, debug_raw, kwargs)

    def related_topics_csv(self, params: Any = None, *, debug_raw: bool = False, **kwargs: Any) -> EndpointResult:
        return self._call(endpoints.related_topics_csv, params, debug_raw, kwargs)

    # ---------------------------------------------------
    # Lifecycle
    # ---------------------------------------------------
    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "TrendSearchClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
