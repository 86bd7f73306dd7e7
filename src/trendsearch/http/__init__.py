"""
TrendSearch - HTTP Layer

URL building, anti-XSRF prefix handling, cookie passthrough, schema
validation and the transport that ties them to a requests.Session.
"""

from .cookies import CookieStore, MemoryCookieStore
from .prefix import strip_google_prefix
from .transport import (
    FetchRuntime,
    OutboundRequest,
    ProxyHook,
    RequestConfig,
    classify_retry,
    fetch_google_json,
    fetch_text,
    request_once,
)
from .url import build_url
from .validation import validate_schema


__all__ = [
    "CookieStore",
    "MemoryCookieStore",
    "strip_google_prefix",
    "FetchRuntime",
    "OutboundRequest",
    "ProxyHook",
    "RequestConfig",
    "classify_retry",
    "fetch_google_json",
    "fetch_text",
    "request_once",
    "build_url",
    "validate_schema",
]
