"""
TrendSearch - Google Trends Client

A typed client for the (undocumented) Google Trends web endpoints.

Why this package exists:
------------------------
The Trends service speaks three wire formats (JSON behind an anti-XSRF
guard, batchexecute RPC frames and CSV), rate limits aggressively and
changes payload shapes without notice. This package:
1. Runs every call through one rate limiter and a retry executor
2. Normalizes the wire formats into plain Python data
3. Validates requests and responses with pydantic so drift fails loudly

Usage:
------
    from trendsearch import TrendSearchClient, ClientConfig

    client = TrendSearchClient(ClientConfig.from_env())
    result = client.trending_now(geo="US", hours=24)
    for item in result.data["items"]:
        print(item.keyword, item.traffic)

Configuration:
--------------
See `trendsearch.config` for the TRENDSEARCH_* environment variables.
"""

# -----------------------------------------------------------------------------
# Client facade and configuration
# -----------------------------------------------------------------------------
from .client import TrendSearchClient
from .config import ClientConfig

# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------
from .errors import (
    ConfigError,
    EndpointUnavailableError,
    RateLimitError,
    SchemaValidationError,
    TransportError,
    TrendSearchError,
    UnexpectedResponseError,
)

# -----------------------------------------------------------------------------
# Pipeline building blocks
# -----------------------------------------------------------------------------
from .endpoints import EndpointContext, EndpointResult
from .http import MemoryCookieStore, OutboundRequest, build_url, strip_google_prefix
from .parsers import extract_batchexecute_payload, parse_batchexecute
from .resilience import RateLimiter, RateLimitPolicy, RetryPolicy, run_with_retry

__version__ = "0.1.0"


__all__ = [
    # Client
    "TrendSearchClient",
    "ClientConfig",
    # Errors
    "ConfigError",
    "EndpointUnavailableError",
    "RateLimitError",
    "SchemaValidationError",
    "TransportError",
    "TrendSearchError",
    "UnexpectedResponseError",
    # Building blocks
    "EndpointContext",
    "EndpointResult",
    "MemoryCookieStore",
    "OutboundRequest",
    "build_url",
    "strip_google_prefix",
    "extract_batchexecute_payload",
    "parse_batchexecute",
    "RateLimiter",
    "RateLimitPolicy",
    "RetryPolicy",
    "run_with_retry",
]
