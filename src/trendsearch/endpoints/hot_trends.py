from __future__ import annotations

from typing import Any

from ..http.validation import validate_schema
from ..schemas.hot_trends import HotTrendsLegacyRequest, HotTrendsLegacyResponse
from .shared import EndpointContext, EndpointResult, with_optional_raw


def hot_trends_legacy(
    ctx: EndpointContext, params: Any = None, debug_raw: bool = False
) -> EndpointResult:
    """Hot-trends visualizer feed, passed through with only its outer shape checked."""
    validate_schema(
        "hot_trends_legacy.request",
        HotTrendsLegacyRequest,
        params if params is not None else {},
    )

    response_json = ctx.request_json(
        endpoint="hot_trends_legacy",
        path="/trends/hottrends/visualize/internal/data",
        strip_google_prefix=True,
    )
    payload = validate_schema("hot_trends_legacy.response", HotTrendsLegacyResponse, response_json)
    return with_optional_raw({"payload": payload}, payload, debug_raw)
