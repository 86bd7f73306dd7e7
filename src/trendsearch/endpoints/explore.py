from __future__ import annotations

import json
from typing import Any

from ..http.validation import validate_schema
from ..schemas.explore import ExploreRequest, ExploreResponse
from .shared import (
    DEFAULT_EXPLORE_TIME,
    EndpointContext,
    EndpointResult,
    build_comparison_items,
    resolve_common,
    with_optional_raw,
)


def explore(ctx: EndpointContext, params: Any, debug_raw: bool = False) -> EndpointResult:
    """
    Run the explore call that hands out widget tokens.

    Every widget-data endpoint starts here: the returned widgets carry the
    `request` blob and `token` the widgetdata paths require.
    """
    request = validate_schema("explore.request", ExploreRequest, params)
    hl, tz = resolve_common(ctx, request)

    comparison_item = build_comparison_items(
        endpoint="explore.request",
        keywords=request.keywords,
        geo=request.geo,
        time=request.time or DEFAULT_EXPLORE_TIME,
    )

    req = {
        "comparisonItem": comparison_item,
        "category": request.category if request.category is not None else 0,
        "property": request.property if request.property is not None else "",
    }

    response_json = ctx.request_json(
        endpoint="explore",
        path="/trends/api/explore",
        query={"hl": hl, "tz": tz, "req": json.dumps(req, separators=(",", ":"))},
        strip_google_prefix=True,
    )

    response = validate_schema("explore.response", ExploreResponse, response_json)

    return with_optional_raw(
        {"widgets": response.widgets, "comparison_item": comparison_item},
        response,
        debug_raw,
    )
