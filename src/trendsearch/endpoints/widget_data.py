"""
Widget-data endpoints.

Each of these is a two-step exchange: an explore call to obtain the
widget (its request blob and token), then a call to the widgetdata path
for that widget. Both steps go through the same client pipeline, so
each costs one rate-limiter admission.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

from ..http.validation import validate_schema
from ..parsers.widgets import select_widget
from ..schemas.common import ExploreWidget
from ..schemas.explore import ExploreRequest, InterestByRegionRequest
from ..schemas.widget_data import (
    InterestByRegionResponse,
    InterestOverTimeMultirangeResponse,
    InterestOverTimeResponse,
    RelatedQueriesResponse,
    RelatedTopicsResponse,
)
from .explore import explore
from .shared import EndpointContext, EndpointResult, resolve_common, with_optional_raw

TIMESERIES_PATH = "/trends/api/widgetdata/multiline"
MULTIRANGE_PATH = "/trends/api/widgetdata/multirange"
GEO_MAP_PATH = "/trends/api/widgetdata/comparedgeo"
RELATED_SEARCHES_PATH = "/trends/api/widgetdata/relatedsearches"


@dataclass(frozen=True)
class ResolvedWidget:
    widget: ExploreWidget
    query: Dict[str, Any]


def resolve_widget(
    ctx: EndpointContext,
    endpoint: str,
    request_schema: Type[ExploreRequest],
    params: Any,
    widget_id: str,
) -> ResolvedWidget:
    """Validate `params`, run explore and build the widgetdata query for `widget_id`."""
    request = validate_schema(f"{endpoint}.request", request_schema, params)
    hl, tz = resolve_common(ctx, request)

    widgets = explore(ctx, request).data["widgets"]
    widget = select_widget(endpoint, widgets, widget_id)

    widget_request = dict(widget.request)
    resolution: Optional[str] = getattr(request, "resolution", None)
    if resolution:
        widget_request["resolution"] = resolution

    query = {
        "hl": hl,
        "tz": tz,
        "req": json.dumps(widget_request, separators=(",", ":")),
        "token": widget.token,
    }
    return ResolvedWidget(widget=widget, query=query)


def _fetch_widget_json(
    ctx: EndpointContext, endpoint: str, path: str, resolved: ResolvedWidget
) -> Any:
    return ctx.request_json(
        endpoint=endpoint,
        path=path,
        query=resolved.query,
        strip_google_prefix=True,
    )


# ---------------------------------------------------
# Endpoints
# ---------------------------------------------------
def interest_over_time(
    ctx: EndpointContext, params: Any, debug_raw: bool = False
) -> EndpointResult:
    resolved = resolve_widget(ctx, "interest_over_time", ExploreRequest, params, "TIMESERIES")
    response_json = _fetch_widget_json(ctx, "interest_over_time", TIMESERIES_PATH, resolved)
    response = validate_schema(
        "interest_over_time.response", InterestOverTimeResponse, response_json
    )
    return with_optional_raw({"timeline": response.default.timeline_data}, response, debug_raw)


def interest_over_time_multirange(
    ctx: EndpointContext, params: Any, debug_raw: bool = False
) -> EndpointResult:
    """Timeline of the TIMESERIES widget with one column per compared time range."""
    resolved = resolve_widget(
        ctx, "interest_over_time_multirange", ExploreRequest, params, "TIMESERIES"
    )
    response_json = _fetch_widget_json(
        ctx, "interest_over_time_multirange", MULTIRANGE_PATH, resolved
    )
    response = validate_schema(
        "interest_over_time_multirange.response",
        InterestOverTimeMultirangeResponse,
        response_json,
    )
    return with_optional_raw({"timeline": response.default.timeline_data}, response, debug_raw)


def interest_by_region(
    ctx: EndpointContext, params: Any, debug_raw: bool = False
) -> EndpointResult:
    resolved = resolve_widget(
        ctx, "interest_by_region", InterestByRegionRequest, params, "GEO_MAP"
    )
    response_json = _fetch_widget_json(ctx, "interest_by_region", GEO_MAP_PATH, resolved)
    response = validate_schema(
        "interest_by_region.response", InterestByRegionResponse, response_json
    )
    return with_optional_raw({"regions": response.default.geo_map_data}, response, debug_raw)


def related_queries(
    ctx: EndpointContext, params: Any, debug_raw: bool = False
) -> EndpointResult:
    """Top and rising related queries (first and second ranked lists)."""
    resolved = resolve_widget(ctx, "related_queries", ExploreRequest, params, "RELATED_QUERIES")
    response_json = _fetch_widget_json(ctx, "related_queries", RELATED_SEARCHES_PATH, resolved)
    response = validate_schema("related_queries.response", RelatedQueriesResponse, response_json)

    ranked = response.default.ranked_list
    data = {
        "top": ranked[0].ranked_keyword,
        "rising": ranked[1].ranked_keyword if len(ranked) > 1 else [],
    }
    return with_optional_raw(data, response, debug_raw)


def related_topics(
    ctx: EndpointContext, params: Any, debug_raw: bool = False
) -> EndpointResult:
    resolved = resolve_widget(ctx, "related_topics", ExploreRequest, params, "RELATED_TOPICS")
    response_json = _fetch_widget_json(ctx, "related_topics", RELATED_SEARCHES_PATH, resolved)
    response = validate_schema("related_topics.response", RelatedTopicsResponse, response_json)

    ranked = response.default.ranked_list
    data = {
        "top": ranked[0].ranked_keyword if ranked else [],
        "rising": ranked[1].ranked_keyword if len(ranked) > 1 else [],
    }
    return with_optional_raw(data, response, debug_raw)
