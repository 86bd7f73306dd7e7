from __future__ import annotations

from typing import Any, Type

from ..schemas.explore import ExploreRequest, InterestByRegionRequest
from .shared import EndpointContext, EndpointResult, with_optional_raw
from .widget_data import (
    GEO_MAP_PATH,
    MULTIRANGE_PATH,
    RELATED_SEARCHES_PATH,
    TIMESERIES_PATH,
    resolve_widget,
)

CSV_CONTENT_TYPE = "text/csv"


def _widget_csv(
    ctx: EndpointContext,
    endpoint: str,
    request_schema: Type[ExploreRequest],
    params: Any,
    widget_id: str,
    path: str,
    debug_raw: bool,
) -> EndpointResult:
    resolved = resolve_widget(ctx, endpoint, request_schema, params, widget_id)
    csv_text = ctx.request_text(endpoint=endpoint, path=f"{path}/csv", query=resolved.query)
    return with_optional_raw(
        {"csv": csv_text, "content_type": CSV_CONTENT_TYPE}, csv_text, debug_raw
    )


def interest_over_time_csv(
    ctx: EndpointContext, params: Any, debug_raw: bool = False
) -> EndpointResult:
    return _widget_csv(
        ctx, "interest_over_time_csv", ExploreRequest, params, "TIMESERIES", TIMESERIES_PATH, debug_raw
    )


def interest_over_time_multirange_csv(
    ctx: EndpointContext, params: Any, debug_raw: bool = False
) -> EndpointResult:
    return _widget_csv(
        ctx,
        "interest_over_time_multirange_csv",
        ExploreRequest,
        params,
        "TIMESERIES",
        MULTIRANGE_PATH,
        debug_raw,
    )


def interest_by_region_csv(
    ctx: EndpointContext, params: Any, debug_raw: bool = False
) -> EndpointResult:
    return _widget_csv(
        ctx,
        "interest_by_region_csv",
        InterestByRegionRequest,
        params,
        "GEO_MAP",
        GEO_MAP_PATH,
        debug_raw,
    )


def related_queries_csv(
    ctx: EndpointContext, params: Any, debug_raw: bool = False
) -> EndpointResult:
    return _widget_csv(
        ctx,
        "related_queries_csv",
        ExploreRequest,
        params,
        "RELATED_QUERIES",
        RELATED_SEARCHES_PATH,
        debug_raw,
    )


def related_topics_csv(
    ctx: EndpointContext, params: Any, debug_raw: bool = False
) -> EndpointResult:
    return _widget_csv(
        ctx,
        "related_topics_csv",
        ExploreRequest,
        params,
        "RELATED_TOPICS",
        RELATED_SEARCHES_PATH,
        debug_raw,
    )
