from __future__ import annotations

import datetime as dt
import logging
from typing import Any

from ..errors import EndpointUnavailableError, TransportError
from ..http.validation import validate_schema
from ..schemas.top_charts import TopChartsRequest, TopChartsResponse
from .shared import (
    GONE_STATUSES,
    EndpointContext,
    EndpointResult,
    resolve_common,
    with_optional_raw,
)


logger = logging.getLogger(__name__)


def _chart_date(value: Any) -> str:
    """Years go out as-is, date-like strings verbatim, dates as their year."""
    if value is None:
        return str(dt.datetime.now(dt.timezone.utc).year)
    if isinstance(value, (dt.datetime, dt.date)):
        return str(value.year)
    return str(value)


def top_charts(ctx: EndpointContext, params: Any, debug_raw: bool = False) -> EndpointResult:
    """Year-in-search top charts; `items` flattens every chart's list."""
    request = validate_schema("top_charts.request", TopChartsRequest, params)
    hl, tz = resolve_common(ctx, request)

    try:
        response_json = ctx.request_json(
            endpoint="top_charts",
            path="/trends/api/topcharts",
            query={
                "hl": hl,
                "tz": tz,
                "geo": request.geo or "GLOBAL",
                "date": _chart_date(request.date),
                "isMobile": 1 if request.is_mobile else 0,
            },
            strip_google_prefix=True,
        )
    except TransportError as e:
        if e.status in GONE_STATUSES:
            logger.warning(f"top_charts answered HTTP {e.status}; endpoint is retired")
            raise EndpointUnavailableError(endpoint="top_charts", status=e.status) from e
        raise

    response = validate_schema("top_charts.response", TopChartsResponse, response_json)

    charts = response.top_charts
    items = [item for chart in charts for item in chart.list_items]
    return with_optional_raw({"charts": charts, "items": items}, response, debug_raw)
