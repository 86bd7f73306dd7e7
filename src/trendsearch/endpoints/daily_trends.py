from __future__ import annotations

import datetime as dt
import logging
from typing import Any

from ..errors import EndpointUnavailableError, SchemaValidationError, TransportError
from ..http.validation import validate_schema
from ..schemas.daily_trends import DailyTrendsRequest, DailyTrendsResponse
from .shared import (
    GONE_STATUSES,
    EndpointContext,
    EndpointResult,
    format_date_without_dashes,
    resolve_common,
    with_optional_raw,
)


logger = logging.getLogger(__name__)


def _resolve_date(value: Any) -> dt.date:
    if value is None:
        return dt.datetime.now(dt.timezone.utc)
    if isinstance(value, (dt.datetime, dt.date)):
        return value

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        return dt.datetime.fromisoformat(text)
    except ValueError:
        raise SchemaValidationError(
            endpoint="daily_trends.request",
            issues=["date: Expected a valid ISO date string or date object."],
        ) from None


def daily_trends(ctx: EndpointContext, params: Any, debug_raw: bool = False) -> EndpointResult:
    """
    Legacy daily trending searches.

    Upstream has retired this path in most regions; a 404 or 410 becomes
    EndpointUnavailableError pointing at trending_now.
    """
    request = validate_schema("daily_trends.request", DailyTrendsRequest, params)
    hl, tz = resolve_common(ctx, request)
    date = _resolve_date(request.date)

    try:
        response_json = ctx.request_json(
            endpoint="daily_trends",
            path="/trends/api/dailytrends",
            query={
                "hl": hl,
                "tz": tz,
                "geo": request.geo,
                "cat": request.category if request.category is not None else "all",
                "ed": format_date_without_dashes(date),
                "ns": request.ns if request.ns is not None else 15,
            },
            strip_google_prefix=True,
        )
    except TransportError as e:
        if e.status in GONE_STATUSES:
            logger.warning(f"daily_trends answered HTTP {e.status}; endpoint is retired")
            raise EndpointUnavailableError(
                endpoint="daily_trends",
                status=e.status,
                replacements=["trending_now"],
            ) from e
        raise

    response = validate_schema("daily_trends.response", DailyTrendsResponse, response_json)

    days = response.default.trending_searches_days
    trends = [item for day in days for item in day.trending_searches]

    return with_optional_raw({"days": days, "trends": trends}, response, debug_raw)
