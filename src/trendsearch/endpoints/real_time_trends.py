from __future__ import annotations

import logging
from typing import Any

from ..errors import EndpointUnavailableError, TransportError
from ..http.validation import validate_schema
from ..schemas.real_time_trends import RealTimeTrendsRequest, RealTimeTrendsResponse
from .shared import (
    GONE_STATUSES,
    EndpointContext,
    EndpointResult,
    resolve_common,
    with_optional_raw,
)


logger = logging.getLogger(__name__)


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value


def real_time_trends(
    ctx: EndpointContext, params: Any, debug_raw: bool = False
) -> EndpointResult:
    """
    Legacy real-time trending stories.

    Like daily_trends, a 404 or 410 means the path is retired; callers are
    pointed at trending_now and trending_articles.
    """
    request = validate_schema("real_time_trends.request", RealTimeTrendsRequest, params)
    hl, tz = resolve_common(ctx, request)

    try:
        response_json = ctx.request_json(
            endpoint="real_time_trends",
            path="/trends/api/realtimetrends",
            query={
                "hl": hl,
                "tz": tz,
                "geo": request.geo,
                "cat": _or_default(request.category, "all"),
                "fi": _or_default(request.fi, 0),
                "fs": _or_default(request.fs, 0),
                "ri": _or_default(request.ri, 300),
                "rs": _or_default(request.rs, 20),
                "sort": _or_default(request.sort, 0),
            },
            strip_google_prefix=True,
        )
    except TransportError as e:
        if e.status in GONE_STATUSES:
            logger.warning(f"real_time_trends answered HTTP {e.status}; endpoint is retired")
            raise EndpointUnavailableError(
                endpoint="real_time_trends",
                status=e.status,
                replacements=["trending_now", "trending_articles"],
            ) from e
        raise

    response = validate_schema(
        "real_time_trends.response", RealTimeTrendsResponse, response_json
    )
    return with_optional_raw(
        {"stories": response.story_summaries.trending_stories}, response, debug_raw
    )
