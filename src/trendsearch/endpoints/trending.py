from __future__ import annotations

import datetime as dt
import json
import math
from typing import Any, Dict, List

from ..errors import SchemaValidationError
from ..http.validation import validate_schema
from ..parsers.batchexecute import (
    BATCHEXECUTE_CONTENT_TYPE,
    BATCHEXECUTE_PATH,
    encode_batchexecute_body,
    extract_batchexecute_payload,
)
from ..parsers.rows import is_article_key, is_article_row, is_trending_row, pick_rows
from ..schemas.trending import (
    TrendingArticleItem,
    TrendingArticlesRequest,
    TrendingNowItem,
    TrendingNowRequest,
)
from .shared import EndpointContext, EndpointResult, with_optional_raw

TRENDING_NOW_RPC = "i0OFE"
TRENDING_ARTICLES_RPC = "w4opAf"


# ---------------------------------------------------
# Row normalization
# ---------------------------------------------------
def _at(row: List[Any], index: int) -> Any:
    return row[index] if len(row) > index else None


def _to_number(value: Any) -> float:
    """
    Loose numeric coercion for positional row cells.

    Missing cells count as 0; anything that cannot be read as a number
    becomes NaN, which the item schema then rejects.
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        if not value.strip():
            return 0.0
        try:
            return float(value)
        except ValueError:
            return math.nan
    return math.nan


def _iso_utc(epoch_seconds: float, endpoint: str) -> str:
    try:
        when = dt.datetime.fromtimestamp(epoch_seconds, tz=dt.timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise SchemaValidationError(
            endpoint=endpoint,
            issues=[f"active_time: timestamp {epoch_seconds!r} is out of range"],
        ) from None
    return when.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_trending_row(row: List[Any], endpoint: str) -> TrendingNowItem:
    """
    Map one positional trending-now row to a TrendingNowItem.

    Known cells: 0 keyword, 3 [started_at epoch, ...], 6 search volume,
    8 growth rate, 9 related keywords, 11 article keys.
    """
    started = _at(row, 3)
    if isinstance(started, list) and started and isinstance(started[0], (int, float)):
        active_timestamp = started[0]
    else:
        active_timestamp = int(dt.datetime.now(dt.timezone.utc).timestamp())

    related = _at(row, 9)
    related_keywords = [k for k in related if isinstance(k, str)] if isinstance(related, list) else []

    keys = _at(row, 11)
    article_keys = [k for k in keys if is_article_key(k)] if isinstance(keys, list) else []

    data: Dict[str, Any] = {
        "keyword": row[0],
        "traffic": _to_number(_at(row, 6)),
        "traffic_growth_rate": _to_number(_at(row, 8)),
        "active_time": _iso_utc(active_timestamp, endpoint),
        "related_keywords": related_keywords,
        "article_keys": article_keys,
    }
    return validate_schema(endpoint, TrendingNowItem, data)


def normalize_article_row(row: List[Any], endpoint: str) -> TrendingArticleItem:
    """Cells: 0 title, 1 url, 2 source, 3 press date parts, 4 image url."""
    data = {
        "title": row[0],
        "url": row[1],
        "source": _at(row, 2),
        "press_date": _at(row, 3),
        "image": _at(row, 4),
    }
    return validate_schema(endpoint, TrendingArticleItem, data)


def _request_rpc(ctx: EndpointContext, endpoint: str, rpc_id: str, payload: Any) -> str:
    return ctx.request_text(
        endpoint=endpoint,
        path=BATCHEXECUTE_PATH,
        method="POST",
        headers={"content-type": BATCHEXECUTE_CONTENT_TYPE},
        body=encode_batchexecute_body(rpc_id, json.dumps(payload, separators=(",", ":"))),
    )


# ---------------------------------------------------
# Endpoints
# ---------------------------------------------------
def trending_now(ctx: EndpointContext, params: Any, debug_raw: bool = False) -> EndpointResult:
    """Searches trending right now in a region, over the last `hours`."""
    request = validate_schema("trending_now.request", TrendingNowRequest, params)

    response_text = _request_rpc(
        ctx,
        "trending_now",
        TRENDING_NOW_RPC,
        [None, None, request.geo, 0, request.language, request.hours, 1],
    )
    payload = extract_batchexecute_payload("trending_now", response_text, TRENDING_NOW_RPC)

    items = [
        normalize_trending_row(row, "trending_now.response.item")
        for row in pick_rows(payload, is_trending_row)
    ]

    return with_optional_raw({"items": items}, payload, debug_raw)


def trending_articles(
    ctx: EndpointContext, params: Any, debug_raw: bool = False
) -> EndpointResult:
    """News articles behind trending-now items, looked up by their article keys."""
    request = validate_schema("trending_articles.request", TrendingArticlesRequest, params)

    response_text = _request_rpc(
        ctx,
        "trending_articles",
        TRENDING_ARTICLES_RPC,
        [[list(key) for key in request.article_keys], request.article_count],
    )
    payload = extract_batchexecute_payload(
        "trending_articles", response_text, TRENDING_ARTICLES_RPC
    )

    articles = [
        normalize_article_row(row, "trending_articles.response.item")
        for row in pick_rows(payload, is_article_row)
    ]

    return with_optional_raw({"articles": articles}, payload, debug_raw)
