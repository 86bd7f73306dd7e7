from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..errors import UnexpectedResponseError

DEFAULT_EXPLORE_TIME = "today 12-m"

# Statuses a decommissioned legacy path answers with.
GONE_STATUSES = (404, 410)


@dataclass(frozen=True)
class EndpointContext:
    """
    What an endpoint collaborator may use from the client.

    `request_json` and `request_text` take the same keyword arguments as
    RequestConfig (endpoint, path, method, query, headers, body and, for
    JSON, strip_google_prefix) and run the full rate-limit/retry pipeline.
    """

    default_hl: str
    default_tz: int
    request_json: Callable[..., Any]
    request_text: Callable[..., str]


@dataclass
class EndpointResult:
    data: Dict[str, Any]
    raw: Any = None


def with_optional_raw(data: Dict[str, Any], raw: Any, debug_raw: bool = False) -> EndpointResult:
    if debug_raw:
        return EndpointResult(data=data, raw=raw)
    return EndpointResult(data=data)


def resolve_common(ctx: EndpointContext, request: Any) -> Tuple[str, int]:
    """(hl, tz) from the request, falling back to the client defaults."""
    hl = getattr(request, "hl", None)
    tz = getattr(request, "tz", None)
    return (hl if hl is not None else ctx.default_hl, tz if tz is not None else ctx.default_tz)


def build_comparison_items(
    endpoint: str,
    keywords: Sequence[str],
    geo: Optional[Union[str, Sequence[str]]],
    time: str,
) -> List[Dict[str, str]]:
    """
    One comparison item per keyword.

    A single geo (string or 1-item list) applies to every keyword; a list
    must otherwise pair up with the keywords one to one.
    """
    if not geo:
        return [{"keyword": keyword, "time": time} for keyword in keywords]

    if isinstance(geo, str):
        return [{"keyword": keyword, "geo": geo, "time": time} for keyword in keywords]

    if len(geo) == 1:
        return [{"keyword": keyword, "geo": geo[0], "time": time} for keyword in keywords]

    if len(geo) != len(keywords):
        raise UnexpectedResponseError(
            endpoint=endpoint,
            message="When geo is a list, it must have length 1 or match the number of keywords.",
        )

    return [
        {"keyword": keyword, "geo": g, "time": time} for keyword, g in zip(keywords, geo)
    ]


def format_date_without_dashes(value: Union[dt.date, dt.datetime]) -> str:
    """YYYYMMDD; aware datetimes are converted to UTC first."""
    if isinstance(value, dt.datetime) and value.tzinfo is not None:
        value = value.astimezone(dt.timezone.utc)
    return value.strftime("%Y%m%d")
