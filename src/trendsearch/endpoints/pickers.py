"""
Geo and category pickers: the trees of region codes and category ids the
explore endpoints accept.
"""

from __future__ import annotations

from typing import Any

from ..http.validation import validate_schema
from ..schemas.pickers import PickerRequest, PickerResponse
from .shared import EndpointContext, EndpointResult, with_optional_raw

GEO_PICKER_PATH = "/trends/api/explore/pickers/geo"
CATEGORY_PICKER_PATH = "/trends/api/explore/pickers/category"


def _picker(
    ctx: EndpointContext, endpoint: str, path: str, params: Any, debug_raw: bool
) -> EndpointResult:
    request = validate_schema(
        f"{endpoint}.request", PickerRequest, params if params is not None else {}
    )
    response_json = ctx.request_json(
        endpoint=endpoint,
        path=path,
        query={"hl": request.hl or ctx.default_hl},
        strip_google_prefix=True,
    )
    response = validate_schema(f"{endpoint}.response", PickerResponse, response_json)
    return with_optional_raw({"items": response}, response, debug_raw)


def geo_picker(ctx: EndpointContext, params: Any = None, debug_raw: bool = False) -> EndpointResult:
    return _picker(ctx, "geo_picker", GEO_PICKER_PATH, params, debug_raw)


def category_picker(
    ctx: EndpointContext, params: Any = None, debug_raw: bool = False
) -> EndpointResult:
    return _picker(ctx, "category_picker", CATEGORY_PICKER_PATH, params, debug_raw)
