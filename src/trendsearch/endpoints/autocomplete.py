from __future__ import annotations

from typing import Any
from urllib.parse import quote

from ..http.validation import validate_schema
from ..schemas.explore import AutocompleteRequest, AutocompleteResponse
from .shared import EndpointContext, EndpointResult, resolve_common, with_optional_raw


def autocomplete(ctx: EndpointContext, params: Any, debug_raw: bool = False) -> EndpointResult:
    """Topic suggestions for a partial keyword."""
    request = validate_schema("autocomplete.request", AutocompleteRequest, params)
    hl, tz = resolve_common(ctx, request)

    response_json = ctx.request_json(
        endpoint="autocomplete",
        path=f"/trends/api/autocomplete/{quote(request.keyword, safe='')}",
        query={"hl": hl, "tz": tz},
        strip_google_prefix=True,
    )

    response = validate_schema("autocomplete.response", AutocompleteResponse, response_json)

    return with_optional_raw({"topics": response.default.topics}, response, debug_raw)
