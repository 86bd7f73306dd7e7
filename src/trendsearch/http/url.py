from __future__ import annotations

from typing import Mapping, Optional, Union
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

QueryValue = Union[str, int, float, bool, None]
QueryParams = Mapping[str, QueryValue]


def _stringify(value: Union[str, int, float, bool]) -> str:
    # Upstream expects JavaScript-style booleans.
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_url(base_url: str, path: str, query: Optional[QueryParams] = None) -> str:
    """
    Join `path` onto `base_url` and append the non-None query entries.

    Leading slashes are stripped from `path` so it always resolves below
    the base instead of resetting to the host root.
    """
    relative = path.lstrip("/")
    url = urljoin(f"{base_url.rstrip('/')}/", relative)

    if not query:
        return url

    parts = urlsplit(url)
    params = dict(parse_qsl(parts.query, keep_blank_values=True))
    for key, value in query.items():
        if value is None:
            continue
        params[key] = _stringify(value)

    return urlunsplit(parts._replace(query=urlencode(params)))
