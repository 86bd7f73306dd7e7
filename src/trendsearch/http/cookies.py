"""
Minimal cookie passthrough for the Trends client.

The client never manages a login session; it only replays whatever
cookies upstream handed out (NID and friends), keyed by URL origin.
Anything implementing the CookieStore protocol can be plugged in.
"""

from __future__ import annotations

import re
import threading
from typing import Any, Dict, List, Optional, Protocol, Tuple
from urllib.parse import urlsplit

# A comma starts a new cookie only when `name=` follows it; the comma in
# `Expires=Wed, 21 Oct 2026 ...` is followed by the day of month.
COOKIE_BOUNDARY = re.compile(r",\s*(?=[^;,=\s]+=)")


class CookieStore(Protocol):
    def get_cookie_header(self, url: str) -> Optional[str]:
        ...

    def set_cookie_headers(self, url: str, set_cookie_headers: List[str]) -> None:
        ...


def _origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def split_set_cookie_header(set_cookie: str) -> List[str]:
    """
    Split a folded `Set-Cookie` header back into individual cookies.

    requests joins repeated headers with ", ", which collides with the
    comma inside Expires dates.
    """
    if not set_cookie:
        return []
    return [part.strip() for part in COOKIE_BOUNDARY.split(set_cookie) if part.strip()]


def get_set_cookie_headers(response: Any) -> List[str]:
    """
    Every `Set-Cookie` value of a response, one entry per header line.

    urllib3 keeps repeated headers apart (`response.raw.headers.getlist`);
    only when that is unavailable is the folded header split again.
    """
    raw_headers = getattr(getattr(response, "raw", None), "headers", None)
    if hasattr(raw_headers, "getlist"):
        return [value for value in raw_headers.getlist("Set-Cookie") if value]

    headers = getattr(response, "headers", None) or {}
    folded = headers.get("set-cookie") or headers.get("Set-Cookie")
    if not folded:
        return []
    return split_set_cookie_header(folded)


def _name_value(cookie: str) -> Optional[Tuple[str, str]]:
    name, _, value = cookie.partition("=")
    name = name.strip()
    if not name:
        return None
    return name, f"{name}={value.strip()}"


class MemoryCookieStore:
    """In-process cookie jar: one merged `Cookie` header per origin."""

    def __init__(self) -> None:
        self._cookies_by_origin: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get_cookie_header(self, url: str) -> Optional[str]:
        with self._lock:
            return self._cookies_by_origin.get(_origin(url))

    def set_cookie_headers(self, url: str, set_cookie_headers: List[str]) -> None:
        origin = _origin(url)
        with self._lock:
            merged: Dict[str, str] = {}

            existing = self._cookies_by_origin.get(origin, "")
            for cookie in existing.split(";"):
                pair = _name_value(cookie.strip())
                if pair:
                    merged[pair[0]] = pair[1]

            for header in set_cookie_headers:
                # Attributes (Path, Expires, ...) are not replayed.
                pair = _name_value(header.split(";")[0].strip())
                if pair:
                    merged[pair[0]] = pair[1]

            header_value = "; ".join(merged.values())
            if header_value:
                self._cookies_by_origin[origin] = header_value
