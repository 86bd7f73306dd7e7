from __future__ import annotations

import re

# Anti-XSRF guard prepended to many Trends JSON bodies.
GOOGLE_PREFIX_PATTERN = re.compile(r"^\)\]\}',?\s*")


def strip_google_prefix(payload: str) -> str:
    """
    Remove the leading `)]}'` guard (and optional comma) and trim whitespace.

    Repeats until the text no longer starts with the guard, which keeps
    the function idempotent even for inputs such as `"  )]}'..."`.
    """
    text = payload.strip()
    while True:
        stripped = GOOGLE_PREFIX_PATTERN.sub("", text, count=1).strip()
        if stripped == text:
            return text
        text = stripped
