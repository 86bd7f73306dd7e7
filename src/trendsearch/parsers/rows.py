"""
Structural row sniffing for batchexecute payloads.

The RPC payloads are deeply nested anonymous arrays with no field names.
The rows we want are found by shape: among every nested list, keep the
ones whose items *all* satisfy a loose predicate, then take the longest.
This mirrors how the upstream UI data was reverse engineered, so the
predicates stay loose on purpose.
"""

from __future__ import annotations

from typing import Any, Callable, List


def find_deep_arrays(value: Any) -> List[List[Any]]:
    """Every list reachable from `value`, outermost first (depth-first)."""
    found: List[List[Any]] = []
    stack = [value]
    while stack:
        node = stack.pop()
        if not isinstance(node, list):
            continue
        found.append(node)
        stack.extend(reversed(node))
    return found


def pick_rows(payload: Any, predicate: Callable[[Any], bool]) -> List[List[Any]]:
    """Longest nested list whose every item matches `predicate` (first wins ties)."""
    best: List[Any] = []
    for candidate in find_deep_arrays(payload):
        if len(candidate) > len(best) and all(predicate(item) for item in candidate):
            best = candidate
    return list(best)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_trending_row(value: Any) -> bool:
    return (
        isinstance(value, list)
        and len(value) > 8
        and isinstance(value[0], str)
        and (_is_number(value[6]) or isinstance(value[6], str))
    )


def is_article_row(value: Any) -> bool:
    return (
        isinstance(value, list)
        and len(value) >= 3
        and isinstance(value[0], str)
        and isinstance(value[1], str)
    )


def is_article_key(value: Any) -> bool:
    return (
        isinstance(value, list)
        and len(value) == 3
        and _is_number(value[0])
        and isinstance(value[1], str)
        and isinstance(value[2], str)
    )
