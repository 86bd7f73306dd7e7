from __future__ import annotations

from typing import Any, Dict, List, Union

from .common import CommonRequest

# The legacy visualizer answers with either an array or an object; both pass.
HotTrendsLegacyResponse = Union[List[Any], Dict[str, Any]]


class HotTrendsLegacyRequest(CommonRequest):
    pass
