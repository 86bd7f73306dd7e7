from __future__ import annotations

from typing import Sequence

from ..errors import UnexpectedResponseError
from ..schemas.common import ExploreWidget


def select_widget(endpoint: str, widgets: Sequence[ExploreWidget], widget_id: str) -> ExploreWidget:
    """Pick the explore widget whose id matches, e.g. TIMESERIES or GEO_MAP."""
    for widget in widgets:
        if widget.id == widget_id:
            return widget

    raise UnexpectedResponseError(
        endpoint=endpoint,
        message=f"Widget '{widget_id}' was not found in explore response.",
    )
