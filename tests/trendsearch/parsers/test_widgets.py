import pytest

from trendsearch.errors import UnexpectedResponseError
from trendsearch.parsers.widgets import select_widget
from trendsearch.schemas import ExploreWidget

WIDGETS = [
    ExploreWidget(request={"a": 1}, token="t1", id="TIMESERIES"),
    ExploreWidget(request={"b": 2}, token="t2", id="GEO_MAP"),
]


@pytest.mark.unit
def test_select_widget_by_id():
    assert select_widget("interest_by_region", WIDGETS, "GEO_MAP").token == "t2"


@pytest.mark.unit
def test_missing_widget_raises_unexpected_response():
    with pytest.raises(UnexpectedResponseError) as exc_info:
        select_widget("related_queries", WIDGETS, "RELATED_QUERIES")

    assert exc_info.value.endpoint == "related_queries"
    assert exc_info.value.message == "Widget 'RELATED_QUERIES' was not found in explore response."
