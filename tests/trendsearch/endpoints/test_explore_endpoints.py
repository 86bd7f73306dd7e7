"""
Unit tests for the explore-based endpoints.

The context's request primitives are mocked, so these tests pin down
what each endpoint asks for (path, query) and how it shapes the result.
"""

import json

import pytest

from trendsearch.endpoints import (
    autocomplete,
    build_comparison_items,
    explore,
    interest_by_region,
    interest_over_time,
    interest_over_time_multirange,
    related_queries,
    related_topics,
)
from trendsearch.errors import SchemaValidationError, UnexpectedResponseError
from trendsearch.schemas import ExploreRequest


@pytest.mark.unit
class TestAutocomplete:
    def test_quotes_keyword_and_returns_topics(self, make_ctx):
        ctx = make_ctx(
            [{"default": {"topics": [{"mid": "/m/05z1_", "title": "Python", "type": "Language"}]}}]
        )

        result = autocomplete(ctx, {"keyword": "c++ lang"})

        call = ctx.request_json.call_args.kwargs
        assert call["path"] == "/trends/api/autocomplete/c%2B%2B%20lang"
        assert call["query"] == {"hl": "en-US", "tz": 300}
        assert call["strip_google_prefix"] is True
        assert result.data["topics"][0].title == "Python"
        assert result.raw is None

    def test_invalid_request_makes_no_call(self, make_ctx):
        ctx = make_ctx()

        with pytest.raises(SchemaValidationError) as exc_info:
            autocomplete(ctx, {"keyword": ""})

        assert exc_info.value.endpoint == "autocomplete.request"
        ctx.request_json.assert_not_called()

    def test_debug_raw_returns_validated_payload(self, make_ctx):
        ctx = make_ctx([{"default": {"topics": []}}])

        result = autocomplete(ctx, {"keyword": "python", "hl": "de"}, debug_raw=True)

        assert ctx.request_json.call_args.kwargs["query"]["hl"] == "de"
        assert result.raw.default.topics == []


@pytest.mark.unit
class TestExplore:
    def test_builds_req_with_defaults(self, make_ctx, explore_response):
        ctx = make_ctx([explore_response])

        result = explore(ctx, {"keywords": ["python", "rust"], "geo": "US"})

        call = ctx.request_json.call_args.kwargs
        assert call["path"] == "/trends/api/explore"
        req = json.loads(call["query"]["req"])
        assert req == {
            "comparisonItem": [
                {"keyword": "python", "geo": "US", "time": "today 12-m"},
                {"keyword": "rust", "geo": "US", "time": "today 12-m"},
            ],
            "category": 0,
            "property": "",
        }
        assert [w.id for w in result.data["widgets"]] == [
            "TIMESERIES",
            "GEO_MAP",
            "RELATED_QUERIES",
            "RELATED_TOPICS",
        ]

    def test_accepts_request_model(self, make_ctx, explore_response):
        ctx = make_ctx([explore_response])

        explore(ctx, ExploreRequest(keywords=["python"], time="now 7-d", category=5))

        req = json.loads(ctx.request_json.call_args.kwargs["query"]["req"])
        assert req["comparisonItem"] == [{"keyword": "python", "time": "now 7-d"}]
        assert req["category"] == 5

    def test_malformed_response_is_schema_error(self, make_ctx):
        ctx = make_ctx([{"widgets": [{"token": "t"}]}])

        with pytest.raises(SchemaValidationError) as exc_info:
            explore(ctx, {"keywords": ["python"]})

        assert exc_info.value.endpoint == "explore.response"


@pytest.mark.unit
class TestComparisonItems:
    def test_geo_list_pairs_with_keywords(self):
        items = build_comparison_items("explore", ["a", "b"], ["US", "DE"], "t")
        assert items == [
            {"keyword": "a", "geo": "US", "time": "t"},
            {"keyword": "b", "geo": "DE", "time": "t"},
        ]

    def test_single_geo_list_applies_to_all(self):
        items = build_comparison_items("explore", ["a", "b"], ["US"], "t")
        assert [i["geo"] for i in items] == ["US", "US"]

    def test_mismatched_geo_list_raises(self):
        with pytest.raises(UnexpectedResponseError):
            build_comparison_items("explore.request", ["a", "b", "c"], ["US", "DE"], "t")


@pytest.mark.unit
class TestWidgetEndpoints:
    def test_interest_over_time_uses_timeseries_widget(self, make_ctx, explore_response):
        timeline = {
            "default": {
                "timelineData": [
                    {"time": "1700000000", "formattedTime": "Nov 2023", "value": [42], "hasData": [True]}
                ]
            }
        }
        ctx = make_ctx([explore_response, timeline])

        result = interest_over_time(ctx, {"keywords": ["python"]})

        assert ctx.request_json.call_count == 2
        call = ctx.request_json.call_args.kwargs
        assert call["endpoint"] == "interest_over_time"
        assert call["path"] == "/trends/api/widgetdata/multiline"
        assert call["query"]["token"] == "tok-timeseries"
        assert json.loads(call["query"]["req"]) == explore_response["widgets"][0]["request"]
        assert result.data["timeline"][0].value == [42]

    def test_interest_over_time_multirange_columns(self, make_ctx, explore_response):
        multirange = {
            "default": {
                "timelineData": [
                    {
                        "columnData": [
                            {"time": "1700000000", "value": 42, "formattedValue": "42", "hasData": True},
                            {"time": "1670000000", "value": [7, 9], "formattedValue": ["7", "9"]},
                        ]
                    }
                ],
                "averages": [40, 8],
            }
        }
        ctx = make_ctx([explore_response, multirange])

        result = interest_over_time_multirange(ctx, {"keywords": ["python"]})

        call = ctx.request_json.call_args.kwargs
        assert call["endpoint"] == "interest_over_time_multirange"
        assert call["path"] == "/trends/api/widgetdata/multirange"
        assert call["query"]["token"] == "tok-timeseries"
        columns = result.data["timeline"][0].column_data
        assert [c.value for c in columns] == [42, [7, 9]]
        assert columns[0].has_data is True

    def test_interest_by_region_overrides_resolution(self, make_ctx, explore_response):
        regions = {"default": {"geoMapData": [{"geoCode": "US-CA", "geoName": "California", "value": [100]}]}}
        ctx = make_ctx([explore_response, regions])

        result = interest_by_region(ctx, {"keywords": ["python"], "resolution": "REGION"})

        call = ctx.request_json.call_args.kwargs
        assert call["path"] == "/trends/api/widgetdata/comparedgeo"
        assert json.loads(call["query"]["req"])["resolution"] == "REGION"
        assert result.data["regions"][0].geo_name == "California"

    def test_related_queries_splits_top_and_rising(self, make_ctx, explore_response):
        related = {
            "default": {
                "rankedList": [
                    {"rankedKeyword": [{"query": "python tutorial", "value": 100}]},
                    {"rankedKeyword": [{"query": "python 3.13", "value": 4500}]},
                ]
            }
        }
        ctx = make_ctx([explore_response, related])

        result = related_queries(ctx, {"keywords": ["python"]})

        assert ctx.request_json.call_args.kwargs["query"]["token"] == "tok-rq"
        assert [q.query for q in result.data["top"]] == ["python tutorial"]
        assert [q.query for q in result.data["rising"]] == ["python 3.13"]

    def test_related_queries_without_rising_list(self, make_ctx, explore_response):
        related = {"default": {"rankedList": [{"rankedKeyword": []}]}}
        ctx = make_ctx([explore_response, related])

        assert related_queries(ctx, {"keywords": ["python"]}).data["rising"] == []

    def test_related_topics(self, make_ctx, explore_response):
        related = {
            "default": {
                "rankedList": [
                    {
                        "rankedKeyword": [
                            {
                                "topic": {"mid": "/m/05z1_", "title": "Python", "type": "Language"},
                                "value": "Breakout",
                            }
                        ]
                    }
                ]
            }
        }
        ctx = make_ctx([explore_response, related])

        result = related_topics(ctx, {"keywords": ["python"]})

        assert ctx.request_json.call_args.kwargs["query"]["token"] == "tok-rt"
        assert result.data["top"][0].value == "Breakout"
        assert result.data["rising"] == []

    def test_missing_widget_is_unexpected_response(self, make_ctx):
        ctx = make_ctx([{"widgets": []}])

        with pytest.raises(UnexpectedResponseError) as exc_info:
            interest_over_time(ctx, {"keywords": ["python"]})

        assert exc_info.value.endpoint == "interest_over_time"
        assert ctx.request_json.call_count == 1
