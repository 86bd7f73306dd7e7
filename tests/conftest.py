"""
Shared fixtures for the TrendSearch test suite.

No test touches the network: sessions are MagicMocks whose `request`
returns FakeResponse objects.
"""

import copy
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from requests.structures import CaseInsensitiveDict
from urllib3 import HTTPHeaderDict

from trendsearch.endpoints import EndpointContext
from trendsearch.http.transport import FetchRuntime
from trendsearch.resilience.rate_limiter import RateLimiter
from trendsearch.resilience.retry import RetryPolicy

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without network access")


class FakeResponse:
    """
    The parts of requests.Response the transport reads.

    A header given as a list becomes repeated header lines on `raw`, and
    is folded with ", " on `headers` the way requests does it. `chunks`
    overrides how the body is streamed; `on_chunk` runs before each one.
    """

    def __init__(self, status_code=200, text="", headers=None, chunks=None, on_chunk=None):
        self.status_code = status_code
        self.text = text
        self.encoding = "utf-8"
        self.closed = False
        self._chunks = chunks
        self._on_chunk = on_chunk

        raw_headers = HTTPHeaderDict()
        folded = {}
        for name, value in (headers or {}).items():
            values = value if isinstance(value, list) else [value]
            for item in values:
                raw_headers.add(name, item)
            folded[name] = ", ".join(values)
        self.raw = SimpleNamespace(headers=raw_headers)
        self.headers = CaseInsensitiveDict(folded)

    def iter_content(self, chunk_size=1, decode_unicode=False):
        chunks = self._chunks if self._chunks is not None else [self.text.encode("utf-8")]
        for chunk in chunks:
            if self._on_chunk is not None:
                self._on_chunk()
            yield chunk

    def close(self):
        self.closed = True


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def make_runtime():
    """Factory for a FetchRuntime over a mocked session with instant retries."""

    def _make(responses=None, max_retries=3, **kwargs):
        session = MagicMock()
        if responses is not None:
            session.request = MagicMock(side_effect=list(responses))
        kwargs.setdefault("base_url", "https://trends.google.com")
        kwargs.setdefault("timeout", 5.0)
        return FetchRuntime(
            session=session,
            retry_policy=RetryPolicy(max_retries=max_retries, base_delay=0.0, max_delay=0.0),
            rate_limiter=RateLimiter(max_concurrent=1, min_delay=0.0),
            **kwargs,
        )

    return _make


@pytest.fixture
def no_sleep(monkeypatch):
    """Record backoff sleeps instead of waiting."""
    slept = []
    monkeypatch.setattr("trendsearch.resilience.retry.time.sleep", slept.append)
    return slept


@pytest.fixture
def load_fixture():
    def _load(relative_path):
        return (FIXTURES_DIR / relative_path).read_text(encoding="utf-8")

    return _load


EXPLORE_RESPONSE = {
    "widgets": [
        {
            "request": {"time": "today 12-m", "comparisonItem": [{"keyword": "python"}]},
            "token": "tok-timeseries",
            "id": "TIMESERIES",
            "title": "Interest over time",
        },
        {
            "request": {"geo": {}, "resolution": "COUNTRY"},
            "token": "tok-geo",
            "id": "GEO_MAP",
        },
        {"request": {"restriction": {}}, "token": "tok-rq", "id": "RELATED_QUERIES"},
        {"request": {"restriction": {}}, "token": "tok-rt", "id": "RELATED_TOPICS"},
    ]
}


@pytest.fixture
def make_ctx():
    """EndpointContext whose request primitives are MagicMocks."""

    def _make(json_responses=None, text_responses=None):
        return EndpointContext(
            default_hl="en-US",
            default_tz=300,
            request_json=MagicMock(side_effect=list(json_responses or [])),
            request_text=MagicMock(side_effect=list(text_responses or [])),
        )

    return _make


@pytest.fixture
def explore_response():
    return copy.deepcopy(EXPLORE_RESPONSE)
