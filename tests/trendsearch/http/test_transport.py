"""
Unit tests for the HTTP transport.

Covers the single-attempt mapping (status codes, network failures,
headers, cookies, proxy hook) and the composed fetch helpers that add
rate limiting, retry and JSON decoding.
"""

import email.utils
import time
from unittest.mock import MagicMock

import pytest
import requests

from trendsearch.errors import (
    EndpointUnavailableError,
    RateLimitError,
    SchemaValidationError,
    TransportError,
    UnexpectedResponseError,
)
from trendsearch.http.cookies import MemoryCookieStore
from trendsearch.http.transport import (
    OutboundRequest,
    RequestConfig,
    classify_retry,
    fetch_google_json,
    fetch_text,
    parse_retry_after,
    request_once,
    truncate,
)


def _explore_request(**overrides):
    fields = dict(
        endpoint="explore",
        path="/trends/api/explore",
        query={"hl": "en-US", "tz": 0},
    )
    fields.update(overrides)
    return RequestConfig(**fields)


# ---------------------------------------------------
# Single attempt
# ---------------------------------------------------
@pytest.mark.unit
class TestRequestOnce:
    def test_success_returns_body_text(self, make_runtime, fake_response):
        runtime = make_runtime([fake_response(200, "hello")])

        assert request_once(runtime, _explore_request()) == "hello"

        method, url = runtime.session.request.call_args.args
        assert method == "GET"
        assert url.startswith("https://trends.google.com/trends/api/explore?")
        assert runtime.session.request.call_args.kwargs["timeout"] == 5.0

    def test_accept_language_derived_from_hl(self, make_runtime, fake_response):
        runtime = make_runtime([fake_response(200, "{}")])

        request_once(runtime, _explore_request())

        headers = runtime.session.request.call_args.kwargs["headers"]
        assert headers["Accept-Language"] == "en-US"

    def test_explicit_accept_language_is_not_overridden(self, make_runtime, fake_response):
        runtime = make_runtime([fake_response(200, "{}")])

        request_once(runtime, _explore_request(headers={"accept-language": "de-DE"}))

        headers = runtime.session.request.call_args.kwargs["headers"]
        assert headers["accept-language"] == "de-DE"
        assert "Accept-Language" not in headers

    def test_user_agent_from_runtime(self, make_runtime, fake_response):
        runtime = make_runtime([fake_response(200, "{}")], user_agent="trendsearch-tests/1.0")

        request_once(runtime, _explore_request())

        headers = runtime.session.request.call_args.kwargs["headers"]
        assert headers["User-Agent"] == "trendsearch-tests/1.0"

    def test_body_is_sent_utf8_encoded(self, make_runtime, fake_response):
        runtime = make_runtime([fake_response(200, "ok")])

        request_once(runtime, _explore_request(method="post", body="f.req=%5B%5D"))

        call = runtime.session.request.call_args
        assert call.args[0] == "POST"
        assert call.kwargs["data"] == b"f.req=%5B%5D"

    def test_http_400_raises_transport_error_with_truncated_body(
        self, make_runtime, fake_response
    ):
        runtime = make_runtime([fake_response(400, "x" * 1000)])

        with pytest.raises(TransportError) as exc_info:
            request_once(runtime, _explore_request())

        error = exc_info.value
        assert error.status == 400
        assert error.url.startswith("https://trends.google.com/trends/api/explore")
        assert error.response_body == "x" * 400 + "..."

    def test_http_429_raises_rate_limit_error_with_retry_after(
        self, make_runtime, fake_response
    ):
        runtime = make_runtime([fake_response(429, "slow down", {"Retry-After": "3"})])

        with pytest.raises(RateLimitError) as exc_info:
            request_once(runtime, _explore_request())

        assert exc_info.value.status == 429
        assert exc_info.value.retry_after == 3.0
        assert exc_info.value.retry_after_ms == 3000

    def test_timeout_becomes_transport_error_without_status(self, make_runtime):
        runtime = make_runtime()
        runtime.session.request = MagicMock(side_effect=requests.Timeout("timeout"))

        with pytest.raises(TransportError) as exc_info:
            request_once(runtime, _explore_request())

        assert exc_info.value.status is None
        assert "timed out" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, requests.Timeout)

    def test_connection_error_becomes_transport_error(self, make_runtime):
        runtime = make_runtime()
        runtime.session.request = MagicMock(
            side_effect=requests.ConnectionError("connection refused")
        )

        with pytest.raises(TransportError) as exc_info:
            request_once(runtime, _explore_request())

        assert exc_info.value.status is None
        assert "connection refused" in exc_info.value.message


@pytest.mark.unit
class TestCookiesAndProxy:
    def test_cookies_round_trip_through_store(self, make_runtime, fake_response):
        """
        Given a cookie store
        When the first response sets a cookie
        Then the second request replays it.
        """
        store = MemoryCookieStore()
        runtime = make_runtime(
            [
                fake_response(200, "{}", {"Set-Cookie": "NID=abc; Path=/; HttpOnly"}),
                fake_response(200, "{}"),
            ],
            cookie_store=store,
        )

        request_once(runtime, _explore_request())
        request_once(runtime, _explore_request())

        first_headers = runtime.session.request.call_args_list[0].kwargs["headers"]
        second_headers = runtime.session.request.call_args_list[1].kwargs["headers"]
        assert "Cookie" not in first_headers
        assert second_headers["Cookie"] == "NID=abc"

    def test_proxy_hook_can_rewrite_request(self, make_runtime, fake_response):
        def hook(outbound: OutboundRequest) -> OutboundRequest:
            return OutboundRequest(
                method=outbound.method,
                url=outbound.url.replace("https://trends.google.com", "https://proxy.local"),
                headers={**outbound.headers, "X-Proxy": "1"},
                body=outbound.body,
            )

        runtime = make_runtime([fake_response(200, "{}")], proxy_hook=hook)

        request_once(runtime, _explore_request())

        call = runtime.session.request.call_args
        assert call.args[1].startswith("https://proxy.local/trends/api/explore")
        assert call.kwargs["headers"]["X-Proxy"] == "1"

    def test_proxy_hook_returning_none_keeps_request(self, make_runtime, fake_response):
        runtime = make_runtime([fake_response(200, "{}")], proxy_hook=lambda outbound: None)

        request_once(runtime, _explore_request())

        assert runtime.session.request.call_args.args[1].startswith("https://trends.google.com/")


# ---------------------------------------------------
# Helpers
# ---------------------------------------------------
@pytest.mark.unit
class TestHelpers:
    def test_truncate(self):
        assert truncate("short") == "short"
        assert truncate("abcdef", max_length=3) == "abc..."

    def test_parse_retry_after_seconds(self):
        assert parse_retry_after("3") == 3.0
        assert parse_retry_after(" 1.5 ") == 1.5

    def test_parse_retry_after_http_date(self):
        future = email.utils.formatdate(time.time() + 60, usegmt=True)
        seconds = parse_retry_after(future)
        assert seconds is not None
        assert 55 <= seconds <= 61

    def test_parse_retry_after_past_date_is_zero(self):
        past = email.utils.formatdate(time.time() - 600, usegmt=True)
        assert parse_retry_after(past) == 0.0

    @pytest.mark.parametrize("value", [None, "", "soon", "nan", "inf"])
    def test_parse_retry_after_invalid(self, value):
        assert parse_retry_after(value) is None

    @pytest.mark.parametrize(
        "error, retryable, reason",
        [
            (RateLimitError("429", url="u"), True, "rate-limit"),
            (TransportError("net", url="u"), True, "network"),
            (TransportError("5xx", url="u", status=503), True, "server-error"),
            (TransportError("4xx", url="u", status=404), False, "client-error"),
            (SchemaValidationError("e", ["(root): bad"]), False, "terminal"),
            (UnexpectedResponseError("e", "missing"), False, "terminal"),
            (EndpointUnavailableError("e", status=410), False, "terminal"),
            (RuntimeError("boom"), True, "unknown"),
        ],
    )
    def test_classify_retry(self, error, retryable, reason):
        decision = classify_retry(error)
        assert decision.retryable is retryable
        assert decision.reason == reason


# ---------------------------------------------------
# Composed fetches
# ---------------------------------------------------
@pytest.mark.unit
class TestFetch:
    def test_http_400_is_attempted_once(self, make_runtime, fake_response):
        runtime = make_runtime([fake_response(400, "bad request")])

        with pytest.raises(TransportError) as exc_info:
            fetch_text(runtime, _explore_request())

        assert exc_info.value.status == 400
        assert runtime.session.request.call_count == 1

    def test_429_then_200_succeeds_on_second_attempt(
        self, make_runtime, fake_response, no_sleep
    ):
        runtime = make_runtime(
            [
                fake_response(429, "", {"Retry-After": "1"}),
                fake_response(200, '{"ok": true}'),
            ]
        )

        assert fetch_google_json(runtime, _explore_request()) == {"ok": True}
        assert runtime.session.request.call_count == 2
        assert no_sleep == [1.0]

    def test_retry_after_is_capped(self, make_runtime, fake_response, no_sleep):
        runtime = make_runtime(
            [
                fake_response(429, "", {"Retry-After": "3600"}),
                fake_response(200, "[]"),
            ]
        )

        fetch_google_json(runtime, _explore_request())

        assert no_sleep == [120.0]

    def test_server_errors_exhaust_retries(self, make_runtime, fake_response):
        runtime = make_runtime([fake_response(503, "down")] * 3, max_retries=2)

        with pytest.raises(TransportError) as exc_info:
            fetch_text(runtime, _explore_request())

        assert exc_info.value.status == 503
        assert runtime.session.request.call_count == 3

    def test_strips_prefix_when_requested(self, make_runtime, fake_response):
        runtime = make_runtime([fake_response(200, ')]}\'\n{"default": {"topics": []}}')])

        data = fetch_google_json(runtime, _explore_request(strip_google_prefix=True))

        assert data == {"default": {"topics": []}}

    def test_invalid_json_is_transport_error_and_not_retried(
        self, make_runtime, fake_response
    ):
        runtime = make_runtime([fake_response(200, "<html>nope</html>")])

        with pytest.raises(TransportError) as exc_info:
            fetch_google_json(runtime, _explore_request())

        error = exc_info.value
        assert error.status is None
        assert "Invalid JSON received from explore" in error.message
        assert error.response_body == "<html>nope</html>"
        assert error.url.startswith("https://trends.google.com/trends/api/explore")
        assert runtime.session.request.call_count == 1

    def test_prefixed_body_without_stripping_is_invalid_json(self, make_runtime, fake_response):
        runtime = make_runtime([fake_response(200, ')]}\'\n{"a": 1}')])

        with pytest.raises(TransportError):
            fetch_google_json(runtime, _explore_request())


# ---------------------------------------------------
# Per-attempt deadline
# ---------------------------------------------------
class _Clock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.mark.unit
class TestAttemptDeadline:
    def test_body_is_streamed_and_response_closed(self, make_runtime, fake_response):
        response = fake_response(200, "hello")
        runtime = make_runtime([response])

        assert request_once(runtime, _explore_request()) == "hello"

        assert runtime.session.request.call_args.kwargs["stream"] is True
        assert response.closed is True

    def test_slow_drip_body_times_out_at_deadline(self, make_runtime, fake_response):
        """
        Given a 1s timeout
        When the server sends one byte every 0.3s
        Then the attempt fails once 1s has passed since it started.
        """
        clock = _Clock()
        response = fake_response(
            200, chunks=[b"x"] * 10, on_chunk=lambda: clock.advance(0.3)
        )
        runtime = make_runtime([response], timeout=1.0, clock=clock)

        with pytest.raises(TransportError) as exc_info:
            request_once(runtime, _explore_request())

        assert exc_info.value.status is None
        assert "timed out after 1.0s" in exc_info.value.message
        assert 100.9 < clock.now < 101.6
        assert response.closed is True

    def test_read_timeout_while_streaming(self, make_runtime):
        response = MagicMock()
        response.iter_content = MagicMock(side_effect=requests.ReadTimeout("read timed out"))
        runtime = make_runtime([response], timeout=2.0)

        with pytest.raises(TransportError) as exc_info:
            request_once(runtime, _explore_request())

        assert exc_info.value.status is None
        assert isinstance(exc_info.value.__cause__, requests.ReadTimeout)
        response.close.assert_called_once()

    def test_each_retry_gets_a_fresh_budget(self, make_runtime, fake_response, no_sleep):
        clock = _Clock()
        slow = fake_response(200, chunks=[b"x"] * 5, on_chunk=lambda: clock.advance(0.5))
        fast = fake_response(200, '{"ok": true}')
        runtime = make_runtime([slow, fast], timeout=1.0, clock=clock)

        assert fetch_google_json(runtime, _explore_request()) == {"ok": True}
        assert runtime.session.request.call_count == 2

    def test_multiple_set_cookie_lines_are_all_stored(self, make_runtime, fake_response):
        store = MemoryCookieStore()
        runtime = make_runtime(
            [
                fake_response(
                    200,
                    "{}",
                    {
                        "Set-Cookie": [
                            "A=1; Path=/; Expires=Wed, 21 Oct 2026 07:28:00 GMT",
                            "B=2; Path=/",
                        ]
                    },
                ),
                fake_response(200, "{}"),
            ],
            cookie_store=store,
        )

        request_once(runtime, _explore_request())
        request_once(runtime, _explore_request())

        assert runtime.session.request.call_args.kwargs["headers"]["Cookie"] == "A=1; B=2"


@pytest.mark.unit
def test_rate_limited_then_prefixed_json_succeeds(make_runtime, fake_response, no_sleep):
    runtime = make_runtime(
        [
            fake_response(429, "Too many requests"),
            fake_response(200, ')]}\'\n{"ok":true}'),
        ],
        max_retries=1,
    )

    result = fetch_google_json(runtime, _explore_request(strip_google_prefix=True))

    assert result == {"ok": True}
    assert runtime.session.request.call_count == 2
    assert len(no_sleep) == 1
