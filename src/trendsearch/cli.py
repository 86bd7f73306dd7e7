#!/usr/bin/env python3
"""
TrendSearch - Command Line Interface

    trendsearch autocomplete "python"
    trendsearch interest-over-time python rust --geo US --time "today 3-m"
    trendsearch trending-now --geo DE --hours 4 --output json
    trendsearch top-charts --date 2023 --geo US
    trendsearch csv --kind related-queries python

Data goes to stdout; logs go to stderr (and optionally --log-file).
Exit codes:
    0 ok, 1 unknown error, 2 usage/config error, 3 endpoint unavailable,
    4 rate limited, 5 transport error, 6 schema drift
"""

from __future__ import annotations

import argparse
import datetime as dt
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, TextIO

from pydantic_core import to_jsonable_python

from . import endpoints
from .client import TrendSearchClient
from .config import ClientConfig
from .errors import (
    ConfigError,
    EndpointUnavailableError,
    RateLimitError,
    SchemaValidationError,
    TransportError,
    TrendSearchError,
    UnexpectedResponseError,
)
from .resilience.rate_limiter import RateLimitPolicy
from .resilience.retry import RetryPolicy

EXIT_OK = 0
EXIT_UNKNOWN = 1
EXIT_USAGE = 2
EXIT_ENDPOINT_UNAVAILABLE = 3
EXIT_RATE_LIMITED = 4
EXIT_TRANSPORT = 5
EXIT_SCHEMA_DRIFT = 6

CSV_KINDS: Dict[str, Callable[..., endpoints.EndpointResult]] = {
    "interest-over-time": endpoints.interest_over_time_csv,
    "interest-over-time-multirange": endpoints.interest_over_time_multirange_csv,
    "interest-by-region": endpoints.interest_by_region_csv,
    "related-queries": endpoints.related_queries_csv,
    "related-topics": endpoints.related_topics_csv,
}


# -----------------------------
# Utilities
# -----------------------------


def utc_now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds")


def setup_logging(log_level: str, log_file: Optional[Path]) -> logging.Logger:
    logger = logging.getLogger("trendsearch")
    logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))
    logger.handlers.clear()

    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    ch.setLevel(logger.level)
    logger.addHandler(ch)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        fh.setLevel(logger.level)
        logger.addHandler(fh)

    return logger


def to_json(value: Any, indent: Optional[int] = None) -> str:
    return json.dumps(to_jsonable_python(value, by_alias=False), indent=indent, ensure_ascii=False)


# -----------------------------
# Errors -> envelopes
# -----------------------------


def exit_code_for(error: BaseException) -> int:
    if isinstance(error, ConfigError):
        return EXIT_USAGE
    if isinstance(error, EndpointUnavailableError):
        return EXIT_ENDPOINT_UNAVAILABLE
    if isinstance(error, RateLimitError):
        return EXIT_RATE_LIMITED
    if isinstance(error, TransportError):
        return EXIT_TRANSPORT
    if isinstance(error, (SchemaValidationError, UnexpectedResponseError)):
        return EXIT_SCHEMA_DRIFT
    return EXIT_UNKNOWN


def error_envelope(error: BaseException) -> Dict[str, Any]:
    if isinstance(error, TrendSearchError):
        body = error.to_dict()
    else:
        body = {"code": "UNKNOWN_ERROR", "message": str(error), "details": {}}
    body["exit_code"] = exit_code_for(error)
    return {"ok": False, "error": body}


def write_error(error: BaseException, output: str, stdout: TextIO, stderr: TextIO) -> int:
    envelope = error_envelope(error)
    if output == "json":
        stdout.write(to_json(envelope) + "\n")
    else:
        err = envelope["error"]
        lines = [f"[{err['code']}] {err['message']}"]
        if err["details"]:
            lines.append(f"details: {to_json(err['details'], indent=2)}")
        stderr.write("\n".join(lines) + "\n")
    return envelope["error"]["exit_code"]


# -----------------------------
# Argument parsing
# -----------------------------


def _article_key(value: str) -> List[Any]:
    try:
        key = json.loads(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"article key must be a JSON array like '[1,\"id\",\"en\"]', got {value!r}"
        ) from None
    if not isinstance(key, list):
        raise argparse.ArgumentTypeError(f"article key must be a JSON array, got {value!r}")
    return key


def _chart_date(value: str) -> Any:
    """A bare year stays an int; anything else is passed on as an ISO date string."""
    return int(value) if value.isdigit() else value


def _common_options() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument("--base-url", help="Service origin (default: https://trends.google.com).")
    p.add_argument("--hl", help="Interface language, e.g. en-US.")
    p.add_argument("--tz", type=int, help="Timezone offset in minutes.")
    p.add_argument("--timeout", type=float, help="Per-attempt timeout in seconds.")
    p.add_argument("--max-retries", type=int, help="Retries after the first attempt.")
    p.add_argument("--retry-base-delay", type=float, help="Backoff base delay in seconds.")
    p.add_argument("--retry-max-delay", type=float, help="Backoff ceiling in seconds.")
    p.add_argument("--max-concurrent", type=int, help="Concurrent requests.")
    p.add_argument("--min-delay", type=float, help="Seconds between request starts.")
    p.add_argument("--user-agent", help="User-Agent header.")
    p.add_argument(
        "--output",
        choices=["pretty", "json"],
        help="pretty (indented data) or json (envelope). Default: pretty on a TTY, else json.",
    )
    p.add_argument("--raw", action="store_true", help="Include the raw upstream payload.")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    p.add_argument("--log-file", default="", help="Optional log file path.")
    return p


def _add_explore_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("keywords", nargs="+", help="One or more keywords to compare.")
    p.add_argument(
        "--geo",
        action="append",
        help="Region code; repeat once per keyword to give each its own region.",
    )
    p.add_argument("--time", help="Time range, e.g. 'today 12-m' or '2024-01-01 2024-06-30'.")
    p.add_argument("--category", type=int, help="Category id (default: 0, all).")
    p.add_argument(
        "--property",
        choices=["", "images", "news", "youtube", "froogle"],
        help="Search property (default: web search).",
    )


def build_parser() -> argparse.ArgumentParser:
    common = _common_options()
    p = argparse.ArgumentParser(prog="trendsearch", description="Google Trends from the command line")
    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    s = sub.add_parser("autocomplete", parents=[common], help="Topic suggestions for a keyword.")
    s.add_argument("keyword")

    for name, help_text in [
        ("explore", "Explore widgets for keywords."),
        ("interest-over-time", "Interest over time timeline."),
        ("interest-over-time-multirange", "Interest over time across several time ranges."),
        ("related-queries", "Top and rising related queries."),
        ("related-topics", "Top and rising related topics."),
    ]:
        _add_explore_arguments(sub.add_parser(name, parents=[common], help=help_text))

    s = sub.add_parser("interest-by-region", parents=[common], help="Interest by region.")
    _add_explore_arguments(s)
    s.add_argument("--resolution", choices=["COUNTRY", "REGION", "CITY", "DMA"])

    s = sub.add_parser("daily-trends", parents=[common], help="Daily trending searches (legacy).")
    s.add_argument("--geo", required=True)
    s.add_argument("--category")
    s.add_argument("--date", help="ISO date, e.g. 2024-01-31 (default: today).")
    s.add_argument("--ns", type=int)

    s = sub.add_parser("real-time-trends", parents=[common], help="Real-time trending stories (legacy).")
    s.add_argument("--geo", required=True)
    s.add_argument("--category")
    s.add_argument("--fi", type=int)
    s.add_argument("--fs", type=int)
    s.add_argument("--ri", type=int, help="Stories inspected (default: 300).")
    s.add_argument("--rs", type=int, help="Stories returned (default: 20).")
    s.add_argument("--sort", type=int)

    s = sub.add_parser("top-charts", parents=[common], help="Year-in-search top charts.")
    s.add_argument("--geo", help="Region code (default: GLOBAL).")
    s.add_argument("--date", type=_chart_date, help="Year or ISO date (default: this year).")
    s.add_argument("--mobile", action="store_true", help="Mobile charts.")

    sub.add_parser("geo-picker", parents=[common], help="Region codes accepted by --geo.")
    sub.add_parser("category-picker", parents=[common], help="Category ids accepted by --category.")
    sub.add_parser("hot-trends-legacy", parents=[common], help="Hot trends visualizer feed (legacy).")

    s = sub.add_parser("trending-now", parents=[common], help="Searches trending right now.")
    s.add_argument("--geo", default="US")
    s.add_argument("--language", default="en")
    s.add_argument("--hours", type=int, default=24, choices=[4, 24, 48, 168])

    s = sub.add_parser("trending-articles", parents=[common], help="Articles for trending items.")
    s.add_argument(
        "--article-key",
        dest="article_keys",
        action="append",
        type=_article_key,
        required=True,
        help="Article key as a JSON array, e.g. '[1,\"id\",\"en\"]'. Repeatable.",
    )
    s.add_argument("--article-count", type=int, default=5)

    s = sub.add_parser("csv", parents=[common], help="CSV export of a widget.")
    s.add_argument("--kind", required=True, choices=sorted(CSV_KINDS))
    _add_explore_arguments(s)
    s.add_argument("--resolution", choices=["COUNTRY", "REGION", "CITY", "DMA"])

    return p


def build_config(args: argparse.Namespace, environ: Optional[Dict[str, str]] = None) -> ClientConfig:
    """Environment first, then any flags given on the command line."""
    base = ClientConfig.from_env(environ)

    retry = RetryPolicy(
        max_retries=_pick(args.max_retries, base.retry.max_retries),
        base_delay=_pick(args.retry_base_delay, base.retry.base_delay),
        max_delay=_pick(args.retry_max_delay, base.retry.max_delay),
    )
    rate_limit = RateLimitPolicy(
        max_concurrent=_pick(args.max_concurrent, base.rate_limit.max_concurrent),
        min_delay=_pick(args.min_delay, base.rate_limit.min_delay),
    )
    return base.merged(
        base_url=args.base_url,
        hl=args.hl,
        tz=args.tz,
        timeout=args.timeout,
        user_agent=args.user_agent,
        retry=retry,
        rate_limit=rate_limit,
    )


def _pick(value: Any, default: Any) -> Any:
    return default if value is None else value


def _explore_params(args: argparse.Namespace) -> Dict[str, Any]:
    geo = args.geo
    if geo is not None and len(geo) == 1:
        geo = geo[0]
    params = {
        "keywords": args.keywords,
        "geo": geo,
        "time": args.time,
        "category": args.category,
        "property": args.property,
    }
    if getattr(args, "resolution", None):
        params["resolution"] = args.resolution
    return params


def request_for(args: argparse.Namespace) -> Dict[str, Any]:
    """Endpoint params for the parsed command, None-valued entries dropped."""
    command = args.command
    if command == "autocomplete":
        params: Dict[str, Any] = {"keyword": args.keyword}
    elif command == "daily-trends":
        params = {"geo": args.geo, "category": args.category, "date": args.date, "ns": args.ns}
    elif command == "real-time-trends":
        params = {
            "geo": args.geo,
            "category": args.category,
            "fi": args.fi,
            "fs": args.fs,
            "ri": args.ri,
            "rs": args.rs,
            "sort": args.sort,
        }
    elif command == "top-charts":
        params = {"geo": args.geo, "date": args.date, "is_mobile": args.mobile or None}
    elif command in ("geo-picker", "category-picker", "hot-trends-legacy"):
        params = {}
    elif command == "trending-now":
        params = {"geo": args.geo, "language": args.language, "hours": args.hours}
    elif command == "trending-articles":
        params = {"article_keys": args.article_keys, "article_count": args.article_count}
    else:
        params = _explore_params(args)
    return {k: v for k, v in params.items() if v is not None}


def endpoint_for(args: argparse.Namespace) -> Callable[..., endpoints.EndpointResult]:
    if args.command == "csv":
        return CSV_KINDS[args.kind]
    return getattr(endpoints, args.command.replace("-", "_"))


# -----------------------------
# Entry point
# -----------------------------


def main(
    argv: Optional[Sequence[str]] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    try:
        args = build_parser().parse_args(argv)
    except SystemExit as e:
        return EXIT_USAGE if e.code else EXIT_OK

    output = args.output or ("pretty" if stdout.isatty() else "json")
    log_file = Path(args.log_file) if args.log_file.strip() else None
    logger = setup_logging(args.log_level, log_file)

    request = request_for(args)
    endpoint_fn = endpoint_for(args)
    endpoint_name = endpoint_fn.__name__

    t0 = time.time()
    try:
        config = build_config(args)
        with TrendSearchClient(config) as client:
            result = endpoint_fn(client.context, request, args.raw)
    except Exception as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        return write_error(e, output, stdout, stderr)

    duration_ms = int((time.time() - t0) * 1000)
    logger.info(f"{args.command} finished in {duration_ms} ms")

    if output == "pretty":
        if args.command == "csv":
            stdout.write(result.data["csv"].rstrip("\n") + "\n")
        else:
            stdout.write(to_json(result.data, indent=2) + "\n")
        return EXIT_OK

    envelope: Dict[str, Any] = {
        "ok": True,
        "endpoint": endpoint_name,
        "request": request,
        "data": result.data,
        "meta": {
            "command": args.command,
            "duration_ms": duration_ms,
            "timestamp": utc_now_iso(),
        },
    }
    if args.raw:
        envelope["raw"] = result.raw
    stdout.write(to_json(envelope) + "\n")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
