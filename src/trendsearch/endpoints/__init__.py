"""
TrendSearch - Endpoint Collaborators

One plain function per Trends endpoint, each with the signature

    endpoint(ctx: EndpointContext, params, debug_raw=False) -> EndpointResult

`params` is a mapping (snake_case or camelCase keys) or the endpoint's
request model. The function validates it, calls the service through
`ctx.request_json` / `ctx.request_text`, validates the response and
returns the normalized data (plus the raw payload when debug_raw is set).
"""

# -----------------------------------------------------------------------------
# Shared plumbing
# -----------------------------------------------------------------------------
from .shared import (
    EndpointContext,
    EndpointResult,
    build_comparison_items,
    format_date_without_dashes,
    resolve_common,
    with_optional_raw,
)

# -----------------------------------------------------------------------------
# JSON endpoints
# -----------------------------------------------------------------------------
from .autocomplete import autocomplete
from .daily_trends import daily_trends
from .explore import explore
from .hot_trends import hot_trends_legacy
from .pickers import category_picker, geo_picker
from .real_time_trends import real_time_trends
from .top_charts import top_charts
from .widget_data import (
    interest_by_region,
    interest_over_time,
    interest_over_time_multirange,
    related_queries,
    related_topics,
)

# -----------------------------------------------------------------------------
# batchexecute RPC endpoints
# -----------------------------------------------------------------------------
from .trending import trending_articles, trending_now

# -----------------------------------------------------------------------------
# CSV exports
# -----------------------------------------------------------------------------
from .csv_export import (
    interest_by_region_csv,
    interest_over_time_csv,
    interest_over_time_multirange_csv,
    related_queries_csv,
    related_topics_csv,
)


__all__ = [
    # Shared
    "EndpointContext",
    "EndpointResult",
    "build_comparison_items",
    "format_date_without_dashes",
    "resolve_common",
    "with_optional_raw",
    # JSON
    "autocomplete",
    "category_picker",
    "daily_trends",
    "explore",
    "geo_picker",
    "hot_trends_legacy",
    "interest_by_region",
    "interest_over_time",
    "interest_over_time_multirange",
    "real_time_trends",
    "related_queries",
    "related_topics",
    "top_charts",
    # RPC
    "trending_articles",
    "trending_now",
    # CSV
    "interest_by_region_csv",
    "interest_over_time_csv",
    "interest_over_time_multirange_csv",
    "related_queries_csv",
    "related_topics_csv",
]
