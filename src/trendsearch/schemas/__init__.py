"""
TrendSearch - Schemas

Runtime shape declarations (pydantic) for every endpoint's input and for
the upstream payloads it receives. Endpoints never trust a payload just
because it parsed as JSON: it goes through validate_schema first.
"""

# -----------------------------------------------------------------------------
# Shared building blocks
# -----------------------------------------------------------------------------
from .common import (
    CommonRequest,
    ExploreWidget,
    GoogleProperty,
    Number,
    RequestModel,
    Resolution,
    Topic,
    TrendsModel,
)

# -----------------------------------------------------------------------------
# Autocomplete / explore
# -----------------------------------------------------------------------------
from .explore import (
    AutocompleteRequest,
    AutocompleteResponse,
    ExploreRequest,
    ExploreResponse,
    InterestByRegionRequest,
)

# -----------------------------------------------------------------------------
# Widget data (timeseries, geo map, related searches)
# -----------------------------------------------------------------------------
from .widget_data import (
    GeoMapData,
    InterestByRegionResponse,
    InterestOverTimeMultirangePoint,
    InterestOverTimeMultirangeResponse,
    InterestOverTimePoint,
    InterestOverTimeResponse,
    MultirangeColumnData,
    RelatedQueriesResponse,
    RelatedQueryItem,
    RelatedTopicItem,
    RelatedTopicsResponse,
)

# -----------------------------------------------------------------------------
# Daily trends (legacy)
# -----------------------------------------------------------------------------
from .daily_trends import DailyTrendItem, DailyTrendsDay, DailyTrendsRequest, DailyTrendsResponse

# -----------------------------------------------------------------------------
# Real-time trends, top charts and hot trends (legacy)
# -----------------------------------------------------------------------------
from .hot_trends import HotTrendsLegacyRequest, HotTrendsLegacyResponse
from .real_time_trends import (
    RealTimeStory,
    RealTimeStoryArticle,
    RealTimeStoryImage,
    RealTimeTrendsRequest,
    RealTimeTrendsResponse,
)
from .top_charts import TopChart, TopChartListItem, TopChartsRequest, TopChartsResponse

# -----------------------------------------------------------------------------
# Geo / category pickers
# -----------------------------------------------------------------------------
from .pickers import (
    CategoryPickerResponse,
    GeoPickerResponse,
    PickerNode,
    PickerRequest,
    PickerResponse,
)

# -----------------------------------------------------------------------------
# Trending now / articles (batchexecute RPCs)
# -----------------------------------------------------------------------------
from .trending import (
    ArticleKey,
    TrendingArticleItem,
    TrendingArticlesRequest,
    TrendingNowItem,
    TrendingNowRequest,
)


__all__ = [
    # Shared
    "CommonRequest",
    "ExploreWidget",
    "GoogleProperty",
    "Number",
    "RequestModel",
    "Resolution",
    "Topic",
    "TrendsModel",
    # Autocomplete / explore
    "AutocompleteRequest",
    "AutocompleteResponse",
    "ExploreRequest",
    "ExploreResponse",
    "InterestByRegionRequest",
    # Widget data
    "GeoMapData",
    "InterestByRegionResponse",
    "InterestOverTimeMultirangePoint",
    "InterestOverTimeMultirangeResponse",
    "InterestOverTimePoint",
    "InterestOverTimeResponse",
    "MultirangeColumnData",
    "RelatedQueriesResponse",
    "RelatedQueryItem",
    "RelatedTopicItem",
    "RelatedTopicsResponse",
    # Daily trends
    "DailyTrendItem",
    "DailyTrendsDay",
    "DailyTrendsRequest",
    "DailyTrendsResponse",
    # Real-time trends / top charts / hot trends
    "HotTrendsLegacyRequest",
    "HotTrendsLegacyResponse",
    "RealTimeStory",
    "RealTimeStoryArticle",
    "RealTimeStoryImage",
    "RealTimeTrendsRequest",
    "RealTimeTrendsResponse",
    "TopChart",
    "TopChartListItem",
    "TopChartsRequest",
    "TopChartsResponse",
    # Pickers
    "CategoryPickerResponse",
    "GeoPickerResponse",
    "PickerNode",
    "PickerRequest",
    "PickerResponse",
    # Trending
    "ArticleKey",
    "TrendingArticleItem",
    "TrendingArticlesRequest",
    "TrendingNowItem",
    "TrendingNowRequest",
]
