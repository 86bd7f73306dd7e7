from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from pydantic import Field, StrictStr

from .common import Number, RequestModel, TrendsModel

# [timestamp-ish number, article id, language], passed back to fetch articles.
ArticleKey = Tuple[Number, StrictStr, StrictStr]


class TrendingNowRequest(RequestModel):
    geo: StrictStr = Field("US", min_length=1)
    language: StrictStr = Field("en", min_length=2)
    hours: Literal[4, 24, 48, 168] = 24


class TrendingNowItem(TrendsModel):
    """
    One normalized row of the trending-now RPC.

    Built by the endpoint from an anonymous positional array, so every
    field is checked strictly: a non-numeric traffic value must surface
    as a validation error instead of leaking NaN to callers.
    """

    keyword: StrictStr
    traffic: float = Field(..., allow_inf_nan=False)
    traffic_growth_rate: float = Field(..., allow_inf_nan=False)
    active_time: StrictStr = Field(..., description="ISO-8601 UTC timestamp")
    related_keywords: List[StrictStr] = Field(default_factory=list)
    article_keys: List[ArticleKey] = Field(default_factory=list)


class TrendingArticlesRequest(RequestModel):
    article_keys: List[ArticleKey] = Field(..., min_length=1)
    article_count: int = Field(5, gt=0, le=100)


class TrendingArticleItem(TrendsModel):
    title: StrictStr
    url: StrictStr
    source: StrictStr
    press_date: Optional[List[Number]] = None
    image: Optional[StrictStr] = None
