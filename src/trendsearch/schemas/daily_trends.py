from __future__ import annotations

import re
import datetime as dt
from typing import List, Optional, Union

from pydantic import Field, StrictInt, StrictStr, field_validator

from .common import CommonRequest, TrendsModel

ISO_DATE_LIKE = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(?:[Tt ]\d{2}:\d{2}(?::\d{2}(?:\.\d{1,9})?)?(?:Z|[+-]\d{2}:\d{2})?)?$"
)


class DailyTrendsRequest(CommonRequest):
    geo: StrictStr = Field(..., min_length=1)
    category: Optional[Union[StrictStr, StrictInt]] = None
    date: Optional[Union[dt.datetime, dt.date, StrictStr]] = Field(
        None, description="ISO date-like string, date or datetime; defaults to today"
    )
    ns: Optional[StrictInt] = None

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        if isinstance(v, str) and not ISO_DATE_LIKE.match(v):
            raise ValueError("Expected an ISO date-like string.")
        return v


class DailyTrendArticle(TrendsModel):
    title: Optional[str] = None
    time_ago: Optional[str] = None
    source: Optional[str] = None
    url: Optional[str] = None
    snippet: Optional[str] = None


class DailyTrendTitle(TrendsModel):
    query: str


class DailyTrendImage(TrendsModel):
    news_url: Optional[str] = None
    source: Optional[str] = None
    image_url: Optional[str] = None


class DailyTrendItem(TrendsModel):
    title: DailyTrendTitle
    formatted_traffic: Optional[str] = None
    related_queries: Optional[List[str]] = None
    image: Optional[DailyTrendImage] = None
    articles: Optional[List[DailyTrendArticle]] = None


class DailyTrendsDay(TrendsModel):
    date: Optional[str] = None
    formatted_date: Optional[str] = None
    trending_searches: List[DailyTrendItem]


class DailyTrendsDefault(TrendsModel):
    trending_searches_days: List[DailyTrendsDay]


class DailyTrendsResponse(TrendsModel):
    default: DailyTrendsDefault
