from __future__ import annotations

import datetime as dt
from typing import List, Optional, Union

from pydantic import Field, StrictBool, StrictInt, StrictStr, field_validator

from .common import CommonRequest, Number, TrendsModel
from .daily_trends import ISO_DATE_LIKE


class TopChartsRequest(CommonRequest):
    date: Optional[Union[StrictInt, dt.datetime, dt.date, StrictStr]] = Field(
        None, description="Chart year, ISO date-like string, date or datetime; defaults to this year"
    )
    geo: Optional[StrictStr] = Field(None, min_length=1)
    is_mobile: Optional[StrictBool] = None

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        if isinstance(v, str) and not ISO_DATE_LIKE.match(v):
            raise ValueError("Expected an ISO date-like string.")
        if isinstance(v, int) and not isinstance(v, bool) and v <= 0:
            raise ValueError("Year must be a positive integer.")
        return v


class TopChartListItem(TrendsModel):
    title: Optional[str] = None
    value: Optional[Number] = None
    formatted_value: Optional[str] = None


class TopChart(TrendsModel):
    date: Optional[str] = None
    formatted_date: Optional[str] = None
    list_items: List[TopChartListItem]


class TopChartsResponse(TrendsModel):
    top_charts: List[TopChart]
