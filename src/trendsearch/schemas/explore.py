from __future__ import annotations

from typing import List, Optional, Union

from pydantic import Field, NonNegativeInt, StrictStr, field_validator

from .common import CommonRequest, ExploreWidget, GoogleProperty, Resolution, Topic, TrendsModel


# ------------------------------
# autocomplete
# ------------------------------


class AutocompleteRequest(CommonRequest):
    keyword: StrictStr = Field(..., min_length=1)


class AutocompleteDefault(TrendsModel):
    topics: List[Topic]


class AutocompleteResponse(TrendsModel):
    default: AutocompleteDefault


# ------------------------------
# explore (and the widget-based endpoints built on it)
# ------------------------------


class ExploreRequest(CommonRequest):
    keywords: List[StrictStr] = Field(..., min_length=1)
    geo: Optional[Union[StrictStr, List[StrictStr]]] = None
    time: Optional[StrictStr] = Field(None, min_length=1, description="e.g. 'today 12-m'")
    category: Optional[NonNegativeInt] = None
    property: Optional[GoogleProperty] = None

    @field_validator("keywords")
    @classmethod
    def validate_keywords(cls, v):
        if any(not keyword for keyword in v):
            raise ValueError("keywords must be non-empty strings")
        return v

    @field_validator("geo")
    @classmethod
    def validate_geo(cls, v):
        if v is None:
            return None
        if isinstance(v, str):
            if not v:
                raise ValueError("geo must be a non-empty string")
            return v
        if not v or any(not g for g in v):
            raise ValueError("geo list must contain non-empty strings")
        return v


class InterestByRegionRequest(ExploreRequest):
    resolution: Optional[Resolution] = None


class ExploreResponse(TrendsModel):
    widgets: List[ExploreWidget]
