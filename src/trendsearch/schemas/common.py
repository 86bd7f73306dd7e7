from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt
from pydantic.alias_generators import to_camel

# JSON number without string/bool coercion.
Number = Union[StrictInt, StrictFloat]

GoogleProperty = Literal["", "images", "news", "youtube", "froogle"]
Resolution = Literal["COUNTRY", "REGION", "CITY", "DMA"]


class TrendsModel(BaseModel):
    """
    Base for upstream payload shapes.

    Python attributes are snake_case, the wire keys camelCase. Unknown
    upstream keys are kept (the service adds fields without notice).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class RequestModel(BaseModel):
    """Base for endpoint inputs; accepts snake_case or camelCase keys, drops unknown ones."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class CommonRequest(RequestModel):
    hl: Optional[str] = Field(None, min_length=2, description="Interface language, e.g. en-US")
    tz: Optional[StrictInt] = Field(
        None, description="Timezone offset in minutes (UTC minus local)"
    )


class Topic(TrendsModel):
    mid: str = Field(..., description="Knowledge graph id")
    title: str
    type: str


class ExploreWidget(TrendsModel):
    """A widget from the explore call; its token unlocks one widgetdata endpoint."""

    request: Dict[str, Any]
    token: str
    id: str = Field(..., description="TIMESERIES, GEO_MAP, RELATED_QUERIES, RELATED_TOPICS")
    title: Optional[str] = None
    type: Optional[str] = None
