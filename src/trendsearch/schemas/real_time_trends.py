from __future__ import annotations

from typing import List, Optional, Union

from pydantic import Field, StrictInt, StrictStr

from .common import CommonRequest, TrendsModel


class RealTimeTrendsRequest(CommonRequest):
    geo: StrictStr = Field(..., min_length=1)
    category: Optional[Union[StrictStr, StrictInt]] = None
    fi: Optional[StrictInt] = None
    fs: Optional[StrictInt] = None
    ri: Optional[StrictInt] = Field(None, description="Number of stories inspected (default 300)")
    rs: Optional[StrictInt] = Field(None, description="Number of stories returned (default 20)")
    sort: Optional[StrictInt] = None


class RealTimeStoryImage(TrendsModel):
    img_url: Optional[str] = None
    news_url: Optional[str] = None
    source: Optional[str] = None


class RealTimeStoryArticle(TrendsModel):
    title: Optional[str] = None
    time_ago: Optional[str] = None
    source: Optional[str] = None
    url: Optional[str] = None
    snippet: Optional[str] = None


class RealTimeStory(TrendsModel):
    id: Optional[str] = None
    title: Optional[str] = None
    entity_names: Optional[List[str]] = None
    image: Optional[RealTimeStoryImage] = None
    articles: Optional[List[RealTimeStoryArticle]] = None


class StorySummaries(TrendsModel):
    trending_stories: List[RealTimeStory]


class RealTimeTrendsResponse(TrendsModel):
    story_summaries: StorySummaries
