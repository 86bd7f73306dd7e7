from __future__ import annotations

from typing import List, Optional, Union

from pydantic import Field

from .common import Number, Topic, TrendsModel


class InterestOverTimePoint(TrendsModel):
    time: str = Field(..., description="Epoch seconds as a string")
    formatted_time: Optional[str] = None
    formatted_axis_time: Optional[str] = None
    value: List[Number] = Field(..., description="One value per comparison item")
    formatted_value: Optional[List[Union[str, Number]]] = None
    has_data: Optional[List[bool]] = None
    is_partial: Optional[Union[bool, str]] = None


class InterestOverTimeDefault(TrendsModel):
    timeline_data: List[InterestOverTimePoint]


class InterestOverTimeResponse(TrendsModel):
    default: InterestOverTimeDefault


class Coordinates(TrendsModel):
    lat: Number
    lng: Number


class GeoMapData(TrendsModel):
    geo_code: Optional[str] = None
    geo_name: str
    value: List[Number]
    formatted_value: Optional[List[str]] = None
    has_data: Optional[List[bool]] = None
    max_value_index: Optional[Number] = None
    coordinates: Optional[Coordinates] = None


class InterestByRegionDefault(TrendsModel):
    geo_map_data: List[GeoMapData]


class InterestByRegionResponse(TrendsModel):
    default: InterestByRegionDefault


class RelatedQueryItem(TrendsModel):
    query: str
    value: Number
    formatted_value: Optional[str] = None
    has_data: Optional[bool] = None
    link: Optional[str] = None


class RelatedQueriesRankedList(TrendsModel):
    ranked_keyword: List[RelatedQueryItem]


class RelatedQueriesDefault(TrendsModel):
    ranked_list: List[RelatedQueriesRankedList] = Field(..., min_length=1)


class RelatedQueriesResponse(TrendsModel):
    default: RelatedQueriesDefault


class RelatedTopicItem(TrendsModel):
    topic: Topic
    value: Union[Number, str]
    formatted_value: Optional[str] = None
    has_data: Optional[bool] = None
    link: Optional[str] = None


class RelatedTopicsRankedList(TrendsModel):
    ranked_keyword: List[RelatedTopicItem]


class RelatedTopicsDefault(TrendsModel):
    ranked_list: List[RelatedTopicsRankedList]


class RelatedTopicsResponse(TrendsModel):
    default: RelatedTopicsDefault


class MultirangeColumnData(TrendsModel):
    time: Optional[str] = None
    formatted_time: Optional[str] = None
    value: Optional[Union[Number, List[Number]]] = None
    formatted_value: Optional[Union[str, List[str]]] = None
    has_data: Optional[bool] = None


class InterestOverTimeMultirangePoint(TrendsModel):
    time: Optional[str] = None
    formatted_time: Optional[str] = None
    column_data: Optional[List[MultirangeColumnData]] = None


class InterestOverTimeMultirangeDefault(TrendsModel):
    timeline_data: List[InterestOverTimeMultirangePoint]
    averages: Optional[List[Number]] = None


class InterestOverTimeMultirangeResponse(TrendsModel):
    default: InterestOverTimeMultirangeDefault
