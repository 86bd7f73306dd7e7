from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import Field, StrictStr

from .common import Number, RequestModel, TrendsModel


class PickerRequest(RequestModel):
    hl: Optional[str] = Field(None, min_length=2)


class PickerNode(TrendsModel):
    """One geo or category node; `children` nest further nodes of the same shape."""

    id: Optional[Union[StrictStr, Number]] = None
    name: Optional[str] = None
    type: Optional[str] = None
    children: Optional[List[Any]] = None


class PickerResponse(TrendsModel):
    children: Optional[List[PickerNode]] = None


GeoPickerResponse = PickerResponse
CategoryPickerResponse = PickerResponse
