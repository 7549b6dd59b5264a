"""Pydantic request schemas."""

from typing import List, Literal, Optional, Union
from pydantic import BaseModel


RecordIdField = Union[int, str]


class FilterTypeRequest(BaseModel):
    filter_type: str


class SearchRequest(BaseModel):
    term: str = ""


class SortRequest(BaseModel):
    key: Literal["equipment_name", "type", "flowrate", "pressure", "temperature"]


class RecordRequest(BaseModel):
    id: RecordIdField


class SelectAllRequest(BaseModel):
    # None selects every visible record
    ids: Optional[List[RecordIdField]] = None


class ViewModeRequest(BaseModel):
    mode: Literal["grid", "table"]


class TokenRequest(BaseModel):
    token: str
