"""Pydantic response schemas."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel

from api.models.requests import RecordIdField


class EquipmentRowResponse(BaseModel):
    id: RecordIdField
    equipment_name: str
    type: str
    flowrate: float
    pressure: float
    temperature: float
    status: str
    performance_score: int
    selected: bool
    favorite: bool


class SortStateResponse(BaseModel):
    key: Optional[str] = None
    direction: str
    active: bool


class ViewStateResponse(BaseModel):
    filter_type: str
    search_term: str
    sort: SortStateResponse
    selected_ids: List[RecordIdField]
    favorite_ids: List[RecordIdField]
    view_mode: str


class ViewResponse(BaseModel):
    dataset_id: Optional[RecordIdField] = None
    state: ViewStateResponse
    filter_types: List[str]
    rows: List[EquipmentRowResponse]
    visible_count: int
    total_count: int
    comparison_available: bool


class TrendResponse(BaseModel):
    available: bool
    max: Optional[float] = None
    min: Optional[float] = None
    range: Optional[float] = None
    variance_pct: Optional[float] = None


class InsightResponse(BaseModel):
    icon: str
    title: str
    value: str
    description: str


class InsightsResponse(BaseModel):
    trend: TrendResponse
    insights: List[InsightResponse]
    flowrate_series: Dict[str, List[Any]]


class ScoresResponse(BaseModel):
    scores: Dict[str, int]


class ComparisonVectorResponse(BaseModel):
    label: str
    values: List[float]
    dimensions: List[str]


class ComparisonResponse(BaseModel):
    vectors: List[ComparisonVectorResponse]


class SummaryResponse(BaseModel):
    total_count: int
    averages: Dict[str, float]
    type_distribution: Dict[str, int]


class UploadResponse(BaseModel):
    message: str
    dataset_id: RecordIdField
    record_count: int
    applied: bool


class DatasetLoadResponse(BaseModel):
    dataset_id: RecordIdField
    filename: Optional[str] = None
    record_count: int
    applied: bool


class HistoryEntryResponse(BaseModel):
    id: RecordIdField
    filename: Optional[str] = None
    uploaded_at: Optional[str] = None
    record_count: Optional[int] = None


class SessionStatusResponse(BaseModel):
    authenticated: bool
    favorite_count: int
