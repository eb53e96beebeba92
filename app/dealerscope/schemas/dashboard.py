from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, model_validator


MetricType = Literal["dollar", "percentage", "unit"]
TargetDirection = Literal["above", "below"]
RockStatus = Literal["on_track", "at_risk", "off_track", "completed"]
TodoStatus = Literal["pending", "completed"]


class KpiCreateRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Customer pay hours",
                "metric_type": "unit",
                "target_value": 100,
                "target_direction": "above",
                "display_order": 1,
            }
        }
    }

    name: str = Field(min_length=1, max_length=255)
    metric_type: MetricType = "unit"
    target_value: float | None = None
    target_direction: TargetDirection = "above"
    display_order: int = 0
    assigned_to: str | None = None


class KpiItem(BaseModel):
    id: str
    department_id: str
    name: str
    metric_type: str
    target_value: float | None = None
    target_direction: str
    display_order: int


class KpiListResponse(BaseModel):
    department_id: str
    kpis: list[KpiItem]
    trace_id: str


class KpiStatusItemResponse(BaseModel):
    kpi_id: str
    name: str
    status: str
    actual_value: float | None = None
    target_value: float | None = None
    variance: float | None = None
    period_key: str | None = None


class KpiStatusCounts(BaseModel):
    green: int = 0
    yellow: int = 0
    red: int = 0
    missing: int = 0


class KpiStatusResponse(BaseModel):
    department_id: str
    year: int
    quarter: int
    granularity: str
    counts: KpiStatusCounts
    items: list[KpiStatusItemResponse]
    trace_id: str


class ScorecardEntryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"week_start_date": "2025-01-06", "actual_value": 92},
                {"month": "2025-01", "actual_value": 410, "notes": "Late close"},
            ]
        }
    }

    week_start_date: date | None = None
    month: str | None = Field(default=None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$")
    actual_value: float | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def ensure_single_period(self):
        if (self.week_start_date is None) == (self.month is None):
            raise ValueError("exactly one of week_start_date or month is required")
        return self


class ScorecardEntryResponse(BaseModel):
    id: str
    kpi_id: str
    entry_type: str
    week_start_date: date | None = None
    month: str | None = None
    actual_value: float | None = None
    variance: float | None = None
    status: str | None = None
    trace_id: str


class RockCountsResponse(BaseModel):
    department_id: str
    on_track: int = 0
    at_risk: int = 0
    off_track: int = 0
    completed: int = 0
    total: int = 0
    trace_id: str


class RockCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    quarter: int = Field(ge=1, le=4)
    year: int = Field(ge=2000, le=2100)
    status: RockStatus = "on_track"
    progress_percentage: int = Field(default=0, ge=0, le=100)
    due_date: date | None = None


class RockResponse(BaseModel):
    id: str
    department_id: str
    title: str
    quarter: int
    year: int
    status: str
    progress_percentage: int
    trace_id: str


class TodoCountsResponse(BaseModel):
    department_id: str
    pending: int = 0
    past_due: int = 0
    completed: int = 0
    total: int = 0
    trace_id: str


class TodoCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    due_date: date | None = None
    status: TodoStatus = "pending"


class TodoUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    due_date: date | None = None
    status: TodoStatus | None = None


class TodoResponse(BaseModel):
    id: str
    department_id: str
    title: str
    status: str
    due_date: date | None = None
    trace_id: str
