from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import date, datetime
from typing import List, Optional

# Schemas rapports hebdo + métriques

class ReportCreate(BaseModel):
    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)
    week_number: int = Field(ge=1)
    start_date: date
    end_date: date
    notes: Optional[str] = None
    kpt_keep: Optional[str] = None
    kpt_problem: Optional[str] = None
    kpt_try: Optional[str] = None

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

class ReportResponse(BaseModel):
    id: int
    workspace_id: int
    user_id: int
    year: int
    month: int
    week_number: int
    start_date: date
    end_date: date
    notes: Optional[str]
    kpt_keep: Optional[str] = None
    kpt_problem: Optional[str] = None
    kpt_try: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class ReportMetricResponse(BaseModel):
    id: int
    report_id: int
    category_id: Optional[int]
    label: Optional[str] = None
    color: Optional[str] = None
    minutes: int
    rate: int

    model_config = ConfigDict(from_attributes=True)

class WeekOption(BaseModel):
    week_number: int
    start_date: date
    end_date: date
    label: str

class ReportUpdate(BaseModel):
    notes: Optional[str] = None
    kpt_keep: Optional[str] = None
    kpt_problem: Optional[str] = None
    kpt_try: Optional[str] = None

class CategoryMinutes(BaseModel):
    category_id: Optional[int]
    label: Optional[str] = None
    color: Optional[str] = None
    minutes: int
    rate: int

class PreviousMonthComparison(BaseModel):
    """Métriques cumulées du mois précédent et nombre de semaines couvertes"""
    year: int
    month: int
    week_count: int
    report_ids: List[int]
    metrics: List[CategoryMinutes]
