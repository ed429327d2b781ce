"""Pydantic schemas for schedule entries (SoD)."""

from pydantic import BaseModel, ConfigDict
import datetime as dt
from datetime import datetime, time
from typing import Optional


class ScheduleEntryCreate(BaseModel):
    date: dt.date
    start_at: Optional[time] = None
    end_at: Optional[time] = None
    summary: Optional[str] = None
    notes: Optional[str] = None
    checked: bool = False
    category_id: Optional[int] = None


class ScheduleEntryUpdate(BaseModel):
    date: Optional[dt.date] = None
    start_at: Optional[time] = None
    end_at: Optional[time] = None
    summary: Optional[str] = None
    notes: Optional[str] = None
    checked: Optional[bool] = None
    category_id: Optional[int] = None


class ScheduleEntryResponse(BaseModel):
    id: int
    workspace_id: int
    user_id: int
    date: dt.date
    start_at: Optional[time]
    end_at: Optional[time]
    summary: Optional[str]
    notes: Optional[str]
    checked: bool
    category_id: Optional[int]
    routine_id: Optional[int]
    duration_minutes: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DayStats(BaseModel):
    date: dt.date
    total: int
    checked: int
    percent: float
