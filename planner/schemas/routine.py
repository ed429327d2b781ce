"""Pydantic schemas for routine request/response validation."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime, time
from typing import Optional, List


def _check_days(days: Optional[List[int]]) -> Optional[List[int]]:
    if days is None:
        return days
    if not days:
        raise ValueError("at least one weekday is required")
    if any(day < 0 or day > 6 for day in days):
        raise ValueError("weekday codes are 0 (Sunday) to 6 (Saturday)")
    return sorted(set(days))


class RoutineCreate(BaseModel):
    title: str = Field(min_length=1)
    start_at: time
    end_at: Optional[time] = None
    summary: Optional[str] = None
    notes: Optional[str] = None
    repeat_days: List[int]
    category_id: int
    is_active: bool = True

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title is required")
        return value.strip()

    @field_validator("repeat_days")
    @classmethod
    def days_valid(cls, value: List[int]) -> List[int]:
        return _check_days(value)


class RoutineUpdate(BaseModel):
    title: Optional[str] = None
    start_at: Optional[time] = None
    end_at: Optional[time] = None
    summary: Optional[str] = None
    notes: Optional[str] = None
    repeat_days: Optional[List[int]] = None
    category_id: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("repeat_days")
    @classmethod
    def days_valid(cls, value: Optional[List[int]]) -> Optional[List[int]]:
        return _check_days(value)


class RoutineResponse(BaseModel):
    id: int
    workspace_id: int
    user_id: int
    title: str
    start_at: time
    end_at: Optional[time]
    summary: Optional[str]
    notes: Optional[str]
    repeat_days: List[int]
    category_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoutineMonthRequest(BaseModel):
    """Fenêtre mensuelle pour apply / remove (mois 1-12)"""
    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)
    include_past: bool = False


class ApplyResult(BaseModel):
    created: int


class RemoveResult(BaseModel):
    deleted: int
