"""Pydantic schemas for task request/response validation."""

from pydantic import BaseModel, ConfigDict, Field
import datetime as dt
from datetime import datetime, time
from typing import Optional

# Schemas tâches

class TaskCreate(BaseModel):
    summary: str = Field(min_length=1)
    notes: Optional[str] = None

class TaskUpdate(BaseModel):
    summary: Optional[str] = Field(default=None, min_length=1)
    notes: Optional[str] = None
    completed: Optional[bool] = None

class TaskResponse(BaseModel):
    id: int
    workspace_id: int
    user_id: int
    summary: str
    notes: Optional[str]
    completed: bool
    is_pinned: bool
    pinned_at: Optional[datetime]
    moved_up_at: Optional[datetime]
    schedule_entry_id: Optional[int]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskPromoteRequest(BaseModel):
    """Conversion d'une tâche en SoD ponctuel"""
    date: dt.date
    start_at: time
    end_at: Optional[time] = None
    category_id: int
