from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional

from planner.core.database import get_db
from planner.core.deps import get_current_user, get_workspace
from planner.models.user import User
from planner.models.workspace import Workspace
from planner.schemas.schedule_entry import (
    ScheduleEntryCreate,
    ScheduleEntryUpdate,
    ScheduleEntryResponse,
    DayStats
)
from planner.services import schedule_service

router = APIRouter(prefix="/workspaces/{workspace_id}/schedule-entries", tags=["schedule-entries"])


@router.post("", response_model=ScheduleEntryResponse, status_code=status.HTTP_201_CREATED)
def create_entry(
    entry_data: ScheduleEntryCreate,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return schedule_service.create_entry(db, workspace.id, current_user.id, entry_data.model_dump())


@router.get("", response_model=List[ScheduleEntryResponse])
def list_entries(
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return schedule_service.get_entries_in_range(db, workspace.id, current_user.id, start, end)


@router.get("/stats", response_model=List[DayStats])
def month_stats(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return schedule_service.get_month_day_stats(db, workspace.id, current_user.id, year, month)


@router.get("/{entry_id}", response_model=ScheduleEntryResponse)
def get_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return schedule_service.get_entry(db, workspace.id, current_user.id, entry_id)


@router.put("/{entry_id}", response_model=ScheduleEntryResponse)
def update_entry(
    entry_id: int,
    entry_data: ScheduleEntryUpdate,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    update_data = entry_data.model_dump(exclude_unset=True)
    return schedule_service.update_entry(db, workspace.id, current_user.id, entry_id, update_data)


@router.post("/{entry_id}/check", response_model=ScheduleEntryResponse)
def check_entry(
    entry_id: int,
    checked: bool = Query(...),
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    # les tâches liées suivent l'état du SoD
    return schedule_service.set_entry_checked(db, workspace.id, current_user.id, entry_id, checked)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    schedule_service.delete_entry(db, workspace.id, current_user.id, entry_id)
