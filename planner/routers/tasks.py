from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List

from planner.core.database import get_db
from planner.core.deps import get_current_user, get_workspace
from planner.models.user import User
from planner.models.workspace import Workspace
from planner.schemas.schedule_entry import ScheduleEntryResponse
from planner.schemas.task import TaskCreate, TaskUpdate, TaskResponse, TaskPromoteRequest
from planner.services import task_service

router = APIRouter(prefix="/workspaces/{workspace_id}/tasks", tags=["tasks"])


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return task_service.create_task(db, workspace.id, current_user.id, task_data.model_dump())


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return task_service.list_tasks(db, workspace.id, current_user.id)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return task_service.get_task(db, workspace.id, current_user.id, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    update_data = task_data.model_dump(exclude_unset=True)
    return task_service.update_task(db, workspace.id, current_user.id, task_id, update_data)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    task_service.delete_task(db, workspace.id, current_user.id, task_id)


@router.post("/{task_id}/pin", response_model=TaskResponse)
def pin_task(
    task_id: int,
    pinned: bool = Query(...),
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return task_service.set_task_pin(db, workspace.id, current_user.id, task_id, pinned)


@router.post("/{task_id}/up", response_model=TaskResponse)
def move_task_up(
    task_id: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return task_service.move_task_up(db, workspace.id, current_user.id, task_id)


@router.post("/{task_id}/promote", response_model=ScheduleEntryResponse, status_code=status.HTTP_201_CREATED)
def promote_task(
    task_id: int,
    request: TaskPromoteRequest,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    """Ajoute la tâche au calendrier (SoD ponctuel) et lie les deux"""
    return task_service.promote_task(
        db,
        task_id,
        current_user.id,
        workspace.id,
        request.date,
        request.start_at,
        request.end_at,
        request.category_id
    )
