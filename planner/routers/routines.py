"""
Router des routines: CRUD + application / retrait sur un mois du calendrier
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from planner.core.database import get_db
from planner.core.deps import get_current_user, get_workspace
from planner.models.user import User
from planner.models.workspace import Workspace
from planner.schemas.routine import (
    RoutineCreate,
    RoutineUpdate,
    RoutineResponse,
    RoutineMonthRequest,
    ApplyResult,
    RemoveResult
)
from planner.services import routine_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workspaces/{workspace_id}/routines", tags=["routines"])


@router.post("", response_model=RoutineResponse, status_code=status.HTTP_201_CREATED)
def create_routine(
    routine_data: RoutineCreate,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return routine_service.create_routine(db, workspace.id, current_user.id, routine_data.model_dump())


@router.get("", response_model=List[RoutineResponse])
def list_routines(
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return routine_service.list_routines(db, workspace.id, current_user.id)


@router.get("/{routine_id}", response_model=RoutineResponse)
def get_routine(
    routine_id: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return routine_service.get_routine(db, workspace.id, current_user.id, routine_id)


@router.put("/{routine_id}", response_model=RoutineResponse)
def update_routine(
    routine_id: int,
    routine_data: RoutineUpdate,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    update_data = routine_data.model_dump(exclude_unset=True)
    return routine_service.update_routine(db, workspace.id, current_user.id, routine_id, update_data)


@router.delete("/{routine_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_routine(
    routine_id: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    routine_service.delete_routine(db, workspace.id, current_user.id, routine_id)


@router.post("/{routine_id}/apply", response_model=ApplyResult, status_code=status.HTTP_201_CREATED)
def apply_routine(
    routine_id: int,
    request: RoutineMonthRequest,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    """Génère les SoD de la routine pour le mois demandé (doublons possibles)"""
    routine = routine_service.get_routine(db, workspace.id, current_user.id, routine_id)
    created = routine_service.apply_routine_to_month(
        db,
        routine,
        request.year,
        request.month,
        workspace.id,
        current_user.id,
        include_past=request.include_past
    )
    return ApplyResult(created=created)


@router.post("/{routine_id}/remove", response_model=RemoveResult)
def remove_routine(
    routine_id: int,
    request: RoutineMonthRequest,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    """
    Supprime les SoD de la routine de demain à la fin du mois.

    include_past est accepté (même payload que apply) mais ignoré.
    """
    routine = routine_service.get_routine(db, workspace.id, current_user.id, routine_id)
    if request.include_past:
        logger.info(f"include_past ignored when removing routine {routine.id}")
    deleted = routine_service.remove_routine_from_month(
        db,
        routine.id,
        request.year,
        request.month,
        workspace.id,
        current_user.id
    )
    return RemoveResult(deleted=deleted)
