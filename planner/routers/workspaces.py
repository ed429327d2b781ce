from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from planner.core.database import get_db
from planner.core.deps import get_current_user, get_workspace
from planner.models.user import User
from planner.models.workspace import Workspace
from planner.schemas.workspace import WorkspaceCreate, WorkspaceResponse

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


@router.post("", response_model=WorkspaceResponse, status_code=status.HTTP_201_CREATED)
def create_workspace(
    workspace_data: WorkspaceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    workspace = Workspace(user_id=current_user.id, name=workspace_data.name)
    db.add(workspace)
    db.commit()
    db.refresh(workspace)
    return workspace


@router.get("", response_model=List[WorkspaceResponse])
def list_workspaces(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return current_user.workspaces


@router.get("/{workspace_id}", response_model=WorkspaceResponse)
def get_workspace_detail(workspace: Workspace = Depends(get_workspace)):
    return workspace
