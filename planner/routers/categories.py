from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from planner.core.database import get_db
from planner.core.deps import get_workspace
from planner.models.workspace import Workspace
from planner.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse
from planner.services import category_service

router = APIRouter(prefix="/workspaces/{workspace_id}/categories", tags=["categories"])


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace)
):
    return category_service.create_category(db, workspace.id, category_data.label)


@router.get("", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db), workspace: Workspace = Depends(get_workspace)):
    return category_service.list_categories(db, workspace.id)


@router.put("/{category_id}", response_model=CategoryResponse)
def rename_category(
    category_id: int,
    category_data: CategoryUpdate,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace)
):
    return category_service.rename_category(db, workspace.id, category_id, category_data.label)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace)
):
    # les routines et SoD qui pointent vers ce tag ne sont pas modifiés
    category_service.delete_category(db, workspace.id, category_id)
