"""Category service: registre des tags d'un workspace"""

from sqlalchemy.orm import Session
from typing import Dict, List, Optional
from planner.core.errors import NotFoundError, ValidationError
from planner.models.category import Category

PALETTE = [
    "#ec4899",
    "#3b82f6",
    "#22c55e",
    "#a855f7",
    "#f97316",
    "#0ea5e9",
    "#facc15",
    "#14b8a6",
    "#6366f1",
    "#ef4444",
]
NO_CATEGORY_COLOR = "#94a3b8"


def get_category_color(category_id: Optional[int]) -> str:
    # couleur stable par id, y compris pour une catégorie supprimée
    if category_id is None:
        return NO_CATEGORY_COLOR
    return PALETTE[abs(int(category_id)) % len(PALETTE)]


def get_category_label(labels: Dict[int, str], category_id: Optional[int]) -> str:
    if category_id is None:
        return "No tag"
    return labels.get(category_id, f"Deleted tag (#{category_id})")


def list_categories(db: Session, workspace_id: int) -> List[Category]:
    return db.query(Category).filter(
        Category.workspace_id == workspace_id
    ).order_by(Category.id).all()


def get_category(db: Session, workspace_id: int, category_id: int) -> Category:
    category = db.query(Category).filter(
        Category.id == category_id,
        Category.workspace_id == workspace_id
    ).first()
    if not category:
        raise NotFoundError("Category not found")
    return category


def category_exists(db: Session, workspace_id: int, category_id: int) -> bool:
    return db.query(Category.id).filter(
        Category.id == category_id,
        Category.workspace_id == workspace_id
    ).first() is not None


def create_category(db: Session, workspace_id: int, label: str) -> Category:
    if not label.strip():
        raise ValidationError("label is required")
    category = Category(workspace_id=workspace_id, label=label.strip())
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def rename_category(db: Session, workspace_id: int, category_id: int, label: str) -> Category:
    if not label.strip():
        raise ValidationError("label is required")
    category = get_category(db, workspace_id, category_id)
    category.label = label.strip()
    db.commit()
    db.refresh(category)
    return category


def delete_category(db: Session, workspace_id: int, category_id: int) -> None:
    """Supprime le tag sans toucher aux routines / SoD qui le référencent"""
    category = get_category(db, workspace_id, category_id)
    db.delete(category)
    db.commit()


def label_map(db: Session, workspace_id: int) -> Dict[int, str]:
    return {c.id: c.label for c in list_categories(db, workspace_id)}
