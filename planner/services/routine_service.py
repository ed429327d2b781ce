"""
Routine service - définitions de routines et matérialisation en SoD

apply: routine -> SoD du mois (insert en batch)
remove: suppression des SoD de la routine de demain à la fin du mois
"""

import logging
from datetime import date, timedelta
from typing import List

from sqlalchemy.orm import Session

from planner.core.config import settings
from planner.core.errors import NotFoundError, ValidationError
from planner.models.routine import Routine
from planner.models.schedule_entry import ScheduleEntry
from planner.services.category_service import category_exists
from planner.services.recurrence import expand, get_today, month_bounds

logger = logging.getLogger(__name__)


# ============ CRUD ============

def list_routines(db: Session, workspace_id: int, user_id: int) -> List[Routine]:
    return db.query(Routine).filter(
        Routine.workspace_id == workspace_id,
        Routine.user_id == user_id
    ).order_by(Routine.created_at).all()


def get_routine(db: Session, workspace_id: int, user_id: int, routine_id: int) -> Routine:
    routine = db.query(Routine).filter(
        Routine.id == routine_id,
        Routine.workspace_id == workspace_id,
        Routine.user_id == user_id
    ).first()
    if not routine:
        raise NotFoundError("Routine not found")
    return routine


def create_routine(db: Session, workspace_id: int, user_id: int, data: dict) -> Routine:
    if not data.get("repeat_days"):
        raise ValidationError("At least one weekday is required")
    if not category_exists(db, workspace_id, data["category_id"]):
        raise ValidationError("Category not found in workspace")

    routine = Routine(workspace_id=workspace_id, user_id=user_id)
    for field, value in data.items():
        setattr(routine, field, value)

    db.add(routine)
    db.commit()
    db.refresh(routine)
    return routine


def update_routine(db: Session, workspace_id: int, user_id: int, routine_id: int, data: dict) -> Routine:
    routine = get_routine(db, workspace_id, user_id, routine_id)

    if "repeat_days" in data and not data["repeat_days"]:
        raise ValidationError("At least one weekday is required")
    if "start_at" in data and data["start_at"] is None:
        raise ValidationError("start_at is required")
    if "is_active" in data and data["is_active"] is None:
        raise ValidationError("is_active cannot be null")
    if "title" in data and not (data["title"] or "").strip():
        raise ValidationError("title is required")
    if "title" in data:
        data["title"] = data["title"].strip()
    if "category_id" in data:
        if data["category_id"] is None:
            raise ValidationError("category_id is required")
        # une catégorie déjà orpheline peut être conservée telle quelle
        if data["category_id"] != routine.category_id and not category_exists(db, workspace_id, data["category_id"]):
            raise ValidationError("Category not found in workspace")

    for field, value in data.items():
        setattr(routine, field, value)

    db.commit()
    db.refresh(routine)
    return routine


def delete_routine(db: Session, workspace_id: int, user_id: int, routine_id: int) -> None:
    """Supprime la routine; les SoD déjà générés restent, seul routine_id est vidé"""
    routine = get_routine(db, workspace_id, user_id, routine_id)

    detached = db.query(ScheduleEntry).filter(
        ScheduleEntry.routine_id == routine.id
    ).update({ScheduleEntry.routine_id: None}, synchronize_session=False)

    db.delete(routine)
    db.commit()
    logger.info(f"Routine {routine_id} deleted, {detached} entries detached")


# ============ MATERIALISATION ============

def routine_entry_summary(routine: Routine) -> str:
    if routine.summary:
        return f"{settings.ROUTINE_MARKER} {routine.summary}"
    return settings.ROUTINE_MARKER


def apply_routine_to_month(
    db: Session,
    routine: Routine,
    year: int,
    month: int,
    workspace_id: int,
    user_id: int,
    include_past: bool = False,
    today: date = None
) -> int:
    """
    Crée un SoD par date retournée par l'expander, en un seul insert.

    Pas de déduplication: appliquer deux fois crée des doublons.
    Retourne le nombre de SoD créés.
    """
    dates = expand(routine, year, month, include_past=include_past, today=today)
    if not dates:
        return 0

    summary = routine_entry_summary(routine)
    entries = [
        ScheduleEntry(
            workspace_id=workspace_id,
            user_id=user_id,
            date=d,
            start_at=routine.start_at,
            end_at=routine.end_at,
            summary=summary,
            notes=routine.notes,
            routine_id=routine.id,
            checked=False,
            category_id=routine.category_id
        )
        for d in dates
    ]

    db.add_all(entries)
    db.commit()
    logger.info(f"Routine {routine.id} applied to {year}-{month:02d}: {len(entries)} entries")
    return len(entries)


def remove_routine_from_month(
    db: Session,
    routine_id: int,
    year: int,
    month: int,
    workspace_id: int,
    user_id: int,
    today: date = None
) -> int:
    """
    Supprime les SoD de la routine entre demain et la fin du mois.

    La fenêtre commence toujours à demain: les SoD passés et du jour ne
    sont jamais supprimés, même si l'appelant a demandé include_past.
    """
    if today is None:
        today = get_today()

    _, month_end = month_bounds(year, month)
    window_start = today + timedelta(days=1)
    if window_start > month_end:
        return 0

    deleted = db.query(ScheduleEntry).filter(
        ScheduleEntry.routine_id == routine_id,
        ScheduleEntry.workspace_id == workspace_id,
        ScheduleEntry.user_id == user_id,
        ScheduleEntry.date >= window_start,
        ScheduleEntry.date <= month_end
    ).delete(synchronize_session=False)

    db.commit()
    logger.info(f"Routine {routine_id} removed from {year}-{month:02d}: {deleted} entries")
    return deleted
