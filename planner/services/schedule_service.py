"""Schedule entry (SoD) service"""

import logging
from collections import OrderedDict
from datetime import date, timedelta
from typing import Dict, List

from sqlalchemy.orm import Session

from planner.core.errors import NotFoundError, ValidationError
from planner.models.schedule_entry import ScheduleEntry
from planner.models.task import Task
from planner.services.recurrence import month_bounds

logger = logging.getLogger(__name__)


def get_entries_in_range(
    db: Session,
    workspace_id: int,
    user_id: int,
    start: date = None,
    end: date = None
) -> List[ScheduleEntry]:
    """SoD de l'utilisateur dans le workspace, bornes incluses"""
    query = db.query(ScheduleEntry).filter(
        ScheduleEntry.workspace_id == workspace_id,
        ScheduleEntry.user_id == user_id
    )
    if start is not None:
        query = query.filter(ScheduleEntry.date >= start)
    if end is not None:
        query = query.filter(ScheduleEntry.date <= end)

    return query.order_by(ScheduleEntry.date, ScheduleEntry.start_at, ScheduleEntry.id).all()


def get_entry(db: Session, workspace_id: int, user_id: int, entry_id: int) -> ScheduleEntry:
    entry = db.query(ScheduleEntry).filter(
        ScheduleEntry.id == entry_id,
        ScheduleEntry.workspace_id == workspace_id,
        ScheduleEntry.user_id == user_id
    ).first()
    if not entry:
        raise NotFoundError("Schedule entry not found")
    return entry


def create_entry(db: Session, workspace_id: int, user_id: int, data: dict) -> ScheduleEntry:
    entry = ScheduleEntry(workspace_id=workspace_id, user_id=user_id, **data)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def propagate_check(db: Session, entry: ScheduleEntry) -> int:
    """
    Recopie entry.checked sur le champ completed des tâches liées.

    Sens unique: cocher une tâche ne modifie jamais le SoD.
    """
    updated = db.query(Task).filter(
        Task.schedule_entry_id == entry.id,
        Task.user_id == entry.user_id
    ).update({Task.completed: entry.checked}, synchronize_session=False)
    return updated


def update_entry(db: Session, workspace_id: int, user_id: int, entry_id: int, data: dict) -> ScheduleEntry:
    entry = get_entry(db, workspace_id, user_id, entry_id)

    for required in ("date", "checked"):
        if required in data and data[required] is None:
            raise ValidationError(f"{required} cannot be null")

    for field, value in data.items():
        setattr(entry, field, value)

    if "checked" in data:
        synced = propagate_check(db, entry)
        if synced:
            logger.info(f"Entry {entry.id} checked={entry.checked}, {synced} linked task(s) synced")

    db.commit()
    db.refresh(entry)
    return entry


def set_entry_checked(db: Session, workspace_id: int, user_id: int, entry_id: int, checked: bool) -> ScheduleEntry:
    return update_entry(db, workspace_id, user_id, entry_id, {"checked": checked})


def delete_entry(db: Session, workspace_id: int, user_id: int, entry_id: int) -> None:
    entry = get_entry(db, workspace_id, user_id, entry_id)
    db.delete(entry)
    db.commit()


def get_month_day_stats(db: Session, workspace_id: int, user_id: int, year: int, month: int) -> List[Dict]:
    """Pour chaque jour du mois: nombre de SoD, nombre cochés, % arrondi à 0.1"""
    month_start, month_end = month_bounds(year, month)
    entries = get_entries_in_range(db, workspace_id, user_id, month_start, month_end)

    stats = OrderedDict()
    current = month_start
    while current <= month_end:
        stats[current] = {"total": 0, "checked": 0}
        current += timedelta(days=1)

    for entry in entries:
        stats[entry.date]["total"] += 1
        if entry.checked:
            stats[entry.date]["checked"] += 1

    return [
        {
            "date": day,
            "total": s["total"],
            "checked": s["checked"],
            "percent": 0.0 if s["total"] == 0 else round(s["checked"] * 100 / s["total"], 1)
        }
        for day, s in stats.items()
    ]
