"""Task service"""

import logging
from sqlalchemy.orm import Session
from datetime import date, datetime, time
from typing import List, Optional

from planner.core.errors import NotFoundError, ValidationError
from planner.models.schedule_entry import ScheduleEntry
from planner.models.task import Task

logger = logging.getLogger(__name__)


def _order_key(task: Task):
    # en cours d'abord, puis épinglées (dernier épinglage en tête), puis les plus récentes
    recency = max(d for d in (task.moved_up_at, task.created_at) if d is not None)
    pinned_rank = -(task.pinned_at or recency).timestamp() if task.is_pinned else 0
    return (task.completed, not task.is_pinned, pinned_rank, -recency.timestamp())


def list_tasks(db: Session, workspace_id: int, user_id: int) -> List[Task]:
    tasks = db.query(Task).filter(
        Task.workspace_id == workspace_id,
        Task.user_id == user_id
    ).all()
    return sorted(tasks, key=_order_key)


def get_task(db: Session, workspace_id: int, user_id: int, task_id: int) -> Task:
    task = db.query(Task).filter(
        Task.id == task_id,
        Task.workspace_id == workspace_id,
        Task.user_id == user_id
    ).first()
    if not task:
        raise NotFoundError("Task not found")
    return task


def create_task(db: Session, workspace_id: int, user_id: int, data: dict) -> Task:
    task = Task(workspace_id=workspace_id, user_id=user_id, **data)
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def update_task(db: Session, workspace_id: int, user_id: int, task_id: int, data: dict) -> Task:
    """Maj directe d'une tâche. completed n'est jamais recopié vers le SoD lié."""
    task = get_task(db, workspace_id, user_id, task_id)

    for required in ("summary", "completed"):
        if required in data and data[required] is None:
            raise ValidationError(f"{required} cannot be null")

    for field, value in data.items():
        setattr(task, field, value)

    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, workspace_id: int, user_id: int, task_id: int) -> None:
    # le SoD lié éventuel est conservé
    task = get_task(db, workspace_id, user_id, task_id)
    db.delete(task)
    db.commit()


def set_task_pin(db: Session, workspace_id: int, user_id: int, task_id: int, pinned: bool) -> Task:
    task = get_task(db, workspace_id, user_id, task_id)
    task.is_pinned = pinned
    task.pinned_at = datetime.utcnow() if pinned else None
    db.commit()
    db.refresh(task)
    return task


def move_task_up(db: Session, workspace_id: int, user_id: int, task_id: int) -> Task:
    task = get_task(db, workspace_id, user_id, task_id)
    task.moved_up_at = datetime.utcnow()
    db.commit()
    db.refresh(task)
    return task


def promote_task(
    db: Session,
    task_id: int,
    user_id: int,
    workspace_id: int,
    entry_date: date,
    start_at: time,
    end_at: Optional[time],
    category_id: int
) -> ScheduleEntry:
    """
    Convertit une tâche en SoD ponctuel et lie les deux.

    La tâche reprend l'état checked du nouveau SoD (donc non complétée).
    """
    task = get_task(db, workspace_id, user_id, task_id)

    if task.schedule_entry_id is not None:
        linked = db.query(ScheduleEntry.id).filter(ScheduleEntry.id == task.schedule_entry_id).first()
        if linked is not None:
            raise ValidationError("Task is already linked to a schedule entry")

    if category_id is None:
        raise ValidationError("category_id is required")

    entry = ScheduleEntry(
        workspace_id=workspace_id,
        user_id=user_id,
        date=entry_date,
        start_at=start_at,
        end_at=end_at,
        summary=task.summary,
        notes=task.notes,
        checked=False,
        category_id=category_id,
        routine_id=None
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)

    task.schedule_entry_id = entry.id
    task.completed = entry.checked
    db.commit()

    logger.info(f"Task {task.id} promoted to schedule entry {entry.id} on {entry_date}")
    return entry
