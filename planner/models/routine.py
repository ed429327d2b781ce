"""Routine model: modèle de récurrence hebdomadaire"""

from sqlalchemy import Column, Integer, String, DateTime, Time, Boolean, ForeignKey
from datetime import datetime
from typing import Iterable, List
from planner.core.database import Base


def days_to_mask(days: Iterable[int]) -> int:
    """{0=dimanche..6=samedi} -> bitmask sur 7 bits"""
    mask = 0
    for day in days:
        mask |= 1 << day
    return mask


def mask_to_days(mask: int) -> List[int]:
    return [day for day in range(7) if mask & (1 << day)]


class Routine(Base):
    __tablename__ = "routines"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String, nullable=False)
    start_at = Column(Time, nullable=False)
    end_at = Column(Time, nullable=True)
    summary = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    weekday_mask = Column(Integer, nullable=False, default=0)
    # référence "molle": la catégorie peut être supprimée plus tard
    category_id = Column(Integer, nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def repeat_days(self) -> List[int]:
        return mask_to_days(self.weekday_mask or 0)

    @repeat_days.setter
    def repeat_days(self, days: Iterable[int]):
        self.weekday_mask = days_to_mask(days)
