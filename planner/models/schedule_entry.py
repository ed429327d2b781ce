"""ScheduleEntry model (SoD): une occurrence datée dans le calendrier"""

from sqlalchemy import Column, Integer, String, Date, DateTime, Time, Boolean, ForeignKey
from datetime import datetime
from planner.core.database import Base


class ScheduleEntry(Base):
    __tablename__ = "schedule_entries"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)
    start_at = Column(Time, nullable=True)
    end_at = Column(Time, nullable=True)
    summary = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    checked = Column(Boolean, default=False, nullable=False)

    category_id = Column(Integer, nullable=True, index=True)
    routine_id = Column(Integer, ForeignKey("routines.id"), nullable=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    @property
    def duration_minutes(self) -> int:
        # 0 si une des deux bornes manque, jamais négatif
        if self.start_at is None or self.end_at is None:
            return 0
        start = self.start_at.hour * 60 + self.start_at.minute
        end = self.end_at.hour * 60 + self.end_at.minute
        return max(0, end - start)
