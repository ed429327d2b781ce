"""Task model"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from datetime import datetime
from planner.core.database import Base


class Task(Base):
    __tablename__ = "tasks"
    
    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    
    summary = Column(String, nullable=False)
    notes = Column(String, nullable=True)
    completed = Column(Boolean, default=False, nullable=False)

    is_pinned = Column(Boolean, default=False, nullable=False)
    pinned_at = Column(DateTime, nullable=True)
    moved_up_at = Column(DateTime, nullable=True)

    # SoD lié (au plus un), pas de FK: le SoD peut être supprimé indépendamment
    schedule_entry_id = Column(Integer, nullable=True, index=True)
    
    created_at = Column(DateTime, default=datetime.utcnow)
