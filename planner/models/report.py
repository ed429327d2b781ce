from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from datetime import datetime
from planner.core.database import Base

class Report(Base):
    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    week_number = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False)  # inclusive
    notes = Column(String, nullable=True)

    # rétrospective KPT
    kpt_keep = Column(Text, nullable=True)
    kpt_problem = Column(Text, nullable=True)
    kpt_try = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)


class ReportMetric(Base):
    __tablename__ = "report_metrics"

    id = Column(Integer, primary_key=True, index=True)
    report_id = Column(Integer, ForeignKey("reports.id"), nullable=False, index=True)
    category_id = Column(Integer, nullable=True)  # peut pointer vers une catégorie supprimée
    minutes = Column(Integer, nullable=False, default=0)
    rate = Column(Integer, nullable=False, default=0)  # 0-100
