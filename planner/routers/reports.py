"""
Router des rapports hebdomadaires et de leur analyse par catégorie
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from planner.core.database import get_db
from planner.core.deps import get_current_user, get_workspace
from planner.core.errors import ValidationError
from planner.models.user import User
from planner.models.workspace import Workspace
from planner.schemas.report import (
    ReportCreate,
    ReportUpdate,
    ReportResponse,
    ReportMetricResponse,
    PreviousMonthComparison,
    WeekOption
)
from planner.services import category_service, report_service

router = APIRouter(prefix="/workspaces/{workspace_id}/reports", tags=["reports"])


@router.get("/weeks", response_model=List[WeekOption])
def week_options(
    year: int = Query(..., ge=1, le=9998),
    month: int = Query(..., ge=1, le=12),
    workspace: Workspace = Depends(get_workspace)
):
    return report_service.get_weeks_for_month(year, month)


@router.post("", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
def create_report(
    report_data: ReportCreate,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return report_service.create_report(db, workspace.id, current_user.id, report_data.model_dump())


@router.get("", response_model=List[ReportResponse])
def list_reports(
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return report_service.list_reports(db, workspace.id, current_user.id)


@router.get("/{report_id}", response_model=ReportResponse)
def get_report(
    report_id: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    return report_service.get_report(db, workspace.id, current_user.id, report_id)


@router.put("/{report_id}", response_model=ReportResponse)
def update_report(
    report_id: int,
    report_data: ReportUpdate,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    update_data = report_data.model_dump(exclude_unset=True)
    return report_service.update_report(db, workspace.id, current_user.id, report_id, update_data)


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(
    report_id: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    report_service.delete_report(db, workspace.id, current_user.id, report_id)


@router.post("/{report_id}/analyze", response_model=List[ReportMetricResponse])
def analyze_report(
    report_id: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    """
    Recalcule les métriques du rapport sur sa période et remplace celles stockées.

    Si rien n'est analysable, 422 et les métriques existantes ne sont pas touchées.
    """
    report = report_service.get_report(db, workspace.id, current_user.id, report_id)
    labels = category_service.label_map(db, workspace.id)

    metrics = report_service.aggregate(
        db,
        workspace.id,
        current_user.id,
        report.start_date,
        report.end_date,
        labels.keys()
    )
    if not metrics:
        raise ValidationError("No analyzable data for this period")

    saved = report_service.replace_report_metrics(db, report, metrics)
    return report_service.describe_metrics(saved, labels)


@router.get("/{report_id}/metrics", response_model=List[ReportMetricResponse])
def list_report_metrics(
    report_id: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    report = report_service.get_report(db, workspace.id, current_user.id, report_id)
    labels = category_service.label_map(db, workspace.id)
    return report_service.describe_metrics(report_service.get_report_metrics(db, report.id), labels)


@router.get("/{report_id}/previous-week", response_model=Optional[ReportResponse])
def previous_week_report(
    report_id: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    report = report_service.get_report(db, workspace.id, current_user.id, report_id)
    return report_service.get_previous_week_report(db, workspace.id, current_user.id, report)


@router.get("/{report_id}/previous-month", response_model=Optional[PreviousMonthComparison])
def previous_month_comparison(
    report_id: int,
    db: Session = Depends(get_db),
    workspace: Workspace = Depends(get_workspace),
    current_user: User = Depends(get_current_user)
):
    report = report_service.get_report(db, workspace.id, current_user.id, report_id)
    comparison = report_service.get_previous_month_comparison(db, workspace.id, current_user.id, report)
    if comparison is None:
        return None

    labels = category_service.label_map(db, workspace.id)
    for metric in comparison["metrics"]:
        metric["label"] = category_service.get_category_label(labels, metric["category_id"])
        metric["color"] = category_service.get_category_color(metric["category_id"])
    return comparison
