"""
Report service - rapports hebdomadaires et agrégation par catégorie

aggregate() calcule les métriques (minutes, taux de complétion) d'une
période; replace_report_metrics() remplace l'ensemble persisté du rapport.
"""

import calendar
import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from planner.core.errors import NotFoundError
from planner.models.report import Report, ReportMetric
from planner.services.category_service import get_category_color, get_category_label
from planner.services.recurrence import month_bounds
from planner.services.schedule_service import get_entries_in_range

logger = logging.getLogger(__name__)


# ============ SEMAINES ============

def get_weeks_for_month(year: int, month: int) -> List[Dict]:
    """Semaines du mois: chaque lundi du mois ouvre une semaine de 7 jours"""
    weeks = []
    last_day = calendar.monthrange(year, month)[1]
    for day in range(1, last_day + 1):
        current = date(year, month, day)
        if current.weekday() != 0:
            continue
        end = current + timedelta(days=6)
        number = len(weeks) + 1
        weeks.append({
            "week_number": number,
            "start_date": current,
            "end_date": end,
            "label": f"{year}-{month:02d} week {number} ({current.isoformat()} ~ {end.isoformat()})"
        })
    return weeks


# ============ CRUD ============

def list_reports(db: Session, workspace_id: int, user_id: int) -> List[Report]:
    return db.query(Report).filter(
        Report.workspace_id == workspace_id,
        Report.user_id == user_id
    ).order_by(Report.start_date.desc()).all()


def get_report(db: Session, workspace_id: int, user_id: int, report_id: int) -> Report:
    report = db.query(Report).filter(
        Report.id == report_id,
        Report.workspace_id == workspace_id,
        Report.user_id == user_id
    ).first()
    if not report:
        raise NotFoundError("Report not found")
    return report


def create_report(db: Session, workspace_id: int, user_id: int, data: dict) -> Report:
    report = Report(workspace_id=workspace_id, user_id=user_id, **data)
    db.add(report)
    db.commit()
    db.refresh(report)
    return report


def delete_report(db: Session, workspace_id: int, user_id: int, report_id: int) -> None:
    report = get_report(db, workspace_id, user_id, report_id)
    db.query(ReportMetric).filter(ReportMetric.report_id == report.id).delete(synchronize_session=False)
    db.delete(report)
    db.commit()


def update_report(db: Session, workspace_id: int, user_id: int, report_id: int, data: dict) -> Report:
    """Maj des notes / champs KPT; la période du rapport n'est pas modifiable"""
    report = get_report(db, workspace_id, user_id, report_id)
    for field, value in data.items():
        setattr(report, field, value)
    db.commit()
    db.refresh(report)
    return report


def get_previous_week_report(db: Session, workspace_id: int, user_id: int, report: Report) -> Optional[Report]:
    if report.start_date.toordinal() <= 7:
        return None
    return db.query(Report).filter(
        Report.workspace_id == workspace_id,
        Report.user_id == user_id,
        Report.start_date == report.start_date - timedelta(days=7)
    ).order_by(Report.id.desc()).first()


def previous_month(year: int, month: int) -> Optional[Tuple[int, int]]:
    if month > 1:
        return year, month - 1
    if year > 1:
        return year - 1, 12
    return None


def get_previous_month_reports(db: Session, workspace_id: int, user_id: int, report: Report) -> List[Report]:
    """Rapports rattachés au mois (year/month) précédant celui du rapport"""
    previous = previous_month(report.year, report.month)
    if previous is None:
        return []
    year, month = previous
    return db.query(Report).filter(
        Report.workspace_id == workspace_id,
        Report.user_id == user_id,
        Report.year == year,
        Report.month == month
    ).order_by(Report.week_number, Report.id).all()


def get_previous_month_report(db: Session, workspace_id: int, user_id: int, report: Report) -> Optional[Report]:
    """Rapport du même numéro de semaine dont la période commence le mois précédent"""
    previous = previous_month(report.year, report.month)
    if previous is None:
        return None
    month_start, month_end = month_bounds(*previous)
    return db.query(Report).filter(
        Report.workspace_id == workspace_id,
        Report.user_id == user_id,
        Report.week_number == report.week_number,
        Report.start_date >= month_start,
        Report.start_date <= month_end
    ).order_by(Report.id.desc()).first()


# ============ AGREGATION ============

def completion_rate(checked: int, total: int) -> int:
    """Pourcentage arrondi à l'entier le plus proche (0.5 -> supérieur), 0 si groupe vide"""
    if total == 0:
        return 0
    return (200 * checked + total) // (2 * total)


def aggregate(
    db: Session,
    workspace_id: int,
    user_id: int,
    start: date,
    end: date,
    known_category_ids: Iterable[int]
) -> List[Dict]:
    """
    Métriques par catégorie sur [start, end].

    Les catégories référencées par un SoD mais absentes de known_category_ids
    (catégories supprimées) sont ajoutées. Les SoD sans catégorie sont ignorés.
    Une ligne n'est écartée que si minutes == 0 et rate == 0.
    """
    entries = get_entries_in_range(db, workspace_id, user_id, start, end)

    category_ids = list(dict.fromkeys(known_category_ids))
    seen = set(category_ids)
    for entry in entries:
        if entry.category_id is not None and entry.category_id not in seen:
            seen.add(entry.category_id)
            category_ids.append(entry.category_id)

    metrics = []
    for category_id in category_ids:
        group = [e for e in entries if e.category_id == category_id]
        minutes = sum(e.duration_minutes for e in group)
        checked = len([e for e in group if e.checked])
        rate = completion_rate(checked, len(group))
        if minutes == 0 and rate == 0:
            continue
        metrics.append({"category_id": category_id, "minutes": minutes, "rate": rate})

    logger.info(
        f"Aggregated {len(entries)} entries for workspace {workspace_id} "
        f"({start} ~ {end}): {len(metrics)} metric rows"
    )
    return metrics


def replace_report_metrics(db: Session, report: Report, metrics: List[Dict]) -> List[ReportMetric]:
    """Remplace (sans fusion) l'ensemble des métriques du rapport"""
    db.query(ReportMetric).filter(ReportMetric.report_id == report.id).delete(synchronize_session=False)

    rows = [
        ReportMetric(
            report_id=report.id,
            category_id=m["category_id"],
            minutes=m["minutes"],
            rate=m["rate"]
        )
        for m in metrics
    ]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


def get_report_metrics(db: Session, report_id: int) -> List[ReportMetric]:
    return db.query(ReportMetric).filter(
        ReportMetric.report_id == report_id
    ).order_by(ReportMetric.minutes.desc(), ReportMetric.id).all()


def describe_metrics(metrics: List[ReportMetric], labels: Dict[int, str]) -> List[Dict]:
    """Ajoute libellé (ou placeholder "tag supprimé") et couleur à chaque ligne"""
    return [
        {
            "id": m.id,
            "report_id": m.report_id,
            "category_id": m.category_id,
            "label": get_category_label(labels, m.category_id),
            "color": get_category_color(m.category_id),
            "minutes": m.minutes,
            "rate": m.rate
        }
        for m in metrics
    ]


def aggregate_report_metrics(db: Session, report_ids: List[int]) -> List[Dict]:
    """
    Cumule les métriques stockées de plusieurs rapports par catégorie.

    minutes: somme; rate: moyenne arrondie des rapports où la catégorie figure.
    Tri par minutes décroissantes.
    """
    if not report_ids:
        return []
    rows = db.query(ReportMetric).filter(
        ReportMetric.report_id.in_(report_ids)
    ).order_by(ReportMetric.report_id, ReportMetric.id).all()

    totals = {}
    for row in rows:
        bucket = totals.setdefault(row.category_id, {"minutes": 0, "rates": []})
        bucket["minutes"] += row.minutes
        bucket["rates"].append(row.rate)

    merged = [
        {
            "category_id": category_id,
            "minutes": bucket["minutes"],
            "rate": completion_rate(sum(bucket["rates"]), 100 * len(bucket["rates"]))
        }
        for category_id, bucket in totals.items()
    ]
    return sorted(merged, key=lambda m: -m["minutes"])


def get_previous_month_comparison(db: Session, workspace_id: int, user_id: int, report: Report) -> Optional[Dict]:
    """
    Métriques du mois précédent pour comparaison.

    Cumule tous les rapports du mois précédent (week_count = leur nombre);
    à défaut, reprend le rapport de même numéro de semaine (week_count = 1).
    None s'il n'existe ni l'un ni l'autre.
    """
    previous = previous_month(report.year, report.month)
    if previous is None:
        return None

    reports = get_previous_month_reports(db, workspace_id, user_id, report)
    if not reports:
        fallback = get_previous_month_report(db, workspace_id, user_id, report)
        if fallback is None:
            return None
        reports = [fallback]

    report_ids = [r.id for r in reports]
    logger.info(f"Report {report.id}: comparing with {len(report_ids)} report(s) of {previous[0]}-{previous[1]:02d}")
    return {
        "year": previous[0],
        "month": previous[1],
        "week_count": len(report_ids),
        "report_ids": report_ids,
        "metrics": aggregate_report_metrics(db, report_ids)
    }
