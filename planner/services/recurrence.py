"""
Expansion d'une routine hebdomadaire en dates concrètes sur un mois.

Codes jour: 0 = dimanche ... 6 = samedi.
"""

import calendar
from datetime import date, timedelta
from typing import Iterable, List, Tuple


def get_today() -> date:
    """Retourne la date d'aujourd'hui (date locale, sans fuseau)"""
    return date.today()


def weekday_code(d: date) -> int:
    # isoweekday: lundi=1 .. dimanche=7 -> dimanche=0
    return d.isoweekday() % 7


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """Premier et dernier jour du mois (month 1-12)"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def expand_days(
    repeat_days: Iterable[int],
    year: int,
    month: int,
    include_past: bool = False,
    today: date = None
) -> List[date]:
    """
    Dates du mois dont le jour de la semaine est dans repeat_days, triées.

    Sans include_past, la fenêtre commence à max(today, 1er du mois).
    Liste vide si aucun jour sélectionné ou si la fenêtre est vide.
    """
    days = set(repeat_days)
    if not days:
        return []

    if today is None:
        today = get_today()

    month_start, month_end = month_bounds(year, month)
    start = month_start if include_past else max(today, month_start)

    dates = []
    current = start
    while current <= month_end:
        if weekday_code(current) in days:
            dates.append(current)
        current += timedelta(days=1)
    return dates


def expand(routine, year: int, month: int, include_past: bool = False, today: date = None) -> List[date]:
    return expand_days(routine.repeat_days, year, month, include_past, today)
