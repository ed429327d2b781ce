"""
Tests de l'expansion des routines hebdomadaires en dates
"""

from datetime import date
from types import SimpleNamespace

from planner.models.routine import days_to_mask, mask_to_days
from planner.services.recurrence import expand, expand_days, month_bounds, weekday_code


# ============ HELPERS ============

def test_weekday_code_sunday_is_zero():
    assert weekday_code(date(2025, 7, 13)) == 0  # dimanche
    assert weekday_code(date(2025, 7, 14)) == 1  # lundi
    assert weekday_code(date(2025, 7, 19)) == 6  # samedi


def test_month_bounds():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2025, 12) == (date(2025, 12, 1), date(2025, 12, 31))


def test_mask_roundtrip_keeps_sorted_days():
    assert days_to_mask([5, 1, 3]) == 0b0101010
    assert mask_to_days(days_to_mask([5, 1, 3])) == [1, 3, 5]
    assert mask_to_days(0) == []


# ============ INCLUDE PAST ============

def test_include_past_returns_every_matching_day():
    """Tous les lundis/mercredis/vendredis de juillet 2025, dans l'ordre"""
    dates = expand_days({1, 3, 5}, 2025, 7, include_past=True, today=date(2025, 7, 15))

    expected = [
        date(2025, 7, d) for d in range(1, 32)
        if weekday_code(date(2025, 7, d)) in {1, 3, 5}
    ]
    assert dates == expected
    assert len(dates) == 13
    assert dates == sorted(dates)


def test_every_day_of_week_covers_whole_month():
    dates = expand_days(range(7), 2024, 2, include_past=True)
    assert len(dates) == 29


# ============ EXCLUDE PAST ============

def test_exclude_past_scenario_mid_month():
    """Aujourd'hui = mardi 15: seuls les L/M/V à partir du 16 sont générés"""
    dates = expand_days({1, 3, 5}, 2025, 7, include_past=False, today=date(2025, 7, 15))

    assert [d.day for d in dates] == [16, 18, 21, 23, 25, 28, 30]


def test_exclude_past_is_subset_without_past_dates():
    today = date(2025, 7, 15)
    future = expand_days({0, 2, 4, 6}, 2025, 7, include_past=False, today=today)
    full = expand_days({0, 2, 4, 6}, 2025, 7, include_past=True, today=today)

    assert set(future) < set(full)
    assert all(d >= today for d in future)


def test_today_itself_is_included():
    # 2025-07-14 est un lundi
    dates = expand_days({1}, 2025, 7, include_past=False, today=date(2025, 7, 14))
    assert dates[0] == date(2025, 7, 14)


def test_month_in_the_past_gives_nothing():
    assert expand_days({1, 3, 5}, 2025, 6, include_past=False, today=date(2025, 7, 15)) == []


def test_month_in_the_future_gives_whole_month():
    future = expand_days({1}, 2025, 9, include_past=False, today=date(2025, 7, 15))
    full = expand_days({1}, 2025, 9, include_past=True, today=date(2025, 7, 15))
    assert future == full


# ============ CAS LIMITES ============

def test_empty_weekday_set_gives_nothing():
    assert expand_days([], 2025, 7, include_past=True) == []


def test_expand_reads_routine_days():
    routine = SimpleNamespace(repeat_days=[6])
    dates = expand(routine, 2025, 7, include_past=True)
    assert [d.day for d in dates] == [5, 12, 19, 26]
