"""Tests des SoD: CRUD, propagation checked -> tâches, stats du calendrier"""

from datetime import date, time

from planner.models.schedule_entry import ScheduleEntry
from planner.models.task import Task
from planner.services.schedule_service import get_month_day_stats, set_entry_checked, update_entry
from planner.services.task_service import update_task


def make_entry(db, owner, **fields):
    entry = ScheduleEntry(workspace_id=owner["workspace_id"], user_id=owner["user_id"], **fields)
    db.add(entry)
    db.commit()
    return entry


def make_linked_task(db, owner, entry, summary="Linked"):
    task = Task(
        workspace_id=owner["workspace_id"],
        user_id=owner["user_id"],
        summary=summary,
        schedule_entry_id=entry.id
    )
    db.add(task)
    db.commit()
    return task


# ============ DUREE ============

def test_duration_minutes():
    assert ScheduleEntry(start_at=time(9, 0), end_at=time(10, 30)).duration_minutes == 90
    assert ScheduleEntry(start_at=time(14, 0), end_at=time(14, 0)).duration_minutes == 0
    assert ScheduleEntry(start_at=time(15, 0), end_at=time(14, 0)).duration_minutes == 0
    assert ScheduleEntry(start_at=time(9, 0), end_at=None).duration_minutes == 0
    assert ScheduleEntry(start_at=None, end_at=None).duration_minutes == 0


# ============ PROPAGATION ============

def test_checking_entry_completes_every_linked_task(db, owner):
    entry = make_entry(db, owner, date=date(2025, 7, 1))
    first = make_linked_task(db, owner, entry, "first")
    second = make_linked_task(db, owner, entry, "second")
    unrelated = Task(workspace_id=owner["workspace_id"], user_id=owner["user_id"], summary="other")
    db.add(unrelated)
    db.commit()

    set_entry_checked(db, owner["workspace_id"], owner["user_id"], entry.id, True)

    db.expire_all()
    assert db.get(Task, first.id).completed is True
    assert db.get(Task, second.id).completed is True
    assert db.get(Task, unrelated.id).completed is False

    set_entry_checked(db, owner["workspace_id"], owner["user_id"], entry.id, False)
    db.expire_all()
    assert db.get(Task, first.id).completed is False


def test_update_without_checked_does_not_touch_tasks(db, owner):
    entry = make_entry(db, owner, date=date(2025, 7, 1), checked=True)
    task = make_linked_task(db, owner, entry)

    update_entry(db, owner["workspace_id"], owner["user_id"], entry.id, {"summary": "renamed"})

    db.expire_all()
    assert db.get(Task, task.id).completed is False


def test_propagation_skips_other_owners_tasks(db, owner):
    entry = make_entry(db, owner, date=date(2025, 7, 1))
    foreign = Task(
        workspace_id=owner["workspace_id"],
        user_id=owner["user_id"] + 1,
        summary="not mine",
        schedule_entry_id=entry.id
    )
    db.add(foreign)
    db.commit()

    set_entry_checked(db, owner["workspace_id"], owner["user_id"], entry.id, True)

    db.expire_all()
    assert db.get(Task, foreign.id).completed is False


def test_completing_task_never_checks_entry(db, owner):
    """Sens unique: tâche -> SoD n'est pas propagé"""
    entry = make_entry(db, owner, date=date(2025, 7, 1))
    task = make_linked_task(db, owner, entry)

    update_task(db, owner["workspace_id"], owner["user_id"], task.id, {"completed": True})

    db.expire_all()
    assert db.get(ScheduleEntry, entry.id).checked is False
    assert db.get(Task, task.id).completed is True


# ============ STATS ============

def test_month_day_stats(db, owner):
    make_entry(db, owner, date=date(2025, 2, 3), checked=True)
    make_entry(db, owner, date=date(2025, 2, 3), checked=False)
    make_entry(db, owner, date=date(2025, 2, 3), checked=False)
    make_entry(db, owner, date=date(2025, 2, 10), checked=True)
    make_entry(db, owner, date=date(2025, 3, 1), checked=True)

    stats = get_month_day_stats(db, owner["workspace_id"], owner["user_id"], 2025, 2)

    assert len(stats) == 28
    by_day = {s["date"].day: s for s in stats}
    assert by_day[3] == {"date": date(2025, 2, 3), "total": 3, "checked": 1, "percent": 33.3}
    assert by_day[10]["percent"] == 100.0
    assert by_day[1]["total"] == 0
    assert by_day[1]["percent"] == 0.0


# ============ API ============

def test_api_entry_crud(client, headers, workspace_id, category_id):
    url = f"/workspaces/{workspace_id}/schedule-entries"
    created = client.post(url, headers=headers, json={
        "date": "2025-07-01",
        "start_at": "09:00:00",
        "end_at": "10:30:00",
        "summary": "Write report",
        "category_id": category_id
    })
    assert created.status_code == 201
    entry = created.json()
    assert entry["checked"] is False
    assert entry["routine_id"] is None
    assert entry["duration_minutes"] == 90

    updated = client.put(f"{url}/{entry['id']}", headers=headers, json={"summary": "Write weekly report"})
    assert updated.json()["summary"] == "Write weekly report"

    null_checked = client.put(f"{url}/{entry['id']}", headers=headers, json={"checked": None})
    assert null_checked.status_code == 422

    assert client.delete(f"{url}/{entry['id']}", headers=headers).status_code == 204
    assert client.get(f"{url}/{entry['id']}", headers=headers).status_code == 404


def test_api_list_entries_in_range(client, headers, workspace_id):
    url = f"/workspaces/{workspace_id}/schedule-entries"
    for day in ("2025-07-01", "2025-07-07", "2025-07-08"):
        client.post(url, headers=headers, json={"date": day})

    response = client.get(f"{url}?start=2025-07-01&end=2025-07-07", headers=headers)
    assert [e["date"] for e in response.json()] == ["2025-07-01", "2025-07-07"]


def test_api_check_endpoint_syncs_linked_task(client, headers, workspace_id, category_id):
    task_id = client.post(
        f"/workspaces/{workspace_id}/tasks", headers=headers, json={"summary": "Call bank"}
    ).json()["id"]
    entry = client.post(
        f"/workspaces/{workspace_id}/tasks/{task_id}/promote",
        headers=headers,
        json={"date": "2025-07-02", "start_at": "11:00:00", "category_id": category_id}
    ).json()

    response = client.post(
        f"/workspaces/{workspace_id}/schedule-entries/{entry['id']}/check?checked=true",
        headers=headers
    )
    assert response.status_code == 200
    assert response.json()["checked"] is True

    task = client.get(f"/workspaces/{workspace_id}/tasks/{task_id}", headers=headers).json()
    assert task["completed"] is True


def test_api_month_stats(client, headers, workspace_id):
    url = f"/workspaces/{workspace_id}/schedule-entries"
    client.post(url, headers=headers, json={"date": "2025-07-04", "checked": True})
    client.post(url, headers=headers, json={"date": "2025-07-04"})

    response = client.get(f"{url}/stats?year=2025&month=7", headers=headers)
    assert response.status_code == 200
    stats = response.json()
    assert len(stats) == 31
    assert stats[3] == {"date": "2025-07-04", "total": 2, "checked": 1, "percent": 50.0}


def test_api_entries_of_other_workspace_hidden(client, headers, workspace_id):
    from conftest import signup_and_login

    entry_id = client.post(
        f"/workspaces/{workspace_id}/schedule-entries", headers=headers, json={"date": "2025-07-01"}
    ).json()["id"]

    other_token = signup_and_login(client, "other@example.com", "other")
    other_headers = {"Authorization": f"Bearer {other_token}"}

    response = client.get(f"/workspaces/{workspace_id}/schedule-entries/{entry_id}", headers=other_headers)
    assert response.status_code == 404


def test_api_month_stats_rejects_out_of_range_year(client, headers, workspace_id):
    url = f"/workspaces/{workspace_id}/schedule-entries/stats"
    assert client.get(f"{url}?year=0&month=1", headers=headers).status_code == 422
    assert client.get(f"{url}?year=10000&month=1", headers=headers).status_code == 422
