# tests/test_daily_tasks_api.py

from __future__ import annotations

from fastapi.testclient import TestClient

from .helpers import create_daily_task


def _progress(client: TestClient, task_id: int, **fields):
    body = {"progress_date": "2024-01-05", **fields}
    return client.post(f"/api/daily-tasks/{task_id}/progress", json=body)


def test_create_returns_empty_history(client: TestClient) -> None:
    task = create_daily_task(client, estimated_hours=4)
    assert task["progress_history"] == []
    assert task["status"] == "pending"
    assert task["priority"] == "medium"
    assert task["actual_hours"] == 0


def test_due_date_is_required(client: TestClient) -> None:
    response = client.post("/api/daily-tasks", json={"title": "No date", "assigned_to": "Ann"})
    assert response.status_code == 400
    assert client.get("/api/daily-tasks").json()["data"] == []


def test_progress_entries_sum_into_actual_hours(client: TestClient) -> None:
    task = create_daily_task(client)

    response = _progress(client, task["id"], hours_spent=3, progress_percentage=40, notes="Started")
    assert response.status_code == 201
    entry = response.json()["data"]
    assert entry["daily_task_id"] == task["id"]
    assert entry["hours_spent"] == 3

    assert _progress(client, task["id"], progress_date="2024-01-06", hours_spent=2).status_code == 201

    fetched = client.get(f"/api/daily-tasks/{task['id']}").json()["data"]
    assert fetched["actual_hours"] == 5
    assert [p["progress_date"] for p in fetched["progress_history"]] == ["2024-01-06", "2024-01-05"]


def test_progress_on_missing_task_is_404(client: TestClient) -> None:
    assert _progress(client, 999, hours_spent=1).status_code == 404


def test_progress_percentage_out_of_range(client: TestClient) -> None:
    task = create_daily_task(client)
    assert _progress(client, task["id"], progress_percentage=150).status_code == 400
    assert client.get(f"/api/daily-tasks/{task['id']}").json()["data"]["progress_history"] == []


def test_actual_hours_cannot_be_written_directly(client: TestClient) -> None:
    task = create_daily_task(client)
    _progress(client, task["id"], hours_spent=3)

    assert client.put(f"/api/daily-tasks/{task['id']}", json={"actual_hours": 99}).status_code == 400

    response = client.put(f"/api/daily-tasks/{task['id']}", json={"status": "in-progress", "actual_hours": 99})
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "in-progress"
    assert response.json()["data"]["actual_hours"] == 3


def test_delete_removes_history(client: TestClient) -> None:
    task = create_daily_task(client)
    _progress(client, task["id"], hours_spent=1)

    assert client.delete(f"/api/daily-tasks/{task['id']}").status_code == 200
    assert client.get(f"/api/daily-tasks/{task['id']}").status_code == 404
    assert client.delete(f"/api/daily-tasks/{task['id']}").status_code == 404


def test_list_ordering_by_due_date_then_priority(client: TestClient) -> None:
    create_daily_task(client, title="Later low", due_date="2024-01-11", priority="low")
    create_daily_task(client, title="Soon low", due_date="2024-01-10", priority="low")
    create_daily_task(client, title="Soon urgent", due_date="2024-01-10", priority="urgent")
    create_daily_task(client, title="Soon high", due_date="2024-01-10", priority="high")

    titles = [t["title"] for t in client.get("/api/daily-tasks").json()["data"]]
    assert titles == ["Soon urgent", "Soon high", "Soon low", "Later low"]


def test_list_filters(client: TestClient) -> None:
    create_daily_task(client, title="Ann's work", assigned_to="Ann", due_date="2024-01-10")
    create_daily_task(client, title="Bob's work", assigned_to="Bob", due_date="2024-01-11", status="blocked")

    assert [t["title"] for t in client.get("/api/daily-tasks", params={"assigned_to": "Bob"}).json()["data"]] == [
        "Bob's work"
    ]
    assert [t["title"] for t in client.get("/api/daily-tasks", params={"status": "blocked"}).json()["data"]] == [
        "Bob's work"
    ]
    assert [t["title"] for t in client.get("/api/daily-tasks", params={"due_date": "2024-01-10"}).json()["data"]] == [
        "Ann's work"
    ]


def test_stats(client: TestClient) -> None:
    empty = client.get("/api/daily-tasks/stats/summary").json()["data"]
    assert empty["total"] == 0
    assert empty["total_actual_hours"] == 0

    first = create_daily_task(client, estimated_hours=4, due_date="2024-01-10")
    create_daily_task(client, estimated_hours=2, due_date="2024-02-10", status="completed")
    create_daily_task(client, assigned_to="Bob", estimated_hours=8, due_date="2024-01-15", status="blocked")
    _progress(client, first["id"], hours_spent=1.5)

    stats = client.get("/api/daily-tasks/stats/summary").json()["data"]
    assert stats["total"] == 3
    assert stats["pending"] == 1
    assert stats["completed"] == 1
    assert stats["blocked"] == 1
    assert stats["in_progress"] == 0
    assert stats["total_estimated_hours"] == 14
    assert stats["total_actual_hours"] == 1.5

    ann_january = client.get(
        "/api/daily-tasks/stats/summary",
        params={"assigned_to": "Ann", "start_date": "2024-01-01", "end_date": "2024-01-31"},
    ).json()["data"]
    assert ann_january["total"] == 1
    assert ann_january["total_estimated_hours"] == 4


def test_short_title_persists_nothing(client: TestClient) -> None:
    body = {"title": "ab", "assigned_to": "Ann", "due_date": "2024-01-10"}
    assert client.post("/api/daily-tasks", json=body).status_code == 400
    assert client.get("/api/daily-tasks").json()["data"] == []


def test_update_with_null_is_rejected(client: TestClient) -> None:
    task = create_daily_task(client, estimated_hours=4)

    assert client.put(f"/api/daily-tasks/{task['id']}", json={"status": None}).status_code == 400
    assert client.put(f"/api/daily-tasks/{task['id']}", json={"estimated_hours": None}).status_code == 400
    assert client.put(f"/api/daily-tasks/{task['id']}", json={"due_date": None}).status_code == 400

    fetched = client.get(f"/api/daily-tasks/{task['id']}").json()["data"]
    assert fetched["status"] == "pending"
    assert fetched["estimated_hours"] == 4
