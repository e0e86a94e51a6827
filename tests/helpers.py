# tests/helpers.py

from __future__ import annotations

from fastapi.testclient import TestClient


def create_task(client: TestClient, name: str = "Write report", creator: str = "Ann") -> dict:
    response = client.post("/api/tasks", json={"name": name, "creator": creator})
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_checklist(client: TestClient, title: str = "Release prep") -> dict:
    response = client.post("/api/checklists", json={"title": title})
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_project(client: TestClient, **fields) -> dict:
    body = {"name": "Website relaunch", **fields}
    response = client.post("/api/projects", json=body)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_daily_task(client: TestClient, **fields) -> dict:
    body = {"title": "Review PRs", "assigned_to": "Ann", "due_date": "2024-01-10", **fields}
    response = client.post("/api/daily-tasks", json=body)
    assert response.status_code == 201, response.text
    return response.json()["data"]
