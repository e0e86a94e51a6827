# tests/test_projects_api.py

from __future__ import annotations

from fastapi.testclient import TestClient

from .helpers import create_project, create_task


def test_create_returns_empty_children(client: TestClient) -> None:
    project = create_project(client, start_date="2024-01-01", end_date="2024-03-01", budget=1500)
    assert project["tasks"] == []
    assert project["milestones"] == []
    assert project["resources"] == []
    assert project["status"] == "planning"
    assert project["priority"] == "medium"
    assert project["start_date"] == "2024-01-01"


def test_end_before_start_fails_and_equal_dates_succeed(client: TestClient) -> None:
    response = client.post(
        "/api/projects", json={"name": "Backwards", "start_date": "2024-02-01", "end_date": "2024-01-01"}
    )
    assert response.status_code == 400
    assert client.get("/api/projects").json()["data"] == []

    create_project(client, start_date="2024-02-01", end_date="2024-02-01")


def test_update_checks_dates_against_stored_values(client: TestClient) -> None:
    project = create_project(client, start_date="2024-02-01", end_date="2024-03-01")

    response = client.put(f"/api/projects/{project['id']}", json={"end_date": "2024-01-15"})
    assert response.status_code == 400

    response = client.put(f"/api/projects/{project['id']}", json={"end_date": "2024-04-01", "status": "active"})
    assert response.status_code == 200
    assert response.json()["data"]["end_date"] == "2024-04-01"
    assert response.json()["data"]["status"] == "active"


def test_link_and_unlink_task(client: TestClient) -> None:
    project = create_project(client)
    task = create_task(client)

    response = client.post(f"/api/projects/{project['id']}/tasks", json={"task_id": task["id"]})
    assert response.status_code == 201

    response = client.post(f"/api/projects/{project['id']}/tasks", json={"taskId": task["id"]})
    assert response.status_code == 409

    linked = client.get(f"/api/projects/{project['id']}").json()["data"]["tasks"]
    assert [t["id"] for t in linked] == [task["id"]]

    assert client.delete(f"/api/projects/{project['id']}/tasks/{task['id']}").status_code == 200
    assert client.get(f"/api/projects/{project['id']}").json()["data"]["tasks"] == []
    assert client.get(f"/api/tasks/{task['id']}").status_code == 200

    assert client.delete(f"/api/projects/{project['id']}/tasks/{task['id']}").status_code == 404


def test_link_requires_existing_project_and_task(client: TestClient) -> None:
    project = create_project(client)
    task = create_task(client)
    assert client.post(f"/api/projects/{project['id']}/tasks", json={"task_id": 999}).status_code == 404
    assert client.post("/api/projects/999/tasks", json={"task_id": task["id"]}).status_code == 404


def test_deleting_task_removes_its_links(client: TestClient) -> None:
    project = create_project(client)
    task = create_task(client)
    client.post(f"/api/projects/{project['id']}/tasks", json={"task_id": task["id"]})

    client.delete(f"/api/tasks/{task['id']}")
    assert client.get(f"/api/projects/{project['id']}").json()["data"]["tasks"] == []


def test_milestones_scoped_to_project(client: TestClient) -> None:
    project = create_project(client)
    other = create_project(client, name="Other project")

    response = client.post(
        f"/api/projects/{project['id']}/milestones", json={"title": "Beta", "due_date": "2024-05-01"}
    )
    assert response.status_code == 201
    milestone = response.json()["data"]
    assert milestone["completed"] is False

    assert client.put(
        f"/api/projects/{other['id']}/milestones/{milestone['id']}", json={"completed": True}
    ).status_code == 404
    assert client.delete(f"/api/projects/{other['id']}/milestones/{milestone['id']}").status_code == 404

    response = client.put(f"/api/projects/{project['id']}/milestones/{milestone['id']}", json={"completed": True})
    assert response.status_code == 200
    assert response.json()["data"]["completed"] is True

    assert client.delete(f"/api/projects/{project['id']}/milestones/{milestone['id']}").status_code == 200


def test_milestones_ordered_by_due_date(client: TestClient) -> None:
    project = create_project(client)
    for title, due in (("Launch", "2024-06-01"), ("Alpha", "2024-02-01"), ("Beta", "2024-04-01")):
        client.post(f"/api/projects/{project['id']}/milestones", json={"title": title, "due_date": due})

    milestones = client.get(f"/api/projects/{project['id']}").json()["data"]["milestones"]
    assert [m["title"] for m in milestones] == ["Alpha", "Beta", "Launch"]


def test_resources(client: TestClient) -> None:
    project = create_project(client)

    response = client.post(f"/api/projects/{project['id']}/resources", json={"resource_name": "Bob", "role": "Dev"})
    assert response.status_code == 201
    resource = response.json()["data"]
    assert resource["hours_per_week"] == 40
    assert resource["hourly_rate"] == 0

    base = f"/api/projects/{project['id']}/resources/{resource['id']}"
    response = client.put(base, json={"hourly_rate": 55.5})
    assert response.status_code == 200
    assert response.json()["data"]["hourly_rate"] == 55.5

    assert client.put(base, json={"start_date": "2024-03-01", "end_date": "2024-02-01"}).status_code == 400
    assert client.delete(base).status_code == 200
    assert client.get(f"/api/projects/{project['id']}").json()["data"]["resources"] == []


def test_resource_validation(client: TestClient) -> None:
    project = create_project(client)
    url = f"/api/projects/{project['id']}/resources"
    assert client.post(url, json={"resource_name": "B", "role": "Dev"}).status_code == 400
    assert client.post(url, json={"resource_name": "Bob"}).status_code == 400
    assert client.post(url, json={"resource_name": "Bob", "role": "Dev", "hourly_rate": -1}).status_code == 400


def test_delete_cascades_but_keeps_tasks(client: TestClient) -> None:
    project = create_project(client)
    task = create_task(client)
    client.post(f"/api/projects/{project['id']}/tasks", json={"task_id": task["id"]})
    client.post(f"/api/projects/{project['id']}/milestones", json={"title": "Beta"})
    client.post(f"/api/projects/{project['id']}/resources", json={"resource_name": "Bob", "role": "Dev"})

    assert client.delete(f"/api/projects/{project['id']}").status_code == 200
    assert client.get(f"/api/projects/{project['id']}").status_code == 404
    assert client.get(f"/api/tasks/{task['id']}").status_code == 200
    assert client.delete(f"/api/projects/{project['id']}").status_code == 404


def test_list_filters(client: TestClient) -> None:
    create_project(client, name="Quiet project", priority="low")
    create_project(client, name="Hot project", priority="urgent", status="active")

    active = client.get("/api/projects", params={"status": "active"}).json()["data"]
    assert [p["name"] for p in active] == ["Hot project"]
    low = client.get("/api/projects", params={"priority": "low"}).json()["data"]
    assert [p["name"] for p in low] == ["Quiet project"]


def test_stats(client: TestClient) -> None:
    create_project(client, budget=100)
    create_project(client, name="Second project", status="on-hold", budget=250.5)

    stats = client.get("/api/projects/stats/summary").json()["data"]
    assert stats["total"] == 2
    assert stats["planning"] == 1
    assert stats["on_hold"] == 1
    assert stats["total_budget"] == 350.5


def test_short_name_persists_nothing(client: TestClient) -> None:
    assert client.post("/api/projects", json={"name": "ab"}).status_code == 400
    assert client.get("/api/projects").json()["data"] == []


def test_update_null_handling(client: TestClient) -> None:
    project = create_project(client, budget=500, start_date="2024-01-01")

    assert client.put(f"/api/projects/{project['id']}", json={"status": None}).status_code == 400
    assert client.put(f"/api/projects/{project['id']}", json={"priority": None}).status_code == 400

    response = client.put(f"/api/projects/{project['id']}", json={"budget": None, "start_date": None})
    assert response.status_code == 200
    assert response.json()["data"]["budget"] is None
    assert response.json()["data"]["start_date"] is None
    assert response.json()["data"]["status"] == "planning"


def test_sub_resource_null_handling(client: TestClient) -> None:
    project = create_project(client)
    milestone = client.post(
        f"/api/projects/{project['id']}/milestones", json={"title": "Beta", "due_date": "2024-05-01"}
    ).json()["data"]
    resource = client.post(
        f"/api/projects/{project['id']}/resources", json={"resource_name": "Bob", "role": "Dev"}
    ).json()["data"]
    milestone_url = f"/api/projects/{project['id']}/milestones/{milestone['id']}"
    resource_url = f"/api/projects/{project['id']}/resources/{resource['id']}"

    assert client.put(milestone_url, json={"completed": None}).status_code == 400
    response = client.put(milestone_url, json={"due_date": None})
    assert response.status_code == 200
    assert response.json()["data"]["due_date"] is None

    assert client.put(resource_url, json={"hours_per_week": None}).status_code == 400
    assert client.put(resource_url, json={"hourly_rate": None}).status_code == 400
    resources = client.get(f"/api/projects/{project['id']}").json()["data"]["resources"]
    assert resources[0]["hours_per_week"] == 40
    assert resources[0]["hourly_rate"] == 0
