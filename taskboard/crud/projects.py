from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import case, delete, func, select

from taskboard.core.errors import ConflictError, NotFoundError, ValidationError
from taskboard.crud.base import (
    Owned, Resource, cascade_delete, equals_filters, fetch_children, insert_row, patch_row, require_row,
)
from taskboard.crud.tasks import TASK
from taskboard.db.models.associations import project_tasks
from taskboard.db.models.project import PROJECT_STATUSES, Project, ProjectMilestone, ResourceAllocation
from taskboard.db.models.task import Task
from taskboard.db.session import Database

projects = Project.__table__
milestones = ProjectMilestone.__table__
resources = ResourceAllocation.__table__
tasks = Task.__table__

PROJECT = Resource(
    table=projects,
    label="Project",
    allowed_fields=frozenset({
        "name", "description", "start_date", "end_date", "status", "priority", "manager", "budget",
    }),
    owned=(
        Owned(milestones, "project_id"),
        Owned(resources, "project_id"),
        Owned(project_tasks, "project_id"),
    ),
)

MILESTONE = Resource(
    table=milestones,
    label="Milestone",
    allowed_fields=frozenset({"title", "description", "due_date", "completed"}),
)

RESOURCE_ALLOCATION = Resource(
    table=resources,
    label="Resource",
    allowed_fields=frozenset({"resource_name", "role", "hours_per_week", "start_date", "end_date", "hourly_rate"}),
)

def _check_dates(current: Mapping[str, Any], updates: Mapping[str, Any]) -> None:
    # A partial update may move only one end of the range.
    start = updates.get("start_date", current.get("start_date"))
    end = updates.get("end_date", current.get("end_date"))
    if start is not None and end is not None and end < start:
        raise ValidationError("end_date must not be before start_date", errors=[
            {"field": "end_date", "message": "end_date must not be before start_date"}
        ])

def _linked_tasks(runner, project_id: int) -> List[Dict[str, Any]]:
    stmt = (
        select(tasks)
        .join(project_tasks, project_tasks.c.task_id == tasks.c.id)
        .where(project_tasks.c.project_id == project_id)
        .order_by(project_tasks.c.created_at.asc(), project_tasks.c.id.asc())
    )
    return runner.fetch_many(stmt)

def _attach_children(runner, project: Dict[str, Any]) -> Dict[str, Any]:
    project_id = project["id"]
    project["tasks"] = _linked_tasks(runner, project_id)
    project["milestones"] = fetch_children(
        runner, milestones, "project_id", project_id, milestones.c.due_date.asc(), milestones.c.id.asc()
    )
    project["resources"] = fetch_children(
        runner, resources, "project_id", project_id, resources.c.created_at.asc(), resources.c.id.asc()
    )
    return project

def list_projects(db: Database, status: Optional[str] = None, priority: Optional[str] = None) -> List[Dict[str, Any]]:
    stmt = select(projects).where(*equals_filters(projects, status=status, priority=priority))
    rows = db.fetch_many(stmt.order_by(projects.c.created_at.desc(), projects.c.id.desc()))
    return [_attach_children(db, row) for row in rows]

def get_project(db: Database, project_id: int) -> Dict[str, Any]:
    return _attach_children(db, require_row(db, PROJECT, project_id))

def create_project(db: Database, data: Mapping[str, Any]) -> Dict[str, Any]:
    with db.transaction() as tx:
        project = insert_row(tx, PROJECT, data)
    project.update(tasks=[], milestones=[], resources=[])
    return project

def update_project(db: Database, project_id: int, updates: Mapping[str, Any]) -> Dict[str, Any]:
    if "start_date" in updates or "end_date" in updates:
        _check_dates(require_row(db, PROJECT, project_id), updates)
    return patch_row(db, PROJECT, project_id, updates)

def delete_project(db: Database, project_id: int) -> int:
    # Linked tasks survive; only their link rows are removed.
    return cascade_delete(db, PROJECT, project_id)

def link_task(db: Database, project_id: int, task_id: int) -> Dict[str, Any]:
    with db.transaction() as tx:
        require_row(tx, PROJECT, project_id)
        task = require_row(tx, TASK, task_id)
        existing = tx.fetch_one(
            select(project_tasks.c.id).where(
                project_tasks.c.project_id == project_id, project_tasks.c.task_id == task_id
            )
        )
        if existing is not None:
            raise ConflictError("Task already linked to project")
        tx.execute(project_tasks.insert().values(project_id=project_id, task_id=task_id))
    return task

def unlink_task(db: Database, project_id: int, task_id: int) -> None:
    result = db.execute(
        delete(project_tasks).where(project_tasks.c.project_id == project_id, project_tasks.c.task_id == task_id)
    )
    if result.rows_affected == 0:
        raise NotFoundError("Task link not found")

def add_milestone(db: Database, project_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    with db.transaction() as tx:
        require_row(tx, PROJECT, project_id)
        return insert_row(tx, MILESTONE, {**data, "project_id": project_id})

def update_milestone(db: Database, project_id: int, milestone_id: int, updates: Mapping[str, Any]) -> Dict[str, Any]:
    return patch_row(db, MILESTONE, milestone_id, updates, scope={"project_id": project_id})

def delete_milestone(db: Database, project_id: int, milestone_id: int) -> int:
    return cascade_delete(db, MILESTONE, milestone_id, scope={"project_id": project_id})

def add_resource(db: Database, project_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    with db.transaction() as tx:
        require_row(tx, PROJECT, project_id)
        return insert_row(tx, RESOURCE_ALLOCATION, {**data, "project_id": project_id})

def update_resource(db: Database, project_id: int, resource_id: int, updates: Mapping[str, Any]) -> Dict[str, Any]:
    scope = {"project_id": project_id}
    if "start_date" in updates or "end_date" in updates:
        _check_dates(require_row(db, RESOURCE_ALLOCATION, resource_id, scope), updates)
    return patch_row(db, RESOURCE_ALLOCATION, resource_id, updates, scope=scope)

def delete_resource(db: Database, project_id: int, resource_id: int) -> int:
    return cascade_delete(db, RESOURCE_ALLOCATION, resource_id, scope={"project_id": project_id})

def project_stats(db: Database) -> Dict[str, Any]:
    columns = [func.count().label("total")]
    for status in PROJECT_STATUSES:
        label = status.replace("-", "_")
        columns.append(func.coalesce(func.sum(case((projects.c.status == status, 1), else_=0)), 0).label(label))
    columns.append(func.coalesce(func.sum(projects.c.budget), 0).label("total_budget"))
    return db.fetch_one(select(*columns).select_from(projects))
