from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import case, func, select

from taskboard.crud.base import Resource, cascade_delete, equals_filters, insert_row, patch_row, require_row
from taskboard.db.models.task import Task
from taskboard.db.session import Database

tasks = Task.__table__

TASK = Resource(
    table=tasks,
    label="Task",
    allowed_fields=frozenset({"status", "approver", "timer", "completed"}),
)

def list_tasks(
    db: Database,
    creator: Optional[str] = None,
    status: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    stmt = select(tasks).where(*equals_filters(tasks, creator=creator, status=status))
    stmt = stmt.order_by(tasks.c.created_at.desc(), tasks.c.id.desc())
    if limit is not None:
        stmt = stmt.limit(limit)
    return db.fetch_many(stmt)

def get_task(db: Database, task_id: int) -> Dict[str, Any]:
    return require_row(db, TASK, task_id)

def create_task(db: Database, data: Mapping[str, Any]) -> Dict[str, Any]:
    with db.transaction() as tx:
        return insert_row(tx, TASK, {"name": data["name"], "creator": data["creator"]})

def update_task(db: Database, task_id: int, updates: Mapping[str, Any]) -> Dict[str, Any]:
    # Any allowed status is accepted regardless of the current one.
    return patch_row(db, TASK, task_id, updates)

def delete_task(db: Database, task_id: int) -> None:
    # project_tasks rows go with the task through the foreign key cascade.
    cascade_delete(db, TASK, task_id)

def _count_where(condition):
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)

def task_stats(db: Database) -> Dict[str, Any]:
    stmt = select(
        func.count().label("total"),
        _count_where(tasks.c.completed.is_(True)).label("completed"),
        _count_where(tasks.c.status == "pending").label("pending"),
        _count_where(tasks.c.status == "approved").label("approved"),
        _count_where(tasks.c.status == "rejected").label("rejected"),
    ).select_from(tasks)
    return db.fetch_one(stmt)
