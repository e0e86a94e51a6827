from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import case, func, insert, select, update

from taskboard.crud.base import (
    Owned, Resource, cascade_delete, date_range, equals_filters, fetch_children, insert_row, patch_row,
    require_row,
)
from taskboard.db.models.daily_task import DailyTask, DailyTaskProgress
from taskboard.db.session import Database

daily_tasks = DailyTask.__table__
progress = DailyTaskProgress.__table__

DAILY_TASK = Resource(
    table=daily_tasks,
    label="Daily task",
    # actual_hours is maintained by add_progress only.
    allowed_fields=frozenset({
        "title", "description", "assigned_to", "priority", "status", "due_date", "estimated_hours",
    }),
    owned=(Owned(progress, "daily_task_id"),),
)

PRIORITY_RANK = case(
    {"urgent": 1, "high": 2, "medium": 3, "low": 4},
    value=daily_tasks.c.priority,
    else_=5,
)

def _attach_history(runner, task: Dict[str, Any]) -> Dict[str, Any]:
    task["progress_history"] = fetch_children(
        runner, progress, "daily_task_id", task["id"],
        progress.c.progress_date.desc(), progress.c.created_at.desc(), progress.c.id.desc(),
    )
    return task

def list_daily_tasks(
    db: Database,
    assigned_to: Optional[str] = None,
    status: Optional[str] = None,
    due_date: Optional[date] = None,
) -> List[Dict[str, Any]]:
    filters = equals_filters(daily_tasks, assigned_to=assigned_to, status=status, due_date=due_date)
    stmt = select(daily_tasks).where(*filters).order_by(
        daily_tasks.c.due_date.asc(),
        PRIORITY_RANK,
        daily_tasks.c.created_at.desc(),
        daily_tasks.c.id.desc(),
    )
    return [_attach_history(db, row) for row in db.fetch_many(stmt)]

def get_daily_task(db: Database, task_id: int) -> Dict[str, Any]:
    return _attach_history(db, require_row(db, DAILY_TASK, task_id))

def create_daily_task(db: Database, data: Mapping[str, Any]) -> Dict[str, Any]:
    with db.transaction() as tx:
        task = insert_row(tx, DAILY_TASK, data)
    task["progress_history"] = []
    return task

def update_daily_task(db: Database, task_id: int, updates: Mapping[str, Any]) -> Dict[str, Any]:
    return patch_row(db, DAILY_TASK, task_id, updates)

def delete_daily_task(db: Database, task_id: int) -> int:
    return cascade_delete(db, DAILY_TASK, task_id)

def add_progress(db: Database, task_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """Record a progress entry and refresh the task's actual_hours in the same transaction."""
    with db.transaction() as tx:
        require_row(tx, DAILY_TASK, task_id)
        result = tx.execute(insert(progress).values(**data, daily_task_id=task_id))

        total = (
            select(func.coalesce(func.sum(progress.c.hours_spent), 0))
            .where(progress.c.daily_task_id == task_id)
            .scalar_subquery()
        )
        tx.execute(update(daily_tasks).where(daily_tasks.c.id == task_id).values(actual_hours=total))
        return tx.fetch_one(select(progress).where(progress.c.id == result.last_insert_id))

def daily_task_stats(
    db: Database,
    assigned_to: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Dict[str, Any]:
    def count_status(status):
        return func.coalesce(func.sum(case((daily_tasks.c.status == status, 1), else_=0)), 0)

    filters = equals_filters(daily_tasks, assigned_to=assigned_to)
    filters += date_range(daily_tasks.c.due_date, start_date, end_date)
    stmt = select(
        func.count().label("total"),
        count_status("pending").label("pending"),
        count_status("in-progress").label("in_progress"),
        count_status("completed").label("completed"),
        count_status("blocked").label("blocked"),
        func.coalesce(func.sum(daily_tasks.c.estimated_hours), 0).label("total_estimated_hours"),
        func.coalesce(func.sum(daily_tasks.c.actual_hours), 0).label("total_actual_hours"),
    ).select_from(daily_tasks).where(*filters)
    return db.fetch_one(stmt)
