from typing import Any, Dict, List, Mapping

from sqlalchemy import func, select

from taskboard.crud.base import (
    TOKEN, Owned, Resource, cascade_delete, fetch_children, insert_row, patch_row, require_row,
)
from taskboard.db.models.checklist import Checklist, ChecklistTask, Subtask
from taskboard.db.session import Database

checklists = Checklist.__table__
checklist_tasks = ChecklistTask.__table__
subtasks = Subtask.__table__

SUBTASK = Resource(
    table=subtasks,
    label="Subtask",
    allowed_fields=frozenset({"title", "completed"}),
    id_strategy=TOKEN,
)

CHECKLIST_TASK = Resource(
    table=checklist_tasks,
    label="Task",
    allowed_fields=frozenset({"title", "priority", "completed"}),
    id_strategy=TOKEN,
    owned=(Owned(subtasks, "task_id"),),
)

CHECKLIST = Resource(
    table=checklists,
    label="Checklist",
    allowed_fields=frozenset({"title", "description", "theme"}),
    id_strategy=TOKEN,
    owned=(Owned(checklist_tasks, "checklist_id", children=(Owned(subtasks, "task_id"),)),),
)

def _attach_tasks(runner, checklist: Dict[str, Any]) -> Dict[str, Any]:
    checklist["tasks"] = fetch_children(
        runner, checklist_tasks, "checklist_id", checklist["id"], checklist_tasks.c.created_at.asc()
    )
    for task in checklist["tasks"]:
        task["subtasks"] = fetch_children(runner, subtasks, "task_id", task["id"], subtasks.c.created_at.asc())
    return checklist

def list_checklists(db: Database) -> List[Dict[str, Any]]:
    rows = db.fetch_many(select(checklists).order_by(checklists.c.created_at.desc()))
    return [_attach_tasks(db, row) for row in rows]

def get_checklist(db: Database, checklist_id: str) -> Dict[str, Any]:
    return _attach_tasks(db, require_row(db, CHECKLIST, checklist_id))

def create_checklist(db: Database, data: Mapping[str, Any]) -> Dict[str, Any]:
    with db.transaction() as tx:
        checklist = insert_row(tx, CHECKLIST, {
            "title": data["title"],
            "description": data.get("description") or "",
            "theme": data.get("theme") or "blue",
        })
    checklist["tasks"] = []
    return checklist

def update_checklist(db: Database, checklist_id: str, updates: Mapping[str, Any]) -> Dict[str, Any]:
    return patch_row(db, CHECKLIST, checklist_id, updates)

def delete_checklist(db: Database, checklist_id: str) -> int:
    return cascade_delete(db, CHECKLIST, checklist_id)

def add_task(db: Database, checklist_id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    with db.transaction() as tx:
        require_row(tx, CHECKLIST, checklist_id)
        task = insert_row(tx, CHECKLIST_TASK, {
            "checklist_id": checklist_id,
            "title": data["title"],
            "priority": data.get("priority") or "Medium",
        })
    task["subtasks"] = []
    return task

def update_task(db: Database, checklist_id: str, task_id: str, updates: Mapping[str, Any]) -> Dict[str, Any]:
    return patch_row(db, CHECKLIST_TASK, task_id, updates, scope={"checklist_id": checklist_id})

def delete_task(db: Database, checklist_id: str, task_id: str) -> int:
    return cascade_delete(db, CHECKLIST_TASK, task_id, scope={"checklist_id": checklist_id})

def add_subtask(db: Database, checklist_id: str, task_id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    with db.transaction() as tx:
        require_row(tx, CHECKLIST_TASK, task_id, scope={"checklist_id": checklist_id})
        return insert_row(tx, SUBTASK, {"task_id": task_id, "title": data["title"]})

def update_subtask(
    db: Database, checklist_id: str, task_id: str, subtask_id: str, updates: Mapping[str, Any]
) -> Dict[str, Any]:
    require_row(db, CHECKLIST_TASK, task_id, scope={"checklist_id": checklist_id})
    return patch_row(db, SUBTASK, subtask_id, updates, scope={"task_id": task_id})

def delete_subtask(db: Database, checklist_id: str, task_id: str, subtask_id: str) -> int:
    require_row(db, CHECKLIST_TASK, task_id, scope={"checklist_id": checklist_id})
    return cascade_delete(db, SUBTASK, subtask_id, scope={"task_id": task_id})

def checklist_stats(db: Database) -> Dict[str, Any]:
    def count(table, *where):
        stmt = select(func.count()).select_from(table)
        if where:
            stmt = stmt.where(*where)
        return stmt.scalar_subquery()

    stmt = select(
        count(checklists).label("total"),
        count(checklist_tasks).label("total_tasks"),
        count(checklist_tasks, checklist_tasks.c.completed.is_(True)).label("completed_tasks"),
        count(subtasks).label("total_subtasks"),
        count(subtasks, subtasks.c.completed.is_(True)).label("completed_subtasks"),
    )
    return db.fetch_one(stmt)
