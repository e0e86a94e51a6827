from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path

from taskboard.crud import tasks as crud
from taskboard.db.session import Database
from taskboard.routers import deps
from taskboard.schemas.task import TaskCreate, TaskStatus, TaskUpdate
from taskboard.utils.envelope import success

router = APIRouter(prefix="/tasks", tags=["tasks"])

TaskId = Annotated[int, Path(gt=0)]

@router.get("")
async def list_tasks(
    creator: Optional[str] = None,
    status: Optional[TaskStatus] = None,
    db: Database = Depends(deps.get_db),
):
    return success(crud.list_tasks(db, creator=creator, status=status))

@router.get("/stats/summary")
async def task_stats(db: Database = Depends(deps.get_db)):
    return success(crud.task_stats(db))

@router.get("/{task_id}")
async def get_task(task_id: TaskId, db: Database = Depends(deps.get_db)):
    return success(crud.get_task(db, task_id))

@router.post("", status_code=201)
async def create_task(payload: TaskCreate, db: Database = Depends(deps.get_db)):
    task = crud.create_task(db, payload.model_dump())
    return success(task, "Task created successfully")

@router.put("/{task_id}")
async def update_task(payload: TaskUpdate, task_id: TaskId, db: Database = Depends(deps.get_db)):
    task = crud.update_task(db, task_id, payload.changes())
    return success(task, "Task updated successfully")

@router.delete("/{task_id}")
async def delete_task(task_id: TaskId, db: Database = Depends(deps.get_db)):
    crud.delete_task(db, task_id)
    return success(message="Task deleted successfully")
