from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path

from taskboard.crud import daily_tasks as crud
from taskboard.db.session import Database
from taskboard.routers import deps
from taskboard.schemas.daily_task import DailyTaskCreate, DailyTaskStatus, DailyTaskUpdate, ProgressEntryCreate
from taskboard.utils.envelope import success

router = APIRouter(prefix="/daily-tasks", tags=["daily-tasks"])

TaskId = Annotated[int, Path(gt=0)]

@router.get("")
async def list_daily_tasks(
    assigned_to: Optional[str] = None,
    status: Optional[DailyTaskStatus] = None,
    due_date: Optional[date] = None,
    db: Database = Depends(deps.get_db),
):
    return success(crud.list_daily_tasks(db, assigned_to=assigned_to, status=status, due_date=due_date))

@router.get("/stats/summary")
async def daily_task_stats(
    assigned_to: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Database = Depends(deps.get_db),
):
    return success(crud.daily_task_stats(db, assigned_to=assigned_to, start_date=start_date, end_date=end_date))

@router.get("/{task_id}")
async def get_daily_task(task_id: TaskId, db: Database = Depends(deps.get_db)):
    return success(crud.get_daily_task(db, task_id))

@router.post("", status_code=201)
async def create_daily_task(payload: DailyTaskCreate, db: Database = Depends(deps.get_db)):
    task = crud.create_daily_task(db, payload.model_dump())
    return success(task, "Daily task created successfully")

@router.put("/{task_id}")
async def update_daily_task(task_id: TaskId, payload: DailyTaskUpdate, db: Database = Depends(deps.get_db)):
    task = crud.update_daily_task(db, task_id, payload.changes())
    return success(task, "Daily task updated successfully")

@router.delete("/{task_id}")
async def delete_daily_task(task_id: TaskId, db: Database = Depends(deps.get_db)):
    crud.delete_daily_task(db, task_id)
    return success(message="Daily task deleted successfully")

@router.post("/{task_id}/progress", status_code=201)
async def add_progress(task_id: TaskId, payload: ProgressEntryCreate, db: Database = Depends(deps.get_db)):
    entry = crud.add_progress(db, task_id, payload.model_dump())
    return success(entry, "Progress added successfully")
