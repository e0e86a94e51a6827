from fastapi import APIRouter, Depends

from taskboard.crud import checklists as crud
from taskboard.db.session import Database
from taskboard.routers import deps
from taskboard.schemas.checklist import (
    ChecklistCreate, ChecklistTaskCreate, ChecklistTaskUpdate, ChecklistUpdate, SubtaskCreate, SubtaskUpdate,
)
from taskboard.utils.envelope import success

router = APIRouter(prefix="/checklists", tags=["checklists"])

@router.get("")
async def list_checklists(db: Database = Depends(deps.get_db)):
    return success(crud.list_checklists(db))

@router.get("/stats/summary")
async def checklist_stats(db: Database = Depends(deps.get_db)):
    return success(crud.checklist_stats(db))

@router.get("/{checklist_id}")
async def get_checklist(checklist_id: str, db: Database = Depends(deps.get_db)):
    return success(crud.get_checklist(db, checklist_id))

@router.post("", status_code=201)
async def create_checklist(payload: ChecklistCreate, db: Database = Depends(deps.get_db)):
    checklist = crud.create_checklist(db, payload.model_dump())
    return success(checklist, "Checklist created successfully")

@router.put("/{checklist_id}")
async def update_checklist(checklist_id: str, payload: ChecklistUpdate, db: Database = Depends(deps.get_db)):
    checklist = crud.update_checklist(db, checklist_id, payload.changes())
    return success(checklist, "Checklist updated successfully")

@router.delete("/{checklist_id}")
async def delete_checklist(checklist_id: str, db: Database = Depends(deps.get_db)):
    crud.delete_checklist(db, checklist_id)
    return success(message="Checklist deleted successfully")

# Tasks

@router.post("/{checklist_id}/tasks", status_code=201)
async def add_task(checklist_id: str, payload: ChecklistTaskCreate, db: Database = Depends(deps.get_db)):
    task = crud.add_task(db, checklist_id, payload.model_dump())
    return success(task, "Task added successfully")

@router.put("/{checklist_id}/tasks/{task_id}")
async def update_task(
    checklist_id: str, task_id: str, payload: ChecklistTaskUpdate, db: Database = Depends(deps.get_db)
):
    task = crud.update_task(db, checklist_id, task_id, payload.changes())
    return success(task, "Task updated successfully")

@router.delete("/{checklist_id}/tasks/{task_id}")
async def delete_task(checklist_id: str, task_id: str, db: Database = Depends(deps.get_db)):
    crud.delete_task(db, checklist_id, task_id)
    return success(message="Task deleted successfully")

# Subtasks

@router.post("/{checklist_id}/tasks/{task_id}/subtasks", status_code=201)
async def add_subtask(checklist_id: str, task_id: str, payload: SubtaskCreate, db: Database = Depends(deps.get_db)):
    subtask = crud.add_subtask(db, checklist_id, task_id, payload.model_dump())
    return success(subtask, "Subtask added successfully")

@router.put("/{checklist_id}/tasks/{task_id}/subtasks/{subtask_id}")
async def update_subtask(
    checklist_id: str, task_id: str, subtask_id: str, payload: SubtaskUpdate, db: Database = Depends(deps.get_db)
):
    subtask = crud.update_subtask(db, checklist_id, task_id, subtask_id, payload.changes())
    return success(subtask, "Subtask updated successfully")

@router.delete("/{checklist_id}/tasks/{task_id}/subtasks/{subtask_id}")
async def delete_subtask(checklist_id: str, task_id: str, subtask_id: str, db: Database = Depends(deps.get_db)):
    crud.delete_subtask(db, checklist_id, task_id, subtask_id)
    return success(message="Subtask deleted successfully")
