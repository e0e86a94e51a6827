from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path

from taskboard.crud import projects as crud
from taskboard.db.session import Database
from taskboard.routers import deps
from taskboard.schemas.project import (
    MilestoneCreate, MilestoneUpdate, Priority, ProjectCreate, ProjectStatus, ProjectTaskLink, ProjectUpdate,
    ResourceAllocationCreate, ResourceAllocationUpdate,
)
from taskboard.utils.envelope import success

router = APIRouter(prefix="/projects", tags=["projects"])

Id = Annotated[int, Path(gt=0)]

@router.get("")
async def list_projects(
    status: Optional[ProjectStatus] = None,
    priority: Optional[Priority] = None,
    db: Database = Depends(deps.get_db),
):
    return success(crud.list_projects(db, status=status, priority=priority))

@router.get("/stats/summary")
async def project_stats(db: Database = Depends(deps.get_db)):
    return success(crud.project_stats(db))

@router.get("/{project_id}")
async def get_project(project_id: Id, db: Database = Depends(deps.get_db)):
    return success(crud.get_project(db, project_id))

@router.post("", status_code=201)
async def create_project(payload: ProjectCreate, db: Database = Depends(deps.get_db)):
    project = crud.create_project(db, payload.model_dump())
    return success(project, "Project created successfully")

@router.put("/{project_id}")
async def update_project(project_id: Id, payload: ProjectUpdate, db: Database = Depends(deps.get_db)):
    project = crud.update_project(db, project_id, payload.changes())
    return success(project, "Project updated successfully")

@router.delete("/{project_id}")
async def delete_project(project_id: Id, db: Database = Depends(deps.get_db)):
    crud.delete_project(db, project_id)
    return success(message="Project deleted successfully")

# Task links

@router.post("/{project_id}/tasks", status_code=201)
async def link_task(project_id: Id, payload: ProjectTaskLink, db: Database = Depends(deps.get_db)):
    task = crud.link_task(db, project_id, payload.task_id)
    return success(task, "Task added to project successfully")

@router.delete("/{project_id}/tasks/{task_id}")
async def unlink_task(project_id: Id, task_id: Id, db: Database = Depends(deps.get_db)):
    crud.unlink_task(db, project_id, task_id)
    return success(message="Task removed from project successfully")

# Milestones

@router.post("/{project_id}/milestones", status_code=201)
async def add_milestone(project_id: Id, payload: MilestoneCreate, db: Database = Depends(deps.get_db)):
    milestone = crud.add_milestone(db, project_id, payload.model_dump())
    return success(milestone, "Milestone added successfully")

@router.put("/{project_id}/milestones/{milestone_id}")
async def update_milestone(
    project_id: Id, milestone_id: Id, payload: MilestoneUpdate, db: Database = Depends(deps.get_db)
):
    milestone = crud.update_milestone(db, project_id, milestone_id, payload.changes())
    return success(milestone, "Milestone updated successfully")

@router.delete("/{project_id}/milestones/{milestone_id}")
async def delete_milestone(project_id: Id, milestone_id: Id, db: Database = Depends(deps.get_db)):
    crud.delete_milestone(db, project_id, milestone_id)
    return success(message="Milestone deleted successfully")

# Resource allocations

@router.post("/{project_id}/resources", status_code=201)
async def add_resource(project_id: Id, payload: ResourceAllocationCreate, db: Database = Depends(deps.get_db)):
    resource = crud.add_resource(db, project_id, payload.model_dump())
    return success(resource, "Resource added successfully")

@router.put("/{project_id}/resources/{resource_id}")
async def update_resource(
    project_id: Id, resource_id: Id, payload: ResourceAllocationUpdate, db: Database = Depends(deps.get_db)
):
    resource = crud.update_resource(db, project_id, resource_id, payload.changes())
    return success(resource, "Resource updated successfully")

@router.delete("/{project_id}/resources/{resource_id}")
async def delete_resource(project_id: Id, resource_id: Id, db: Database = Depends(deps.get_db)):
    crud.delete_resource(db, project_id, resource_id)
    return success(message="Resource deleted successfully")
