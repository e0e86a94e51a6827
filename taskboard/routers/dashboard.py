from fastapi import APIRouter, Depends, Request

from taskboard.core.templates import templates
from taskboard.crud import daily_tasks, progress_reports, projects, tasks
from taskboard.db.session import Database
from taskboard.routers import deps

router = APIRouter(tags=["dashboard"], include_in_schema=False)

RECENT_TASKS = 5

@router.get("/")
async def dashboard(request: Request, db: Database = Depends(deps.get_db)):
    context = {
        "project_name": request.app.state.settings.PROJECT_NAME,
        "task_stats": tasks.task_stats(db),
        "project_stats": projects.project_stats(db),
        "daily_task_stats": daily_tasks.daily_task_stats(db),
        "report_stats": progress_reports.report_stats(db),
        "recent_tasks": tasks.list_tasks(db, limit=RECENT_TASKS),
    }
    return templates.TemplateResponse(request, "index.html", context)
