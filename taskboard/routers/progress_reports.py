from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query

from taskboard.crud import progress_reports as crud
from taskboard.db.session import Database
from taskboard.routers import deps
from taskboard.schemas.progress_report import ProgressReportCreate, ProgressReportUpdate
from taskboard.utils.envelope import success

router = APIRouter(prefix="/progress-reports", tags=["progress-reports"])

ReportId = Annotated[int, Path(gt=0)]

@router.get("")
async def list_reports(
    reporter_name: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Database = Depends(deps.get_db),
):
    return success(crud.list_reports(db, reporter_name=reporter_name, start_date=start_date, end_date=end_date))

@router.get("/stats/summary")
async def report_stats(
    reporter_name: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Database = Depends(deps.get_db),
):
    return success(crud.report_stats(db, reporter_name=reporter_name, start_date=start_date, end_date=end_date))

@router.get("/reporter/{name}")
async def reporter_history(
    name: str,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    db: Database = Depends(deps.get_db),
):
    return success(crud.reporter_history(db, name, limit=limit))

@router.get("/{report_id}")
async def get_report(report_id: ReportId, db: Database = Depends(deps.get_db)):
    return success(crud.get_report(db, report_id))

@router.post("", status_code=201)
async def create_report(payload: ProgressReportCreate, db: Database = Depends(deps.get_db)):
    report = crud.create_report(db, payload.model_dump())
    return success(report, "Progress report created successfully")

@router.put("/{report_id}")
async def update_report(report_id: ReportId, payload: ProgressReportUpdate, db: Database = Depends(deps.get_db)):
    report = crud.update_report(db, report_id, payload.changes())
    return success(report, "Progress report updated successfully")

@router.delete("/{report_id}")
async def delete_report(report_id: ReportId, db: Database = Depends(deps.get_db)):
    crud.delete_report(db, report_id)
    return success(message="Progress report deleted successfully")
