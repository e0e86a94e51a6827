from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import func, select

from taskboard.core.errors import ConflictError
from taskboard.crud.base import Resource, cascade_delete, date_range, equals_filters, insert_row, patch_row, require_row
from taskboard.db.models.progress_report import ProgressReport
from taskboard.db.session import Database

reports = ProgressReport.__table__

PROGRESS_REPORT = Resource(
    table=reports,
    label="Progress report",
    allowed_fields=frozenset({
        "reporter_name", "report_date", "tasks_completed", "tasks_in_progress", "tasks_blocked",
        "hours_worked", "challenges", "next_day_plan", "mood_rating", "productivity_score",
    }),
)

def _filters(reporter_name=None, start_date=None, end_date=None) -> list:
    return equals_filters(reports, reporter_name=reporter_name) + date_range(reports.c.report_date, start_date, end_date)

def _newest_first(stmt):
    return stmt.order_by(reports.c.report_date.desc(), reports.c.created_at.desc(), reports.c.id.desc())

def list_reports(
    db: Database,
    reporter_name: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[Dict[str, Any]]:
    stmt = select(reports).where(*_filters(reporter_name, start_date, end_date))
    return db.fetch_many(_newest_first(stmt))

def get_report(db: Database, report_id: int) -> Dict[str, Any]:
    return require_row(db, PROGRESS_REPORT, report_id)

def reporter_history(db: Database, reporter_name: str, limit: int = 10) -> List[Dict[str, Any]]:
    stmt = select(reports).where(reports.c.reporter_name == reporter_name)
    return db.fetch_many(_newest_first(stmt).limit(limit))

def create_report(db: Database, data: Mapping[str, Any]) -> Dict[str, Any]:
    with db.transaction() as tx:
        existing = tx.fetch_one(
            select(reports.c.id).where(
                reports.c.reporter_name == data["reporter_name"],
                reports.c.report_date == data["report_date"],
            )
        )
        if existing is not None:
            raise ConflictError("Progress report already exists for this date")
        return insert_row(tx, PROGRESS_REPORT, data)

def update_report(db: Database, report_id: int, updates: Mapping[str, Any]) -> Dict[str, Any]:
    # A (reporter_name, report_date) collision surfaces as ConflictError from the unique index.
    return patch_row(db, PROGRESS_REPORT, report_id, updates)

def delete_report(db: Database, report_id: int) -> int:
    return cascade_delete(db, PROGRESS_REPORT, report_id)

def _distribution(db: Database, column, filters) -> List[Dict[str, Any]]:
    stmt = (
        select(column.label("rating"), func.count().label("count"))
        .where(*filters)
        .group_by(column)
        .order_by(column.asc())
    )
    return db.fetch_many(stmt)

def report_stats(
    db: Database,
    reporter_name: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Dict[str, Any]:
    filters = _filters(reporter_name, start_date, end_date)
    stmt = select(
        func.count().label("total_reports"),
        func.coalesce(func.avg(reports.c.hours_worked), 0).label("avg_hours_worked"),
        func.coalesce(func.avg(reports.c.mood_rating), 0).label("avg_mood_rating"),
        func.coalesce(func.avg(reports.c.productivity_score), 0).label("avg_productivity_score"),
        func.coalesce(func.sum(reports.c.hours_worked), 0).label("total_hours_worked"),
    ).select_from(reports).where(*filters)

    stats = db.fetch_one(stmt)
    stats["mood_distribution"] = _distribution(db, reports.c.mood_rating, filters)
    stats["productivity_distribution"] = _distribution(db, reports.c.productivity_score, filters)
    return stats
