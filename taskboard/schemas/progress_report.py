from datetime import date
from typing import Optional

from pydantic import Field

from taskboard.schemas.base import RequestSchema, UpdateSchema


class ProgressReportCreate(RequestSchema):
    reporter_name: str = Field(min_length=2, max_length=100)
    report_date: date
    tasks_completed: str = Field("", max_length=2000)
    tasks_in_progress: str = Field("", max_length=2000)
    tasks_blocked: str = Field("", max_length=2000)
    hours_worked: float = Field(0, ge=0)
    challenges: str = Field("", max_length=2000)
    next_day_plan: str = Field("", max_length=2000)
    mood_rating: int = Field(3, ge=1, le=5)
    productivity_score: int = Field(3, ge=1, le=5)


class ProgressReportUpdate(UpdateSchema):
    reporter_name: Optional[str] = Field(None, min_length=2, max_length=100)
    report_date: Optional[date] = None
    tasks_completed: Optional[str] = Field(None, max_length=2000)
    tasks_in_progress: Optional[str] = Field(None, max_length=2000)
    tasks_blocked: Optional[str] = Field(None, max_length=2000)
    hours_worked: Optional[float] = Field(None, ge=0)
    challenges: Optional[str] = Field(None, max_length=2000)
    next_day_plan: Optional[str] = Field(None, max_length=2000)
    mood_rating: Optional[int] = Field(None, ge=1, le=5)
    productivity_score: Optional[int] = Field(None, ge=1, le=5)
