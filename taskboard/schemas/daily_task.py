from datetime import date
from typing import Literal, Optional

from pydantic import Field

from taskboard.schemas.base import RequestSchema, UpdateSchema

Priority = Literal["low", "medium", "high", "urgent"]
DailyTaskStatus = Literal["pending", "in-progress", "completed", "blocked"]


class DailyTaskCreate(RequestSchema):
    title: str = Field(min_length=3, max_length=255)
    description: str = Field("", max_length=1000)
    assigned_to: str = Field(min_length=2, max_length=100)
    priority: Priority = "medium"
    status: DailyTaskStatus = "pending"
    due_date: date
    estimated_hours: float = Field(0, ge=0)


class DailyTaskUpdate(UpdateSchema):
    # actual_hours is derived from progress entries and is not accepted here.
    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    assigned_to: Optional[str] = Field(None, min_length=2, max_length=100)
    priority: Optional[Priority] = None
    status: Optional[DailyTaskStatus] = None
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = Field(None, ge=0)


class ProgressEntryCreate(RequestSchema):
    progress_date: date
    hours_spent: float = Field(0, ge=0)
    progress_percentage: int = Field(0, ge=0, le=100)
    notes: str = Field("", max_length=2000)
