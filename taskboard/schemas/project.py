from datetime import date
from typing import Literal, Optional

from pydantic import AliasChoices, Field, ValidationInfo, field_validator

from taskboard.schemas.base import RequestSchema, UpdateSchema

ProjectStatus = Literal["planning", "active", "on-hold", "completed", "cancelled"]
Priority = Literal["low", "medium", "high", "urgent"]


def check_date_order(end: Optional[date], info: ValidationInfo) -> Optional[date]:
    start = info.data.get("start_date")
    if start is not None and end is not None and end < start:
        raise ValueError("end_date must not be before start_date")
    return end


class ProjectCreate(RequestSchema):
    name: str = Field(min_length=3, max_length=255)
    description: str = Field("", max_length=1000)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ProjectStatus = "planning"
    priority: Priority = "medium"
    manager: Optional[str] = Field(None, max_length=100)
    budget: Optional[float] = Field(None, gt=0)

    @field_validator("end_date")
    @classmethod
    def end_not_before_start(cls, value, info: ValidationInfo):
        return check_date_order(value, info)


class ProjectUpdate(UpdateSchema):
    nullable_fields = frozenset({"start_date", "end_date", "manager", "budget"})

    name: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[ProjectStatus] = None
    priority: Optional[Priority] = None
    manager: Optional[str] = Field(None, max_length=100)
    budget: Optional[float] = Field(None, gt=0)

    @field_validator("end_date")
    @classmethod
    def end_not_before_start(cls, value, info: ValidationInfo):
        return check_date_order(value, info)


class ProjectTaskLink(RequestSchema):
    task_id: int = Field(gt=0, validation_alias=AliasChoices("task_id", "taskId"))


class MilestoneCreate(RequestSchema):
    title: str = Field(min_length=3, max_length=255)
    description: str = Field("", max_length=1000)
    due_date: Optional[date] = None


class MilestoneUpdate(UpdateSchema):
    nullable_fields = frozenset({"due_date"})

    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    due_date: Optional[date] = None
    completed: Optional[bool] = None


class ResourceAllocationCreate(RequestSchema):
    resource_name: str = Field(min_length=2, max_length=100)
    role: str = Field(min_length=1, max_length=100)
    hours_per_week: float = Field(40, gt=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    hourly_rate: float = Field(0, ge=0)

    @field_validator("end_date")
    @classmethod
    def end_not_before_start(cls, value, info: ValidationInfo):
        return check_date_order(value, info)


class ResourceAllocationUpdate(UpdateSchema):
    nullable_fields = frozenset({"start_date", "end_date"})

    resource_name: Optional[str] = Field(None, min_length=2, max_length=100)
    role: Optional[str] = Field(None, min_length=1, max_length=100)
    hours_per_week: Optional[float] = Field(None, gt=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    hourly_rate: Optional[float] = Field(None, ge=0)

    @field_validator("end_date")
    @classmethod
    def end_not_before_start(cls, value, info: ValidationInfo):
        return check_date_order(value, info)
