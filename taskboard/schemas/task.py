from typing import Literal, Optional

from pydantic import Field

from taskboard.schemas.base import RequestSchema, UpdateSchema

TaskStatus = Literal["pending", "approved", "rejected"]


class TaskCreate(RequestSchema):
    name: str = Field(min_length=3, max_length=255)
    creator: str = Field(min_length=2, max_length=100)


class TaskUpdate(UpdateSchema):
    nullable_fields = frozenset({"approver", "timer"})

    status: Optional[TaskStatus] = None
    approver: Optional[str] = Field(None, min_length=2, max_length=100)
    timer: Optional[str] = None
    completed: Optional[bool] = None
