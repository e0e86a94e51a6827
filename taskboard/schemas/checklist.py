from typing import Literal, Optional

from pydantic import Field

from taskboard.schemas.base import RequestSchema, UpdateSchema

Theme = Literal["blue", "green", "purple", "red", "yellow", "indigo"]
ChecklistPriority = Literal["High", "Medium", "Low"]


class ChecklistCreate(RequestSchema):
    title: str = Field(min_length=3, max_length=255)
    description: str = Field("", max_length=1000)
    theme: Theme = "blue"


class ChecklistUpdate(UpdateSchema):
    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    theme: Optional[Theme] = None


class ChecklistTaskCreate(RequestSchema):
    title: str = Field(min_length=2, max_length=255)
    priority: ChecklistPriority = "Medium"


class ChecklistTaskUpdate(UpdateSchema):
    title: Optional[str] = Field(None, min_length=2, max_length=255)
    priority: Optional[ChecklistPriority] = None
    completed: Optional[bool] = None


class SubtaskCreate(RequestSchema):
    title: str = Field(min_length=2, max_length=255)


class SubtaskUpdate(UpdateSchema):
    title: Optional[str] = Field(None, min_length=2, max_length=255)
    completed: Optional[bool] = None
