from typing import Any, ClassVar, Dict, FrozenSet

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator, model_validator


class RequestSchema(BaseModel):
    # Unknown keys are dropped, strings are trimmed before length checks.
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


class UpdateSchema(RequestSchema):
    """
    Partial update payload: every field optional, at least one required.

    An explicit null is only accepted for the fields listed in
    `nullable_fields`; everywhere else it would clear a required column.
    """

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @field_validator("*")
    @classmethod
    def reject_null(cls, value, info: ValidationInfo):
        if value is None and info.field_name not in cls.nullable_fields:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    @model_validator(mode="after")
    def require_a_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)
