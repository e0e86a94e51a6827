from typing import Optional

from pydantic import AnyUrl, Field, TypeAdapter, ValidationError, field_validator

from taskboard.schemas.base import RequestSchema, UpdateSchema

_url = TypeAdapter(AnyUrl)


def check_link(value: Optional[str]) -> Optional[str]:
    if value is not None:
        # Validate as a URI but keep the caller's spelling for duplicate checks.
        try:
            _url.validate_python(value)
        except ValidationError:
            raise ValueError("link must be a valid URI")
    return value


class ArticleCreate(RequestSchema):
    headline: str = Field(min_length=5, max_length=500)
    link: str = Field(min_length=1)

    @field_validator("link")
    @classmethod
    def link_is_uri(cls, value):
        return check_link(value)


class ArticleUpdate(UpdateSchema):
    headline: Optional[str] = Field(None, min_length=5, max_length=500)
    link: Optional[str] = Field(None, min_length=1)

    @field_validator("link")
    @classmethod
    def link_is_uri(cls, value):
        return check_link(value)
