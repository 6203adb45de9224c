"""
Shared pydantic building blocks for request and response schemas.

Wire format is camelCase (`isPublished`, `techStack`); Python attributes are
snake_case. Input schemas ignore unknown keys, so server-owned fields such as
`slug`, `viewsCount` or `id` can never be mass-assigned by a caller.
"""

import re
from datetime import datetime
from typing import Annotated, Any, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from portfolio.config import get_settings

ItemT = TypeVar("ItemT")

ID_PATTERN = r"^[a-fA-F0-9]{24}$"
NAME_REGEX = re.compile(r"^[A-Za-z]+(?: [A-Za-z]+)*$")
EMAIL_REGEX = re.compile(
    r'^(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))'
    r'@(([^<>()\[\]\\.,;:\s@"]+\.)+[^<>()\[\]\\.,;:\s@"]{2,})$',
    flags=re.IGNORECASE,
)
URL_REGEX = re.compile(
    r"https?://(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b([-a-zA-Z0-9()@:%_+.~#?&/=]*)"
)


def _check_url(value: str) -> str:
    if not URL_REGEX.search(value):
        raise ValueError("Must be a valid URL")
    return value


def _check_email(value: str) -> str:
    if not EMAIL_REGEX.match(value):
        raise ValueError("Must be a valid email address")
    return value


def _check_name(value: str) -> str:
    if not NAME_REGEX.match(value):
        raise ValueError("May only contain letters and single spaces")
    return value


Url = Annotated[str, AfterValidator(_check_url)]
Email = Annotated[str, StringConstraints(max_length=50), AfterValidator(_check_email)]
PersonName = Annotated[str, StringConstraints(min_length=3, max_length=50), AfterValidator(_check_name)]
NonEmpty = Annotated[str, StringConstraints(min_length=1)]


class InputSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Optional means "may be omitted"; an explicit null is never a value.
    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Must not be null")
        return v

    def create_values(self) -> dict[str, Any]:
        """Every declared field with defaults applied; unset optionals are left out."""
        return {k: v for k, v in self.model_dump().items() if v is not None}

    def provided_values(self) -> dict[str, Any]:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)


class ReadSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class IdParam(BaseModel):
    id: Annotated[str, StringConstraints(min_length=24, max_length=24, pattern=ID_PATTERN)]


class ListQuery(InputSchema):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default_factory=lambda: get_settings().DEFAULT_PAGE_SIZE, ge=1)

    @field_validator("limit")
    @classmethod
    def cap_limit(cls, v: int) -> int:
        cap = get_settings().MAX_PAGE_SIZE
        if v > cap:
            raise ValueError(f"Must be at most {cap}")
        return v

    def filters(self) -> dict[str, Any]:
        """Equality filters set by the caller, keyed by model attribute."""
        return {k: v for k, v in self.provided_values().items() if k not in ("page", "limit")}


class Page(BaseModel, Generic[ItemT]):
    """Listing envelope: {items, total, page, totalPages}."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[ItemT]
    total: int
    page: int
    total_pages: int

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
