"""Common schema utilities."""

from datetime import datetime, timezone
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def to_utc_iso(value: datetime) -> str:
    """Render a timestamp as ISO 8601 UTC with a trailing ``Z``.

    Naive values are stored in UTC and are tagged as such.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


UtcDateTime = Annotated[datetime, PlainSerializer(to_utc_iso, return_type=str)]


class BaseSchema(BaseModel):
    """Base schema with common configuration.

    Fields are declared in snake_case and serialized in camelCase.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class DataResponse(BaseModel, Generic[T]):
    """Success envelope wrapping a report payload."""

    data: T
    message: str


class ErrorResponse(BaseModel):
    """Error envelope."""

    error: str
    message: str
    timestamp: UtcDateTime
