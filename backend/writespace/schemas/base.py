"""Shared schema configuration."""
from datetime import datetime, timezone
from typing import Annotated
from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def as_utc(value: datetime) -> datetime:
    """Stored timestamps are naive UTC; mark them as such."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    """Serialized with camelCase keys, accepts either case on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
