from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


# Naive datetimes in storage are UTC
UtcDatetime = Annotated[datetime, PlainSerializer(_as_utc, return_type=str)]


class ApiModel(BaseModel):
    """Base schema exchanging camelCase JSON"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(ApiModel):
    success: bool = True

