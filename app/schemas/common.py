"""
Shared pieces for request/response models.

Every model speaks camelCase on the wire (`instructorId`, `amountPaid`) and
also accepts the snake_case field name on input.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def _to_naive_utc(value: datetime) -> datetime:
    # Stored datetimes are naive UTC
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


UtcDateTime = Annotated[datetime, AfterValidator(_to_naive_utc)]

# Decimal in storage, JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def not_null(value: Any) -> Any:
    if value is None:
        raise ValueError("Field may not be null")
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class InputModel(CamelModel):
    """Request body: unknown fields are rejected"""
    model_config = ConfigDict(extra="forbid")

    def to_row(self) -> dict:
        """Column values for the store"""
        return self.model_dump()


class PatchModel(InputModel):
    """Partial update: only the fields the client actually sent"""

    def to_row(self) -> dict:
        return self.model_dump(exclude_unset=True)
