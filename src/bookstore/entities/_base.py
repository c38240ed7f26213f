from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import Field as PydanticField
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Current UTC time truncated to the millisecond precision BSON stores."""
    now = datetime.now(UTC)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


class CamelModel(BaseModel):
    """Model serialised with camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Entity(CamelModel):
    """Base entity class for store-backed documents.

    The identifier is assigned by the document store on insert, so it is
    always present on an entity read back from the store.
    """

    id: str = PydanticField(description="Unique identifier for the entity")

    created_at: datetime = PydanticField(default_factory=utc_now)
    updated_at: datetime = PydanticField(default_factory=utc_now)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # The driver hands back naive datetimes unless tz_aware is set
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
