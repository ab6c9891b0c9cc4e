"""Shared types, enums, and base models used across the variant specification models."""

from datetime import datetime, timezone
from enum import IntEnum, StrEnum
from typing import Annotated
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, Field
from pydantic.alias_generators import to_camel
from uuid_extensions import uuid7


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def new_uuid7() -> UUID:
    """Generate a new time-sortable UUID v7."""
    return uuid7()


# Identity sentinel for entities that have not been persisted (clones).
EMPTY_ID = UUID(int=0)


# --- Reusable annotated types ---

UUIDv7 = Annotated[UUID, Field(description="Time-sortable UUID v7.")]
UTCTimestamp = Annotated[
    AwareDatetime, Field(description="Timezone-aware timestamp; naive values are rejected.")
]
TestObjectOrderId = Annotated[
    str,
    Field(
        min_length=8,
        max_length=8,
        pattern=r"^[a-zA-Z0-9]*$",
        description="Eight alphanumeric characters, no white space.",
    ),
]


# --- Shared enums ---


class VariantSpecificationType(StrEnum):
    """Flavour of variant specification requested from KDP."""

    DOWNLOADABLE = "DOWNLOADABLE"
    STANDARD = "STANDARD"

    @property
    def friendly_name(self) -> str:
        return self.value.lower()

    @property
    def uri_path(self) -> str:
        return self.friendly_name


class VariantSpecificationSource(IntEnum):
    """Where a stored variant specification version came from."""

    KDP = 1
    OVP = 2
    SNAPSHOT = 3


class LegacyVariantSpecificationType(StrEnum):
    """Role of a legacy variant specification version on its order."""

    USED = "USED"
    ORDERED = "ORDERED"


# --- Base models ---


class VariantSpecBase(BaseModel):
    """Base model with common configuration for all internal models."""

    model_config = {
        "populate_by_name": True,
        "ser_json_timedelta": "iso8601",
        "protected_namespaces": (),
    }


class KdpBase(VariantSpecBase):
    """Base model for KDP wire payloads.

    Field names follow the authority's camelCase contract; dump with
    ``by_alias=True`` when sending.
    """

    model_config = {
        "alias_generator": to_camel,
    }
