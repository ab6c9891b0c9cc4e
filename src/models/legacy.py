"""Legacy fixed-field variant specifications and their versions."""

from uuid import UUID

from pydantic import Field

from src.models.common import (
    EMPTY_ID,
    LegacyVariantSpecificationType,
    TestObjectOrderId,
    UTCTimestamp,
    UUIDv7,
    VariantSpecBase,
    new_uuid7,
    utc_now,
)


class LegacyVariantSpecification(VariantSpecBase):
    """One legacy variant record: a two-part variant code plus designation."""

    id: UUIDv7 = Field(default_factory=new_uuid7)
    test_object_order_id: TestObjectOrderId
    variant_family: str = Field(..., min_length=2, max_length=2, pattern=r"^\S*$")
    variant_number: str = Field(..., min_length=2, max_length=2, pattern=r"^\S*$")
    variant_designation: str = Field(..., min_length=1, max_length=8)
    legacy_variant_specification_version_id: UUID = Field(default=EMPTY_ID, exclude=True)

    @property
    def variant_code(self) -> str:
        """Family and number concatenated, e.g. ``"AB" + "01"``."""
        return self.variant_family + self.variant_number


class LegacyVariantSpecificationVersion(VariantSpecBase):
    """A timestamped set of legacy variant records on an order."""

    id: UUIDv7 = Field(default_factory=new_uuid7)
    test_object_order_id: TestObjectOrderId
    user: str | None = Field(default=None, max_length=64)
    description: str = Field(default="Initial Version", max_length=500)
    type: LegacyVariantSpecificationType = LegacyVariantSpecificationType.USED
    structure_week: str | None = Field(default=None, max_length=6, pattern=r"^\S*$")
    version: str | None = Field(default=None, max_length=15)
    created_on: UTCTimestamp = Field(default_factory=utc_now)
    legacy_variant_specifications: list[LegacyVariantSpecification] = Field(
        default_factory=list,
    )

    @property
    def is_current(self) -> bool:
        return self.type == LegacyVariantSpecificationType.USED
