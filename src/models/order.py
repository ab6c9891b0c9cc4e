"""TestObjectOrder — the root aggregate holding both version collections."""

from datetime import datetime

from pydantic import Field

from src.models.common import TestObjectOrderId, UUIDv7, VariantSpecBase, new_uuid7
from src.models.legacy import LegacyVariantSpecification, LegacyVariantSpecificationVersion
from src.models.variant_specification import (
    VariantSpecification,
    VariantSpecificationVersion,
)
from src.specification.versions import SelectionMode, select_current


class TestObjectOrder(VariantSpecBase):
    """A build order for a test object (vehicle).

    Read-only for the translation and query code: versions are appended by
    whatever persists the order.
    """

    # Not a pytest test class despite the name.
    __test__ = False

    id: UUIDv7 = Field(default_factory=new_uuid7)
    test_object_order_id: TestObjectOrderId
    test_object_name: str | None = None
    test_object_type: str | None = None
    fyon: str | None = Field(default=None, max_length=10, pattern=r"^\S*$")
    vin: str | None = Field(default=None, max_length=20, pattern=r"^\S*$")
    year_model: int | None = Field(default=None, ge=1900, le=9999)
    pno12: str = Field(..., min_length=12, max_length=12, pattern=r"^\S*$")
    build_plant: str = Field(..., min_length=2, max_length=3, pattern=r"^\d+$")
    project: str = Field(..., max_length=4)
    series: str = Field(..., max_length=6)
    structure_week: str = Field(
        ...,
        pattern=r"^\d{2}w([0-4]\d|5[0-3])$",
        description="Structure week, e.g. 21w01 or 21w34.",
    )
    status: str
    exterior: str = Field(..., max_length=5)
    interior: str = Field(..., max_length=5)
    order_description: str = ""
    build_date: datetime | None = None
    mix_num: int | None = Field(default=None, exclude=True)
    complete_car: bool | None = None
    legacy_variant_specification_versions: list[LegacyVariantSpecificationVersion] = Field(
        default_factory=list,
    )
    variant_specification_versions: list[VariantSpecificationVersion] = Field(
        default_factory=list,
    )

    @property
    def mix_number(self) -> str:
        return str(self.mix_num if self.mix_num is not None else "").rjust(7, "0")

    def factory_order_number_to_int(self) -> int:
        """Parse the factory order number (FYON).

        Raises:
            ValueError: If the FYON is empty or not an integer.
        """
        if not self.fyon:
            msg = "Factory order number cannot be null or empty."
            raise ValueError(msg)
        try:
            return int(self.fyon)
        except ValueError as exc:
            msg = f"Factory order number '{self.fyon}' is not a valid integer."
            raise ValueError(msg) from exc

    # ----- Version access -----

    def latest_variant_specification_version(self) -> VariantSpecificationVersion | None:
        return select_current(self.variant_specification_versions, SelectionMode.RECENCY)

    def latest_legacy_variant_specification_version(
        self,
    ) -> LegacyVariantSpecificationVersion | None:
        return select_current(self.legacy_variant_specification_versions, SelectionMode.RECENCY)

    def used_variant_specification_or_default(self) -> VariantSpecification | None:
        version = select_current(self.variant_specification_versions, SelectionMode.FLAG)
        return version.variant_specification if version is not None else None

    def used_legacy_variant_specifications_or_default(
        self,
    ) -> list[LegacyVariantSpecification] | None:
        version = select_current(self.legacy_variant_specification_versions, SelectionMode.FLAG)
        return version.legacy_variant_specifications if version is not None else None
