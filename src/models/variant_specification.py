"""Internal variant specification models — assignments, specification, version."""

from uuid import UUID

from pydantic import Field

from src.models.common import (
    EMPTY_ID,
    TestObjectOrderId,
    UTCTimestamp,
    UUIDv7,
    VariantSpecBase,
    VariantSpecificationSource,
    new_uuid7,
    utc_now,
)
from src.specification.codec import compact_assignments

DEFAULT_PACKAGE_IDENTIFIER = "00000000000000000001"
DEFAULT_CONSUMER_SOFTWARE_VERSION = "00.00.000"
DEFAULT_VCD_SPEC_NUMBER = "33171622"
DEFAULT_VCD_SPEC_ISSUE = "011"

# Assignment marking a VCU v2 vehicle.
_VCU_V2_ASSIGNMENT = ("C5X1", "0AW")


class VariantSpecificationAssignment(VariantSpecBase):
    """One configured option: a variable code set to a value code."""

    id: UUIDv7 = Field(default_factory=new_uuid7)
    variable_code: str = Field(..., max_length=15)
    value_code: str = Field(..., max_length=8)
    variant_specification_id: UUID = Field(default=EMPTY_ID, exclude=True)

    def clone(self) -> "VariantSpecificationAssignment":
        return VariantSpecificationAssignment(
            id=EMPTY_ID,
            variable_code=self.variable_code,
            value_code=self.value_code,
            variant_specification_id=EMPTY_ID,
        )


class VariantSpecification(VariantSpecBase):
    """Internal flat-form variant specification.

    Assignments are kept as an ordered list of (variable, value) records.
    The four descriptor strings default to the values KDP uses for a plain
    standard configuration.
    """

    id: UUIDv7 = Field(default_factory=new_uuid7)
    code: str | None = Field(default=None, max_length=8)
    configuration_type: str | None = Field(default=None, max_length=8)
    configuration_id: str | None = Field(default=None, max_length=50)
    description: str | None = Field(default=None, max_length=50)
    is_deleted: bool = False
    maturity_state: str | None = Field(default=None, max_length=15)
    variability_model_code: str | None = Field(default=None, max_length=4)
    variability_model_state: str | None = Field(default=None, max_length=15)
    configuration_date: str | None = Field(default=None, max_length=26)
    configured_on: str | None = Field(default=None, max_length=26)
    package_identifier: str = DEFAULT_PACKAGE_IDENTIFIER
    consumer_software_version: str = DEFAULT_CONSUMER_SOFTWARE_VERSION
    vcd_spec_number: str = DEFAULT_VCD_SPEC_NUMBER
    vcd_spec_issue: str = DEFAULT_VCD_SPEC_ISSUE
    is_complete: bool = False
    is_valid: bool = False
    is_immobilizer_enabled: bool = True
    variant_specification_assignments: list[VariantSpecificationAssignment] = Field(
        default_factory=list,
    )
    incomplete_variable_codes: list[str] | None = None
    variant_specification_version_id: UUID = Field(default=EMPTY_ID, exclude=True)

    @property
    def has_assignments(self) -> bool:
        return bool(self.variant_specification_assignments)

    def compact_assignments(self) -> str:
        """Assignments as a compact JSON object of variable → [values]."""
        return compact_assignments(self.variant_specification_assignments)

    def clone(self) -> "VariantSpecification":
        """Copy for editing: identities reset, incomplete codes dropped."""
        return self.model_copy(
            update={
                "id": EMPTY_ID,
                "variant_specification_version_id": EMPTY_ID,
                "variant_specification_assignments": [
                    a.clone()
                    for a in self.variant_specification_assignments
                    if a is not None
                ],
                "incomplete_variable_codes": None,
            },
        )


class VariantSpecificationVersion(VariantSpecBase):
    """A timestamped snapshot of a VariantSpecification on an order.

    ``used`` marks the version currently in use on the order; callers are
    expected to keep at most one version flagged.
    """

    id: UUIDv7 = Field(default_factory=new_uuid7)
    user: str | None = Field(default=None, max_length=64)
    description: str = Field(default="Initial Version", max_length=500)
    created_on: UTCTimestamp = Field(default_factory=utc_now)
    structure_week: str | None = Field(default=None, max_length=6, pattern=r"^\S*$")
    version: int = Field(default=1, ge=0)
    source: VariantSpecificationSource = VariantSpecificationSource.KDP
    used: bool = False
    variant_specification: VariantSpecification | None = None
    test_object_order_id: TestObjectOrderId
    parent_legacy_variant_version_id: UUID | None = None
    parent_variant_specification_version_id: UUID | None = None

    @property
    def is_current(self) -> bool:
        return self.used

    @property
    def summary(self) -> str:
        return (
            f"Version: {self.version}, Created On: {self.created_on.date()}, "
            f"Description: {self.description}"
        )

    @property
    def version_with_description(self) -> str:
        return f"{self.version} - {self.description}"

    def is_vcu_v2(self) -> bool | None:
        """True if the specification selects C5X1=0AW; None without a specification."""
        if self.variant_specification is None:
            return None
        return any(
            (a.variable_code, a.value_code) == _VCU_V2_ASSIGNMENT
            for a in self.variant_specification.variant_specification_assignments
        )

    def clone(self) -> "VariantSpecificationVersion":
        """Fork this version for editing.

        The clone is unsaved (empty id), not in use, stamped now, and points
        back at this version as its parent. User, description and version
        number start over at their defaults.
        """
        return VariantSpecificationVersion(
            id=EMPTY_ID,
            created_on=utc_now(),
            structure_week=self.structure_week,
            source=self.source,
            used=False,
            variant_specification=(
                self.variant_specification.clone()
                if self.variant_specification is not None
                else None
            ),
            test_object_order_id=self.test_object_order_id,
            parent_legacy_variant_version_id=self.parent_legacy_variant_version_id,
            parent_variant_specification_version_id=self.id,
        )
