"""Wire models for the KDP and PRINS variant specification dialects.

Field names are fixed by the authorities' API contracts (camelCase on the
wire). Assignments travel in grouped form on both dialects.
"""

from dataclasses import dataclass

from pydantic import Field

from src.kdp.errors import KdpResponseValidationError
from src.models.common import KdpBase
from src.models.variant_specification import DEFAULT_PACKAGE_IDENTIFIER

KDP_DEFAULT_PACKAGE_IDENTIFIER = ""
KDP_DEFAULT_CONSUMER_SOFTWARE_VERSION = "00.00.000"
KDP_DEFAULT_VCD_SPEC_NUMBER = "33171622"
KDP_DEFAULT_VCD_SPEC_ISSUE = "011"


# Descriptor values (besides None and "") that still count as standard configuration.
_STANDARD_DESCRIPTOR_VALUES: dict[str, frozenset[str]] = {
    "maturity_state": frozenset(),
    "variability_model_code": frozenset(),
    "variability_model_state": frozenset(),
    "package_identifier": frozenset({
        KDP_DEFAULT_PACKAGE_IDENTIFIER, DEFAULT_PACKAGE_IDENTIFIER,
    }),
    "consumer_software_version": frozenset({KDP_DEFAULT_CONSUMER_SOFTWARE_VERSION}),
    "vcd_spec_number": frozenset({KDP_DEFAULT_VCD_SPEC_NUMBER}),
    "vcd_spec_issue": frozenset({KDP_DEFAULT_VCD_SPEC_ISSUE}),
}


def _or_default(value: str | None, default: str) -> str:
    return default if value is None else value


@dataclass(frozen=True)
class SpecificationDescriptors:
    """Scalar metadata of a specification, independent of dialect."""

    maturity_state: str | None
    configured_on: str | None
    configuration_date: str | None
    is_complete: bool
    is_valid: bool
    package_identifier: str
    consumer_software_version: str
    vcd_spec_number: str
    vcd_spec_issue: str
    variability_model_code: str | None = None
    variability_model_state: str | None = None


# ---------------------------------------------------------------------------
# KDP
# ---------------------------------------------------------------------------


class KdpAssignment(KdpBase):
    """Grouped assignment: one variable code with all its value codes."""

    variable_code: str
    value_code: list[str] | None = Field(default_factory=list)


class KdpConfiguration(KdpBase):
    assignments: list[KdpAssignment] | None = Field(default_factory=list)

    def grouped(self) -> dict[str, list[str] | None]:
        """Assignments as a variable → values mapping (KDP order kept)."""
        grouped: dict[str, list[str] | None] = {}
        for assignment in self.assignments or []:
            existing = grouped.get(assignment.variable_code)
            if existing is None:
                grouped[assignment.variable_code] = assignment.value_code
            else:
                grouped[assignment.variable_code] = existing + list(assignment.value_code or [])
        return grouped

    @classmethod
    def from_grouped(cls, grouped: dict[str, list[str]]) -> "KdpConfiguration":
        return cls(
            assignments=[
                KdpAssignment(variable_code=variable_code, value_code=list(value_codes))
                for variable_code, value_codes in grouped.items()
            ],
        )


class KdpDynamicVehicleData(KdpBase):
    """Per-vehicle data block; the descriptor strings default to KDP's sentinels."""

    configured_on: str | None = None
    configuration_date: str | None = None
    structure_week: str | None = None
    plant_code: str | None = None
    color_code: str | None = None
    upholstery_code: str | None = None
    package_identifier: str | None = KDP_DEFAULT_PACKAGE_IDENTIFIER
    consumer_software_version: str | None = KDP_DEFAULT_CONSUMER_SOFTWARE_VERSION
    vcd_spec_number: str | None = KDP_DEFAULT_VCD_SPEC_NUMBER
    vcd_spec_issue: str | None = KDP_DEFAULT_VCD_SPEC_ISSUE


class KdpVariantSpecification(KdpBase):
    """A variant specification as KDP sends and receives it."""

    type_code: str | None = None
    product_number12: str | None = None
    maturity_state: str | None = None
    variability_model_code: str | None = None
    variability_model_state: str | None = None
    is_complete: bool = False
    is_valid: bool = False
    is_immobilizer_enabled: bool | None = None
    incomplete_variable_codes: list[str] | None = None
    variant_codes: list[str] | None = None
    dynamic_vehicle_data: KdpDynamicVehicleData | None = None
    standard_configuration: KdpConfiguration | None = None
    downloadable_configuration: KdpConfiguration | None = None

    # ----- SpecificationSource -----

    def grouped_assignments(self) -> dict[str, list[str] | None]:
        if self.standard_configuration is None:
            return {}
        return self.standard_configuration.grouped()

    def descriptors(self) -> SpecificationDescriptors:
        vehicle = self.dynamic_vehicle_data or KdpDynamicVehicleData()
        return SpecificationDescriptors(
            maturity_state=self.maturity_state,
            configured_on=vehicle.configured_on,
            configuration_date=vehicle.configuration_date,
            is_complete=self.is_complete,
            is_valid=self.is_valid,
            package_identifier=_or_default(
                vehicle.package_identifier, KDP_DEFAULT_PACKAGE_IDENTIFIER,
            ),
            consumer_software_version=_or_default(
                vehicle.consumer_software_version, KDP_DEFAULT_CONSUMER_SOFTWARE_VERSION,
            ),
            vcd_spec_number=_or_default(vehicle.vcd_spec_number, KDP_DEFAULT_VCD_SPEC_NUMBER),
            vcd_spec_issue=_or_default(vehicle.vcd_spec_issue, KDP_DEFAULT_VCD_SPEC_ISSUE),
            variability_model_code=self.variability_model_code,
            variability_model_state=self.variability_model_state,
        )

    # ----- Standard configuration -----

    def non_default_descriptors(self) -> list[str]:
        """Names of descriptors holding neither their default nor an empty value."""
        descriptors = self.descriptors()
        return [
            name
            for name, allowed in _STANDARD_DESCRIPTOR_VALUES.items()
            if (value := getattr(descriptors, name)) and value not in allowed
        ]

    def is_standard_configuration(self) -> bool:
        return not self.non_default_descriptors()


# ---------------------------------------------------------------------------
# PRINS (alternate authority)
# ---------------------------------------------------------------------------


class PrinsVariantSpecification(KdpBase):
    """A variant specification in the alternate authority's format."""

    based_on_maturity_state: str | None = None
    configured_on: str | None = None
    configuration_date: str | None = None
    is_complete: bool = False
    is_valid: bool = False
    assignments: dict[str, list[str] | None] | None = Field(default_factory=dict)

    def grouped_assignments(self) -> dict[str, list[str] | None]:
        return dict(self.assignments or {})

    def descriptors(self) -> SpecificationDescriptors:
        # PRINS carries no package or VCD data; those stay blank.
        return SpecificationDescriptors(
            maturity_state=self.based_on_maturity_state,
            configured_on=self.configured_on,
            configuration_date=self.configuration_date,
            is_complete=self.is_complete,
            is_valid=self.is_valid,
            package_identifier="",
            consumer_software_version="",
            vcd_spec_number="",
            vcd_spec_issue="",
        )


# ---------------------------------------------------------------------------
# Request / response envelopes
# ---------------------------------------------------------------------------


class KdpInputArea(KdpBase):
    test_object_order_id: str | None = None
    product_number12: str | None = None
    variant_specification: KdpVariantSpecification | None = None


class KdpVariantSpecificationRequest(KdpBase):
    """Envelope for variant solver, saved-lookup and translate calls."""

    input_area: KdpInputArea

    @classmethod
    def create(cls, specification: KdpVariantSpecification) -> "KdpVariantSpecificationRequest":
        return cls(input_area=KdpInputArea(variant_specification=specification))

    @classmethod
    def for_latest_saved(
        cls, test_object_order_id: str, product_number12: str,
    ) -> "KdpVariantSpecificationRequest":
        return cls(
            input_area=KdpInputArea(
                test_object_order_id=test_object_order_id,
                product_number12=product_number12,
            ),
        )


class KdpOutputArea(KdpBase):
    variant_specification: KdpVariantSpecification | None = None


class KdpVariantSpecificationResponse(KdpBase):
    output_area: KdpOutputArea | None = None

    def validate_output(self) -> KdpVariantSpecification:
        """Return the variant specification, insisting that KDP sent one.

        Raises:
            KdpResponseValidationError: If the output area or the
                specification is missing.
        """
        if self.output_area is None:
            msg = "KDP response has no outputArea."
            raise KdpResponseValidationError(msg)
        if self.output_area.variant_specification is None:
            msg = "KDP response has no outputArea.variantSpecification."
            raise KdpResponseValidationError(msg)
        return self.output_area.variant_specification


# ---------------------------------------------------------------------------
# Product specification
# ---------------------------------------------------------------------------


class KdpProductOptions(KdpBase):
    option_code: list[str] = Field(default_factory=list)


class KdpProductSpecificationInput(KdpBase):
    options: KdpProductOptions = Field(default_factory=KdpProductOptions)


class KdpProductSpecificationArea(KdpBase):
    product_specification: KdpProductSpecificationInput = Field(
        default_factory=KdpProductSpecificationInput,
    )


class KdpProductSpecificationRequest(KdpBase):
    """Envelope for the product specification call; carries the option codes."""

    pc72_z11_i: KdpProductSpecificationArea = Field(
        default_factory=KdpProductSpecificationArea,
        alias="pc72Z11I",
    )

    @classmethod
    def create(cls, option_codes: list[str] | None) -> "KdpProductSpecificationRequest":
        return cls(
            pc72_z11_i=KdpProductSpecificationArea(
                product_specification=KdpProductSpecificationInput(
                    options=KdpProductOptions(option_code=list(option_codes or [])),
                ),
            ),
        )


class KdpProductSpecification(KdpBase):
    """Product specification as returned by KDP.

    Only the JSON object shape is enforced; every field KDP sends is kept as
    an extra attribute and round-trips through ``model_dump``.
    """

    model_config = {"extra": "allow"}
