"""Specification translator — KDP, PRINS, legacy and internal dialects.

Assignments always pass through the codec; scalars are copied across as-is.
The two inbound dialects differ in how they fill the four descriptor
strings (package identifier, consumer software version, VCD spec number and
issue): KDP falls back to its sentinels, PRINS leaves them blank.

Deterministic, no I/O.
"""

from collections.abc import Iterable
from typing import Protocol

from src.models.kdp import (
    KdpConfiguration,
    KdpDynamicVehicleData,
    KdpVariantSpecification,
    PrinsVariantSpecification,
    SpecificationDescriptors,
)
from src.models.legacy import LegacyVariantSpecification
from src.models.order import TestObjectOrder
from src.models.variant_specification import (
    VariantSpecification,
    VariantSpecificationAssignment,
)
from src.specification.codec import flatten, group
from src.specification.errors import ArgumentInvalidError, PreconditionFailedError

# Leading characters of the PNO12 that form the vehicle type code.
_TYPE_CODE_LENGTH = 3


class SpecificationSource(Protocol):
    """Uniform view over an inbound dialect."""

    def grouped_assignments(self) -> dict[str, list[str] | None]: ...

    def descriptors(self) -> SpecificationDescriptors: ...


# ---------------------------------------------------------------------------
# Inbound
# ---------------------------------------------------------------------------


def _from_source(source: SpecificationSource) -> VariantSpecification:
    descriptors = source.descriptors()
    return VariantSpecification(
        maturity_state=descriptors.maturity_state,
        variability_model_code=descriptors.variability_model_code,
        variability_model_state=descriptors.variability_model_state,
        configured_on=descriptors.configured_on,
        configuration_date=descriptors.configuration_date,
        is_complete=descriptors.is_complete,
        is_valid=descriptors.is_valid,
        package_identifier=descriptors.package_identifier,
        consumer_software_version=descriptors.consumer_software_version,
        vcd_spec_number=descriptors.vcd_spec_number,
        vcd_spec_issue=descriptors.vcd_spec_issue,
        variant_specification_assignments=[
            VariantSpecificationAssignment(
                variable_code=assignment.variable_code,
                value_code=assignment.value_code,
            )
            for assignment in flatten(source.grouped_assignments())
        ],
    )


def from_external(external: KdpVariantSpecification) -> VariantSpecification:
    """Translate a KDP specification into the internal flat form.

    Raises:
        ArgumentInvalidError: If ``external`` is None.
    """
    if external is None:
        msg = "KDP variant specification cannot be None."
        raise ArgumentInvalidError(msg, argument="external")
    specification = _from_source(external)
    if external.incomplete_variable_codes is not None:
        specification.incomplete_variable_codes = list(external.incomplete_variable_codes)
    if external.is_immobilizer_enabled is not None:
        specification.is_immobilizer_enabled = external.is_immobilizer_enabled
    return specification


def from_alternate_dialect(alternate: PrinsVariantSpecification) -> VariantSpecification:
    """Translate a PRINS specification into the internal flat form.

    Raises:
        ArgumentInvalidError: If ``alternate`` is None.
    """
    if alternate is None:
        msg = "PRINS variant specification cannot be None."
        raise ArgumentInvalidError(msg, argument="alternate")
    return _from_source(alternate)


# ---------------------------------------------------------------------------
# Outbound
# ---------------------------------------------------------------------------


def to_external(internal: VariantSpecification) -> KdpVariantSpecification:
    """Translate an internal specification into KDP's grouped form.

    Raises:
        ArgumentInvalidError: If ``internal`` is None.
    """
    if internal is None:
        msg = "Variant specification cannot be None."
        raise ArgumentInvalidError(msg, argument="internal")
    return KdpVariantSpecification(
        maturity_state=internal.maturity_state,
        variability_model_code=internal.variability_model_code,
        variability_model_state=internal.variability_model_state,
        is_complete=internal.is_complete,
        is_valid=internal.is_valid,
        is_immobilizer_enabled=internal.is_immobilizer_enabled,
        incomplete_variable_codes=(
            list(internal.incomplete_variable_codes)
            if internal.incomplete_variable_codes is not None
            else None
        ),
        dynamic_vehicle_data=KdpDynamicVehicleData(
            configured_on=internal.configured_on,
            configuration_date=internal.configuration_date,
            package_identifier=internal.package_identifier,
            consumer_software_version=internal.consumer_software_version,
            vcd_spec_number=internal.vcd_spec_number,
            vcd_spec_issue=internal.vcd_spec_issue,
        ),
        standard_configuration=KdpConfiguration.from_grouped(
            group(internal.variant_specification_assignments),
        ),
    )


def legacy_variant_codes(records: Iterable[LegacyVariantSpecification] | None) -> list[str]:
    """Family + number codes of legacy records, in record order."""
    return [record.variant_code for record in records or []]


def external_for_order(
    order: TestObjectOrder,
    legacy_specifications: list[LegacyVariantSpecification] | None = None,
    structure_week: str | None = None,
) -> KdpVariantSpecification:
    """Build the variant solver payload for an order.

    Uses ``legacy_specifications`` when given, otherwise the records of the
    order's latest legacy version (none if the order has no legacy history).

    Raises:
        ArgumentInvalidError: If ``order`` is None.
    """
    if order is None:
        msg = "Test object order cannot be None."
        raise ArgumentInvalidError(msg, argument="order")

    if legacy_specifications is None:
        latest = order.latest_legacy_variant_specification_version()
        legacy_specifications = (
            latest.legacy_variant_specifications if latest is not None else []
        )

    return KdpVariantSpecification(
        type_code=type_code_for(order),
        product_number12=order.pno12,
        variant_codes=legacy_variant_codes(legacy_specifications),
        dynamic_vehicle_data=KdpDynamicVehicleData(
            structure_week=structure_week or order.structure_week,
            plant_code=order.build_plant,
            color_code=order.exterior,
            upholstery_code=order.interior,
        ),
    )


# ---------------------------------------------------------------------------
# Standard configuration guard
# ---------------------------------------------------------------------------


def ensure_standard_configuration(
    specification: KdpVariantSpecification | None,
) -> KdpVariantSpecification:
    """Check that a specification may be translated to downloadable form.

    Raises:
        ArgumentInvalidError: If ``specification`` is None.
        PreconditionFailedError: If any descriptor holds a non-default value.
    """
    if specification is None:
        msg = "Standard variant specification cannot be None."
        raise ArgumentInvalidError(msg, argument="specification")

    offending = specification.non_default_descriptors()
    if offending:
        msg = (
            "Variant specification is not standard format: "
            f"non-default {', '.join(offending)}."
        )
        raise PreconditionFailedError(msg, offending_fields=offending)
    return specification


# ---------------------------------------------------------------------------
# Decorations
# ---------------------------------------------------------------------------


def type_code_for(order: TestObjectOrder | None) -> str | None:
    """Type code derived from the order's PNO12, or None without one."""
    if order is None or not order.pno12 or not order.pno12.strip():
        return None
    return order.pno12.strip()[:_TYPE_CODE_LENGTH]


def decorate_type_code(
    specification: KdpVariantSpecification,
    order: TestObjectOrder | None,
) -> KdpVariantSpecification:
    """Fill in ``type_code`` from the order when KDP left it empty."""
    if specification.type_code:
        return specification
    type_code = type_code_for(order)
    if type_code is None:
        return specification
    return specification.model_copy(update={"type_code": type_code})


def decorate_immobilizer(
    specification: KdpVariantSpecification,
    source: VariantSpecification | None,
) -> KdpVariantSpecification:
    """Carry the immobilizer flag over from ``source`` when unset."""
    if specification.is_immobilizer_enabled is not None or source is None:
        return specification
    return specification.model_copy(
        update={"is_immobilizer_enabled": source.is_immobilizer_enabled},
    )
