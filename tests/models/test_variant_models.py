"""Tests for variant specification, legacy, order and KDP wire models."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest
from pydantic import ValidationError

from src.kdp.errors import KdpResponseValidationError
from src.models.common import EMPTY_ID, VariantSpecificationType
from src.models.kdp import (
    KdpVariantSpecification,
    KdpVariantSpecificationRequest,
    KdpVariantSpecificationResponse,
)
from src.models.legacy import LegacyVariantSpecification, LegacyVariantSpecificationVersion
from src.models.variant_specification import VariantSpecification, VariantSpecificationVersion


# ===================================================================
# Internal specification and versions
# ===================================================================


class TestVariantSpecification:
    def test_defaults(self) -> None:
        spec = VariantSpecification()
        assert spec.package_identifier == "00000000000000000001"
        assert spec.consumer_software_version == "00.00.000"
        assert spec.is_immobilizer_enabled is True
        assert not spec.has_assignments

    def test_compact_assignments(self, make_version) -> None:
        version = make_version([("C5X1", "0AW"), ("C2XX", "1BC")])
        assert version.variant_specification.compact_assignments() == (
            '{"C5X1":["0AW"],"C2XX":["1BC"]}'
        )

    def test_clone_resets_identities(self, make_version) -> None:
        spec = make_version([("C5X1", "0AW")], incomplete_variable_codes=["X1"]).variant_specification
        clone = spec.clone()
        assert clone.id == EMPTY_ID
        assert clone.incomplete_variable_codes is None
        assert [a.id for a in clone.variant_specification_assignments] == [EMPTY_ID]
        assert clone.compact_assignments() == spec.compact_assignments()
        # The source keeps its ids.
        assert spec.id != EMPTY_ID

    def test_value_code_length_limit(self, make_version) -> None:
        with pytest.raises(ValidationError):
            make_version([("C5X1", "TOOLONGVALUE")])


class TestVariantSpecificationVersion:
    def test_clone_points_at_parent(self, make_version) -> None:
        version = make_version([("C5X1", "0AW")], used=True, version=3).model_copy(
            update={"user": "jdoe", "description": "Tuned", "structure_week": "24w12"},
        )
        clone = version.clone()
        assert clone.id == EMPTY_ID
        assert clone.used is False
        assert clone.structure_week == "24w12"
        assert clone.parent_variant_specification_version_id == version.id
        assert clone.created_on >= version.created_on
        assert clone.variant_specification is not None
        assert clone.variant_specification.id == EMPTY_ID

    def test_clone_starts_numbering_over(self, make_version) -> None:
        version = make_version(version=3).model_copy(
            update={"user": "jdoe", "description": "Tuned"},
        )
        clone = version.clone()
        assert clone.version == 1
        assert clone.user is None
        assert clone.description == "Initial Version"

    def test_naive_created_on_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            VariantSpecificationVersion(
                test_object_order_id="AB123456",
                created_on=datetime(2024, 1, 1),
            )

    def test_aware_created_on_keeps_offset(self) -> None:
        created_on = datetime(2024, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        version = VariantSpecificationVersion(
            test_object_order_id="AB123456", created_on=created_on,
        )
        assert version.created_on == created_on

    def test_summary_and_description(self, make_version) -> None:
        version = make_version(version=2)
        assert version.summary == (
            "Version: 2, Created On: 2024-03-01, Description: Initial Version"
        )
        assert version.version_with_description == "2 - Initial Version"

    def test_is_vcu_v2(self, make_version) -> None:
        assert make_version([("C5X1", "0AW")]).is_vcu_v2() is True
        assert make_version([("C5X1", "9ZZ")]).is_vcu_v2() is False
        no_spec = make_version().model_copy(update={"variant_specification": None})
        assert no_spec.is_vcu_v2() is None

    def test_order_id_must_be_eight_alphanumerics(self, make_version) -> None:
        version = make_version()
        with pytest.raises(ValidationError):
            version.model_validate({**version.model_dump(), "test_object_order_id": "AB 12345"})


# ===================================================================
# Legacy
# ===================================================================


class TestLegacy:
    def test_variant_code(self, make_legacy_version) -> None:
        record = make_legacy_version([("AB", "01", "Base")]).legacy_variant_specifications[0]
        assert record.variant_code == "AB01"

    def test_family_must_be_two_characters(self) -> None:
        with pytest.raises(ValidationError):
            LegacyVariantSpecification(
                test_object_order_id="AB123456",
                variant_family="A",
                variant_number="01",
                variant_designation="Base",
            )

    def test_naive_created_on_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LegacyVariantSpecificationVersion(
                test_object_order_id="AB123456",
                created_on=datetime(2024, 1, 1),
            )

    def test_is_current_follows_type(self, make_legacy_version) -> None:
        assert make_legacy_version().is_current
        assert not make_legacy_version(type="ORDERED").is_current


# ===================================================================
# Order
# ===================================================================


class TestTestObjectOrder:
    def test_mix_number_is_zero_padded(self, make_order) -> None:
        assert make_order(mix_num=42).mix_number == "0000042"
        assert make_order().mix_number == "0000000"

    def test_factory_order_number(self, make_order) -> None:
        assert make_order(fyon="0012345").factory_order_number_to_int() == 12345

    @pytest.mark.parametrize("fyon", [None, "", "12AB"])
    def test_factory_order_number_invalid(self, make_order, fyon) -> None:
        with pytest.raises(ValueError):
            make_order(fyon=fyon).factory_order_number_to_int()

    def test_structure_week_format(self, make_order) -> None:
        with pytest.raises(ValidationError):
            make_order(structure_week="24w54")

    def test_latest_versions(self, c5x1_order) -> None:
        latest = c5x1_order.latest_variant_specification_version()
        assert latest is not None
        assert latest.version == 2
        legacy = c5x1_order.latest_legacy_variant_specification_version()
        assert [r.variant_code for r in legacy.legacy_variant_specifications] == ["AB01", "CD02"]

    def test_used_or_default(self, make_order, make_version, make_legacy_version) -> None:
        used = make_version([("C5X1", "0AW")], used=True)
        order = make_order(
            variant_specification_versions=[make_version(minutes=10), used],
            legacy_variant_specification_versions=[
                make_legacy_version([("AB", "01", "Base")], type="ORDERED"),
                make_legacy_version([("CD", "02", "Sport")]),
            ],
        )
        assert order.used_variant_specification_or_default() is used.variant_specification
        records = order.used_legacy_variant_specifications_or_default()
        assert [r.variant_code for r in records] == ["CD02"]

    def test_used_or_default_without_history(self, make_order) -> None:
        order = make_order()
        assert order.used_variant_specification_or_default() is None
        assert order.used_legacy_variant_specifications_or_default() is None
        assert order.latest_variant_specification_version() is None


# ===================================================================
# Enums and KDP wire models
# ===================================================================


class TestVariantSpecificationType:
    def test_friendly_name_and_path(self) -> None:
        assert VariantSpecificationType.STANDARD.friendly_name == "standard"
        assert VariantSpecificationType.DOWNLOADABLE.uri_path == "downloadable"


class TestKdpWireModels:
    def test_dump_uses_camel_case(self) -> None:
        request = KdpVariantSpecificationRequest.for_latest_saved("AB123456", "246A3B2B0A30")
        assert request.model_dump(by_alias=True, exclude_none=True) == {
            "inputArea": {"testObjectOrderId": "AB123456", "productNumber12": "246A3B2B0A30"},
        }

    def test_parse_response(self) -> None:
        payload = {
            "outputArea": {
                "variantSpecification": {
                    "typeCode": "246",
                    "isImmobilizerEnabled": False,
                    "standardConfiguration": {
                        "assignments": [
                            {"variableCode": "C5X1", "valueCode": ["0AW"]},
                            {"variableCode": "C5X1", "valueCode": ["0AX"]},
                        ],
                    },
                },
            },
        }
        spec = KdpVariantSpecificationResponse.model_validate(payload).validate_output()
        assert isinstance(spec, KdpVariantSpecification)
        assert spec.type_code == "246"
        assert spec.is_immobilizer_enabled is False
        assert spec.grouped_assignments() == {"C5X1": ["0AW", "0AX"]}

    @pytest.mark.parametrize("payload", [{}, {"outputArea": {}}])
    def test_missing_output_raises(self, payload: dict) -> None:
        with pytest.raises(KdpResponseValidationError):
            KdpVariantSpecificationResponse.model_validate(payload).validate_output()

    def test_ids_are_uuids(self) -> None:
        assert isinstance(VariantSpecification().id, UUID)
