"""Shared pytest fixtures for the variant specification test suite.

Provides:
- make_order: TestObjectOrder factory with valid header fields
- make_version / make_legacy_version: version factories with explicit timestamps
- c5x1_order: an order whose latest assignments are [(C5X1,0AW),(C2XX,1BC)]
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest

from src.models.legacy import LegacyVariantSpecification, LegacyVariantSpecificationVersion
from src.models.order import TestObjectOrder
from src.models.variant_specification import (
    VariantSpecification,
    VariantSpecificationAssignment,
    VariantSpecificationVersion,
)

ORDER_ID = "AB123456"
BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _assignments(pairs: list[tuple[str, str]]) -> list[VariantSpecificationAssignment]:
    return [
        VariantSpecificationAssignment(variable_code=variable, value_code=value)
        for variable, value in pairs
    ]


@pytest.fixture
def make_version() -> Callable[..., VariantSpecificationVersion]:
    def _make(
        pairs: list[tuple[str, str]] | None = None,
        *,
        minutes: int = 0,
        used: bool = False,
        version: int = 1,
        **spec_overrides: object,
    ) -> VariantSpecificationVersion:
        return VariantSpecificationVersion(
            test_object_order_id=ORDER_ID,
            created_on=BASE_TIME + timedelta(minutes=minutes),
            used=used,
            version=version,
            variant_specification=VariantSpecification(
                variant_specification_assignments=_assignments(pairs or []),
                **spec_overrides,  # type: ignore[arg-type]
            ),
        )

    return _make


@pytest.fixture
def make_legacy_version() -> Callable[..., LegacyVariantSpecificationVersion]:
    def _make(
        records: list[tuple[str, str, str]] | None = None,
        *,
        minutes: int = 0,
        **overrides: object,
    ) -> LegacyVariantSpecificationVersion:
        return LegacyVariantSpecificationVersion(
            test_object_order_id=ORDER_ID,
            created_on=BASE_TIME + timedelta(minutes=minutes),
            legacy_variant_specifications=[
                LegacyVariantSpecification(
                    test_object_order_id=ORDER_ID,
                    variant_family=family,
                    variant_number=number,
                    variant_designation=designation,
                )
                for family, number, designation in records or []
            ],
            **overrides,  # type: ignore[arg-type]
        )

    return _make


@pytest.fixture
def make_order() -> Callable[..., TestObjectOrder]:
    def _make(**overrides: object) -> TestObjectOrder:
        defaults: dict[str, object] = {
            "test_object_order_id": ORDER_ID,
            "test_object_type": "Prototype",
            "vin": "YV1XZ12345F000001",
            "pno12": "246A3B2B0A30",
            "build_plant": "12",
            "project": "V316",
            "series": "VP",
            "structure_week": "24w10",
            "status": "Released",
            "exterior": "71700",
            "interior": "RA00",
        }
        defaults.update(overrides)
        return TestObjectOrder(**defaults)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def c5x1_order(make_order, make_version, make_legacy_version) -> TestObjectOrder:
    """Order whose latest version holds [(C5X1,0AW),(C2XX,1BC)].

    An older version with different assignments sits after it in the list
    so that position alone cannot pick the right one.
    """
    return make_order(
        variant_specification_versions=[
            make_version([("C5X1", "0AW"), ("C2XX", "1BC")], minutes=30, version=2),
            make_version([("C5X1", "9ZZ"), ("D1XX", "2CD")], minutes=0, version=1),
        ],
        legacy_variant_specification_versions=[
            make_legacy_version([("AB", "01", "Base"), ("CD", "02", "Sport")], minutes=10),
            make_legacy_version([("EF", "03", "Old")], minutes=0),
        ],
    )
