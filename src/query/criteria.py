"""TestObjectOrderQuery — optional search criteria for test object orders."""

from src.models.common import VariantSpecBase


def is_present(value: str | None) -> bool:
    """A criterion is present when supplied and not blank."""
    return value is not None and value.strip() != ""


class TestObjectOrderQuery(VariantSpecBase):
    """Search criteria; every field is optional and absent means unconstrained."""

    # Not a pytest test class despite the name.
    __test__ = False

    test_object_order_id: str | None = None
    status: str | None = None
    project: str | None = None
    series: str | None = None
    vin: str | None = None
    test_object_type: str | None = None
    variant: str | None = None
    designation: str | None = None
    variable_code: str | None = None
    value_code: str | None = None

    def has_any_filter_set(self) -> bool:
        return any(is_present(value) for value in self.model_dump().values())
