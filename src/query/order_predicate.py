"""TestObjectOrderQuery → Predicate[TestObjectOrder].

Every present criterion adds one clause; string comparisons are
case-insensitive exact matches. Clauses over variant data look only at the
order's latest version (by creation time) of the relevant collection. An
order whose collection is empty cannot be judged and raises
NoMatchingVersionError instead of being silently dropped.
"""

from collections.abc import Iterable

from src.models.legacy import LegacyVariantSpecification
from src.models.order import TestObjectOrder
from src.models.variant_specification import VariantSpecificationAssignment
from src.query.criteria import TestObjectOrderQuery, is_present
from src.query.predicate import Clause, Predicate, PredicateBuilder
from src.specification.versions import SelectionMode, require_current


def _same(actual: str | None, expected: str) -> bool:
    return actual is not None and actual.casefold() == expected.casefold()


def _latest_assignments(order: TestObjectOrder) -> list[VariantSpecificationAssignment]:
    version = require_current(order.variant_specification_versions, SelectionMode.RECENCY)
    if version.variant_specification is None:
        return []
    return version.variant_specification.variant_specification_assignments


def _latest_legacy_records(order: TestObjectOrder) -> list[LegacyVariantSpecification]:
    version = require_current(order.legacy_variant_specification_versions, SelectionMode.RECENCY)
    return version.legacy_variant_specifications


# ---------------------------------------------------------------------------
# Clause factories
# ---------------------------------------------------------------------------


def _field_equals(field: str, expected: str) -> Clause[TestObjectOrder]:
    return lambda order: _same(getattr(order, field), expected)


def _variant_code_equals(expected: str) -> Clause[TestObjectOrder]:
    return lambda order: any(
        _same(record.variant_family + record.variant_number, expected)
        for record in _latest_legacy_records(order)
    )


def _designation_equals(expected: str) -> Clause[TestObjectOrder]:
    return lambda order: any(
        _same(record.variant_designation, expected)
        for record in _latest_legacy_records(order)
    )


def _assignment_equals(variable_code: str, value_code: str) -> Clause[TestObjectOrder]:
    return lambda order: any(
        _same(a.variable_code, variable_code) and _same(a.value_code, value_code)
        for a in _latest_assignments(order)
    )


def _has_variable_code(variable_code: str) -> Clause[TestObjectOrder]:
    return lambda order: any(
        _same(a.variable_code, variable_code) for a in _latest_assignments(order)
    )


def _has_value_code(value_code: str) -> Clause[TestObjectOrder]:
    return lambda order: any(
        _same(a.value_code, value_code) for a in _latest_assignments(order)
    )


# Order fields matched directly against the criterion of the same name.
_ORDER_FIELDS = (
    "project",
    "series",
    "status",
    "test_object_order_id",
    "vin",
    "test_object_type",
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def to_predicate(query: TestObjectOrderQuery | None) -> Predicate[TestObjectOrder]:
    """Compose the predicate selecting orders that satisfy ``query``.

    No query, or a query with nothing set, selects every order.
    """
    if query is None or not query.has_any_filter_set():
        return Predicate.always()

    builder: PredicateBuilder[TestObjectOrder] = PredicateBuilder()

    for field in _ORDER_FIELDS:
        expected = getattr(query, field)
        builder.add(is_present(expected), lambda f=field, e=expected: _field_equals(f, e))

    builder.add(is_present(query.variant), lambda: _variant_code_equals(query.variant))
    builder.add(is_present(query.designation), lambda: _designation_equals(query.designation))

    # Variable/value pair: both codes must sit on the same assignment; a
    # lone code only needs some assignment carrying it.
    has_variable = is_present(query.variable_code)
    has_value = is_present(query.value_code)
    builder.add(
        has_variable and has_value,
        lambda: _assignment_equals(query.variable_code, query.value_code),
    )
    builder.add(
        has_variable and not has_value,
        lambda: _has_variable_code(query.variable_code),
    )
    builder.add(
        has_value and not has_variable,
        lambda: _has_value_code(query.value_code),
    )

    return builder.build()


def evaluate(order: TestObjectOrder, query: TestObjectOrderQuery | None) -> bool:
    """True if ``order`` satisfies every present criterion of ``query``.

    Raises:
        NoMatchingVersionError: If a variant criterion is set and the order
            has no version in the collection it inspects.
    """
    return to_predicate(query)(order)


def select_orders(
    orders: Iterable[TestObjectOrder],
    query: TestObjectOrderQuery | None,
) -> list[TestObjectOrder]:
    """Orders satisfying ``query``, in input order."""
    predicate = to_predicate(query)
    return [order for order in orders if predicate(order)]
