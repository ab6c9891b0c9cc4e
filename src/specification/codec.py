"""Assignment codec — grouped ``variable → [values]`` ⇄ flat ``(variable, value)`` records.

Two free functions, independent of any dialect's scalar fields:

- ``flatten``: one record per value, keys in mapping order, values in
  sequence order.
- ``group``: records grouped by variable code, first-seen key order,
  values in insertion order.

``flatten(group(f))`` keeps every record of ``f`` but makes records that
share a variable code contiguous. Callers that need the original interleave
must not round-trip through ``group``.

Malformed input is tolerated rather than rejected: a ``None`` value list
counts as empty and ``None`` records are skipped. Nothing is deduplicated.
"""

import json
from collections.abc import Iterable, Mapping, Sequence
from typing import NamedTuple, Protocol


class Assignment(NamedTuple):
    """A flat (variable code, value code) pair."""

    variable_code: str
    value_code: str


class AssignmentLike(Protocol):
    """Anything exposing a variable code and a value code."""

    @property
    def variable_code(self) -> str: ...

    @property
    def value_code(self) -> str: ...


def flatten(grouped: Mapping[str, Sequence[str] | None] | None) -> list[Assignment]:
    """Expand a grouped mapping into flat assignments."""
    if not grouped:
        return []
    return [
        Assignment(variable_code, value_code)
        for variable_code, value_codes in grouped.items()
        for value_code in (value_codes or ())
    ]


def group(flat: Iterable[AssignmentLike | None] | None) -> dict[str, list[str]]:
    """Group flat assignments by variable code."""
    grouped: dict[str, list[str]] = {}
    if not flat:
        return grouped
    for assignment in flat:
        if assignment is None:
            continue
        grouped.setdefault(assignment.variable_code, []).append(assignment.value_code)
    return grouped


def compact_assignments(flat: Iterable[AssignmentLike | None] | None) -> str:
    """Compact JSON summary, e.g. ``{"C5X1":["0AW"],"C2XX":["1BC"]}``."""
    return json.dumps(group(flat), separators=(",", ":"))
