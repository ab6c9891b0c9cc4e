"""Composable boolean predicates.

A Predicate starts as "always true" and conjunctive clauses are ANDed in
only when their guard holds, so an absent criterion adds no constraint.
Clauses are pure, so evaluation order carries no meaning.
"""

from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

from src.query.criteria import is_present

T = TypeVar("T")

Clause = Callable[[T], bool]


class Predicate(Generic[T]):
    """A conjunction of clauses over ``T``."""

    def __init__(self, clauses: Iterable[Clause[T]] = ()) -> None:
        self._clauses: tuple[Clause[T], ...] = tuple(clauses)

    @classmethod
    def always(cls) -> "Predicate[T]":
        return cls()

    @property
    def clause_count(self) -> int:
        return len(self._clauses)

    def __call__(self, item: T) -> bool:
        return all(clause(item) for clause in self._clauses)

    def __and__(self, other: "Predicate[T] | Clause[T]") -> "Predicate[T]":
        if isinstance(other, Predicate):
            return Predicate((*self._clauses, *other._clauses))
        return Predicate((*self._clauses, other))

    # ----- Guarded composition -----

    def and_if(self, condition: bool, clause: Clause[T]) -> "Predicate[T]":
        return self & clause if condition else self

    def and_if_string(self, value: str | None, clause: Clause[T]) -> "Predicate[T]":
        return self.and_if(is_present(value), clause)

    def and_if_string_pair(
        self, first: str | None, second: str | None, clause: Clause[T],
    ) -> "Predicate[T]":
        return self.and_if(is_present(first) and is_present(second), clause)


class PredicateBuilder(Generic[T]):
    """Folds ``(is_present, clause_factory)`` pairs into one Predicate.

    Factories are only called for present criteria, so a clause may assume
    its inputs are set.
    """

    def __init__(self) -> None:
        self._pairs: list[tuple[bool, Callable[[], Clause[T]]]] = []

    def add(self, present: bool, clause_factory: Callable[[], Clause[T]]) -> "PredicateBuilder[T]":
        self._pairs.append((present, clause_factory))
        return self

    def build(self) -> Predicate[T]:
        predicate: Predicate[T] = Predicate.always()
        for present, clause_factory in self._pairs:
            if present:
                predicate = predicate & clause_factory()
        return predicate
