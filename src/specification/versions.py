"""Version selector — picks the current version out of an order's history.

Both modes are a single pass over the caller's sequence; nothing is sorted
or reordered.
"""

from collections.abc import Iterable
from datetime import datetime
from enum import StrEnum
from typing import Protocol, TypeVar

from src.specification.errors import NoMatchingVersionError


class SelectionMode(StrEnum):
    """How the current version is chosen."""

    RECENCY = "RECENCY"  # latest created_on, first one wins on ties
    FLAG = "FLAG"  # first version flagged as current


class Versioned(Protocol):
    @property
    def created_on(self) -> datetime: ...

    @property
    def is_current(self) -> bool: ...


V = TypeVar("V", bound=Versioned)


def select_current(versions: Iterable[V] | None, mode: SelectionMode) -> V | None:
    """Return the current version under ``mode``, or None if there is none."""
    if versions is None:
        return None

    if mode == SelectionMode.FLAG:
        return next((v for v in versions if v.is_current), None)

    latest: V | None = None
    for version in versions:
        # Strict comparison keeps the first of equal timestamps.
        if latest is None or version.created_on > latest.created_on:
            latest = version
    return latest


def require_current(versions: Iterable[V] | None, mode: SelectionMode) -> V:
    """Like select_current, but a missing version is an error.

    Raises:
        NoMatchingVersionError: If no version qualifies under ``mode``.
    """
    version = select_current(versions, mode)
    if version is None:
        msg = f"No version matches selection mode {mode.value}."
        raise NoMatchingVersionError(msg, mode=mode)
    return version
