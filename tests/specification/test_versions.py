"""Tests for the version selector.

Covers: RECENCY (latest created_on, first of equal timestamps wins),
FLAG (first flagged version), empty input, require_current errors.
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.specification.errors import NoMatchingVersionError
from src.specification.versions import SelectionMode, require_current, select_current


class TestRecency:
    def test_picks_latest_regardless_of_position(self, make_version) -> None:
        versions = [
            make_version(minutes=5, version=1),
            make_version(minutes=20, version=2),
            make_version(minutes=10, version=3),
        ]
        assert select_current(versions, SelectionMode.RECENCY) is versions[1]

    def test_first_of_equal_timestamps_wins(self, make_version) -> None:
        versions = [
            make_version(minutes=30, version=1),
            make_version(minutes=0, version=2),
            make_version(minutes=30, version=3),
        ]
        assert select_current(versions, SelectionMode.RECENCY) is versions[0]

    def test_ignores_used_flag(self, make_version) -> None:
        versions = [make_version(minutes=0, used=True), make_version(minutes=1)]
        assert select_current(versions, SelectionMode.RECENCY) is versions[1]

    def test_offsets_compare_by_instant(self, make_version) -> None:
        # 14:30+02:00 is 12:30 UTC, later than 12:10 UTC.
        local = make_version().model_copy(
            update={"created_on": datetime(2024, 3, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))},
        )
        versions = [make_version(minutes=10), local]
        assert select_current(versions, SelectionMode.RECENCY) is versions[1]

    def test_does_not_reorder_input(self, make_version) -> None:
        versions = [make_version(minutes=0), make_version(minutes=9), make_version(minutes=3)]
        snapshot = list(versions)
        select_current(versions, SelectionMode.RECENCY)
        assert versions == snapshot


class TestFlag:
    def test_picks_first_flagged(self, make_version) -> None:
        versions = [
            make_version(minutes=50),
            make_version(minutes=0, used=True, version=2),
            make_version(minutes=40, used=True, version=3),
        ]
        assert select_current(versions, SelectionMode.FLAG) is versions[1]

    def test_none_flagged_gives_none(self, make_version) -> None:
        versions = [make_version(minutes=0), make_version(minutes=1)]
        assert select_current(versions, SelectionMode.FLAG) is None

    def test_legacy_used_type_counts_as_flag(self, make_legacy_version) -> None:
        ordered = make_legacy_version(minutes=10, type="ORDERED")
        used = make_legacy_version(minutes=0)
        assert select_current([ordered, used], SelectionMode.FLAG) is used


class TestEmptyInput:
    @pytest.mark.parametrize("mode", list(SelectionMode))
    def test_empty_gives_none(self, mode: SelectionMode) -> None:
        assert select_current([], mode) is None
        assert select_current(None, mode) is None

    @pytest.mark.parametrize("mode", list(SelectionMode))
    def test_require_current_raises(self, mode: SelectionMode) -> None:
        with pytest.raises(NoMatchingVersionError) as exc_info:
            require_current([], mode)
        assert exc_info.value.mode == mode

    def test_require_current_returns_match(self, make_version) -> None:
        version = make_version(used=True)
        assert require_current([version], SelectionMode.FLAG) is version

    def test_no_matching_version_is_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            require_current(None, SelectionMode.RECENCY)
