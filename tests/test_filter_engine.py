"""Tests for FilterEngine - pure logic, no HA fixtures needed."""

from __future__ import annotations

import pytest

from custom_components.newspulse import const
from custom_components.newspulse.engines.filter_engine import FilterEngine

from tests.helpers import make_record, sample_records

# =============================================================================
# TEST: APPLY
# =============================================================================


class TestApply:
    """Test deriving the visible subset."""

    def test_all_is_identity(self) -> None:
        """With `all` selected the result equals the input, same order."""
        records = sample_records()
        assert FilterEngine.apply(records, (const.CATEGORY_ALL,)) == records

    def test_empty_selection_is_identity(self) -> None:
        """An empty selection means no restriction."""
        records = sample_records()
        assert FilterEngine.apply(records, ()) == records

    def test_filters_by_type_preserving_order(self) -> None:
        """Only selected categories remain, in server order."""
        records = [
            make_record(1, const.CATEGORY_COMMENT),
            make_record(2, const.CATEGORY_NEWS),
            make_record(3, const.CATEGORY_LIKE),
            make_record(4, const.CATEGORY_COMMENT),
        ]
        result = FilterEngine.apply(
            records, (const.CATEGORY_LIKE, const.CATEGORY_COMMENT)
        )
        assert [r[const.DATA_NOTIFICATION_ID] for r in result] == [1, 3, 4]

    def test_every_result_matches_selection(self) -> None:
        """No record outside the selection slips through."""
        selection = (const.CATEGORY_NEWS,)
        result = FilterEngine.apply(sample_records(), selection)
        assert result
        assert all(r[const.DATA_NOTIFICATION_TYPE] in selection for r in result)

    def test_idempotent(self) -> None:
        """Applying the same filter twice changes nothing."""
        selection = (const.CATEGORY_NEWS, const.CATEGORY_LIKE)
        once = FilterEngine.apply(sample_records(), selection)
        assert FilterEngine.apply(once, selection) == once

    def test_unknown_type_never_matches_specific_filter(self) -> None:
        """Records with an unexpected type only show under `all`."""
        records = [make_record(1, "poll"), make_record(2, const.CATEGORY_NEWS)]
        assert len(FilterEngine.apply(records, (const.CATEGORY_NEWS,))) == 1
        assert len(FilterEngine.apply(records, (const.CATEGORY_ALL,))) == 2

    def test_does_not_mutate_input(self) -> None:
        """The input list is left untouched."""
        records = sample_records()
        snapshot = [dict(r) for r in records]
        FilterEngine.apply(records, (const.CATEGORY_LIKE,))
        assert records == snapshot


# =============================================================================
# TEST: NORMALIZE / TOGGLE
# =============================================================================


class TestSelection:
    """Test selection normalization and chip toggling."""

    @pytest.mark.parametrize(
        ("selection", "expected"),
        [
            ((), (const.CATEGORY_ALL,)),
            ((const.CATEGORY_ALL, const.CATEGORY_NEWS), (const.CATEGORY_ALL,)),
            (
                (const.CATEGORY_NEWS, const.CATEGORY_LIKE, const.CATEGORY_NEWS),
                (const.CATEGORY_NEWS, const.CATEGORY_LIKE),
            ),
        ],
    )
    def test_normalize(self, selection: tuple[str, ...], expected: tuple[str, ...]) -> None:
        """Empty or mixed selections collapse to `all`; duplicates drop."""
        assert FilterEngine.normalize(selection) == expected

    def test_toggle_specific_removes_all(self) -> None:
        """Selecting a category while on `all` replaces `all`."""
        assert FilterEngine.toggle((const.CATEGORY_ALL,), const.CATEGORY_NEWS) == (
            const.CATEGORY_NEWS,
        )

    def test_toggle_adds_second_category(self) -> None:
        """Categories accumulate in press order."""
        assert FilterEngine.toggle((const.CATEGORY_NEWS,), const.CATEGORY_LIKE) == (
            const.CATEGORY_NEWS,
            const.CATEGORY_LIKE,
        )

    def test_toggle_selected_deselects(self) -> None:
        """Pressing a selected category removes it."""
        assert FilterEngine.toggle(
            (const.CATEGORY_NEWS, const.CATEGORY_LIKE), const.CATEGORY_NEWS
        ) == (const.CATEGORY_LIKE,)

    def test_deselect_last_falls_back_to_all(self) -> None:
        """Removing the only category yields `all`."""
        assert FilterEngine.toggle((const.CATEGORY_NEWS,), const.CATEGORY_NEWS) == (
            const.CATEGORY_ALL,
        )

    def test_toggle_all_clears_specific(self) -> None:
        """Pressing `all` clears every specific category."""
        assert FilterEngine.toggle(
            (const.CATEGORY_NEWS, const.CATEGORY_LIKE), const.CATEGORY_ALL
        ) == (const.CATEGORY_ALL,)

    def test_invalid_categories(self) -> None:
        """Unknown categories are reported, known ones are not."""
        assert FilterEngine.invalid_categories(
            [const.CATEGORY_ALL, const.CATEGORY_NEWS, "poll"]
        ) == ["poll"]
