"""Filter Engine - Pure logic for category filtering of notifications.

This engine provides stateless functions for:
- Deriving the visible subset of notifications for a category selection
- Normalizing a selection so the `all` sentinel stays mutually exclusive
- Toggling a single category the way the filter chips behave

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data, so they are
safe to call redundantly whenever records or the selection change.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from ..type_defs import FilterSelection, NotificationRecord


class FilterEngine:
    """Pure logic engine for notification category filtering."""

    @staticmethod
    def is_unfiltered(selection: Iterable[str]) -> bool:
        """Return True if the selection means "no category restriction"."""
        selection = tuple(selection)
        return not selection or const.CATEGORY_ALL in selection

    @staticmethod
    def apply(
        records: Sequence[NotificationRecord], selection: Iterable[str]
    ) -> list[NotificationRecord]:
        """Return the records whose type is selected, preserving order.

        Args:
            records: Ordered notification records (server order)
            selection: Selected categories; `all` (or empty) disables filtering

        Returns:
            A new list. With `all` selected it holds the same records in the
            same order; otherwise the order-preserving subsequence of records
            whose `type` is a selected category.
        """
        selected = set(selection)
        if FilterEngine.is_unfiltered(selected):
            return list(records)
        return [
            record
            for record in records
            if record.get(const.DATA_NOTIFICATION_TYPE) in selected
        ]

    @staticmethod
    def normalize(selection: Iterable[str]) -> FilterSelection:
        """Normalize a selection into the canonical ordered tuple.

        - Empty selection becomes ("all",)
        - `all` together with specific categories becomes ("all",)
        - Duplicates are removed, first occurrence wins
        """
        ordered: list[str] = []
        for category in selection:
            if category not in ordered:
                ordered.append(category)

        if FilterEngine.is_unfiltered(ordered):
            return const.DEFAULT_FILTER_SELECTION
        return tuple(ordered)

    @staticmethod
    def toggle(selection: Iterable[str], category: str) -> FilterSelection:
        """Toggle a category in the selection.

        Selecting `all` clears every specific category. Selecting a specific
        category clears `all`. Deselecting the last specific category falls
        back to `all`.

        Args:
            selection: Current selection
            category: Category that was pressed

        Returns:
            The new normalized selection
        """
        current = FilterEngine.normalize(selection)

        if category == const.CATEGORY_ALL:
            return const.DEFAULT_FILTER_SELECTION

        if category in current:
            remaining = [item for item in current if item != category]
        else:
            remaining = [
                item for item in current if item != const.CATEGORY_ALL
            ] + [category]

        return FilterEngine.normalize(remaining)

    @staticmethod
    def invalid_categories(selection: Iterable[str]) -> list[str]:
        """Return categories that are not selectable filter values."""
        return [
            category
            for category in selection
            if category not in const.FILTER_CATEGORIES
        ]
