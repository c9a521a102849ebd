#!/usr/bin/env python3
"""
Category Catalog

Fixed, ordered table of expense categories with display name and icon.
Aggregators take a catalog argument instead of carrying their own copies.
"""

from collections.abc import Iterator
from dataclasses import dataclass

FALLBACK_ICON = "📦"


@dataclass(frozen=True)
class CategoryInfo:
    """Display metadata for one category id."""

    id: str
    name: str
    icon: str


class CategoryCatalog:
    """
    Immutable lookup table of known categories.

    Unknown ids are never rejected: `lookup()` returns the id itself as the
    display name with the generic "other" icon.
    """

    def __init__(self, entries: tuple[CategoryInfo, ...]):
        self._entries = tuple(entries)
        self._by_id = {entry.id: entry for entry in self._entries}

    def lookup(self, category_id: str) -> CategoryInfo:
        """Display metadata for a category id, with a fallback for unknown ids."""
        info = self._by_id.get(category_id)
        if info is None:
            return CategoryInfo(id=category_id, name=category_id, icon=FALLBACK_ICON)
        return info

    def ids(self) -> list[str]:
        """Known category ids in catalog order."""
        return [entry.id for entry in self._entries]

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def __iter__(self) -> Iterator[CategoryInfo]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


DEFAULT_CATALOG = CategoryCatalog(
    (
        CategoryInfo("groceries", "Groceries", "🛒"),
        CategoryInfo("dining", "Dining Out", "🍕"),
        CategoryInfo("utilities", "Utilities", "💡"),
        CategoryInfo("rent", "Rent/Housing", "🏠"),
        CategoryInfo("transport", "Transport", "🚗"),
        CategoryInfo("entertainment", "Entertainment", "🎬"),
        CategoryInfo("health", "Health", "💊"),
        CategoryInfo("shopping", "Shopping", "🛍️"),
        CategoryInfo("subscriptions", "Subscriptions", "📱"),
        CategoryInfo("other", "Other", FALLBACK_ICON),
    )
)
