"""
Category name -> id lookup for a single import run.
"""

from typing import Iterable, Optional

from models.category import CategoryResponse


class CategoryResolutionMap:
    """
    Case-insensitive category lookup.

    Lower-cased keys belong to the first category that claims them, so when
    two categories differ only in case every spelling resolves to the first
    one.

    Exact names are recorded too and resolve() falls back to them, matching
    the lower-case, exact, None lookup order of the import. Because add()
    always fills the lower-cased key, that fallback never finds anything
    the lower-cased lookup missed.
    """

    def __init__(self):
        self._by_lower: dict[str, str] = {}
        self._by_exact: dict[str, str] = {}

    def seed(self, categories: Iterable[CategoryResponse]) -> None:
        """Load the categories that already exist for the business."""
        for category in categories:
            self.add(category.name, category.id)

    def add(self, name: str, category_id: str) -> None:
        self._by_lower.setdefault(name.lower(), category_id)
        self._by_exact[name] = category_id

    def knows(self, name: str) -> bool:
        return name.lower() in self._by_lower

    def resolve(self, name: str) -> Optional[str]:
        """Category id for a name: lower-cased match, then exact match, else None."""
        return self._by_lower.get(name.lower()) or self._by_exact.get(name)

    def __len__(self) -> int:
        return len(self._by_exact)
