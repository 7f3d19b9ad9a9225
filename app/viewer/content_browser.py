"""Content browser: the fetched item list plus a wraparound cursor."""
from typing import Any, Dict, List, Optional, Sequence

from app.models.internal_models import PointOfInterest


class ContentBrowser:
    def __init__(self):
        self._items: List[PointOfInterest] = []
        self._index: Optional[int] = None

    @property
    def items(self) -> tuple[PointOfInterest, ...]:
        return tuple(self._items)

    @property
    def index(self) -> Optional[int]:
        """Cursor position, or None when there is nothing to select."""
        return self._index

    @property
    def count(self) -> int:
        return len(self._items)

    @property
    def can_navigate(self) -> bool:
        return len(self._items) > 1

    @property
    def current(self) -> Optional[PointOfInterest]:
        if self._index is None:
            return None
        return self._items[self._index]

    def replace(self, items: Sequence[PointOfInterest]) -> None:
        self._items = list(items)
        self._index = 0 if self._items else None

    def next(self) -> Optional[int]:
        if self.can_navigate:
            self._index = (self._index + 1) % len(self._items)
        return self._index

    def previous(self) -> Optional[int]:
        if self.can_navigate:
            n = len(self._items)
            self._index = (self._index - 1 + n) % n
        return self._index

    def card(self) -> Dict[str, Any]:
        current = self.current
        return {
            "item": current.to_dict() if current else None,
            "index": self._index,
            "count": self.count,
            "can_navigate": self.can_navigate,
        }
