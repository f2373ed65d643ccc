"""List of API resources with total count, ordering and paging."""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 API timestamp; missing values sort first."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if not value:
        return datetime.min.replace(tzinfo=timezone.utc)
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


# Sort keys selectable by name in Collection.order_by(kind=...)
SORT_KEYS: Dict[str, Callable[[Any], Any]] = {
    "datetime": parse_datetime,
}


class Collection(Generic[T]):
    """Ordered resources from a list endpoint.

    ``len()`` counts the items held; ``count()`` prefers the ``total_count``
    reported by the API, which can be larger for paged endpoints.
    """

    def __init__(self, items: Optional[Iterable[T]] = None, total_count: Optional[int] = None):
        self.items: List[T] = list(items or [])
        self.total_count = total_count

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def __repr__(self) -> str:
        return f"<Collection {len(self.items)} of {self.count()}>"

    def add(self, item: T, prepend: bool = False) -> None:
        if prepend:
            self.items.insert(0, item)
        else:
            self.items.append(item)

    def count(self) -> int:
        return self.total_count if self.total_count is not None else len(self.items)

    def order_by(
        self,
        attribute: str,
        order: str = "asc",
        kind: Optional[str] = None,
        key: Optional[Callable[[Any], Any]] = None,
    ) -> "Collection[T]":
        """Sort in place on an item attribute. The sort is stable.

        Args:
            attribute: Attribute read from every item
            order: "asc" or "desc"
            kind: Name of a registered sort key (e.g. "datetime")
            key: Custom key applied to the attribute value; wins over kind

        Returns:
            self, for chaining
        """
        convert = key or SORT_KEYS.get((kind or "").lower(), lambda value: value)

        def sort_key(item):
            value = getattr(item, attribute)
            # None sorts before every value
            if value is None:
                return (False, None)
            return (True, convert(value))

        self.items.sort(key=sort_key, reverse=order.lower() == "desc")
        return self

    def first_index(self, page: int, per_page: int) -> int:
        """1-based position of the first item on ``page``."""
        _check_per_page(per_page)
        return (page * per_page) - (per_page - 1)

    def last_index(self, page: int, per_page: int) -> int:
        """1-based position of the last item on ``page``."""
        _check_per_page(per_page)
        return min(page * per_page, len(self.items))

    def last_page(self, per_page: int) -> int:
        _check_per_page(per_page)
        return max(1, -(-len(self.items) // per_page))

    def page(self, page: int, per_page: int) -> List[T]:
        """Items on a 1-based page."""
        start = self.first_index(page, per_page) - 1
        return self.items[start:self.last_index(page, per_page)]


def _check_per_page(per_page: int) -> None:
    if per_page <= 0:
        raise ValueError(f"per_page must be positive, got {per_page!r}")
