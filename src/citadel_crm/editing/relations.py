"""List-valued relations (owners, opportunities, people) with per-item in-flight state."""

import logging
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

from citadel_crm.actions.results import ActionResult

logger = logging.getLogger(__name__)

E = TypeVar("E")


def _by_id(item: Any) -> Any:
    return item.id


class RelationList(Generic[E]):
    """
    Items related to one entity, keyed by their integer ``id``.

    ``removing_id`` names the item whose removal is in flight; other items
    stay usable meanwhile. An item only disappears after the server confirms.
    """

    def __init__(self, items: Optional[list[E]] = None, key: Callable[[E], Any] = _by_id):
        self.items: list[E] = list(items or [])
        self.removing_id: Optional[Any] = None
        self._key = key

    def __iter__(self) -> Iterator[E]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, item_id: object) -> bool:
        return any(self._key(i) == item_id for i in self.items)

    def ids(self) -> list[Any]:
        return [self._key(i) for i in self.items]

    def find(self, item_id: Any) -> Optional[E]:
        for item in self.items:
            if self._key(item) == item_id:
                return item
        return None

    def add(self, item: E) -> bool:
        """Append unless an item with the same id is present. True if appended."""
        if self._key(item) in self:
            return False
        self.items = [*self.items, item]
        return True

    def remove(self, item_id: Any, call: Callable[[E], ActionResult]) -> bool:
        """
        Run the server-side removal for ``item_id`` and drop the item once it
        is confirmed. Returns False when the item is unknown or the call failed.
        """
        item = self.find(item_id)
        if item is None:
            logger.warning("Remove: no item with id %s", item_id)
            return False
        self.removing_id = item_id
        try:
            result = call(item)
        finally:
            self.removing_id = None
        if not result.ok:
            return False
        self.items = [i for i in self.items if self._key(i) != item_id]
        return True
