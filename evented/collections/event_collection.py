"""
Unordered, value-addressable evented container.

EventCollection runs the same two-phase pipeline as EventList without any
positional contract: requests and results always carry the ``-1`` index and
there is no replace operation.
"""

from typing import Any

from ..core.events import ContainerEvent, MutationKind
from ..core.models import APPEND, MutationRequest, MutationResult
from .base import EventContainer


class EventCollection(EventContainer):
    """
    Collection that raises before/after events around every add and remove.

    Items are kept in the order they were added so that clear() and
    remove_all() visit them deterministically, but no index is exposed.
    Duplicates and unhashable items are allowed.

    Thread Safety:
        NOT thread-safe. Use from a single thread.

    Examples:
        >>> tags = EventCollection()
        >>> tags.subscribe(ContainerEvent.BEFORE_ADD, lambda r: setattr(r, "item", r.item.upper()))
        >>> tags.add("title")
        True
        >>> "TITLE" in tags
        True
    """

    def add(self, item: Any) -> bool:
        """
        Add ``item`` (or whatever a before-add subscriber rewrites it to).

        Returns:
            bool: True if the item was stored, False if canceled
        """
        request = MutationRequest(kind=MutationKind.ADD, item=item, source=self)
        if not self._dispatcher.dispatch_before(ContainerEvent.BEFORE_ADD, request):
            return False

        self._items.append(request.item)

        self._commit(ContainerEvent.AFTER_ADD, MutationResult.from_request(request, index=APPEND))
        return True

    def _remove_value(self, item: Any) -> bool:
        request = MutationRequest(kind=MutationKind.REMOVE, item=item, source=self)
        if not self._dispatcher.dispatch_before(ContainerEvent.BEFORE_REMOVE, request):
            return False

        try:
            self._items.remove(item)
        except ValueError:
            # Absent, or already removed by a handler
            return False

        self._commit(
            ContainerEvent.AFTER_REMOVE,
            MutationResult(kind=MutationKind.REMOVE, item=item, source=self)
        )
        return True
