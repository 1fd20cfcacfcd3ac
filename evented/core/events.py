"""
Event and mutation kinds for evented containers.

This module defines the names subscribers register against and the kinds of
structural change a container can describe. Every container event is either
a cancelable "before" notification or an informational "after" notification.
"""

from enum import Enum


class MutationKind(Enum):
    """
    Kind of structural change carried by a mutation request or result.

    Examples:
        >>> MutationKind.INSERT
        <MutationKind.INSERT: 'insert'>

        >>> str(MutationKind.REMOVE)
        'REMOVE'
    """

    ADD = "add"
    INSERT = "insert"
    REMOVE = "remove"
    REPLACE = "replace"

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<MutationKind.{self.name}: '{self.value}'>"


class ContainerEvent(Enum):
    """
    Enumeration of the events raised around container mutations.

    Before events are dispatched with a mutable request that subscribers may
    rewrite or cancel. After events are dispatched with an immutable result
    once the change has been committed to storage.

    Event values are snake_case string literals for clear logging.

    Examples:
        >>> ContainerEvent.BEFORE_ADD
        <ContainerEvent.BEFORE_ADD: 'before_add'>

        >>> ContainerEvent.BEFORE_ADD.is_before
        True

        >>> ContainerEvent.AFTER_REMOVE.kind
        <MutationKind.REMOVE: 'remove'>
    """

    BEFORE_ADD = "before_add"
    """
    Emitted before an item is added or inserted.

    Subscribers may rewrite ``request.item`` and ``request.index`` or set
    ``request.cancel`` to veto the insertion.
    """

    AFTER_ADD = "after_add"
    """Emitted after an item has been stored, with its resolved index."""

    BEFORE_REMOVE = "before_remove"
    """
    Emitted before an item is removed.

    Fires even when the item turns out not to be present (index ``-1``).
    """

    AFTER_REMOVE = "after_remove"
    """Emitted after the store actually removed an item."""

    BEFORE_REPLACE = "before_replace"
    """
    Emitted before an indexed slot is overwritten (EventList only).

    Subscribers may rewrite ``request.item`` (the new value) or cancel.
    """

    AFTER_REPLACE = "after_replace"
    """Emitted after a slot was overwritten, with old and new values."""

    @property
    def is_before(self) -> bool:
        """True for cancelable events raised ahead of a mutation."""
        return self.value.startswith("before_")

    @property
    def kind(self) -> MutationKind:
        """Mutation kind this event reports on (ADD covers inserts too)."""
        return MutationKind(self.value.split("_", 1)[1])

    def __str__(self) -> str:
        """
        Return the string representation of the event.

        Returns:
            str: The event name (e.g., 'BEFORE_ADD')
        """
        return self.name

    def __repr__(self) -> str:
        return f"<ContainerEvent.{self.name}: '{self.value}'>"


#: Events every container supports.
COLLECTION_EVENTS = frozenset({
    ContainerEvent.BEFORE_ADD,
    ContainerEvent.AFTER_ADD,
    ContainerEvent.BEFORE_REMOVE,
    ContainerEvent.AFTER_REMOVE,
})

#: Events supported by index-addressable containers.
LIST_EVENTS = COLLECTION_EVENTS | {
    ContainerEvent.BEFORE_REPLACE,
    ContainerEvent.AFTER_REPLACE,
}
