"""
Validation observers.

Guards hook the before-add and before-replace events of a container and
either reject an incoming item by raising, or veto it by setting
``request.cancel``. Raising aborts the mutating call; canceling makes it a
quiet no-op.
"""

from abc import abstractmethod
from typing import Any, Callable, Optional, Tuple

from loguru import logger

from ..core.events import ContainerEvent, MutationKind
from ..core.models import MutationRequest
from ..core.observer import CollectionObserver


class ItemGuard(CollectionObserver):
    """
    Base class for observers that inspect items before they are stored.

    Subscribes ``check`` to BEFORE_ADD and, on containers that support it,
    BEFORE_REPLACE.
    """

    def _guarded_events(self):
        events = [ContainerEvent.BEFORE_ADD]
        if ContainerEvent.BEFORE_REPLACE in self.container.supported_events:
            events.append(ContainerEvent.BEFORE_REPLACE)
        return events

    def _register_handlers(self) -> None:
        for event in self._guarded_events():
            self.container.subscribe(event, self.check)

    def _unregister_handlers(self) -> None:
        for event in self._guarded_events():
            self.container.unsubscribe(event, self.check)

    @abstractmethod
    def check(self, request: MutationRequest) -> None:
        """Inspect ``request.item``; raise or cancel to reject it."""


class NotNoneGuard(ItemGuard):
    """
    Rejects None items.

    Examples:
        >>> frames = EventCollection()
        >>> guard = NotNoneGuard().attach(frames)
        >>> frames.add(None)
        Traceback (most recent call last):
        ...
        ValueError: EventCollection does not accept None items
    """

    def check(self, request: MutationRequest) -> None:
        if request.item is None:
            raise ValueError(
                f"{request.source.__class__.__name__} does not accept None items"
            )


class TypeGuard(ItemGuard):
    """
    Rejects items that are not instances of the allowed types.

    Args:
        *types: Accepted types, as for isinstance()

    Raises:
        ValueError: If no type is given
    """

    def __init__(self, *types: type):
        super().__init__()
        if not types:
            raise ValueError("TypeGuard needs at least one type")
        self._types: Tuple[type, ...] = types

    @property
    def types(self) -> Tuple[type, ...]:
        return self._types

    def check(self, request: MutationRequest) -> None:
        if not isinstance(request.item, self._types):
            expected = ", ".join(t.__name__ for t in self._types)
            raise TypeError(
                f"item must be {expected}, got {type(request.item).__name__}"
            )


class UniqueGuard(ItemGuard):
    """
    Cancels insertions and replacements that would duplicate an item.

    Two items are duplicates when ``key(a) == key(b)``; without a key the
    items themselves are compared. When replacing, the slot being
    overwritten is not counted as a duplicate.

    Args:
        key: Optional function mapping an item to its identity

    Examples:
        >>> points = EventList()
        >>> guard = UniqueGuard(key=lambda p: p["sample"]).attach(points)
        >>> points.add({"sample": 10})
        0
        >>> points.add({"sample": 10})
        0
        >>> len(points)
        1
    """

    def __init__(self, key: Optional[Callable[[Any], Any]] = None):
        super().__init__()
        self._key = key or (lambda item: item)

    def check(self, request: MutationRequest) -> None:
        candidate = self._key(request.item)
        for index, existing in enumerate(self.container):
            if request.kind is MutationKind.REPLACE and index == request.index:
                continue
            if self._key(existing) == candidate:
                logger.debug(f"Duplicate item rejected: {request.item!r}")
                request.cancel = True
                return
