"""
Shared machinery for evented containers.

EventContainer owns the backing list, the subscriber registry and the parts
of the two-phase mutation pipeline that do not depend on positions: commit
bookkeeping, clear, bulk predicate removal, bulk append and the read
surface. Subclasses supply the single-item add and remove pipelines.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, FrozenSet, Iterable, Iterator, List, Optional

from loguru import logger

from ..core.config import ConfigLike, ContainerConfig, resolve_config
from ..core.dispatcher import EventDispatcher, Subscriber
from ..core.events import COLLECTION_EVENTS, ContainerEvent
from ..core.models import MutationResult


class EventContainer(ABC):
    """
    Abstract base class for containers that announce their mutations.

    Every structural change runs through the same pipeline: build a
    MutationRequest, offer it to the before subscribers, apply it to the
    backing list unless vetoed, then hand a MutationResult to the after
    subscribers. Bulk operations (clear, remove_all, add_range) are
    sequences of single-item runs over a snapshot taken up front, so
    handlers may add or remove items while a bulk operation is in progress.

    Thread Safety:
        NOT thread-safe. A container and its subscribers must be used from
        a single thread; handlers run synchronously inside the mutating call.
    """

    _events: FrozenSet[ContainerEvent] = COLLECTION_EVENTS

    def __init__(self, items: Optional[Iterable[Any]] = None, config: ConfigLike = None):
        """
        Initialize the container.

        Args:
            items: Initial contents, stored without raising events
            config: ContainerConfig or dict of overrides
        """
        self._config: ContainerConfig = resolve_config(config)
        self._dispatcher = EventDispatcher(self._events, self._config)
        self._items: List[Any] = list(items) if items is not None else []

    # -- subscription -----------------------------------------------------

    @property
    def config(self) -> ContainerConfig:
        return self._config

    @property
    def supported_events(self) -> FrozenSet[ContainerEvent]:
        """Events this container raises."""
        return self._dispatcher.supported_events

    def subscribe(self, event: ContainerEvent, callback: Subscriber) -> None:
        """
        Register ``callback`` for ``event``.

        Before-event callbacks receive a MutationRequest they may rewrite or
        cancel; after-event callbacks receive a frozen MutationResult.

        Raises:
            TypeError: If event is not a ContainerEvent
            ValueError: If this container does not raise ``event``
        """
        self._dispatcher.subscribe(event, callback)

    def unsubscribe(self, event: ContainerEvent, callback: Subscriber) -> None:
        self._dispatcher.unsubscribe(event, callback)

    def subscriber_count(self, event: ContainerEvent) -> int:
        return self._dispatcher.subscriber_count(event)

    def clear_subscribers(self, event: Optional[ContainerEvent] = None) -> None:
        self._dispatcher.clear_subscribers(event)

    # -- mutation ---------------------------------------------------------

    @abstractmethod
    def add(self, item: Any) -> Any:
        """Add ``item`` through the add pipeline."""

    @abstractmethod
    def _remove_value(self, item: Any) -> bool:
        """Remove one occurrence of ``item`` through the remove pipeline."""

    def remove(self, item: Any) -> bool:
        """
        Remove the first occurrence of ``item``.

        A before-remove event is raised even when ``item`` is absent.

        Returns:
            bool: True if the item was removed, False if a subscriber vetoed
                the removal or the item was not present
        """
        return self._remove_value(item)

    def add_range(self, items: Iterable[Any]) -> None:
        """
        Add each item in turn, each through the full add pipeline.

        Args:
            items: Items to add; consumed into a snapshot first, so passing
                the container itself is safe
        """
        for item in list(items):
            self.add(item)

    extend = add_range

    def clear(self) -> None:
        """
        Remove every item one at a time, in current order.

        Raises one before/after remove pair per item. Items whose removal is
        vetoed stay in the container.
        """
        # Removal handlers may mutate the container; iterate a snapshot.
        for item in list(self._items):
            self._remove_value(item)

    def remove_all(self, match: Callable[[Any], bool]) -> int:
        """
        Remove every item matching ``match``.

        Matches are decided once, before any removal starts; items added by
        handlers during the batch are never removed by it. Each match goes
        through the single-item remove pipeline in original relative order.

        Args:
            match: Predicate selecting items to remove

        Returns:
            int: Number of items left in the container after the batch
                (not the number removed)

        Raises:
            ValueError: If match is None

        Examples:
            >>> numbers = EventList(items=[1, 2, 3, 4, 5])
            >>> numbers.remove_all(lambda n: n % 2 == 0)
            3
        """
        if match is None:
            raise ValueError("match must not be None")

        targets = [item for item in self._items if match(item)]
        for item in targets:
            self._remove_value(item)

        return len(self._items)

    def _commit(self, event: ContainerEvent, result: MutationResult) -> MutationResult:
        """Log a committed mutation and notify the after subscribers."""
        if self._config.log_mutations:
            logger.debug(
                f"{self.__class__.__name__}: {result.kind} committed "
                f"(index={result.index}, count={len(self._items)})"
            )

        self._dispatcher.dispatch_after(event, result)
        return result

    # -- read surface -----------------------------------------------------

    @property
    def count(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        # Snapshot taken when iteration starts
        return iter(tuple(self._items))

    def __contains__(self, item: Any) -> bool:
        return item in self._items

    def contains(self, item: Any) -> bool:
        return item in self._items

    def to_list(self) -> List[Any]:
        """Return a copy of the current elements."""
        return list(self._items)

    def copy_to(self, target: List[Any], index: int = 0) -> None:
        """
        Copy the current elements into ``target`` starting at ``index``.

        Args:
            target: Existing list with room for every element
            index: First slot of ``target`` to write

        Raises:
            IndexError: If index is negative
            ValueError: If target has fewer than len(self) slots after index
        """
        if index < 0:
            raise IndexError(f"index must be non-negative, got {index}")

        if len(target) - index < len(self._items):
            raise ValueError(
                f"target has {len(target) - index} slot(s) after index {index}, "
                f"need {len(self._items)}"
            )

        target[index:index + len(self._items)] = self._items

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._items!r})"
