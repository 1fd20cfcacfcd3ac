"""
Ordered, index-addressable evented container.

EventList keeps insertion order and exposes positional operations (insert,
replace, remove-at, search) on top of the shared mutation pipeline. Every
positional change raises a cancelable before event and, once committed, an
after event carrying the resolved index.
"""

from typing import Any, Callable, Iterable, Optional

from ..core.config import ConfigLike
from ..core.events import ContainerEvent, LIST_EVENTS, MutationKind
from ..core.models import APPEND, MutationRequest, MutationResult
from .base import EventContainer


class EventList(EventContainer):
    """
    List that raises before/after events around every mutation.

    Subscribers to BEFORE_ADD may rewrite the item and target index of an
    insertion or cancel it; subscribers to BEFORE_REPLACE may rewrite the
    new value or cancel; subscribers to BEFORE_REMOVE may cancel. After
    events report what was actually applied.

    Indexes are strict: ``-1`` is the append sentinel, not "last element",
    and reads or writes outside ``0 <= index < len`` raise IndexError.

    Thread Safety:
        NOT thread-safe. Use from a single thread.

    Examples:
        >>> letters = EventList(items=["A", "B", "C"])
        >>> def keep_b(request):
        ...     if request.item == "B":
        ...         request.cancel = True
        >>> letters.subscribe(ContainerEvent.BEFORE_REMOVE, keep_b)
        >>> letters.remove("B")
        False
        >>> letters.remove("A")
        True
        >>> letters.to_list()
        ['B', 'C']
    """

    _events = LIST_EVENTS

    def __init__(
        self,
        capacity: int = 0,
        items: Optional[Iterable[Any]] = None,
        config: ConfigLike = None
    ):
        """
        Initialize an empty list, or one pre-filled with ``items``.

        Args:
            capacity: Initial capacity hint
            items: Initial contents, stored without raising events
            config: ContainerConfig or dict of overrides

        Raises:
            ValueError: If capacity is negative
        """
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")

        super().__init__(items, config)
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        """Capacity hint; never smaller than the current count."""
        return max(self._capacity, len(self._items))

    @capacity.setter
    def capacity(self, value: int) -> None:
        if value < len(self._items):
            raise ValueError(
                f"capacity ({value}) must not be less than count ({len(self._items)})"
            )
        self._capacity = value

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise IndexError(
                f"index {index} out of range for list of length {len(self._items)}"
            )

    # -- insertion ---------------------------------------------------------

    def _insert_item(self, index: int, item: Any, kind: MutationKind) -> Optional[int]:
        """
        Run the insert pipeline.

        Returns:
            Optional[int]: Resolved index, or None if a subscriber canceled
        """
        request = MutationRequest(kind=kind, index=index, item=item, source=self)
        if not self._dispatcher.dispatch_before(ContainerEvent.BEFORE_ADD, request):
            return None

        if request.index == APPEND:
            self._items.append(request.item)
            resolved = len(self._items) - 1
        else:
            if not 0 <= request.index <= len(self._items):
                raise IndexError(
                    f"insert index {request.index} out of range for list "
                    f"of length {len(self._items)}"
                )
            self._items.insert(request.index, request.item)
            resolved = request.index

        self._commit(
            ContainerEvent.AFTER_ADD,
            MutationResult.from_request(request, index=resolved)
        )
        return resolved

    def add(self, item: Any) -> int:
        """
        Append ``item``.

        Returns:
            int: Index the item was stored at, or 0 if the insertion was
                canceled
        """
        resolved = self._insert_item(APPEND, item, MutationKind.ADD)
        return 0 if resolved is None else resolved

    append = add

    def insert(self, index: int, item: Any) -> int:
        """
        Insert ``item`` at ``index`` (``-1`` appends).

        Subscribers may move the insertion point by rewriting
        ``request.index``; the final index is bounds-checked when the item
        is stored.

        Returns:
            int: Index the item was stored at, or 0 if the insertion was
                canceled

        Raises:
            IndexError: If the final index is outside ``0..len``
        """
        resolved = self._insert_item(index, item, MutationKind.INSERT)
        return 0 if resolved is None else resolved

    def insert_range(self, index: int, items: Iterable[Any]) -> None:
        """
        Insert ``items`` in order starting at ``index``.

        Each item goes through the insert pipeline. The insertion point only
        advances past items that were actually inserted, so vetoed items
        leave no gap. With ``index`` set to ``APPEND`` every item is
        appended.
        """
        offset = 0
        for item in list(items):
            target = APPEND if index == APPEND else index + offset
            if self._insert_item(target, item, MutationKind.INSERT) is not None:
                offset += 1

    # -- replacement -------------------------------------------------------

    def __getitem__(self, index: int) -> Any:
        self._check_index(index)
        return self._items[index]

    def __setitem__(self, index: int, item: Any) -> None:
        self.replace(index, item)

    def replace(self, index: int, item: Any) -> bool:
        """
        Overwrite the slot at ``index`` with ``item``.

        Returns:
            bool: True if the slot was overwritten, False if canceled

        Raises:
            IndexError: If index is out of range
        """
        old_item = self[index]
        request = MutationRequest(
            kind=MutationKind.REPLACE,
            index=index,
            item=item,
            old_item=old_item,
            source=self,
        )
        if not self._dispatcher.dispatch_before(ContainerEvent.BEFORE_REPLACE, request):
            return False

        # Handlers may have shrunk the list
        self._check_index(index)
        self._items[index] = request.item

        self._commit(
            ContainerEvent.AFTER_REPLACE,
            MutationResult(
                kind=MutationKind.REPLACE,
                index=index,
                item=request.item,
                old_item=old_item,
                source=self,
            )
        )
        return True

    # -- removal -----------------------------------------------------------

    def _remove_item(self, index: int, item: Any, present: bool) -> bool:
        """
        Run the remove pipeline for ``item`` last seen at ``index``.

        The before event fires unconditionally. The store removal prefers
        the slot at ``index`` and falls back to the first equal item when
        handlers have shifted the list in the meantime.
        """
        request = MutationRequest(
            kind=MutationKind.REMOVE,
            index=index,
            item=item,
            source=self,
        )
        if not self._dispatcher.dispatch_before(ContainerEvent.BEFORE_REMOVE, request):
            return False

        if not present:
            return False

        removed_at = self._store_remove(index, item)
        if removed_at is None:
            return False

        self._commit(
            ContainerEvent.AFTER_REMOVE,
            MutationResult(
                kind=MutationKind.REMOVE,
                index=removed_at,
                item=item,
                source=self,
            )
        )
        return True

    def _store_remove(self, index: int, item: Any) -> Optional[int]:
        if 0 <= index < len(self._items):
            current = self._items[index]
            if current is item or current == item:
                del self._items[index]
                return index

        try:
            actual = self._items.index(item)
        except ValueError:
            return None

        del self._items[actual]
        return actual

    def _remove_value(self, item: Any) -> bool:
        return self._remove_item(self.index_of(item), item, present=True)

    def remove_at(self, index: int) -> bool:
        """
        Remove the item at ``index``.

        An out-of-range index still raises a before-remove event (with item
        None) and then reports failure.

        Returns:
            bool: True if an item was removed
        """
        present = 0 <= index < len(self._items)
        item = self._items[index] if present else None
        return self._remove_item(index, item, present)

    # -- search ------------------------------------------------------------

    def index_of(self, item: Any) -> int:
        """Return the index of the first occurrence of ``item``, or -1."""
        try:
            return self._items.index(item)
        except ValueError:
            return -1

    def find_index(
        self,
        match: Callable[[Any], bool],
        start: int = 0,
        count: Optional[int] = None
    ) -> int:
        """
        Search forward for the first item matching ``match``.

        Args:
            match: Predicate to test items with
            start: First index of the search window (0..len inclusive)
            count: Window length; defaults to the rest of the list

        Returns:
            int: Index of the first match inside the window, or -1

        Raises:
            ValueError: If match is None
            IndexError: If the window falls outside the list
        """
        if match is None:
            raise ValueError("match must not be None")

        size = len(self._items)
        if not 0 <= start <= size:
            raise IndexError(f"start index {start} out of range for list of length {size}")

        if count is None:
            count = size - start
        if count < 0 or start + count > size:
            raise IndexError(
                f"count {count} from start {start} exceeds list of length {size}"
            )

        for offset, item in enumerate(self._items[start:start + count]):
            if match(item):
                return start + offset
        return -1

    def find_last_index(
        self,
        match: Callable[[Any], bool],
        start: Optional[int] = None,
        count: Optional[int] = None
    ) -> int:
        """
        Search backward for the last item matching ``match``.

        The window covers ``count`` items ending at ``start`` (inclusive),
        walking toward the front of the list.

        Args:
            match: Predicate to test items with
            start: Index the backward search begins at; defaults to the
                last index (-1 for an empty list)
            count: Window length; defaults to ``start + 1``

        Returns:
            int: Index of the last match inside the window, or -1

        Raises:
            ValueError: If match is None
            IndexError: If the window falls outside the list
        """
        if match is None:
            raise ValueError("match must not be None")

        size = len(self._items)
        if start is None:
            start = size - 1

        if size == 0:
            if start != -1:
                raise IndexError(f"start index {start} out of range for empty list")
        elif not 0 <= start < size:
            raise IndexError(f"start index {start} out of range for list of length {size}")

        if count is None:
            count = start + 1
        if count < 0 or start - count + 1 < 0:
            raise IndexError(
                f"count {count} from start {start} runs past the front of the list"
            )

        items = list(self._items)
        for index in range(start, start - count, -1):
            if match(items[index]):
                return index
        return -1
