"""
Mutation journal.

MutationJournal records the MutationResult of every committed change on the
container it is attached to, in a bounded deque. Canceled and failed
mutations never reach it, since after events only fire on commit.
"""

from collections import deque
from typing import Deque, List, Optional

from ..core.events import ContainerEvent, MutationKind
from ..core.models import MutationResult
from ..core.observer import CollectionObserver


class MutationJournal(CollectionObserver):
    """
    Bounded history of committed mutations.

    When ``maxlen`` entries are held, the oldest entry is dropped (FIFO).
    Entries survive detach(); use clear() to empty the journal.

    Attributes:
        entries: Deque of MutationResult, oldest first

    Examples:
        >>> numbers = EventList()
        >>> journal = MutationJournal(maxlen=10).attach(numbers)
        >>> numbers.add(1)
        0
        >>> numbers.remove(1)
        True
        >>> [str(r.kind) for r in journal.entries]
        ['ADD', 'REMOVE']
    """

    def __init__(self, maxlen: int = 500):
        """
        Initialize an empty journal.

        Args:
            maxlen: Maximum number of results to retain

        Raises:
            ValueError: If maxlen is not positive
        """
        super().__init__()
        if maxlen <= 0:
            raise ValueError(f"maxlen must be positive, got {maxlen}")

        self.entries: Deque[MutationResult] = deque(maxlen=maxlen)

    def _after_events(self) -> List[ContainerEvent]:
        return [
            event for event in ContainerEvent
            if not event.is_before and event in self.container.supported_events
        ]

    def _register_handlers(self) -> None:
        for event in self._after_events():
            self.container.subscribe(event, self._record)

    def _unregister_handlers(self) -> None:
        for event in self._after_events():
            self.container.unsubscribe(event, self._record)

    def _record(self, result: MutationResult) -> None:
        self.entries.append(result)

    def results(self, kind: Optional[MutationKind] = None) -> List[MutationResult]:
        """
        Get recorded results, optionally filtered by kind.

        Args:
            kind: Only return results of this kind; None returns all

        Returns:
            List of MutationResult, oldest first
        """
        if kind is not None:
            return [r for r in self.entries if r.kind is kind]

        return list(self.entries)

    def clear(self) -> None:
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)
