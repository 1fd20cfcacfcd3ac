"""
Synchronous event dispatcher for evented containers.

Each container owns one EventDispatcher holding its subscriber lists. The
dispatcher delivers requests to "before" subscribers with early-exit
cancellation and results to "after" subscribers unconditionally, always in
registration order and always in-line with the mutating call.
"""

from typing import Callable, Dict, FrozenSet, List, Optional, Union

from loguru import logger

from .config import ContainerConfig
from .events import ContainerEvent, LIST_EVENTS
from .models import MutationRequest, MutationResult

Subscriber = Callable[[Union[MutationRequest, MutationResult]], None]


def _callback_name(callback: Callable) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)


class EventDispatcher:
    """
    Per-container publish-subscribe registry.

    Features:
        - Subscription keyed by ContainerEvent
        - Multiple subscribers per event, invoked in registration order
        - First-canceler-wins dispatch for before events
        - Subscriber list snapshot per dispatch, so handlers may subscribe
          or unsubscribe without disturbing the dispatch in progress

    Thread Safety:
        NOT thread-safe. A dispatcher belongs to a single container and is
        meant to be used from a single thread.

    Examples:
        >>> dispatcher = EventDispatcher()
        >>> def veto(request):
        ...     request.cancel = True
        >>> dispatcher.subscribe(ContainerEvent.BEFORE_ADD, veto)
        >>> request = MutationRequest(kind=MutationKind.ADD, item=1)
        >>> dispatcher.dispatch_before(ContainerEvent.BEFORE_ADD, request)
        False
    """

    def __init__(
        self,
        supported_events: FrozenSet[ContainerEvent] = LIST_EVENTS,
        config: Optional[ContainerConfig] = None
    ):
        """
        Initialize the dispatcher with empty subscriber lists.

        Args:
            supported_events: Events that may be subscribed to
            config: Behaviour switches; defaults to ContainerConfig()
        """
        self._supported = frozenset(supported_events)
        self._config = config or ContainerConfig()
        self._subscribers: Dict[ContainerEvent, List[Subscriber]] = {
            event: [] for event in ContainerEvent if event in self._supported
        }

    @property
    def supported_events(self) -> FrozenSet[ContainerEvent]:
        return self._supported

    def _check_event(self, event: ContainerEvent) -> None:
        if not isinstance(event, ContainerEvent):
            raise TypeError(f"event must be ContainerEvent enum, got {type(event)}")

        if event not in self._supported:
            raise ValueError(f"{event} is not supported by this container")

    def subscribe(self, event: ContainerEvent, callback: Subscriber) -> None:
        """
        Subscribe to a container event.

        Args:
            event (ContainerEvent): The event to subscribe to
            callback (Callable): Function called with the MutationRequest
                (before events) or MutationResult (after events)

        Raises:
            TypeError: If event is not a ContainerEvent or callback is not callable
            ValueError: If the container does not raise this event
        """
        self._check_event(event)

        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")

        handlers = self._subscribers[event]
        if self._config.dedupe_subscribers and callback in handlers:
            return

        handlers.append(callback)

    def unsubscribe(self, event: ContainerEvent, callback: Subscriber) -> None:
        """
        Unsubscribe a callback from a container event.

        Removes the earliest registration of ``callback``; unknown callbacks
        are ignored.
        """
        self._check_event(event)

        if callback in self._subscribers[event]:
            self._subscribers[event].remove(callback)

    def subscriber_count(self, event: ContainerEvent) -> int:
        """
        Get the number of subscribers for an event.

        Returns:
            int: Number of registered subscribers
        """
        self._check_event(event)
        return len(self._subscribers[event])

    def clear_subscribers(self, event: Optional[ContainerEvent] = None) -> None:
        """
        Clear subscribers for a specific event or for all events.

        Args:
            event (ContainerEvent, optional): Event to clear.
                If None, clears all subscribers.
        """
        if event is None:
            for handlers in self._subscribers.values():
                handlers.clear()
        else:
            self._check_event(event)
            self._subscribers[event].clear()

    def dispatch_before(self, event: ContainerEvent, request: MutationRequest) -> bool:
        """
        Offer a mutation request to the before subscribers of ``event``.

        Subscribers run in registration order and all see the same request
        instance. Dispatch stops right after the first subscriber that sets
        ``request.cancel``.

        Args:
            event (ContainerEvent): A before event
            request (MutationRequest): The proposal subscribers may rewrite

        Returns:
            bool: True if the mutation may proceed, False if it was vetoed
        """
        handlers = list(self._subscribers[event])

        if handlers:
            logger.debug(f"Dispatching {event.value} to {len(handlers)} handler(s)")

        for callback in handlers:
            self._invoke(event, callback, request)
            if request.cancel:
                logger.debug(
                    f"{event.value} canceled by {_callback_name(callback)} "
                    f"(index={request.index})"
                )
                return False

        return True

    def dispatch_after(self, event: ContainerEvent, result: MutationResult) -> None:
        """
        Notify the after subscribers of ``event`` of a committed mutation.

        Args:
            event (ContainerEvent): An after event
            result (MutationResult): Immutable record of the change
        """
        handlers = list(self._subscribers[event])

        if handlers:
            logger.debug(f"Dispatching {event.value} to {len(handlers)} handler(s)")

        for callback in handlers:
            self._invoke(event, callback, result)

    def _invoke(
        self,
        event: ContainerEvent,
        callback: Subscriber,
        payload: Union[MutationRequest, MutationResult]
    ) -> None:
        if not self._config.suppress_subscriber_errors:
            callback(payload)
            return

        try:
            callback(payload)
        except Exception:
            # Log error but don't break other subscribers
            logger.exception(
                f"Error in subscriber {_callback_name(callback)} for {event.value}"
            )
