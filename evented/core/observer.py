"""
Observer infrastructure for evented containers.

This module provides the base infrastructure for reusable subscribers:
- CollectionObserver: Abstract base class bundling related handlers
- ObserverGroup: Attaches several observers to one container as a unit

An observer registers all of its handlers when attached and removes them
when detached, so a container never ends up with half an observer wired in.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from loguru import logger


class CollectionObserver(ABC):
    """
    Abstract base class for container observers.

    The observer lifecycle follows this pattern:
    1. Construction with observer-specific settings
    2. attach(container) - runs _on_attach, then registers handlers
    3. Handlers run synchronously inside the container's mutating calls
    4. detach() - unregisters handlers, then runs _on_detach

    attach() and detach() are idempotent. An observer serves one container
    at a time.

    Examples:
        >>> class Printer(CollectionObserver):
        ...     def _register_handlers(self):
        ...         self.container.subscribe(ContainerEvent.AFTER_ADD, self._on_added)
        ...
        ...     def _unregister_handlers(self):
        ...         self.container.unsubscribe(ContainerEvent.AFTER_ADD, self._on_added)
        ...
        ...     def _on_added(self, result):
        ...         print(f"added {result.item!r} at {result.index}")
        >>>
        >>> numbers = EventList()
        >>> printer = Printer().attach(numbers)
        >>> numbers.add(7)
        added 7 at 0
        0
    """

    def __init__(self):
        self._container: Optional[Any] = None

    @property
    def container(self) -> Optional[Any]:
        """Container this observer is attached to, or None."""
        return self._container

    @property
    def is_attached(self) -> bool:
        return self._container is not None

    def attach(self, container: Any) -> "CollectionObserver":
        """
        Attach the observer to ``container`` and register its handlers.

        Args:
            container: EventList or EventCollection to observe

        Returns:
            CollectionObserver: self, for chaining

        Raises:
            RuntimeError: If already attached to a different container
        """
        if self._container is container:
            logger.debug(f"{self.__class__.__name__} already attached")
            return self

        if self._container is not None:
            raise RuntimeError(
                f"{self.__class__.__name__} is already attached to "
                f"{self._container.__class__.__name__}; detach it first"
            )

        self._container = container
        try:
            self._on_attach()
            self._register_handlers()
        except Exception as e:
            logger.error(f"Failed to attach {self.__class__.__name__}: {e}")
            self._container = None
            raise

        logger.info(
            f"{self.__class__.__name__} attached to {container.__class__.__name__}"
        )
        return self

    def detach(self) -> None:
        """
        Unregister the observer's handlers and release the container.

        The observer is marked detached even if cleanup fails.
        """
        if self._container is None:
            logger.debug(f"{self.__class__.__name__} already detached")
            return

        try:
            self._unregister_handlers()
            self._on_detach()
            logger.info(f"{self.__class__.__name__} detached")
        except Exception as e:
            logger.error(f"Error while detaching {self.__class__.__name__}: {e}")
        finally:
            self._container = None

    @abstractmethod
    def _register_handlers(self) -> None:
        """
        Subscribe handlers on ``self.container``.

        Called by attach() after _on_attach().
        """

    @abstractmethod
    def _unregister_handlers(self) -> None:
        """
        Unsubscribe the handlers registered in _register_handlers().

        Called by detach() before _on_detach().
        """

    def _on_attach(self) -> None:
        """Hook run before handler registration. Default does nothing."""

    def _on_detach(self) -> None:
        """Hook run after handler removal. Default does nothing."""


class ObserverGroup:
    """
    Attaches several observers to one container as a coordinated unit.

    - Observers attach in registration order, so their before handlers run
      in that order
    - Observers detach in reverse order
    - A failing observer is logged and does not stop the others

    Examples:
        >>> group = ObserverGroup()
        >>> group.register(NotNoneGuard())
        >>> group.register(MutationJournal(maxlen=50))
        >>> group.attach_all(frames)
        >>> group.attached_count
        2
        >>> group.detach_all()
    """

    def __init__(self):
        self._observers: List[CollectionObserver] = []

    def register(self, observer: CollectionObserver) -> None:
        """Add ``observer`` to the group."""
        self._observers.append(observer)
        logger.debug(
            f"Registered {observer.__class__.__name__} "
            f"({len(self._observers)} total observers)"
        )

    def attach_all(self, container: Any) -> None:
        """
        Attach every registered observer to ``container`` in order.

        Raises:
            RuntimeError: If every observer failed to attach
        """
        failed_count = 0
        for observer in self._observers:
            try:
                observer.attach(container)
            except Exception as e:
                logger.error(f"Failed to attach {observer.__class__.__name__}: {e}")
                failed_count += 1

        if self._observers and failed_count == len(self._observers):
            raise RuntimeError("All observers failed to attach")
        elif failed_count > 0:
            logger.warning(
                f"{failed_count} of {len(self._observers)} observers failed to attach"
            )

    def detach_all(self) -> None:
        """Detach every observer, last registered first."""
        for observer in reversed(self._observers):
            observer.detach()

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    @property
    def attached_count(self) -> int:
        return sum(1 for o in self._observers if o.is_attached)
