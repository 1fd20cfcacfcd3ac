"""
evented - Observable containers with cancelable mutation events

This package provides list and collection types that raise a cancelable
"before" event and an informational "after" event around every structural
change, so subscribers can veto, rewrite or observe mutations without
subclassing the container.

Modules:
    core: Event kinds, mutation payloads, dispatcher, config and observer base
    collections: EventList (ordered) and EventCollection (unordered)
    observers: Stock guards and the mutation journal
"""

from .collections import EventCollection, EventList
from .core import (
    APPEND,
    CollectionObserver,
    ContainerConfig,
    ContainerEvent,
    MutationKind,
    MutationRequest,
    MutationResult,
    ObserverGroup,
    load_config,
)
from .observers import MutationJournal, NotNoneGuard, TypeGuard, UniqueGuard

__version__ = "0.1.0"

__all__ = [
    "APPEND",
    "CollectionObserver",
    "ContainerConfig",
    "ContainerEvent",
    "EventCollection",
    "EventList",
    "MutationJournal",
    "MutationKind",
    "MutationRequest",
    "MutationResult",
    "NotNoneGuard",
    "ObserverGroup",
    "TypeGuard",
    "UniqueGuard",
    "load_config",
]
