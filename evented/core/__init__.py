"""
Core module for the event-mediated mutation protocol.

This module provides the foundational components shared by every container:
- ContainerEvent / MutationKind: What subscribers register for
- MutationRequest / MutationResult: Before and after payloads
- EventDispatcher: Ordered subscriber lists with early-exit cancellation
- ContainerConfig: Behaviour switches, loadable from YAML
- CollectionObserver / ObserverGroup: Reusable subscriber lifecycle
"""

from .config import ContainerConfig, load_config, resolve_config
from .dispatcher import EventDispatcher
from .events import COLLECTION_EVENTS, LIST_EVENTS, ContainerEvent, MutationKind
from .models import APPEND, MutationRequest, MutationResult
from .observer import CollectionObserver, ObserverGroup

__all__ = [
    "APPEND",
    "COLLECTION_EVENTS",
    "CollectionObserver",
    "ContainerConfig",
    "ContainerEvent",
    "EventDispatcher",
    "LIST_EVENTS",
    "MutationKind",
    "MutationRequest",
    "MutationResult",
    "ObserverGroup",
    "load_config",
    "resolve_config",
]
