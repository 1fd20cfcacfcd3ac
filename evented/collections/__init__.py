"""
Evented containers.

- EventList: Ordered, index-addressable
- EventCollection: Unordered, value-addressable
"""

from .base import EventContainer
from .event_collection import EventCollection
from .event_list import EventList

__all__ = [
    "EventCollection",
    "EventContainer",
    "EventList",
]
