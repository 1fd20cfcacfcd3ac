"""
Stock observers for evented containers.
"""

from .guards import ItemGuard, NotNoneGuard, TypeGuard, UniqueGuard
from .journal import MutationJournal

__all__ = [
    "ItemGuard",
    "MutationJournal",
    "NotNoneGuard",
    "TypeGuard",
    "UniqueGuard",
]
