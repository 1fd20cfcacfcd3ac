"""
Mutation request and result models.

This module defines the payloads passed to container subscribers:
- MutationRequest: Mutable proposal handed to "before" subscribers
- MutationResult: Immutable record handed to "after" subscribers

Both are created by a container immediately before dispatch and dropped once
the subscribers of that phase have run. Containers never retain them.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field

from .events import MutationKind

APPEND = -1
"""Index sentinel meaning "append at the end" (or "unknown" for removals)."""


class MutationRequest(BaseModel):
    """
    Mutable proposal for a structural change.

    The same request instance is passed to every "before" subscriber in
    registration order. Subscribers may rewrite ``item`` (and ``index`` for
    insertions) and may set ``cancel``; the container reads the final values
    back once the before phase is over. Dispatch stops at the first
    subscriber that sets ``cancel``.

    Attributes:
        kind: What the container is about to do
        index: Target index, or ``APPEND`` (-1) when unspecified/unknown
        item: Item to store (add/insert/replace) or item to remove
        old_item: Item currently in the slot (replace only)
        cancel: Veto flag owned by subscribers
        source: Container raising the event

    Examples:
        >>> request = MutationRequest(kind=MutationKind.INSERT, item="a")
        >>> request.index
        -1
        >>> request.cancel = True
        >>> request.cancel
        True
    """

    model_config = {"validate_assignment": True, "arbitrary_types_allowed": True}

    kind: MutationKind = Field(
        description="Kind of mutation being proposed"
    )
    index: int = Field(
        default=APPEND,
        description="Target index or the append sentinel"
    )
    item: Any = Field(
        default=None,
        description="New item for add/insert/replace, target item for remove"
    )
    old_item: Any = Field(
        default=None,
        description="Current slot value for replace"
    )
    cancel: bool = Field(
        default=False,
        description="Set by a subscriber to veto the mutation"
    )
    source: Any = Field(
        default=None,
        exclude=True,
        repr=False,
        description="Container raising the event"
    )

    @property
    def new_item(self) -> Any:
        """Alias of ``item`` for replace requests."""
        return self.item


class MutationResult(BaseModel):
    """
    Immutable record of a committed structural change.

    Carries the values that were actually applied: the resolved insertion
    index when the request used the append sentinel, and the item as
    rewritten by "before" subscribers.

    Examples:
        >>> request = MutationRequest(kind=MutationKind.ADD, item="a")
        >>> result = MutationResult.from_request(request, index=3)
        >>> (result.index, result.item)
        (3, 'a')
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    kind: MutationKind = Field(
        description="Kind of mutation that was committed"
    )
    index: int = Field(
        default=APPEND,
        description="Resolved index (-1 for containers without positions)"
    )
    item: Any = Field(
        default=None,
        description="Item stored (add/insert/replace) or removed"
    )
    old_item: Any = Field(
        default=None,
        description="Previous slot value for replace"
    )
    source: Any = Field(
        default=None,
        exclude=True,
        repr=False,
        description="Container that raised the event"
    )

    @property
    def new_item(self) -> Any:
        """Alias of ``item`` for replace results."""
        return self.item

    @classmethod
    def from_request(
        cls,
        request: MutationRequest,
        index: Optional[int] = None
    ) -> "MutationResult":
        """
        Build a result from a request that survived the before phase.

        Args:
            request: The request after all before subscribers ran
            index: Resolved index; defaults to ``request.index``

        Returns:
            MutationResult: Frozen copy of the request's final values
        """
        return cls(
            kind=request.kind,
            index=request.index if index is None else index,
            item=request.item,
            old_item=request.old_item,
            source=request.source,
        )
