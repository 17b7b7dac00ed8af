"""Deletable resource handle.

A single listed, confirmed resource awaiting deletion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class Deletable:
    """Handle for one concrete cloud resource.

    Handles are produced by a resource kind during listing and consumed once by
    the orchestrator's deletion phase. They carry no state beyond what is needed
    to issue the delete call.

    Attributes:
        identifier: Provider-assigned ID or name used in API calls
        name: Display name shown to the operator (never empty)
        kind: Singular kind label (e.g. "instance", "url map")
        deleter: Callable issuing the provider delete call(s); raises
            DeletionError on failure
    """

    identifier: str
    name: str
    kind: str
    deleter: Callable[[], None] = field(repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError(f"{self.kind} {self.identifier!r} has an empty display name")

    def delete(self) -> None:
        """Delete the resource.

        Raises:
            DeletionError: If the provider rejects the deletion
        """
        self.deleter()
