"""Provider-independent cleanup engine.

Classes:
    Leftovers: Two-phase orchestrator (enumerate all, then delete each)
    ResourceKind: Template for one top-level resource kind
    CompositeResourceKind: Kind that cleans up scoped children before itself
    ScopedResourceKind: Child kind listed by its parent's identifier
    Confirmation: Gate consulted before a resource is queued for deletion
"""

from __future__ import annotations

from .confirmation import AutoApprove, Confirmation, InteractiveConfirmation, build_confirmation
from .kind import CompositeResourceKind, ResourceKind, ScopedResourceKind, matches_filter
from .orchestrator import Leftovers

__all__ = [
    "Leftovers",
    "ResourceKind",
    "CompositeResourceKind",
    "ScopedResourceKind",
    "Confirmation",
    "InteractiveConfirmation",
    "AutoApprove",
    "build_confirmation",
    "matches_filter",
]
