"""GCP provider: Compute Engine client and resource kinds."""

from __future__ import annotations

from .leftovers import GCP_KINDS, new_leftovers

__all__ = ["GCP_KINDS", "new_leftovers"]
