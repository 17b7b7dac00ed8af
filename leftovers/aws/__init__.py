"""AWS provider: session factory and resource kinds."""

from __future__ import annotations

from .leftovers import AWS_KINDS, new_leftovers

__all__ = ["AWS_KINDS", "new_leftovers"]
