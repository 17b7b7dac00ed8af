"""Exception hierarchy shared by the cleanup engine and providers."""

from __future__ import annotations


class LeftoversError(Exception):
    """Base class for all leftovers errors."""


class CredentialValidationError(LeftoversError):
    """Raised when provider credentials are missing or invalid.

    Always raised while constructing a provider session, before any
    resource is listed.
    """


class ListingError(LeftoversError):
    """Raised when a resource kind fails to enumerate its resources.

    The message is prefixed with the plural kind label, e.g.
    ``"Listing url maps: some error"``.
    """


class DeletionError(LeftoversError):
    """Raised when a single resource fails to delete."""


class CleanupCancelled(LeftoversError):
    """Raised when the operator interrupts the enumeration phase."""
