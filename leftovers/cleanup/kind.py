"""Resource kind handlers.

Every provider resource kind (networks, security groups, buckets, ...) is a
small subclass of one of the handlers below. A subclass supplies only:

* ``kind`` / ``plural``: labels used in prompts and error messages
* ``_list_items``: the provider enumeration call
* ``_identifier`` and optionally ``_display_name``: how an item is named
* ``_delete``: the provider delete call(s)
* optionally ``_is_deletable``: a provider check run only on filter matches

Listing, name filtering, confirmation, error wrapping and handle construction
live here so the per-kind modules stay declarative.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional, Sequence

from ..errors import CleanupCancelled, DeletionError, ListingError
from ..models.deletable import Deletable
from .confirmation import Confirmation

LOGGER_NAME = "leftovers"


class BaseKind(ABC):
    """Shared plumbing for top-level and scoped resource kinds.

    Attributes:
        client: Provider client, shared read-only across kinds
        logger: Sink for semantic output lines
    """

    kind: str = ""
    plural: str = ""

    # Exceptions raised by the provider SDK; anything else is a bug and propagates.
    provider_errors: tuple[type[BaseException], ...] = ()

    def __init__(self, client: Any, logger: Optional[logging.Logger] = None) -> None:
        self.client = client
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.plural!r})"

    @abstractmethod
    def _identifier(self, item: Any) -> str:
        """Return the provider identifier used to delete ``item``."""

    def _display_name(self, item: Any) -> str:
        return self._identifier(item)

    @abstractmethod
    def _delete(self, item: Any) -> None:
        """Issue the provider delete call(s) for ``item``."""

    def _before_delete(self, identifier: str) -> None:
        """Hook run before the resource's own delete call."""

    def _listing_error(self, error: BaseException) -> ListingError:
        return ListingError(f"Listing {self.plural}: {error}")

    def _wrap(self, item: Any, name: str) -> Deletable:
        identifier = self._identifier(item)

        def deleter() -> None:
            self._before_delete(identifier)
            try:
                self._delete(item)
            except self.provider_errors as e:
                raise DeletionError(f"ERROR deleting {self.kind} {name}: {e}") from e

        return Deletable(identifier=identifier, name=name, kind=self.kind, deleter=deleter)


class ResourceKind(BaseKind):
    """Top-level resource kind registered with the orchestrator.

    Listing applies the operator's name filter and asks the confirmation gate
    about every match.
    """

    def __init__(
        self,
        client: Any,
        confirmation: Confirmation,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(client, logger)
        self.confirmation = confirmation

    @abstractmethod
    def _list_items(self) -> Iterable[Any]:
        """Enumerate every deletable item of this kind from the provider."""

    def _is_deletable(self, item: Any) -> bool:
        """Final provider-side check for an item that passed the name filter."""
        return True

    def list(self, name_filter: str, cancel: Optional[threading.Event] = None) -> list[Deletable]:
        """List, filter, and confirm resources of this kind.

        Args:
            name_filter: Substring the display name must contain ("" matches all)
            cancel: Optional event checked before each item

        Returns:
            Handles the operator approved for deletion

        Raises:
            ListingError: If any provider call fails; partial results are dropped
            CleanupCancelled: If ``cancel`` is set while listing
        """
        deletables = []

        try:
            for item in self._list_items():
                if cancel is not None and cancel.is_set():
                    raise CleanupCancelled(f"Cancelled while listing {self.plural}")

                name = self._display_name(item)
                if not matches_filter(name, name_filter):
                    continue

                if not self._is_deletable(item):
                    continue

                if not self.confirmation.confirm(f"Are you sure you want to delete {self.kind} {name}?"):
                    continue

                deletables.append(self._wrap(item, name))
        except self.provider_errors as e:
            raise self._listing_error(e) from e

        return deletables


class ScopedResourceKind(BaseKind):
    """Child resource kind listed by its parent's identifier.

    Scoped kinds never see the operator's filter and never prompt; the parent
    resource was already confirmed.
    """

    @abstractmethod
    def _list_scoped_items(self, parent_id: str) -> Iterable[Any]:
        """Enumerate the items belonging to ``parent_id``."""

    def list_scoped(self, parent_id: str) -> list[Deletable]:
        """List the children of one parent resource.

        Raises:
            ListingError: If any provider call fails
        """
        try:
            return [self._wrap(item, self._display_name(item)) for item in self._list_scoped_items(parent_id)]
        except self.provider_errors as e:
            raise self._listing_error(e) from e


class CompositeResourceKind(ResourceKind):
    """Resource kind whose deletion first tears down scoped children.

    Child failures are logged on their own lines and never stop the parent
    deletion from being attempted.

    Attributes:
        child_kinds: Scoped kinds built against the same client when no
            children are passed in, cleaned up in this order
    """

    child_kinds: tuple[type[ScopedResourceKind], ...] = ()

    def __init__(
        self,
        client: Any,
        confirmation: Confirmation,
        children: Optional[Sequence[ScopedResourceKind]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(client, confirmation, logger)
        if children is None:
            children = [child_kind(client, self.logger) for child_kind in self.child_kinds]
        self.children = list(children)

    def _before_delete(self, identifier: str) -> None:
        for child in self.children:
            try:
                handles = child.list_scoped(identifier)
            except ListingError as e:
                self.logger.error(str(e))
                continue

            for handle in handles:
                try:
                    handle.delete()
                except DeletionError as e:
                    self.logger.error(str(e))
                    continue
                self.logger.info(f"SUCCESS deleting {handle.name}")


def matches_filter(name: str, name_filter: str) -> bool:
    """Case-sensitive substring match; an empty filter matches everything."""
    return not name_filter or name_filter in name
