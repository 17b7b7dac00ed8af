"""Cleanup orchestrator.

Runs the two-phase delete protocol over an ordered list of resource kinds.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional, Sequence

from ..errors import CleanupCancelled, DeletionError
from ..models.deletable import Deletable
from ..models.outcome import CleanupReport
from .kind import LOGGER_NAME, ResourceKind


class Leftovers:
    """Cleanup orchestrator.

    Holds the resource kinds in a fixed, hand-curated order that encodes the
    provider's deletion constraints (policies before principals, attachments
    before networks, instances before the security groups they use). The order
    is never inferred at runtime.

    Enumeration is all-or-nothing: the first listing error aborts the run
    before anything is deleted. Deletion is best-effort: every handle is
    attempted and failures are logged, never raised.

    Attributes:
        resources: Resource kinds in registration order
        logger: Sink for success and failure lines
    """

    def __init__(self, resources: Sequence[ResourceKind], logger: Optional[logging.Logger] = None) -> None:
        self.resources = list(resources)
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def delete(self, name_filter: str = "", cancel: Optional[threading.Event] = None) -> CleanupReport:
        """List every kind, then delete everything that was listed.

        Args:
            name_filter: Substring a resource's display name must contain
            cancel: Optional event checked before each kind, item, and deletion

        Returns:
            CleanupReport with one outcome per attempted deletion

        Raises:
            ListingError: If any resource kind fails to list (nothing is deleted)
            CleanupCancelled: If ``cancel`` is set during enumeration
        """
        deletables = self.list(name_filter, cancel)
        return self._delete_all(deletables, cancel)

    def list(self, name_filter: str = "", cancel: Optional[threading.Event] = None) -> list[Deletable]:
        """Enumeration phase: concatenate each kind's handles in order."""
        deletables: list[Deletable] = []

        for resource in self.resources:
            if cancel is not None and cancel.is_set():
                raise CleanupCancelled(f"Cancelled before listing {resource.plural}")

            deletables.extend(resource.list(name_filter, cancel))

        return deletables

    def _delete_all(self, deletables: list[Deletable], cancel: Optional[threading.Event] = None) -> CleanupReport:
        report = CleanupReport()

        for index, deletable in enumerate(deletables):
            if cancel is not None and cancel.is_set():
                report.cancelled = True
                report.skipped_count = len(deletables) - index
                self.logger.warning(f"Cancelled: skipping {report.skipped_count} remaining resource(s)")
                break

            try:
                deletable.delete()
            except DeletionError as e:
                self.logger.error(str(e))
                report.record_failure(deletable.name, deletable.kind, str(e))
                continue

            self.logger.info(f"SUCCESS deleting {deletable.name}")
            report.record_success(deletable.name, deletable.kind)

        return report
