"""Deletion outcome models.

Per-resource deletion results and the report returned by a cleanup run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class DeletionStatus(Enum):
    """Individual resource deletion status."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ReportStatus(Enum):
    """Overall status of a deletion phase."""

    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class DeletionOutcome:
    """Result of one deletion attempt.

    Validation rules:
        - status=succeeded: no error_message
        - status=failed: requires error_message

    Attributes:
        name: Display name of the resource
        kind: Singular kind label
        status: Deletion outcome
        error_message: Provider error text if failed (optional)
    """

    name: str
    kind: str
    status: DeletionStatus
    error_message: Optional[str] = None

    def validate(self) -> bool:
        """Validate outcome invariants.

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if self.status == DeletionStatus.FAILED and not self.error_message:
            raise ValueError("Failed status requires error_message")
        if self.status == DeletionStatus.SUCCEEDED and self.error_message:
            raise ValueError("Succeeded status cannot have error_message")
        return True


@dataclass
class CleanupReport:
    """Outcomes of a single deletion phase, in deletion order.

    Attributes:
        outcomes: One outcome per attempted handle
        skipped_count: Handles left untouched because the run was cancelled
        cancelled: Whether the deletion phase was interrupted
    """

    outcomes: list[DeletionOutcome] = field(default_factory=list)
    skipped_count: int = 0
    cancelled: bool = False

    @property
    def succeeded(self) -> list[DeletionOutcome]:
        return [o for o in self.outcomes if o.status == DeletionStatus.SUCCEEDED]

    @property
    def failed(self) -> list[DeletionOutcome]:
        return [o for o in self.outcomes if o.status == DeletionStatus.FAILED]

    @property
    def status(self) -> ReportStatus:
        """Summarize the run.

        An empty run is completed; any failure alongside a success is partial.
        """
        if self.cancelled:
            return ReportStatus.CANCELLED
        if not self.failed:
            return ReportStatus.COMPLETED
        if self.succeeded:
            return ReportStatus.PARTIAL
        return ReportStatus.FAILED

    def record_success(self, name: str, kind: str) -> DeletionOutcome:
        outcome = DeletionOutcome(name=name, kind=kind, status=DeletionStatus.SUCCEEDED)
        outcome.validate()
        self.outcomes.append(outcome)
        return outcome

    def record_failure(self, name: str, kind: str, error_message: str) -> DeletionOutcome:
        outcome = DeletionOutcome(
            name=name,
            kind=kind,
            status=DeletionStatus.FAILED,
            error_message=error_message,
        )
        outcome.validate()
        self.outcomes.append(outcome)
        return outcome
