"""Data models for the cleanup engine."""

from __future__ import annotations

from .deletable import Deletable
from .outcome import CleanupReport, DeletionOutcome, DeletionStatus, ReportStatus

__all__ = [
    "Deletable",
    "CleanupReport",
    "DeletionOutcome",
    "DeletionStatus",
    "ReportStatus",
]
