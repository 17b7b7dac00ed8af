"""Confirmation gates asked before a resource is queued for deletion."""

from __future__ import annotations

from abc import ABC, abstractmethod

import typer

from ..errors import CleanupCancelled


class Confirmation(ABC):
    """Decides whether a listed resource may be deleted.

    A gate performs no deletion itself and keeps no memory of prior answers.
    """

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Ask whether to proceed.

        Args:
            message: Question shown to the operator

        Returns:
            True to delete the resource, False to skip it
        """


class InteractiveConfirmation(Confirmation):
    """Prompts the operator on the terminal for every resource."""

    def confirm(self, message: str) -> bool:
        # Anything other than an explicit yes is a decline. End of input or
        # Ctrl-C at the prompt cancels the run.
        try:
            return bool(typer.confirm(message, default=False))
        except typer.Abort:
            raise CleanupCancelled("Confirmation prompt aborted") from None


class AutoApprove(Confirmation):
    """Approves every resource without prompting (``--no-confirm``)."""

    def confirm(self, message: str) -> bool:
        return True


def build_confirmation(no_confirm: bool) -> Confirmation:
    """Select the gate used for a whole run."""
    return AutoApprove() if no_confirm else InteractiveConfirmation()
