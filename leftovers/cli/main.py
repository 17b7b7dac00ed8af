"""Main CLI entry point using Typer."""

from __future__ import annotations

import logging
import signal
import sys
import threading
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..cleanup.confirmation import Confirmation, build_confirmation
from ..cleanup.kind import CompositeResourceKind
from ..cleanup.orchestrator import Leftovers
from ..errors import CleanupCancelled, CredentialValidationError, ListingError
from ..models.outcome import CleanupReport, ReportStatus
from ..utils.logging import setup_logging
from .config import SUPPORTED_IAAS, Config

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LISTING_FAILED = 1
EXIT_UNEXPECTED = 2
EXIT_INVALID_CREDENTIALS = 3
EXIT_CANCELLED = 130

# Create Typer app
app = typer.Typer(
    name="leftovers",
    help="leftovers - Delete the cloud resources an environment left behind",
    add_completion=False,
)

# Create Rich console for output
console = Console()

# Global config
config: Optional[Config] = None


@app.callback()
def main(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Config file path (default: $LEFTOVERS_CONFIG or ~/.leftovers/config.yaml)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output except errors"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """leftovers - Delete the cloud resources an environment left behind."""
    global config

    # Load configuration
    try:
        config = Config.load(config_path)
    except (OSError, ValueError) as e:
        console.print(f"✗ Invalid configuration: {e}", style="bold red")
        raise typer.Exit(code=EXIT_INVALID_CREDENTIALS)

    # Setup logging
    log_level = "ERROR" if quiet else ("DEBUG" if verbose else config.log_level)
    setup_logging(level=log_level, verbose=verbose, console=console)

    # Disable colors if requested
    if no_color:
        console.no_color = True


@app.command()
def version():
    """Show version information."""
    import boto3

    from .. import __version__

    console.print(f"leftovers version {__version__}")
    console.print(f"Python {sys.version.split()[0]}")
    console.print(f"boto3 {boto3.__version__}")


@app.command()
def kinds(
    iaas: Optional[str] = typer.Option(None, "--iaas", "-i", help="Provider: aws or gcp", envvar="BBL_IAAS"),
):
    """Show the resource kinds in the order they are deleted."""
    iaas = iaas or _config().iaas
    if iaas not in SUPPORTED_IAAS:
        console.print(f"✗ Unsupported iaas: {iaas}. Must be one of: {', '.join(SUPPORTED_IAAS)}", style="bold red")
        raise typer.Exit(code=EXIT_INVALID_CREDENTIALS)

    table = Table(show_header=True, title=f"{iaas} resource kinds (deletion order)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Cleans up first", style="yellow")

    for index, kind in enumerate(_registered_kinds(iaas), start=1):
        children = ""
        if issubclass(kind, CompositeResourceKind):
            children = ", ".join(child.plural for child in kind.child_kinds)
        table.add_row(str(index), kind.plural, children)

    console.print(table)


@app.command()
def delete(
    iaas: Optional[str] = typer.Option(None, "--iaas", "-i", help="Provider: aws or gcp", envvar="BBL_IAAS"),
    name_filter: str = typer.Option("", "--filter", "-f", help="Only delete resources whose name contains this"),
    no_confirm: bool = typer.Option(False, "--no-confirm", "-n", help="Skip confirmation prompts"),
    aws_access_key_id: Optional[str] = typer.Option(
        None, "--aws-access-key-id", help="AWS access key id", envvar="BBL_AWS_ACCESS_KEY_ID"
    ),
    aws_secret_access_key: Optional[str] = typer.Option(
        None, "--aws-secret-access-key", help="AWS secret access key", envvar="BBL_AWS_SECRET_ACCESS_KEY"
    ),
    aws_session_token: Optional[str] = typer.Option(
        None, "--aws-session-token", help="AWS session token (optional)", envvar="BBL_AWS_SESSION_TOKEN"
    ),
    aws_region: Optional[str] = typer.Option(None, "--aws-region", help="AWS region", envvar="BBL_AWS_REGION"),
    gcp_service_account_key: Optional[str] = typer.Option(
        None,
        "--gcp-service-account-key",
        help="GCP service account key path or JSON",
        envvar="BBL_GCP_SERVICE_ACCOUNT_KEY",
    ),
):
    """List every matching resource, confirm each one, then delete them.

    Listing is all-or-nothing: if any resource kind fails to list, nothing is
    deleted. Deletion continues past individual failures, which are reported
    at the end.

    Examples:
        # Delete everything named like an environment, asking for each resource
        leftovers delete --iaas aws --filter my-env

        # Delete without prompting
        leftovers delete --iaas gcp --filter my-env --no-confirm
    """
    cfg = _config()

    code = run(
        name_filter,
        no_confirm or cfg.no_confirm,
        iaas=iaas or cfg.iaas,
        aws_access_key_id=aws_access_key_id,
        aws_secret_access_key=aws_secret_access_key,
        aws_session_token=aws_session_token,
        aws_region=aws_region or cfg.aws_region,
        gcp_service_account_key=gcp_service_account_key or cfg.gcp_service_account_key,
    )
    raise typer.Exit(code=code)


def run(name_filter: str, auto_approve: bool, iaas: Optional[str], **credentials: Any) -> int:
    """Run one cleanup and return the process exit status.

    Args:
        name_filter: Substring resource names must contain ("" matches all)
        auto_approve: Approve every resource without prompting
        iaas: Provider, "aws" or "gcp"
        **credentials: Provider credential options as accepted by build_leftovers

    Returns:
        0 when listing succeeded and the deletion phase ran (whatever the
        individual outcomes), 1 when listing failed, 3 for invalid credentials
        or configuration, 130 when cancelled, 2 for anything unexpected
    """
    confirmation = build_confirmation(auto_approve)

    try:
        orchestrator = build_leftovers(iaas, confirmation, **credentials)
    except (CredentialValidationError, ValueError) as e:
        console.print(f"✗ Error: {e}", style="bold red")
        return EXIT_INVALID_CREDENTIALS

    cancel = threading.Event()

    def interrupt(signum: int, frame: Any) -> None:
        if cancel.is_set():
            raise KeyboardInterrupt
        cancel.set()
        console.print("\n⚠️  Cancelling after the current resource (press Ctrl-C again to abort)", style="yellow")

    previous_handler = signal.signal(signal.SIGINT, interrupt)
    try:
        report = orchestrator.delete(name_filter, cancel)
    except ListingError as e:
        console.print(f"✗ {e}", style="bold red")
        return EXIT_LISTING_FAILED
    except CleanupCancelled as e:
        console.print(f"⚠️  {e}. Nothing was deleted.", style="yellow")
        return EXIT_CANCELLED
    except KeyboardInterrupt:
        console.print("\n⚠️  Aborted", style="yellow")
        return EXIT_CANCELLED
    except Exception as e:
        console.print(f"✗ Error during cleanup: {e}", style="bold red")
        logger.exception("Error in delete command")
        return EXIT_UNEXPECTED
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    show_report(report)
    return EXIT_CANCELLED if report.cancelled else EXIT_OK


def build_leftovers(iaas: Optional[str], confirmation: Confirmation, **credentials: Any) -> Leftovers:
    """Construct the orchestrator for ``iaas`` from validated credentials.

    Raises:
        CredentialValidationError: If a required credential is missing or rejected
        ValueError: If ``iaas`` is not supported
    """
    if iaas == "aws":
        from ..aws import new_leftovers
        from ..aws.client import create_session
        from ..aws.credentials import get_caller_identity, validate_credentials

        aws_credentials = validate_credentials(
            credentials.get("aws_access_key_id"),
            credentials.get("aws_secret_access_key"),
            credentials.get("aws_region"),
            credentials.get("aws_session_token"),
        )
        session = create_session(aws_credentials)

        console.print("🔐 Validating AWS credentials...")
        identity = get_caller_identity(session)
        console.print(f"✓ Authenticated as: {identity['arn']}\n", style="green")

        return new_leftovers(
            confirmation,
            aws_credentials.access_key_id,
            aws_credentials.secret_access_key,
            aws_credentials.region,
            session_token=aws_credentials.session_token,
            session=session,
        )

    if iaas == "gcp":
        from ..gcp import new_leftovers

        return new_leftovers(confirmation, credentials.get("gcp_service_account_key"))

    raise ValueError(f"Unsupported iaas: {iaas}. Must be one of: {', '.join(SUPPORTED_IAAS)}")


def show_report(report: CleanupReport) -> None:
    """Print the summary of a deletion phase."""
    if not report.outcomes and not report.cancelled:
        console.print("\nNothing was deleted.")
        return

    status_styles = {
        ReportStatus.COMPLETED: "bold green",
        ReportStatus.PARTIAL: "bold yellow",
        ReportStatus.FAILED: "bold red",
        ReportStatus.CANCELLED: "bold yellow",
    }
    console.print(f"\nCleanup {report.status.value}", style=status_styles[report.status])
    console.print(
        f"  Deleted: {len(report.succeeded)}  Failed: {len(report.failed)}  Skipped: {report.skipped_count}"
    )

    if report.failed:
        table = Table(show_header=True, title="Failed deletions")
        table.add_column("Kind", style="cyan")
        table.add_column("Name")
        table.add_column("Error", style="red")

        for outcome in report.failed:
            table.add_row(outcome.kind, outcome.name, outcome.error_message or "")

        console.print(table)


def _config() -> Config:
    return config or Config()


def _registered_kinds(iaas: str) -> list:
    if iaas == "aws":
        from ..aws import AWS_KINDS

        return AWS_KINDS

    from ..gcp import GCP_KINDS

    return GCP_KINDS


def cli_main():
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    cli_main()
