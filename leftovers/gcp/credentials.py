"""GCP service account key validation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..errors import CredentialValidationError


@dataclass(frozen=True)
class GcpCredentials:
    """Parsed service account key and the project it belongs to."""

    project_id: str
    service_account_info: dict[str, Any] = field(repr=False)


def validate_credentials(service_account_key: Optional[str]) -> GcpCredentials:
    """Load and check a service account key.

    Args:
        service_account_key: Path to a key file, or the key JSON itself

    Returns:
        GcpCredentials carrying the key and its project id

    Raises:
        CredentialValidationError: If the key is missing, unreadable or has no project id
    """
    if not service_account_key:
        raise CredentialValidationError("Missing service account key.")

    content = service_account_key
    if not content.lstrip().startswith("{"):
        try:
            content = Path(service_account_key).expanduser().read_text()
        except OSError as e:
            raise CredentialValidationError(f"Reading service account key: {e}") from e

    try:
        info = json.loads(content)
    except json.JSONDecodeError as e:
        raise CredentialValidationError(f"Unmarshalling service account key for project id: {e}") from e

    if not isinstance(info, dict) or not info.get("project_id"):
        raise CredentialValidationError("Missing project id in service account key.")

    return GcpCredentials(project_id=info["project_id"], service_account_info=info)
