"""AWS credential validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import CredentialValidationError


@dataclass(frozen=True)
class AwsCredentials:
    """Static AWS credentials for one account and region."""

    access_key_id: str
    secret_access_key: str
    region: str
    session_token: Optional[str] = None

    def __repr__(self) -> str:
        return f"AwsCredentials(access_key_id={self.access_key_id!r}, region={self.region!r})"


def validate_credentials(
    access_key_id: Optional[str],
    secret_access_key: Optional[str],
    region: Optional[str],
    session_token: Optional[str] = None,
) -> AwsCredentials:
    """Check that every required credential field is present.

    Args:
        access_key_id: AWS access key id
        secret_access_key: AWS secret access key
        region: AWS region
        session_token: Optional STS session token

    Returns:
        Validated AwsCredentials

    Raises:
        CredentialValidationError: If any required field is missing
    """
    if not access_key_id:
        raise CredentialValidationError("Missing aws access key id.")

    if not secret_access_key:
        raise CredentialValidationError("Missing secret access key.")

    if not region:
        raise CredentialValidationError("Missing region.")

    return AwsCredentials(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        region=region,
        session_token=session_token or None,
    )


def get_caller_identity(session: boto3.Session) -> dict[str, Any]:
    """Resolve the account and principal the session authenticates as.

    Args:
        session: Authenticated boto3 session

    Returns:
        Dictionary with account_id, arn and user_id

    Raises:
        CredentialValidationError: If AWS rejects the credentials
    """
    try:
        identity = session.client("sts").get_caller_identity()
    except (ClientError, BotoCoreError) as e:
        raise CredentialValidationError(f"Invalid aws credentials: {e}") from e

    return {
        "account_id": identity["Account"],
        "arn": identity["Arn"],
        "user_id": identity["UserId"],
    }
