"""boto3 session and client construction."""

from __future__ import annotations

from typing import Any

import boto3
from botocore.config import Config

from .credentials import AwsCredentials

# Throttling and transient errors are retried by botocore, not by the kinds.
DEFAULT_CLIENT_CONFIG = Config(retries={"max_attempts": 10, "mode": "standard"})


def create_session(credentials: AwsCredentials) -> boto3.Session:
    """Build a boto3 session from static credentials."""
    return boto3.Session(
        aws_access_key_id=credentials.access_key_id,
        aws_secret_access_key=credentials.secret_access_key,
        aws_session_token=credentials.session_token,
        region_name=credentials.region,
    )


def create_boto_client(session: boto3.Session, service_name: str) -> Any:
    """Create a client for ``service_name`` in the session's region."""
    return session.client(service_name, config=DEFAULT_CLIENT_CONFIG)
