"""AWS flavours of the resource kind templates."""

from __future__ import annotations

from typing import Any, Iterator, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..cleanup.kind import CompositeResourceKind, ResourceKind, ScopedResourceKind

AWS_ERRORS = (ClientError, BotoCoreError)


class AwsResourceKind(ResourceKind):
    provider_errors = AWS_ERRORS


class AwsCompositeResourceKind(CompositeResourceKind):
    provider_errors = AWS_ERRORS


class AwsScopedResourceKind(ScopedResourceKind):
    provider_errors = AWS_ERRORS


def paginate(client: Any, operation: str, result_key: str, **kwargs: Any) -> Iterator[dict]:
    """Yield every item under ``result_key`` across all pages of ``operation``."""
    paginator = client.get_paginator(operation)
    for page in paginator.paginate(**kwargs):
        yield from page.get(result_key, [])


def name_with_tags(identifier: str, tags: Optional[list[dict]]) -> str:
    """Display name for tagged resources, e.g. ``"i-123 (Name:web, env:dev)"``."""
    if not tags:
        return identifier

    pairs = ", ".join(f"{tag['Key']}:{tag['Value']}" for tag in tags)
    return f"{identifier} ({pairs})"


def error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "Unknown")
