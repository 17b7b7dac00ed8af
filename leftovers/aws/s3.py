"""S3 resource kinds."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from botocore.exceptions import ClientError

from ..cleanup.confirmation import Confirmation
from .base import AwsResourceKind, error_code

# delete_objects accepts at most 1000 keys per request.
DELETE_BATCH_SIZE = 1000

# get_bucket_location reports legacy values for the oldest regions.
LEGACY_LOCATIONS = {None: "us-east-1", "": "us-east-1", "EU": "eu-west-1"}


class BucketManager:
    """Resolves which region a bucket lives in.

    list_buckets is global, so buckets outside the session's region are skipped.
    """

    def __init__(self, region: str) -> None:
        self.region = region

    def bucket_region(self, client: Any, bucket: str) -> Optional[str]:
        """Return the bucket's region, or None if the bucket vanished meanwhile."""
        try:
            location = client.get_bucket_location(Bucket=bucket).get("LocationConstraint")
        except ClientError as e:
            if error_code(e) == "NoSuchBucket":
                return None
            raise

        return LEGACY_LOCATIONS.get(location, location)

    def is_in_region(self, client: Any, bucket: str) -> bool:
        return self.bucket_region(client, bucket) == self.region


class Buckets(AwsResourceKind):
    """Buckets in the session's region; every object version is removed first."""

    kind = "bucket"
    plural = "buckets"

    def __init__(
        self,
        client: Any,
        confirmation: Confirmation,
        bucket_manager: BucketManager,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(client, confirmation, logger)
        self.bucket_manager = bucket_manager

    def _list_items(self) -> Iterable[dict]:
        return self.client.list_buckets().get("Buckets", [])

    def _is_deletable(self, item: dict) -> bool:
        # Only filtered matches are located; other buckets may deny the lookup.
        return self.bucket_manager.is_in_region(self.client, item["Name"])

    def _identifier(self, item: dict) -> str:
        return item["Name"]

    def _delete(self, item: dict) -> None:
        bucket = item["Name"]
        self._empty(bucket)
        self.client.delete_bucket(Bucket=bucket)

    def _empty(self, bucket: str) -> None:
        paginator = self.client.get_paginator("list_object_versions")
        for page in paginator.paginate(Bucket=bucket):
            objects = [
                {"Key": version["Key"], "VersionId": version["VersionId"]}
                for version in page.get("Versions", []) + page.get("DeleteMarkers", [])
            ]

            for start in range(0, len(objects), DELETE_BATCH_SIZE):
                batch = objects[start : start + DELETE_BATCH_SIZE]
                self.client.delete_objects(Bucket=bucket, Delete={"Objects": batch, "Quiet": True})
