"""RDS resource kinds."""

from __future__ import annotations

from typing import Iterable

from .base import AwsResourceKind, paginate


class DBInstances(AwsResourceKind):
    kind = "db instance"
    plural = "db instances"

    def _list_items(self) -> Iterable[dict]:
        for instance in paginate(self.client, "describe_db_instances", "DBInstances"):
            if instance.get("DBInstanceStatus") == "deleting":
                continue
            yield instance

    def _identifier(self, item: dict) -> str:
        return item["DBInstanceIdentifier"]

    def _delete(self, item: dict) -> None:
        # Skip final snapshot for faster deletion
        self.client.delete_db_instance(
            DBInstanceIdentifier=item["DBInstanceIdentifier"],
            SkipFinalSnapshot=True,
            DeleteAutomatedBackups=True,
        )


class DBSubnetGroups(AwsResourceKind):
    kind = "db subnet group"
    plural = "db subnet groups"

    def _list_items(self) -> Iterable[dict]:
        for group in paginate(self.client, "describe_db_subnet_groups", "DBSubnetGroups"):
            if group.get("DBSubnetGroupName") == "default":
                continue
            yield group

    def _identifier(self, item: dict) -> str:
        return item["DBSubnetGroupName"]

    def _delete(self, item: dict) -> None:
        self.client.delete_db_subnet_group(DBSubnetGroupName=item["DBSubnetGroupName"])
