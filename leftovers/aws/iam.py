"""IAM resource kinds.

Roles and users are composite: their attached and inline policies (and, for
users, access keys; for roles, instance profile memberships) are removed
before the principal itself is deleted.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from botocore.exceptions import ClientError

from .base import AwsCompositeResourceKind, AwsResourceKind, AwsScopedResourceKind, error_code, paginate

SERVICE_LINKED_ROLE_PATH = "/aws-service-role/"


def _principal_policies(client: Any, principal_key: str, principal: str, operations: tuple[str, str]) -> Iterator[dict]:
    attached_op, inline_op = operations

    for policy in paginate(client, attached_op, "AttachedPolicies", **{principal_key: principal}):
        yield {principal_key: principal, "PolicyName": policy["PolicyName"], "PolicyArn": policy["PolicyArn"]}

    for policy_name in paginate(client, inline_op, "PolicyNames", **{principal_key: principal}):
        yield {principal_key: principal, "PolicyName": policy_name}


class RolePolicies(AwsScopedResourceKind):
    kind = "role policy"
    plural = "role policies"

    def _list_scoped_items(self, parent_id: str) -> Iterable[dict]:
        return _principal_policies(
            self.client, "RoleName", parent_id, ("list_attached_role_policies", "list_role_policies")
        )

    def _identifier(self, item: dict) -> str:
        return item["PolicyName"]

    def _display_name(self, item: dict) -> str:
        return f"{item['PolicyName']} (role {item['RoleName']})"

    def _delete(self, item: dict) -> None:
        if "PolicyArn" in item:
            self.client.detach_role_policy(RoleName=item["RoleName"], PolicyArn=item["PolicyArn"])
        else:
            self.client.delete_role_policy(RoleName=item["RoleName"], PolicyName=item["PolicyName"])


class RoleInstanceProfiles(AwsScopedResourceKind):
    """Instance profiles a role belongs to; deleting removes the membership only."""

    kind = "role instance profile"
    plural = "role instance profiles"

    def _list_scoped_items(self, parent_id: str) -> Iterable[dict]:
        for profile in paginate(self.client, "list_instance_profiles_for_role", "InstanceProfiles", RoleName=parent_id):
            yield {"RoleName": parent_id, "InstanceProfileName": profile["InstanceProfileName"]}

    def _identifier(self, item: dict) -> str:
        return item["InstanceProfileName"]

    def _display_name(self, item: dict) -> str:
        return f"{item['InstanceProfileName']} (role {item['RoleName']})"

    def _delete(self, item: dict) -> None:
        self.client.remove_role_from_instance_profile(
            InstanceProfileName=item["InstanceProfileName"],
            RoleName=item["RoleName"],
        )


class Roles(AwsCompositeResourceKind):
    kind = "role"
    plural = "roles"
    child_kinds = (RolePolicies, RoleInstanceProfiles)

    def _list_items(self) -> Iterable[dict]:
        for role in paginate(self.client, "list_roles", "Roles"):
            # Service-linked roles can only be removed by the owning service.
            if role.get("Path", "").startswith(SERVICE_LINKED_ROLE_PATH):
                continue
            yield role

    def _identifier(self, item: dict) -> str:
        return item["RoleName"]

    def _delete(self, item: dict) -> None:
        self.client.delete_role(RoleName=item["RoleName"])


class UserPolicies(AwsScopedResourceKind):
    kind = "user policy"
    plural = "user policies"

    def _list_scoped_items(self, parent_id: str) -> Iterable[dict]:
        return _principal_policies(
            self.client, "UserName", parent_id, ("list_attached_user_policies", "list_user_policies")
        )

    def _identifier(self, item: dict) -> str:
        return item["PolicyName"]

    def _display_name(self, item: dict) -> str:
        return f"{item['PolicyName']} (user {item['UserName']})"

    def _delete(self, item: dict) -> None:
        if "PolicyArn" in item:
            self.client.detach_user_policy(UserName=item["UserName"], PolicyArn=item["PolicyArn"])
        else:
            self.client.delete_user_policy(UserName=item["UserName"], PolicyName=item["PolicyName"])


class AccessKeys(AwsScopedResourceKind):
    kind = "access key"
    plural = "access keys"

    def _list_scoped_items(self, parent_id: str) -> Iterable[dict]:
        return paginate(self.client, "list_access_keys", "AccessKeyMetadata", UserName=parent_id)

    def _identifier(self, item: dict) -> str:
        return item["AccessKeyId"]

    def _display_name(self, item: dict) -> str:
        return f"{item['AccessKeyId']} (user {item['UserName']})"

    def _delete(self, item: dict) -> None:
        self.client.delete_access_key(UserName=item["UserName"], AccessKeyId=item["AccessKeyId"])


class Users(AwsCompositeResourceKind):
    kind = "user"
    plural = "users"
    child_kinds = (UserPolicies, AccessKeys)

    def _list_items(self) -> Iterable[dict]:
        return paginate(self.client, "list_users", "Users")

    def _identifier(self, item: dict) -> str:
        return item["UserName"]

    def _delete(self, item: dict) -> None:
        self.client.delete_user(UserName=item["UserName"])


class Policies(AwsResourceKind):
    """Customer managed policies; non-default versions go first."""

    kind = "policy"
    plural = "policies"

    def _list_items(self) -> Iterable[dict]:
        return paginate(self.client, "list_policies", "Policies", Scope="Local")

    def _identifier(self, item: dict) -> str:
        return item["Arn"]

    def _display_name(self, item: dict) -> str:
        return item["PolicyName"]

    def _delete(self, item: dict) -> None:
        arn = item["Arn"]
        for version in paginate(self.client, "list_policy_versions", "Versions", PolicyArn=arn):
            if version.get("IsDefaultVersion"):
                continue
            self.client.delete_policy_version(PolicyArn=arn, VersionId=version["VersionId"])

        self.client.delete_policy(PolicyArn=arn)


class InstanceProfiles(AwsResourceKind):
    kind = "instance profile"
    plural = "instance profiles"

    def _list_items(self) -> Iterable[dict]:
        return paginate(self.client, "list_instance_profiles", "InstanceProfiles")

    def _identifier(self, item: dict) -> str:
        return item["InstanceProfileName"]

    def _display_name(self, item: dict) -> str:
        roles = [role["RoleName"] for role in item.get("Roles", [])]
        if not roles:
            return item["InstanceProfileName"]
        return f"{item['InstanceProfileName']} (Roles:{', '.join(roles)})"

    def _delete(self, item: dict) -> None:
        name = item["InstanceProfileName"]

        # Roles deleted earlier in the run have already left the profile.
        profile = self.client.get_instance_profile(InstanceProfileName=name)["InstanceProfile"]
        for role in profile.get("Roles", []):
            try:
                self.client.remove_role_from_instance_profile(InstanceProfileName=name, RoleName=role["RoleName"])
            except ClientError as e:
                if error_code(e) != "NoSuchEntity":
                    raise

        self.client.delete_instance_profile(InstanceProfileName=name)


class ServerCertificates(AwsResourceKind):
    kind = "server certificate"
    plural = "server certificates"

    def _list_items(self) -> Iterable[dict]:
        return paginate(self.client, "list_server_certificates", "ServerCertificateMetadataList")

    def _identifier(self, item: dict) -> str:
        return item["ServerCertificateName"]

    def _delete(self, item: dict) -> None:
        self.client.delete_server_certificate(ServerCertificateName=item["ServerCertificateName"])
