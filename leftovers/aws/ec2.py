"""EC2 resource kinds.

VPCs are composite: route tables, subnets and internet gateways scoped to the
VPC are removed before the VPC itself.
"""

from __future__ import annotations

from typing import Iterable

from .base import AwsCompositeResourceKind, AwsResourceKind, AwsScopedResourceKind, name_with_tags, paginate

GONE_INSTANCE_STATES = ("shutting-down", "terminated")


class Instances(AwsResourceKind):
    kind = "instance"
    plural = "instances"

    def _list_items(self) -> Iterable[dict]:
        for reservation in paginate(self.client, "describe_instances", "Reservations"):
            for instance in reservation.get("Instances", []):
                if instance.get("State", {}).get("Name") in GONE_INSTANCE_STATES:
                    continue
                yield instance

    def _identifier(self, item: dict) -> str:
        return item["InstanceId"]

    def _display_name(self, item: dict) -> str:
        return name_with_tags(item["InstanceId"], item.get("Tags"))

    def _delete(self, item: dict) -> None:
        self.client.terminate_instances(InstanceIds=[item["InstanceId"]])


class Addresses(AwsResourceKind):
    kind = "address"
    plural = "addresses"

    def _list_items(self) -> Iterable[dict]:
        # describe_addresses is not paginated.
        return self.client.describe_addresses().get("Addresses", [])

    def _identifier(self, item: dict) -> str:
        return item.get("AllocationId") or item["PublicIp"]

    def _display_name(self, item: dict) -> str:
        return name_with_tags(item["PublicIp"], item.get("Tags"))

    def _delete(self, item: dict) -> None:
        if item.get("AllocationId"):
            self.client.release_address(AllocationId=item["AllocationId"])
        else:
            self.client.release_address(PublicIp=item["PublicIp"])


class KeyPairs(AwsResourceKind):
    kind = "key pair"
    plural = "key pairs"

    def _list_items(self) -> Iterable[dict]:
        return self.client.describe_key_pairs().get("KeyPairs", [])

    def _identifier(self, item: dict) -> str:
        return item["KeyName"]

    def _delete(self, item: dict) -> None:
        self.client.delete_key_pair(KeyName=item["KeyName"])


class NetworkInterfaces(AwsResourceKind):
    kind = "network interface"
    plural = "network interfaces"

    def _list_items(self) -> Iterable[dict]:
        return paginate(self.client, "describe_network_interfaces", "NetworkInterfaces")

    def _identifier(self, item: dict) -> str:
        return item["NetworkInterfaceId"]

    def _display_name(self, item: dict) -> str:
        return name_with_tags(item["NetworkInterfaceId"], item.get("TagSet"))

    def _delete(self, item: dict) -> None:
        self.client.delete_network_interface(NetworkInterfaceId=item["NetworkInterfaceId"])


class SecurityGroups(AwsResourceKind):
    """Security groups; rules are revoked first so groups referencing each other can go."""

    kind = "security group"
    plural = "security groups"

    def _list_items(self) -> Iterable[dict]:
        for group in paginate(self.client, "describe_security_groups", "SecurityGroups"):
            if group.get("GroupName") == "default":
                continue
            yield group

    def _identifier(self, item: dict) -> str:
        return item["GroupId"]

    def _display_name(self, item: dict) -> str:
        return name_with_tags(f"{item['GroupId']} ({item['GroupName']})", item.get("Tags"))

    def _delete(self, item: dict) -> None:
        group_id = item["GroupId"]

        if item.get("IpPermissions"):
            self.client.revoke_security_group_ingress(GroupId=group_id, IpPermissions=item["IpPermissions"])

        if item.get("IpPermissionsEgress"):
            self.client.revoke_security_group_egress(GroupId=group_id, IpPermissions=item["IpPermissionsEgress"])

        self.client.delete_security_group(GroupId=group_id)


class Volumes(AwsResourceKind):
    """Unattached EBS volumes."""

    kind = "volume"
    plural = "volumes"

    def _list_items(self) -> Iterable[dict]:
        return paginate(
            self.client,
            "describe_volumes",
            "Volumes",
            Filters=[{"Name": "status", "Values": ["available"]}],
        )

    def _identifier(self, item: dict) -> str:
        return item["VolumeId"]

    def _display_name(self, item: dict) -> str:
        return name_with_tags(item["VolumeId"], item.get("Tags"))

    def _delete(self, item: dict) -> None:
        self.client.delete_volume(VolumeId=item["VolumeId"])


class Tags(AwsResourceKind):
    """Individual EC2 tags still attached to resources."""

    kind = "tag"
    plural = "tags"

    def _list_items(self) -> Iterable[dict]:
        return paginate(self.client, "describe_tags", "Tags")

    def _identifier(self, item: dict) -> str:
        return item["Key"]

    def _display_name(self, item: dict) -> str:
        return f"{item['Key']}:{item['Value']} ({item['ResourceType']} {item['ResourceId']})"

    def _delete(self, item: dict) -> None:
        self.client.delete_tags(
            Resources=[item["ResourceId"]],
            Tags=[{"Key": item["Key"], "Value": item["Value"]}],
        )


class RouteTables(AwsScopedResourceKind):
    """Non-main route tables of a VPC; associations are removed before the table."""

    kind = "route table"
    plural = "route tables"

    def _list_scoped_items(self, parent_id: str) -> Iterable[dict]:
        for table in paginate(
            self.client,
            "describe_route_tables",
            "RouteTables",
            Filters=[{"Name": "vpc-id", "Values": [parent_id]}],
        ):
            # The main route table goes away with the VPC.
            if any(association.get("Main") for association in table.get("Associations", [])):
                continue
            yield table

    def _identifier(self, item: dict) -> str:
        return item["RouteTableId"]

    def _display_name(self, item: dict) -> str:
        return name_with_tags(item["RouteTableId"], item.get("Tags"))

    def _delete(self, item: dict) -> None:
        for association in item.get("Associations", []):
            self.client.disassociate_route_table(AssociationId=association["RouteTableAssociationId"])

        self.client.delete_route_table(RouteTableId=item["RouteTableId"])


class Subnets(AwsScopedResourceKind):
    kind = "subnet"
    plural = "subnets"

    def _list_scoped_items(self, parent_id: str) -> Iterable[dict]:
        return paginate(
            self.client,
            "describe_subnets",
            "Subnets",
            Filters=[{"Name": "vpc-id", "Values": [parent_id]}],
        )

    def _identifier(self, item: dict) -> str:
        return item["SubnetId"]

    def _display_name(self, item: dict) -> str:
        return name_with_tags(item["SubnetId"], item.get("Tags"))

    def _delete(self, item: dict) -> None:
        self.client.delete_subnet(SubnetId=item["SubnetId"])


class InternetGateways(AwsScopedResourceKind):
    kind = "internet gateway"
    plural = "internet gateways"

    def _list_scoped_items(self, parent_id: str) -> Iterable[dict]:
        return paginate(
            self.client,
            "describe_internet_gateways",
            "InternetGateways",
            Filters=[{"Name": "attachment.vpc-id", "Values": [parent_id]}],
        )

    def _identifier(self, item: dict) -> str:
        return item["InternetGatewayId"]

    def _display_name(self, item: dict) -> str:
        return name_with_tags(item["InternetGatewayId"], item.get("Tags"))

    def _delete(self, item: dict) -> None:
        gateway_id = item["InternetGatewayId"]
        for attachment in item.get("Attachments", []):
            self.client.detach_internet_gateway(InternetGatewayId=gateway_id, VpcId=attachment["VpcId"])

        self.client.delete_internet_gateway(InternetGatewayId=gateway_id)


class Vpcs(AwsCompositeResourceKind):
    """Non-default VPCs."""

    kind = "vpc"
    plural = "vpcs"
    child_kinds = (RouteTables, Subnets, InternetGateways)

    def _list_items(self) -> Iterable[dict]:
        for vpc in paginate(self.client, "describe_vpcs", "Vpcs"):
            if vpc.get("IsDefault"):
                continue
            yield vpc

    def _identifier(self, item: dict) -> str:
        return item["VpcId"]

    def _display_name(self, item: dict) -> str:
        return name_with_tags(item["VpcId"], item.get("Tags"))

    def _delete(self, item: dict) -> None:
        self.client.delete_vpc(VpcId=item["VpcId"])
