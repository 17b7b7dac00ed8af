"""Load balancing resource kinds (classic ELB and ELBv2)."""

from __future__ import annotations

from typing import Iterable

from .base import AwsResourceKind, paginate


class LoadBalancers(AwsResourceKind):
    """Classic load balancers."""

    kind = "load balancer"
    plural = "load balancers"

    def _list_items(self) -> Iterable[dict]:
        return paginate(self.client, "describe_load_balancers", "LoadBalancerDescriptions")

    def _identifier(self, item: dict) -> str:
        return item["LoadBalancerName"]

    def _delete(self, item: dict) -> None:
        self.client.delete_load_balancer(LoadBalancerName=item["LoadBalancerName"])


class V2LoadBalancers(AwsResourceKind):
    """Application and network load balancers."""

    kind = "elbv2 load balancer"
    plural = "elbv2 load balancers"

    def _list_items(self) -> Iterable[dict]:
        return paginate(self.client, "describe_load_balancers", "LoadBalancers")

    def _identifier(self, item: dict) -> str:
        return item["LoadBalancerArn"]

    def _display_name(self, item: dict) -> str:
        return item["LoadBalancerName"]

    def _delete(self, item: dict) -> None:
        self.client.delete_load_balancer(LoadBalancerArn=item["LoadBalancerArn"])


class TargetGroups(AwsResourceKind):
    kind = "target group"
    plural = "target groups"

    def _list_items(self) -> Iterable[dict]:
        return paginate(self.client, "describe_target_groups", "TargetGroups")

    def _identifier(self, item: dict) -> str:
        return item["TargetGroupArn"]

    def _display_name(self, item: dict) -> str:
        return item["TargetGroupName"]

    def _delete(self, item: dict) -> None:
        self.client.delete_target_group(TargetGroupArn=item["TargetGroupArn"])
