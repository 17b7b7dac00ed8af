"""Compute Engine resource kinds.

Every Compute Engine collection is deleted the same way, so each kind is just
its labels, collection name, delete parameter and scope.
"""

from __future__ import annotations

from typing import Iterable, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError

from ..cleanup.kind import ResourceKind
from .client import GLOBAL, REGIONAL, ZONAL, OperationError, location_name

# Transport failures surface as httplib2 errors or socket-level OSErrors.
GCP_ERRORS = (HttpError, GoogleAuthError, OperationError, httplib2.HttpLib2Error, OSError)


class ComputeKind(ResourceKind):
    """One Compute Engine collection.

    Attributes:
        collection: Discovery collection, e.g. "urlMaps"
        param: Resource parameter of the delete call, e.g. "urlMap"
        scope: GLOBAL, REGIONAL or ZONAL
        protected: Names that are never offered for deletion
    """

    provider_errors = GCP_ERRORS

    collection: str = ""
    param: str = ""
    scope: str = GLOBAL
    protected: tuple[str, ...] = ()

    def _list_items(self) -> Iterable[dict]:
        for item in self.client.list(self.collection, self.scope):
            if item["name"] in self.protected:
                continue
            yield item

    def _identifier(self, item: dict) -> str:
        return item["name"]

    def _location(self, item: dict) -> Optional[str]:
        if self.scope == REGIONAL:
            return location_name(item["region"])
        if self.scope == ZONAL:
            return location_name(item["zone"])
        return None

    def _delete(self, item: dict) -> None:
        self.client.delete(self.collection, self.param, item["name"], self.scope, self._location(item))


class GlobalForwardingRules(ComputeKind):
    kind = "global forwarding rule"
    plural = "global forwarding rules"
    collection = "globalForwardingRules"
    param = "forwardingRule"


class ForwardingRules(ComputeKind):
    kind = "forwarding rule"
    plural = "forwarding rules"
    collection = "forwardingRules"
    param = "forwardingRule"
    scope = REGIONAL


class TargetHttpProxies(ComputeKind):
    kind = "target http proxy"
    plural = "target http proxies"
    collection = "targetHttpProxies"
    param = "targetHttpProxy"


class TargetHttpsProxies(ComputeKind):
    kind = "target https proxy"
    plural = "target https proxies"
    collection = "targetHttpsProxies"
    param = "targetHttpsProxy"


class UrlMaps(ComputeKind):
    kind = "url map"
    plural = "url maps"
    collection = "urlMaps"
    param = "urlMap"


class BackendServices(ComputeKind):
    kind = "backend service"
    plural = "backend services"
    collection = "backendServices"
    param = "backendService"


class TargetPools(ComputeKind):
    kind = "target pool"
    plural = "target pools"
    collection = "targetPools"
    param = "targetPool"
    scope = REGIONAL


class InstanceGroupManagers(ComputeKind):
    kind = "instance group manager"
    plural = "instance group managers"
    collection = "instanceGroupManagers"
    param = "instanceGroupManager"
    scope = ZONAL


class Instances(ComputeKind):
    kind = "instance"
    plural = "instances"
    collection = "instances"
    param = "instance"
    scope = ZONAL


class InstanceGroups(ComputeKind):
    kind = "instance group"
    plural = "instance groups"
    collection = "instanceGroups"
    param = "instanceGroup"
    scope = ZONAL


class InstanceTemplates(ComputeKind):
    kind = "instance template"
    plural = "instance templates"
    collection = "instanceTemplates"
    param = "instanceTemplate"


class GlobalHealthChecks(ComputeKind):
    kind = "global health check"
    plural = "global health checks"
    collection = "healthChecks"
    param = "healthCheck"


class HttpHealthChecks(ComputeKind):
    kind = "http health check"
    plural = "http health checks"
    collection = "httpHealthChecks"
    param = "httpHealthCheck"


class HttpsHealthChecks(ComputeKind):
    kind = "https health check"
    plural = "https health checks"
    collection = "httpsHealthChecks"
    param = "httpsHealthCheck"


class SslCertificates(ComputeKind):
    kind = "ssl certificate"
    plural = "ssl certificates"
    collection = "sslCertificates"
    param = "sslCertificate"


class Firewalls(ComputeKind):
    kind = "firewall"
    plural = "firewalls"
    collection = "firewalls"
    param = "firewall"


class Routers(ComputeKind):
    kind = "router"
    plural = "routers"
    collection = "routers"
    param = "router"
    scope = REGIONAL


class Images(ComputeKind):
    kind = "image"
    plural = "images"
    collection = "images"
    param = "image"


class Disks(ComputeKind):
    kind = "disk"
    plural = "disks"
    collection = "disks"
    param = "disk"
    scope = ZONAL


class Addresses(ComputeKind):
    kind = "address"
    plural = "addresses"
    collection = "addresses"
    param = "address"
    scope = REGIONAL


class GlobalAddresses(ComputeKind):
    kind = "global address"
    plural = "global addresses"
    collection = "globalAddresses"
    param = "address"


class Subnetworks(ComputeKind):
    kind = "subnetwork"
    plural = "subnetworks"
    collection = "subnetworks"
    param = "subnetwork"
    scope = REGIONAL
    # Auto-mode subnetworks of the default network are removed with it.
    protected = ("default",)


class Networks(ComputeKind):
    kind = "network"
    plural = "networks"
    collection = "networks"
    param = "network"
    protected = ("default",)
