"""Compute Engine API client.

Thin wrapper over the discovery-based ``compute`` v1 service that hides
pagination, region/zone fan-out and waiting on delete operations.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterator, Optional

from google.oauth2 import service_account
from googleapiclient import discovery

from .credentials import GcpCredentials

logger = logging.getLogger(__name__)

COMPUTE_SCOPE = "https://www.googleapis.com/auth/compute"

GLOBAL = "global"
REGIONAL = "regional"
ZONAL = "zonal"


class OperationError(Exception):
    """A Compute Engine operation finished with errors or never finished."""


def create_compute_service(credentials: GcpCredentials) -> Any:
    """Build an authenticated ``compute`` v1 discovery service."""
    google_credentials = service_account.Credentials.from_service_account_info(
        credentials.service_account_info,
        scopes=[COMPUTE_SCOPE],
    )
    return discovery.build("compute", "v1", credentials=google_credentials, cache_discovery=False)


def location_name(url: str) -> str:
    """Last path segment of a region or zone URL."""
    return url.rstrip("/").rsplit("/", 1)[-1]


class ComputeClient:
    """Project-scoped Compute Engine client.

    Attributes:
        service: Discovery service for compute v1
        project: GCP project id
        poll_interval: Seconds between operation status checks
        operation_timeout: Seconds to wait for a delete operation
    """

    def __init__(
        self,
        service: Any,
        project: str,
        poll_interval: float = 2.0,
        operation_timeout: float = 300.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.service = service
        self.project = project
        self.poll_interval = poll_interval
        self.operation_timeout = operation_timeout
        self._sleep = sleep

    def list_regions(self) -> list[str]:
        return [region["name"] for region in self._paginate(self.service.regions(), project=self.project)]

    def list_zones(self) -> list[str]:
        return [zone["name"] for zone in self._paginate(self.service.zones(), project=self.project)]

    def list(self, collection: str, scope: str = GLOBAL) -> Iterator[dict]:
        """Yield every item of ``collection`` across all regions or zones.

        Args:
            collection: Discovery collection name, e.g. "urlMaps"
            scope: GLOBAL, REGIONAL or ZONAL
        """
        resource = getattr(self.service, collection)()

        if scope == GLOBAL:
            yield from self._paginate(resource, project=self.project)
        elif scope == REGIONAL:
            for region in self.list_regions():
                yield from self._paginate(resource, project=self.project, region=region)
        elif scope == ZONAL:
            for zone in self.list_zones():
                yield from self._paginate(resource, project=self.project, zone=zone)
        else:
            raise ValueError(f"Unknown scope: {scope}")

    def delete(self, collection: str, param: str, name: str, scope: str = GLOBAL, location: Optional[str] = None) -> None:
        """Delete one resource and wait for the operation to finish.

        Args:
            collection: Discovery collection name
            param: Name of the resource parameter of the delete call, e.g. "urlMap"
            name: Resource name
            scope: GLOBAL, REGIONAL or ZONAL
            location: Region or zone name for regional/zonal resources

        Raises:
            OperationError: If the operation reports errors or times out
        """
        kwargs: dict[str, Any] = {"project": self.project, param: name}
        if scope == REGIONAL:
            kwargs["region"] = location
        elif scope == ZONAL:
            kwargs["zone"] = location

        operation = getattr(self.service, collection)().delete(**kwargs).execute()
        self.wait(operation, scope, location)

    def wait(self, operation: dict, scope: str = GLOBAL, location: Optional[str] = None) -> dict:
        """Poll ``operation`` until it is DONE."""
        if scope == REGIONAL:
            operations, kwargs = self.service.regionOperations(), {"region": location}
        elif scope == ZONAL:
            operations, kwargs = self.service.zoneOperations(), {"zone": location}
        else:
            operations, kwargs = self.service.globalOperations(), {}

        deadline = time.monotonic() + self.operation_timeout
        while operation.get("status") != "DONE":
            if time.monotonic() > deadline:
                raise OperationError(f"Operation {operation.get('name')} timed out")

            self._sleep(self.poll_interval)
            operation = operations.get(project=self.project, operation=operation["name"], **kwargs).execute()
            logger.debug(f"Operation {operation.get('name')} is {operation.get('status')}")

        errors = operation.get("error", {}).get("errors", [])
        if errors:
            raise OperationError("; ".join(error.get("message", str(error)) for error in errors))

        return operation

    def _paginate(self, resource: Any, **kwargs: Any) -> Iterator[dict]:
        request = resource.list(**kwargs)
        while request is not None:
            response = request.execute()
            yield from response.get("items", [])
            request = resource.list_next(previous_request=request, previous_response=response)
