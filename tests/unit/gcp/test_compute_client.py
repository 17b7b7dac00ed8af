"""Tests for the Compute Engine client wrapper."""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest

from leftovers.gcp.client import (
    COMPUTE_SCOPE,
    GLOBAL,
    REGIONAL,
    ZONAL,
    ComputeClient,
    OperationError,
    create_compute_service,
    location_name,
)
from leftovers.gcp.credentials import GcpCredentials


def _collection(pages_by_location: dict) -> Mock:
    """Mock discovery collection returning one page per location key."""
    resource = Mock()

    def list_request(**kwargs) -> Mock:
        location = kwargs.get("region") or kwargs.get("zone")
        request = Mock()
        request.execute.return_value = {"items": pages_by_location.get(location, [])}
        return request

    resource.list.side_effect = list_request
    resource.list_next.return_value = None
    return resource


@pytest.fixture
def service() -> Mock:
    """Compute service with two regions and one zone."""
    service = Mock()
    service.regions.return_value = _collection({None: [{"name": "us-east1"}, {"name": "us-west1"}]})
    service.zones.return_value = _collection({None: [{"name": "us-east1-b"}]})
    return service


class TestLocationName:
    """Test suite for location_name."""

    def test_last_segment(self) -> None:
        """Test region and zone URLs reduce to their names."""
        url = "https://www.googleapis.com/compute/v1/projects/p/zones/us-east1-b"

        assert location_name(url) == "us-east1-b"
        assert location_name("us-east1") == "us-east1"


class TestComputeClientList:
    """Test suite for ComputeClient.list."""

    def test_global_collection(self, service: Mock) -> None:
        """Test global collections are listed once for the project."""
        service.urlMaps.return_value = _collection({None: [{"name": "banana-url-map"}]})
        client = ComputeClient(service, "banana-project")

        items = list(client.list("urlMaps", GLOBAL))

        assert items == [{"name": "banana-url-map"}]
        service.urlMaps.return_value.list.assert_called_once_with(project="banana-project")

    def test_regional_collection_fans_out(self, service: Mock) -> None:
        """Test regional collections are listed in every region."""
        service.addresses.return_value = _collection(
            {"us-east1": [{"name": "east-address"}], "us-west1": [{"name": "west-address"}]}
        )
        client = ComputeClient(service, "banana-project")

        items = list(client.list("addresses", REGIONAL))

        assert [item["name"] for item in items] == ["east-address", "west-address"]

    def test_zonal_collection_fans_out(self, service: Mock) -> None:
        """Test zonal collections are listed in every zone."""
        service.disks.return_value = _collection({"us-east1-b": [{"name": "banana-disk"}]})
        client = ComputeClient(service, "banana-project")

        items = list(client.list("disks", ZONAL))

        assert items == [{"name": "banana-disk"}]
        service.disks.return_value.list.assert_called_once_with(project="banana-project", zone="us-east1-b")

    def test_follows_pages(self, service: Mock) -> None:
        """Test list_next is followed until it returns None."""
        first_request, second_request = Mock(), Mock()
        first_request.execute.return_value = {"items": [{"name": "a"}], "nextPageToken": "t"}
        second_request.execute.return_value = {"items": [{"name": "b"}]}
        resource = Mock()
        resource.list.return_value = first_request
        resource.list_next.side_effect = [second_request, None]
        service.images.return_value = resource

        items = list(ComputeClient(service, "banana-project").list("images"))

        assert [item["name"] for item in items] == ["a", "b"]

    def test_unknown_scope(self, service: Mock) -> None:
        """Test an unknown scope is rejected."""
        with pytest.raises(ValueError):
            list(ComputeClient(service, "banana-project").list("images", "planetary"))


class TestComputeClientDelete:
    """Test suite for ComputeClient.delete and wait."""

    def test_delete_global_waits_for_operation(self) -> None:
        """Test a global delete polls globalOperations until DONE."""
        service = Mock()
        service.urlMaps.return_value.delete.return_value.execute.return_value = {"name": "op-1", "status": "RUNNING"}
        service.globalOperations.return_value.get.return_value.execute.return_value = {"name": "op-1", "status": "DONE"}
        sleeps: list[float] = []

        client = ComputeClient(service, "banana-project", poll_interval=0.5, sleep=sleeps.append)
        client.delete("urlMaps", "urlMap", "banana-url-map")

        service.urlMaps.return_value.delete.assert_called_once_with(project="banana-project", urlMap="banana-url-map")
        service.globalOperations.return_value.get.assert_called_once_with(project="banana-project", operation="op-1")
        assert sleeps == [0.5]

    def test_delete_regional_passes_region(self) -> None:
        """Test regional deletes carry the region to the call and the poll."""
        service = Mock()
        service.addresses.return_value.delete.return_value.execute.return_value = {"name": "op-2", "status": "PENDING"}
        service.regionOperations.return_value.get.return_value.execute.return_value = {"name": "op-2", "status": "DONE"}

        client = ComputeClient(service, "banana-project", sleep=lambda seconds: None)
        client.delete("addresses", "address", "banana-address", REGIONAL, "us-east1")

        service.addresses.return_value.delete.assert_called_once_with(
            project="banana-project", address="banana-address", region="us-east1"
        )
        service.regionOperations.return_value.get.assert_called_once_with(
            project="banana-project", operation="op-2", region="us-east1"
        )

    def test_delete_zonal_passes_zone(self) -> None:
        """Test zonal deletes carry the zone."""
        service = Mock()
        service.disks.return_value.delete.return_value.execute.return_value = {"name": "op-3", "status": "DONE"}

        ComputeClient(service, "banana-project").delete("disks", "disk", "banana-disk", ZONAL, "us-east1-b")

        service.disks.return_value.delete.assert_called_once_with(
            project="banana-project", disk="banana-disk", zone="us-east1-b"
        )
        service.zoneOperations.return_value.get.assert_not_called()

    def test_operation_errors_raise(self) -> None:
        """Test a DONE operation carrying errors raises OperationError."""
        client = ComputeClient(Mock(), "banana-project")
        operation = {
            "name": "op-4",
            "status": "DONE",
            "error": {"errors": [{"message": "resource is in use"}, {"message": "try again"}]},
        }

        with pytest.raises(OperationError, match="^resource is in use; try again$"):
            client.wait(operation)

    def test_operation_timeout(self) -> None:
        """Test an operation that never finishes times out."""
        client = ComputeClient(Mock(), "banana-project", operation_timeout=-1, sleep=lambda seconds: None)

        with pytest.raises(OperationError, match="timed out"):
            client.wait({"name": "op-5", "status": "RUNNING"})


class TestCreateComputeService:
    """Test suite for create_compute_service."""

    @patch("leftovers.gcp.client.discovery.build")
    @patch("leftovers.gcp.client.service_account.Credentials.from_service_account_info")
    def test_builds_compute_v1(self, mock_from_info: Mock, mock_build: Mock) -> None:
        """Test the discovery service is built with compute scope credentials."""
        info = {"project_id": "banana-project"}

        create_compute_service(GcpCredentials(project_id="banana-project", service_account_info=info))

        mock_from_info.assert_called_once_with(info, scopes=[COMPUTE_SCOPE])
        mock_build.assert_called_once_with(
            "compute", "v1", credentials=mock_from_info.return_value, cache_discovery=False
        )
