"""Tests for Compute Engine resource kinds."""

from __future__ import annotations

import json
import logging
from unittest.mock import Mock

import httplib2
import pytest

from leftovers.cleanup.confirmation import AutoApprove
from leftovers.cleanup.orchestrator import Leftovers
from leftovers.errors import CredentialValidationError, DeletionError, ListingError
from leftovers.gcp import GCP_KINDS, compute, new_leftovers
from leftovers.gcp.client import GLOBAL, REGIONAL, ZONAL, ComputeClient, OperationError
from tests.fixtures.fakes import RecordingConfirmation, http_error


@pytest.fixture
def client() -> Mock:
    """Mock Compute Engine client."""
    return Mock(spec=ComputeClient)


class TestUrlMaps:
    """Test suite for the url map kind, the reference global kind."""

    def test_approved_match(self, client: Mock) -> None:
        """Test a matching url map is listed, confirmed and deleted."""
        client.list.return_value = [{"name": "banana-url-map"}]
        confirmation = RecordingConfirmation(default=True)

        handles = compute.UrlMaps(client, confirmation).list("banana")

        assert len(handles) == 1
        assert confirmation.messages == ["Are you sure you want to delete url map banana-url-map?"]
        client.list.assert_called_once_with("urlMaps", GLOBAL)

        handles[0].delete()
        client.delete.assert_called_once_with("urlMaps", "urlMap", "banana-url-map", GLOBAL, None)

    def test_filter_miss_skips_prompt(self, client: Mock) -> None:
        """Test a non-matching url map is never prompted for."""
        client.list.return_value = [{"name": "banana-url-map"}]
        confirmation = RecordingConfirmation()

        assert compute.UrlMaps(client, confirmation).list("grape") == []
        assert confirmation.messages == []

    def test_decline_skips_delete(self, client: Mock) -> None:
        """Test a declined url map is never deleted."""
        client.list.return_value = [{"name": "banana-url-map"}]

        assert compute.UrlMaps(client, RecordingConfirmation(default=False)).list("banana") == []
        client.delete.assert_not_called()

    def test_listing_error(self, client: Mock) -> None:
        """Test an API error while listing names the kind."""
        client.list.side_effect = http_error(500, "some error")

        with pytest.raises(ListingError) as exc_info:
            compute.UrlMaps(client, RecordingConfirmation()).list("banana")

        assert str(exc_info.value).startswith("Listing url maps: ")
        assert "some error" in str(exc_info.value)

    def test_operation_failure_is_deletion_error(self, client: Mock) -> None:
        """Test a failed delete operation surfaces as a DeletionError."""
        client.list.return_value = [{"name": "banana-url-map"}]
        client.delete.side_effect = OperationError("resource is in use")

        handle = compute.UrlMaps(client, RecordingConfirmation()).list("")[0]

        with pytest.raises(DeletionError, match="^ERROR deleting url map banana-url-map: resource is in use$"):
            handle.delete()

    @pytest.mark.parametrize(
        "error",
        [TimeoutError("timed out"), httplib2.ServerNotFoundError("Unable to find the server")],
    )
    def test_transport_error_while_listing(self, client: Mock, error: Exception) -> None:
        """Test network failures while listing are listing errors."""
        client.list.side_effect = error

        with pytest.raises(ListingError, match="^Listing url maps: "):
            compute.UrlMaps(client, RecordingConfirmation()).list("banana")

    def test_transport_error_while_deleting_does_not_stop_run(
        self, client: Mock, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a timeout on one delete is logged and the next item is still deleted."""
        client.list.return_value = [{"name": "banana-a"}, {"name": "banana-b"}]
        client.delete.side_effect = [TimeoutError("timed out"), None]
        leftovers = Leftovers([compute.UrlMaps(client, RecordingConfirmation())])

        with caplog.at_level(logging.INFO, logger="leftovers"):
            report = leftovers.delete("banana")

        assert client.delete.call_count == 2
        assert [outcome.name for outcome in report.failed] == ["banana-a"]
        assert "ERROR deleting url map banana-a: timed out" in caplog.text
        assert "SUCCESS deleting banana-b" in caplog.text


class TestScopedKinds:
    """Test suite for regional and zonal kinds."""

    def test_regional_delete_uses_region(self, client: Mock) -> None:
        """Test regional items are deleted in the region they live in."""
        client.list.return_value = [
            {"name": "banana-address", "region": "https://www.googleapis.com/compute/v1/projects/p/regions/us-east1"}
        ]

        compute.Addresses(client, RecordingConfirmation()).list("")[0].delete()

        client.list.assert_called_once_with("addresses", REGIONAL)
        client.delete.assert_called_once_with("addresses", "address", "banana-address", REGIONAL, "us-east1")

    def test_zonal_delete_uses_zone(self, client: Mock) -> None:
        """Test zonal items are deleted in the zone they live in."""
        client.list.return_value = [
            {"name": "banana-vm", "zone": "https://www.googleapis.com/compute/v1/projects/p/zones/us-east1-b"}
        ]

        compute.Instances(client, RecordingConfirmation()).list("banana")[0].delete()

        client.delete.assert_called_once_with("instances", "instance", "banana-vm", ZONAL, "us-east1-b")

    def test_global_addresses_use_address_param(self, client: Mock) -> None:
        """Test global addresses share the address delete parameter."""
        client.list.return_value = [{"name": "banana-ip"}]

        compute.GlobalAddresses(client, RecordingConfirmation()).list("")[0].delete()

        client.delete.assert_called_once_with("globalAddresses", "address", "banana-ip", GLOBAL, None)

    @pytest.mark.parametrize("kind", [compute.Networks, compute.Subnetworks])
    def test_default_network_is_protected(self, client: Mock, kind: type) -> None:
        """Test the default network and its subnetworks are never offered."""
        region = "https://www.googleapis.com/compute/v1/projects/p/regions/us-east1"
        client.list.return_value = [
            {"name": "default", "region": region},
            {"name": "banana-network", "region": region},
        ]

        handles = kind(client, RecordingConfirmation()).list("")

        assert [handle.name for handle in handles] == ["banana-network"]


class TestGcpKinds:
    """Test suite for the registered GCP kinds."""

    def test_every_kind_is_labelled(self) -> None:
        """Test each kind declares its labels and API collection."""
        for kind in GCP_KINDS:
            assert kind.kind and kind.plural, kind
            assert kind.collection and kind.param, kind
            assert kind.scope in (GLOBAL, REGIONAL, ZONAL), kind

    def test_plural_labels_are_unique(self) -> None:
        """Test listing errors can be traced to exactly one kind."""
        plurals = [kind.plural for kind in GCP_KINDS]

        assert len(plurals) == len(set(plurals))

    def test_forwarding_rules_before_their_targets(self) -> None:
        """Test load balancer front ends go before what they reference."""
        order = GCP_KINDS.index
        assert order(compute.GlobalForwardingRules) < order(compute.TargetHttpProxies)
        assert order(compute.TargetHttpProxies) < order(compute.UrlMaps)
        assert order(compute.UrlMaps) < order(compute.BackendServices)
        assert order(compute.InstanceGroupManagers) < order(compute.InstanceTemplates)
        assert order(compute.Instances) < order(compute.Disks)
        assert order(compute.Subnetworks) < order(compute.Networks)


class TestNewLeftovers:
    """Test suite for the GCP new_leftovers factory."""

    def test_registers_kinds_in_order(self) -> None:
        """Test every kind shares one project-scoped client."""
        key = json.dumps({"type": "service_account", "project_id": "banana-project"})
        logger = logging.getLogger("leftovers.test")

        leftovers = new_leftovers(AutoApprove(), key, logger=logger, service=Mock())

        assert [type(resource) for resource in leftovers.resources] == GCP_KINDS
        clients = {id(resource.client) for resource in leftovers.resources}
        assert len(clients) == 1
        assert leftovers.resources[0].client.project == "banana-project"
        assert leftovers.logger is logger

    def test_missing_key(self) -> None:
        """Test construction fails without a service account key."""
        with pytest.raises(CredentialValidationError, match="^Missing service account key.$"):
            new_leftovers(AutoApprove(), "", service=Mock())
