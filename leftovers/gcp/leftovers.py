"""GCP cleanup entry point.

Builds the orchestrator with every Compute Engine kind in deletion order.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..cleanup.confirmation import Confirmation
from ..cleanup.kind import LOGGER_NAME
from ..cleanup.orchestrator import Leftovers
from . import compute
from .client import ComputeClient, create_compute_service
from .credentials import validate_credentials

# Registration order, top to bottom. Load balancer front ends go before the
# url maps, backends and health checks they reference; instances before the
# disks and templates they use; subnetworks before their networks.
GCP_KINDS = [
    compute.GlobalForwardingRules,
    compute.ForwardingRules,
    compute.TargetHttpProxies,
    compute.TargetHttpsProxies,
    compute.UrlMaps,
    compute.BackendServices,
    compute.TargetPools,
    compute.InstanceGroupManagers,
    compute.Instances,
    compute.InstanceGroups,
    compute.InstanceTemplates,
    compute.GlobalHealthChecks,
    compute.HttpHealthChecks,
    compute.HttpsHealthChecks,
    compute.SslCertificates,
    compute.Firewalls,
    compute.Routers,
    compute.Images,
    compute.Disks,
    compute.Addresses,
    compute.GlobalAddresses,
    compute.Subnetworks,
    compute.Networks,
]


def new_leftovers(
    confirmation: Confirmation,
    service_account_key: Optional[str],
    logger: Optional[logging.Logger] = None,
    service: Optional[Any] = None,
) -> Leftovers:
    """Create a GCP cleanup orchestrator.

    Args:
        confirmation: Gate consulted for every listed resource
        service_account_key: Path to a service account key file, or its JSON
        logger: Sink for output lines (default: "leftovers" logger)
        service: Pre-built compute discovery service (built from the key if omitted)

    Returns:
        Leftovers orchestrator with all Compute Engine kinds registered

    Raises:
        CredentialValidationError: If the key is missing or has no project id
    """
    credentials = validate_credentials(service_account_key)
    logger = logger or logging.getLogger(LOGGER_NAME)
    service = service or create_compute_service(credentials)

    client = ComputeClient(service, credentials.project_id)
    resources = [kind(client, confirmation, logger) for kind in GCP_KINDS]

    return Leftovers(resources, logger=logger)
