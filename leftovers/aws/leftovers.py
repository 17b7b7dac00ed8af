"""AWS cleanup entry point.

Builds the orchestrator with every AWS resource kind in deletion order.
"""

from __future__ import annotations

import logging
from typing import Optional

import boto3

from ..cleanup.confirmation import Confirmation
from ..cleanup.kind import LOGGER_NAME
from ..cleanup.orchestrator import Leftovers
from . import ec2, elb, iam, rds, s3
from .client import create_boto_client, create_session
from .credentials import AwsCredentials, validate_credentials

# Registration order, top to bottom. Principals lose their policies before the
# managed policies are deleted; load balancers and databases release their
# network interfaces before instances, security groups and finally VPCs go.
AWS_KINDS = [
    iam.Roles,
    iam.Users,
    iam.Policies,
    iam.InstanceProfiles,
    iam.ServerCertificates,
    elb.LoadBalancers,
    elb.V2LoadBalancers,
    elb.TargetGroups,
    rds.DBInstances,
    rds.DBSubnetGroups,
    ec2.Instances,
    ec2.Addresses,
    ec2.KeyPairs,
    ec2.NetworkInterfaces,
    ec2.SecurityGroups,
    ec2.Volumes,
    ec2.Tags,
    ec2.Vpcs,
    s3.Buckets,
]


def new_leftovers(
    confirmation: Confirmation,
    access_key_id: Optional[str],
    secret_access_key: Optional[str],
    region: Optional[str],
    session_token: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
    session: Optional[boto3.Session] = None,
) -> Leftovers:
    """Create an AWS cleanup orchestrator.

    Args:
        confirmation: Gate consulted for every listed resource
        access_key_id: AWS access key id
        secret_access_key: AWS secret access key
        region: AWS region to clean up
        session_token: Optional STS session token
        logger: Sink for output lines (default: "leftovers" logger)
        session: Pre-built boto3 session (built from the credentials if omitted)

    Returns:
        Leftovers orchestrator with all AWS kinds registered

    Raises:
        CredentialValidationError: If any credential field is missing
    """
    credentials = validate_credentials(access_key_id, secret_access_key, region, session_token)
    logger = logger or logging.getLogger(LOGGER_NAME)
    session = session or create_session(credentials)

    return Leftovers(build_resources(session, credentials, confirmation, logger), logger=logger)


def build_resources(
    session: boto3.Session,
    credentials: AwsCredentials,
    confirmation: Confirmation,
    logger: logging.Logger,
) -> list:
    """Instantiate every AWS kind against shared clients, in AWS_KINDS order."""
    iam_client = create_boto_client(session, "iam")
    ec2_client = create_boto_client(session, "ec2")
    elb_client = create_boto_client(session, "elb")
    elbv2_client = create_boto_client(session, "elbv2")
    rds_client = create_boto_client(session, "rds")
    s3_client = create_boto_client(session, "s3")

    return [
        iam.Roles(iam_client, confirmation, logger=logger),
        iam.Users(iam_client, confirmation, logger=logger),
        iam.Policies(iam_client, confirmation, logger),
        iam.InstanceProfiles(iam_client, confirmation, logger),
        iam.ServerCertificates(iam_client, confirmation, logger),
        elb.LoadBalancers(elb_client, confirmation, logger),
        elb.V2LoadBalancers(elbv2_client, confirmation, logger),
        elb.TargetGroups(elbv2_client, confirmation, logger),
        rds.DBInstances(rds_client, confirmation, logger),
        rds.DBSubnetGroups(rds_client, confirmation, logger),
        ec2.Instances(ec2_client, confirmation, logger),
        ec2.Addresses(ec2_client, confirmation, logger),
        ec2.KeyPairs(ec2_client, confirmation, logger),
        ec2.NetworkInterfaces(ec2_client, confirmation, logger),
        ec2.SecurityGroups(ec2_client, confirmation, logger),
        ec2.Volumes(ec2_client, confirmation, logger),
        ec2.Tags(ec2_client, confirmation, logger),
        ec2.Vpcs(ec2_client, confirmation, logger=logger),
        s3.Buckets(s3_client, confirmation, s3.BucketManager(credentials.region), logger),
    ]
