# ABOUTME: AWS utility functions for cfstack
# ABOUTME: Handles sessions, account lookups, bucket checks and account-wide listings

"""AWS utilities for CLI commands."""

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .cf_exceptions import AccountError, QueryError
from .pagination import PageResult, paginate_all

logger = logging.getLogger(__name__)

# ACM certificates used by CloudFront must live in us-east-1
CERTIFICATE_REGION = "us-east-1"

CERTIFICATE_STATUSES = [
    "VALIDATION_TIMED_OUT",
    "PENDING_VALIDATION",
    "EXPIRED",
    "INACTIVE",
    "ISSUED",
    "FAILED",
    "REVOKED",
]


def create_session(profile: str | None = None, region: str | None = None) -> boto3.Session:
    """Create a boto3 session for a named profile and region."""
    if profile:
        return boto3.Session(profile_name=profile, region_name=region)
    return boto3.Session(region_name=region)


def get_account_id(session: boto3.Session) -> str:
    """Get the current AWS account ID."""
    try:
        response = session.client("sts").get_caller_identity()
        return response["Account"]
    except (ClientError, BotoCoreError) as e:
        raise AccountError(f"Could not determine account id: {e}")


def get_bucket_name(session: boto3.Session, region: str) -> str:
    """Name of the per-account, per-region template bucket."""
    return f"cf-templates-{get_account_id(session)}-{region}"


def bucket_exists(session: boto3.Session, bucket: str) -> bool:
    """Check if an S3 bucket exists and is reachable."""
    try:
        session.client("s3").head_bucket(Bucket=bucket)
        return True
    except ClientError:
        return False


def list_buckets(session: boto3.Session) -> dict[str, Any]:
    """Return the ListBuckets response (owner plus buckets)."""
    try:
        response = session.client("s3").list_buckets()
    except (ClientError, BotoCoreError) as e:
        raise QueryError(f"Could not list buckets: {e}")
    return {"Owner": response.get("Owner", {}), "Buckets": response.get("Buckets", [])}


def list_certificates(session: boto3.Session) -> PageResult:
    """List ACM certificates in us-east-1 regardless of the session region."""
    client = session.client("acm", region_name=CERTIFICATE_REGION)
    return paginate_all(
        client,
        "list_certificates",
        "CertificateSummaryList",
        CertificateStatuses=CERTIFICATE_STATUSES,
    )


def list_log_groups(session: boto3.Session) -> PageResult:
    """List CloudWatch log groups in the session region."""
    return paginate_all(session.client("logs"), "describe_log_groups", "logGroups")


def delete_log_group(session: boto3.Session, name: str) -> None:
    """Delete a CloudWatch log group."""
    try:
        session.client("logs").delete_log_group(logGroupName=name)
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceNotFoundException":
            raise QueryError(f"{name} does not exist")
        raise QueryError(f"Could not delete log group {name}: {e.response['Error']['Message']}")


def get_account_details(session: boto3.Session) -> dict[str, Any]:
    """
    Describe the caller identity.

    IAM user details (name, creation date, groups and attached policies) are
    added when the caller is an IAM user; roles and federated callers only
    get the STS identity.
    """
    try:
        identity = session.client("sts").get_caller_identity()
    except (ClientError, BotoCoreError) as e:
        raise AccountError(str(e))

    details = {
        "AccountId": identity["Account"],
        "UserId": identity["UserId"],
        "Arn": identity["Arn"],
    }

    if ":user/" not in identity["Arn"]:
        return details

    iam = session.client("iam")
    try:
        user = iam.get_user()["User"]
        details["UserName"] = user["UserName"]
        details["CreateDate"] = user["CreateDate"]
        groups = iam.list_groups_for_user(UserName=user["UserName"])
        details["GroupList"] = [group["GroupName"] for group in groups.get("Groups", [])]
        policies = iam.list_attached_user_policies(UserName=user["UserName"])
        details["AttachedManagedPolicies"] = [
            policy["PolicyName"] for policy in policies.get("AttachedPolicies", [])
        ]
    except ClientError as e:
        raise AccountError(f"Could not read IAM user details: {e.response['Error']['Message']}")

    return details
