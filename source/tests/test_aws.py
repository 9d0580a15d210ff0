# ABOUTME: Tests for the AWS helper functions against moto
# ABOUTME: Covers bucket naming, account details and account-wide listings

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from cfstack.cli.utils.aws import (
    bucket_exists,
    delete_log_group,
    get_account_details,
    get_bucket_name,
    list_buckets,
    list_certificates,
    list_log_groups,
)
from cfstack.cli.utils.cf_exceptions import AccountError, QueryError

# Account id moto reports for every caller
ACCOUNT_ID = "123456789012"


def test_bucket_name_uses_account_and_region(aws_session):
    assert get_bucket_name(aws_session, "eu-west-1") == f"cf-templates-{ACCOUNT_ID}-eu-west-1"


def test_bucket_name_without_credentials():
    session = MagicMock()
    session.client.return_value.get_caller_identity.side_effect = ClientError(
        {"Error": {"Code": "ExpiredToken", "Message": "expired"}}, "GetCallerIdentity"
    )

    with pytest.raises(AccountError) as exc_info:
        get_bucket_name(session, "us-west-2")
    assert exc_info.value.exit_code == 5


def test_bucket_exists(aws_session):
    aws_session.client("s3").create_bucket(Bucket="present")

    assert bucket_exists(aws_session, "present")
    assert not bucket_exists(aws_session, "absent")


def test_list_buckets(aws_session):
    aws_session.client("s3").create_bucket(Bucket="templates")

    listing = list_buckets(aws_session)

    assert [bucket["Name"] for bucket in listing["Buckets"]] == ["templates"]
    assert "Owner" in listing


def test_list_buckets_failure():
    session = MagicMock()
    session.client.return_value.list_buckets.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "ListBuckets"
    )

    with pytest.raises(QueryError):
        list_buckets(session)


def test_log_groups(aws_session):
    logs = aws_session.client("logs")
    logs.create_log_group(logGroupName="/aws/lambda/web-app")
    logs.create_log_group(logGroupName="/aws/lambda/api")

    result = list_log_groups(aws_session)

    assert result.complete
    assert sorted(group["logGroupName"] for group in result.items) == ["/aws/lambda/api", "/aws/lambda/web-app"]

    delete_log_group(aws_session, "/aws/lambda/api")
    assert [group["logGroupName"] for group in list_log_groups(aws_session).items] == ["/aws/lambda/web-app"]


def test_delete_missing_log_group(aws_session):
    with pytest.raises(QueryError, match="does not exist"):
        delete_log_group(aws_session, "/aws/lambda/ghost")


def test_certificates_always_from_us_east_1():
    session = MagicMock()
    acm = session.client.return_value
    acm.get_paginator.return_value.paginate.return_value = iter(
        [{"CertificateSummaryList": [{"DomainName": "example.com", "CertificateArn": "arn:cert"}]}]
    )

    result = list_certificates(session)

    session.client.assert_called_once_with("acm", region_name="us-east-1")
    assert result.items[0]["DomainName"] == "example.com"
    assert "ISSUED" in acm.get_paginator.return_value.paginate.call_args.kwargs["CertificateStatuses"]


class TestAccountDetails:
    def test_role_caller_gets_identity_only(self):
        session = MagicMock()
        session.client.return_value.get_caller_identity.return_value = {
            "Account": ACCOUNT_ID,
            "UserId": "AROA123:session",
            "Arn": f"arn:aws:sts::{ACCOUNT_ID}:assumed-role/deployer/session",
        }

        details = get_account_details(session)

        assert details == {
            "AccountId": ACCOUNT_ID,
            "UserId": "AROA123:session",
            "Arn": f"arn:aws:sts::{ACCOUNT_ID}:assumed-role/deployer/session",
        }

    def test_user_caller_gets_iam_details(self):
        sts, iam = MagicMock(), MagicMock()
        sts.get_caller_identity.return_value = {
            "Account": ACCOUNT_ID,
            "UserId": "AIDA123",
            "Arn": f"arn:aws:iam::{ACCOUNT_ID}:user/ops",
        }
        iam.get_user.return_value = {"User": {"UserName": "ops", "CreateDate": "2024-01-01"}}
        iam.list_groups_for_user.return_value = {"Groups": [{"GroupName": "admins"}]}
        iam.list_attached_user_policies.return_value = {"AttachedPolicies": [{"PolicyName": "ReadOnlyAccess"}]}
        session = MagicMock()
        session.client.side_effect = lambda name, **kwargs: {"sts": sts, "iam": iam}[name]

        details = get_account_details(session)

        assert details["UserName"] == "ops"
        assert details["GroupList"] == ["admins"]
        assert details["AttachedManagedPolicies"] == ["ReadOnlyAccess"]
