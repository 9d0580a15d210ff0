# ABOUTME: Shared pytest fixtures and stack event builders
# ABOUTME: Provides moto-backed sessions and mocked CloudFormation clients

import os
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws


@pytest.fixture(scope="function")
def aws_credentials():
    """Mocked AWS Credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture(scope="function")
def aws_session(aws_credentials):
    with mock_aws():
        yield boto3.Session(region_name="us-east-1")


@pytest.fixture
def cf_client():
    """CloudFormation client mock with no stack events by default."""
    client = MagicMock()
    client.get_paginator.return_value.paginate.side_effect = lambda **kwargs: iter([{"StackEvents": []}])
    return client


@pytest.fixture
def session(cf_client):
    mock_session = MagicMock()
    mock_session.client.return_value = cf_client
    return mock_session


def api_event(event_id, at, status="CREATE_IN_PROGRESS", logical_id="Bucket", reason=None):
    """A describe_stack_events item."""
    event = {
        "EventId": event_id,
        "StackName": "web-app",
        "Timestamp": at,
        "ResourceType": "AWS::S3::Bucket" if logical_id != "web-app" else "AWS::CloudFormation::Stack",
        "LogicalResourceId": logical_id,
        "ResourceStatus": status,
    }
    if reason:
        event["ResourceStatusReason"] = reason
    return event


def later(seconds: float) -> datetime:
    return datetime.now(timezone.utc) + timedelta(seconds=seconds)


def earlier(seconds: float) -> datetime:
    return datetime.now(timezone.utc) - timedelta(seconds=seconds)
