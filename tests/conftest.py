"""Test configuration and fixtures for bucket-explorer."""

import boto3
import pytest
from moto import mock_aws

from bucket_explorer.schemas import ExplorerConfig

CONFIG_ENV_VARS = [
    "BUCKET_NAME",
    "AWS_REGION",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "AWS_ENDPOINT_URL",
    "BASE_URL",
    "EXCLUDE_PATTERN",
    "PAGE_SIZE",
]

TEST_BUCKET = "test-bucket"
TEST_BASE_URL = "https://files.example.com"

SAMPLE_OBJECTS = {
    "readme.txt": b"top level",
    "data/file1.txt": b"content1",
    "data/file2.txt": b"content2content2",
    "data/secret.txt": b"hidden",
    "data/2023/file3.txt": b"content3",
    "data/2024/file4.txt": b"content4",
    "data/archive/file5.txt": b"content5",
}


class FakeS3Client:
    """Replays scripted ``list_objects_v2`` responses and records the calls.

    A response that is an exception instance is raised instead of returned.
    ``on_call`` receives the 1-based call number before the response is
    produced.
    """

    def __init__(self, responses, on_call=None):
        self.responses = iter(responses)
        self.calls = []
        self.on_call = on_call

    def list_objects_v2(self, **kwargs):
        self.calls.append(kwargs)
        if self.on_call is not None:
            self.on_call(len(self.calls))
        response = next(self.responses)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def clean_env(monkeypatch):
    """Remove explorer configuration variables from the environment."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def explorer_config(clean_env):
    """A complete explorer configuration for the test bucket."""
    return ExplorerConfig(
        bucket_name=TEST_BUCKET,
        aws_region="us-east-1",
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        base_url=TEST_BASE_URL,
    )


@pytest.fixture
def fake_client():
    """Factory for scripted S3 clients."""
    return FakeS3Client


@pytest.fixture
def s3_bucket():
    """Mocked S3 bucket populated with SAMPLE_OBJECTS."""
    with mock_aws():
        client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        client.create_bucket(Bucket=TEST_BUCKET)
        for key, body in SAMPLE_OBJECTS.items():
            client.put_object(Bucket=TEST_BUCKET, Key=key, Body=body)
        yield client


def page(prefixes=(), keys=(), token=None):
    """Build one ``list_objects_v2`` response page."""
    response = {
        "CommonPrefixes": [{"Prefix": prefix} for prefix in prefixes],
        "Contents": [{"Key": key, "Size": len(key)} for key in keys],
        "IsTruncated": token is not None,
    }
    if token is not None:
        response["NextContinuationToken"] = token
    return response


@pytest.fixture
def make_page():
    """Factory for ``list_objects_v2`` response pages."""
    return page
