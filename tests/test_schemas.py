"""Tests for explorer configuration."""

from unittest.mock import patch

import pytest

from bucket_explorer.core.exceptions import ConfigurationError
from bucket_explorer.objectstorage.clients import S3ClientManager
from bucket_explorer.schemas import ExplorerConfig, load_explorer_config

REQUIRED_ENV = {
    "BUCKET_NAME": "my-bucket",
    "AWS_REGION": "ap-southeast-2",
    "AWS_ACCESS_KEY_ID": "key123",
    "AWS_SECRET_ACCESS_KEY": "secret456",
    "BASE_URL": "https://my-bucket.example.com",
}


@pytest.fixture
def config_env(clean_env):
    """Environment with every required configuration value set."""
    for name, value in REQUIRED_ENV.items():
        clean_env.setenv(name, value)
    return clean_env


class TestExplorerConfig:
    """Test configuration construction."""

    def test_config_creation(self, clean_env):
        config = ExplorerConfig(
            bucket_name="my-bucket",
            aws_region="us-west-2",
            aws_access_key_id="key123",
            aws_secret_access_key="secret456",
            base_url="https://my-bucket.example.com",
        )
        assert config.bucket_name == "my-bucket"
        assert config.aws_region == "us-west-2"
        assert config.aws_session_token is None
        assert config.aws_endpoint_url is None
        assert config.page_size is None

    def test_default_pattern_matches_nothing(self, explorer_config):
        pattern = explorer_config.exclude_pattern
        for path in ["", "a/", "secret.txt", ".hidden/x"]:
            assert pattern.search(path) is None

    def test_values_trimmed(self, clean_env):
        config = ExplorerConfig(
            bucket_name="  my-bucket ",
            aws_region="us-west-2",
            aws_access_key_id="key123",
            aws_secret_access_key="secret456",
            base_url="https://my-bucket.example.com",
        )
        assert config.bucket_name == "my-bucket"


class TestLoadExplorerConfig:
    """Test loading configuration from the environment."""

    def test_load_from_environment(self, config_env):
        config = load_explorer_config()

        assert config.bucket_name == "my-bucket"
        assert config.aws_region == "ap-southeast-2"
        assert config.base_url == "https://my-bucket.example.com"

    def test_optional_values_from_environment(self, config_env):
        config_env.setenv("EXCLUDE_PATTERN", r"^private/")
        config_env.setenv("AWS_ENDPOINT_URL", "http://localhost:9000")
        config_env.setenv("AWS_SESSION_TOKEN", "token789")
        config_env.setenv("PAGE_SIZE", "100")

        config = load_explorer_config()

        assert config.exclude_pattern.search("private/x.txt")
        assert not config.exclude_pattern.search("public/private/x.txt")
        assert config.aws_endpoint_url == "http://localhost:9000"
        assert config.aws_session_token == "token789"
        assert config.page_size == 100

    def test_blank_pattern_uses_default(self, config_env):
        config_env.setenv("EXCLUDE_PATTERN", "   ")

        config = load_explorer_config()

        assert config.exclude_pattern.search("anything") is None

    def test_overrides_take_precedence(self, config_env):
        config = load_explorer_config(bucket_name="other-bucket")

        assert config.bucket_name == "other-bucket"

    @pytest.mark.parametrize("missing", sorted(REQUIRED_ENV))
    def test_missing_required_value(self, config_env, missing):
        config_env.delenv(missing)

        with pytest.raises(ConfigurationError) as exc_info:
            load_explorer_config()

        assert missing in str(exc_info.value)

    def test_blank_required_value(self, config_env):
        config_env.setenv("AWS_SECRET_ACCESS_KEY", "")

        with pytest.raises(ConfigurationError, match="AWS_SECRET_ACCESS_KEY"):
            load_explorer_config()

    def test_all_missing_reported(self, clean_env):
        with pytest.raises(ConfigurationError) as exc_info:
            load_explorer_config()

        for name in REQUIRED_ENV:
            assert name in str(exc_info.value)

    def test_invalid_pattern(self, config_env):
        config_env.setenv("EXCLUDE_PATTERN", "(unclosed")

        with pytest.raises(ConfigurationError, match="EXCLUDE_PATTERN"):
            load_explorer_config()

    def test_invalid_page_size(self, config_env):
        config_env.setenv("PAGE_SIZE", "0")

        with pytest.raises(ConfigurationError, match="PAGE_SIZE"):
            load_explorer_config()


class TestS3ClientManager:
    """Test boto3 client creation from configuration."""

    @patch("bucket_explorer.objectstorage.clients.s3_client.boto3.client")
    def test_client_created_once(self, mock_client, explorer_config):
        manager = S3ClientManager(explorer_config)

        first = manager.client
        second = manager.client

        assert first is second
        mock_client.assert_called_once()
        args, kwargs = mock_client.call_args
        assert args == ("s3",)
        assert kwargs["region_name"] == "us-east-1"
        assert kwargs["aws_access_key_id"] == "test_key"
        assert kwargs["aws_secret_access_key"] == "test_secret"
        assert "endpoint_url" not in kwargs
        assert "aws_session_token" not in kwargs

    @patch("bucket_explorer.objectstorage.clients.s3_client.boto3.client")
    def test_optional_settings_forwarded(self, mock_client, explorer_config):
        config = explorer_config.model_copy(
            update={
                "aws_endpoint_url": "http://localhost:9000",
                "aws_session_token": "token789",
            }
        )

        S3ClientManager(config).client

        kwargs = mock_client.call_args.kwargs
        assert kwargs["endpoint_url"] == "http://localhost:9000"
        assert kwargs["aws_session_token"] == "token789"

    @patch("bucket_explorer.objectstorage.clients.s3_client.boto3.client")
    def test_retries_disabled(self, mock_client, explorer_config):
        S3ClientManager(explorer_config).client

        botocore_config = mock_client.call_args.kwargs["config"]
        assert botocore_config.retries == {"total_max_attempts": 1}
