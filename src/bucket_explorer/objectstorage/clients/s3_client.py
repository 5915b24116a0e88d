"""S3 client creation for the explorer.

The S3ClientManager turns an ExplorerConfig into a boto3 S3 client. The
client is created once and shared read-only by every listing query; boto3
clients are safe to use from several threads.

Retries are disabled on the client: a failed list call surfaces to the caller,
who owns any retry policy.

S3-Compatible Services:
    Supports custom endpoints for services like MinIO and other S3-compatible
    object storage providers via ``aws_endpoint_url``.
"""

from typing import Any, Dict

import boto3
from botocore.config import Config

from bucket_explorer.core import get_logger
from bucket_explorer.schemas import ExplorerConfig

logger = get_logger(__name__)


class S3ClientManager:
    """Manages the S3 client built from an ExplorerConfig."""

    def __init__(self, config: ExplorerConfig):
        """Initialize S3 client manager.

        Args:
            config: Explorer configuration
        """
        self.config = config
        self._client = None
        logger.info("S3 client manager initialized", region=config.aws_region)

    @property
    def client(self):
        """Get or create S3 client instance."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """Create boto3 S3 client with the configured settings."""
        kwargs: Dict[str, Any] = {
            "region_name": self.config.aws_region,
            "aws_access_key_id": self.config.aws_access_key_id,
            "aws_secret_access_key": self.config.aws_secret_access_key,
            "config": Config(
                signature_version="s3v4",
                retries={"total_max_attempts": 1},
            ),
        }

        if self.config.aws_session_token:
            kwargs["aws_session_token"] = self.config.aws_session_token

        if self.config.aws_endpoint_url:
            kwargs["endpoint_url"] = self.config.aws_endpoint_url

        client = boto3.client("s3", **kwargs)  # type: ignore
        logger.info(
            "S3 client created",
            region=self.config.aws_region,
            endpoint_url=self.config.aws_endpoint_url,
        )
        return client
