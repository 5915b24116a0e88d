"""S3 client management."""

from .s3_client import S3ClientManager

__all__ = ["S3ClientManager"]
