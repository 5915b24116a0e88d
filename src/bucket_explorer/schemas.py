"""Explorer configuration schema.

``ExplorerConfig`` is the explicit configuration struct for the listing engine.
It is read once at process start (from the environment, or from keyword
overrides) and then passed to the gateway and projector. Query code never
reads the environment itself.
"""

import re
from re import Pattern
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from bucket_explorer.core import get_logger
from bucket_explorer.core.exceptions import ConfigurationError

logger = get_logger(__name__)

# Negative lookahead on the empty string: never matches anything
MATCH_NOTHING = r"(?!)"

DELIMITER = "/"


class ExplorerConfig(BaseSettings):
    """Bucket identity, credentials and link settings for the explorer.

    Field names double as environment variable names (case-insensitive),
    e.g. ``BUCKET_NAME`` or ``AWS_SECRET_ACCESS_KEY``.
    """

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    bucket_name: str = Field(..., description="Bucket to browse")
    aws_region: str = Field(..., description="AWS region of the bucket")
    aws_access_key_id: str = Field(..., description="AWS access key ID")
    aws_secret_access_key: str = Field(..., description="AWS secret access key")
    base_url: str = Field(
        ..., description="Base address used to build download and folder links"
    )
    exclude_pattern: Pattern[str] = Field(
        default=re.compile(MATCH_NOTHING),
        description="Regular expression over full keys; matches are hidden",
    )
    aws_session_token: Optional[str] = Field(
        None, description="AWS session token for temporary credentials"
    )
    aws_endpoint_url: Optional[str] = Field(
        None, description="Custom S3 endpoint URL for S3-compatible services"
    )
    page_size: Optional[int] = Field(
        None, ge=1, le=1000, description="MaxKeys per list request"
    )

    @field_validator(
        "bucket_name",
        "aws_region",
        "aws_access_key_id",
        "aws_secret_access_key",
        "base_url",
    )
    @classmethod
    def _require_value(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("exclude_pattern", mode="before")
    @classmethod
    def _default_pattern(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return MATCH_NOTHING
        return value

    @field_validator("aws_session_token", "aws_endpoint_url", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def load_explorer_config(**overrides: Any) -> ExplorerConfig:
    """Build and validate the explorer configuration.

    Values come from the environment unless given as keyword overrides.

    Returns:
        Validated ExplorerConfig

    Raises:
        ConfigurationError: If a required value is missing or blank, or the
            exclusion pattern does not compile
    """
    try:
        config = ExplorerConfig(**overrides)
    except PydanticValidationError as e:
        fields = sorted(
            {str(error["loc"][0]).upper() for error in e.errors() if error["loc"]}
        )
        error_msg = f"Invalid or missing configuration: {', '.join(fields)}"
        logger.error(error_msg, error=str(e))
        raise ConfigurationError(error_msg) from e

    logger.info(
        "Explorer configuration loaded",
        bucket=config.bucket_name,
        region=config.aws_region,
        endpoint_url=config.aws_endpoint_url,
    )
    return config
