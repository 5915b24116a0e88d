"""Process-level settings for bucket-explorer."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Logging and tracing settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "bucket-explorer"

    model_config = {
        "env_prefix": "BUCKET_EXPLORER_",
        "case_sensitive": False,
    }


settings = Settings()
