"""Logging and tracing for bucket listings.

Log records are rendered as JSON on stderr so that ``bucket-explorer list
--json`` keeps stdout for the listing itself. Spans for each prefix listing
are only recorded when ``BUCKET_EXPLORER_OTEL_ENABLED`` is set.
"""

import logging
import sys
from typing import Any

import structlog
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from .config import Settings, settings


def build_tracer_provider(config: Settings) -> TracerProvider | None:
    """Build a console-exporting tracer provider, or None when tracing is off."""
    if not config.otel_enabled:
        return None

    resource = Resource.create({"service.name": config.otel_service_name})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    return provider


def setup_tracing(config: Settings = settings) -> None:
    provider = build_tracer_provider(config)
    if provider is not None:
        trace.set_tracer_provider(provider)


def setup_logging(config: Settings = settings) -> None:
    """Route structlog through stdlib logging as JSON lines on stderr."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, config.log_level.upper()),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)


def get_tracer(name: str) -> trace.Tracer:
    """Tracer for listing spans; a no-op tracer unless tracing is enabled."""
    return trace.get_tracer(name)


setup_logging()
setup_tracing()
