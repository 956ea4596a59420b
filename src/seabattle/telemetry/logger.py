"""Logging setup with an optional OpenTelemetry log exporter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource

if TYPE_CHECKING:
    from .config import TelemetryConfig

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s "
    "| trace_id=%(otelTraceID)s span_id=%(otelSpanID)s"
)

_OTLP_HANDLER: logging.Handler | None = None


class _OtelContextFilter(logging.Filter):
    """Fills trace/span placeholders when no span context was injected."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        if not hasattr(record, "otelTraceID"):
            record.otelTraceID = "-"
        if not hasattr(record, "otelSpanID"):
            record.otelSpanID = "-"
        return True


def get_logger(name: str = "seabattle") -> logging.Logger:
    return logging.getLogger(name)


def init_logging(config: TelemetryConfig) -> logging.Logger:
    """Configure console logging once and attach the OTLP handler when an endpoint is set."""
    global _OTLP_HANDLER

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(format=LOG_FORMAT)
        for handler in root_logger.handlers:
            handler.addFilter(_OtelContextFilter())

    package_logger = get_logger("seabattle")
    package_logger.setLevel(config.log_level)

    if config.otlp_logs_endpoint and _OTLP_HANDLER is None:
        provider = LoggerProvider(resource=Resource.create(config.resource_dict()))
        exporter = OTLPLogExporter(endpoint=config.otlp_logs_endpoint, insecure=True)
        provider.add_log_record_processor(BatchLogRecordProcessor(exporter))
        set_logger_provider(provider)

        _OTLP_HANDLER = LoggingHandler(level=logging.NOTSET, logger_provider=provider)
        _OTLP_HANDLER.addFilter(_OtelContextFilter())
        root_logger.addHandler(_OTLP_HANDLER)

    return package_logger
