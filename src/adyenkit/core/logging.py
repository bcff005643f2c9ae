import json
import logging
import sys
from datetime import datetime, timezone

# Default Logger Name
LOGGER_NAME = "adyenkit"

REDACTED = "[REDACTED]"

# Attributes the HTTP client attaches to each per-attempt record
TRACE_FIELDS = (
    "http_method",
    "url_path",
    "attempt",
    "outcome",
    "latency_ms",
    "request_id",
    "reference",
    "idempotency_key",
)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, including per-attempt trace fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        for field in TRACE_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def configure_logging(level: int | str = logging.INFO, json_format: bool = False) -> logging.Logger:
    """
    Configure the adyenkit logger.

    Args:
        level: Logging level (e.g., logging.INFO, "DEBUG")
        json_format: Whether to emit one JSON object per line

    Returns:
        The configured logger instance.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Re-configuring replaces the previous handler
    if logger.handlers:
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if json_format:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # The application owns the root logger
    logger.propagate = False

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a child logger of adyenkit."""
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)


def mask_secret(value: str, visible: int = 4) -> str:
    """Mask a secret for log output, keeping a few characters at each end."""
    if len(value) <= visible * 2:
        return "****"
    return value[:visible] + "..." + value[-visible:]
