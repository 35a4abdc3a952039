"""
Structured logging for the NeuralArch Search API

Every line written through the helpers below carries an ``event`` (request,
response, error, performance, cache) plus the context fields of that event.
Development renders them as ``key=value`` pairs after the message, production
as one JSON object per line.
"""

import logging
import json
import os
from datetime import datetime, timezone
from typing import Optional
from logging.handlers import RotatingFileHandler

# extra fields the helpers attach, in output order
CONTEXT_FIELDS = (
    "event",
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "response_size",
    "error_type",
    "operation",
    "success",
    "cache_key",
    "cache_hit",
)

LOG_FILE = "logs/neuralarch.log"


def _context(record: logging.LogRecord) -> dict:
    return {
        field: getattr(record, field)
        for field in CONTEXT_FIELDS
        if getattr(record, field, None) is not None
    }


class ConsoleFormatter(logging.Formatter):
    """Human-readable lines with the event context appended"""

    def __init__(self):
        super().__init__("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    def format(self, record):
        line = super().format(record)
        context = _context(record)
        if context:
            line += " | " + " ".join(f"{key}={value}" for key, value in context.items())
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per record; context fields become top-level keys"""

    def format(self, record):
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_record.update(_context(record))

        if record.exc_info and record.exc_info[1] is not None:
            exc_type, exc_value, _ = record.exc_info
            log_record["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": self.formatException(record.exc_info)
            }

        return json.dumps(log_record, ensure_ascii=False, default=str)


class StructuredLogger:
    """Owns the handlers of the ``neuralarch`` logger and writes the event lines"""

    def __init__(self):
        self.environment = os.getenv("ENVIRONMENT", "development").lower()
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.logger = logging.getLogger("neuralarch")
        self._configure_logging()

    def _configure_logging(self):
        self.logger.handlers.clear()
        self.logger.setLevel(getattr(logging, self.log_level, logging.INFO))

        console_handler = logging.StreamHandler()
        if self.environment == "production":
            console_handler.setFormatter(JsonFormatter())
            self.logger.addHandler(console_handler)
            self._add_file_handler()
        else:
            console_handler.setFormatter(ConsoleFormatter())
            self.logger.addHandler(console_handler)

    def _add_file_handler(self):
        try:
            os.makedirs(os.path.dirname(LOG_FILE), exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=LOG_FILE,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8"
            )
        except OSError as e:
            self.logger.error(f"Failed to create file handler: {e}")
            return
        file_handler.setFormatter(JsonFormatter())
        self.logger.addHandler(file_handler)

    def log_request(self, request_id: str, method: str, path: str):
        self.logger.info(
            f"{method} {path}",
            extra={"event": "request", "request_id": request_id, "method": method, "path": path},
        )

    def log_response(self, request_id: str, status_code: int, duration_ms: float, response_size: int):
        self.logger.info(
            f"{status_code} in {duration_ms:.2f}ms",
            extra={
                "event": "response",
                "request_id": request_id,
                "status_code": status_code,
                "duration_ms": round(duration_ms, 2),
                "response_size": response_size,
            },
        )

    def log_error(self, request_id: str, error_type: str, error_message: str, exc_info: bool = False):
        self.logger.error(
            f"{error_type}: {error_message}",
            extra={"event": "error", "request_id": request_id, "error_type": error_type},
            exc_info=exc_info,
        )

    def log_performance(self, operation: str, duration_ms: float, success: bool):
        """Façade timings; failures are raised to WARNING"""
        level = logging.DEBUG if success else logging.WARNING
        self.logger.log(
            level,
            f"{operation} {'ok' if success else 'failed'} in {duration_ms:.2f}ms",
            extra={
                "event": "performance",
                "operation": operation,
                "duration_ms": round(duration_ms, 2),
                "success": success,
            },
        )

    def log_cache_lookup(self, key: str, hit: bool):
        self.logger.debug(
            f"cache {'hit' if hit else 'miss'}: {key}",
            extra={"event": "cache", "cache_key": key, "cache_hit": hit},
        )


# Global logger instance
logger = StructuredLogger()


def get_logger() -> StructuredLogger:
    return logger


def log_request(request_id: str, method: str, path: str):
    logger.log_request(request_id, method, path)


def log_response(request_id: str, status_code: int, duration_ms: float, response_size: int):
    logger.log_response(request_id, status_code, duration_ms, response_size)


def log_error(request_id: str, error_type: str, error_message: str, exc_info: bool = False):
    logger.log_error(request_id, error_type, error_message, exc_info)


def log_performance(operation: str, duration_ms: float, success: bool):
    logger.log_performance(operation, duration_ms, success)


def log_cache_lookup(key: str, hit: bool):
    logger.log_cache_lookup(key, hit)
