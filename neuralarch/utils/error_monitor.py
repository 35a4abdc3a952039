"""
Error monitoring for the NeuralArch Search API
Tracks error counts, rates and message patterns, mirrored to Redis when available
"""

import re
import time
import os
from typing import Dict, Optional, Any
from collections import defaultdict

from neuralarch.cache.redis_client import cache_client
from .logger import get_logger

logger = get_logger()

# distinct messages kept per error type
MAX_PATTERNS_PER_TYPE = 50

_UUID = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE)
_NUMBER = re.compile(r"\b\d+\b")


def message_pattern(message: str) -> str:
    """Message with ids and numbers replaced, so one pattern covers every row"""
    pattern = _UUID.sub("<id>", message)
    return _NUMBER.sub("<n>", pattern)[:200]


class ErrorMonitor:
    """Counts errors per type and raises log alerts when rates cross thresholds"""

    def __init__(self):
        self.error_counts = defaultdict(int)
        self.error_timestamps = defaultdict(list)
        self.alert_thresholds = {
            "critical": int(os.getenv("ERROR_ALERT_CRITICAL", "10")),  # per minute
            "warning": int(os.getenv("ERROR_ALERT_WARNING", "5")),
        }
        self.alert_cooldown = int(os.getenv("ERROR_ALERT_COOLDOWN", "300"))
        self.last_alert_time = {}
        self.error_patterns = defaultdict(set)

    async def track_error(self, error_type: str, error_message: str, request_id: Optional[str] = None):
        """Record one error occurrence"""
        current_time = time.time()

        self.error_counts[error_type] += 1
        self.error_timestamps[error_type].append(current_time)

        # keep the last hour only
        cutoff = current_time - 3600
        self.error_timestamps[error_type] = [
            ts for ts in self.error_timestamps[error_type] if ts > cutoff
        ]

        if error_message:
            patterns = self.error_patterns[error_type]
            if len(patterns) < MAX_PATTERNS_PER_TYPE:
                patterns.add(message_pattern(error_message))

        if cache_client.available:
            await self._persist_to_redis(error_type, current_time, error_message, request_id)

        self._check_alert_conditions(error_type, current_time)

    async def _persist_to_redis(self, error_type: str, timestamp: float,
                                error_message: str, request_id: Optional[str] = None):
        error_data = {
            "type": error_type,
            "timestamp": timestamp,
            "message": (error_message or "")[:500],
            "request_id": request_id,
            "environment": os.getenv("ENVIRONMENT", "development")
        }
        error_key = f"error:{error_type}:{int(timestamp * 1000)}"
        await cache_client.set(error_key, error_data, expire=86400)

    def _check_alert_conditions(self, error_type: str, current_time: float):
        minute_ago = current_time - 60
        recent_errors = len([ts for ts in self.error_timestamps[error_type] if ts > minute_ago])

        alert_level = None
        if recent_errors >= self.alert_thresholds["critical"]:
            alert_level = "critical"
        elif recent_errors >= self.alert_thresholds["warning"]:
            alert_level = "warning"

        last_alert = self.last_alert_time.get(error_type, 0)
        if alert_level and (current_time - last_alert) > self.alert_cooldown:
            patterns = list(self.error_patterns[error_type])[:10]
            logger.log_error(
                "system",
                f"alert_{alert_level}",
                f"{error_type}: {recent_errors} errors in the last minute, patterns={patterns}",
            )
            self.last_alert_time[error_type] = current_time

    def get_error_stats(self, time_window_minutes: int = 60) -> Dict[str, Dict]:
        """Error statistics for the given window"""
        cutoff = time.time() - (time_window_minutes * 60)
        stats = {}

        for error_type, timestamps in self.error_timestamps.items():
            recent_timestamps = [ts for ts in timestamps if ts > cutoff]
            stats[error_type] = {
                "total_count": len(recent_timestamps),
                "rate_per_minute": len(recent_timestamps) / time_window_minutes,
                "last_occurrence": max(recent_timestamps) if recent_timestamps else None,
                "patterns": list(self.error_patterns[error_type])[:10],
            }

        return stats

    async def get_redis_error_stats(self, time_window_hours: int = 24) -> Dict[str, Any]:
        """Error statistics persisted in Redis"""
        if not cache_client.available:
            return {"redis_available": False}

        recent_cutoff = time.time() - (time_window_hours * 3600)
        error_types = defaultdict(int)
        total = 0
        for key in await cache_client.scan_keys("error:*:*"):
            error_data = await cache_client.get(key)
            if error_data and error_data.get("timestamp", 0) > recent_cutoff:
                error_types[error_data["type"]] += 1
                total += 1

        return {"redis_available": True, "total_errors": total, "error_types": dict(error_types)}

    def reset(self):
        self.error_counts.clear()
        self.error_timestamps.clear()
        self.error_patterns.clear()
        self.last_alert_time.clear()


# Global error monitor instance
error_monitor = ErrorMonitor()


async def track_error(error_type: str, error_message: str, request_id: Optional[str] = None):
    await error_monitor.track_error(error_type, error_message, request_id)


def get_error_stats(time_window_minutes: int = 60) -> Dict[str, Dict]:
    return error_monitor.get_error_stats(time_window_minutes)


async def get_redis_error_stats(time_window_hours: int = 24) -> Dict[str, Any]:
    return await error_monitor.get_redis_error_stats(time_window_hours)


class ErrorTypes:
    DATABASE = "database_error"
    VALIDATION = "validation_error"
    NOT_FOUND = "resource_not_found"
    CONFIG = "configuration_error"
    RATE_LIMIT = "rate_limit_exceeded"
    HTTP = "http_error"
    UNKNOWN = "unknown_error"
