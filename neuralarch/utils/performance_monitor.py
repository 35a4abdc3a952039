"""
Performance monitoring utilities for the NeuralArch Search API
Timing decorators for database façade calls and cache hit/miss counters
"""

import time
from typing import Dict, Any, Optional
from functools import wraps
from datetime import datetime, timezone
from .logger import log_performance, log_cache_lookup


class PerformanceMonitor:
    """Collects per-operation timing statistics in memory"""

    def __init__(self):
        self.operation_timings = {}
        self.cache_stats = {
            "hits": 0,
            "misses": 0,
            "total_operations": 0
        }

    def track_async_operation(self, operation_name: str):
        """Decorator to time an async function"""
        def decorator(func):
            @wraps(func)
            async def wrapper(*args, **kwargs):
                start_time = time.perf_counter()
                success = False
                try:
                    result = await func(*args, **kwargs)
                    success = True
                    return result
                finally:
                    duration_ms = (time.perf_counter() - start_time) * 1000
                    log_performance(operation_name, duration_ms, success)
                    self._update_operation_stats(operation_name, duration_ms, success)

            return wrapper
        return decorator

    def _update_operation_stats(self, operation_name: str, duration_ms: float, success: bool):
        if operation_name not in self.operation_timings:
            self.operation_timings[operation_name] = {
                "count": 0,
                "total_time_ms": 0,
                "success_count": 0,
                "failure_count": 0,
                "min_time_ms": float('inf'),
                "max_time_ms": 0,
                "last_execution": None
            }

        stats = self.operation_timings[operation_name]
        stats["count"] += 1
        stats["total_time_ms"] += duration_ms
        stats["min_time_ms"] = min(stats["min_time_ms"], duration_ms)
        stats["max_time_ms"] = max(stats["max_time_ms"], duration_ms)
        stats["last_execution"] = datetime.now(timezone.utc).isoformat()

        if success:
            stats["success_count"] += 1
        else:
            stats["failure_count"] += 1

    def track_cache_hit(self, key: str):
        self.cache_stats["hits"] += 1
        self.cache_stats["total_operations"] += 1
        log_cache_lookup(key, True)

    def track_cache_miss(self, key: str):
        self.cache_stats["misses"] += 1
        self.cache_stats["total_operations"] += 1
        log_cache_lookup(key, False)

    def get_operation_stats(self, operation_name: Optional[str] = None) -> Dict[str, Any]:
        """Stats for one operation, or the aggregate over all of them"""
        if operation_name:
            return self.operation_timings.get(operation_name, {})

        total_stats = {
            "total_operations": 0,
            "total_time_ms": 0,
            "success_count": 0,
            "failure_count": 0,
            "operations": {}
        }

        for op_name, stats in self.operation_timings.items():
            total_stats["total_operations"] += stats["count"]
            total_stats["total_time_ms"] += stats["total_time_ms"]
            total_stats["success_count"] += stats["success_count"]
            total_stats["failure_count"] += stats["failure_count"]
            total_stats["operations"][op_name] = stats

        if total_stats["total_operations"] > 0:
            total_stats["avg_time_ms"] = total_stats["total_time_ms"] / total_stats["total_operations"]
            total_stats["success_rate"] = (total_stats["success_count"] / total_stats["total_operations"]) * 100

        return total_stats

    def get_cache_stats(self) -> Dict[str, Any]:
        hits = self.cache_stats["hits"]
        total = self.cache_stats["total_operations"]

        stats = self.cache_stats.copy()
        stats["hit_rate"] = (hits / total) * 100 if total > 0 else 0
        return stats

    def reset_stats(self):
        self.operation_timings.clear()
        self.cache_stats = {
            "hits": 0,
            "misses": 0,
            "total_operations": 0
        }


# Global performance monitor instance
performance_monitor = PerformanceMonitor()


def track_async_performance(operation_name: str):
    """Decorator to track performance of asynchronous functions"""
    return performance_monitor.track_async_operation(operation_name)


def get_performance_stats(operation_name: Optional[str] = None) -> Dict[str, Any]:
    return performance_monitor.get_operation_stats(operation_name)


def get_cache_performance_stats() -> Dict[str, Any]:
    return performance_monitor.get_cache_stats()


# Façade operation names
DB_OPERATIONS = {
    "CREATE_EXPERIMENT": "db.create_experiment",
    "LIST_EXPERIMENTS": "db.get_experiments",
    "GET_EXPERIMENT": "db.get_experiment",
    "UPDATE_EXPERIMENT": "db.update_experiment",
    "DELETE_EXPERIMENT": "db.delete_experiment",
    "EXPERIMENT_SUMMARY": "db.get_experiment_summary",
    "CREATE_ARCHITECTURE": "db.create_architecture",
    "LIST_ARCHITECTURES": "db.get_architectures",
    "TOP_ARCHITECTURES": "db.get_top_architectures",
    "GET_ARCHITECTURE": "db.get_architecture",
    "RECORD_PROGRESS": "db.record_progress",
    "GET_PROGRESS": "db.get_progress",
    "SAVE_CONVERSATION": "db.save_conversation",
    "GET_CONVERSATIONS": "db.get_conversations",
    "GLOBAL_STATS": "db.get_global_stats",
    "GET_PROFILE": "db.get_profile",
    "UPSERT_PROFILE": "db.upsert_profile",
    "REFRESH_PROFILE_STATS": "db.refresh_profile_stats",
}
