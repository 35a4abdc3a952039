"""
Cache module initialization
Provides unified access to caching functionality
"""
import logging

from .redis_client import cache_client
from .cache_decorators import cache_result, invalidate_cache

logger = logging.getLogger(__name__)


async def initialize_cache():
    """Initialize the global cache client"""
    await cache_client.initialize()
    if cache_client.available:
        logger.info("Cache initialized successfully")
    else:
        logger.warning("Cache unavailable - running in no-cache mode")


async def close_cache():
    """Close the global cache client"""
    await cache_client.close()
    logger.info("Cache closed")


async def check_redis_health() -> str:
    """``disabled``, ``healthy`` or ``unhealthy``"""
    if not cache_client.enabled:
        return "disabled"
    return "healthy" if await cache_client.ping() else "unhealthy"


__all__ = [
    "cache_client",
    "cache_result",
    "invalidate_cache",
    "initialize_cache",
    "close_cache",
    "check_redis_health",
]
