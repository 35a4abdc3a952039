"""
Cache decorators for automatic caching and invalidation
"""
import functools
import logging
from typing import Callable, Optional
from .redis_client import cache_client
from neuralarch.utils.performance_monitor import performance_monitor

logger = logging.getLogger(__name__)


def cache_result(ttl: int = 300, key_generator: Optional[Callable] = None, compress: bool = True):
    """
    Decorator to cache function results

    Args:
        ttl: Time-to-live in seconds (default: 5 minutes)
        key_generator: Function to generate cache key from args/kwargs
        compress: Whether to compress cached data
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            if not cache_client.available:
                return await func(*args, **kwargs)

            if key_generator:
                cache_key = key_generator(*args, **kwargs)
            else:
                cache_key = f"{func.__name__}:{hash(str(args) + str(kwargs))}"

            cached_result = await cache_client.get(cache_key)
            if cached_result is not None:
                performance_monitor.track_cache_hit(cache_key)
                return cached_result

            performance_monitor.track_cache_miss(cache_key)
            result = await func(*args, **kwargs)

            # Don't cache None values
            if result is not None:
                if isinstance(result, list):
                    cache_value = [item.model_dump() if hasattr(item, 'model_dump') else item for item in result]
                elif hasattr(result, 'model_dump'):
                    cache_value = result.model_dump()
                else:
                    cache_value = result

                if not await cache_client.set(cache_key, cache_value, ttl, compress):
                    logger.warning(f"Failed to cache result for {func.__name__}")

            return result

        return wrapper
    return decorator


def invalidate_cache(patterns_generator: Optional[Callable] = None):
    """
    Decorator to invalidate cache entries after function execution

    Args:
        patterns_generator: Function that generates list of cache patterns to invalidate
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            result = await func(*args, **kwargs)

            if patterns_generator and cache_client.available:
                patterns = patterns_generator(*args, **kwargs)
                if isinstance(patterns, str):
                    patterns = [patterns]

                total_invalidated = 0
                for pattern in patterns or []:
                    total_invalidated += await cache_client.invalidate_pattern(pattern)

                if total_invalidated > 0:
                    logger.info(f"Invalidated {total_invalidated} cache entries for {func.__name__}")

            return result

        return wrapper
    return decorator
