"""
Redis client for caching operations with async support
"""
import json
import gzip
import logging
from typing import Any, Dict, List, Optional
from datetime import datetime
import redis.asyncio as redis
from redis.asyncio import ConnectionPool
from redis.exceptions import RedisError
import os

logger = logging.getLogger(__name__)


def cache_enabled() -> bool:
    return os.getenv("CACHE_ENABLED", "true").lower() not in ("0", "false", "no")


class RedisClient:
    def __init__(self):
        self.pool = None
        self.client = None
        self._initialized = False
        self._connection_failed = False

    @property
    def enabled(self) -> bool:
        return cache_enabled()

    @property
    def available(self) -> bool:
        return self._initialized and not self._connection_failed

    async def initialize(self):
        """Initialize Redis connection pool"""
        if self._initialized:
            return

        if not self.enabled:
            logger.info("Cache disabled by CACHE_ENABLED, running in no-cache mode")
            return

        redis_url = os.getenv("REDIS_URL", "redis://localhost:6379")

        try:
            self.pool = ConnectionPool.from_url(
                redis_url,
                max_connections=int(os.getenv("REDIS_MAX_CONNECTIONS", "20")),
                retry_on_timeout=True,
                socket_keepalive=True,
                health_check_interval=int(os.getenv("REDIS_HEALTH_CHECK_INTERVAL", "30")),
                decode_responses=False,  # We handle our own decoding
                socket_connect_timeout=5,
                socket_timeout=5
            )
            self.client = redis.Redis(connection_pool=self.pool)

            await self.client.ping()
            logger.info("Redis connection established successfully")
            self._initialized = True
            self._connection_failed = False

        except (RedisError, OSError) as e:
            logger.error(f"Failed to connect to Redis: {e}")
            self._connection_failed = True
            self.client = None
            if self.pool:
                await self.pool.disconnect()
                self.pool = None
            self._initialized = False

    async def close(self):
        """Close Redis connection"""
        try:
            if self.client:
                await self.client.aclose()
            if self.pool:
                await self.pool.disconnect()
        except RedisError as e:
            logger.error(f"Error closing Redis connection: {e}")
        finally:
            self.client = None
            self.pool = None
            self._initialized = False
            self._connection_failed = False

    def _serialize(self, value: Any, compress: bool = False) -> bytes:
        """Serialize value to bytes with optional compression"""
        data = json.dumps(self._convert_datetime(value), default=str).encode('utf-8')

        if compress or len(data) > int(os.getenv("REDIS_COMPRESSION_THRESHOLD", "1024")):
            data = gzip.compress(data)

        return data

    def _deserialize(self, data: bytes) -> Any:
        """Deserialize bytes to Python object"""
        try:
            # gzip magic number
            if data.startswith(b'\x1f\x8b'):
                data = gzip.decompress(data)
            return json.loads(data.decode('utf-8'))
        except (OSError, ValueError) as e:
            logger.error(f"Deserialization error: {e}")
            return None

    def _convert_datetime(self, obj: Any) -> Any:
        """Convert datetime objects to ISO format for serialization"""
        if isinstance(obj, datetime):
            return obj.isoformat()
        elif isinstance(obj, dict):
            return {k: self._convert_datetime(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._convert_datetime(item) for item in obj]
        return obj

    async def set(self, key: str, value: Any, expire: Optional[int] = None, compress: bool = False) -> bool:
        """Set a key-value pair in Redis"""
        if not self.available:
            return False

        try:
            result = await self.client.set(key, self._serialize(value, compress), ex=expire)
            return bool(result)
        except RedisError as e:
            logger.error(f"Error setting key {key}: {e}")
            return False

    async def get(self, key: str) -> Optional[Any]:
        """Get a value from Redis by key"""
        if not self.available:
            return None

        try:
            value = await self.client.get(key)
            if value is None:
                return None
            return self._deserialize(value)
        except RedisError as e:
            logger.error(f"Error getting key {key}: {e}")
            return None

    async def delete(self, key: str) -> bool:
        """Delete a key from Redis"""
        if not self.available:
            return False

        try:
            return bool(await self.client.delete(key))
        except RedisError as e:
            logger.error(f"Error deleting key {key}: {e}")
            return False

    async def scan_keys(self, pattern: str) -> List[str]:
        """All keys matching a glob pattern, using SCAN rather than KEYS"""
        if not self.available:
            return []

        keys = []
        try:
            async for key in self.client.scan_iter(match=pattern, count=100):
                keys.append(key.decode('utf-8') if isinstance(key, bytes) else key)
        except RedisError as e:
            logger.error(f"Error scanning pattern {pattern}: {e}")
        return keys

    async def invalidate_pattern(self, pattern: str) -> int:
        """Delete every key matching the pattern, returns the number removed"""
        keys = await self.scan_keys(pattern)
        if not keys:
            return 0

        try:
            return int(await self.client.delete(*keys))
        except RedisError as e:
            logger.error(f"Error invalidating pattern {pattern}: {e}")
            return 0

    async def info(self) -> Dict[str, Any]:
        """Get Redis server information"""
        if not self.available:
            return {}

        try:
            return await self.client.info()
        except RedisError as e:
            logger.error(f"Error getting Redis info: {e}")
            return {}

    async def ping(self) -> bool:
        """Ping Redis server"""
        if not self.available:
            return False

        try:
            return bool(await self.client.ping())
        except RedisError as e:
            logger.error(f"Redis ping failed: {e}")
            return False


# Global Redis client instance
cache_client = RedisClient()
