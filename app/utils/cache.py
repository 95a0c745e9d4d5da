"""
Redis cache utility for statistics caching
"""
import redis
import json
import logging
from typing import Optional, Any
from app.config import settings

logger = logging.getLogger(__name__)


class CacheService:
    """Redis-based caching service for assessment and module statistics"""

    def __init__(self, url: str = settings.REDIS_URL):
        try:
            self.redis_client = redis.from_url(
                url,
                decode_responses=True,
                socket_connect_timeout=5
            )
            # Test connection
            self.redis_client.ping()
            logger.info("Redis connection established")
        except Exception as e:
            logger.warning(f"Redis connection failed: {str(e)}. Caching disabled.")
            self.redis_client = None

    def assessment_stats_key(self, assessment_id: str) -> str:
        return f"stats:assessment:{assessment_id}"

    def module_stats_key(self, module_id: str) -> str:
        return f"stats:module:{module_id}"

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache

        Returns:
            Cached value or None
        """
        if not self.redis_client:
            return None

        try:
            value = self.redis_client.get(key)
            if value:
                logger.info(f"Cache hit: {key}")
                return json.loads(value)
            logger.info(f"Cache miss: {key}")
            return None
        except Exception as e:
            logger.error(f"Cache get error: {str(e)}")
            return None

    def set(
        self,
        key: str,
        value: Any,
        ttl: int = None
    ) -> bool:
        """
        Set value in cache

        Args:
            key: Cache key
            value: Value to cache (must be JSON serializable)
            ttl: Time to live in seconds (default from settings)

        Returns:
            Success status
        """
        if not self.redis_client:
            return False

        try:
            ttl = ttl or settings.STATS_CACHE_TTL
            serialized = json.dumps(value, default=str)
            self.redis_client.setex(key, ttl, serialized)
            logger.info(f"Cache set: {key} (TTL: {ttl}s)")
            return True
        except Exception as e:
            logger.error(f"Cache set error: {str(e)}")
            return False

    def delete(self, key: str) -> bool:
        """Delete key from cache"""
        if not self.redis_client:
            return False

        try:
            self.redis_client.delete(key)
            logger.info(f"Cache delete: {key}")
            return True
        except Exception as e:
            logger.error(f"Cache delete error: {str(e)}")
            return False

    def invalidate_assessment(self, assessment_id) -> bool:
        return self.delete(self.assessment_stats_key(str(assessment_id)))

    def invalidate_module(self, module_id) -> bool:
        return self.delete(self.module_stats_key(str(module_id)))


# Global instance
cache_service = CacheService()
