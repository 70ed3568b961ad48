"""
Redis read cache for the catalog and the daily sales figures.

Two kinds of entries are kept:

* ``{prefix}:categories`` - a Redis list of category names in display order
* ``{prefix}:sales_today:{YYYY-MM-DD}`` - a hash with the day's sale count,
  revenue and average, money stored as decimal strings

The database stays the source of truth. When Redis is disabled or fails,
every read falls through to the loader and the failure is only logged.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

import redis
from redis.exceptions import RedisError
from flask import Flask

logger = logging.getLogger(__name__)

STATS_FIELDS = ('total_sales', 'total_revenue', 'average_sale')


class PosCache:
    """Cache-aside helpers for categories and today's sales stats."""

    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        prefix: str = 'pos',
        categories_ttl: int = 300,
        stats_ttl: int = 30
    ):
        self.client = client
        self.prefix = prefix
        self.categories_ttl = categories_ttl
        self.stats_ttl = stats_ttl

    @classmethod
    def from_app(cls, app: Flask) -> 'PosCache':
        """Build the cache from app config; stays clientless when Redis is off or unreachable."""
        cache = cls(
            prefix=app.config.get('CACHE_KEY_PREFIX', 'pos'),
            categories_ttl=app.config.get('CACHE_CATEGORIES_TTL', 300),
            stats_ttl=app.config.get('CACHE_STATS_TTL', 30),
        )
        if not app.config.get('CACHE_ENABLED', True):
            logger.info("[CACHE] disabled by config")
            return cache

        redis_url = app.config.get('REDIS_URL', 'redis://localhost:6379/0')
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=3,
            socket_timeout=3,
            retry_on_timeout=True,
            health_check_interval=30
        )
        try:
            client.ping()
        except RedisError as e:
            logger.warning(f"[CACHE] Redis unreachable at {redis_url} ({e}), reading from the database")
            return cache

        cache.client = client
        logger.info(f"[CACHE] Redis connected: {redis_url}")
        return cache

    def is_available(self) -> bool:
        if self.client is None:
            return False
        try:
            return bool(self.client.ping())
        except RedisError:
            return False

    def _key(self, *parts: str) -> str:
        return ':'.join((self.prefix,) + parts)

    def _call(self, action: str, command: Callable[[redis.Redis], Any]) -> Any:
        """Run a Redis command; None when there is no client or Redis fails."""
        if self.client is None:
            return None
        try:
            return command(self.client)
        except RedisError as e:
            logger.warning(f"[CACHE] {action} failed: {e}")
            return None

    # =====================================================
    # CATEGORIES
    # =====================================================

    def get_categories(self, load: Callable[[], List[str]]) -> List[str]:
        key = self._key('categories')
        cached = self._call('read categories', lambda r: r.lrange(key, 0, -1))
        if cached:
            return cached

        categories = load()
        # An empty list cannot be stored as a Redis list; it is simply reloaded
        if categories:
            self._call('write categories', lambda r: (
                r.pipeline()
                .delete(key)
                .rpush(key, *categories)
                .expire(key, self.categories_ttl)
                .execute()
            ))
        return categories

    # =====================================================
    # DAILY SALES STATS
    # =====================================================

    def get_sales_stats(self, day: date, load: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
        key = self._key('sales_today', day.isoformat())
        cached = self._call('read sales stats', lambda r: r.hgetall(key))
        if cached and all(field in cached for field in STATS_FIELDS):
            return {
                'total_sales': int(cached['total_sales']),
                'total_revenue': Decimal(cached['total_revenue']),
                'average_sale': Decimal(cached['average_sale']),
            }

        stats = load()
        self._call('write sales stats', lambda r: (
            r.pipeline()
            .hset(key, mapping={field: str(stats[field]) for field in STATS_FIELDS})
            .expire(key, self.stats_ttl)
            .execute()
        ))
        return stats

    def invalidate_sales_stats(self, day: date) -> None:
        key = self._key('sales_today', day.isoformat())
        if self._call('invalidate sales stats', lambda r: r.delete(key)):
            logger.info(f"[CACHE] INVALIDATE {key}")


_cache: Optional[PosCache] = None


def init_cache(app: Flask) -> None:
    global _cache
    _cache = PosCache.from_app(app)
    app.extensions['cache'] = _cache


def get_cache() -> PosCache:
    if _cache is None:
        raise RuntimeError("Cache not initialized.")
    return _cache
