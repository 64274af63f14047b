"""
Redis Connection Module

Async Redis connection management for the ARQ job queue.

The API process only enqueues jobs (wearable health analysis after a sync);
the worker process runs them, plus the periodic smart-reminder run.
"""

import logging
from typing import Optional

from redis.asyncio import Redis, ConnectionPool
from arq.connections import RedisSettings, ArqRedis, create_pool

from fitcoach.core.config import settings

# ============================================================
# Logging Setup
# ============================================================
logger = logging.getLogger(__name__)

# ============================================================
# Redis Connection Pool (for health checks)
# ============================================================

_redis_pool: Optional[ConnectionPool] = None


def get_redis_pool() -> ConnectionPool:
    """Get or create the Redis connection pool (singleton)."""
    global _redis_pool

    if _redis_pool is None:
        _redis_pool = ConnectionPool.from_url(
            settings.REDIS_URL,
            max_connections=10,
            decode_responses=False,
        )
        logger.info(f"Redis connection pool created: {settings.REDIS_URL}")

    return _redis_pool


async def get_redis() -> Redis:
    """Return a Redis client bound to the shared pool."""
    return Redis(connection_pool=get_redis_pool())


async def close_redis_pool():
    """Close Redis connection pool during app shutdown."""
    global _redis_pool

    if _redis_pool is not None:
        await _redis_pool.disconnect()
        _redis_pool = None
        logger.info("Redis connection pool closed")


# ============================================================
# ARQ Redis Settings (for task queue)
# ============================================================

def get_arq_redis_settings() -> RedisSettings:
    """
    Get Redis settings for the ARQ task queue.

    RedisSettings parses host, port, database and password from REDIS_URL.
    """
    redis_settings = RedisSettings.from_dsn(settings.REDIS_URL)
    redis_settings.conn_timeout = 10
    redis_settings.conn_retries = 5
    redis_settings.conn_retry_delay = 1
    return redis_settings


# ============================================================
# ARQ Connection Pool (for enqueueing jobs)
# ============================================================

_arq_pool: Optional[ArqRedis] = None


async def get_arq_pool() -> ArqRedis:
    """
    Get or create the ARQ Redis pool for enqueueing jobs.

    Usage:
        pool = await get_arq_pool()
        await pool.enqueue_job('analyze_wearable_health', user_id=str(user_id))
    """
    global _arq_pool

    if _arq_pool is None:
        _arq_pool = await create_pool(get_arq_redis_settings())
        logger.info("ARQ Redis pool created")

    return _arq_pool


async def close_arq_pool():
    """Close ARQ Redis pool during shutdown."""
    global _arq_pool

    if _arq_pool is not None:
        await _arq_pool.close()
        _arq_pool = None
        logger.info("ARQ Redis pool closed")


# ============================================================
# Health Check
# ============================================================

async def check_redis_connection() -> bool:
    """Return True if Redis answers PING."""
    try:
        redis = await get_redis()
        return bool(await redis.ping())
    except Exception as e:
        logger.error(f"Redis health check failed: {e}")
        return False
