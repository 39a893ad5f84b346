"""
Rate limiting - Per-client request quotas for the v1 routes.

Every v1 route shares one quota from settings (requests per window),
counted separately per client address and route. With a Redis URL
configured the counters live in Redis through fastapi-limiter, so all
workers share them. Without Redis each process keeps its own in-memory
sliding window.

Rejected requests get 429 with a ``Retry-After`` header.
"""

import logging
import threading
import time
from collections import defaultdict, deque
from collections.abc import Awaitable, Callable
from functools import lru_cache
from typing import Any, Optional

import redis.asyncio as redis_async
from fastapi import HTTPException, Request, Response, status
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter

from src.config.settings import get_settings

logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS_DETAIL = "Too Many Requests"

RateLimiterType = Callable[[Request, Response], Awaitable[Any]]
RateLimiterFactory = Callable[[int, int], RateLimiterType]


class LocalRateLimiter:
    """Sliding-window limiter kept in process memory."""

    def __init__(self, times: int, milliseconds: int) -> None:
        self._times = times
        self._seconds = milliseconds / 1000
        self._hits: defaultdict[str, deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()

    async def __call__(self, request: Request, response: Response) -> None:
        self._throttle(self._make_key(request))

    def _make_key(self, request: Request) -> str:
        client_host = request.client.host if request.client else "anonymous"
        route = request.scope.get("route")
        path = getattr(route, "path", None) or request.url.path
        return f"{client_host}:{request.method}:{path}"

    def _throttle(self, key: str) -> None:
        now = time.monotonic()
        with self._lock:
            hits = self._hits[key]
            while hits and hits[0] <= now - self._seconds:
                hits.popleft()
            if len(hits) >= self._times:
                retry_after = max(0, int(self._seconds - (now - hits[0])))
                logger.warning("Rate limit exceeded for %s", key)
                raise HTTPException(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    detail=TOO_MANY_REQUESTS_DETAIL,
                    headers={"Retry-After": str(retry_after)},
                )
            hits.append(now)


def _redis_rate_limiter(times: int, milliseconds: int) -> RateLimiterType:
    return RateLimiter(times=times, milliseconds=milliseconds)


_rate_limiter_factory: RateLimiterFactory = LocalRateLimiter


def configure_rate_limiter(factory: RateLimiterFactory) -> None:
    """Select the limiter implementation and drop limiters built by the previous one."""
    global _rate_limiter_factory
    _rate_limiter_factory = factory
    reset_rate_limiter()


def reset_rate_limiter() -> None:
    """Forget every cached limiter (and with it, local hit counts)."""
    get_rate_limiter.cache_clear()


@lru_cache(maxsize=32)
def get_rate_limiter(times: int, milliseconds: int) -> RateLimiterType:
    """Get the limiter for a quota, built once per quota by the configured factory."""
    return _rate_limiter_factory(times, milliseconds)


async def rate_limit(request: Request, response: Response) -> None:
    """FastAPI dependency enforcing the configured quota on the current route."""
    settings = get_settings()
    if not settings.rate_limit_enabled:
        return
    limiter = get_rate_limiter(settings.rate_limit_requests, settings.rate_limit_window_ms)
    await limiter(request, response)


async def init_rate_limiter(redis_url: Optional[str]) -> Optional[redis_async.Redis]:
    """
    Configure the limiter backend during startup.

    Args:
        redis_url: Redis connection URL, or None for the in-memory limiter

    Returns:
        The Redis client to close on shutdown, or None
    """
    if redis_url is None:
        logger.info("Redis URL not configured; using in-memory rate limiter")
        configure_rate_limiter(LocalRateLimiter)
        return None

    logger.info("Initializing Redis-backed rate limiter...")
    client = redis_async.from_url(redis_url, encoding="utf-8", decode_responses=True)
    await FastAPILimiter.init(client)
    configure_rate_limiter(_redis_rate_limiter)
    return client


async def close_rate_limiter(client: Optional[redis_async.Redis]) -> None:
    """Close the Redis client (if any) and fall back to the in-memory limiter."""
    configure_rate_limiter(LocalRateLimiter)
    if client is not None:
        await client.aclose()
        logger.info("Rate limiter Redis connection closed")
