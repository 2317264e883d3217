"""
Per-spot mutex for booking writes.

Booking create/update holds this lock around conflict-check-then-write so two
requests cannot both pass the check for the same spot. Two layers apply:

- an in-process ``threading.Lock`` per spot, always taken. It serializes the
  worker threads of one process, which is the whole story on SQLite where
  ``SELECT ... FOR UPDATE`` is a no-op.
- a Redis ``SET NX EX`` key when ``REDIS_URL`` is configured, covering
  several API processes. When Redis is unreachable only the in-process lock
  and the database row lock apply.
"""

from __future__ import annotations

from contextlib import contextmanager
import logging
import threading
import time
from typing import Dict, Iterator, Optional

from redis import Redis

from ..monitoring.prometheus_metrics import prometheus_metrics
from .config import settings

logger = logging.getLogger(__name__)

_SYNC_REDIS: Optional[Redis] = None
_SYNC_REDIS_LOCK = threading.Lock()

_LOCAL_LOCKS: Dict[str, threading.Lock] = {}
_LOCAL_LOCKS_GUARD = threading.Lock()


def _lock_key(spot_id: str) -> str:
    return f"spot:{spot_id}:booking-mutex"


def _namespaced_key(key: str) -> str:
    return f"{settings.redis_namespace}:lock:{key}"


def _get_sync_redis() -> Optional[Redis]:
    global _SYNC_REDIS
    if not settings.redis_url:
        return None
    if _SYNC_REDIS is not None:
        return _SYNC_REDIS
    with _SYNC_REDIS_LOCK:
        if _SYNC_REDIS is not None:
            return _SYNC_REDIS
        try:
            client = Redis.from_url(
                settings.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            client.ping()
        except Exception as exc:
            logger.warning("booking_lock_redis_unavailable: %s", exc)
            return None
        _SYNC_REDIS = client
        return _SYNC_REDIS


def acquire_booking_lock(spot_id: str, ttl_s: Optional[int] = None) -> bool:
    client = _get_sync_redis()
    if client is None:
        prometheus_metrics.record_booking_lock("acquire", "redis_unavailable")
        return True
    ttl = ttl_s or settings.booking_lock_ttl_seconds
    try:
        acquired = bool(client.set(_namespaced_key(_lock_key(spot_id)), str(time.time()), nx=True, ex=ttl))
        prometheus_metrics.record_booking_lock("acquire", "success" if acquired else "blocked")
        return acquired
    except Exception as exc:
        prometheus_metrics.record_booking_lock("acquire", "error")
        logger.warning(
            "booking_lock_acquire_failed",
            extra={
                "spot_id": spot_id,
                "error": str(exc),
                "error_type": type(exc).__name__,
            },
        )
        return True


def release_booking_lock(spot_id: str) -> None:
    client = _get_sync_redis()
    if client is None:
        return
    try:
        deleted = client.delete(_namespaced_key(_lock_key(spot_id)))
        prometheus_metrics.record_booking_lock("release", "success" if deleted else "not_found")
    except Exception as exc:
        prometheus_metrics.record_booking_lock("release", "error")
        logger.warning(
            "booking_lock_release_failed",
            extra={
                "spot_id": spot_id,
                "error": str(exc),
                "error_type": type(exc).__name__,
            },
        )


def _local_lock(spot_id: str) -> threading.Lock:
    with _LOCAL_LOCKS_GUARD:
        lock = _LOCAL_LOCKS.get(spot_id)
        if lock is None:
            lock = _LOCAL_LOCKS[spot_id] = threading.Lock()
        return lock


@contextmanager
def booking_lock(
    spot_id: str,
    ttl_s: Optional[int] = None,
    wait_s: Optional[float] = None,
) -> Iterator[bool]:
    """
    Hold the booking mutex for ``spot_id``.

    Waits up to ``wait_s`` (default ``booking_lock_wait_seconds``) for another
    write on the same spot in this process to finish. Yields False when the
    in-process wait times out or another process holds the Redis key.
    """
    local = _local_lock(spot_id)
    wait = wait_s if wait_s is not None else settings.booking_lock_wait_seconds
    if not local.acquire(timeout=wait):
        prometheus_metrics.record_booking_lock("acquire", "local_timeout")
        yield False
        return
    try:
        acquired = acquire_booking_lock(spot_id, ttl_s=ttl_s)
        try:
            yield acquired
        finally:
            if acquired:
                release_booking_lock(spot_id)
    finally:
        local.release()
