"""
Cached list views, keyed by view name and business.

Reads of the product and category lists go through here; any write that
changes those lists invalidates the affected keys so the next read refetches.
Single process only.
"""
from datetime import datetime, timedelta
from threading import Lock
from typing import Any, Callable, TypeVar
import structlog

from config import settings

logger = structlog.get_logger(__name__)

T = TypeVar("T")

PRODUCTS = "products"
CATEGORIES = "categories"

_cache: dict[tuple[str, str], tuple[datetime, Any]] = {}
_lock = Lock()


def get_or_load(key: str, business_id: str, loader: Callable[[], T]) -> T:
    """Return the cached view, calling loader on a miss or after expiry."""
    ttl = settings.query_cache_ttl_seconds
    cache_key = (key, business_id)

    with _lock:
        entry = _cache.get(cache_key)
        if entry is not None:
            expires_at, data = entry
            if datetime.now() <= expires_at:
                return data
            del _cache[cache_key]

    data = loader()

    if ttl > 0:
        with _lock:
            _cache[cache_key] = (datetime.now() + timedelta(seconds=ttl), data)
            _cleanup_expired()

    return data


def invalidate(business_id: str, *keys: str) -> None:
    """Drop cached views for a business so dependent reads refetch."""
    with _lock:
        for key in keys:
            _cache.pop((key, business_id), None)
    logger.debug("query_cache_invalidated", business_id=business_id, keys=list(keys))


def clear() -> None:
    """Remove every cached view."""
    with _lock:
        _cache.clear()


def _cleanup_expired() -> None:
    """Remove all expired entries. Caller holds _lock."""
    now = datetime.now()
    expired = [k for k, (exp, _) in _cache.items() if now > exp]
    for k in expired:
        del _cache[k]
