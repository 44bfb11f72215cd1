"""In-memory cache module for corpus-wide reads.

The filter catalog and the corpus statistics scan the whole sales table.
The table only changes when the bulk loader runs, so their results are
kept in-process with a TTL and can be dropped through ``/cache/clear``
after a reload.
"""
from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Any, Awaitable, Callable, Optional, ParamSpec, TypeVar, Union

P = ParamSpec("P")
T = TypeVar("T")

DEFAULT_TTL_SECONDS = 3600

_cache: dict[str, dict] = {}
_cache_stats = {"hits": 0, "misses": 0}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _make_cache_key(prefix: str, *args, **kwargs) -> str:
    """Build a stable key from a prefix and the call arguments."""
    parts = [prefix]
    parts.extend("None" if arg is None else str(arg) for arg in args)
    parts.extend(f"{k}={v}" for k, v in sorted(kwargs.items()))
    return ":".join(parts)


def get_cache_stats() -> dict:
    total = _cache_stats["hits"] + _cache_stats["misses"]
    hit_rate = (_cache_stats["hits"] / total * 100) if total > 0 else 0.0
    return {
        "entries": len(_cache),
        "keys": sorted(_cache),
        "hits": _cache_stats["hits"],
        "misses": _cache_stats["misses"],
        "hit_rate": round(hit_rate, 2),
    }


def get_cached(key: str) -> Optional[Any]:
    """Return the cached value, or ``None`` when missing or expired."""
    entry = _cache.get(key)
    if entry is None:
        _cache_stats["misses"] += 1
        return None

    expires_at = entry["expires_at"]
    if expires_at is not None and _now() > expires_at:
        del _cache[key]
        _cache_stats["misses"] += 1
        return None

    _cache_stats["hits"] += 1
    return entry["value"]


def set_cached(key: str, value: Any, ttl_seconds: Optional[int] = DEFAULT_TTL_SECONDS) -> None:
    """Store a value. A falsy ``ttl_seconds`` keeps it until cleared."""
    expires_at = _now() + timedelta(seconds=ttl_seconds) if ttl_seconds else None
    _cache[key] = {"value": value, "expires_at": expires_at}


def clear_cache(prefix: Optional[str] = None) -> int:
    """Clear cache entries. If prefix given, only clear matching keys."""
    if prefix is None:
        count = len(_cache)
        _cache.clear()
        _cache_stats.update(hits=0, misses=0)
        return count

    keys = [k for k in _cache if k.startswith(prefix)]
    for key in keys:
        del _cache[key]
    return len(keys)


def cached(
    prefix: str,
    ttl_seconds: Union[int, None, Callable[[], Optional[int]]] = DEFAULT_TTL_SECONDS,
):
    """
    Decorator for caching async function results.

    The first positional argument (the store) is keyed by its ``cache_key``
    attribute rather than its identity, so two stores on the same database
    share entries and stores on different databases do not. ``ttl_seconds``
    may be a callable so the TTL can come from settings at call time.

    Usage:
        @cached("filter_catalog", ttl_seconds=lambda: settings.FILTER_CATALOG_TTL_SECONDS)
        async def build_filter_catalog(store):
            ...
    """
    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            owner = getattr(args[0], "cache_key", None) if args else None
            key = _make_cache_key(prefix, owner, *args[1:], **kwargs)

            hit = get_cached(key)
            if hit is not None:
                return hit

            result = await func(*args, **kwargs)
            ttl = ttl_seconds() if callable(ttl_seconds) else ttl_seconds
            set_cached(key, result, ttl)
            return result

        return wrapper
    return decorator
