"""Cache-aside helpers for pages that are cached once per day."""

from typing import Any

from django.core.cache import cache


def cache_page(index_key: str, key: str, data: Any, timeout: int) -> None:
    """Store ``data`` under ``key`` and record the key in ``index_key``."""
    keys = set(cache.get(index_key) or ())
    keys.add(key)
    cache.set(index_key, sorted(keys), None)
    cache.set(key, data, timeout)


def drop_pages(*index_keys: str) -> None:
    """Delete every page recorded in the given indexes, and the indexes."""
    doomed = list(index_keys)
    for index_key in index_keys:
        doomed.extend(cache.get(index_key) or ())
    cache.delete_many(doomed)
