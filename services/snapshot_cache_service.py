"""
In-memory cache of source database snapshots.

Keyed by source database id with TTL expiration. Entries are merged
additively, so results for a course nobody is viewing anymore are
harmless. Errored snapshots are never stored.
"""
import threading
from datetime import datetime, timedelta
from typing import Optional

from models.source import SourceSnapshot

_cache: dict[str, tuple[datetime, SourceSnapshot]] = {}
_lock = threading.Lock()


def store_snapshots(snapshots: dict[str, SourceSnapshot], ttl_seconds: int) -> None:
    """Merge successful snapshots into the cache. ttl_seconds <= 0 stores nothing."""
    if ttl_seconds <= 0:
        return
    expires_at = datetime.now() + timedelta(seconds=ttl_seconds)
    with _lock:
        for database_id, snapshot in snapshots.items():
            if snapshot.error is None:
                _cache[database_id] = (expires_at, snapshot)
        _cleanup_expired()


def retrieve_snapshot(database_id: str) -> Optional[SourceSnapshot]:
    """Cached snapshot for a database id. Returns None if expired/not found."""
    with _lock:
        entry = _cache.get(database_id)
        if entry is None:
            return None
        expires_at, snapshot = entry
        if datetime.now() > expires_at:
            del _cache[database_id]
            return None
        return snapshot


def clear_snapshots() -> None:
    with _lock:
        _cache.clear()


def _cleanup_expired() -> None:
    """Remove all expired entries. Caller holds the lock."""
    now = datetime.now()
    expired = [k for k, (exp, _) in _cache.items() if now > exp]
    for k in expired:
        del _cache[k]
