"""TTL cache for compiled CSS.

The cache is an optimization, never a dependency: any backend failure is
logged and reported as a miss, and compilation proceeds normally. Concurrent
misses for the same key may each compile and write; compilation is
deterministic, so the last writer wins without locking.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Protocol

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from shogun_slogans.animation.css_generator import stable_hash
from shogun_slogans.db_models import CssTransient

logger = logging.getLogger(__name__)

CACHE_PREFIX = "shogun_css_"
DEFAULT_EXPIRY = 3600
SWEEP_INTERVAL = 60.0
BACKEND_ERRORS = (SQLAlchemyError, OSError)


class CacheStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str, ttl: int) -> bool: ...

    def delete(self, key: str) -> None: ...

    def delete_prefix(self, prefix: str) -> None: ...


@dataclass
class CacheEntry:
    css: str
    expires_at: float


class MemoryCacheStore:
    """Process-wide dict store; expired entries are dropped on read and swept on write."""

    def __init__(self, clock: Callable[[], float] = time.monotonic, sweep_interval: float = SWEEP_INTERVAL) -> None:
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._sweep_interval = sweep_interval
        self._next_sweep = 0.0

    def _sweep(self, now: float) -> None:
        # Caller holds the lock.
        for key in [k for k, entry in self._entries.items() if entry.expires_at <= now]:
            del self._entries[key]
        self._next_sweep = now + self._sweep_interval

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.css

    def set(self, key: str, value: str, ttl: int) -> bool:
        with self._lock:
            now = self._clock()
            if now >= self._next_sweep:
                self._sweep(now)
            self._entries[key] = CacheEntry(css=value, expires_at=now + ttl)
        return True

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def delete_prefix(self, prefix: str) -> None:
        with self._lock:
            for key in [k for k in self._entries if k.startswith(prefix)]:
                del self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)


class DatabaseCacheStore:
    """Transient rows in the ``css_transients`` table."""

    def __init__(self, session_factory: sessionmaker, clock: Callable[[], float] = time.time) -> None:
        self._session_factory = session_factory
        self._clock = clock

    def get(self, key: str) -> Optional[str]:
        with self._session_factory() as db:
            row = db.get(CssTransient, key)
            if row is None:
                return None
            if row.expires_at <= self._clock():
                db.delete(row)
                db.commit()
                return None
            return row.css

    def set(self, key: str, value: str, ttl: int) -> bool:
        with self._session_factory() as db:
            db.merge(CssTransient(key=key, css=value, expires_at=self._clock() + ttl))
            db.commit()
        return True

    def delete(self, key: str) -> None:
        with self._session_factory() as db:
            db.execute(delete(CssTransient).where(CssTransient.key == key))
            db.commit()

    def delete_prefix(self, prefix: str) -> None:
        with self._session_factory() as db:
            db.execute(delete(CssTransient).where(CssTransient.key.startswith(prefix, autoescape=True)))
            db.commit()

    def keys(self) -> list[str]:
        with self._session_factory() as db:
            return list(db.scalars(select(CssTransient.key)))


class CSSCache:
    """Compiled CSS keyed by ``generate_cache_key``; TTL eviction only."""

    def __init__(self, store: CacheStore, default_ttl: int = DEFAULT_EXPIRY) -> None:
        self.store = store
        self.default_ttl = default_ttl

    @staticmethod
    def generate_cache_key(animation_name: str, params: Mapping[str, object]) -> str:
        return stable_hash(animation_name, params)

    def get(self, cache_key: str) -> Optional[str]:
        try:
            return self.store.get(CACHE_PREFIX + cache_key)
        except BACKEND_ERRORS:
            logger.warning("CSS cache read failed; treating as miss", exc_info=True)
            return None

    def set(self, cache_key: str, css: str, ttl: Optional[int] = None) -> bool:
        try:
            return self.store.set(CACHE_PREFIX + cache_key, css, self.default_ttl if ttl is None else ttl)
        except BACKEND_ERRORS:
            logger.warning("CSS cache write failed; continuing uncached", exc_info=True)
            return False

    def clear(self, cache_key: Optional[str] = None) -> None:
        try:
            if cache_key:
                self.store.delete(CACHE_PREFIX + cache_key)
            else:
                self.store.delete_prefix(CACHE_PREFIX)
        except BACKEND_ERRORS:
            logger.warning("CSS cache clear failed", exc_info=True)
