"""Memoization of built fallback chains.

Two key spaces share one object:

- ``(language, mode)``: language chains.  They depend only on the
  (static) language graph, so one cache can live for the whole process.
- ``(user_id, language)``: proficiency chains.  Profile data can change
  between requests; call ``clear_users()`` when the request or session
  that owns the cache ends.

Entries are never evicted.  Builds run outside the lock: two threads
missing on the same key may both build, and the first stored chain wins.
Builds are pure, so the duplicate is only wasted work.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable

from termfallback.fallback.chain import FallbackChain
from termfallback.fallback.modes import FallbackMode

logger = logging.getLogger(__name__)


class ChainCache:
    """In-memory chain cache keyed by language/mode and user/language."""

    def __init__(self) -> None:
        self._language_chains: dict[tuple[str, int], FallbackChain] = {}
        self._user_chains: dict[tuple[Hashable, str], FallbackChain] = {}
        self._lock = threading.Lock()

    def get_or_build(
        self,
        language: str,
        mode: FallbackMode,
        build: Callable[[], FallbackChain],
    ) -> FallbackChain:
        """Return the cached chain for ``(language, mode)``, building on miss."""
        return self._get_or_build(self._language_chains, (str(language), int(mode)), build)

    def get_or_build_for_proficiency(
        self,
        user_id: Hashable,
        language: str,
        build: Callable[[], FallbackChain],
    ) -> FallbackChain:
        """Return the cached chain for ``(user_id, language)``, building on miss."""
        return self._get_or_build(self._user_chains, (user_id, str(language)), build)

    def get_for_proficiency(self, user_id: Hashable, language: str) -> FallbackChain | None:
        """Return the cached chain for ``(user_id, language)`` or ``None``."""
        with self._lock:
            return self._user_chains.get((user_id, str(language)))

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._language_chains.clear()
            self._user_chains.clear()

    def clear_users(self) -> None:
        """Drop proficiency chains only (end of request/session)."""
        with self._lock:
            self._user_chains.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._language_chains) + len(self._user_chains)

    def _get_or_build(self, store: dict, key: tuple, build: Callable[[], FallbackChain]) -> FallbackChain:
        with self._lock:
            cached = store.get(key)
        if cached is not None:
            return cached

        logger.debug("Chain cache miss: %r", key, extra={"event": "cache_miss"})
        chain = build()
        with self._lock:
            return store.setdefault(key, chain)
