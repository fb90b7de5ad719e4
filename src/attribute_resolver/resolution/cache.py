"""
Inline member cache for attribute expressions.

Each expression node owns one MemberCache mapping ``(shape, attribute name)``
to the member found by the convention-based search, so repeated evaluation
against the same host type skips the member scan.

Concurrency:
    Lookups are plain dict reads and inserts use ``dict.setdefault``, both
    single atomic operations on the underlying dict, so readers never take a
    lock and never observe a partially built entry. Two renders racing on the
    same key may both run the search; the first stored entry wins and both
    results are equivalent.

Entries are never evicted. A site usually sees a handful of shapes; a
warning is logged once if a cache grows past ``warn_size``.
"""

import logging
from typing import Any

from .members import ResolvedMember

logger = logging.getLogger(__name__)

CacheKey = tuple[type, str]


class MemberCache:
    """Concurrent insert-if-absent cache of resolved members."""

    def __init__(self, warn_size: int = 64):
        self._entries: dict[CacheKey, ResolvedMember] = {}
        self._warn_size = warn_size
        self._warned = False

    def get(self, shape: type, attribute_name: str) -> ResolvedMember | None:
        return self._entries.get((shape, attribute_name))

    def put_if_absent(
        self, shape: type, attribute_name: str, member: ResolvedMember
    ) -> ResolvedMember:
        """
        Store a member unless one is already cached for the key.

        Returns:
            The cached member (the existing one if another thread won the race)
        """
        cached = self._entries.setdefault((shape, attribute_name), member)
        if cached is member:
            logger.debug(f"Cached member '{member.name}' for {shape.__qualname__}.{attribute_name}")
            if not self._warned and len(self._entries) > self._warn_size:
                self._warned = True
                logger.warning(
                    f"Member cache grew past {self._warn_size} entries "
                    f"(now {len(self._entries)}); the expression sees many distinct types"
                )
        return cached

    def snapshot(self) -> dict[CacheKey, ResolvedMember]:
        """Copy of the current entries, for diagnostics."""
        return self._entries.copy()

    def __contains__(self, key: Any) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
