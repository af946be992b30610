"""
Caching backend implementation for walkerlib.

Provides a transparent caching layer over any filesystem backend, for
tools that walk the same subtree repeatedly.
"""

import asyncio
from typing import Any, Dict, List, Optional
from cachetools import TTLCache

from ..core.backend import FileSystemBackend


class CachingFileSystemBackend(FileSystemBackend):
    """
    Optional listing cache for any filesystem backend.

    Caches the child names of each listed directory. Uses Future-based
    coordination so concurrent walks that list the same directory share a
    single underlying ``listdir`` call. Metadata probes always go to the
    wrapped backend, so entry classification is never stale.

    Example:
        backend = CachingFileSystemBackend(OsFileSystemBackend(), max_size=50000)

        walker = Walker(path, backend=backend)
        walker.on('file', print)
        await walker.join()
    """

    def __init__(
        self,
        base_backend: FileSystemBackend,
        max_size: int = 10000,
        ttl: float = 300.0  # 5 minutes
    ):
        """
        Initialize caching backend.

        Args:
            base_backend: The underlying backend to wrap
            max_size: Maximum number of directories in cache
            ttl: Time-to-live for cache entries in seconds
        """
        self._backend = base_backend
        self._cache = TTLCache(maxsize=max_size, ttl=ttl)
        self._scans_in_progress: Dict[Any, asyncio.Future] = {}

        # Statistics
        self.cache_hits = 0
        self.cache_misses = 0
        self.concurrent_waits = 0

    async def lstat(self, path: str) -> Any:
        return await self._backend.lstat(path)

    async def listdir(self, path: str) -> List[str]:
        """
        List a directory with caching and async coordination.

        This method:
        1. Checks if another task is already listing this path
        2. Checks the cache for existing results
        3. Performs the listing if needed
        4. Shares results with all waiting tasks
        """
        # 1. Check if a listing is already in progress
        while path in self._scans_in_progress:
            self.concurrent_waits += 1
            future = self._scans_in_progress[path]
            try:
                return list(await asyncio.shield(future))
            except asyncio.CancelledError:
                # Only the owner was cancelled; take over the listing
                if not future.cancelled():
                    raise

        # 2. Check cache
        cached_result = self._check_cache(path)
        if cached_result is not None:
            self.cache_hits += 1
            return list(cached_result)

        # 3. Cache miss - need to list
        self.cache_misses += 1

        future = asyncio.get_running_loop().create_future()
        self._scans_in_progress[path] = future

        try:
            names = list(await self._backend.listdir(path))
            self._update_cache(path, names)
            future.set_result(names)
            return list(names)
        except Exception as e:
            future.set_exception(e)
            # Waiters retrieve the exception; mark it retrieved if none do
            future.exception()
            raise
        finally:
            if not future.done():
                future.cancel()
            del self._scans_in_progress[path]

    def join(self, parent: str, name: str) -> str:
        return self._backend.join(parent, name)

    def _check_cache(self, path: str) -> Optional[List[str]]:
        """
        Check cache for existing results.

        Returns None if not found or expired.
        """
        return self._cache.get(path)

    def _update_cache(self, path: str, names: List[str]) -> None:
        self._cache[path] = names

    def invalidate(self, path: str) -> None:
        """
        Drop the cached listing for one directory.
        """
        self._cache.pop(path, None)

    async def get_stats(self) -> dict:
        """
        Get cache statistics merged with the wrapped backend's.
        """
        stats = await self._backend.get_stats()
        stats.update(self.get_cache_stats())
        return stats

    def get_cache_stats(self) -> dict:
        """
        Get cache statistics for monitoring and debugging.
        """
        total_requests = self.cache_hits + self.cache_misses
        hit_rate = self.cache_hits / total_requests if total_requests > 0 else 0

        return {
            'cache_hits': self.cache_hits,
            'cache_misses': self.cache_misses,
            'hit_rate': hit_rate,
            'concurrent_waits': self.concurrent_waits,
            'cache_size': len(self._cache),
            'max_size': self._cache.maxsize,
            'ttl': self._cache.ttl
        }

    def clear_cache(self) -> None:
        """
        Clear all cached entries.
        """
        self._cache.clear()
        self.cache_hits = 0
        self.cache_misses = 0
        self.concurrent_waits = 0

    async def close(self):
        await self._backend.close()
