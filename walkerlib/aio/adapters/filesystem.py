"""Operating-system filesystem backend.

Runs the blocking ``os.lstat`` and ``os.listdir`` calls in worker threads so
the event loop never blocks on disk I/O.
"""

import asyncio
import os
from typing import List, Optional

from ..core.backend import FileSystemBackend


class OsFileSystemBackend(FileSystemBackend):
    """Backend that talks to the real filesystem.

    Blocking calls are dispatched with ``asyncio.to_thread``. An optional
    semaphore bounds how many of them are outstanding at once; the walker
    still issues (and counts) every probe immediately, only the thread work
    waits for a permit.

    The semaphore is created on first use inside the running loop, and again
    if the backend is later used from a different loop, so a backend can be
    built before ``asyncio.run``.
    """

    def __init__(self, max_concurrent: Optional[int] = 100):
        """Initialize the backend.

        Args:
            max_concurrent: Maximum concurrent I/O operations, or None for
                no limit beyond the default thread pool
        """
        self.max_concurrent = max_concurrent
        self._semaphore: Optional[asyncio.Semaphore] = None
        self._semaphore_loop: Optional[asyncio.AbstractEventLoop] = None
        self.lstat_calls = 0
        self.listdir_calls = 0
        self.in_flight = 0
        self.max_in_flight = 0

    async def lstat(self, path: str) -> os.stat_result:
        self.lstat_calls += 1
        return await self._run(os.lstat, path)

    async def listdir(self, path: str) -> List[str]:
        self.listdir_calls += 1
        return await self._run(os.listdir, path)

    def _get_semaphore(self) -> Optional[asyncio.Semaphore]:
        if not self.max_concurrent:
            return None
        loop = asyncio.get_running_loop()
        if self._semaphore is None or self._semaphore_loop is not loop:
            self._semaphore = asyncio.Semaphore(self.max_concurrent)
            self._semaphore_loop = loop
        return self._semaphore

    async def _run(self, func, path):
        semaphore = self._get_semaphore()
        if semaphore is None:
            return await self._call(func, path)
        async with semaphore:
            return await self._call(func, path)

    async def _call(self, func, path):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            return await asyncio.to_thread(func, path)
        finally:
            self.in_flight -= 1

    async def get_stats(self) -> dict:
        """Get backend statistics.

        Returns:
            Statistics dictionary
        """
        return {
            'max_concurrent': self.max_concurrent,
            'in_flight': self.in_flight,
            'max_in_flight': self.max_in_flight,
            'lstat_calls': self.lstat_calls,
            'listdir_calls': self.listdir_calls,
        }

    def __repr__(self) -> str:
        return f"OsFileSystemBackend(max_concurrent={self.max_concurrent})"
