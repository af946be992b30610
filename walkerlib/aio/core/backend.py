"""Filesystem backend abstraction.

A backend supplies the three primitives a walk needs: a metadata probe
that does not follow symbolic links, a directory listing, and a path join.
Swapping the backend lets tests drive the walker from an in-memory tree
and lets callers layer caching over real I/O.
"""

import os
from abc import ABC, abstractmethod
from typing import Any, List


class FileSystemBackend(ABC):
    """Abstract base class for filesystem backends.

    Backends may raise any exception from ``lstat`` or ``listdir``; the
    walker turns them into ``error`` events.
    """

    @abstractmethod
    async def lstat(self, path: str) -> Any:
        """Get metadata for a path without following symbolic links.

        Args:
            path: Path to probe

        Returns:
            An object with ``st_mode`` (normally os.stat_result)
        """
        pass

    @abstractmethod
    async def listdir(self, path: str) -> List[str]:
        """List the names of a directory's immediate children.

        Args:
            path: Directory to list

        Returns:
            Child names, in whatever order the source provides
        """
        pass

    def join(self, parent: str, name: str) -> str:
        """Join a directory path and a child name."""
        return os.path.join(parent, name)

    async def get_stats(self) -> dict:
        """Get backend statistics.

        Returns:
            Dictionary of statistics (I/O count, cache hits, etc.)
        """
        return {}

    async def close(self):
        """Clean up backend resources.

        Override if the backend needs cleanup.
        """
        pass

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
