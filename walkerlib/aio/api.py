"""High-level async API for walkerlib.

This module provides simple, user-friendly async functions for common
walking tasks, built on top of Walker events.
"""

import asyncio
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional

from ..config import WalkConfig
from .core import EntryType, EventKind, Walker, WalkEvent
from .core.backend import FileSystemBackend
from .filters import DirectoryFilter


def _start(
    root: str,
    config: Optional[WalkConfig],
    backend: Optional[FileSystemBackend],
    directory_filter: Optional[DirectoryFilter]
) -> Walker:
    # The walk starts on construction; subscriptions made before the caller
    # next awaits still see every event.
    return Walker(
        root,
        backend=backend,
        directory_filter=directory_filter,
        config=config
    )


async def walk_events(
    root: str,
    *,
    config: Optional[WalkConfig] = None,
    backend: Optional[FileSystemBackend] = None,
    directory_filter: Optional[DirectoryFilter] = None
) -> AsyncIterator[WalkEvent]:
    """Stream every event of a walk.

    Args:
        root: Path to walk
        config: Optional WalkConfig
        backend: Optional filesystem backend
        directory_filter: Optional prune predicate

    Yields:
        WalkEvent objects in emission order, ending with the END event

    Example:
        >>> async for event in walk_events('/path'):
        ...     if event.kind is EventKind.FILE:
        ...         print(event.path)
    """
    queue: asyncio.Queue = asyncio.Queue()
    walker = _start(root, config, backend, directory_filter)
    walker.subscribe(queue.put_nowait)
    try:
        while True:
            event = await queue.get()
            yield event
            if event.kind is EventKind.END:
                break
    finally:
        walker.events.unsubscribe(queue.put_nowait)
    await walker.join()


async def find_entries_async(
    root: str,
    kinds: Optional[Iterable[EntryType]] = None,
    *,
    config: Optional[WalkConfig] = None,
    backend: Optional[FileSystemBackend] = None,
    directory_filter: Optional[DirectoryFilter] = None
) -> List[str]:
    """Find the paths of entries of the given types.

    Args:
        root: Path to walk
        kinds: Entry types to keep (all types if None)

    Returns:
        Matching paths, in discovery order
    """
    wanted = {kind.event_kind for kind in (EntryType if kinds is None else kinds)}
    found: List[str] = []

    def collect(event: WalkEvent) -> None:
        if event.kind in wanted:
            found.append(event.path)

    walker = _start(root, config, backend, directory_filter)
    walker.subscribe(collect)
    await walker.join()
    return found


async def get_walk_stats_async(
    root: str,
    *,
    config: Optional[WalkConfig] = None,
    backend: Optional[FileSystemBackend] = None,
    directory_filter: Optional[DirectoryFilter] = None
) -> Dict[str, Any]:
    """Count the entries under a root by type.

    Returns:
        Dictionary with one count per entry type name plus
        'total_entries' and 'errors'
    """
    stats: Dict[str, Any] = {entry_type.value: 0 for entry_type in EntryType}
    stats['total_entries'] = 0
    stats['errors'] = 0
    by_event = {entry_type.event_kind: entry_type.value for entry_type in EntryType}

    def count(event: WalkEvent) -> None:
        if event.kind is EventKind.ENTRY:
            stats['total_entries'] += 1
        elif event.kind is EventKind.ERROR:
            stats['errors'] += 1
        elif event.kind in by_event:
            stats[by_event[event.kind]] += 1

    walker = _start(root, config, backend, directory_filter)
    walker.subscribe(count)
    await walker.join()
    return stats
