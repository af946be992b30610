"""Test fixtures for walkerlib consumers.

These fixtures let a test drive a Walker from an in-memory tree, with
controllable latency and injected failures, and record what it emits.
"""

import asyncio
import os
import posixpath
import stat as stat_module
from typing import Any, Dict, List, Optional

from ..aio.core.backend import FileSystemBackend
from ..aio.core.events import EventKind, WalkEvent


def make_stat(mode: int, size: int = 0) -> os.stat_result:
    """Build an os.stat_result with the given st_mode and st_size."""
    return os.stat_result((mode, 0, 0, 1, 0, 0, size, 0, 0, 0))


class FakeFileSystemBackend(FileSystemBackend):
    """In-memory backend for deterministic walker tests.

    Paths are POSIX-style strings. Children are listed in the order they
    were added, unless ``listing_order`` overrides it for a directory.

    Example:
        fs = FakeFileSystemBackend()
        fs.add_dir('/r')
        fs.add_file('/r/a.txt')
        fs.set_delay('/r/a.txt', 0.05)
        fs.fail_lstat('/r/b', PermissionError('denied'))
    """

    def __init__(self):
        self._entries: Dict[str, os.stat_result] = {}
        self._children: Dict[str, List[str]] = {}
        self._delays: Dict[str, float] = {}
        self._lstat_errors: Dict[str, BaseException] = {}
        self._listdir_errors: Dict[str, BaseException] = {}
        self.lstat_calls: List[str] = []
        self.listdir_calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    # Building the tree

    def add_entry(self, path: str, mode: int, size: int = 0) -> 'FakeFileSystemBackend':
        """Add an entry with an arbitrary st_mode, creating parents as needed."""
        parent = posixpath.dirname(path)
        if parent and parent != path and parent not in self._entries:
            self.add_dir(parent)
        self._entries[path] = make_stat(mode, size)
        if stat_module.S_ISDIR(mode):
            self._children.setdefault(path, [])
        if parent and parent != path:
            name = posixpath.basename(path)
            if name not in self._children[parent]:
                self._children[parent].append(name)
        return self

    def add_dir(self, path: str) -> 'FakeFileSystemBackend':
        return self.add_entry(path, stat_module.S_IFDIR | 0o755)

    def add_file(self, path: str, size: int = 0) -> 'FakeFileSystemBackend':
        return self.add_entry(path, stat_module.S_IFREG | 0o644, size)

    def add_symlink(self, path: str) -> 'FakeFileSystemBackend':
        return self.add_entry(path, stat_module.S_IFLNK | 0o777)

    def add_listing_entry(self, directory: str, name: str) -> 'FakeFileSystemBackend':
        """List a name under a directory without creating the entry.

        Probing it fails with FileNotFoundError, as for a file removed
        between listing and probing.
        """
        self._children[directory].append(name)
        return self

    def listing_order(self, directory: str, names: List[str]) -> 'FakeFileSystemBackend':
        self._children[directory] = list(names)
        return self

    # Behaviour injection

    def set_delay(self, path: str, seconds: float) -> 'FakeFileSystemBackend':
        """Delay both lstat and listdir for ``path``."""
        self._delays[path] = seconds
        return self

    def fail_lstat(self, path: str, error: BaseException) -> 'FakeFileSystemBackend':
        self._lstat_errors[path] = error
        return self

    def fail_listdir(self, path: str, error: BaseException) -> 'FakeFileSystemBackend':
        self._listdir_errors[path] = error
        return self

    # FileSystemBackend interface

    async def lstat(self, path: str) -> os.stat_result:
        self.lstat_calls.append(path)
        await self._io(path)
        if path in self._lstat_errors:
            raise self._lstat_errors[path]
        if path not in self._entries:
            raise FileNotFoundError(2, 'No such file or directory', path)
        return self._entries[path]

    async def listdir(self, path: str) -> List[str]:
        self.listdir_calls.append(path)
        await self._io(path)
        if path in self._listdir_errors:
            raise self._listdir_errors[path]
        if path not in self._children:
            raise NotADirectoryError(20, 'Not a directory', path)
        return list(self._children[path])

    def join(self, parent: str, name: str) -> str:
        return posixpath.join(parent, name)

    async def _io(self, path: str) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self._delays.get(path, 0))
        finally:
            self.in_flight -= 1

    async def get_stats(self) -> dict:
        return {
            'lstat_calls': len(self.lstat_calls),
            'listdir_calls': len(self.listdir_calls),
            'max_in_flight': self.max_in_flight,
        }


class EventRecorder:
    """Record every event a walker emits.

    Example:
        recorder = EventRecorder().attach(walker)
        await walker.join()
        assert recorder.count(EventKind.END) == 1
    """

    def __init__(self):
        self.events: List[WalkEvent] = []

    def attach(self, walker) -> 'EventRecorder':
        walker.subscribe(self.events.append)
        return self

    def of_kind(self, kind: EventKind) -> List[WalkEvent]:
        return [e for e in self.events if e.kind is kind]

    def count(self, kind: EventKind) -> int:
        return len(self.of_kind(kind))

    def paths(self, kind: EventKind) -> List[str]:
        return [e.path for e in self.of_kind(kind)]

    def kinds_for(self, path: str) -> List[EventKind]:
        """Event kinds emitted for one path, in order."""
        return [e.kind for e in self.events if e.path == path]

    def index_of(self, kind: EventKind, path: Optional[str] = None) -> int:
        """Position of the first matching event in the recording."""
        for i, event in enumerate(self.events):
            if event.kind is kind and (path is None or event.path == path):
                return i
        raise ValueError(f"No {kind.value} event for {path!r}")

    def errors(self) -> List[Any]:
        return [e.error for e in self.of_kind(EventKind.ERROR)]
