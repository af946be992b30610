"""Asynchronous recursive directory walker.

The walker probes every entry under a root concurrently and reports each
one through events as soon as it is classified. Completion is detected with
a single counter of in-flight probes:

- ``walk()`` increments the counter synchronously, before scheduling the probe.
- Each probe decrements it exactly once, after its whole handling is done.
  For a directory that includes issuing ``walk()`` for every child.

Because children are counted before their parent is released, the counter
cannot reach zero while work is still about to be scheduled, and ``end``
fires exactly once.
"""

import asyncio
from typing import Any, Callable, Optional, Set, Union

from ...errors import ErrorKind, UnknownFileTypeError
from .backend import FileSystemBackend
from .classify import EntryType, classify
from .events import EventEmitter, EventKind, WalkEvent
from ..filters import DirectoryFilter, include_all


class Walker:
    """Walk a directory tree, emitting an event for every entry found.

    Events (see EventKind): ``entry`` and a type event (``dir``, ``symlink``,
    ``blockDevice``, ``characterDevice``, ``fifo``, ``socket``, ``file``) per
    classified entry, ``error`` per failure, and ``end`` once everything has
    drained. Symbolic links are reported, never followed.

    Example:
        walker = Walker('/srv/project')
        walker.on('file', lambda path, st: print(path, st.st_size))
        await walker.join()

    Listeners registered right after construction see every event: the first
    probe does not run until the caller yields to the event loop.
    """

    UnknownFileTypeError = UnknownFileTypeError

    def __init__(
        self,
        root: Optional[str] = None,
        *,
        backend: Optional[FileSystemBackend] = None,
        directory_filter: Optional[DirectoryFilter] = None,
        config: Optional[Any] = None
    ):
        """Create a walker and optionally start walking.

        Args:
            root: Path to start from. If given, the walk starts immediately
                and a running event loop is required.
            backend: Filesystem primitives (built from config, or the OS
                backend, if None)
            directory_filter: ``fn(path, metadata) -> bool`` deciding whether
                to descend into a directory
            config: Optional WalkConfig supplying defaults for the above
        """
        if backend is None:
            if config is not None:
                backend = config.create_backend()
            else:
                from ..adapters.filesystem import OsFileSystemBackend
                backend = OsFileSystemBackend()
        if directory_filter is None and config is not None:
            directory_filter = config.create_directory_filter(root)

        self.backend = backend
        self.events = EventEmitter()
        self._pending = 0
        self._filter_dir: DirectoryFilter = directory_filter or include_all
        self._tasks: Set[asyncio.Task] = set()
        self._listener_errors = []
        self._done: Optional[asyncio.Event] = None
        self._ended = False

        if root is not None:
            self.walk(root)

    @property
    def pending(self) -> int:
        """Number of probes issued but not yet fully resolved."""
        return self._pending

    @property
    def ended(self) -> bool:
        """True once ``end`` has been emitted."""
        return self._ended

    # Configuration and subscription

    def set_directory_filter(self, predicate: DirectoryFilter) -> 'Walker':
        """Replace the directory filter.

        Only directories probed after the call are affected. A directory the
        filter rejects is dropped entirely: neither it nor anything below it
        produces events.
        """
        self._filter_dir = predicate
        return self

    def on(self, kind: Union[EventKind, str], listener: Callable) -> 'Walker':
        self.events.on(kind, listener)
        return self

    def once(self, kind: Union[EventKind, str], listener: Callable) -> 'Walker':
        self.events.once(kind, listener)
        return self

    def off(self, kind: Union[EventKind, str], listener: Callable) -> 'Walker':
        self.events.off(kind, listener)
        return self

    def subscribe(self, subscriber: Callable[[WalkEvent], Any]) -> 'Walker':
        self.events.subscribe(subscriber)
        return self

    # Traversal

    def walk(self, target: str) -> 'Walker':
        """Start (or extend) the walk at ``target``.

        Returns immediately. May be called again, also while a walk is in
        progress; every call is counted towards the same ``end``.
        """
        if self._ended:
            raise RuntimeError("Walker has already ended")
        loop = asyncio.get_running_loop()
        if self._done is None:
            self._done = asyncio.Event()
        # Counted before the probe can possibly resolve
        self._pending += 1
        task = loop.create_task(self._probe(target))
        self._tasks.add(task)
        task.add_done_callback(self._forget_task)
        return self

    async def join(self) -> 'Walker':
        """Wait until ``end`` has been emitted.

        Raises:
            RuntimeError: If no walk was ever started
            Exception: The first exception raised by a listener, if any
        """
        if self._done is None:
            raise RuntimeError("Walker has not been started")
        await self._done.wait()
        if self._listener_errors:
            raise self._listener_errors[0]
        return self

    async def _probe(self, target: str) -> None:
        try:
            await self._resolve(target)
        except Exception as e:
            # Raised by a listener; re-raised from join()
            self._listener_errors.append(e)
        finally:
            self._done_one()

    async def _resolve(self, target: str) -> None:
        try:
            stat = await self.backend.lstat(target)
        except Exception as e:
            self._emit_error(e, target, None, ErrorKind.PROBE)
            return

        entry_type = classify(stat)

        if entry_type is EntryType.DIRECTORY:
            if not self._filter_dir(target, stat):
                return
            try:
                names = await self.backend.listdir(target)
            except Exception as e:
                self._emit_error(e, target, stat, ErrorKind.LISTING)
                return
            self._emit(EventKind.ENTRY, target, stat)
            self._emit(EventKind.DIR, target, stat)
            for name in names:
                self.walk(self.backend.join(target, name))
        elif entry_type is not None:
            self._emit(EventKind.ENTRY, target, stat)
            self._emit(entry_type.event_kind, target, stat)
        else:
            self._emit_error(UnknownFileTypeError(), target, stat, ErrorKind.CLASSIFICATION)

    def _done_one(self) -> None:
        self._pending -= 1
        if self._pending == 0:
            self._ended = True
            try:
                self.events.emit(WalkEvent(EventKind.END))
            except Exception as e:
                self._listener_errors.append(e)
            finally:
                self._done.set()

    # Emission helpers

    def _emit(self, kind: EventKind, path: str, stat: Any) -> None:
        self.events.emit(WalkEvent(kind, path, stat))

    def _emit_error(self, error: BaseException, path: str, stat: Any, kind: ErrorKind) -> None:
        self.events.emit(WalkEvent(EventKind.ERROR, path, stat, error=error, error_kind=kind))

    def _forget_task(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)

    def __repr__(self) -> str:
        return f"Walker(pending={self._pending}, backend={self.backend!r})"


def walker(root: str, **kwargs) -> Walker:
    """Create a Walker and start walking ``root``. Same as ``Walker(root)``."""
    return Walker(root, **kwargs)
