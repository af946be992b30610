"""Event types and the notification sink used by the walker.

Events are a tagged variant (EventKind) delivered through a single
EventEmitter. Consumers can either register keyed listeners that receive
positional payloads, or subscribe to the whole stream of WalkEvent objects.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from ...errors import ErrorKind


class EventKind(Enum):
    """Every kind of event a walk can emit."""
    ENTRY = "entry"
    DIR = "dir"
    SYMLINK = "symlink"
    BLOCK_DEVICE = "blockDevice"
    CHARACTER_DEVICE = "characterDevice"
    FIFO = "fifo"
    SOCKET = "socket"
    FILE = "file"
    ERROR = "error"
    END = "end"

    @classmethod
    def coerce(cls, kind: Union['EventKind', str]) -> 'EventKind':
        """Accept either an EventKind or its string value.

        Raises:
            ValueError: If the string names no known event
        """
        if isinstance(kind, cls):
            return kind
        try:
            return cls(kind)
        except ValueError:
            raise ValueError(f"Unknown event: {kind!r}") from None


@dataclass(frozen=True)
class WalkEvent:
    """A single notification from a walk.

    Attributes:
        kind: What happened
        path: Path of the entry (None for END)
        metadata: lstat result, or None when unavailable
        error: The exception for ERROR events
        error_kind: Where the error came from, for ERROR events
    """
    kind: EventKind
    path: Optional[str] = None
    metadata: Optional[Any] = None
    error: Optional[BaseException] = None
    error_kind: Optional[ErrorKind] = None

    def payload(self) -> tuple:
        """Positional arguments handed to keyed listeners."""
        if self.kind is EventKind.END:
            return ()
        if self.kind is EventKind.ERROR:
            return (self.error, self.path, self.metadata)
        return (self.path, self.metadata)


class EventEmitter:
    """Synchronous event dispatcher.

    Keyed listeners run first, in registration order, followed by stream
    subscribers. Exceptions raised by a listener propagate to the caller
    of emit().
    """

    def __init__(self):
        self._listeners: Dict[EventKind, List[Callable]] = {}
        self._once: Dict[EventKind, List[Callable]] = {}
        self._subscribers: List[Callable[[WalkEvent], Any]] = []

    def on(self, kind: Union[EventKind, str], listener: Callable) -> 'EventEmitter':
        kind = EventKind.coerce(kind)
        self._listeners.setdefault(kind, []).append(listener)
        return self

    def once(self, kind: Union[EventKind, str], listener: Callable) -> 'EventEmitter':
        """Register a listener that is removed after its first call."""
        kind = EventKind.coerce(kind)
        self._listeners.setdefault(kind, []).append(listener)
        self._once.setdefault(kind, []).append(listener)
        return self

    def off(self, kind: Union[EventKind, str], listener: Callable) -> 'EventEmitter':
        kind = EventKind.coerce(kind)
        listeners = self._listeners.get(kind, [])
        if listener in listeners:
            listeners.remove(listener)
        once = self._once.get(kind, [])
        if listener in once:
            once.remove(listener)
        return self

    def listener_count(self, kind: Union[EventKind, str]) -> int:
        return len(self._listeners.get(EventKind.coerce(kind), []))

    def subscribe(self, subscriber: Callable[[WalkEvent], Any]) -> 'EventEmitter':
        """Receive every event as a WalkEvent."""
        self._subscribers.append(subscriber)
        return self

    def unsubscribe(self, subscriber: Callable[[WalkEvent], Any]) -> 'EventEmitter':
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)
        return self

    def emit(self, event: WalkEvent) -> None:
        """Deliver an event to every interested listener."""
        listeners = list(self._listeners.get(event.kind, ()))
        once = self._once.get(event.kind)
        if once:
            for listener in list(once):
                self.off(event.kind, listener)

        args = event.payload()
        for listener in listeners:
            listener(*args)
        for subscriber in list(self._subscribers):
            subscriber(event)
