"""Classification of lstat results into entry types."""

import stat as stat_module  # To avoid name collision with stat results
from enum import Enum
from typing import Any, Optional

from .events import EventKind


class EntryType(Enum):
    """The filesystem entry types a walk can report."""
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    BLOCK_DEVICE = "block_device"
    CHARACTER_DEVICE = "character_device"
    FIFO = "fifo"
    SOCKET = "socket"
    FILE = "file"

    @property
    def event_kind(self) -> EventKind:
        """The type-specific event emitted after ``entry``."""
        return _EVENT_KINDS[self]


_EVENT_KINDS = {
    EntryType.DIRECTORY: EventKind.DIR,
    EntryType.SYMLINK: EventKind.SYMLINK,
    EntryType.BLOCK_DEVICE: EventKind.BLOCK_DEVICE,
    EntryType.CHARACTER_DEVICE: EventKind.CHARACTER_DEVICE,
    EntryType.FIFO: EventKind.FIFO,
    EntryType.SOCKET: EventKind.SOCKET,
    EntryType.FILE: EventKind.FILE,
}

# Order matters: the first matching predicate wins.
_PREDICATES = (
    (stat_module.S_ISDIR, EntryType.DIRECTORY),
    (stat_module.S_ISLNK, EntryType.SYMLINK),
    (stat_module.S_ISBLK, EntryType.BLOCK_DEVICE),
    (stat_module.S_ISCHR, EntryType.CHARACTER_DEVICE),
    (stat_module.S_ISFIFO, EntryType.FIFO),
    (stat_module.S_ISSOCK, EntryType.SOCKET),
    (stat_module.S_ISREG, EntryType.FILE),
)


def classify(metadata: Any) -> Optional[EntryType]:
    """Determine the entry type from an lstat result.

    Args:
        metadata: Anything with an ``st_mode`` attribute (os.stat_result)

    Returns:
        The matching EntryType, or None if the mode is not recognised
    """
    mode = metadata.st_mode
    for predicate, entry_type in _PREDICATES:
        if predicate(mode):
            return entry_type
    return None
