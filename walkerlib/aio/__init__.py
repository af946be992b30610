"""Asynchronous implementation of walkerlib.

This package contains the asyncio walker and everything around it. All
filesystem I/O runs off the event loop, and every entry is reported through
events as soon as it is classified.
"""

# Core abstractions
from .core import (
    Walker,
    walker,
    EventEmitter,
    EventKind,
    WalkEvent,
    EntryType,
    classify,
    FileSystemBackend,
)

# Backends
from .adapters import OsFileSystemBackend
from .caching import CachingFileSystemBackend

# Prune policies
from .filters import (
    include_all,
    exclude_hidden,
    exclude_names,
    max_depth,
    all_of,
)

# Error handling
from .error_policies import (
    ErrorPolicy,
    CollectErrorsPolicy,
    ContinueOnErrorsPolicy,
)

# High-level API
from .api import (
    walk_events,
    find_entries_async,
    get_walk_stats_async,
)

# Configuration and errors (re-exported from the top-level package)
from ..config import WalkConfig
from ..errors import WalkError, UnknownFileTypeError, ErrorKind

__all__ = [
    # Core abstractions
    'Walker',
    'walker',
    'EventEmitter',
    'EventKind',
    'WalkEvent',
    'EntryType',
    'classify',
    'FileSystemBackend',
    # Backends
    'OsFileSystemBackend',
    'CachingFileSystemBackend',
    # Prune policies
    'include_all',
    'exclude_hidden',
    'exclude_names',
    'max_depth',
    'all_of',
    # Error handling
    'ErrorPolicy',
    'CollectErrorsPolicy',
    'ContinueOnErrorsPolicy',
    'WalkError',
    'UnknownFileTypeError',
    'ErrorKind',
    # Configuration
    'WalkConfig',
    # High-level API
    'walk_events',
    'find_entries_async',
    'get_walk_stats_async',
]
