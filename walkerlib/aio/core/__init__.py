"""Core of the async walker.

This module defines the traversal engine, its events, entry classification
and the backend interface it performs I/O through.
"""

from .backend import FileSystemBackend
from .classify import EntryType, classify
from .events import EventEmitter, EventKind, WalkEvent
from .walker import Walker, walker

__all__ = [
    # Engine
    'Walker',
    'walker',
    # Events
    'EventEmitter',
    'EventKind',
    'WalkEvent',
    # Classification
    'EntryType',
    'classify',
    # Backend
    'FileSystemBackend',
]
