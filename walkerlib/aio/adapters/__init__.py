"""Filesystem backends.

This module contains backends that bridge the walker to a concrete
source of filesystem metadata and listings.
"""

from .filesystem import OsFileSystemBackend

__all__ = [
    'OsFileSystemBackend',
]
