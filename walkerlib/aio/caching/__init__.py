"""
Caching layer for walkerlib - Optional performance optimization.

This module provides opt-in listing caches for tools that walk the same
subtree repeatedly, while keeping metadata probes fresh.
"""

from .backend import CachingFileSystemBackend

__all__ = [
    'CachingFileSystemBackend',
]
