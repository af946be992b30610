"""Test utilities for walkerlib and its consumers."""

from .fixtures import FakeFileSystemBackend, EventRecorder, make_stat

__all__ = ['FakeFileSystemBackend', 'EventRecorder', 'make_stat']
