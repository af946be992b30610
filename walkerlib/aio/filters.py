"""
Directory prune policies.

Each factory returns a predicate ``fn(path, metadata) -> bool`` suitable for
``Walker.set_directory_filter``. Returning False prunes the directory: it is
not listed and produces no events, and nothing below it is visited.
"""

import os
from fnmatch import fnmatch
from typing import Any, Callable, Optional

DirectoryFilter = Callable[[str, Any], bool]


def include_all(path: str, metadata: Any) -> bool:
    """Default policy: descend into every directory."""
    return True


def _normalize_root(root: Optional[str]) -> Optional[str]:
    return os.path.normpath(root) if root is not None else None


def exclude_hidden(root: Optional[str] = None) -> DirectoryFilter:
    """Prune directories whose name starts with a dot.

    Pass the walk ``root`` to keep it walkable when its own name is hidden,
    as with ``'.'`` or ``~/.config``.
    """
    root = _normalize_root(root)

    def predicate(path: str, metadata: Any) -> bool:
        path = os.path.normpath(path)
        if path == root:
            return True
        return not os.path.basename(path).startswith('.')
    return predicate


def exclude_names(*patterns: str, root: Optional[str] = None) -> DirectoryFilter:
    """
    Prune directories whose base name matches any glob pattern.

    The walk ``root``, when given, is never pruned, even by a pattern such
    as ``'.*'``.

    Example:
        walker.set_directory_filter(exclude_names('.git', 'node_modules', '*.egg-info'))
    """
    patterns = tuple(patterns)
    root = _normalize_root(root)

    def predicate(path: str, metadata: Any) -> bool:
        path = os.path.normpath(path)
        if path == root:
            return True
        name = os.path.basename(path)
        return not any(fnmatch(name, pattern) for pattern in patterns)
    return predicate


def max_depth(root: str, depth: int) -> DirectoryFilter:
    """
    Descend at most ``depth`` levels below ``root``.

    The root directory is depth 0. With ``depth=0`` only the root itself is
    listed; its subdirectories are pruned.

    Raises:
        ValueError: If depth is negative
    """
    if depth < 0:
        raise ValueError(f"depth must be >= 0, got {depth}")
    root = os.path.normpath(root)

    def predicate(path: str, metadata: Any) -> bool:
        relative = os.path.relpath(os.path.normpath(path), root)
        if relative == os.curdir:
            return True
        return len(relative.split(os.sep)) <= depth
    return predicate


def all_of(*predicates: DirectoryFilter) -> DirectoryFilter:
    """Descend only if every predicate agrees."""
    predicates = tuple(predicates)

    def predicate(path: str, metadata: Any) -> bool:
        return all(p(path, metadata) for p in predicates)
    return predicate

