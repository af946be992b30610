"""Configuration system for walkerlib.

This module defines how users describe a walk: which directories to prune,
how much concurrent I/O to allow and whether listings are cached. A
WalkConfig builds the backend and directory filter a Walker runs with.
"""

from dataclasses import dataclass, field
from typing import Optional, Set


@dataclass
class WalkConfig:
    """Settings for a directory walk.

    Example:
        config = WalkConfig(exclude_patterns={'.git', '__pycache__'}, max_depth=3)
        walker = Walker('/srv/project', config=config)
    """

    # Prune policy
    exclude_patterns: Set[str] = field(default_factory=set)  # Glob patterns on directory names
    include_hidden: bool = True                              # Descend into dot-directories
    max_depth: Optional[int] = None                          # Levels below the root to list

    # I/O
    max_concurrent: Optional[int] = 100  # Concurrent blocking calls (None = unbounded)

    # Listing cache
    cache_listings: bool = False
    cache_size: int = 10000
    cache_ttl: float = 300.0  # seconds

    def validate(self) -> None:
        """Check the configuration for impossible values.

        Raises:
            ValueError: If a limit is out of range
        """
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.max_concurrent is not None and self.max_concurrent <= 0:
            raise ValueError(f"max_concurrent must be > 0, got {self.max_concurrent}")
        if self.cache_size <= 0:
            raise ValueError(f"cache_size must be > 0, got {self.cache_size}")
        if self.cache_ttl <= 0:
            raise ValueError(f"cache_ttl must be > 0, got {self.cache_ttl}")

    def create_backend(self):
        """Build the filesystem backend described by this configuration."""
        from .aio.adapters.filesystem import OsFileSystemBackend

        self.validate()
        backend = OsFileSystemBackend(max_concurrent=self.max_concurrent)
        if self.cache_listings:
            from .aio.caching import CachingFileSystemBackend
            backend = CachingFileSystemBackend(
                backend, max_size=self.cache_size, ttl=self.cache_ttl
            )
        return backend

    def create_directory_filter(self, root: Optional[str] = None):
        """Build the prune predicate described by this configuration.

        Args:
            root: Walk root, exempt from name-based pruning and required
                when max_depth is set

        Returns:
            A ``fn(path, metadata) -> bool`` predicate
        """
        from .aio import filters

        self.validate()
        predicates = []
        if not self.include_hidden:
            predicates.append(filters.exclude_hidden(root))
        if self.exclude_patterns:
            predicates.append(
                filters.exclude_names(*sorted(self.exclude_patterns), root=root))
        if self.max_depth is not None:
            if root is None:
                raise ValueError("max_depth requires a walk root")
            predicates.append(filters.max_depth(root, self.max_depth))

        if not predicates:
            return filters.include_all
        if len(predicates) == 1:
            return predicates[0]
        return filters.all_of(*predicates)
