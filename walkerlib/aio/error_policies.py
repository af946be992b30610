"""
Error handling policies for walkerlib.

A walk never raises on filesystem failures; it emits ``error`` events. The
policies here are ready-made consumers of those events, so callers can
collect or report failures without writing their own listener.
"""

from abc import ABC, abstractmethod
import sys
from typing import Any, Optional

from ..errors import ErrorKind
from .core.events import EventKind, WalkEvent


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses decide what to do with each failure reported by a walk.
    """

    @abstractmethod
    def handle(self, error: BaseException, path: str, metadata: Any,
               kind: Optional[ErrorKind] = None) -> None:
        """
        Handle an error reported by a walk.

        Args:
            error: The exception carried by the error event
            path: Path of the entry that failed
            metadata: lstat result, or None if the probe itself failed
            kind: Where the failure happened (probe, listing, classification)
        """
        pass

    def attach(self, walker) -> 'ErrorPolicy':
        """
        Subscribe this policy to a walker's error events.

        Returns:
            self, so the policy can be created and attached in one line
        """
        walker.subscribe(self._on_event)
        return self

    def _on_event(self, event: WalkEvent) -> None:
        if event.kind is EventKind.ERROR:
            self.handle(event.error, event.path, event.metadata, event.error_kind)


class CollectErrorsPolicy(ErrorPolicy):
    """
    Policy that collects all errors without logging, for batch processing.

    Useful for collecting all errors and presenting them at the end.
    """

    def __init__(self):
        """Initialize the policy."""
        self.errors = []
        self.skipped_paths = []

    def handle(self, error: BaseException, path: str, metadata: Any,
               kind: Optional[ErrorKind] = None) -> None:
        """Silently collect the error."""
        self._record(error, path, kind)

    def _record(self, error: BaseException, path: str, kind: Optional[ErrorKind]) -> None:
        self.errors.append({
            'path': path,
            'kind': kind,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error)
        })

        # Track skipped paths for permission errors
        if isinstance(error, PermissionError) and path:
            self.skipped_paths.append(path)

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'permission_errors': sum(1 for e in self.errors if e['error_type'] == 'PermissionError'),
            'probe_errors': sum(1 for e in self.errors if e['kind'] is ErrorKind.PROBE),
            'listing_errors': sum(1 for e in self.errors if e['kind'] is ErrorKind.LISTING),
            'unknown_types': sum(1 for e in self.errors if e['kind'] is ErrorKind.CLASSIFICATION),
            'skipped_paths': len(self.skipped_paths),
            'errors': self.errors  # Full error details
        }


class ContinueOnErrorsPolicy(CollectErrorsPolicy):
    """
    Policy that records errors and reports each one to stderr.

    The walk itself always continues; this policy only makes failures
    visible while it runs.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings to stderr when errors occur
        """
        super().__init__()
        self.verbose = verbose

    def handle(self, error: BaseException, path: str, metadata: Any,
               kind: Optional[ErrorKind] = None) -> None:
        self._record(error, path, kind)

        if self.verbose:
            if isinstance(error, PermissionError):
                print(f"\nWARNING: Skipping inaccessible path '{path}': {error}", file=sys.stderr)
            else:
                where = kind.value if kind else 'walk'
                print(f"\nWARNING: Error in {where} for '{path}': {error}", file=sys.stderr)
