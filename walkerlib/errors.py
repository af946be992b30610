"""Error taxonomy for walkerlib.

Failures during a walk are never raised to the caller. They are surfaced
as ``error`` events carrying the exception, the path and the metadata (if
any was obtained), tagged with an ErrorKind.
"""

from enum import Enum


class WalkError(Exception):
    """Base class for errors produced by walkerlib itself."""


class UnknownFileTypeError(WalkError):
    """The metadata of an entry matched none of the known file types."""

    default_message = 'The type of this file could not be determined.'

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)


class ErrorKind(Enum):
    """Where in the walk an error was produced."""
    PROBE = "probe"                    # lstat failed
    LISTING = "listing"                # listdir failed on a directory
    CLASSIFICATION = "classification"  # st_mode matched no known type
