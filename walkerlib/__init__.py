"""walkerlib - Asynchronous directory walker.

walkerlib walks a directory tree without blocking the event loop, classifies
every entry it finds (file, directory, symlink, device, FIFO, socket) and
reports each one through events as soon as it is known.

    from walkerlib.aio import Walker

    walker = Walker('/srv/project')
    walker.on('file', lambda path, st: print(path))
    await walker.join()
"""

__version__ = "0.1.0"

from . import aio
from .config import WalkConfig
from .errors import WalkError, UnknownFileTypeError, ErrorKind

__all__ = [
    "__version__",
    "aio",
    "WalkConfig",
    "WalkError",
    "UnknownFileTypeError",
    "ErrorKind",
]
