"""logstream core package.

Orders rotated and segmented logfiles using metadata embedded in their
paths rather than filesystem timestamps:

- **scanner**: recursive discovery of files whose path matches a pattern
- **parser**: capture extraction and translation to integer scores
- **translation**: built-in month/day tables and custom lookup tables
- **sorting**: multi-key priority ordering with per-key direction
- **differentiator**: splitting interleaved files into logical streams
- **locator**: the scan -> parse -> group -> sort pipeline in one call
- **config** / **validation**: YAML stream definitions and their checks

The usual entry point is ``locate_logstreams(directory, SortPattern(...))``.
"""

from .config import SortPattern, load_config
from .errors import (
    FileParseError,
    LogstreamError,
    MultipleError,
    UnresolvedCalendarTokenError,
    UnresolvedTokenError,
    UnresolvedTranslationTokenError,
)
from .locator import LocateResult, locate_logstreams
from .models import LogFile, index_of
from .version import __version__

__all__ = [
    "__version__",
    "FileParseError",
    "LocateResult",
    "LogFile",
    "LogstreamError",
    "MultipleError",
    "SortPattern",
    "UnresolvedCalendarTokenError",
    "UnresolvedTokenError",
    "UnresolvedTranslationTokenError",
    "index_of",
    "load_config",
    "locate_logstreams",
]
