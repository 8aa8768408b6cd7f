"""
Core Layer - Configuration, matching, queueing, and directory walking components.
"""

from fuzzgrep.core.closable_queue import ClosableQueue, QueueClosedError
from fuzzgrep.core.config import (
    FuzzgrepConfig,
    LoggingConfig,
    ScanConfig,
    SearchConfig,
    configure_logging,
    load_config,
)
from fuzzgrep.core.file_walker import (
    ExtensionSet,
    FileWalker,
    FileWalkerInterface,
    file_extension,
    parse_extensions,
)
from fuzzgrep.core.matcher import Matcher, fuzzy_match

__all__ = [
    # Config
    "FuzzgrepConfig",
    "SearchConfig",
    "ScanConfig",
    "LoggingConfig",
    "configure_logging",
    "load_config",
    # Queue
    "ClosableQueue",
    "QueueClosedError",
    # FileWalker
    "ExtensionSet",
    "FileWalker",
    "FileWalkerInterface",
    "file_extension",
    "parse_extensions",
    # Matcher
    "Matcher",
    "fuzzy_match",
]
