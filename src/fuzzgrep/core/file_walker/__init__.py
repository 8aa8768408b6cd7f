"""
FileWalker module for fuzzgrep.

Provides lazy recursive directory traversal with file extension filtering.
"""

from .interfaces import FileWalkerInterface
from .models import ExtensionSet, file_extension, parse_extensions
from .walker import FileWalker

__all__ = [
    # Main classes
    "FileWalker",
    "FileWalkerInterface",
    # Extension filtering
    "ExtensionSet",
    "file_extension",
    "parse_extensions",
]
