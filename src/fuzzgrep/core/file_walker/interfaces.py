"""
Abstract interfaces for directory walking.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from .models import ExtensionSet


class FileWalkerInterface(ABC):
    """
    Abstract interface for recursive directory traversal.

    Implementations yield candidate file paths lazily and never abort the
    walk because of a single inaccessible entry.
    """

    @abstractmethod
    def walk(self, root_path: str) -> Iterator[str]:
        """
        Recursively walk a directory and yield file paths.

        Args:
            root_path: Root directory (or single file) to walk

        Yields:
            Path of each file that passes the extension filter

        Notes:
            - Logs and skips entries that cannot be accessed
            - Logs and yields nothing if the root cannot be accessed
        """
        pass

    @property
    @abstractmethod
    def extensions(self) -> ExtensionSet:
        """Extensions included by the walk; empty means every file."""
        pass
