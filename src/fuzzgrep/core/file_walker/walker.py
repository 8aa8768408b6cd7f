"""
FileWalker implementation for recursive directory traversal.
"""

import logging
import os
import stat
from typing import Iterable, Iterator

from .interfaces import FileWalkerInterface
from .models import ExtensionSet, file_extension, parse_extensions

logger = logging.getLogger(__name__)


class FileWalker(FileWalkerInterface):
    """
    Concrete implementation of FileWalkerInterface.

    Provides recursive directory traversal with:
    - Exact, case-sensitive file extension filtering
    - Lazy generation of paths, so consumers can start before the walk ends
    - Graceful handling of inaccessible entries

    Symlinks to regular files are yielded; symlinked directories are not
    followed. FIFOs, sockets and device files are skipped since opening
    them can block indefinitely.
    """

    def __init__(self, extensions: str | Iterable[str] | None = None):
        """
        Initialize the FileWalker.

        Args:
            extensions: Extensions to include, including the dot (e.g. {'.go'})
                        or a comma-separated string. Empty or None disables
                        filtering.
        """
        self._extensions: ExtensionSet = parse_extensions(extensions)

    @property
    def extensions(self) -> ExtensionSet:
        return self._extensions

    def _has_matching_extension(self, path: str) -> bool:
        """Check if a file passes the extension filter."""
        if not self._extensions:
            return True
        return file_extension(path) in self._extensions

    def walk(self, root_path: str | os.PathLike) -> Iterator[str]:
        """
        Recursively walk a directory and yield file paths.

        Args:
            root_path: Root directory to walk. A regular file is yielded
                       on its own if it passes the filter.

        Yields:
            Normalized path of each matching file, joined onto root_path
        """
        root = os.path.normpath(os.fspath(root_path))

        try:
            root_stat = os.stat(root)
        except OSError as e:
            logger.error(f"Error walking the path {root!r}: {e}")
            return

        if stat.S_ISDIR(root_stat.st_mode):
            yield from self._walk_directory(root)
        elif stat.S_ISREG(root_stat.st_mode):
            if self._has_matching_extension(root):
                yield root
        else:
            logger.debug(f"Skipping non-regular root: {root}")

    def _walk_directory(self, directory: str) -> Iterator[str]:
        """
        Recursively walk one directory, entries in name order.

        Args:
            directory: Directory being walked

        Yields:
            Paths of matching files below directory
        """
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Error accessing path {directory!r}: {e}")
            return

        for entry in entries:
            path = entry.name if directory == os.curdir else os.path.join(directory, entry.name)

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file()
                is_broken_link = (
                    not is_dir and not is_file and entry.is_symlink() and not os.path.exists(path)
                )
            except OSError as e:
                logger.warning(f"Error accessing path {path!r}: {e}")
                continue

            if is_dir:
                yield from self._walk_directory(path)
            elif is_file:
                if self._has_matching_extension(path):
                    yield path
            elif is_broken_link:
                logger.warning(f"Error accessing path {path!r}: broken symbolic link")
            else:
                logger.debug(f"Skipping non-regular file: {path}")
