"""
Scan worker for the search pipeline.

Each worker pulls file paths from the shared path queue, scans every line
of the file with the matcher and pushes matches onto the shared results
queue. Workers run in their own threads and share nothing but the queues.
"""

import logging
from typing import BinaryIO, Generator

from fuzzgrep.core.closable_queue import ClosableQueue
from fuzzgrep.core.matcher import Matcher, fuzzy_match
from fuzzgrep.services.search_models import SearchResult, WorkerStats

logger = logging.getLogger(__name__)


def _decode_line(raw: bytes, encoding: str, errors: str) -> str:
    """Strip the line terminator (\\n or \\r\\n) and decode."""
    if raw.endswith(b"\n"):
        raw = raw[:-1]
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    return raw.decode(encoding, errors)


class ScanWorker:
    """Scans files line by line for fuzzy matches."""

    def __init__(
        self,
        pattern: str,
        matcher: Matcher = fuzzy_match,
        encoding: str = "utf-8",
        errors: str = "replace",
    ):
        """
        Initialize the worker.

        Args:
            pattern: Fuzzy pattern every line is tested against
            matcher: Predicate called as matcher(pattern, line)
            encoding: Text encoding used to decode lines
            errors: Codec error handler for undecodable bytes
        """
        self._pattern = pattern
        self._matcher = matcher
        self._encoding = encoding
        self._errors = errors

    def scan_file(self, file_path: str) -> Generator[SearchResult, None, None]:
        """
        Open a file and return a generator of its matching lines.

        The file is opened eagerly, so open failures surface here rather
        than on first iteration. The handle is closed when the generator is
        exhausted, closed, or abandoned because of a read error.

        Args:
            file_path: File to scan

        Returns:
            Generator yielding a SearchResult per matching line

        Raises:
            OSError: If the file cannot be opened
        """
        handle = open(file_path, "rb")
        return self._scan_lines(file_path, handle)

    def _scan_lines(
        self, file_path: str, handle: BinaryIO
    ) -> Generator[SearchResult, None, None]:
        with handle:
            for line_number, raw in enumerate(handle, start=1):
                line = _decode_line(raw, self._encoding, self._errors)
                if self._matcher(self._pattern, line):
                    yield SearchResult(
                        file_path=file_path,
                        line_number=line_number,
                        line_content=line,
                    )

    def run(
        self,
        paths: ClosableQueue[str],
        results: ClosableQueue[SearchResult],
    ) -> WorkerStats:
        """
        Process paths until the path queue is closed and drained.

        Per-file failures are logged and counted; they never stop the worker.

        Args:
            paths: Shared queue of file paths
            results: Shared queue receiving matches

        Returns:
            Counters for the files this worker handled
        """
        stats = WorkerStats()

        for file_path in paths:
            try:
                matches = self.scan_file(file_path)
            except OSError as e:
                logger.error(f"Error opening file {file_path!r}: {e}")
                stats.files_failed += 1
                continue

            try:
                for result in matches:
                    results.put(result)
                    stats.matches += 1
            except OSError as e:
                logger.warning(f"Error reading file {file_path!r}: {e}")
                stats.files_failed += 1
            except Exception:
                logger.exception(f"Unexpected error scanning {file_path!r}")
                stats.files_failed += 1
            else:
                stats.files_scanned += 1
            finally:
                matches.close()

        return stats
