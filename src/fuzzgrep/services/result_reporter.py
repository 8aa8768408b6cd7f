"""
Result reporter for the search pipeline.

Drains the results queue and writes one line per match.
"""

import logging
import sys
from typing import TextIO

from fuzzgrep.core.closable_queue import ClosableQueue
from fuzzgrep.services.search_models import SearchResult

logger = logging.getLogger(__name__)


class ResultReporter:
    """Writes matches to an output stream in arrival order."""

    def __init__(self, stream: TextIO | None = None):
        """
        Initialize the reporter.

        Args:
            stream: Destination for match lines (default: sys.stdout)
        """
        self._stream = stream if stream is not None else sys.stdout

    def report(self, result: SearchResult) -> None:
        self._stream.write(result.format() + "\n")

    def _report_escaped(self, result: SearchResult) -> None:
        """Write a line the stream cannot encode, with the offending characters escaped."""
        encoding = getattr(self._stream, "encoding", None) or "utf-8"
        line = result.format().encode(encoding, "backslashreplace").decode(encoding)
        self._stream.write(line + "\n")

    def run(self, results: ClosableQueue[SearchResult]) -> int:
        """
        Report results until the queue is closed and drained.

        If the stream fails, the remaining results are still drained and
        discarded so that blocked workers can finish. An unexpected failure
        is re-raised once the queue is drained.

        Returns:
            Number of lines written
        """
        count = 0
        broken = False
        failure: Exception | None = None
        for result in results:
            if broken:
                continue
            try:
                try:
                    self.report(result)
                except UnicodeEncodeError:
                    self._report_escaped(result)
            except OSError as e:
                logger.error(f"Error writing results: {e}")
                broken = True
                continue
            except Exception as e:
                logger.error(f"Unexpected error reporting {result.file_path!r}: {e}")
                failure = e
                broken = True
                continue
            count += 1

        if failure is not None:
            raise failure

        if not broken:
            try:
                self._stream.flush()
            except OSError as e:
                logger.error(f"Error writing results: {e}")

        logger.debug(f"Reported {count} matches")
        return count
