"""
Search Pipeline for fuzzgrep.

Coordinates the search workflow: one walker thread feeds file paths to a
pool of scan worker threads, whose matches are funneled to a single
reporter thread.

    walker -> (path queue) -> N scan workers -> (result queue) -> reporter

The result queue is closed only after the walker and every worker have
finished, which is what lets the reporter stop without dropping matches.
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Iterable, Optional

from fuzzgrep.core.closable_queue import ClosableQueue
from fuzzgrep.core.file_walker import FileWalker, FileWalkerInterface
from fuzzgrep.core.matcher import Matcher, fuzzy_match
from fuzzgrep.services.result_reporter import ResultReporter
from fuzzgrep.services.scan_worker import ScanWorker
from fuzzgrep.services.search_models import (
    PipelineSummary,
    PipelineUsageError,
    SearchResult,
)

logger = logging.getLogger(__name__)

MISSING_PATTERN_MESSAGE = "Please provide a search pattern using the --pattern flag."


def default_worker_count() -> int:
    """Number of workers used when none is configured: the available CPUs."""
    return os.cpu_count() or 1


class SearchPipeline:
    """
    Concurrent fuzzy search over a directory tree.

    Runs N+2 threads per search: the walker, N scan workers, and the
    reporter. The path and result queues are the only shared mutable state.
    """

    def __init__(
        self,
        pattern: str,
        root_path: str | os.PathLike = ".",
        workers: Optional[int] = None,
        extensions: str | Iterable[str] | None = None,
        matcher: Matcher = fuzzy_match,
        reporter: Optional[ResultReporter] = None,
        file_walker: Optional[FileWalkerInterface] = None,
        path_queue_size: int = 64,
        result_queue_size: int = 256,
        encoding: str = "utf-8",
        errors: str = "replace",
    ):
        """
        Initialize the pipeline.

        Args:
            pattern: Fuzzy pattern; must be non-empty
            root_path: Directory to search
            workers: Scan worker count; None or a non-positive value falls
                     back to the available parallelism
            extensions: Extensions to include (e.g. ".go,.txt"); empty
                        means every file
            matcher: Predicate called as matcher(pattern, line)
            reporter: Consumer of matches (default: ResultReporter on stdout)
            file_walker: Walker producing paths (default: FileWalker)
            path_queue_size: Bound on buffered paths; 0 means unbounded
            result_queue_size: Bound on buffered results; 0 means unbounded
            encoding: Text encoding used to decode scanned files
            errors: Codec error handler for undecodable bytes

        Raises:
            PipelineUsageError: If pattern is empty
        """
        if not pattern:
            raise PipelineUsageError(MISSING_PATTERN_MESSAGE)

        if workers is None:
            workers = default_worker_count()
        elif workers <= 0:
            fallback = default_worker_count()
            logger.warning(
                f"Number of workers must be greater than 0 (got {workers}). "
                f"Using default number of CPU cores ({fallback})."
            )
            workers = fallback

        self._pattern = pattern
        self._root_path = root_path
        self._workers = workers
        self._matcher = matcher
        self._reporter = reporter or ResultReporter()
        self._file_walker = file_walker or FileWalker(extensions)
        self._path_queue_size = path_queue_size
        self._result_queue_size = result_queue_size
        self._encoding = encoding
        self._errors = errors

    @property
    def workers(self) -> int:
        return self._workers

    @property
    def pattern(self) -> str:
        return self._pattern

    def _create_worker(self) -> ScanWorker:
        return ScanWorker(
            self._pattern,
            matcher=self._matcher,
            encoding=self._encoding,
            errors=self._errors,
        )

    def _produce_paths(self, paths: ClosableQueue[str]) -> int:
        """Walk the tree into the path queue, closing it however the walk ends."""
        count = 0
        try:
            for file_path in self._file_walker.walk(self._root_path):
                paths.put(file_path)
                count += 1
        finally:
            paths.close()
        logger.debug(f"Walker finished after {count} files")
        return count

    def _report(self, results: ClosableQueue[SearchResult]) -> int:
        """Run the reporter; if it dies, keep consuming so workers never block on put."""
        try:
            return self._reporter.run(results)
        except Exception:
            for _ in results:
                pass
            raise

    def run(self) -> PipelineSummary:
        """
        Run the search to completion.

        Blocks until every file has been scanned and every match reported.

        Returns:
            PipelineSummary with counts for the run

        Raises:
            Exception: Re-raises an unexpected failure of the walker, a
                       worker or the reporter once the pipeline has drained
        """
        start_time = time.time()
        logger.info(f"Searching {self._root_path} for {self._pattern!r} with {self._workers} workers")

        paths: ClosableQueue[str] = ClosableQueue(self._path_queue_size, name="path queue")
        results: ClosableQueue[SearchResult] = ClosableQueue(
            self._result_queue_size, name="result queue"
        )

        with ThreadPoolExecutor(
            max_workers=self._workers + 2, thread_name_prefix="fuzzgrep"
        ) as executor:
            reporter_future = executor.submit(self._report, results)
            walker_future = executor.submit(self._produce_paths, paths)
            worker_futures = [
                executor.submit(self._create_worker().run, paths, results)
                for _ in range(self._workers)
            ]

            try:
                wait([walker_future, *worker_futures])
            finally:
                # Sole trigger for the reporter to stop
                results.close()

            lines_reported = reporter_future.result()

        summary = PipelineSummary(
            workers=self._workers,
            files_discovered=walker_future.result(),
            lines_reported=lines_reported,
        )
        for future in worker_futures:
            stats = future.result()
            summary.files_scanned += stats.files_scanned
            summary.files_failed += stats.files_failed
            summary.matches += stats.matches

        summary.duration_seconds = time.time() - start_time
        logger.info(
            f"Scanned {summary.files_scanned} files ({summary.files_failed} failed), "
            f"{summary.matches} matches in {summary.duration_seconds:.2f}s"
        )
        return summary


def run_search(
    pattern: str,
    root_path: str | os.PathLike = ".",
    workers: Optional[int] = None,
    extensions: str | Iterable[str] | None = None,
    **kwargs,
) -> PipelineSummary:
    """Build a SearchPipeline and run it. Extra kwargs go to SearchPipeline."""
    pipeline = SearchPipeline(
        pattern,
        root_path=root_path,
        workers=workers,
        extensions=extensions,
        **kwargs,
    )
    return pipeline.run()
