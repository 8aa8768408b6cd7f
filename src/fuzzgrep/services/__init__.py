"""
Service Layer - ScanWorker, ResultReporter, and SearchPipeline.
"""

from fuzzgrep.services.result_reporter import ResultReporter
from fuzzgrep.services.scan_worker import ScanWorker
from fuzzgrep.services.search_models import (
    PipelineSummary,
    PipelineUsageError,
    SearchResult,
    WorkerStats,
)
from fuzzgrep.services.search_pipeline import (
    MISSING_PATTERN_MESSAGE,
    SearchPipeline,
    default_worker_count,
    run_search,
)

__all__ = [
    # Pipeline
    "SearchPipeline",
    "run_search",
    "default_worker_count",
    "MISSING_PATTERN_MESSAGE",
    # Stages
    "ScanWorker",
    "ResultReporter",
    # Models
    "SearchResult",
    "WorkerStats",
    "PipelineSummary",
    "PipelineUsageError",
]
