"""
Search pipeline data models.

Contains dataclasses for match records, per-worker counters and run summaries.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchResult:
    """A single line that matched the pattern."""

    file_path: str
    line_number: int
    line_content: str

    def format(self) -> str:
        """Render the result as one line of user-visible output."""
        return f"Found in {self.file_path}:{self.line_number}: {self.line_content}"


@dataclass
class WorkerStats:
    """Counters kept by a single scan worker."""

    files_scanned: int = 0
    files_failed: int = 0
    matches: int = 0


@dataclass
class PipelineSummary:
    """Result of a pipeline run."""

    workers: int = 0
    files_discovered: int = 0
    files_scanned: int = 0
    files_failed: int = 0
    matches: int = 0
    lines_reported: int = 0
    duration_seconds: float = 0.0


class PipelineUsageError(ValueError):
    """Raised when the pipeline is configured in a way that cannot run."""

    pass
