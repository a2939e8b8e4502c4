"""Core data structures for the size scanner."""
import os
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple

from utils.file_utils import file_identity

# ErrorRecord kinds
PATTERN_ERROR = 'pattern'
ROOT_ERROR = 'root'
TRAVERSAL_ERROR = 'traversal'
SIZE_ERROR = 'size'


class RunConfig(NamedTuple):
    """Settings that stay fixed for the duration of one run."""
    threads: int = 1
    case_sensitive: bool = True
    follow_symlinks: bool = True
    queue_capacity: int = 1024
    verbose: bool = False
    debug: bool = False


class CandidateFile(NamedTuple):
    """A file found by the walker together with the patterns that matched it."""
    path: Path
    pattern_indices: Tuple[int, ...]
    identity: Optional[tuple] = None
    size: Optional[int] = None

    def lookup(self) -> 'CandidateFile':
        """Stat the file, returning a copy carrying its identity key and size.

        Raises OSError if the file vanished or cannot be accessed.
        """
        stat_info = os.stat(self.path)
        return self._replace(identity=file_identity(stat_info, self.path), size=stat_info.st_size)


class PatternTotal(NamedTuple):
    """Bytes and file count attributed to a single pattern."""
    index: int
    pattern: str
    total_bytes: int
    file_count: int


class AggregateResult(NamedTuple):
    """Final totals; the grand total counts every file once."""
    total_bytes: int
    file_count: int
    patterns: Tuple[PatternTotal, ...]


class ErrorRecord(NamedTuple):
    """A non-fatal failure, kept for the report."""
    path: str
    reason: str
    kind: str


class RunReport(NamedTuple):
    """Everything a run produces for the reporting layer."""
    result: AggregateResult
    errors: List[ErrorRecord]
    rejected: List[ErrorRecord]
    roots_resolved: int
    dirs_visited: int
    cancelled: bool = False

    @property
    def skipped_count(self) -> int:
        return len(self.errors)
