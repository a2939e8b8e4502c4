# core/aggregator.py

"""Deduplicating size aggregation shared by all size-lookup workers."""
from threading import Lock
from typing import Dict, Iterable, List, Sequence, Set

from core.data_structures import AggregateResult, CandidateFile, ErrorRecord, PatternTotal
from core.exceptions import AggregatorFinalizedError
from core.pattern import Pattern
from utils.console import log
from utils.file_utils import format_size, get_display_path

class DedupAggregator:
    """
    Owns the seen set and the running totals.

    A file reached through several patterns, hard links or symlinks is added
    to the grand total once, and to the subtotal of every pattern that matched it.
    """

    def __init__(self, patterns: Sequence[Pattern], verbose: bool = False):
        self.verbose = verbose
        self._labels = {p.index: p.raw for p in patterns}
        self._seen: Dict[tuple, Set[int]] = {}
        self._pattern_bytes = {p.index: 0 for p in patterns}
        self._pattern_files = {p.index: 0 for p in patterns}
        self._total_bytes = 0
        self._total_files = 0
        self._finalized = False
        self._lock = Lock()

    def record(self, candidate: CandidateFile, matching_pattern_indices: Iterable[int], size: int) -> bool:
        """
        Fold one sized file into the totals. Safe to call from any thread.

        Returns True if the file was new to the grand total.
        """
        identity = candidate.identity or ('path', str(candidate.path))
        with self._lock:
            if self._finalized:
                raise AggregatorFinalizedError(f"record() after finalize(): {candidate.path}")

            attributed = self._seen.get(identity)
            is_new = attributed is None
            if is_new:
                attributed = self._seen[identity] = set()
                self._total_bytes += size
                self._total_files += 1

            for index in matching_pattern_indices:
                if index in attributed:
                    continue
                attributed.add(index)
                self._pattern_bytes[index] += size
                self._pattern_files[index] += 1

        if is_new and self.verbose:
            log("SIZE", f"{get_display_path(candidate.path)}: {format_size(size)}")
        return is_new

    @property
    def total_bytes(self) -> int:
        with self._lock:
            return self._total_bytes

    @property
    def file_count(self) -> int:
        with self._lock:
            return self._total_files

    def finalize(self) -> AggregateResult:
        """Freeze the totals. Further record() calls raise AggregatorFinalizedError."""
        with self._lock:
            self._finalized = True
            patterns = tuple(
                PatternTotal(index, self._labels[index], self._pattern_bytes[index], self._pattern_files[index])
                for index in sorted(self._labels)
            )
            return AggregateResult(self._total_bytes, self._total_files, patterns)

class ErrorLog:
    """Thread-safe collection of non-fatal failures."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._records: List[ErrorRecord] = []
        self._lock = Lock()

    def add(self, path, reason, kind: str):
        record = ErrorRecord(str(path), str(reason), kind)
        with self._lock:
            self._records.append(record)
        if self.verbose:
            log("SKIP", f"{record.path}: {record.reason}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def records(self) -> List[ErrorRecord]:
        with self._lock:
            return list(self._records)
