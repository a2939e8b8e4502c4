# core/size_scan.py

"""Size scan: compile patterns, walk once, size matches in parallel."""
from pathlib import Path
from threading import Event
from typing import Callable, Optional, Sequence

from core.aggregator import DedupAggregator, ErrorLog
from core.data_structures import PATTERN_ERROR, ErrorRecord, RunConfig, RunReport
from core.exceptions import AllPatternsInvalidError
from core.pattern import compile_patterns
from core.traversal import TreeWalker
from core.worker_pool import SizeWorkerPool
from utils.console import log

def run_size_scan(raw_patterns: Sequence[str], config: RunConfig,
                  progress_callback: Optional[Callable[[str, str], None]] = None,
                  cancel_event: Optional[Event] = None,
                  cwd: Optional[Path] = None) -> RunReport:
    """
    Computes the deduplicated size of every file matching any of the patterns.

    Invalid patterns are rejected individually; AllPatternsInvalidError is
    raised before any filesystem work when none of them compile.
    """
    patterns, syntax_errors = compile_patterns(raw_patterns, config.case_sensitive, cwd)
    rejected = [ErrorRecord(e.pattern, str(e), PATTERN_ERROR) for e in syntax_errors]
    if not patterns:
        raise AllPatternsInvalidError(syntax_errors)

    if config.debug:
        for e in syntax_errors:
            log("PATTERN", f"rejected {e}")
        for pattern in patterns:
            log("PATTERN", f"#{pattern.index + 1} '{pattern.raw}' root={pattern.root} "
                           f"segments={pattern.describe()}")

    errors = ErrorLog(verbose=config.verbose)
    aggregator = DedupAggregator(patterns, verbose=config.verbose)
    walker = TreeWalker(patterns, config, errors, cancel_event)

    if progress_callback:
        progress_callback("Scanning", f"{len(patterns)} pattern(s)")

    with SizeWorkerPool(config.threads, aggregator, errors, config.queue_capacity,
                        progress_callback) as pool:
        for candidate in walker.walk():
            if cancel_event is not None and cancel_event.is_set():
                break
            pool.submit(candidate)

    result = aggregator.finalize()
    if progress_callback:
        progress_callback("Done", f"{result.file_count} files")

    if config.debug:
        log("WALK", f"{walker.dirs_visited} directories visited, "
                    f"{walker.roots_resolved} root(s) resolved")

    return RunReport(
        result=result,
        errors=errors.records(),
        rejected=rejected,
        roots_resolved=walker.roots_resolved,
        dirs_visited=walker.dirs_visited,
        cancelled=cancel_event is not None and cancel_event.is_set(),
    )
