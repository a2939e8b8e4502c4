# core/worker_pool.py

"""Bounded pool of threads that stat matched files."""
import queue
from threading import Lock, Thread
from typing import Callable, List, Optional

from core.aggregator import DedupAggregator, ErrorLog
from core.data_structures import SIZE_ERROR, CandidateFile
from utils.file_utils import format_size

PROGRESS_EVERY = 200
SIZING = "Sizing files"

_STOP = None

class SizeWorkerPool:
    """
    Fixed set of worker threads fed through a bounded queue.

    submit() blocks while the queue is full, so a fast walk over a huge tree
    cannot build up an unbounded backlog of pending lookups.
    """

    def __init__(self, threads: int, aggregator: DedupAggregator, errors: ErrorLog,
                 capacity: int = 1024, progress_callback: Optional[Callable[[str, str], None]] = None):
        self.threads = max(1, threads)
        self.aggregator = aggregator
        self.errors = errors
        self.progress_callback = progress_callback
        self.pending = queue.Queue(maxsize=max(1, capacity))
        self.processed = 0
        self._counter_lock = Lock()
        self._workers: List[Thread] = []
        self._closed = False
        self.failure: Optional[Exception] = None

    def start(self):
        for i in range(self.threads):
            worker = Thread(target=self._work, name=f"size-worker-{i}")
            worker.daemon = True
            worker.start()
            self._workers.append(worker)
        return self

    def submit(self, candidate: CandidateFile):
        """Queue a file for sizing; blocks while all workers are behind."""
        if self._closed:
            raise RuntimeError("submit() on a closed pool")
        self.pending.put(candidate)

    def close(self):
        """
        Wait for every queued file to be sized, then stop the workers.

        Re-raises the first unexpected exception a worker hit while sizing.
        """
        if self._closed:
            return
        self._closed = True
        for _ in self._workers:
            self.pending.put(_STOP)
        for worker in self._workers:
            worker.join()
        if self.failure is not None:
            raise self.failure

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _work(self):
        while True:
            candidate = self.pending.get()
            try:
                if candidate is _STOP:
                    return
                self._size_one(candidate)
            except Exception as e:
                # the worker keeps draining the queue; close() re-raises
                with self._counter_lock:
                    if self.failure is None:
                        self.failure = e
            finally:
                self.pending.task_done()

    def _size_one(self, candidate: CandidateFile):
        try:
            sized = candidate.lookup()
        except OSError as e:
            self.errors.add(candidate.path, e.strerror or e, SIZE_ERROR)
            return

        self.aggregator.record(sized, sized.pattern_indices, sized.size)

        with self._counter_lock:
            self.processed += 1
            processed = self.processed
        if self.progress_callback and processed % PROGRESS_EVERY == 0:
            self.progress_callback(
                SIZING,
                f"{processed} files, {format_size(self.aggregator.total_bytes)}",
            )
