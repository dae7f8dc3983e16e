"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/dispatcher.py
Spawns one hashing task per discovered file and supervises their completion.

TASK LIFECYCLE
--------------
dispatch(path)  : submit a task to the executor (never blocks the walk)
task            : acquire admission slot -> hash -> release slot -> emit one message
seal()          : start the supervisor; once every submitted task is done it closes
                  both the record and the failure channel
abort()         : cancel tasks that have not started, wait for running ones and close
                  both channels (fatal walk error, Ctrl+C)
"""

import threading
import logging
from concurrent.futures import ThreadPoolExecutor, Future, wait
from typing import List, Optional

from hashdupe.core.channels import Channel
from hashdupe.core.governor import AdmissionGate
from hashdupe.core.interfaces import Hasher
from hashdupe.core.models import FileRecord

logger = logging.getLogger(__name__)


class HashDispatcher:
    """
    Owns the admission gate, the two result channels and the task executor.

    Submission is unbounded: every file gets its future immediately. The executor
    is sized to the gate capacity unless `max_workers` says otherwise; the gate,
    not the executor, is what guarantees the cap.
    """

    def __init__(self, hasher: Hasher, capacity: int, max_workers: Optional[int] = None):
        self.hasher = hasher
        self.gate = AdmissionGate(capacity)

        condition = threading.Condition()
        self.records = Channel("records", condition)
        self.failures = Channel("failures", condition)

        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or capacity, thread_name_prefix="hashdupe-hash"
        )
        self._futures: List[Future] = []
        self._supervisor: Optional[threading.Thread] = None
        self.dispatched = 0

    @property
    def capacity(self) -> int:
        return self.gate.capacity

    def dispatch(self, path: str) -> None:
        if self._supervisor is not None:
            raise RuntimeError("Cannot dispatch after seal()")
        self._futures.append(self._executor.submit(self._hash_task, path))
        self.dispatched += 1

    def _hash_task(self, path: str) -> None:
        with self.gate.slot():
            result = self.hasher.hash_file(path)

        if isinstance(result, FileRecord):
            self.records.put(result)
        else:
            self.failures.put(result)

    def seal(self) -> threading.Thread:
        """No more dispatches. Starts and returns the supervisor thread."""
        if self._supervisor is None:
            self._supervisor = threading.Thread(
                target=self._supervise, name="hashdupe-supervisor", daemon=True
            )
            self._supervisor.start()
        return self._supervisor

    def _supervise(self) -> None:
        logger.debug(f"Supervisor waiting for {len(self._futures)} tasks")
        try:
            wait(self._futures)
            for future in self._futures:
                if future.cancelled():
                    continue
                exc = future.exception()
                if exc is not None:
                    logger.error(f"Hashing task crashed: {exc!r}")
        finally:
            self._executor.shutdown(wait=False)
            self.records.close()
            self.failures.close()
            logger.debug("Supervisor closed result channels")

    def join(self, timeout: Optional[float] = None) -> None:
        if self._supervisor is not None:
            self._supervisor.join(timeout)

    def abort(self) -> None:
        """Drops pending work after a fatal walk error or an interrupt."""
        logger.debug("Aborting dispatcher")
        self._executor.shutdown(wait=True, cancel_futures=True)
        self.records.close()
        self.failures.close()
