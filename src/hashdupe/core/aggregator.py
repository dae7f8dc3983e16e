"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/aggregator.py
Drains the record and failure streams into digest groups.

The aggregator is the only writer of the grouping, so it needs no lock. It keeps
selecting over whichever streams are still open and returns once both are closed.
"""

import logging
from typing import Optional, Callable, Dict, List

from hashdupe.core.channels import Channel, select
from hashdupe.core.governor import AdmissionGate
from hashdupe.core.models import (
    FileRecord, TaskFailure, DuplicateGroup, ScanProgress, ScanResult, ScanStats)

logger = logging.getLogger(__name__)


class ResultAggregator:
    """
    Consumes both result channels until both report closure.

    Attributes:
        records: Channel of FileRecord
        failures: Channel of TaskFailure
        gate: Admission gate, read for the active-worker count in progress snapshots
        total: Number of dispatched files (progress denominator)
    """

    def __init__(
            self,
            records: Channel,
            failures: Channel,
            gate: Optional[AdmissionGate] = None,
            total: int = 0,
            progress_callback: Optional[Callable[[ScanProgress], None]] = None
    ):
        self.records = records
        self.failures = failures
        self.gate = gate
        self.total = total
        self.progress_callback = progress_callback

        self.groups: Dict[str, DuplicateGroup] = {}
        self.failed: List[TaskFailure] = []
        self.files_processed = 0
        self.bytes_processed = 0

    def run(self) -> ScanResult:
        watched = [self.records, self.failures]

        while watched:
            channel, item, ok = select(*watched)
            if not ok:
                logger.debug(f"Channel '{channel.name}' closed")
                watched.remove(channel)
                continue

            if channel is self.records:
                self._add_record(item)
            else:
                self._report_failure(item)
            self._notify_progress()

            # rotate so a busy stream cannot starve the other
            watched = watched[1:] + watched[:1]

        logger.debug(
            f"Aggregation finished: {self.files_processed} hashed, "
            f"{len(self.failed)} failed, {len(self.groups)} distinct digests"
        )

        stats = ScanStats(
            files_discovered=self.total,
            files_hashed=self.files_processed,
            files_failed=len(self.failed),
            bytes_hashed=self.bytes_processed,
        )
        return ScanResult(groups=self.groups, failures=self.failed, stats=stats)

    def _add_record(self, record: FileRecord) -> None:
        group = self.groups.get(record.digest)
        if group is None:
            group = DuplicateGroup(digest=record.digest)
            self.groups[record.digest] = group
        group.add_file(record)

        self.files_processed += 1
        self.bytes_processed += record.size

    def _report_failure(self, failure: TaskFailure) -> None:
        logger.warning(f"Error processing {failure.path}: {failure.reason}")
        self.failed.append(failure)

    def _notify_progress(self) -> None:
        if not self.progress_callback:
            return
        progress = ScanProgress(
            scanned=self.files_processed + len(self.failed),
            total=self.total,
            bytes_hashed=self.bytes_processed,
            active_workers=self.gate.active if self.gate else 0,
            capacity=self.gate.capacity if self.gate else 0,
        )
        try:
            self.progress_callback(progress)
        except Exception as e:
            logger.warning(f"Error in progress handler: {e}")
