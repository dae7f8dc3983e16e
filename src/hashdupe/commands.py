"""
Unified command orchestrator for a scan.
This is the SINGLE source of truth for the scanning workflow used by the CLI.
"""
import time
import logging
from typing import Optional, Callable

from hashdupe.aliases import ALGORITHM_ALIASES
from hashdupe.core.aggregator import ResultAggregator
from hashdupe.core.dispatcher import HashDispatcher
from hashdupe.core.hasher import HasherImpl
from hashdupe.core.models import ScanParams, ScanProgress, ScanResult
from hashdupe.core.scanner import FileScannerImpl

logger = logging.getLogger(__name__)


class ScanCommand:
    """
    Orchestrates the whole scan:
    1. Walk the root directory, dispatching one hashing task per regular file
    2. Seal the dispatcher so its supervisor closes the result channels when done
    3. Aggregate records and failures into digest groups

    Usage:
        params = ScanParams(root_dir="/data", workers=4)
        result = ScanCommand().execute(params, progress_callback=printer)
        for group in result.duplicate_groups:
            ...
    """

    def execute(
            self,
            params: ScanParams,
            progress_callback: Optional[Callable[[ScanProgress], None]] = None
    ) -> ScanResult:
        """
        Execute a scan with given parameters.

        Returns:
            ScanResult with the digest grouping, per-file failures and statistics

        Raises:
            ScanError: If the directory tree cannot be enumerated
        """
        start_time = time.time()

        algorithm = ALGORITHM_ALIASES[params.algorithm]()
        hasher = HasherImpl(algorithm, chunk_size=params.chunk_size)
        dispatcher = HashDispatcher(hasher, capacity=params.workers)
        scanner = FileScannerImpl(root_dir=params.root_dir, excluded_dirs=params.excluded_dirs)

        try:
            total = scanner.scan(dispatcher.dispatch)
            logger.debug(f"Dispatched {total} files to {dispatcher.capacity} workers ({algorithm.name})")
            dispatcher.seal()

            aggregator = ResultAggregator(
                dispatcher.records,
                dispatcher.failures,
                gate=dispatcher.gate,
                total=total,
                progress_callback=progress_callback,
            )
            result = aggregator.run()
        except BaseException:
            # Fatal walk error or Ctrl+C: tasks that have not started must not keep hashing
            dispatcher.abort()
            raise
        dispatcher.join()

        result.stats.peak_workers = dispatcher.gate.peak
        result.stats.capacity = dispatcher.capacity
        result.stats.algorithm = algorithm.name
        result.stats.total_time = time.time() - start_time
        return result
