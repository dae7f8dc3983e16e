"""
Core hashing pipeline — hasher, admission gate, channels, walker, dispatcher and aggregator.

- HasherImpl + XXHashAlgorithmImpl / HashlibAlgorithmImpl: streamed full-content digests
- AdmissionGate: caps the number of files hashed at the same time
- Channel / select: closable result streams drained by one consumer
- FileScannerImpl: recursive walk dispatching every regular file
- HashDispatcher: one task per file plus a supervisor that closes the streams
- ResultAggregator: groups records by digest until both streams are closed
"""

from .models import (
    FileRecord, TaskFailure, DuplicateGroup, ScanParams, ScanProgress, ScanStats, ScanResult)
from .hasher import HasherImpl, XXHashAlgorithmImpl, HashlibAlgorithmImpl
from .governor import AdmissionGate
from .channels import Channel, ChannelClosed, select
from .scanner import FileScannerImpl, ScanError
from .dispatcher import HashDispatcher
from .aggregator import ResultAggregator

__all__ = [
    "FileRecord",
    "TaskFailure",
    "DuplicateGroup",
    "ScanParams",
    "ScanProgress",
    "ScanStats",
    "ScanResult",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "HashlibAlgorithmImpl",
    "AdmissionGate",
    "Channel",
    "ChannelClosed",
    "select",
    "FileScannerImpl",
    "ScanError",
    "HashDispatcher",
    "ResultAggregator",
]
