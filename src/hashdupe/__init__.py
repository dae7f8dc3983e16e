"""
hashdupe — duplicate file finder built around a bounded concurrent hashing pipeline.

Core features:
- One hashing task per file, at most N hashed at once (admission gate)
- Results and failures streamed back to a single aggregator, grouped by digest
- List, move or delete every copy except the first-found original
- CLI interface for interactive and scripted usage
"""

from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("hashdupe")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API — only what users should import directly
from hashdupe.commands import ScanCommand
from hashdupe.core import (
    ScanParams, ScanResult, ScanStats, ScanProgress, FileRecord, TaskFailure, DuplicateGroup, ScanError)
from hashdupe.utils.convert_utils import ConvertUtils
from hashdupe.services import DuplicateService, FileService, ActionReport

__all__ = [
    "ScanCommand",
    "ScanParams",
    "ScanResult",
    "ScanStats",
    "ScanProgress",
    "FileRecord",
    "TaskFailure",
    "DuplicateGroup",
    "ScanError",
    "ConvertUtils",
    "DuplicateService",
    "FileService",
    "ActionReport",
    "__version__",
]
