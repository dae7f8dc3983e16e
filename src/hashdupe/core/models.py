"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for the hashing pipeline: file records, failures, duplicate groups,
scan parameters and statistics.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional
import os


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileRecord:
    """
    A hashed file. Produced once by the hasher and never mutated afterwards.
    """
    path: str
    digest: str  # lowercase hex
    size: int  # in bytes

    def __repr__(self):
        return f"<FileRecord path={self.path}, size={self.size}>"


@dataclass(frozen=True)
class TaskFailure:
    """A file that could not be opened or read while hashing."""
    path: str
    error: BaseException

    @property
    def reason(self) -> str:
        return str(self.error) or type(self.error).__name__

    def __repr__(self):
        return f"<TaskFailure path={self.path}, reason={self.reason}>"


@dataclass
class DuplicateGroup:
    """
    Files sharing one digest, in the order they reached the aggregator.
    The first member is the original; the rest are redundant copies.
    """
    digest: str
    files: List[FileRecord] = field(default_factory=list)

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    @property
    def size(self) -> int:
        return self.files[0].size if self.files else 0

    @property
    def original(self) -> Optional[FileRecord]:
        return self.files[0] if self.files else None

    @property
    def redundant(self) -> List[FileRecord]:
        return self.files[1:]

    @property
    def total_size(self) -> int:
        """Bytes occupied by every member of the group."""
        return sum(f.size for f in self.files)

    @property
    def wasted_size(self) -> int:
        """Bytes that would be reclaimed by keeping only the original."""
        return sum(f.size for f in self.redundant)

    def add_file(self, file: FileRecord) -> None:
        if file.digest != self.digest:
            raise ValueError("Cannot add file with different digest to a group.")
        self.files.append(file)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup digest={self.digest}, count={len(self.files)}>"


@dataclass(frozen=True)
class ScanProgress:
    """Snapshot handed to progress callbacks while results are aggregated."""
    scanned: int
    total: int
    bytes_hashed: int
    active_workers: int
    capacity: int


@dataclass
class ScanStats:
    """
    Statistics collected during a scan.
    """
    files_discovered: int = 0
    files_hashed: int = 0
    files_failed: int = 0
    bytes_hashed: int = 0
    peak_workers: int = 0
    capacity: int = 0
    algorithm: str = ""
    total_time: float = 0.0

    def summary(self) -> str:
        from hashdupe.utils.convert_utils import ConvertUtils

        lines = [
            "📊 Scan Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Algorithm: {self.algorithm}",
            f"Files discovered: {self.files_discovered}",
            f"Files hashed: {self.files_hashed} ({ConvertUtils.bytes_to_human(self.bytes_hashed)})",
            f"Files failed: {self.files_failed}",
            f"Peak workers: {self.peak_workers}/{self.capacity}",
        ]
        return "\n".join(lines)


@dataclass
class ScanResult:
    """Finished grouping handed over to the action handlers."""
    groups: Dict[str, DuplicateGroup] = field(default_factory=dict)
    failures: List[TaskFailure] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)

    @property
    def duplicate_groups(self) -> List[DuplicateGroup]:
        """Groups with at least two members, in first-seen order."""
        return [g for g in self.groups.values() if g.is_duplicate()]


# ======================
#  Scan Parameters
# ======================

DEFAULT_CHUNK_SIZE = 1024 * 1024
DEFAULT_ALGORITHM = "xxh128"


def default_workers() -> int:
    return os.cpu_count() or 1


@dataclass
class ScanParams:
    """Parameters for a scan with validation."""
    root_dir: str
    workers: int = field(default_factory=default_workers)
    algorithm: str = DEFAULT_ALGORITHM
    chunk_size: int = DEFAULT_CHUNK_SIZE
    excluded_dirs: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        from hashdupe.aliases import ALGORITHM_ALIASES

        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.workers < 1:
            raise ValueError("Worker count must be at least 1")

        if self.chunk_size < 1:
            raise ValueError("Chunk size must be at least 1 byte")

        self.algorithm = self.algorithm.strip().lower()
        if self.algorithm not in ALGORITHM_ALIASES:
            raise ValueError(
                f"Unknown hash algorithm: '{self.algorithm}'. "
                f"Valid options: {', '.join(ALGORITHM_ALIASES)}"
            )

        self.excluded_dirs = [os.path.normpath(os.path.abspath(d)) for d in self.excluded_dirs if d]
