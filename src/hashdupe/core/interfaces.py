"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the hashing pipeline.
These protocols enforce structural typing using Python's `typing.Protocol` so the
scanner, dispatcher and aggregator can be tested with lightweight fakes.

Key Components:
---------------
- HashObject: Incremental hash state (update / hexdigest).
- HashAlgorithm: Factory for hash objects (e.g., xxHash, MD5, SHA-256).
- Hasher: Turns one file path into a FileRecord or a TaskFailure.
- FileScanner: Walks a directory tree and dispatches every regular file.
"""

from typing import Protocol, Callable, Union
from hashdupe.core.models import FileRecord, TaskFailure


# ===== Interfaces =====

class HashObject(Protocol):
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256, MD5, or xxHash
    without affecting the rest of the pipeline.
    """
    name: str

    def new(self) -> HashObject:
        """Returns a fresh incremental hash object."""
        ...


class Hasher(Protocol):
    """Interface for hashing the full content of one file."""
    def hash_file(self, path: str) -> Union[FileRecord, TaskFailure]: ...


class FileScanner(Protocol):
    """
    Interface for walking file systems.

    Methods:
        scan: Calls dispatch once per regular file and returns how many were dispatched.
    """
    def scan(self, dispatch: Callable[[str], None]) -> int:
        ...
