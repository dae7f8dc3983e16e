"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements full-content file hashing with pluggable hash algorithms.

HasherImpl streams a file through the configured algorithm in fixed-size chunks and
reports exactly one outcome per call: a FileRecord on success, a TaskFailure otherwise.
"""

import hashlib
import logging
from typing import Union

import xxhash

from hashdupe.core.interfaces import HashAlgorithm, HashObject
from hashdupe.core.models import FileRecord, TaskFailure, DEFAULT_CHUNK_SIZE

logger = logging.getLogger(__name__)


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    """xxHash family; xxh3_128 by default."""

    _VARIANTS = {
        "xxh128": xxhash.xxh3_128,
        "xxh64": xxhash.xxh64,
    }

    def __init__(self, variant: str = "xxh128"):
        if variant not in self._VARIANTS:
            raise ValueError(f"Unsupported xxHash variant: {variant}")
        self.name = variant
        self._factory = self._VARIANTS[variant]

    def new(self) -> HashObject:
        return self._factory()


class HashlibAlgorithmImpl(HashAlgorithm):
    """Any algorithm known to hashlib (md5, sha1, sha256, ...)."""

    def __init__(self, name: str = "md5"):
        hashlib.new(name)  # fail fast on unknown names
        self.name = name

    def new(self) -> HashObject:
        return hashlib.new(self.name)


class HasherImpl:
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Never raises: open/read errors become a TaskFailure.
    """

    def __init__(self, algorithm: HashAlgorithm, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError("Chunk size must be at least 1 byte")
        self.algorithm = algorithm
        self.chunk_size = chunk_size

    def hash_file(self, path: str) -> Union[FileRecord, TaskFailure]:
        """Computes the digest and byte length of the whole file at `path`."""
        hash_obj = self.algorithm.new()
        size = 0
        try:
            with open(path, 'rb') as f:
                while True:
                    chunk = f.read(self.chunk_size)
                    if not chunk:
                        break
                    hash_obj.update(chunk)
                    size += len(chunk)
        except Exception as e:
            logger.debug(f"Failed to hash {path}: {e}")
            return TaskFailure(path=path, error=e)

        return FileRecord(path=path, digest=hash_obj.hexdigest(), size=size)
