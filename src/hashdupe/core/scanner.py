"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Walks a directory tree and hands every regular file to a dispatch callback.
Features:
- Uses os.walk for fast traversal (symlinks are not followed)
- Prunes excluded directories before descending into them
- Treats any enumeration failure as fatal (ScanError)
"""

import os
import stat
import time
import logging
from pathlib import Path
from typing import List, Optional, Callable

from hashdupe.core.interfaces import FileScanner

logger = logging.getLogger(__name__)


class ScanError(RuntimeError):
    """The directory tree could not be enumerated. The scan is aborted."""


class FileScannerImpl(FileScanner):
    """
    Scans directories recursively and dispatches one task per regular file.

    Attributes:
        root_dir: Root directory to scan
        excluded_dirs: Directories (and everything below them) to skip
    """

    def __init__(self, root_dir: str, excluded_dirs: Optional[List[str]] = None):
        self.root_dir = root_dir
        self.excluded_dirs = [str(Path(d).resolve()) for d in excluded_dirs] if excluded_dirs else []

    def scan(self, dispatch: Callable[[str], None]) -> int:
        """
        Single-pass walk. Calls `dispatch(path)` for each regular file and returns
        the number of files dispatched.

        Raises:
            ScanError: root missing, not a directory, or a directory could not be listed.
        """
        logger.debug(f"Root directory: {self.root_dir}")
        root_path = Path(self.root_dir)

        # Validate root directory exists and is accessible
        if not root_path.exists():
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise ScanError(error_msg)
        if not root_path.is_dir():
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise ScanError(error_msg)

        def on_walk_error(err: OSError) -> None:
            raise ScanError(f"Cannot read directory {err.filename}: {err.strerror or err}") from err

        discovered = 0
        start_time = time.time()

        for root, dirs, files in os.walk(str(root_path), onerror=on_walk_error):
            # Pre-filter subdirectories BEFORE os.walk enters them
            if self.excluded_dirs:
                dirs[:] = [d for d in dirs if not self._is_excluded_directory(os.path.join(root, d))]

            for filename in files:
                path = os.path.join(root, filename)
                if not self._is_regular_file(path):
                    continue
                dispatch(path)
                discovered += 1

        elapsed_time = time.time() - start_time
        logger.debug(f"Walk completed in {elapsed_time:.2f}s. Dispatched {discovered} files.")
        return discovered

    @staticmethod
    def _is_regular_file(path: str) -> bool:
        """
        True for regular files. Symlinks, sockets, FIFOs and devices are skipped.
        An entry that vanished before lstat is still dispatched so the hasher reports it.
        """
        try:
            mode = os.lstat(path).st_mode
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return True
        if not stat.S_ISREG(mode):
            logger.debug(f"Skipping non-regular entry: {path}")
            return False
        return True

    def _is_excluded_directory(self, path: str) -> bool:
        """Check if path is within an excluded directory."""
        try:
            path_str = str(Path(path).resolve(strict=False))
        except (OSError, ValueError):
            return False
        for excluded_dir in self.excluded_dirs:
            normalized_excluded = os.path.normpath(excluded_dir)
            if path_str.startswith(normalized_excluded + os.sep) or \
                    path_str == normalized_excluded:
                logger.debug(f"Skipping excluded directory: {path}")
                return True
        return False
