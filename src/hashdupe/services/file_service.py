"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Single-file operations used by the duplicate actions: move, copy, delete, trash.
Every failure is raised as RuntimeError chained to the underlying OSError.
"""
import os
import shutil
import logging
from pathlib import Path
from send2trash import send2trash

logger = logging.getLogger(__name__)

SAFE_SUFFIX_PADDING = 5


class FileService:
    """
    Cross-platform file operations with proper error handling.
    """

    @staticmethod
    def is_same_volume(source: str, destination_dir: str) -> bool:
        """True if `source` and `destination_dir` live on the same device."""
        return os.stat(source).st_dev == os.stat(destination_dir).st_dev

    @staticmethod
    def safe_destination(destination_dir: str, name: str) -> str:
        """
        Collision-safe path for `name` inside `destination_dir`,
        adding -00001, -00002, etc. if needed.
        """
        candidate = Path(destination_dir) / name
        stem, suffix = os.path.splitext(name)
        count = 1
        while candidate.exists():
            numbered = f"{stem}-{str(count).zfill(SAFE_SUFFIX_PADDING)}{suffix}"
            candidate = Path(destination_dir) / numbered
            count += 1
        return str(candidate)

    @staticmethod
    def copy_file(source: str, destination: str) -> None:
        """Copies content and metadata. A partial copy is removed on failure."""
        try:
            shutil.copy2(source, destination)
        except OSError as e:
            if os.path.exists(destination):
                try:
                    os.remove(destination)
                except OSError as cleanup_error:
                    logger.warning(f"Could not remove partial copy {destination}: {cleanup_error}")
            raise RuntimeError(f"Failed to copy {source} to {destination}: {e}") from e

    @classmethod
    def move_file(cls, source: str, destination_dir: str) -> str:
        """
        Moves `source` into `destination_dir` and returns the new path.
        Same volume: atomic rename. Cross volume: copy, then delete the source;
        the source is only deleted after a successful copy.
        """
        if not os.path.exists(source):
            raise FileNotFoundError(f"File not found: {source}")
        if not os.path.isdir(destination_dir):
            raise NotADirectoryError(f"Destination is not a directory: {destination_dir}")

        destination = cls.safe_destination(destination_dir, os.path.basename(source))

        try:
            same_volume = cls.is_same_volume(source, destination_dir)
        except OSError as e:
            raise RuntimeError(f"Failed to stat {source}: {e}") from e

        if same_volume:
            try:
                os.rename(source, destination)
            except OSError as e:
                raise RuntimeError(f"Failed to move {source} to {destination}: {e}") from e
            logger.debug(f"Renamed {source} -> {destination}")
            return destination

        cls.copy_file(source, destination)
        try:
            os.remove(source)
        except OSError as e:
            raise RuntimeError(f"Copied to {destination} but failed to delete {source}: {e}") from e
        logger.debug(f"Copied {source} -> {destination} and removed source")
        return destination

    @staticmethod
    def delete_file(file_path: str) -> None:
        """Permanently removes a file."""
        try:
            os.remove(file_path)
        except OSError as e:
            raise RuntimeError(f"Failed to delete {file_path}: {e}") from e

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e
