"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/duplicate_service.py
List, move and delete actions over a finished duplicate grouping.
The first member of every group is the original and is never touched.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Iterable

from hashdupe.core.models import DuplicateGroup, FileRecord
from hashdupe.services.file_service import FileService
from hashdupe.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


@dataclass
class ActionReport:
    """Outcome of a move or delete run."""
    succeeded: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)
    moved_to: Dict[str, str] = field(default_factory=dict)  # source -> new path

    @property
    def attempted(self) -> int:
        return len(self.succeeded) + len(self.failed)


class DuplicateService:
    @staticmethod
    def files_to_process(groups: Iterable[DuplicateGroup]) -> List[FileRecord]:
        """
        Every member after the first of each duplicate group.
        Groups with a single file contribute nothing.
        """
        redundant = []
        for group in groups:
            if group.is_duplicate():
                redundant.extend(group.redundant)
        return redundant

    @staticmethod
    def remove_files_from_groups(groups: List[DuplicateGroup], file_paths: List[str]) -> List[DuplicateGroup]:
        """
        Removes files with the specified paths from all duplicate groups.

        Groups that contain fewer than 2 files after removal are discarded.
        Order inside each group is preserved, so the original stays first.
        """
        removed = set(file_paths)
        updated_groups = []
        for group in groups:
            filtered_files = [f for f in group.files if f.path not in removed]
            if len(filtered_files) >= 2:
                updated_groups.append(DuplicateGroup(digest=group.digest, files=filtered_files))
        return updated_groups

    @staticmethod
    def format_groups(groups: List[DuplicateGroup]) -> str:
        """Plain-text listing: digest header, then member paths, original first."""
        blocks = []
        for group in groups:
            if not group.is_duplicate():
                continue
            lines = [
                f"Duplicate files with hash {group.digest} "
                f"({group.duplicate_count} files, {ConvertUtils.bytes_to_human(group.size)} each):"
            ]
            for file in group.files:
                lines.append(file.path)
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)

    @staticmethod
    def move_duplicates(groups: List[DuplicateGroup], destination_dir: str) -> ActionReport:
        """
        Moves every non-original member into `destination_dir`.
        Failures are logged and collected; remaining files are still processed.
        """
        report = ActionReport()
        for file in DuplicateService.files_to_process(groups):
            try:
                new_path = FileService.move_file(file.path, destination_dir)
            except Exception as e:
                logger.error(f"Error moving file {file.path} to {destination_dir}: {e}")
                report.failed.append((file.path, str(e)))
                continue
            logger.info(f"Moved file {file.path} to {new_path}")
            report.succeeded.append(file.path)
            report.moved_to[file.path] = new_path
        return report

    @staticmethod
    def delete_duplicates(groups: List[DuplicateGroup], use_trash: bool = False) -> ActionReport:
        """
        Removes every non-original member, permanently or to the system trash.
        Failures are logged and collected; remaining files are still processed.
        """
        remove = FileService.move_to_trash if use_trash else FileService.delete_file
        report = ActionReport()
        for file in DuplicateService.files_to_process(groups):
            try:
                remove(file.path)
            except Exception as e:
                logger.error(f"Error deleting file {file.path}: {e}")
                report.failed.append((file.path, str(e)))
                continue
            logger.info(f"Deleted file: {file.path}")
            report.succeeded.append(file.path)
        return report
