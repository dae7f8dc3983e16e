from .duplicate_service import DuplicateService, ActionReport
from .file_service import FileService

__all__ = ["DuplicateService", "ActionReport", "FileService"]
