"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.50 KB, 3.20 MB).
        Scales by 1024 up to TB; larger values stay in TB.
        """
        if size_bytes < 0:
            return "0.00 B"

        units = ["B", "KB", "MB", "GB", "TB"]
        size = float(size_bytes)
        unit_index = 0
        while size >= 1024 and unit_index < len(units) - 1:
            size /= 1024
            unit_index += 1
        return f"{size:.2f} {units[unit_index]}"

    @staticmethod
    def format_path(path: str) -> str:
        """Convert Windows paths to Unix-style paths."""
        return path.replace("\\", "/")
