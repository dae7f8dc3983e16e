#!/usr/bin/env python3
"""
hashdupe CLI — Command line interface for finding and handling duplicate files.
Scans a folder with a bounded pool of hashing workers, then lists, moves or
deletes every copy except the first-found original of each duplicate group.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from typing import List, Optional, NoReturn
import logging

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

logging.basicConfig(
    level=logging.WARNING,
    format=LOG_FORMAT
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from hashdupe.core.models import ScanParams, ScanProgress, ScanResult, DuplicateGroup, default_workers
from hashdupe.core.scanner import ScanError
from hashdupe.commands import ScanCommand
from hashdupe.utils.convert_utils import ConvertUtils
from hashdupe.services.duplicate_service import DuplicateService, ActionReport
from hashdupe.aliases import (
    ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    ACTION_ALIASES, ACTION_CHOICES, ACTION_PROMPT,
    EPILOG_TEXT
)

logger = logging.getLogger(__name__)


class CLIApplication:
    """Main CLI application controller."""

    PROGRESS_INTERVAL = 0.1  # seconds between progress line redraws

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self._last_progress: float = 0.0

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse and validate command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="hashdupe",
            description="hashdupe — find files with identical content and list, move or delete the copies",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--input", "-i",
            type=str,
            help="Directory to scan for duplicates (prompted for when omitted)"
        )

        # Scan options
        parser.add_argument(
            "--workers", "-w",
            type=int,
            default=default_workers(),
            metavar='',
            help="Maximum number of files hashed at the same time. Default: CPU count"
        )
        parser.add_argument(
            "--algorithm", "-a",
            choices=ALGORITHM_CHOICES,
            default="xxh128",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--exclude-dirs", '-e',
            nargs="+",
            default=[],
            type=str,
            metavar='',
            dest="excluded_dirs",
            help="Excluded/ignored directories (space separated)"
        )

        # Actions
        parser.add_argument(
            "--action",
            choices=ACTION_CHOICES,
            type=str,
            help="Run one action without the interactive menu"
        )
        parser.add_argument(
            "--dest",
            type=str,
            help="Destination directory for --action move"
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="Delete by moving files to the system trash instead of removing them"
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip confirmation prompts when used with --action (for automation/scripts)"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics and debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.force and not args.action:
            self.error_exit("--force can only be used with --action")

        if args.dest and args.action != "move":
            self.error_exit("--dest can only be used with --action move")

        if args.workers < 1:
            self.error_exit("Worker count must be at least 1")

        for excl_dir in args.excluded_dirs:
            if not os.path.isdir(excl_dir):
                self.warning(f"Excluded directory not found: {excl_dir}")

    def configure_logging(self) -> None:
        level = logging.WARNING
        if self.verbose:
            level = logging.DEBUG
        elif self.quiet:
            level = logging.ERROR
        logging.getLogger().setLevel(level)

    def create_params(self, args: argparse.Namespace, root_dir: str) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams(
                root_dir=ConvertUtils.format_path(root_dir.strip()),
                workers=args.workers,
                algorithm=args.algorithm,
                excluded_dirs=[ConvertUtils.format_path(d) for d in args.excluded_dirs],
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, progress: ScanProgress) -> None:
        """Live progress line on stderr."""
        if self.quiet:
            return

        now = time.monotonic()
        if progress.scanned < progress.total and now - self._last_progress < self.PROGRESS_INTERVAL:
            return
        self._last_progress = now

        sys.stderr.write(
            f"\rFiles scanned: {progress.scanned}/{progress.total}"
            f" | Total size: {ConvertUtils.bytes_to_human(progress.bytes_hashed)}"
            f" | Workers: {progress.active_workers}/{progress.capacity}"
        )
        sys.stderr.flush()

    @staticmethod
    def calculate_space_savings(groups: List[DuplicateGroup]) -> int:
        """Total space that would be freed by keeping only the original of each group."""
        return sum(group.wasted_size for group in groups)

    def run_scan(self, params: ScanParams) -> ScanResult:
        """Execute the scan; a walk failure is fatal."""
        if not self.quiet:
            print("Scanning files...")

        try:
            result = ScanCommand().execute(params, progress_callback=self.progress_callback)
        except ScanError as e:
            self.error_exit(str(e))

        if not self.quiet:
            sys.stderr.write("\n")
            print("Scanning completed.")
            if result.failures:
                print(f"⚠️  {len(result.failures)} file(s) could not be read and were skipped.")

        if self.verbose:
            print(result.stats.summary())

        return result

    # === Actions ===

    def list_duplicates(self, groups: List[DuplicateGroup]) -> List[DuplicateGroup]:
        print(DuplicateService.format_groups(groups))
        print()
        return groups

    def move_duplicates(
            self,
            groups: List[DuplicateGroup],
            destination: Optional[str] = None,
            force: bool = False
    ) -> List[DuplicateGroup]:
        """Confirm, ask for a destination, move every non-original file there."""
        if not force and not self.confirm("Are you sure you want to move duplicated files?"):
            print("Move operation canceled.")
            return groups

        if not destination:
            destination = self.prompt("Enter the destination path to move duplicated files: ")
        if not destination or not destination.strip():
            print("Move operation canceled.")
            return groups

        destination = ConvertUtils.format_path(destination.strip())
        if not os.path.isdir(destination):
            self.warning(f"Destination is not a directory: {destination}")
            return groups

        report = DuplicateService.move_duplicates(groups, destination)
        self.print_report(report, "moved")
        return DuplicateService.remove_files_from_groups(groups, report.succeeded)

    def delete_duplicates(
            self,
            groups: List[DuplicateGroup],
            force: bool = False,
            use_trash: bool = False
    ) -> List[DuplicateGroup]:
        """Confirm, then remove every non-original file."""
        if not force and not self.confirm("Are you sure you want to delete duplicated files?"):
            print("Deletion canceled.")
            return groups

        report = DuplicateService.delete_duplicates(groups, use_trash=use_trash)
        self.print_report(report, "moved to trash" if use_trash else "deleted")
        return DuplicateService.remove_files_from_groups(groups, report.succeeded)

    def perform_action(
            self,
            action: str,
            groups: List[DuplicateGroup],
            args: argparse.Namespace
    ) -> List[DuplicateGroup]:
        if action == "list":
            return self.list_duplicates(groups)
        if action == "move":
            return self.move_duplicates(groups, destination=args.dest, force=args.force)
        if action == "delete":
            return self.delete_duplicates(groups, force=args.force, use_trash=args.trash)
        print("Duplicates will be ignored.")
        return groups

    def interactive_loop(self, groups: List[DuplicateGroup], args: argparse.Namespace) -> None:
        """Ask for l/m/d/i until the user ignores or nothing is left to handle."""
        while groups:
            choice = self.prompt(ACTION_PROMPT)
            if choice is None:
                choice = "i"
            choice = choice.strip().lower()
            action = ACTION_ALIASES.get(choice, choice if choice in ACTION_CHOICES else None)

            if action is None:
                print("Invalid choice.")
                continue
            if action == "ignore":
                print("Duplicates will be ignored.")
                return
            groups = self.perform_action(action, groups, args)

        print("No duplicates left.")

    def print_report(self, report: ActionReport, verb: str) -> None:
        for path in report.succeeded:
            target = report.moved_to.get(path)
            print(f"  {verb.capitalize()}: {path}" + (f" -> {target}" if target else ""))
        if report.failed:
            print(f"\n⚠️  Partial success: {len(report.succeeded)}/{report.attempted} files {verb}.")
            print(f"Failed for {len(report.failed)} file(s):")
            for path, error in report.failed[:5]:  # Show first 5 errors
                print(f"  • {path}: {error.split(':')[-1].strip()}")
            if len(report.failed) > 5:
                print(f"  ...and {len(report.failed) - 5} more files")
        else:
            print(f"✅ Successfully {verb} {len(report.succeeded)} files.")

    # === Console helpers ===

    @staticmethod
    def prompt(message: str) -> Optional[str]:
        """Read one line from the terminal; None on end of input."""
        try:
            return input(message)
        except EOFError:
            return None

    def confirm(self, question: str) -> bool:
        response = self.prompt(f"{question} (yes/no): ")
        return response is not None and response.strip().lower() in ("y", "yes")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.configure_logging()
        self.validate_args(args)

        root_dir = args.input
        if not root_dir:
            root_dir = self.prompt("Enter the folder path to search for duplicates: ")
        if not root_dir or not root_dir.strip():
            self.error_exit("No folder path given")

        params = self.create_params(args, root_dir)
        result = self.run_scan(params)
        groups = result.duplicate_groups

        if not groups:
            if not self.quiet:
                print("No duplicate groups found.")
            return

        if not self.quiet:
            redundant = len(DuplicateService.files_to_process(groups))
            space_saved_str = ConvertUtils.bytes_to_human(self.calculate_space_savings(groups))
            print(f"Found {len(groups)} duplicate groups ({redundant} redundant files, {space_saved_str} reclaimable)")

        if args.action:
            self.perform_action(args.action, groups, args)
        else:
            self.interactive_loop(groups, args)

        if self.verbose:
            elapsed = time.time() - self.start_time
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main(argv=None) -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run(argv)
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
