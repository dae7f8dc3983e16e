"""
Tests for duplicate service logic — validates original-preserving behavior.
The first file of every group is the original and must never be moved or deleted.
"""
import pytest
from unittest import mock
from hashdupe.core.models import FileRecord, DuplicateGroup
from hashdupe.services.duplicate_service import DuplicateService
from hashdupe.services.file_service import FileService


def write_group(directory, digest, names, content=b"same"):
    records = []
    for name in names:
        path = directory / name
        path.write_bytes(content)
        records.append(FileRecord(path=str(path), digest=digest, size=len(content)))
    return DuplicateGroup(digest=digest, files=records)


class TestFilesToProcess:

    def test_skips_first_file_of_each_group(self, group_factory):
        groups = [
            group_factory("h1", "/g1/keep", "/g1/del"),
            group_factory("h2", "/g2/keep", "/g2/del1", "/g2/del2"),
        ]

        paths = [f.path for f in DuplicateService.files_to_process(groups)]

        assert paths == ["/g1/del", "/g2/del1", "/g2/del2"]

    def test_single_file_groups_contribute_nothing(self, group_factory):
        assert DuplicateService.files_to_process([group_factory("h", "/only")]) == []

    def test_empty_group_is_safe(self):
        assert DuplicateService.files_to_process([DuplicateGroup(digest="h")]) == []


class TestRemoveFilesFromGroups:

    def test_drops_groups_below_two_members(self, group_factory):
        groups = [group_factory("h1", "/a", "/b"), group_factory("h2", "/c", "/d", "/e")]

        updated = DuplicateService.remove_files_from_groups(groups, ["/b", "/d"])

        assert len(updated) == 1
        assert [f.path for f in updated[0].files] == ["/c", "/e"]

    def test_preserves_original_first(self, group_factory):
        groups = [group_factory("h", "/orig", "/x", "/y")]
        updated = DuplicateService.remove_files_from_groups(groups, ["/x"])
        assert updated[0].original.path == "/orig"


class TestFormatGroups:

    def test_lists_digest_and_paths_in_order(self, group_factory):
        text = DuplicateService.format_groups([group_factory("abc123", "/first", "/second", size=1024)])

        lines = text.splitlines()
        assert "abc123" in lines[0]
        assert "1.00 KB" in lines[0]
        assert lines[1:] == ["/first", "/second"]

    def test_single_member_groups_not_listed(self, group_factory):
        assert DuplicateService.format_groups([group_factory("h", "/alone")]) == ""


class TestMoveDuplicates:

    def test_moves_all_but_original(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        dest = tmp_path / "dest"
        dest.mkdir()
        group = write_group(src, "h", ["orig.txt", "copy1.txt", "copy2.txt"])

        report = DuplicateService.move_duplicates([group], str(dest))

        assert (src / "orig.txt").exists(), "Original MUST stay in place"
        assert not (src / "copy1.txt").exists()
        assert not (src / "copy2.txt").exists()
        assert (dest / "copy1.txt").exists()
        assert (dest / "copy2.txt").exists()
        assert len(report.succeeded) == 2
        assert report.failed == []
        assert report.moved_to == {
            str(src / "copy1.txt"): str(dest / "copy1.txt"),
            str(src / "copy2.txt"): str(dest / "copy2.txt"),
        }

    def test_failure_does_not_stop_remaining_files(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        dest = tmp_path / "dest"
        dest.mkdir()
        g1 = write_group(src, "h1", ["o1.txt", "c1.txt"], b"one")
        g2 = write_group(src, "h2", ["o2.txt", "c2.txt"], b"two")
        (src / "c1.txt").unlink()  # vanished after the scan

        report = DuplicateService.move_duplicates([g1, g2], str(dest))

        assert [p for p, _ in report.failed] == [str(src / "c1.txt")]
        assert report.succeeded == [str(src / "c2.txt")]
        assert (dest / "c2.txt").exists()
        assert report.attempted == 2


class TestDeleteDuplicates:

    def test_deletes_all_but_original(self, tmp_path):
        group = write_group(tmp_path, "h", ["orig.txt", "copy1.txt", "copy2.txt"])

        report = DuplicateService.delete_duplicates([group])

        assert (tmp_path / "orig.txt").exists(), "Original MUST be preserved"
        assert not (tmp_path / "copy1.txt").exists()
        assert not (tmp_path / "copy2.txt").exists()
        assert len(report.succeeded) == 2

    def test_failure_does_not_stop_remaining_files(self, tmp_path):
        g1 = write_group(tmp_path, "h1", ["o1.txt", "c1.txt", "c2.txt"], b"one")
        (tmp_path / "c1.txt").unlink()

        report = DuplicateService.delete_duplicates([g1])

        assert len(report.failed) == 1
        assert report.succeeded == [str(tmp_path / "c2.txt")]
        assert not (tmp_path / "c2.txt").exists()

    def test_trash_mode_uses_move_to_trash(self, tmp_path):
        group = write_group(tmp_path, "h", ["orig.txt", "copy.txt"])

        with mock.patch.object(FileService, "move_to_trash") as trash, \
                mock.patch.object(FileService, "delete_file") as delete:
            report = DuplicateService.delete_duplicates([group], use_trash=True)

        trash.assert_called_once_with(str(tmp_path / "copy.txt"))
        delete.assert_not_called()
        assert report.succeeded == [str(tmp_path / "copy.txt")]
