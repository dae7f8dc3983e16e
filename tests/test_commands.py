"""
End-to-end tests for ScanCommand: walk -> dispatch -> hash -> aggregate.
"""
import pytest
from unittest import mock
from hashdupe.commands import ScanCommand
from hashdupe.core.models import ScanParams
from hashdupe.core.scanner import ScanError
from hashdupe.core.dispatcher import HashDispatcher


class TestScanCommand:

    def test_finds_duplicate_groups(self, test_files, temp_dir):
        result = ScanCommand().execute(ScanParams(root_dir=str(temp_dir), workers=2))

        groups = result.duplicate_groups
        assert len(groups) == 2
        sizes = sorted(g.duplicate_count for g in groups)
        assert sizes == [2, 3]

        triple = next(g for g in groups if g.duplicate_count == 3)
        assert {f.path for f in triple.files} == {
            str(test_files["dup1_a"]), str(test_files["dup1_b"]), str(test_files["sub_dup"])
        }
        assert result.stats.files_discovered == 7
        assert result.stats.files_hashed == 7

    def test_three_identical_two_distinct(self, temp_dir):
        """A, B, D identical; C, E distinct -> exactly one group of size 3."""
        for name in ("A", "B", "D"):
            (temp_dir / name).write_bytes(b"same content")
        (temp_dir / "C").write_bytes(b"content C")
        (temp_dir / "E").write_bytes(b"content E")

        result = ScanCommand().execute(ScanParams(root_dir=str(temp_dir), workers=3))

        assert len(result.duplicate_groups) == 1
        group = result.duplicate_groups[0]
        assert group.duplicate_count == 3
        assert {f.path for f in group.files} == {str(temp_dir / n) for n in ("A", "B", "D")}
        # C and E have their own single-member groups, which are not duplicates
        singles = [g for g in result.groups.values() if not g.is_duplicate()]
        assert {g.files[0].path for g in singles} == {str(temp_dir / "C"), str(temp_dir / "E")}

    @pytest.mark.parametrize("algorithm", ["xxh128", "xxh64", "md5", "sha256"])
    def test_every_algorithm_groups_the_same(self, test_files, temp_dir, algorithm):
        result = ScanCommand().execute(ScanParams(root_dir=str(temp_dir), algorithm=algorithm))
        assert sorted(g.duplicate_count for g in result.duplicate_groups) == [2, 3]
        assert result.stats.algorithm == algorithm

    def test_single_worker(self, test_files, temp_dir):
        result = ScanCommand().execute(ScanParams(root_dir=str(temp_dir), workers=1))
        assert len(result.duplicate_groups) == 2
        assert result.stats.peak_workers == 1

    def test_excluded_dir_not_scanned(self, test_files, temp_dir):
        params = ScanParams(root_dir=str(temp_dir), excluded_dirs=[str(temp_dir / "subdir")])
        result = ScanCommand().execute(params)

        counts = sorted(g.duplicate_count for g in result.duplicate_groups)
        assert counts == [2, 2]

    def test_unreadable_file_reported_and_scan_continues(self, test_files, temp_dir):
        """A per-file failure is excluded from groups but does not abort the scan."""
        from hashdupe.core.hasher import HasherImpl
        real_hash = HasherImpl.hash_file
        bad_path = str(test_files["dup1_b"])

        def flaky(self, path):
            if path == bad_path:
                return real_hash(self, path + ".missing")
            return real_hash(self, path)

        with mock.patch.object(HasherImpl, "hash_file", flaky):
            result = ScanCommand().execute(ScanParams(root_dir=str(temp_dir)))

        assert len(result.failures) == 1
        assert result.stats.files_failed == 1
        triple = max(result.duplicate_groups, key=lambda g: g.duplicate_count)
        assert triple.duplicate_count == 2

    def test_progress_callback_reaches_total(self, test_files, temp_dir):
        events = []
        ScanCommand().execute(ScanParams(root_dir=str(temp_dir), workers=2), progress_callback=events.append)

        assert len(events) == 7
        assert events[-1].scanned == events[-1].total == 7
        assert events[-1].capacity == 2

    def test_missing_root_is_fatal_and_aborts_dispatcher(self, tmp_path):
        with mock.patch.object(HashDispatcher, "abort", autospec=True) as abort:
            with pytest.raises(ScanError):
                ScanCommand().execute(ScanParams(root_dir=str(tmp_path / "missing")))
        abort.assert_called_once()

    def test_interrupt_stops_pending_hashing(self, temp_dir):
        """Ctrl+C during aggregation cancels the files still waiting for a slot."""
        import threading
        import time
        from hashdupe.core.hasher import HasherImpl

        for i in range(40):
            (temp_dir / f"file{i}").write_bytes(b"x" * i)

        lock = threading.Lock()
        hashed = []
        real_hash = HasherImpl.hash_file

        def slow_hash(self, path):
            time.sleep(0.02)
            with lock:
                hashed.append(path)
            return real_hash(self, path)

        def interrupt(progress):
            raise KeyboardInterrupt

        with mock.patch.object(HasherImpl, "hash_file", slow_hash):
            with pytest.raises(KeyboardInterrupt):
                ScanCommand().execute(ScanParams(root_dir=str(temp_dir), workers=1), progress_callback=interrupt)
            count_at_interrupt = len(hashed)
            time.sleep(0.3)

        assert len(hashed) == count_at_interrupt
        assert count_at_interrupt < 40

    def test_empty_directory(self, temp_dir):
        result = ScanCommand().execute(ScanParams(root_dir=str(temp_dir)))
        assert result.groups == {}
        assert result.duplicate_groups == []


class TestScanParams:

    def test_rejects_empty_root(self):
        with pytest.raises(ValueError, match="Root directory"):
            ScanParams(root_dir="")

    def test_rejects_zero_workers(self):
        with pytest.raises(ValueError, match="Worker count"):
            ScanParams(root_dir="/tmp", workers=0)

    def test_rejects_unknown_algorithm(self):
        with pytest.raises(ValueError, match="Unknown hash algorithm"):
            ScanParams(root_dir="/tmp", algorithm="crc0")

    def test_normalizes_algorithm_name(self):
        assert ScanParams(root_dir="/tmp", algorithm=" MD5 ").algorithm == "md5"

    def test_default_workers_positive(self):
        assert ScanParams(root_dir="/tmp").workers >= 1
