"""Unit tests for JunkOperator.

Tests deletion of files and directories, ordering, per-entry failure
isolation, and progress callbacks.
"""

import os
import shutil
from pathlib import Path
from unittest.mock import patch

from junkctl.junk.models import DeletionResult
from junkctl.junk.operator import JunkOperator


class TestJunkOperator:
    """Tests for JunkOperator."""

    def test_delete_file(self, tmp_path: Path) -> None:
        """Files are unlinked."""
        target = tmp_path / "Thumbs.db"
        target.write_text("content")

        results = JunkOperator().delete([str(target)], [])

        assert results == [DeletionResult(path=str(target), is_dir=False, success=True)]
        assert not target.exists()

    def test_delete_directory_recursively(self, tmp_path: Path) -> None:
        """Directories are removed with their whole subtree."""
        target = tmp_path / "$RECYCLE.BIN"
        (target / "S-1-5-21" / "deep").mkdir(parents=True)
        (target / "S-1-5-21" / "deep" / "file.docx").write_text("content")

        results = JunkOperator().delete([], [f"{target.as_posix()}/"])

        assert len(results) == 1
        assert results[0].success is True
        assert results[0].is_dir is True
        assert not target.exists()

    def test_files_before_directories(self, tmp_path: Path) -> None:
        """All files are attempted before any directory."""
        folder = tmp_path / ".Trashes"
        folder.mkdir()
        stray = folder / "._x"
        stray.write_text("content")
        other = tmp_path / "a.tmp"
        other.write_text("content")

        results = JunkOperator().delete([str(stray), str(other)], [str(folder)])

        assert [r.path for r in results] == [str(stray), str(other), str(folder)]
        assert all(r.success for r in results)

    def test_missing_entry_reported(self, tmp_path: Path) -> None:
        """Deleting an entry that is already gone is a failed result."""
        results = JunkOperator().delete([str(tmp_path / "gone.tmp")], [str(tmp_path / "gone/")])

        assert len(results) == 2
        assert all(r.failed for r in results)
        assert all(r.error for r in results)

    def test_out_of_band_deletions_counted(self, tmp_path: Path) -> None:
        """k entries removed beforehand produce exactly k failures."""
        files = []
        for i in range(4):
            path = tmp_path / f"f{i}.tmp"
            path.write_text("x")
            files.append(str(path))
        dirs = []
        for i in range(3):
            path = tmp_path / f".Trash-{i}"
            path.mkdir()
            dirs.append(str(path))

        Path(files[1]).unlink()
        shutil.rmtree(dirs[2])

        results = JunkOperator().delete(files, dirs)

        assert len(results) == 7
        assert sum(1 for r in results if r.failed) == 2
        assert sum(1 for r in results if r.success) == 5
        failed = {r.path for r in results if r.failed}
        assert failed == {files[1], dirs[2]}

    def test_failure_does_not_stop_remaining(self, tmp_path: Path) -> None:
        """An error on one entry leaves the others unaffected."""
        first = tmp_path / "first.tmp"
        second = tmp_path / "second.tmp"
        first.write_text("x")
        second.write_text("x")
        real_unlink = Path.unlink

        def _unlink(self: Path, missing_ok: bool = False) -> None:
            if self.name == "first.tmp":
                raise PermissionError(13, "Permission denied", str(self))
            real_unlink(self, missing_ok=missing_ok)

        with patch.object(Path, "unlink", _unlink):
            results = JunkOperator().delete([str(first), str(second)], [])

        assert results[0].failed
        assert "Permission denied" in (results[0].error or "")
        assert results[1].success
        assert first.exists()
        assert not second.exists()

    def test_locked_child_does_not_keep_siblings(self, tmp_path: Path) -> None:
        """A child that cannot be removed leaves only itself behind."""
        recycle = tmp_path / "$RECYCLE.BIN"
        recycle.mkdir()
        for i in range(30):
            (recycle / f"file{i:02d}.docx").write_text("x")
        (recycle / "locked.db").write_text("x")
        real_unlink = os.unlink

        def _unlink(path, *args, **kwargs):
            if os.path.basename(path) == "locked.db":
                raise PermissionError(13, "Permission denied", path)
            return real_unlink(path, *args, **kwargs)

        with patch.object(os, "unlink", _unlink):
            results = JunkOperator().delete([], [str(recycle)])

        assert sorted(p.name for p in recycle.iterdir()) == ["locked.db"]
        assert results[0].failed
        assert "Permission denied" in (results[0].error or "")

    def test_callbacks_invoked_per_entry(self, tmp_path: Path) -> None:
        """on_delete fires before and on_result after every attempt."""
        target = tmp_path / "x.tmp"
        target.write_text("x")
        events: list[tuple[str, object]] = []

        operator = JunkOperator(
            on_delete=lambda path, is_dir: events.append(("delete", path)),
            on_result=lambda result: events.append(("result", result.success)),
        )
        operator.delete([str(target), str(tmp_path / "missing")], [])

        assert events == [
            ("delete", str(target)),
            ("result", True),
            ("delete", str(tmp_path / "missing")),
            ("result", False),
        ]

    def test_delete_empty(self) -> None:
        """Nothing to delete yields no results."""
        assert JunkOperator().delete([], []) == []
