"""Unit tests for scan command.

Tests for the CLI scan command implementation.
"""

import json
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from junkctl.cli.main import app
from junkctl.core.config import JunkctlConfig
from junkctl.discovery import DiscoveryError
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings() -> Iterator[None]:
    """Use default settings and no user folders."""
    with (
        patch("junkctl.cli.types.load_config", return_value=JunkctlConfig()),
        patch("junkctl.cli.types.discover_user_dirs", return_value=set()),
    ):
        yield


class TestScanCommand:
    """Tests for junkctl scan command."""

    def test_scan_help(self) -> None:
        """Scan command shows help."""
        result = runner.invoke(app, ["scan", "--help"])
        assert result.exit_code == 0
        assert "Scan for junk files and directories" in result.stdout

    def test_lists_matches(self, make_tree: Callable[[list[str]], Path]) -> None:
        """Matches are listed under their headers."""
        base = make_tree(["Thumbs.db", "$RECYCLE.BIN/x.docx", "keep.txt"])

        result = runner.invoke(app, ["scan", str(base)])

        assert result.exit_code == 0
        assert "Matched files:" in result.stdout
        assert "Matched directories:" in result.stdout
        assert f"- {base.as_posix()}/Thumbs.db" in result.stdout
        assert f"- {base.as_posix()}/$RECYCLE.BIN/" in result.stdout
        assert "keep.txt" not in result.stdout
        assert "Found 1 file(s) and 1 directory(ies)" in result.stdout

    def test_scan_never_deletes(self, make_tree: Callable[[list[str]], Path]) -> None:
        """Scanning leaves matches in place."""
        base = make_tree(["Thumbs.db"])

        runner.invoke(app, ["scan", str(base)])

        assert (base / "Thumbs.db").exists()

    def test_no_junk(self, make_tree: Callable[[list[str]], Path]) -> None:
        """A clean tree reports nothing found."""
        base = make_tree(["photo.jpg"])

        result = runner.invoke(app, ["scan", str(base)])

        assert result.exit_code == 0
        assert "No junk found." in result.stdout

    def test_user_folder_desktop_ini(self, make_tree: Callable[[list[str]], Path]) -> None:
        """Desktop.ini directly in a user folder is not listed."""
        base = make_tree(["Users/alice/Desktop.ini", "Users/alice/sub/Desktop.ini"])
        user_dir = f"{base.as_posix()}/Users/alice/"

        with patch("junkctl.cli.types.discover_user_dirs", return_value={user_dir}):
            result = runner.invoke(app, ["scan", str(base)])

        assert f"- {user_dir}sub/Desktop.ini" in result.stdout
        assert f"- {user_dir}Desktop.ini" not in result.stdout

    def test_json_output(self, make_tree: Callable[[list[str]], Path]) -> None:
        """JSON output carries roots, matches, and errors."""
        base = make_tree(["a.tmp", "__MACOSX/"])

        result = runner.invoke(app, ["scan", str(base), "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["roots"] == [f"{base.as_posix()}/"]
        assert data["matched_files"] == [f"{base.as_posix()}/a.tmp"]
        assert data["matched_directories"] == [f"{base.as_posix()}/__MACOSX/"]
        assert data["errors"] == []

    def test_all_volumes(self, tmp_path: Path) -> None:
        """Without a path every discovered root is scanned."""
        for name in ("vol1", "vol2"):
            (tmp_path / name).mkdir()
            (tmp_path / name / "x.tmp").write_text("x")
        roots = [f"{(tmp_path / n).as_posix()}/" for n in ("vol1", "vol2")]

        with patch("junkctl.cli.types.discover_roots", return_value=roots):
            result = runner.invoke(app, ["scan", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["roots"] == roots
        assert data["matched_files"] == [f"{roots[0]}x.tmp", f"{roots[1]}x.tmp"]

    def test_unreadable_root_skipped(self, tmp_path: Path) -> None:
        """A root that cannot be walked is warned about; the others are listed."""
        (tmp_path / "vol1").mkdir()
        (tmp_path / "vol1" / "x.tmp").write_text("x")
        roots = [f"{(tmp_path / 'vol1').as_posix()}/", f"{(tmp_path / 'gone').as_posix()}/"]

        with patch("junkctl.cli.types.discover_roots", return_value=roots):
            result = runner.invoke(app, ["scan"])

        assert result.exit_code == 0
        assert "Skipped" in result.output
        assert f"- {roots[0]}x.tmp" in result.output
        assert "across 1 root(s)" in result.output

    def test_discovery_error_exits(self) -> None:
        """A volume enumeration failure exits with code 1."""
        with patch(
            "junkctl.cli.types.discover_roots",
            side_effect=DiscoveryError("Cannot enumerate mounted volumes: boom"),
        ):
            result = runner.invoke(app, ["scan"])

        assert result.exit_code == 1
        assert "Cannot enumerate mounted volumes" in result.output

    def test_duplicates_listed_once(self, make_tree: Callable[[list[str]], Path]) -> None:
        """A file matched by two patterns is listed once by default."""
        base = make_tree(["._draft.tmp"])

        result = runner.invoke(app, ["scan", str(base)])

        assert result.stdout.count("._draft.tmp") == 1

    def test_duplicates_kept_when_disabled(self, make_tree: Callable[[list[str]], Path]) -> None:
        """Deduplication can be switched off in the settings."""
        base = make_tree(["._draft.tmp"])

        with patch(
            "junkctl.cli.types.load_config", return_value=JunkctlConfig(deduplicate=False)
        ):
            result = runner.invoke(app, ["scan", str(base)])

        assert result.stdout.count("._draft.tmp") == 2
