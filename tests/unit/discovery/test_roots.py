"""Unit tests for root discovery and normalization."""

import os
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from junkctl.discovery.roots import DiscoveryError, discover_roots, normalize_root, to_slash


def _partition(mountpoint: str, opts: str = "rw") -> SimpleNamespace:
    return SimpleNamespace(device=mountpoint, mountpoint=mountpoint, fstype="ext4", opts=opts)


class TestNormalizeRoot:
    """Tests for normalize_root."""

    def test_appends_trailing_slash(self, tmp_path: Path) -> None:
        """A slash is appended when missing."""
        assert normalize_root(str(tmp_path)) == tmp_path.as_posix() + "/"

    def test_keeps_single_trailing_slash(self, tmp_path: Path) -> None:
        """An existing trailing slash is not doubled."""
        assert normalize_root("/").endswith("/")
        assert not normalize_root("/").endswith("//")
        assert normalize_root(str(tmp_path) + "/") == tmp_path.as_posix() + "/"

    def test_relative_path_made_absolute(self, tmp_path: Path) -> None:
        """Relative paths resolve against the working directory."""
        cwd = os.getcwd()
        os.chdir(tmp_path)
        try:
            assert normalize_root("sub") == tmp_path.as_posix() + "/sub/"
        finally:
            os.chdir(cwd)

    def test_dot_segments_cleaned(self, tmp_path: Path) -> None:
        """. and .. segments are removed."""
        messy = f"{tmp_path}/a/../b/./"

        assert normalize_root(messy) == tmp_path.as_posix() + "/b/"

    def test_empty_rejected(self) -> None:
        """Empty paths are rejected."""
        with pytest.raises(ValueError, match="cannot be empty"):
            normalize_root("")


class TestToSlash:
    """Tests for to_slash."""

    def test_alternate_separator_converted(self) -> None:
        """Both the native and the alternate separator become forward slashes."""
        with patch("junkctl.discovery.roots.os.altsep", "\\"):
            assert to_slash("a\\b/c") == "a/b/c"


class TestDiscoverRoots:
    """Tests for discover_roots."""

    def test_one_root_per_volume(self) -> None:
        """Each mounted volume yields one root in partition order."""
        partitions = [_partition("/"), _partition("/mnt/data"), _partition("/media/usb")]

        with (
            patch("junkctl.discovery.roots.psutil.disk_partitions", return_value=partitions),
            patch("junkctl.discovery.roots.system_root", return_value="/"),
        ):
            roots = discover_roots()

        assert roots == ["/mnt/data/", "/media/usb/"]

    def test_include_system_root(self) -> None:
        """The system volume is scanned when requested."""
        partitions = [_partition("/"), _partition("/mnt/data")]

        with (
            patch("junkctl.discovery.roots.psutil.disk_partitions", return_value=partitions),
            patch("junkctl.discovery.roots.system_root", return_value="/"),
        ):
            roots = discover_roots(include_system_root=True)

        assert roots == ["/", "/mnt/data/"]

    def test_read_only_volumes_skipped(self) -> None:
        """Read-only mounts are not scanned."""
        partitions = [
            _partition("/mnt/cdrom", "ro,nosuid"),
            _partition("/mnt/data", "rw,relatime"),
        ]

        with (
            patch("junkctl.discovery.roots.psutil.disk_partitions", return_value=partitions),
            patch("junkctl.discovery.roots.system_root", return_value="/"),
        ):
            roots = discover_roots()

        assert roots == ["/mnt/data/"]

    def test_excluded_roots_skipped(self) -> None:
        """Excluded roots are left out regardless of trailing slash."""
        partitions = [_partition("/mnt/data"), _partition("/mnt/backup")]

        with (
            patch("junkctl.discovery.roots.psutil.disk_partitions", return_value=partitions),
            patch("junkctl.discovery.roots.system_root", return_value="/"),
        ):
            roots = discover_roots(exclude=["/mnt/backup"])

        assert roots == ["/mnt/data/"]

    def test_duplicates_removed(self) -> None:
        """A volume mounted twice at the same point is scanned once."""
        partitions = [_partition("/mnt/data"), _partition("/mnt/data/")]

        with (
            patch("junkctl.discovery.roots.psutil.disk_partitions", return_value=partitions),
            patch("junkctl.discovery.roots.system_root", return_value="/"),
        ):
            roots = discover_roots()

        assert roots == ["/mnt/data/"]

    def test_enumeration_failure(self) -> None:
        """psutil failures surface as DiscoveryError."""
        with (
            patch(
                "junkctl.discovery.roots.psutil.disk_partitions",
                side_effect=OSError("mount table unavailable"),
            ),
            pytest.raises(DiscoveryError, match="Cannot enumerate mounted volumes"),
        ):
            discover_roots()
