"""Tests for package discovery."""

import logging
import os
from pathlib import Path
from typing import Callable

import pytest

from towboat.api.exceptions import ConfigurationError
from towboat.core.file_discoverer import DiscoveredItem, FileDiscoverer, discover


def _targets(items: list[DiscoveredItem]) -> set[str]:
    return {item.target.as_posix() for item in items}


def test_discover_applies_manifest_rules(
    package_dir: Path,
    write_manifest: Callable[..., Path],
    write_file: Callable[..., Path],
) -> None:
    _ = write_manifest(
        '[targets]\n'
        '".bashrc" = { tags = ["linux"] }\n'
        '".vimrc" = { tags = ["macos"] }\n'
        '"README.md" = { tags = ["default"] }\n'
    )
    _ = write_file(package_dir / ".bashrc", "bash\n")
    _ = write_file(package_dir / ".vimrc", "vim\n")
    _ = write_file(package_dir / "README.md", "readme\n")

    items = discover(package_dir, "linux")

    assert items == [DiscoveredItem(package_dir / ".bashrc", Path(".bashrc"))]


def test_discover_includes_files_with_markers_for_the_tag(
    package_dir: Path,
    write_manifest: Callable[..., Path],
    write_file: Callable[..., Path],
) -> None:
    _ = write_manifest("")
    _ = write_file(package_dir / ".profile", "# {linux-\nA\n# -linux}\n")
    _ = write_file(package_dir / ".other", "plain\n")

    assert _targets(discover(package_dir, "linux")) == {".profile"}
    assert discover(package_dir, "macos") == []


def test_manifest_is_never_deployed(
    package_dir: Path,
    write_manifest: Callable[..., Path],
    write_file: Callable[..., Path],
) -> None:
    _ = write_manifest("[default]\ninclude_all = true\n")
    _ = write_file(package_dir / "a", "a\n")
    _ = write_file(package_dir / "sub" / "b", "b\n")

    assert _targets(discover(package_dir, "default")) == {"a", "sub/b"}


def test_directory_rule_and_target_override(
    package_dir: Path,
    write_manifest: Callable[..., Path],
    write_file: Callable[..., Path],
) -> None:
    _ = write_manifest(
        '[targets]\n'
        '"scripts" = { tags = ["linux"] }\n'
        '"app.conf" = { target = ".config/app/app.conf", tags = ["linux"] }\n'
    )
    _ = write_file(package_dir / "scripts" / "one.sh", "1\n")
    _ = write_file(package_dir / "scripts" / "nested" / "two.sh", "2\n")
    _ = write_file(package_dir / "app.conf", "conf\n")

    items = FileDiscoverer("linux").discover(package_dir)

    assert _targets(items) == {"scripts/one.sh", "scripts/nested/two.sh", ".config/app/app.conf"}


def test_discovery_order_is_stable(
    package_dir: Path,
    write_manifest: Callable[..., Path],
    write_file: Callable[..., Path],
) -> None:
    _ = write_manifest("[default]\ninclude_all = true\n")
    for name in ["c", "a", "b/z", "b/y"]:
        _ = write_file(package_dir / name, name)

    first = discover(package_dir, "default")

    assert first == discover(package_dir, "default")
    assert [item.target.as_posix() for item in first] == ["a", "c", "b/y", "b/z"]


def test_nested_package_targets_are_prefixed(
    package_dir: Path,
    write_manifest: Callable[..., Path],
    write_file: Callable[..., Path],
) -> None:
    _ = write_manifest('[targets]\n"sub" = { tags = ["other"] }\n[default]\ninclude_all = true\n')
    nested = package_dir / "sub"
    _ = write_manifest('[targets]\n"conf" = { target = "renamed", tags = ["default"] }\n', nested)
    _ = write_file(nested / "conf", "conf\n")
    _ = write_file(nested / "ignored", "x\n")
    _ = write_file(package_dir / "top", "top\n")

    items = discover(package_dir, "default")

    # The nested manifest governs its subtree instead of the parent's rules
    assert DiscoveredItem(nested / "conf", Path("sub/renamed")) in items
    assert _targets(items) == {"top", "sub/renamed"}


def test_broken_symlink_is_skipped_with_warning(
    package_dir: Path,
    write_manifest: Callable[..., Path],
    write_file: Callable[..., Path],
    caplog: pytest.LogCaptureFixture,
) -> None:
    _ = write_manifest("[default]\ninclude_all = true\n")
    _ = write_file(package_dir / "ok", "ok\n")
    os.symlink(package_dir / "missing", package_dir / "dangling")

    with caplog.at_level(logging.WARNING, logger="towboat"):
        items = discover(package_dir, "default")

    assert _targets(items) == {"ok"}
    assert "Skipping broken symlink" in caplog.text


def test_symlink_in_package_is_a_single_candidate(
    package_dir: Path,
    write_manifest: Callable[..., Path],
    write_file: Callable[..., Path],
    tmp_path: Path,
) -> None:
    _ = write_manifest("[default]\ninclude_all = true\n")
    outside = tmp_path / "outside"
    _ = write_file(outside / "inner", "x\n")
    _ = write_file(tmp_path / "file", "f\n")
    os.symlink(outside, package_dir / "linked_dir")
    os.symlink(tmp_path / "file", package_dir / "linked_file")

    # Directory symlinks are not followed; file symlinks are deployed as files
    assert _targets(discover(package_dir, "default")) == {"linked_file"}


def test_manifest_of_the_stow_dir_governs_packages_without_one(
    stow_dir: Path,
    package_dir: Path,
    write_manifest: Callable[..., Path],
    write_file: Callable[..., Path],
) -> None:
    _ = write_manifest('[targets]\n"rc" = { tags = ["linux"] }\n', stow_dir)
    _ = write_file(package_dir / "rc", "rc\n")

    assert _targets(discover(package_dir, "linux")) == {"rc"}


def test_discover_without_manifest_fails(tmp_path: Path, write_file: Callable[..., Path]) -> None:
    package = tmp_path / "orphan"
    _ = write_file(package / "file", "x\n")

    with pytest.raises(ConfigurationError):
        _ = discover(package, "linux")


def test_discover_reports_invalid_manifest(
    package_dir: Path,
    write_manifest: Callable[..., Path],
) -> None:
    path = write_manifest("targets = 3\n")

    with pytest.raises(ConfigurationError) as exc_info:
        _ = discover(package_dir, "linux")

    assert exc_info.value.path == path
