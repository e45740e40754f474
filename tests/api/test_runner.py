"""End-to-end tests for run_towboat."""

import json
import os
from pathlib import Path
from typing import Callable

import pytest
from pytest_mock import MockerFixture

from towboat.api.exceptions import TargetExistsError
from towboat.api.runner import run_towboat
from towboat.models import ItemState, OperationStatus, RunConfig
from towboat.services.cache_service import CacheStore

MANIFEST = """\
[targets]
".bashrc" = { tags = ["linux", "macos"] }
".vimrc" = { tags = ["linux", "macos"] }
"scripts" = { tags = ["linux"] }
"""

BASHRC = "export EDITOR=vim\n# {linux-\nalias ls='ls --color'\n# -linux}\n# {macos-\nalias ls='ls -G'\n# -macos}\n"


@pytest.fixture
def package(
    package_dir: Path,
    write_manifest: Callable[..., Path],
    write_file: Callable[..., Path],
) -> Path:
    _ = write_manifest(MANIFEST)
    _ = write_file(package_dir / ".bashrc", BASHRC)
    _ = write_file(package_dir / ".vimrc", "set nu\n")
    _ = write_file(package_dir / "scripts" / "up.sh", "#!/bin/sh\n")
    return package_dir


def test_deploy_package(
    package: Path,
    make_config: Callable[..., RunConfig],
    target_dir: Path,
    stow_dir: Path,
) -> None:
    reported = []

    result = run_towboat(make_config(), reporter=reported.append)

    assert result.status == OperationStatus.SUCCESS
    assert result.discovered == 3
    assert result.duration is not None and result.duration >= 0
    assert reported == result.items
    assert result.count(ItemState.MATERIALIZED) == 1
    assert result.count(ItemState.SYMLINKED) == 2
    assert (target_dir / ".bashrc").read_text(encoding="utf-8") == (
        "export EDITOR=vim\nalias ls='ls --color'\n"
    )
    assert (target_dir / ".vimrc").is_symlink()
    assert (target_dir / "scripts" / "up.sh").is_symlink()

    cache = json.loads((stow_dir / ".towboat_cache.json").read_text(encoding="utf-8"))
    assert list(cache) == [str((target_dir / ".bashrc").resolve())]


def test_build_tag_selects_content_and_files(
    package: Path,
    make_config: Callable[..., RunConfig],
    target_dir: Path,
) -> None:
    result = run_towboat(make_config(build_tag="macos"))

    assert result.discovered == 2
    assert "alias ls='ls -G'" in (target_dir / ".bashrc").read_text(encoding="utf-8")
    assert not (target_dir / "scripts").exists()


def test_second_run_changes_nothing(
    package: Path,
    make_config: Callable[..., RunConfig],
    mocker: MockerFixture,
) -> None:
    _ = run_towboat(make_config())
    save = mocker.spy(CacheStore, "save")

    result = run_towboat(make_config())

    assert [item.state for item in result.items] == [ItemState.ALREADY_CORRECT] * 3
    assert save.call_count == 0


def test_cache_is_saved_once_per_run(
    package: Path,
    make_config: Callable[..., RunConfig],
    write_file: Callable[..., Path],
    mocker: MockerFixture,
) -> None:
    _ = write_file(package / ".profile", "# {linux-\nA\n# -linux}\n")
    save = mocker.spy(CacheStore, "save")

    _ = run_towboat(make_config())

    assert save.call_count == 1


def test_dry_run_writes_nothing(
    package: Path,
    make_config: Callable[..., RunConfig],
    target_dir: Path,
    stow_dir: Path,
) -> None:
    result = run_towboat(make_config(dry_run=True))

    assert result.dry_run
    assert len(result.items) == 3
    assert list(target_dir.iterdir()) == []
    assert not (stow_dir / ".towboat_cache.json").exists()


def test_no_matching_files_is_a_warning(
    package: Path,
    make_config: Callable[..., RunConfig],
    stow_dir: Path,
) -> None:
    result = run_towboat(make_config(build_tag="windows"))

    assert result.is_success
    assert result.items == []
    assert result.warnings == ["No files found matching build tag 'windows'"]
    assert not (stow_dir / ".towboat_cache.json").exists()


def test_failure_aborts_and_keeps_earlier_items(
    package: Path,
    make_config: Callable[..., RunConfig],
    target_dir: Path,
    write_file: Callable[..., Path],
    stow_dir: Path,
) -> None:
    # Walk order is .bashrc, .vimrc, scripts/up.sh
    _ = write_file(target_dir / ".vimrc", "user\n")

    with pytest.raises(TargetExistsError):
        _ = run_towboat(make_config())

    assert (target_dir / ".bashrc").exists()
    assert not (target_dir / "scripts").exists()
    assert not (stow_dir / ".towboat_cache.json").exists()


def test_remove_after_deploy(
    package: Path,
    make_config: Callable[..., RunConfig],
    target_dir: Path,
    stow_dir: Path,
    write_file: Callable[..., Path],
) -> None:
    _ = write_file(target_dir / "unrelated", "u\n")
    _ = run_towboat(make_config())
    cache_before = (stow_dir / ".towboat_cache.json").read_text(encoding="utf-8")

    result = run_towboat(make_config(remove=True))

    assert result.mode == "remove"
    assert result.count(ItemState.REMOVED) == 3
    assert sorted(os.listdir(target_dir)) == ["unrelated"]
    assert (package / ".vimrc").exists()
    assert (stow_dir / ".towboat_cache.json").read_text(encoding="utf-8") == cache_before

    again = run_towboat(make_config(remove=True))
    assert again.count(ItemState.ABSENT) == 3


def test_folded_directory_with_target_override_is_left_alone(
    package_dir: Path,
    write_manifest: Callable[..., Path],
    write_file: Callable[..., Path],
    make_config: Callable[..., RunConfig],
    target_dir: Path,
) -> None:
    _ = write_manifest('[targets]\n"a/x.conf" = { target = "a/y.conf", tags = ["linux"] }\n')
    _ = write_file(package_dir / "a" / "x.conf", "x\n")
    os.symlink(package_dir / "a", target_dir / "a")

    result = run_towboat(make_config())

    assert [item.state for item in result.items] == [ItemState.ALREADY_CORRECT]
    assert sorted(os.listdir(package_dir / "a")) == ["x.conf"]


def test_hyphenated_build_tag_deploys(
    package_dir: Path,
    write_manifest: Callable[..., Path],
    write_file: Callable[..., Path],
    make_config: Callable[..., RunConfig],
    target_dir: Path,
) -> None:
    _ = write_manifest('[default]\ninclude_all = true\ndefault_tag = "work-laptop"\n')
    _ = write_file(package_dir / ".gitconfig", "[user]\n")
    _ = write_file(package_dir / ".profile", "# {work-laptop-\nW\n# -work-laptop}\n")

    result = run_towboat(make_config(build_tag="work-laptop"))

    assert result.count(ItemState.SYMLINKED) == 1
    assert result.count(ItemState.MATERIALIZED) == 1
    assert (target_dir / ".profile").read_text(encoding="utf-8") == "W\n"
