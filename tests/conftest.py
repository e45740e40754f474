"""Shared pytest fixtures: a stow directory with one package and a target dir."""

from pathlib import Path
from typing import Callable

import pytest

from towboat.models import RunConfig


@pytest.fixture
def stow_dir(tmp_path: Path) -> Path:
    path = tmp_path / "stow"
    path.mkdir()
    return path


@pytest.fixture
def package_dir(stow_dir: Path) -> Path:
    path = stow_dir / "dotfiles"
    path.mkdir()
    return path


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def write_file() -> Callable[..., Path]:
    """Write text to a path, creating parent directories."""

    def _write(path: Path, content: str = "") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(content, encoding="utf-8", newline="")
        return path

    return _write


@pytest.fixture
def write_manifest(package_dir: Path, write_file: Callable[..., Path]) -> Callable[..., Path]:
    """Write a boat.toml into the package (or another directory)."""

    def _write(content: str, directory: Path | None = None) -> Path:
        return write_file((directory or package_dir) / "boat.toml", content)

    return _write


@pytest.fixture
def make_config(stow_dir: Path, package_dir: Path, target_dir: Path) -> Callable[..., RunConfig]:
    """Build a RunConfig for the test package, overriding selected fields."""

    def _make(**overrides) -> RunConfig:
        values = {
            "package_dir": package_dir,
            "stow_dir": stow_dir,
            "target_dir": target_dir,
            "build_tag": "linux",
        }
        values.update(overrides)
        return RunConfig(**values)

    return _make
