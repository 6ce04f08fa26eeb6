from __future__ import annotations

import os
from pathlib import Path

import pytest

from wireview.primitives import make_cube

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def pytest_configure():
    os.environ.setdefault("PYVISTA_OFF_SCREEN", "true")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user config at a throwaway file so tests never touch ~/.wireview."""
    path = tmp_path / "config" / "wireview.cfg"
    monkeypatch.setenv("WIREVIEW_CONFIG", str(path))
    return path


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def examples_dir(project_root: Path) -> Path:
    return project_root / "docs" / "examples"


@pytest.fixture
def cube():
    return make_cube()
