"""Shared pytest fixtures for sigsync tests."""

from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

import pytest
from dotenv import load_dotenv
from hypothesis import settings

from sigsync.adapters import JavaAdapter
from sigsync.core.config import SigsyncConfig
from sigsync.workspace.project import Project

# Load environment variables from .env file
load_dotenv()

# Configure hypothesis for property-based testing
settings.register_profile("ci", max_examples=100, deadline=None)
settings.register_profile("dev", max_examples=20, deadline=None)
settings.load_profile("dev")

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def config() -> SigsyncConfig:
    """Configuration with defaults only (no .env file)."""
    return SigsyncConfig(_env_file=None)


@pytest.fixture
def java_adapter(config: SigsyncConfig) -> JavaAdapter:
    """Create a JavaAdapter instance."""
    return JavaAdapter(config)


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[dict[str, str]], Project]:
    """Build an in-memory project from ``{relative_path: source}``."""

    def _make(sources: dict[str, str]) -> Project:
        return Project.from_sources(tmp_path / "project", sources)

    return _make


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write ``{relative_path: source}`` to disk and return the project root."""

    def _write(sources: dict[str, str]) -> Path:
        root = tmp_path / "project"
        for relative_path, text in sources.items():
            target = root / relative_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def drift_project(tmp_path: Path) -> Path:
    """A writable copy of the ``java_drift`` fixture project."""
    target = tmp_path / "java_drift"
    shutil.copytree(FIXTURES_DIR / "java_drift", target)
    return target
