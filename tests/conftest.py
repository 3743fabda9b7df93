"""Shared fixtures for tfautodoc tests."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from tfautodoc.core.models import ProviderSchema
from tfautodoc.core.settings import AutodocSettings
from tfautodoc.schema import load_provider_schema

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "AUTODOC_PROVIDER_NAME",
        "AUTODOC_ROOT_DIR",
        "AUTODOC_DOCS_DIR",
        "AUTODOC_TEMPLATES_DIR",
        "AUTODOC_TEMPLATE_FILE_EXTENSION",
        "AUTODOC_FILE_MODE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def schema_path() -> Path:
    return FIXTURES / "schema.json"


@pytest.fixture
def provider_schema(schema_path: Path) -> ProviderSchema:
    return load_provider_schema(schema_path)


@pytest.fixture
def root_dir(tmp_path: Path) -> Path:
    """Output root holding a private copy of the fixture templates."""
    root = tmp_path / "site"
    shutil.copytree(FIXTURES / "templates", root / "templates")
    return root


@pytest.fixture
def templates_dir(root_dir: Path) -> Path:
    return root_dir / "templates"


@pytest.fixture
def settings(root_dir: Path) -> AutodocSettings:
    return AutodocSettings(provider_name="acme", root_dir=root_dir)


def _generated_files(root: Path) -> set[str]:
    return {
        path.relative_to(root).as_posix()
        for path in root.rglob("*")
        if path.is_file() and "templates" not in path.relative_to(root).parts
    }


@pytest.fixture
def generated_files():
    """Relative paths of all generated files below a root, templates excluded."""
    return _generated_files
