"""Run configuration with environment overrides."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ArgumentError


def parse_octal(value: str) -> int:
    """Parse a permission string such as ``0644`` or ``0o644``."""
    text = value.strip().lower().removeprefix("0o")
    try:
        return int(text, 8)
    except ValueError:
        raise ValueError(f"invalid octal mode {value!r}") from None


class AutodocSettings(BaseSettings):
    """Options controlling where documentation is read from and written to."""

    model_config = SettingsConfigDict(env_prefix="AUTODOC_", case_sensitive=False)

    provider_name: str = "Terraform Provider"
    root_dir: Path = Field(default_factory=Path.cwd)
    docs_dir: str = "docs"
    templates_dir: Path = Path("templates")
    template_file_extension: str = ".template"
    file_mode: int = Field(default=0o644, ge=0, le=0o777)

    @field_validator("file_mode", mode="before")
    @classmethod
    def _octal_file_mode(cls, value: object) -> object:
        if isinstance(value, str):
            return parse_octal(value)
        return value

    @field_validator("provider_name", "template_file_extension")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("docs_dir")
    @classmethod
    def _relative_docs_dir(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        if Path(value).is_absolute():
            raise ValueError(f"must be relative to the root directory, got {value!r}")
        return value

    @property
    def templates_path(self) -> Path:
        """Template directory, resolved against the root directory."""
        if self.templates_dir.is_absolute():
            return self.templates_dir
        return self.root_dir / self.templates_dir

    @property
    def docs_path(self) -> Path:
        return self.root_dir / self.docs_dir

    @property
    def mkdocs_path(self) -> Path:
        return self.root_dir / "mkdocs.yml"


def load_settings(**overrides: Any) -> AutodocSettings:
    """Build settings from explicit overrides, the environment and defaults.

    Overrides set to ``None`` are ignored so unset CLI options fall back to the
    environment.

    Raises:
        ArgumentError: If any value fails validation
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return AutodocSettings(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or 'settings'}: {err['msg']}"
            for err in e.errors()
        )
        raise ArgumentError(f"Invalid arguments: {problems}") from e
