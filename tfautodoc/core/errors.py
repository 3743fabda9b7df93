"""Error taxonomy for documentation generation."""

from __future__ import annotations


class AutodocError(Exception):
    """Base class for every error reported by tfautodoc."""


class ArgumentError(AutodocError):
    """Raised when command line arguments or settings are invalid."""


class SchemaLoadError(AutodocError):
    """Raised when the provider schema document cannot be read or parsed."""


class TemplateLoadError(AutodocError):
    """Raised when the template directory cannot be loaded."""


class TemplateNotFoundError(AutodocError):
    """Raised when a template binding is missing from the loaded set."""

    def __init__(self, name: str, output_path: object | None = None) -> None:
        self.name = name
        self.output_path = output_path
        target = f" for {output_path}" if output_path is not None else ""
        super().__init__(f"Template not found: {name!r}{target}")


class RenderError(AutodocError):
    """Raised when a template fails to execute against its data."""


class WriteError(AutodocError):
    """Raised when rendered output cannot be written to disk."""
