"""CLI argument parsers and validators."""

from __future__ import annotations

from ..core.errors import ArgumentError
from ..core.settings import parse_octal


def parse_file_mode(value: str | None) -> int | None:
    """Parse octal file mode string."""
    if value is None:
        return None
    try:
        return parse_octal(value)
    except ValueError as e:
        raise ArgumentError(f"Invalid octal mode: {value!r}") from e


def parse_template_ext(value: str | None) -> str | None:
    """Normalize a template extension, adding the leading dot when omitted."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ArgumentError("Template file extension must not be empty")
    return value if value.startswith(".") else f".{value}"
