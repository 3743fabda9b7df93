"""Provider schema loading."""

from .loader import load_provider_schema, parse_provider_schema

__all__ = ["load_provider_schema", "parse_provider_schema"]
