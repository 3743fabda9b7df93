"""Template loading, rendering and output writing."""

from .engine import TemplateSet
from .io import write_document

__all__ = ["TemplateSet", "write_document"]
