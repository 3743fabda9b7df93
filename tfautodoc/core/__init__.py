"""Core models, settings and errors."""

from .errors import (
    ArgumentError,
    AutodocError,
    RenderError,
    SchemaLoadError,
    TemplateLoadError,
    TemplateNotFoundError,
    WriteError,
)
from .models import (
    DocumentKind,
    DocumentTask,
    FieldDescriptor,
    FieldType,
    ProviderSchema,
    SchemaKind,
    SchemaNode,
    TaskResult,
    TemplateBindings,
)
from .settings import AutodocSettings, load_settings

__all__ = [
    "ArgumentError",
    "AutodocError",
    "AutodocSettings",
    "DocumentKind",
    "DocumentTask",
    "FieldDescriptor",
    "FieldType",
    "ProviderSchema",
    "RenderError",
    "SchemaKind",
    "SchemaLoadError",
    "SchemaNode",
    "TaskResult",
    "TemplateBindings",
    "TemplateLoadError",
    "TemplateNotFoundError",
    "WriteError",
    "load_settings",
]
