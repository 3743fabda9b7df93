"""Domain models for schema documents and rendering tasks."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SchemaKind(str, Enum):
    """Category of a documented entity."""

    PROVIDER = "provider"
    RESOURCE = "resource"
    DATA_SOURCE = "data-source"


class DocumentKind(str, Enum):
    """Category of a generated output document."""

    CONFIG = "config"
    INDEX = "index"
    RESOURCE = "resource"
    DATA_SOURCE = "data-source"


class FieldType(str, Enum):
    """Semantic type tag of a schema field."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    LIST = "list"
    SET = "set"
    MAP = "map"
    OBJECT = "object"
    BLOCK = "block"
    DYNAMIC = "dynamic"


class FieldDescriptor(BaseModel):
    """A single attribute or nested block of a schema."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Attribute or block name")
    type: FieldType = Field(..., description="Semantic type tag")
    type_label: str = Field(..., description="Human readable type, e.g. list(string)")
    description: str = Field(default="", description="Field documentation")
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False
    deprecated: bool = False
    nesting_mode: str | None = Field(
        default=None, description="Block nesting mode (single, list, set, map)"
    )
    min_items: int | None = None
    max_items: int | None = None
    fields: tuple[FieldDescriptor, ...] = Field(
        default=(), description="Nested fields of blocks and objects"
    )

    @property
    def nested(self) -> bool:
        return bool(self.fields)


class SchemaNode(BaseModel):
    """One documentable entity: the provider, a resource or a data source."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: SchemaKind
    description: str = ""
    fields: tuple[FieldDescriptor, ...] = ()


class ProviderSchema(BaseModel):
    """The complete schema tree of a provider."""

    model_config = ConfigDict(frozen=True)

    provider: SchemaNode
    resources: dict[str, SchemaNode] = Field(default_factory=dict)
    data_sources: dict[str, SchemaNode] = Field(default_factory=dict)


class TemplateBindings(BaseModel):
    """Template names used for each generated document role."""

    model_config = ConfigDict(frozen=True)

    config: str = "mkdocs.yml"
    index: str = "index.md"
    resource: str = "resource.md"
    datasource: str = "datasource.md"


class DocumentTask(BaseModel):
    """A single output document to render."""

    model_config = ConfigDict(frozen=True)

    output_path: Path = Field(..., description="Output file path")
    template_name: str = Field(..., description="Template to render")
    data: dict[str, Any] = Field(default_factory=dict, description="Template context")
    kind: DocumentKind


class TaskResult(BaseModel):
    """Outcome of a single DocumentTask."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    task: DocumentTask
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


FieldDescriptor.model_rebuild()
