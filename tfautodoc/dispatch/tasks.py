"""Expansion of a provider schema into document rendering tasks."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..core.models import (
    DocumentKind,
    DocumentTask,
    ProviderSchema,
    SchemaNode,
    TemplateBindings,
)
from ..core.settings import AutodocSettings

RESOURCES_DIR = "resources"
DATA_SOURCES_DIR = "data-sources"


def config_context(schema: ProviderSchema, settings: AutodocSettings) -> dict[str, Any]:
    """Context for the mkdocs configuration template."""
    return {
        "provider_name": settings.provider_name,
        "docs_dir": settings.docs_dir,
        "resources": sorted(schema.resources),
        "data_sources": sorted(schema.data_sources),
    }


def schema_context(node: SchemaNode, provider_name: str) -> dict[str, Any]:
    """Context for a provider, resource or data source document."""
    return {
        "name": node.name,
        "kind": node.kind.value,
        "description": node.description,
        "fields": list(node.fields),
        "provider_name": provider_name,
    }


def _document_path(settings: AutodocSettings, subdir: str, name: str) -> Path:
    return settings.docs_path / subdir / f"{name}.md"


def build_tasks(
    schema: ProviderSchema,
    settings: AutodocSettings,
    bindings: TemplateBindings,
) -> list[DocumentTask]:
    """Enumerate every document to generate for *schema*.

    Produces one config task, one index task, one task per resource and one
    per data source, in that order.
    """
    provider_name = settings.provider_name
    provider = schema.provider.model_copy(update={"name": provider_name})

    tasks = [
        DocumentTask(
            output_path=settings.mkdocs_path,
            template_name=bindings.config,
            data=config_context(schema, settings),
            kind=DocumentKind.CONFIG,
        ),
        DocumentTask(
            output_path=settings.docs_path / "index.md",
            template_name=bindings.index,
            data=schema_context(provider, provider_name),
            kind=DocumentKind.INDEX,
        ),
    ]

    for name in sorted(schema.resources):
        tasks.append(
            DocumentTask(
                output_path=_document_path(settings, RESOURCES_DIR, name),
                template_name=bindings.resource,
                data=schema_context(schema.resources[name], provider_name),
                kind=DocumentKind.RESOURCE,
            )
        )

    for name in sorted(schema.data_sources):
        tasks.append(
            DocumentTask(
                output_path=_document_path(settings, DATA_SOURCES_DIR, name),
                template_name=bindings.datasource,
                data=schema_context(schema.data_sources[name], provider_name),
                kind=DocumentKind.DATA_SOURCE,
            )
        )

    return tasks
