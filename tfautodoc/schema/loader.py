"""Loading of ``terraform providers schema -json`` documents."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import IO, Any

from pydantic import ValidationError

from ..core.errors import SchemaLoadError
from ..core.models import (
    FieldDescriptor,
    FieldType,
    ProviderSchema,
    SchemaKind,
    SchemaNode,
)

logger = logging.getLogger(__name__)

_PRIMITIVES = {
    "string": FieldType.STRING,
    "number": FieldType.NUMBER,
    "bool": FieldType.BOOL,
    "dynamic": FieldType.DYNAMIC,
}
_COLLECTIONS = {
    "list": FieldType.LIST,
    "set": FieldType.SET,
    "map": FieldType.MAP,
    "object": FieldType.OBJECT,
    "tuple": FieldType.LIST,
}


def _type_label(type_expr: Any) -> str:
    if isinstance(type_expr, str):
        return type_expr
    if isinstance(type_expr, list) and len(type_expr) == 2:
        kind, inner = type_expr
        if kind == "object":
            return "object"
        if kind == "tuple" and isinstance(inner, list):
            return f"tuple({', '.join(_type_label(item) for item in inner)})"
        return f"{kind}({_type_label(inner)})"
    raise SchemaLoadError(f"Unsupported type expression: {type_expr!r}")


def _object_fields(attributes: dict[str, Any]) -> tuple[FieldDescriptor, ...]:
    return tuple(
        FieldDescriptor(
            name=name,
            type=classify_type(type_expr),
            type_label=_type_label(type_expr),
            fields=_nested_object_fields(type_expr),
        )
        for name, type_expr in sorted(attributes.items())
    )


def _nested_object_fields(type_expr: Any) -> tuple[FieldDescriptor, ...]:
    """Descriptors for the attributes of an object type, however deeply wrapped."""
    while isinstance(type_expr, list) and len(type_expr) == 2:
        kind, inner = type_expr
        if kind == "object":
            if not isinstance(inner, dict):
                raise SchemaLoadError(f"Object type must map attribute names: {type_expr!r}")
            return _object_fields(inner)
        if kind == "tuple":
            return ()
        type_expr = inner
    return ()


def classify_type(type_expr: Any) -> FieldType:
    """Map a Terraform type expression to a semantic type tag.

    Raises:
        SchemaLoadError: If the expression is not a known Terraform type
    """
    if isinstance(type_expr, str) and type_expr in _PRIMITIVES:
        return _PRIMITIVES[type_expr]
    if isinstance(type_expr, list) and len(type_expr) == 2 and type_expr[0] in _COLLECTIONS:
        return _COLLECTIONS[type_expr[0]]
    raise SchemaLoadError(f"Unsupported type expression: {type_expr!r}")


def _description(data: dict[str, Any]) -> str:
    return str(data.get("description") or "").strip()


def _attribute(name: str, attr: Any) -> FieldDescriptor:
    if not isinstance(attr, dict):
        raise SchemaLoadError(f"Attribute {name!r} must be an object")

    flags = {
        "required": bool(attr.get("required", False)),
        "optional": bool(attr.get("optional", False)),
        "computed": bool(attr.get("computed", False)),
        "sensitive": bool(attr.get("sensitive", False)),
        "deprecated": bool(attr.get("deprecated", False)),
    }

    nested_type = attr.get("nested_type")
    if isinstance(nested_type, dict):
        # Protocol 6 nested attributes carry their own attribute map.
        mode = nested_type.get("nesting_mode", "single")
        return FieldDescriptor(
            name=name,
            type=FieldType.OBJECT if mode == "single" else _COLLECTIONS.get(mode, FieldType.LIST),
            type_label="object" if mode == "single" else f"{mode}(object)",
            description=_description(attr),
            nesting_mode=mode,
            fields=_fields({"attributes": nested_type.get("attributes", {})}),
            **flags,
        )

    if "type" not in attr:
        raise SchemaLoadError(f"Attribute {name!r} has no type")
    type_expr = attr["type"]
    try:
        return FieldDescriptor(
            name=name,
            type=classify_type(type_expr),
            type_label=_type_label(type_expr),
            description=_description(attr),
            fields=_nested_object_fields(type_expr),
            **flags,
        )
    except SchemaLoadError as e:
        raise SchemaLoadError(f"Attribute {name!r}: {e}") from e


def _block_type(name: str, block_type: Any) -> FieldDescriptor:
    if not isinstance(block_type, dict):
        raise SchemaLoadError(f"Block {name!r} must be an object")

    block = block_type.get("block") or {}
    if not isinstance(block, dict):
        raise SchemaLoadError(f"Block {name!r} must define a block object")
    mode = block_type.get("nesting_mode", "single")
    min_items = block_type.get("min_items")
    max_items = block_type.get("max_items")
    return FieldDescriptor(
        name=name,
        type=FieldType.BLOCK,
        type_label="block" if mode in ("single", "group") else f"{mode}(block)",
        description=_description(block),
        required=bool(min_items),
        optional=not min_items,
        deprecated=bool(block.get("deprecated", False)),
        nesting_mode=mode,
        min_items=min_items,
        max_items=max_items,
        fields=_fields(block),
    )


def _fields(block: dict[str, Any]) -> tuple[FieldDescriptor, ...]:
    """Attributes followed by nested blocks, each sorted by name."""
    attributes = block.get("attributes") or {}
    block_types = block.get("block_types") or {}
    if not isinstance(attributes, dict) or not isinstance(block_types, dict):
        raise SchemaLoadError("Block attributes and block_types must be objects")

    fields = [_attribute(name, attr) for name, attr in sorted(attributes.items())]
    fields.extend(_block_type(name, bt) for name, bt in sorted(block_types.items()))
    return tuple(fields)


def parse_node(name: str, kind: SchemaKind, entry: Any) -> SchemaNode:
    """Build a SchemaNode from a ``{"version": ..., "block": {...}}`` entry.

    Raises:
        SchemaLoadError: If the entry is malformed
    """
    if not isinstance(entry, dict):
        raise SchemaLoadError(f"{kind.value} {name!r} must be an object")
    block = entry.get("block") or {}
    if not isinstance(block, dict):
        raise SchemaLoadError(f"{kind.value} {name!r} block must be an object")
    try:
        fields = _fields(block)
    except (SchemaLoadError, ValidationError) as e:
        raise SchemaLoadError(f"{kind.value} {name!r}: {e}") from e
    return SchemaNode(name=name, kind=kind, description=_description(block), fields=fields)


def _select_provider(
    provider_schemas: dict[str, Any], provider_source: str | None
) -> tuple[str, dict[str, Any]]:
    if not provider_schemas:
        raise SchemaLoadError("Schema document contains no providers")

    if provider_source is None:
        if len(provider_schemas) > 1:
            available = ", ".join(sorted(provider_schemas))
            raise SchemaLoadError(
                f"Schema document contains several providers, select one of: {available}"
            )
        return next(iter(provider_schemas.items()))

    for source, entry in provider_schemas.items():
        if source == provider_source or source.rsplit("/", 1)[-1] == provider_source:
            return source, entry

    available = ", ".join(sorted(provider_schemas))
    raise SchemaLoadError(f"Provider {provider_source!r} not found, available: {available}")


def parse_provider_schema(
    document: dict[str, Any], provider_source: str | None = None
) -> ProviderSchema:
    """Convert a decoded ``terraform providers schema -json`` document.

    Args:
        document: Decoded JSON document
        provider_source: Provider address (or its short name) to select when
            the document describes more than one provider

    Returns:
        Provider schema tree

    Raises:
        SchemaLoadError: If the document is malformed
    """
    if not isinstance(document, dict):
        raise SchemaLoadError("Schema document must be a JSON object")
    provider_schemas = document.get("provider_schemas") or {}
    if not isinstance(provider_schemas, dict):
        raise SchemaLoadError("'provider_schemas' must be an object")

    source, entry = _select_provider(provider_schemas, provider_source)
    if not isinstance(entry, dict):
        raise SchemaLoadError(f"Provider {source!r} must be an object")
    logger.debug(f"Loading schema of provider {source}")

    short_name = source.rsplit("/", 1)[-1]
    provider = parse_node(short_name, SchemaKind.PROVIDER, entry.get("provider") or {})

    resources = {
        name: parse_node(name, SchemaKind.RESOURCE, item)
        for name, item in (entry.get("resource_schemas") or {}).items()
    }
    data_sources = {
        name: parse_node(name, SchemaKind.DATA_SOURCE, item)
        for name, item in (entry.get("data_source_schemas") or {}).items()
    }

    logger.debug(
        f"Provider {source}: {len(resources)} resource(s), {len(data_sources)} data source(s)"
    )
    return ProviderSchema(provider=provider, resources=resources, data_sources=data_sources)


def load_provider_schema(
    source: str | Path | IO[str], provider_source: str | None = None
) -> ProviderSchema:
    """Load a provider schema from a JSON file, ``-`` for stdin, or an open stream.

    Raises:
        SchemaLoadError: If the file cannot be read or is not valid JSON
    """
    try:
        if hasattr(source, "read"):
            document = json.load(source)  # type: ignore[arg-type]
        elif str(source) == "-":
            document = json.load(sys.stdin)
        else:
            with Path(source).open(encoding="utf-8") as handle:
                document = json.load(handle)
    except OSError as e:
        raise SchemaLoadError(f"Cannot read schema {source}: {e}") from e
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid schema JSON: {e}") from e

    return parse_provider_schema(document, provider_source)
