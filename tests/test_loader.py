"""Tests for loading Terraform provider schemas."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from pydantic import ValidationError

from tfautodoc.core.errors import SchemaLoadError
from tfautodoc.core.models import FieldType, ProviderSchema, SchemaKind
from tfautodoc.schema import load_provider_schema, parse_provider_schema


def _document(*sources: str) -> dict:
    return {
        "format_version": "1.0",
        "provider_schemas": {
            source: {"provider": {"version": 0, "block": {}}} for source in sources
        },
    }


def test_load_fixture(provider_schema: ProviderSchema) -> None:
    assert provider_schema.provider.name == "acme"
    assert provider_schema.provider.kind is SchemaKind.PROVIDER
    assert provider_schema.provider.description == "The acme provider manages widgets."
    assert sorted(provider_schema.resources) == ["acme_gadget", "acme_widget"]
    assert sorted(provider_schema.data_sources) == ["acme_region"]
    assert provider_schema.data_sources["acme_region"].kind is SchemaKind.DATA_SOURCE


def test_attribute_flags_and_order(provider_schema: ProviderSchema) -> None:
    widget = provider_schema.resources["acme_widget"]

    assert [field.name for field in widget.fields] == ["id", "name", "tags", "spec"]
    id_field, name_field, tags, _ = widget.fields
    assert id_field.computed and not id_field.required
    assert name_field.required and name_field.description == "Widget name."
    assert tags.type is FieldType.MAP
    assert tags.type_label == "map(string)"


def test_block_types_become_nested_fields(provider_schema: ProviderSchema) -> None:
    spec = provider_schema.resources["acme_widget"].fields[-1]

    assert spec.type is FieldType.BLOCK
    assert spec.nesting_mode == "list"
    assert spec.max_items == 1
    assert spec.optional and not spec.required
    assert spec.nested
    assert [(f.name, f.type, f.required) for f in spec.fields] == [
        ("size", FieldType.NUMBER, True)
    ]


def test_object_types_expose_attributes(provider_schema: ProviderSchema) -> None:
    ports = provider_schema.resources["acme_gadget"].fields[1]

    assert ports.type is FieldType.LIST
    assert ports.type_label == "list(object)"
    assert [(f.name, f.type_label) for f in ports.fields] == [
        ("from", "number"),
        ("to", "number"),
    ]


def test_nested_attribute_types() -> None:
    document = _document("registry.terraform.io/example/acme")
    document["provider_schemas"]["registry.terraform.io/example/acme"]["resource_schemas"] = {
        "acme_thing": {
            "block": {
                "attributes": {
                    "rules": {
                        "nested_type": {
                            "nesting_mode": "set",
                            "attributes": {"port": {"type": "number", "required": True}},
                        },
                        "optional": True,
                    }
                }
            }
        }
    }

    schema = parse_provider_schema(document)

    rules = schema.resources["acme_thing"].fields[0]
    assert rules.type is FieldType.SET
    assert rules.type_label == "set(object)"
    assert rules.fields[0].name == "port"
    assert rules.fields[0].required


def test_select_provider_by_short_name() -> None:
    document = _document("registry.terraform.io/example/acme", "registry.terraform.io/hashicorp/null")

    schema = parse_provider_schema(document, "null")

    assert schema.provider.name == "null"


def test_several_providers_require_selection() -> None:
    document = _document("registry.terraform.io/example/acme", "registry.terraform.io/hashicorp/null")

    with pytest.raises(SchemaLoadError, match="several providers"):
        parse_provider_schema(document)


def test_unknown_provider_selection() -> None:
    with pytest.raises(SchemaLoadError, match="'other' not found"):
        parse_provider_schema(_document("registry.terraform.io/example/acme"), "other")


def test_no_providers() -> None:
    with pytest.raises(SchemaLoadError, match="no providers"):
        parse_provider_schema({"provider_schemas": {}})


def test_unsupported_type_names_resource() -> None:
    document = _document("registry.terraform.io/example/acme")
    document["provider_schemas"]["registry.terraform.io/example/acme"]["resource_schemas"] = {
        "acme_bad": {"block": {"attributes": {"weird": {"type": "complex"}}}}
    }

    with pytest.raises(SchemaLoadError, match="acme_bad.*weird"):
        parse_provider_schema(document)


def test_load_from_stream(schema_path: Path) -> None:
    stream = io.StringIO(schema_path.read_text())

    schema = load_provider_schema(stream)

    assert "acme_widget" in schema.resources


def test_load_from_stdin(schema_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(schema_path.read_text()))

    schema = load_provider_schema("-")

    assert "acme_region" in schema.data_sources


def test_load_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "schema.json"
    path.write_text("{not json")

    with pytest.raises(SchemaLoadError, match="Invalid schema JSON"):
        load_provider_schema(path)


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SchemaLoadError, match="Cannot read schema"):
        load_provider_schema(tmp_path / "missing.json")


def test_schema_is_immutable(provider_schema: ProviderSchema) -> None:
    with pytest.raises(ValidationError):
        provider_schema.provider.name = "changed"  # type: ignore[misc]

