"""JSON Schema contracts for the parsed document and the parse report."""

from __future__ import annotations

import json
import types
from dataclasses import fields, is_dataclass
from typing import Any, Union, get_args, get_origin, get_type_hints

from quota_norm_parser.models import Document, ParseReport

DOCUMENT_SCHEMA_NAME = "quota-document.schema.json"
REPORT_SCHEMA_NAME = "quota-report.schema.json"
SCHEMA_DRAFT = "https://json-schema.org/draft/2020-12/schema"


def _with_nullable(schema: dict[str, Any]) -> dict[str, Any]:
    if "$ref" in schema:
        return {"anyOf": [schema, {"type": "null"}]}

    schema_type = schema.get("type")
    if isinstance(schema_type, str):
        schema["type"] = sorted({schema_type, "null"})
        return schema

    if isinstance(schema_type, list):
        schema["type"] = sorted(set(schema_type) | {"null"})
        return schema

    return {"anyOf": [schema, {"type": "null"}]}


def _schema_for_type(annotation: Any, defs: dict[str, dict[str, Any]]) -> dict[str, Any]:
    if annotation in (Any, object):
        return {}

    origin = get_origin(annotation)

    if origin in (Union, types.UnionType):
        args = list(get_args(annotation))
        non_none = [arg for arg in args if arg is not type(None)]
        if len(non_none) == 1 and len(args) == 2:
            return _with_nullable(_schema_for_type(non_none[0], defs))
        return {"anyOf": [_schema_for_type(arg, defs) for arg in args]}

    if origin is list:
        args = get_args(annotation)
        return {"type": "array", "items": _schema_for_type(args[0], defs) if args else {}}

    if origin is dict:
        args = get_args(annotation)
        value_schema = _schema_for_type(args[1], defs) if len(args) == 2 else {}
        return {"type": "object", "additionalProperties": value_schema}

    primitive_map = {
        str: {"type": "string"},
        int: {"type": "integer"},
        float: {"type": "number"},
        bool: {"type": "boolean"},
    }
    if annotation in primitive_map:
        return dict(primitive_map[annotation])

    if is_dataclass(annotation):
        _ensure_dataclass_schema(annotation, defs)
        return {"$ref": f"#/$defs/{annotation.__name__}"}

    return {}


def _ensure_dataclass_schema(dataclass_type: type[Any], defs: dict[str, dict[str, Any]]) -> dict[str, Any]:
    class_name = dataclass_type.__name__
    if class_name in defs:
        return defs[class_name]

    schema: dict[str, Any] = {
        "title": class_name,
        "description": (dataclass_type.__doc__ or "").strip(),
        "type": "object",
        "additionalProperties": False,
        "properties": {},
        "required": [],
    }
    defs[class_name] = schema

    # Resolves string annotations such as SubSection.children.
    hints = get_type_hints(dataclass_type)
    for model_field in fields(dataclass_type):
        field_schema = _schema_for_type(hints.get(model_field.name, model_field.type), defs)

        field_description = model_field.metadata.get("description")
        if field_description:
            field_schema["description"] = field_description

        field_json_schema = model_field.metadata.get("json_schema")
        if field_json_schema:
            if any(key in field_json_schema for key in ("anyOf", "oneOf", "allOf", "not")):
                field_schema.pop("type", None)
            field_schema = {**field_schema, **field_json_schema}
            if field_description and "description" not in field_json_schema:
                field_schema["description"] = field_description

        schema["properties"][model_field.name] = field_schema
        schema["required"].append(model_field.name)

    return schema


def _root_schema(model: type[Any], title: str, description: str) -> dict[str, Any]:
    defs: dict[str, dict[str, Any]] = {}
    root = _ensure_dataclass_schema(model, defs)

    schema: dict[str, Any] = {"$schema": SCHEMA_DRAFT}
    schema.update(root)
    schema["title"] = title
    schema["description"] = description
    schema["$defs"] = defs
    return schema


def build_document_schema() -> dict[str, Any]:
    return _root_schema(
        Document,
        title="Quota Norm Document",
        description="JSON contract emitted by `quota-parse` for one parsed worksheet.",
    )


def build_report_schema() -> dict[str, Any]:
    return _root_schema(
        ParseReport,
        title="Quota Norm Parse Report",
        description="JSON contract emitted for parse counts and diagnostics.",
    )


def render_schemas() -> dict[str, str]:
    schemas = {
        DOCUMENT_SCHEMA_NAME: build_document_schema(),
        REPORT_SCHEMA_NAME: build_report_schema(),
    }
    return {
        file_name: json.dumps(schema, ensure_ascii=False, indent=2, sort_keys=True) + "\n"
        for file_name, schema in schemas.items()
    }
