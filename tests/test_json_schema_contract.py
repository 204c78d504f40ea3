"""Contract tests for generated JSON Schemas."""

from __future__ import annotations

from dataclasses import asdict

from grid_builders import build_grid, continuation_table, headings_a, scenario_a_grid, table_a
from jsonschema import Draft202012Validator

from quota_norm_parser.api import parse_grid
from quota_norm_parser.models import Document, DocumentMetadata, ParseReport
from quota_norm_parser.schema import build_document_schema, build_report_schema


def test_document_schema_is_valid_and_accepts_parsed_payload() -> None:
    schema = build_document_schema()
    payload = asdict(parse_grid(build_grid(headings_a() + table_a() + continuation_table())).document)

    Draft202012Validator.check_schema(schema)
    Draft202012Validator(schema).validate(payload)


def test_document_schema_accepts_minimal_empty_payload() -> None:
    schema = build_document_schema()
    payload = asdict(Document(metadata=DocumentMetadata(source_file="inline.xlsx")))

    Draft202012Validator(schema).validate(payload)


def test_document_schema_rejects_unknown_category_code() -> None:
    schema = build_document_schema()
    payload = asdict(parse_grid(scenario_a_grid()).document)
    table = payload["chapters"][0]["sections"][0]["subsections"][0]["tables"][0]
    table["norms"][0]["resources"][0]["category_code"] = 4

    assert list(Draft202012Validator(schema).iter_errors(payload))


def test_subsection_children_reference_subsection_schema() -> None:
    schema = build_document_schema()

    children = schema["$defs"]["SubSection"]["properties"]["children"]
    assert children["items"] == {"$ref": "#/$defs/SubSection"}


def test_report_schema_is_valid_and_accepts_report_payload() -> None:
    schema = build_report_schema()
    result = parse_grid(build_grid([*table_a()]))

    Draft202012Validator.check_schema(schema)
    Draft202012Validator(schema).validate(asdict(result.report))
    Draft202012Validator(schema).validate(asdict(ParseReport(source_file="inline.xlsx")))
