"""Tests for required-field and typed row validation."""

import pytest

from prodops_ingestion.domain.types import CsvFieldType, CsvParseError, EntityField
from prodops_ingestion.domain.validators import validate_csv_rows, validate_field_types


class TestValidateCsvRows:

    def test_errors_in_row_then_field_order(self):
        rows = [{"name": "Alice", "email": ""}, {"name": "", "email": "bob@x.com"}]
        errors = validate_csv_rows(rows, ["name", "email"])
        assert errors == [
            CsvParseError(row=2, column="email", message="email is required"),
            CsvParseError(row=3, column="name", message="name is required"),
        ]

    def test_field_order_within_a_row_follows_required_fields(self):
        errors = validate_csv_rows([{}], ["email", "name"])
        assert [e.column for e in errors] == ["email", "name"]
        assert all(e.row == 2 for e in errors)

    def test_whitespace_only_is_blank(self):
        errors = validate_csv_rows([{"name": "   "}], ["name"])
        assert len(errors) == 1

    def test_none_and_absent_are_blank(self):
        errors = validate_csv_rows([{"name": None}, {}], ["name"])
        assert [e.row for e in errors] == [2, 3]

    def test_non_string_values_are_present(self):
        assert validate_csv_rows([{"qty": 0, "active": False}], ["qty", "active"]) == []

    def test_empty_tag_list_is_blank(self):
        assert len(validate_csv_rows([{"tags": []}], ["tags"])) == 1

    def test_no_required_fields(self):
        assert validate_csv_rows([{"a": ""}], []) == []

    def test_no_rows(self):
        assert validate_csv_rows([], ["name"]) == []


class TestValidateFieldTypes:

    FIELDS = [
        EntityField(key="email", label="Email", field_type=CsvFieldType.EMAIL),
        EntityField(key="site", label="Website", field_type=CsvFieldType.URL),
        EntityField(key="cost", label="Cost", field_type=CsvFieldType.CURRENCY),
        EntityField(
            key="status",
            label="Status",
            field_type=CsvFieldType.ENUM,
            enum_values=("active", "in_repair", "retired"),
        ),
        EntityField(key="code", label="Code", max_length=6),
        EntityField(key="specs", label="Specs", field_type=CsvFieldType.JSON),
    ]

    def test_valid_row_has_no_errors(self):
        row = {
            "email": "crew@example.com",
            "site": "https://example.com/rig",
            "cost": "$1,250.00",
            "status": "Active",
            "code": "LX-01",
            "specs": '{"watts": 750}',
        }
        assert validate_field_types([row], self.FIELDS) == []

    @pytest.mark.parametrize("column, value, message", [
        ("email", "crew@", "email must be a valid email address"),
        ("email", "two words@example.com", "email must be a valid email address"),
        ("site", "example.com", "site must be a valid URL"),
        ("cost", "twelve", "cost must be a number"),
        ("cost", "$", "cost must be a number"),
        ("status", "lost", "status must be one of: active, in_repair, retired"),
        ("code", "LX-0001", "code must be at most 6 characters"),
        ("specs", "{watts: 750}", "specs must be valid JSON"),
    ])
    def test_bad_cell(self, column, value, message):
        errors = validate_field_types([{column: value}], self.FIELDS)
        assert errors == [CsvParseError(row=2, column=column, message=message)]

    def test_blank_and_missing_cells_are_skipped(self):
        assert validate_field_types([{"email": "  ", "cost": ""}, {}], self.FIELDS) == []

    def test_enum_without_allowed_values_accepts_anything(self):
        fields = [EntityField(key="kind", label="Kind", field_type=CsvFieldType.ENUM)]
        assert validate_field_types([{"kind": "whatever"}], fields) == []

    def test_errors_in_row_then_field_order(self):
        rows = [{"cost": "x", "email": "bad"}, {"site": "nope"}]
        errors = validate_field_types(rows, self.FIELDS)
        assert [(e.row, e.column) for e in errors] == [(2, "email"), (2, "cost"), (3, "site")]
