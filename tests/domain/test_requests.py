"""Tests for pairing field names with values."""

from __future__ import annotations

import pytest

from projctl.domain.requests import FieldUpdate, pair_fields, parse_field_assignment


class TestPairFields:
    def test_positional_pairing(self) -> None:
        assert pair_fields("Status,Iteration", "Todo,[0]") == [
            FieldUpdate("Status", "Todo"),
            FieldUpdate("Iteration", "[0]"),
        ]

    def test_trailing_names_dropped(self) -> None:
        assert pair_fields("Status,Iteration,Estimate", "Todo") == [
            FieldUpdate("Status", "Todo"),
        ]

    def test_surplus_values_ignored(self) -> None:
        assert pair_fields("Status", "Todo,Done,Extra") == [FieldUpdate("Status", "Todo")]

    def test_empty_value_drops_name(self) -> None:
        assert pair_fields("Status,Estimate,Notes", "Todo,,hi") == [
            FieldUpdate("Status", "Todo"),
            FieldUpdate("Notes", "hi"),
        ]

    def test_whitespace_stripped(self) -> None:
        assert pair_fields(" Status , Iteration ", " Todo , Sprint 5 ") == [
            FieldUpdate("Status", "Todo"),
            FieldUpdate("Iteration", "Sprint 5"),
        ]

    def test_duplicates_preserved_in_order(self) -> None:
        pairs = pair_fields("Status,Status", "Todo,Done")
        assert [p.raw_value for p in pairs] == ["Todo", "Done"]

    @pytest.mark.parametrize(("names", "values"), [(None, "x"), ("", "x"), ("Status", None)])
    def test_missing_lists(self, names: str | None, values: str | None) -> None:
        assert pair_fields(names, values) == []


class TestParseFieldAssignment:
    def test_simple(self) -> None:
        assert parse_field_assignment("Status=Done") == FieldUpdate("Status", "Done")

    def test_splits_on_first_equals(self) -> None:
        assert parse_field_assignment("Notes=a=b") == FieldUpdate("Notes", "a=b")

    @pytest.mark.parametrize("text", ["Status", "=Done", "Status=", "  =  "])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError, match="NAME=VALUE"):
            parse_field_assignment(text)
