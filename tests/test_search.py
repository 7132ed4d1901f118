"""Tests for keyword search."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from schemadex.errors import InvalidPattern, MalformedDocument, ReadFailure
from schemadex.index.registry import SchemaRegistry
from schemadex.index.search import (
    RegexMatcher,
    Searcher,
    match_definition,
    match_document,
    match_property,
)
from schemadex.models import SearchPropertyResult, SearchValueResult


def _searcher(directory: Path) -> Searcher:
    registry = SchemaRegistry()
    registry.index(directory)
    return Searcher(registry)


class TestRegexMatcher:
    """Test RegexMatcher."""

    def test_case_insensitive(self) -> None:
        matcher = RegexMatcher("power")
        assert matcher.matches("PowerState")
        assert matcher.matches("POWER")

    def test_matches_anywhere(self) -> None:
        assert RegexMatcher("State").matches("The PowerState value")

    def test_regex_syntax(self) -> None:
        matcher = RegexMatcher("^Power(State|Supply)$")
        assert matcher.matches("powersupply")
        assert not matcher.matches("PowerStates")

    def test_invalid_pattern(self) -> None:
        with pytest.raises(InvalidPattern, match=r"Power\("):
            RegexMatcher("Power(")


class TestMatchProperty:
    """Test match_property priority."""

    def test_long_description_wins(self) -> None:
        prop = {"description": "power here", "longDescription": "power there"}
        assert match_property(prop, RegexMatcher("power")) == SearchValueResult(
            name="longDescription", content="power there"
        )

    def test_description_when_long_does_not_match(self) -> None:
        prop = {"description": "power here", "longDescription": "nothing"}
        assert match_property(prop, RegexMatcher("power")) == SearchValueResult(
            name="description", content="power here"
        )

    def test_non_string_fields_ignored(self) -> None:
        prop = {"description": ["power"], "longDescription": 1}
        assert match_property(prop, RegexMatcher("power")) is None

    def test_non_object_property(self) -> None:
        assert match_property("power", RegexMatcher("power")) is None
        assert match_property(None, RegexMatcher("power")) is None


class TestMatchDefinition:
    """Test match_definition."""

    def test_name_and_value_rows_are_separate(self) -> None:
        definition = {
            "properties": {
                "PowerState": {"description": "Power state of the outlet."},
            }
        }

        hits = match_definition(definition, RegexMatcher("power"))

        assert hits == [
            SearchPropertyResult(name="PowerState"),
            SearchPropertyResult(
                name="PowerState",
                value=SearchValueResult(name="description", content="Power state of the outlet."),
            ),
        ]

    def test_name_only(self) -> None:
        definition = {"properties": {"PowerState": {"description": "Current state."}}}
        assert match_definition(definition, RegexMatcher("power")) == [
            SearchPropertyResult(name="PowerState")
        ]

    def test_value_only(self) -> None:
        definition = {"properties": {"State": {"description": "Power state."}}}
        hits = match_definition(definition, RegexMatcher("power"))
        assert len(hits) == 1
        assert hits[0].name == "State"
        assert hits[0].value is not None

    def test_missing_properties(self) -> None:
        assert match_definition({"type": "string"}, RegexMatcher("power")) == []
        assert match_definition({"properties": []}, RegexMatcher("power")) == []
        assert match_definition("power", RegexMatcher("power")) == []

    def test_injected_matcher(self) -> None:
        matcher = MagicMock()
        matcher.matches.side_effect = lambda text: text == "Name"
        definition = {"properties": {"Name": {"description": "x"}, "Id": {"description": "Name"}}}

        hits = match_definition(definition, matcher)

        assert [h.name for h in hits] == ["Name", "Id"]
        assert hits[1].value == SearchValueResult(name="description", content="Name")


class TestMatchDocument:
    """Test match_document."""

    def test_no_definitions(self) -> None:
        assert match_document("Foo", {"title": "Foo"}, RegexMatcher("Foo")) == []
        assert match_document("Foo", [], RegexMatcher("Foo")) == []

    def test_one_result_per_matching_definition(self) -> None:
        document = {
            "definitions": {
                "A": {"properties": {"Power": {}}},
                "B": {"properties": {"Other": {}}},
                "C": {"properties": {"PowerLimit": {}}},
            }
        }

        results = match_document("Foo", document, RegexMatcher("power"))

        assert [(r.name, r.model) for r in results] == [("Foo", "A"), ("Foo", "C")]


class TestSearcher:
    """Test Searcher over a registry."""

    def test_power_hits(self, schema_dir: Path) -> None:
        """Name hit and description hit for the same property."""
        results = _searcher(schema_dir).search("power")

        assert len(results) == 1
        result = results[0]
        assert result.name == "Outlet"
        assert result.model == "Outlet"
        assert result.properties == [
            SearchPropertyResult(name="PowerState"),
            SearchPropertyResult(
                name="PowerState",
                value=SearchValueResult(name="description", content="Power state of the outlet."),
            ),
        ]

    def test_uses_latest_document(self, tmp_path: Path, make_schema) -> None:
        make_schema(tmp_path, "Foo.json", {"definitions": {"Foo": {"properties": {"OldName": {}}}}})
        make_schema(tmp_path, "Foo.v1_0_0.json", {"definitions": {"Foo": {"properties": {"OldName": {}}}}})
        make_schema(tmp_path, "Foo.v1_10_0.json", {"definitions": {"Foo": {"properties": {"NewName": {}}}}})
        make_schema(tmp_path, "Foo.v1_9_0.json", {"definitions": {"Foo": {"properties": {"OldName": {}}}}})

        searcher = _searcher(tmp_path)

        assert searcher.search("OldName") == []
        assert len(searcher.search("NewName")) == 1

    def test_falls_back_to_default_document(self, tmp_path: Path, make_schema) -> None:
        make_schema(tmp_path, "Foo.json", {"definitions": {"Foo": {"properties": {"Status": {}}}}})
        results = _searcher(tmp_path).search("status")
        assert [r.name for r in results] == ["Foo"]

    def test_spans_resources(self, tmp_path: Path, make_schema) -> None:
        make_schema(tmp_path, "A.json", {"definitions": {"A": {"properties": {"Status": {}}}}})
        make_schema(tmp_path, "B.v1_0_0.json", {"definitions": {"B": {"properties": {"Status": {}}}}})
        results = _searcher(tmp_path).search("status")
        assert sorted(r.name for r in results) == ["A", "B"]

    def test_no_matches(self, schema_dir: Path) -> None:
        assert _searcher(schema_dir).search("nonexistent-keyword") == []

    def test_malformed_document_aborts(self, tmp_path: Path, make_schema) -> None:
        """One bad document fails the whole search."""
        make_schema(tmp_path, "A.json", {"definitions": {"A": {"properties": {"Status": {}}}}})
        (tmp_path / "B.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(MalformedDocument) as excinfo:
            _searcher(tmp_path).search("status")

        assert excinfo.value.resource == "B"

    def test_missing_file_aborts(self, schema_dir: Path) -> None:
        searcher = _searcher(schema_dir)
        (schema_dir / "Outlet.v1_2_0.json").unlink()
        with pytest.raises(ReadFailure):
            searcher.search("power")

    def test_invalid_pattern_before_traversal(self, schema_dir: Path) -> None:
        registry = MagicMock()
        with pytest.raises(InvalidPattern):
            Searcher(registry).search("[")
        registry.snapshot.assert_not_called()

    def test_empty_registry(self) -> None:
        assert Searcher(SchemaRegistry()).search("anything") == []
