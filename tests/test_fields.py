"""Tests for jiri.fields — resolution, suggestions, and value normalization."""

import pytest

from jiri.fields import (
    Column,
    FieldLookup,
    field_miss_message,
    format_field_label,
    get_field_value,
    levenshtein,
    normalize_value,
    parse_field_list,
    resolve_fields,
    sort_fields_for_display,
    suggest_fields,
)


CATALOG = [
    {"id": "issuekey", "name": "Key"},
    {"id": "summary", "name": "Summary"},
    {"id": "assignee", "name": "Assignee"},
    {"id": "status", "name": "Status"},
    {"id": "customfield_10016", "name": "Story Points"},
    {"id": "customfield_10020", "name": "Sprint"},
    {"id": "broken"},
]


@pytest.fixture
def lookup():
    return FieldLookup.from_catalog(CATALOG)


# ===========================================================================
# FieldLookup
# ===========================================================================

def test_from_catalog_builds_both_maps(lookup):
    assert lookup.id_to_name["customfield_10016"] == "Story Points"
    assert lookup.name_to_id["story points"] == "customfield_10016"
    assert "broken" not in lookup.id_to_name


def test_from_catalog_empty():
    lookup = FieldLookup.from_catalog(None)
    assert lookup.id_to_name == {}
    assert lookup.name_to_id == {}


# ===========================================================================
# levenshtein / suggest_fields
# ===========================================================================

@pytest.mark.parametrize("a, b, expected", [
    ("", "", 0),
    ("abc", "", 3),
    ("", "abc", 3),
    ("kitten", "sitting", 3),
    ("asignee", "assignee", 1),
    ("same", "same", 0),
])
def test_levenshtein(a, b, expected):
    assert levenshtein(a, b) == expected


def test_suggest_fields_finds_close_match(lookup):
    assert "Assignee" in suggest_fields("asignee", lookup)


def test_suggest_fields_none_within_distance(lookup):
    assert suggest_fields("zzzzzzzzzz", lookup) == []


def test_suggest_fields_sorted_by_distance_and_capped():
    lookup = FieldLookup.from_catalog([
        {"id": "a", "name": "abcd"},
        {"id": "b", "name": "abce"},
        {"id": "c", "name": "abc"},
        {"id": "d", "name": "abcf"},
        {"id": "e", "name": "xbcx"},
    ])
    assert suggest_fields("abc", lookup) == ["abc", "abcd", "abce"]


def test_suggest_fields_ties_keep_catalog_order():
    lookup = FieldLookup.from_catalog([
        {"id": "2", "name": "Tab"},
        {"id": "1", "name": "Tac"},
    ])
    assert suggest_fields("taa", lookup) == ["Tab", "Tac"]


def test_field_miss_message():
    assert field_miss_message("x", []) == "Field 'x' not found."
    assert field_miss_message("asignee", ["Assignee"]) == (
        "Field 'asignee' not found. Did you mean: Assignee?"
    )


# ===========================================================================
# resolve_fields
# ===========================================================================

def test_resolve_exact_id(lookup):
    resolved = resolve_fields(["customfield_10016"], lookup, on_miss=lambda n, s: None)
    assert resolved.query_fields == ["customfield_10016"]
    assert resolved.columns == [Column("Story Points", "customfield_10016")]


def test_resolve_friendly_name_case_insensitive(lookup):
    resolved = resolve_fields(["story POINTS", "key"], lookup, on_miss=lambda n, s: None)
    assert resolved.query_fields == ["customfield_10016", "issuekey"]
    assert resolved.columns == [Column("story POINTS", "customfield_10016"), Column("key", "issuekey")]


def test_resolve_trims_tokens(lookup):
    resolved = resolve_fields(["  status "], lookup, on_miss=lambda n, s: None)
    assert resolved.query_fields == ["status"]


def test_resolve_unknown_dropped_and_reported(lookup):
    misses = []
    resolved = resolve_fields(
        ["asignee", "status"], lookup, on_miss=lambda name, picks: misses.append((name, picks)),
    )
    assert resolved.query_fields == ["status"]
    assert [c.key for c in resolved.columns] == ["status"]
    assert misses == [("asignee", ["Assignee"])]


def test_resolve_all_unknown_falls_back_to_key_summary(lookup):
    misses = []
    resolved = resolve_fields(["nope1", "nope2"], lookup, on_miss=lambda n, s: misses.append(n))
    assert resolved.query_fields == ["key", "summary"]
    assert [c.key for c in resolved.columns] == ["key", "summary"]
    assert misses == ["nope1", "nope2"]


def test_resolve_allows_duplicates(lookup):
    resolved = resolve_fields(["status", "Status"], lookup, on_miss=lambda n, s: None)
    assert resolved.query_fields == ["status", "status"]


def test_resolve_default_reporter_prints_to_stderr(lookup, capsys):
    resolve_fields(["asignee"], lookup)
    err = capsys.readouterr().err
    assert "Field 'asignee' not found. Did you mean: Assignee?" in err


def test_parse_field_list():
    assert parse_field_list("key, summary,,status ") == ["key", "summary", "status"]


# ===========================================================================
# normalize_value / get_field_value
# ===========================================================================

@pytest.mark.parametrize("val, expected", [
    (None, ""),
    ("text", "text"),
    (3, "3"),
    (3.0, "3"),
    (2.5, "2.5"),
    (True, "true"),
    (False, "false"),
    ({"displayName": "Ada", "name": "ada"}, "Ada"),
    ({"name": "Done"}, "Done"),
    ({"value": "High"}, "High"),
    ({"title": "T"}, "T"),
    ({"label": "L"}, "L"),
    ({"key": "ABC-1"}, "ABC-1"),
    ({"value": "Parent", "child": {"value": "Child"}}, "Parent"),
    ({"child": {"value": "Child"}}, "Child"),
    ({"parent": {"key": "ABC-9"}}, "ABC-9"),
    ({"displayName": "", "name": "fallback"}, "fallback"),
    ([{"name": "a"}, None, {"name": "b"}], "a, b"),
    ({"value": 5}, "5"),
    ({"name": 2.0}, "2"),
    ({"value": True}, '{"value":true}'),
    ({"other": 1}, '{"other":1}'),
])
def test_normalize_value(val, expected):
    assert normalize_value(val) == expected


def test_get_field_value_key_aliases():
    issue = {"key": "ABC-1", "id": "10001", "fields": {"summary": "Hello"}}
    assert get_field_value(issue, "key") == "ABC-1"
    assert get_field_value(issue, "issuekey") == "ABC-1"
    assert get_field_value(issue, "id") == "10001"
    assert get_field_value(issue, "summary") == "Hello"
    assert get_field_value(issue, "missing") == ""


def test_get_field_value_key_falls_back_to_fields():
    assert get_field_value({"fields": {"key": "ABC-2"}}, "issuekey") == "ABC-2"


# ===========================================================================
# Listing helpers
# ===========================================================================

def test_sort_fields_system_before_custom(lookup):
    ids = ["customfield_10020", "status", "customfield_10016", "assignee", "zzz_unknown"]
    assert sort_fields_for_display(ids, lookup) == [
        "assignee", "status", "zzz_unknown", "customfield_10020", "customfield_10016",
    ]


def test_format_field_label(lookup):
    assert format_field_label("status", lookup) == '"Status" (status)'
    assert format_field_label("unknown", lookup) == "unknown"
