"""Tests for jiri.formatter — bordered, plain, and CSV rendering."""

import pytest

from jiri.argv import split_args
from jiri.commands import build_cli, parse_invocation
from jiri.formatter import (
    TableOptions,
    column_widths,
    escape_csv_cell,
    format_table,
    table_options_from,
    to_csv,
)


ROWS = [["KEY", "NAME"], ["A-1", "Widget"]]


# --- bordered ---

def test_bordered_table_shape():
    text = format_table(ROWS, TableOptions())
    lines = text.split("\n")
    assert len(lines) == 5
    assert lines[0] == "┌─────┬────────┐"
    assert lines[1] == "│ KEY │ NAME   │"
    assert lines[2] == "├─────┼────────┤"
    assert lines[3] == "│ A-1 │ Widget │"
    assert lines[4] == "└─────┴────────┘"


def test_bordered_cells_padded_to_column_width():
    text = format_table([["K", "NAME"], ["LONGER", "x"]], TableOptions())
    for line in text.split("\n")[1:4:2]:
        cells = line.strip("│").split("│")
        assert [len(c) for c in cells] == [8, 6]


def test_bordered_no_header():
    text = format_table(ROWS, TableOptions(header=False))
    lines = text.split("\n")
    assert len(lines) == 3
    assert "KEY" not in text
    assert lines[1] == "│ A-1 │ Widget │"
    assert "├" not in text


def test_bordered_header_styled_only_with_color():
    plain = format_table(ROWS, TableOptions())
    colored = format_table(ROWS, TableOptions(color=True))
    assert "\033[" not in plain
    assert "\033[1m\033[2m KEY \033[0m" in colored
    assert "\033[" not in colored.split("\n")[3]


def test_short_rows_padded_with_empty_cells():
    text = format_table([["A", "B", "C"], ["1"]], TableOptions())
    assert text.split("\n")[3] == "│ 1 │   │   │"


# --- plain ---

def test_plain_table():
    text = format_table(ROWS, TableOptions(plain=True))
    assert text == " KEY   NAME   \n A-1   Widget "
    assert "│" not in text


def test_plain_table_no_header():
    text = format_table(ROWS, TableOptions(plain=True, header=False))
    assert text == " A-1   Widget "


def test_widths_ignore_hidden_header():
    text = format_table([["A-VERY-LONG-HEADER"], ["x"]], TableOptions(plain=True, header=False))
    assert text == " x "


# --- csv ---

def test_csv_output():
    assert format_table(ROWS, TableOptions(csv=True)) == "KEY,NAME\nA-1,Widget"


def test_csv_no_header():
    assert format_table(ROWS, TableOptions(csv=True, header=False)) == "A-1,Widget"


def test_csv_takes_priority_over_plain():
    assert format_table(ROWS, TableOptions(csv=True, plain=True)) == "KEY,NAME\nA-1,Widget"


def test_escape_csv_cell():
    assert escape_csv_cell("a,b") == '"a,b"'
    assert escape_csv_cell('say "hi"') == '"say ""hi"""'
    assert escape_csv_cell("line1\nline2") == '"line1\nline2"'
    assert escape_csv_cell("plain") == "plain"
    assert escape_csv_cell(None) == ""


def test_to_csv_never_colored():
    assert to_csv([["K"], ["v,w"]]) == 'K\n"v,w"'


# --- empty input ---

def test_empty_rows():
    assert format_table([], TableOptions()) == ""
    assert format_table([], TableOptions(csv=True)) == ""


def test_header_only_without_header():
    for opts in (TableOptions(header=False), TableOptions(plain=True, header=False), TableOptions(csv=True, header=False)):
        assert format_table([["KEY"]], opts) == ""


def test_zero_columns():
    assert format_table([[]], TableOptions()) == ""


# --- widths / options ---

def test_column_widths():
    assert column_widths([["ab", "c"], ["d", "efgh"]], 2) == [2, 4]


def test_table_options_merge_is_copy():
    base = TableOptions()
    merged = base.merge(header=False)
    assert base.header is True
    assert merged.header is False
    assert base.merge(header=None) is base


def test_table_options_from_explicit_flags_only():
    base = TableOptions(plain=True, color=True)
    opts = table_options_from({"csv": True, "no-header": False}, base)
    assert opts == TableOptions(csv=True, plain=True, header=False, color=True)


@pytest.mark.parametrize("argv", [
    ["projects", "--no-header"],
    ["--no-header", "projects"],
    ["projects", "--no-header=true"],
    ["projects", "--no-header=yes"],
    ["projects", "--no-header=1"],
])
def test_table_options_from_no_header_always_hides_header(argv):
    inv = parse_invocation(build_cli(), split_args(argv))
    assert inv.dispatch_error is None
    assert table_options_from(inv.options).header is False


def test_table_options_from_empty_keeps_base():
    base = TableOptions(plain=True)
    assert table_options_from({}, base) == base
