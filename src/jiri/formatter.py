"""Render string matrices as bordered tables, padded plain tables, or CSV.

The first row of a matrix is the header. Which mode is used, and whether the
header is shown, comes from an immutable TableOptions value:

    opts = TableOptions(plain=True)
    print(format_table([["KEY", "NAME"], ["A-1", "Widget"]], opts))
    print(format_table(rows, opts.merge(header=False)))
"""

from dataclasses import dataclass, replace

from jiri.colors import BOLD, DIM, style


@dataclass(frozen=True)
class TableOptions:
    """Output options for format_table.

    csv and plain are mutually exclusive in practice; csv takes priority.
    color enables ANSI styling of the header row.
    """
    csv: bool = False
    plain: bool = False
    header: bool = True
    color: bool = False

    def merge(self, **overrides):
        """Return a copy with overrides applied. None values are ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def table_options_from(options, base=None):
    """Build TableOptions from a parsed option map.

    Only options the user actually passed change the result: --csv, --plain,
    and --no-header. Any occurrence of --no-header hides the header, whether
    bare (parsed as False) or with an inline value such as --no-header=true.
    """
    base = base or TableOptions()
    overrides = {}
    if "csv" in options:
        overrides["csv"] = bool(options["csv"])
    if "plain" in options:
        overrides["plain"] = bool(options["plain"])
    if "no-header" in options:
        overrides["header"] = False
    return base.merge(**overrides)


# --- CSV ---

def escape_csv_cell(value):
    """Quote a CSV field if it contains a comma, double quote, or newline."""
    text = "" if value is None else str(value)
    if any(ch in text for ch in (",", '"', "\n")):
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv(rows):
    return "\n".join(",".join(escape_csv_cell(c) for c in row) for row in rows)


# --- Tables ---

def _pad_rows(rows, col_count):
    return [[("" if c is None else str(c)) for c in row] + [""] * (col_count - len(row)) for row in rows]


def column_widths(rows, col_count):
    widths = [0] * col_count
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    return widths


def _render_cells(row, widths, is_header, opts):
    cells = []
    for cell, width in zip(row, widths):
        content = f" {cell:<{width}} "
        if is_header:
            content = style(content, BOLD, DIM, on=opts.color)
        cells.append(content)
    return cells


def format_table(rows, opts=None):
    """Render rows according to opts.

    Args:
        rows: List of rows, each a list of strings. The first row is the header.
        opts: TableOptions (default: bordered table with header).

    Returns:
        The rendered table, or "" when there is nothing to show.
    """
    opts = opts or TableOptions()
    if not rows:
        return ""

    col_count = max(len(r) for r in rows)
    shown = rows if opts.header else rows[1:]
    if not shown or col_count == 0:
        return ""

    if opts.csv:
        return to_csv(shown)

    shown = _pad_rows(shown, col_count)
    widths = column_widths(shown, col_count)
    header_row, body = (shown[0], shown[1:]) if opts.header else (None, shown)

    if opts.plain:
        lines = []
        if header_row is not None:
            lines.append(" ".join(_render_cells(header_row, widths, True, opts)))
        lines.extend(" ".join(_render_cells(r, widths, False, opts)) for r in body)
        return "\n".join(lines)

    def rule(left, mid, right):
        return left + mid.join("─" * (w + 2) for w in widths) + right

    lines = [rule("┌", "┬", "┐")]
    if header_row is not None:
        lines.append("│" + "│".join(_render_cells(header_row, widths, True, opts)) + "│")
        lines.append(rule("├", "┼", "┤"))
    lines.extend("│" + "│".join(_render_cells(r, widths, False, opts)) + "│" for r in body)
    lines.append(rule("└", "┴", "┘"))
    return "\n".join(lines)
