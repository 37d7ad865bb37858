"""`jiri search "<JQL>"` — run a JQL search and list issues.

Usage:
    jiri search "assignee = currentUser()"
    jiri search "project = ABC" --fields key,status,assignee --limit 250
    jiri search "project = ABC" --get-fields
"""

import sys

from jiri.argv import OptionDef
from jiri.client import DEFAULT_LIMIT
from jiri.colors import red
from jiri.commands import CommandNode
from jiri.fields import (
    DEFAULT_FIELDS,
    format_field_label,
    get_field_value,
    parse_field_list,
    print_field_miss,
    resolve_fields,
    sort_fields_for_display,
)
from jiri.formatter import format_table

ALL_FIELDS = "*all"

SEARCH_FLAGS = [
    OptionDef("--fields|-f", "Comma-separated fields to display (default: key,summary).", kind="value"),
    OptionDef("--get-fields", "Show available fields on the first returned issue."),
    OptionDef("--limit", f"Maximum number of issues to fetch (default: {DEFAULT_LIMIT}).", kind="value"),
]

JQL_REQUIRED = 'JQL is required. Example: jiri search "assignee = currentUser()"'


def _fail(message, ctx):
    print(red(message, on=ctx.table.color), file=sys.stderr)
    sys.exit(1)


def parse_limit(value):
    """Validate a --limit value. Returns an int, or None if invalid."""
    if value is None:
        return DEFAULT_LIMIT
    if isinstance(value, bool):
        return None
    try:
        limit = int(value)
    except ValueError:
        return None
    return limit if limit > 0 else None


def requested_fields(options):
    value = options.get("fields")
    if isinstance(value, str):
        return parse_field_list(value)
    return list(DEFAULT_FIELDS)


def issue_rows(issues, columns):
    """Build table rows (upper-cased header first) for the resolved columns."""
    rows = [[c.header.upper() for c in columns]]
    for issue in issues:
        rows.append([get_field_value(issue, c.key) for c in columns])
    return rows


def field_listing_rows(issue, lookup):
    """Rows for --get-fields: one label per field present on the issue."""
    field_ids = list((issue or {}).get("fields") or {})
    return [["FIELD"]] + [[format_field_label(f, lookup)] for f in sort_fields_for_display(field_ids, lookup)]


def run(args, options, ctx):
    jql = " ".join(args).strip()
    if not jql:
        _fail(JQL_REQUIRED, ctx)

    limit = parse_limit(options.get("limit"))
    if limit is None:
        _fail("Error: --limit must be a positive integer.", ctx)

    client = ctx.client
    lookup = client.field_lookup()

    if options.get("get-fields"):
        page = client.search(jql, [ALL_FIELDS], max_results=1)
        issues = page.get("issues") or []
        if not issues:
            print("No issues matched; cannot list fields.", file=sys.stderr)
            return
        print(format_table(field_listing_rows(issues[0], lookup), ctx.table.merge(header=False)))
        return

    resolved = resolve_fields(
        requested_fields(options),
        lookup,
        on_miss=lambda name, picks: print_field_miss(name, picks, color=ctx.table.color),
    )
    issues, more_available = client.search_all(jql, resolved.query_fields, limit=limit)
    print(format_table(issue_rows(issues, resolved.columns), ctx.table))

    if more_available and len(issues) >= limit:
        print(
            f"Warning: displayed {len(issues)} issues (limit {limit}). "
            "More results are available; rerun with a higher --limit to see more.",
            file=sys.stderr,
        )


def search_command():
    return CommandNode(
        name="search",
        description="Run a JQL search and list issues.",
        usage='jiri search "<JQL>" [options]',
        flags=list(SEARCH_FLAGS),
        handler=run,
    )
