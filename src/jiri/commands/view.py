"""`jiri view <KEY>` — show a single issue's details and recent comments."""

import sys
import textwrap

from jiri.adf import to_plain_text
from jiri.colors import bold, red
from jiri.commands import CommandNode

DESCRIPTION_WIDTH = 76
COMMENT_WIDTH = 72
RECENT_COMMENTS = 5


def _name(fields, attr, key="name", default="?"):
    val = fields.get(attr)
    if isinstance(val, dict) and val.get(key):
        return val[key]
    return default


def _wrap(text, width, indent):
    lines = []
    for para in text.splitlines():
        wrapped = textwrap.wrap(para, width) if para.strip() else [""]
        lines.extend(f"{indent}{w}".rstrip() for w in wrapped)
    while lines and not lines[-1]:
        lines.pop()
    return lines


def format_issue(issue, color=False):
    """Render an issue (from GET /issue/<key>) as a list of output lines."""
    fields = issue.get("fields") or {}
    key = issue.get("key") or "?"
    summary = fields.get("summary") or "(no summary)"

    lines = [
        f"  {bold(key, on=color)} — {summary}",
        "",
        f"  Type:       {_name(fields, 'issuetype')}",
        f"  Status:     {_name(fields, 'status')}",
        f"  Priority:   {_name(fields, 'priority')}",
        f"  Assignee:   {_name(fields, 'assignee', 'displayName', 'Unassigned')}",
        f"  Reporter:   {_name(fields, 'reporter', 'displayName')}",
        f"  Created:    {fields.get('created') or '?'}",
        f"  Updated:    {fields.get('updated') or '?'}",
    ]

    description = to_plain_text(fields.get("description")).strip()
    if description:
        lines += ["", "  Description:"]
        lines += _wrap(description, DESCRIPTION_WIDTH, "    ")

    comments = ((fields.get("comment") or {}).get("comments")) or []
    if comments:
        recent = comments[-RECENT_COMMENTS:]
        lines += ["", f"  Comments ({len(comments)} total, showing last {len(recent)}):"]
        for c in recent:
            author = (c.get("author") or {}).get("displayName") or "?"
            lines += ["", f"    {author} ({c.get('created') or '?'})"]
            lines += _wrap(to_plain_text(c.get("body")).strip(), COMMENT_WIDTH, "      ")

    return lines


def run(args, options, ctx):
    if not args:
        print(red("Issue key is required. Example: jiri view ABC-123", on=ctx.table.color), file=sys.stderr)
        sys.exit(1)

    issue = ctx.client.get_issue(args[0])
    print("\n".join(format_issue(issue, color=ctx.table.color)))


def view_command():
    return CommandNode(
        name="view",
        description="Show a single issue's details and recent comments.",
        usage="jiri view <KEY>",
        handler=run,
    )
