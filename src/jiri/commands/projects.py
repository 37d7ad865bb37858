"""`jiri projects` — list projects visible to the authenticated user."""

from jiri.commands import CommandNode
from jiri.formatter import format_table

HEADERS = ["KEY", "NAME"]


def project_rows(data):
    """Build table rows (header first) from a /project/search response."""
    rows = [list(HEADERS)]
    for p in (data or {}).get("values") or []:
        rows.append([str(p.get("key") or ""), str(p.get("name") or "")])
    return rows


def run(args, options, ctx):
    data = ctx.client.projects()
    print(format_table(project_rows(data), ctx.table))


def projects_command():
    return CommandNode(
        name="projects",
        description="List projects visible to the authenticated user.",
        usage="jiri projects [options]",
        handler=run,
    )
