"""Entry point for the `jiri` command.

    jiri <command> [options] [args...]

Commands:
    projects            List projects visible to the authenticated user
    search "<JQL>"      Run a JQL search and list issues
    view <KEY>          Show a single issue

Credentials are read from JIRA_API_USERNAME, JIRA_API_TOKEN, and JIRA_SITE
before anything else happens; see jiri.config.
"""

import sys

from jiri import __version__
from jiri import colors
from jiri.argv import split_args
from jiri.client import JiraClient, JiraError
from jiri.commands import Context, build_cli, parse_invocation, render_help, run_invocation
from jiri.config import ConfigError, load_config
from jiri.formatter import TableOptions, table_options_from


def main(argv=None, environ=None):
    argv = sys.argv[1:] if argv is None else list(argv)
    err_color = colors.enabled(sys.stderr, environ)
    out_color = colors.enabled(sys.stdout, environ)

    try:
        config = load_config(environ)
    except ConfigError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    split = split_args(argv)
    if split.command is None and "--version" in split.flags:
        print(f"jiri {__version__}")
        return

    root = build_cli()
    invocation = parse_invocation(root, split)

    if invocation.help_requested:
        print(render_help(root, invocation.command, color=out_color))
        return

    if invocation.dispatch_error:
        print(colors.red(invocation.dispatch_error, on=err_color), file=sys.stderr)
        print(render_help(root, invocation.command, color=out_color))
        sys.exit(1)

    table = table_options_from(invocation.options, TableOptions(color=out_color))
    ctx = Context(client=JiraClient(config=config), table=table)

    try:
        run_invocation(invocation, ctx)
    except JiraError as e:
        print(f"Error: {e}", file=sys.stderr)
        for hint in e.hints:
            print(f"Hint: {hint}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
