"""Command tree, dispatch, and help text for the jiri CLI.

The tree is built once at startup: a root node carrying the global output
flags, with one child per subcommand. parse_invocation() resolves an
ArgvSplit against the tree into a ParsedInvocation; exactly one of help,
dispatch error, or handler run follows from it.

Subcommands:
    jiri projects            — List visible projects
    jiri search "<JQL>"      — Run a JQL search
    jiri view <KEY>          — Show one issue
    jiri completions <shell> — Print a shell completion script
"""

from dataclasses import dataclass, field

from jiri.argv import OptionDef, expand_option_defs, merge_option_defs, parse_flags
from jiri.colors import bold, cyan, green, yellow

HELP_FLAGS = ("--help", "-h")
HELP_COMMAND = "help"

GLOBAL_FLAGS = [
    OptionDef("--csv", "Output comma-separated values (no borders)."),
    OptionDef("--plain", "No borders, padded columns."),
    OptionDef("--no-header", "Omit header row.", default=False),
    OptionDef("--help|-h", "Show help."),
]


@dataclass
class CommandNode:
    """One node of the command tree. The root has name None."""
    name: str | None
    description: str
    usage: str
    flags: list = field(default_factory=list)
    flag_header: str | None = None
    handler: object = None
    children: list = field(default_factory=list)

    def find(self, name):
        for child in self.children:
            if child.name == name:
                return child
        return None


@dataclass
class ParsedInvocation:
    help_requested: bool = False
    dispatch_error: str | None = None
    command: CommandNode | None = None
    options: dict = field(default_factory=dict)
    args: list = field(default_factory=list)


@dataclass(frozen=True)
class Context:
    """What a handler needs besides its arguments: the API client and table options."""
    client: object
    table: object


def build_cli():
    """Build the root command node with all subcommands attached."""
    from jiri.commands.completions import completions_command
    from jiri.commands.projects import projects_command
    from jiri.commands.search import search_command
    from jiri.commands.view import view_command

    return CommandNode(
        name=None,
        description="Minimal Jira CLI",
        usage="jiri <command> [options]",
        flags=list(GLOBAL_FLAGS),
        flag_header="Output options (table/CSV)",
        children=[projects_command(), search_command(), view_command(), completions_command()],
    )


# --- Dispatch ---

def parse_invocation(root, split):
    """Resolve an ArgvSplit against the command tree.

    Returns:
        ParsedInvocation with exactly one of help_requested, dispatch_error,
        or a runnable command set.
    """
    name = split.command

    if name is None:
        if any(f in HELP_FLAGS for f in split.flags):
            return ParsedInvocation(help_requested=True)
        return ParsedInvocation(dispatch_error="Unknown command.")

    if name == HELP_COMMAND:
        target = root.find(split.positionals[0]) if split.positionals else None
        return ParsedInvocation(help_requested=True, command=target)

    cmd = root.find(name)
    if cmd is None or cmd.handler is None:
        return ParsedInvocation(dispatch_error=f"Unknown command '{name}'.")

    defs = merge_option_defs(root.flags, cmd.flags)
    options, rest = parse_flags(split.flags + split.positionals, defs)

    if options.get("help"):
        return ParsedInvocation(help_requested=True, command=cmd, options=options)

    unknown = next((a for a in rest if a.startswith("-")), None)
    if unknown is not None:
        return ParsedInvocation(
            dispatch_error=f"Unknown option '{unknown}'.", command=cmd, options=options,
        )

    return ParsedInvocation(command=cmd, options=options, args=rest)


def run_invocation(invocation, ctx):
    """Invoke the matched handler. Only valid when there is no error or help."""
    if invocation.help_requested or invocation.dispatch_error or invocation.command is None:
        raise ValueError("Invocation is not runnable.")
    return invocation.command.handler(invocation.args, invocation.options, ctx)


# --- Help ---

def render_option_list(defs, header=None, color=False):
    rows = []
    for d in expand_option_defs(defs):
        flags = ", ".join(d.tokens)
        if d.kind == "value":
            flags += " <value>"
        rows.append(f"  {yellow(f'{flags:<14}', on=color)} {d.description}")
    if not rows:
        return ""
    title = f"{bold(header, on=color)}:\n" if header else ""
    return title + "\n".join(rows)


def render_help(root, node=None, color=False):
    """Render help text for the root or one subcommand."""
    node = node or root
    suffix = f" {node.name}" if node.name else " - minimal Jira CLI"
    title = bold(cyan(f"jiri{suffix}", on=color), on=color)

    blocks = [title, f"{bold('Usage', on=color)}:\n  {node.usage or root.usage}"]

    if node is root and root.children:
        lines = [f"  {green(f'{c.name:<10}', on=color)} {c.description}" for c in root.children]
        blocks.append(f"{bold('Commands', on=color)}:\n" + "\n".join(lines))

    if node.description:
        blocks.append(f"{bold('Description', on=color)}:\n  {node.description}")

    if node.flags:
        header = node.flag_header or f"{(node.name or 'global').capitalize()} Flags"
        blocks.append(render_option_list(node.flags, header, color=color))
    if node is not root and root.flags:
        blocks.append(render_option_list(root.flags, root.flag_header or "Global Flags", color=color))

    return "\n\n".join(b for b in blocks if b) + "\n"
