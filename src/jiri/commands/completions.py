"""`jiri completions <shell>` — print a shell completion script.

The script is generated from the command tree, so new commands and flags
are picked up without editing it:

    jiri completions bash > /etc/bash_completion.d/jiri
    jiri completions zsh > "${fpath[1]}/_jiri"
    jiri completions fish > ~/.config/fish/completions/jiri.fish
"""

import sys

from jiri.argv import expand_option_defs
from jiri.colors import red
from jiri.commands import HELP_COMMAND, CommandNode, build_cli

PROG = "jiri"


def _tokens(defs):
    return [t for d in expand_option_defs(defs) for t in d.tokens]


def _command_names(root):
    return [c.name for c in root.children] + [HELP_COMMAND]


# --- bash ---

def bash_script(root):
    global_words = " ".join(_command_names(root) + _tokens(root.flags))
    cases = []
    for cmd in root.children:
        words = " ".join(_tokens(cmd.flags) + _tokens(root.flags))
        cases.append(f'        {cmd.name}) opts="{words}" ;;')
    cases.append(f'        {HELP_COMMAND}) opts="{" ".join(c.name for c in root.children)}" ;;')
    cases.append(f'        *) opts="{global_words}" ;;')
    return "\n".join([
        f"_{PROG}() {{",
        "    local cur cmd opts w",
        '    cur="${COMP_WORDS[COMP_CWORD]}"',
        '    cmd=""',
        '    for w in "${COMP_WORDS[@]:1:COMP_CWORD-1}"; do',
        '        case "$w" in -*) ;; *) cmd="$w"; break ;; esac',
        "    done",
        '    case "$cmd" in',
        *cases,
        "    esac",
        '    COMPREPLY=( $(compgen -W "$opts" -- "$cur") )',
        "}",
        f"complete -F _{PROG} {PROG}",
        "",
    ])


# --- zsh ---

def _zsh_describe(text):
    return text.replace("'", "'\\''").replace(":", "\\:")


def zsh_script(root):
    commands = [f"        '{c.name}:{_zsh_describe(c.description)}'" for c in root.children]
    commands.append(f"        '{HELP_COMMAND}:Show help for a command'")
    cases = []
    for cmd in root.children:
        words = " ".join(_tokens(cmd.flags) + _tokens(root.flags))
        cases.append(f"        {cmd.name}) compadd -- {words} ;;")
    cases.append(f"        {HELP_COMMAND}) _describe 'command' commands ;;")
    return "\n".join([
        f"#compdef {PROG}",
        "",
        f"_{PROG}() {{",
        "    local -a commands",
        "    commands=(",
        *commands,
        "    )",
        "    if (( CURRENT == 2 )); then",
        "        _describe 'command' commands",
        f"        compadd -- {' '.join(_tokens(root.flags))}",
        "        return",
        "    fi",
        '    case "${words[2]}" in',
        *cases,
        "    esac",
        "}",
        "",
        f'_{PROG} "$@"',
        "",
    ])


# --- fish ---

def _fish_quote(text):
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _fish_option(defs, condition=None):
    lines = []
    for d in expand_option_defs(defs):
        parts = [f"complete -c {PROG}"]
        if condition:
            parts.append(f"-n {_fish_quote(condition)}")
        for token in d.tokens:
            if token.startswith("--"):
                parts.append(f"-l {token[2:]}")
            else:
                parts.append(f"-s {token[1:]}")
        if d.kind == "value":
            parts.append("-r")
        if d.description:
            parts.append(f"-d {_fish_quote(d.description)}")
        lines.append(" ".join(parts))
    return lines


def fish_script(root):
    lines = [f"complete -c {PROG} -f"]
    for cmd in root.children:
        lines.append(
            f"complete -c {PROG} -n '__fish_use_subcommand' -a {cmd.name} -d {_fish_quote(cmd.description)}"
        )
    lines.append(f"complete -c {PROG} -n '__fish_use_subcommand' -a {HELP_COMMAND} -d 'Show help for a command'")
    lines.extend(_fish_option(root.flags))
    for cmd in root.children:
        lines.extend(_fish_option(cmd.flags, f"__fish_seen_subcommand_from {cmd.name}"))
    return "\n".join(lines) + "\n"


SHELLS = {
    "bash": bash_script,
    "zsh": zsh_script,
    "fish": fish_script,
}


def run(args, options, ctx):
    shell = args[0] if args else None
    if shell not in SHELLS:
        choices = "|".join(SHELLS)
        print(red(f"Shell is required. Example: jiri completions <{choices}>", on=ctx.table.color),
              file=sys.stderr)
        sys.exit(1)
    sys.stdout.write(SHELLS[shell](build_cli()))


def completions_command():
    return CommandNode(
        name="completions",
        description="Print a shell completion script (bash, zsh, fish).",
        usage="jiri completions <bash|zsh|fish>",
        handler=run,
    )
