"""Argument splitting and flag parsing for the jiri CLI.

Two pure functions do all the work and neither performs I/O:

    split_args(["--csv", "search", "project = X", "-f", "key"])
        -> ArgvSplit(command="search", flags=["--csv"],
                     positionals=["project = X", "-f", "key"])

    parse_flags(["-f", "key,summary", "project = X"], defs)
        -> ({"fields": "key,summary"}, ["project = X"])

Option values are either bool or str. Each OptionDef declares which kind it
expects: "bool" options are switches and never consume the following token,
"value" options take the inline `=value` or the next non-dash token.
"""

from dataclasses import dataclass, field, replace

OPTION_KINDS = ("bool", "value")

FALSE_STRINGS = {"false", "0", "no", "off"}


@dataclass(frozen=True)
class ArgvSplit:
    command: str | None
    flags: list = field(default_factory=list)
    positionals: list = field(default_factory=list)


@dataclass(frozen=True)
class OptionDef:
    """A recognised command-line option.

    Attributes:
        flag: Primary token, e.g. "--fields". May carry aliases separated by
            "|" ("--fields|-f"); expand_option_defs() splits them out.
        description: One-line help text.
        aliases: Alternate tokens, e.g. ("-f",).
        kind: "bool" for switches, "value" for options that take an argument.
        default: Value used when the option is present without a value.
    """
    flag: str
    description: str = ""
    aliases: tuple = ()
    kind: str = "bool"
    default: object = None

    @property
    def key(self):
        return self.flag.lstrip("-")

    @property
    def tokens(self):
        return (self.flag, *self.aliases)


def split_args(argv):
    """Partition argv around the first token that does not start with '-'.

    Returns:
        ArgvSplit. If every token is dash-prefixed, command is None and all
        tokens are leading flags.
    """
    argv = list(argv)
    for idx, arg in enumerate(argv):
        if not arg.startswith("-"):
            return ArgvSplit(command=arg, flags=argv[:idx], positionals=argv[idx + 1:])
    return ArgvSplit(command=None, flags=argv, positionals=[])


def expand_option_defs(defs):
    """Split "--flag|-f" style primary flags into flag + aliases."""
    expanded = []
    for d in defs:
        if d.aliases or "|" not in d.flag:
            expanded.append(d)
            continue
        parts = [p for p in d.flag.split("|") if p]
        expanded.append(replace(d, flag=parts[0], aliases=tuple(parts[1:])))
    return expanded


def merge_option_defs(*groups):
    """Merge option definition groups into one list, first registered wins.

    A later definition loses any alias already claimed by an earlier one; a
    later definition whose primary flag is already claimed is dropped.

    Raises:
        ValueError if a token does not start with '-' or a kind is unknown.
    """
    merged = []
    claimed = set()
    for group in groups:
        for d in expand_option_defs(group):
            for token in d.tokens:
                if not token.startswith("-"):
                    raise ValueError(f"Option token '{token}' must start with '-'.")
            if d.kind not in OPTION_KINDS:
                raise ValueError(f"Option '{d.flag}' has unknown kind '{d.kind}'.")
            if d.flag in claimed:
                continue
            aliases = tuple(a for a in d.aliases if a not in claimed and a != d.flag)
            if aliases != d.aliases:
                d = replace(d, aliases=aliases)
            claimed.update(d.tokens)
            merged.append(d)
    return merged


def find_option(defs, token):
    """Return the first definition whose flag or alias equals token."""
    for d in defs:
        if token == d.flag or token in d.aliases:
            return d
    return None


def _coerce_bool(text):
    return text.strip().lower() not in FALSE_STRINGS


def parse_flags(args, defs):
    """Parse flags out of a mixed token stream.

    Args:
        args: Tokens (flags and positionals interleaved).
        defs: OptionDefs to recognise. "a|b" flags are expanded here.

    Returns:
        (options, rest): options maps each matched option's key to its value
        (later occurrences overwrite earlier ones); rest holds every token that
        was not consumed, including unrecognised flags, in original order.
    """
    defs = expand_option_defs(defs)
    options = {}
    rest = []

    i = 0
    while i < len(args):
        arg = args[i]
        i += 1
        if not arg.startswith("-"):
            rest.append(arg)
            continue

        flag, sep, inline = arg.partition("=")
        d = find_option(defs, flag)
        if d is None:
            rest.append(arg)
            continue

        if sep:
            value = _coerce_bool(inline) if d.kind == "bool" else inline
        elif d.kind == "value" and i < len(args) and not args[i].startswith("-"):
            value = args[i]
            i += 1
        else:
            value = d.default if d.default is not None else True

        options[d.key] = value

    return options, rest
