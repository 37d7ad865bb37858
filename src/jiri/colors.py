"""ANSI styling for terminal output.

Styling is only applied when the target stream is a terminal and NO_COLOR is
unset; callers decide once and pass the result down as a plain bool.
"""

import os
import sys

BOLD    = "\033[1m"
DIM     = "\033[2m"
RED     = "\033[31m"
GREEN   = "\033[32m"
YELLOW  = "\033[33m"
CYAN    = "\033[36m"
RESET   = "\033[0m"


def enabled(stream=None, environ=None):
    """Return True if ANSI codes should be written to `stream`."""
    stream = stream if stream is not None else sys.stdout
    environ = environ if environ is not None else os.environ
    if "NO_COLOR" in environ:
        return False
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def style(text, *codes, on=True):
    if not on or not codes:
        return text
    return "".join(codes) + text + RESET


def bold(text, on=True):
    return style(text, BOLD, on=on)


def red(text, on=True):
    return style(text, RED, on=on)


def yellow(text, on=True):
    return style(text, YELLOW, on=on)


def green(text, on=True):
    return style(text, GREEN, on=on)


def cyan(text, on=True):
    return style(text, CYAN, on=on)
