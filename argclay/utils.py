"""
Argclay utilities (internal helpers shared by the builders and renderers)

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- normalize(tokens)
  • Turn user-declared flag spellings into the exact tokens matched on the command line.

- quote(text) / pad(text, width) / usage(path, *parts) / columns(rows)
  • Formatting primitives for messages, usage lines and aligned help columns.

- wants_help(args, skip) / tokenize(argv)
  • Token-level helpers shared by Command and CommandGroup.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> normalize(["a", "age", "-x", ""])
    ('-a', '--age', '-x')
    >>> quote("it's")
    "'it\\\\'s'"
"""
import functools
import shlex
import sys
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Used for descriptions and other builder options where None would be
    ambiguous. A single instance, Unset, is exposed.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0 or "" are preserved as-is; only Unset is replaced.
    """
    return object if object is not Unset else default


def normalize(tokens, /):
    """
    Normalize flag spellings into command-line tokens.

    rules
    - empty spellings are dropped.
    - a spelling that already starts with '-' is kept verbatim ("-x", "--s", "---three").
    - a bare single character becomes a short flag ("a" -> "-a").
    - a bare longer word becomes a long flag ("age" -> "--age").

    order is preserved and duplicates are kept (callers decide how to report them).
    """
    if isinstance(tokens, str):
        raise TypeError("normalize() argument must be an iterable of strings, not a string")
    normalized = []
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("flag names must be strings, not %s" % type(token).__name__)
        if not token:
            continue
        if token.startswith("-"):
            normalized.append(token)
        elif len(token) > 1:
            normalized.append("--" + token)
        else:
            normalized.append("-" + token)
    return tuple(normalized)


def quote(text, /):
    """Wrap raw user input in single quotes, escaping embedded single quotes."""
    return "'%s'" % text.replace("'", "\\'")


def pad(text, width, /):
    """Right-pad text with spaces up to width (never truncates)."""
    return text + " " * max(0, width - len(text))


HELP_TOKENS = frozenset({"-h", "--help"})


def wants_help(args, skip=0, /):
    """True when any token from skip onward trims and lower-cases to -h or --help."""
    return any(token.strip().lower() in HELP_TOKENS for token in args[skip:])


def tokenize(argv, /):
    """Host argument vector: sys.argv[1:] for None, shell-style split for a string."""
    if argv is None:
        return sys.argv[1:]
    if isinstance(argv, str):
        return shlex.split(argv)
    return list(argv)


def usage(path, /, *parts):
    """The USAGE block: command path followed by the argument placeholders."""
    return "USAGE:\n\t%s" % " ".join([*path, *parts])


def columns(rows, /):
    """Render (label, description) rows with descriptions aligned after the longest label."""
    width = max((len(label) for label, _ in rows), default=0)
    lines = []
    for label, description in rows:
        if description:
            lines.append("\t%s  %s" % (pad(label, width), description))
        else:
            lines.append("\t%s" % label)
    return "\n".join(lines)


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "normalize",
    "quote",
    "pad",
    "HELP_TOKENS",
    "wants_help",
    "tokenize",
    "usage",
    "columns",
)
