"""
Argclay faults (errors, warnings, help short-circuit) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse-time outcome.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- ParseError: a raw token could not be converted by an ArgumentType.
- CommandError: a builder was misused (fatal, programming error).
- CommandException: base for parse-time outcomes that know how to render and
  surface themselves (ArgumentError, HelpRequest).
- CommandWarning: base for builder diagnostics emitted through the warnings module.
- trigger(): central entry point used by the host wrapper to surface an outcome.

Exit contract
- ArgumentError: message to standard error, exit status 1.
- HelpRequest: message to standard output, exit status 0.

Styling
- Rendering is plain by default and tabs are kept, so the printed text is the
  message followed by a newline.
  The host application can provide a __styles__ mapping in __main__ with
  "error-message" and/or "help-message" rich styles.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console
from rich.segment import Segment

stderr = Console(stderr=True, highlight=False, soft_wrap=True)
stdout = Console(highlight=False, soft_wrap=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - help (1000x)
      • HELP_REQUESTED
    - routing (1110x)
      • UNKNOWN_COMMAND, MISSING_COMMAND
    - switches (named arguments and flags) (1111x)
      • UNKNOWN_FLAG, MISSING_VALUE, MISSING_NAMED
    - values (positionals and conversions) (1112x)
      • MISSING_POSITIONAL, INVALID_VALUE
    - warnings (121xx)
      • DUPLICATE_FLAG
    """
    # --- help (10xxx) ---
    HELP_REQUESTED     = 10001

    # --- routing errors (1110x) ---
    UNKNOWN_COMMAND    = 11101
    MISSING_COMMAND    = 11103

    # --- switch errors (1111x) ---
    UNKNOWN_FLAG       = 11112
    MISSING_VALUE      = 11117
    MISSING_NAMED      = 11119

    # --- value errors (1112x) ---
    MISSING_POSITIONAL = 11121
    INVALID_VALUE      = 11124

    # --- warnings (12xxx) ---
    DUPLICATE_FLAG     = 12115


class ParseError(ValueError):
    """A raw token is not a valid value of its argument type."""

    def __init__(self, message, /):
        super().__init__(message)
        self.message = message


class CommandError(Exception):
    """Invalid builder sequence (raised while declaring, never while parsing)."""


def _styles():
    return defaultdict(str, getattr(__import__("__main__"), "__styles__", {}))


class Verbatim:
    """renderable writing its text unchanged (tabs included) in a single style."""
    __slots__ = ("text", "style")

    def __init__(self, text, style=""):
        self.text = text
        self.style = style

    def __rich_console__(self, console, options):
        yield Segment(self.text, console.get_style(self.style) if self.style else None)
        yield Segment.line()


class CommandException(Exception):
    """
    base type of parse-time outcomes.

    carries a ready-to-display message and read-only options (at least "code").
    subclasses decide the console and the exit status used by __trigger__.
    """
    style = ""
    channel = None
    status = 1

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        return self.message

    def __rich__(self):
        return Verbatim(self.message, _styles()[self.style])

    def __trigger__(self):
        # resolved at call time so tests can swap the module consoles
        console = getattr(sys.modules[__name__], self.channel)
        console.print(self)
        sys.exit(self.status)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ArgumentError(CommandException):
    """The user input does not match the command specification."""
    style = "error-message"
    channel = "stderr"
    status = 1


class HelpRequest(CommandException):
    """-h/--help was given; the message is the rendered help."""
    style = "help-message"
    channel = "stdout"
    status = 0

    def __init__(self, message, /, **options):
        super().__init__(message, **{"code": FaultCode.HELP_REQUESTED} | options)


class CommandWarning(Warning):
    """base type of builder diagnostics."""
    code = None

    def __init__(self, message, /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)


class DuplicateFlagWarning(CommandWarning):
    """A flag token was registered twice on the same command."""
    code = FaultCode.DUPLICATE_FLAG


def trigger(fault, /, **options):
    """
    surface a parse-time outcome with the given options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace() before triggering.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ParseError",
    "CommandError",
    "CommandException",
    "ArgumentError",
    "HelpRequest",
    "CommandWarning",
    "DuplicateFlagWarning",
    "trigger",
)
