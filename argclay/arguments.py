r"""
Argclay argument types and argument specifications.

Overview
- Value types
  • ArgumentType[_T]: immutable pair of a converter (raw string -> value) and an
    upper-cased type name shown in help and error messages.
  • Built-ins: string, number, integer, boolean, date (process-wide constants)
    and choice(typename, choices) (a new instance per call).

- Specs (built by Command, never by users)
  • Positional: value taken by position (required or the single optional one).
  • Named: value taken from the token following one of its flags.
  • Switch: presence-only boolean flag.

Conversion contract
- ArgumentType.parse(raw) returns the converted value or raises ParseError.
- Custom converters may raise ValueError/TypeError; those are re-raised as
  ParseError with the same message, so callers only ever handle ParseError.

Messages quote the raw input verbatim, e.g. "'five' is not a number".
"""
import datetime
import math
import re
from types import MappingProxyType
from typing import final

from .faults import ParseError
from .utils import Unset, quote

ISO_8601 = re.compile(r"[0-9]{4}-[0-9][0-9]-[0-9][0-9]T[0-9][0-9]:[0-9][0-9]:[0-9][0-9](\.[0-9]+)?(([+-][0-9][0-9]:[0-9][0-9])|Z)?", re.IGNORECASE)

# components are range-checked after matching; the first pattern in range wins
_DATE = {
    "-": r"(?P<year>[0-9]{4})-(?P<month>[0-9][0-9]?)-(?P<day>[0-9][0-9]?)",
    ".": r"(?P<year>[0-9]{4})\.(?P<month>[0-9][0-9]?)\.(?P<day>[0-9][0-9]?)",
    " ": r"(?P<year>[0-9]{4}) (?P<month>[0-9][0-9]?) (?P<day>[0-9][0-9]?)",
    "/": r"(?P<year>[0-9]{4})/(?P<month>[0-9][0-9]?)/(?P<day>[0-9][0-9]?)",
}
_TIME = r"(?P<hours>[0-9][0-9]?):(?P<minutes>[0-9][0-9])(:(?P<seconds>[0-9][0-9]))?"

LOCAL_DATE_FORMATS = (
    *(re.compile(r"%s(\s+%s)?" % (date, _TIME)) for date in _DATE.values()),
    *(re.compile(r"%s\s+%s" % (_TIME, date)) for date in _DATE.values()),
)

_RANGES = (
    ("month", 1, 12),
    ("day", 1, 31),
    ("hours", 0, 23),
    ("minutes", 0, 59),
    ("seconds", 0, 59),
)

_DECIMAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)(e[+-]?[0-9]+)?", re.IGNORECASE)
_HEXADECIMAL = re.compile(r"(?P<sign>[+-]?)0x(?P<digits>[0-9a-f]+)", re.IGNORECASE)
_INTEGER = re.compile(r"[+-]?[0-9]+")

_TRUTHY = frozenset({"true", "yes", "y", "1"})
_FALSY = frozenset({"false", "no", "n", "0"})


@final
class ArgumentType:
    """
    A parser for a single argument value.

    Instances are immutable: the converter and the type name are fixed at
    construction, and the type name is stored upper-cased.

    Build one to support a custom value kind:

        email = ArgumentType(parse_email, "email")   # typename == "EMAIL"
    """
    __slots__ = ("_converter", "_typename")

    def __init__(self, converter, typename, /):
        if not callable(converter):
            raise TypeError("ArgumentType() first argument must be callable")
        if not isinstance(typename, str):
            raise TypeError("ArgumentType() second argument must be a string")
        if not typename.strip():
            raise ValueError("ArgumentType() type name must be non-empty")
        object.__setattr__(self, "_converter", converter)
        object.__setattr__(self, "_typename", typename.upper())

    @property
    def typename(self):
        return self._typename

    def parse(self, raw, /):
        try:
            return self._converter(raw)
        except ParseError:
            raise
        except (ValueError, TypeError) as error:
            raise ParseError(str(error)) from error

    def __setattr__(self, name, value):
        raise AttributeError("ArgumentType objects are immutable")

    def __delattr__(self, name):
        raise AttributeError("ArgumentType objects are immutable")

    def __repr__(self):
        return "ArgumentType(%s)" % self._typename

    def __rich_repr__(self):
        yield "typename", self._typename


def _string(raw):
    return raw


def _number(raw):
    value = raw.strip()
    if match := _HEXADECIMAL.fullmatch(value):
        try:
            number = float(int(match["digits"], 16))
        except OverflowError:
            raise ParseError("%s is not a number" % quote(raw)) from None
        return -number if match["sign"] == "-" else number
    if _DECIMAL.fullmatch(value):
        number = float(value)
        if math.isfinite(number):
            return number
    raise ParseError("%s is not a number" % quote(raw))


def _integer(raw):
    value = raw.strip()
    if _INTEGER.fullmatch(value):
        return int(value)
    raise ParseError("%s is not an integer" % quote(raw))


def _boolean(raw):
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ParseError("%s is not a boolean" % quote(raw))


def _date(raw):
    value = raw.strip()
    match value.lower():
        case "now":
            return datetime.datetime.now()
        case "today":
            return datetime.datetime.combine(datetime.date.today(), datetime.time())
    if ISO_8601.fullmatch(value):
        try:
            return datetime.datetime.fromisoformat(value.upper())
        except ValueError:
            raise ParseError("%s is not a valid date" % quote(raw)) from None
    for format in LOCAL_DATE_FORMATS:
        if not (match := format.fullmatch(value)):
            continue
        components = {name: int(match[name] or 0) for name in ("year", "month", "day", "hours", "minutes", "seconds")}
        if any(not lower <= components[name] <= upper for name, lower, upper in _RANGES):
            continue
        try:
            start = datetime.datetime(
                components["year"],
                components["month"],
                1,
                components["hours"],
                components["minutes"],
                components["seconds"],
            )
        except ValueError:
            # year 0 is outside datetime's range
            continue
        # days past the end of the month roll over (2021-2-30 is March 2nd)
        return start + datetime.timedelta(days=components["day"] - 1)
    raise ParseError("%s is not a valid date" % quote(raw))


string = ArgumentType(_string, "STRING")
number = ArgumentType(_number, "NUMBER")
integer = ArgumentType(_integer, "INTEGER")
boolean = ArgumentType(_boolean, "BOOLEAN")
date = ArgumentType(_date, "DATE")


def choice(typename, choices, /):
    """
    Build an ArgumentType accepting one of a fixed set of strings.

    Matching trims the input and ignores case, but the declared spelling is
    always returned: choice("CONFIRM", ["yes", "no"]).parse(" YES ") == "yes".
    """
    if isinstance(choices, str):
        raise TypeError("choice() second argument must be an iterable of strings, not a string")
    choices = tuple(choices)
    if not choices:
        raise ValueError("choice() requires at least one choice")
    for option in choices:
        if not isinstance(option, str):
            raise TypeError("choice() options must be strings, not %s" % type(option).__name__)

    lookup = MappingProxyType({option.strip().lower(): option for option in choices})
    expected = ", ".join(map(quote, choices))

    def converter(raw):
        try:
            return lookup[raw.strip().lower()]
        except KeyError:
            raise ParseError("expected one of %s but received %s" % (expected, quote(raw))) from None

    return ArgumentType(converter, typename)


@final
class Positional:
    """Positional argument spec: {name, description, type}."""
    __slots__ = ("name", "description", "type")

    def __init__(self, name, type, description=Unset):
        self.name = name
        self.type = type
        self.description = description

    def __repr__(self):
        return "Positional(%r, %s)" % (self.name, self.type.typename)


@final
class Named:
    """Named argument spec: {name, description, type, flags}."""
    __slots__ = ("name", "description", "type", "flags")

    def __init__(self, name, type, flags, description=Unset):
        self.name = name
        self.type = type
        self.flags = tuple(flags)
        self.description = description

    @property
    def label(self):
        return "%s <%s>" % (", ".join(self.flags), self.type.typename)

    def __repr__(self):
        return "Named(%r, %s, %s)" % (self.name, self.type.typename, ", ".join(self.flags))


@final
class Switch:
    """Boolean flag spec: {name, description, flags}."""
    __slots__ = ("name", "description", "flags")

    def __init__(self, name, flags, description=Unset):
        self.name = name
        self.flags = tuple(flags)
        self.description = description

    @property
    def label(self):
        return ", ".join(self.flags)

    def __repr__(self):
        return "Switch(%r, %s)" % (self.name, ", ".join(self.flags))


__all__ = (
    "ArgumentType",
    "string",
    "number",
    "integer",
    "boolean",
    "date",
    "choice",
    "Positional",
    "Named",
    "Switch",
)
