"""
Argclay command layer: declare a command, parse tokens against it, render help.

What this module provides
- Command: a builder collecting positional arguments, named arguments and flags.
  Every registration returns the same Command so declarations chain:

      cmd = (
          Command("Describe a person.")
          .required(string, "name")
          .required(number, "age", flags=["a", "age"], description="Age in years.")
          .flag("dead", aliases=["d"])
      )
      cmd.parse(["Peter", "--age", "42"])   # {'name': 'Peter', 'age': 42.0, 'dead': False}

- Command.run(): host wrapper reading sys.argv, printing help/errors through rich
  and exiting with the conventional status.

Parsing (single deterministic pass)
- -h/--help anywhere after the command path wins over every other outcome.
- required positionals are consumed first, in declaration order, then the
  optional positional (unless the next token is a known flag).
- every remaining token must be a known flag: named arguments consume the
  following token as their value (last occurrence wins), flags become True.
- required named arguments are checked last; unset optional values are None.

Outcomes
- success: a fresh dict holding exactly Command.keys.
- ArgumentError: user-input problem with a ready-to-display message.
- HelpRequest: the rendered help.
"""
import warnings

from .arguments import Positional, Named, Switch
from .distance import suggest
from .faults import *
from .utils import *


class Command:
    """
    single command specification (builder) and parser.

    state
    - description: shown at the top of the help.
    - required positionals (ordered), at most one optional positional.
    - named arguments and flags, checked in that order when matching a token.
    - the set of every registered flag token and the names of required named arguments.

    declarations are never mutated by parse(); build once, parse many times.
    """

    def __init__(self, description=""):
        if not isinstance(description, str):
            raise TypeError("Command() description must be a string")
        self.description = description

        self._required = []
        self._optional = None
        self._named = []
        self._switches = []

        self._mandatory = set()
        self._flags = set()
        self._keys = []

    def __repr__(self):
        return "Command(%r)" % self.description

    @property
    def keys(self):
        """declared result keys, in declaration order."""
        return tuple(self._keys)

    def _declare(self, name):
        if not isinstance(name, str) or not name:
            raise TypeError("argument names must be non-empty strings")
        if name in self._keys:
            raise CommandError("argument %r is already declared" % name)
        self._keys.append(name)

    def _register(self, flags):
        for flag in flags:
            if flag in self._flags:
                warnings.warn(DuplicateFlagWarning(
                    "flag %s is registered more than once on this command" % flag,
                    flag=flag,
                ), stacklevel=3)
            self._flags.add(flag)

    def required(self, type, name, /, flags=(), description=Unset):
        """
        register a required argument.

        without flags it is positional and must precede the optional positional;
        with flags it is a named argument that must appear on every command line.
        """
        flags = normalize(flags)
        if not flags:
            if self._optional is not None:
                raise CommandError("required positional arguments must come before optional ones")
            self._declare(name)
            self._required.append(Positional(name, type, description))
        else:
            self._declare(name)
            self._register(flags)
            self._named.append(Named(name, type, flags, description))
            self._mandatory.add(name)
        return self

    def optional(self, type, name, /, flags=(), description=Unset):
        """
        register an optional argument (None when absent).

        without flags it is the single optional positional; with flags it is a
        named argument.
        """
        flags = normalize(flags)
        if not flags:
            if self._optional is not None:
                raise CommandError("there can be at most one optional positional argument")
            self._declare(name)
            self._optional = Positional(name, type, description)
        else:
            self._declare(name)
            self._register(flags)
            self._named.append(Named(name, type, flags, description))
        return self

    def flag(self, name, /, aliases=(), description=Unset):
        """register a boolean flag matched by --name (or -n) and its aliases."""
        if isinstance(aliases, str):
            raise TypeError("flag() aliases must be an iterable of strings, not a string")
        flags = normalize([name, *aliases])
        self._declare(name)
        self._register(flags)
        self._switches.append(Switch(name, flags, description))
        return self

    def _fmt_usage(self, path):
        parts = ["<%s>" % argument.name for argument in self._required]
        if self._optional is not None:
            parts.append("[%s]" % self._optional.name)
        if self._named or self._switches:
            parts.append("[OPTIONS]")
        return usage(path, *parts)

    def help(self, path=()):
        """render the help text; path is the command path printed before the arguments."""
        sections = [self.description] if self.description else []
        sections.append(self._fmt_usage(path))
        rows = []
        for argument in self._named:
            label = argument.label
            if argument.name in self._mandatory:
                label += " (required)"
            rows.append((label, coalesce(argument.description)))
        for switch in self._switches:
            rows.append((switch.label, coalesce(switch.description)))
        if rows:
            sections.append("OPTIONS:\n%s" % columns(rows))
        return "\n\n".join(sections)

    def _convert(self, argument, value, flag=None):
        try:
            return argument.type.parse(value)
        except ParseError as error:
            if flag is None:
                message = "Invalid argument <%s>: %s" % (argument.name, error.message)
            else:
                message = "Invalid argument %s <%s>: %s" % (flag, argument.type.typename, error.message)
            raise ArgumentError(message, code=FaultCode.INVALID_VALUE, argument=argument.name) from error

    def _lookup(self, token):
        for argument in self._named:
            if token in argument.flags:
                return argument
        for switch in self._switches:
            if token in switch.flags:
                return switch
        return None

    def _candidates(self):
        return dict.fromkeys(flag for declared in (*self._named, *self._switches) for flag in declared.flags)

    def _unknown(self, path, token):
        message = "Unknown flag %s" % quote(token)
        if (suggestion := suggest(token, self._candidates())) is not None:
            message += "\n\nHELP:\n\tDid you mean %s?" % suggestion
        else:
            message += "\n\n" + self._fmt_usage(path)
        return ArgumentError(message, code=FaultCode.UNKNOWN_FLAG, token=token, suggestion=suggestion)

    def parse(self, args, skip=0):
        """
        parse tokens into a dict keyed by the declared names.

        tokens before skip are the already consumed command path; they only
        appear in usage/help text. raises HelpRequest or ArgumentError.
        """
        args = list(args)
        path = args[:skip]

        if wants_help(args, skip):
            raise HelpRequest(self.help(path))

        result = dict.fromkeys(self._keys)
        index = skip

        for argument in self._required:
            if index >= len(args):
                raise ArgumentError(
                    "Missing argument <%s>\n\n%s" % (argument.name, self._fmt_usage(path)),
                    code=FaultCode.MISSING_POSITIONAL,
                    argument=argument.name,
                )
            result[argument.name] = self._convert(argument, args[index])
            index += 1

        if self._optional is not None and index < len(args) and args[index] not in self._flags:
            result[self._optional.name] = self._convert(self._optional, args[index])
            index += 1

        for switch in self._switches:
            result[switch.name] = False

        supplied = set()
        while index < len(args):
            token = args[index]
            match self._lookup(token):
                case Named() as argument:
                    if index + 1 >= len(args):
                        raise ArgumentError(
                            "Missing value for %s <%s>" % (token, argument.type.typename),
                            code=FaultCode.MISSING_VALUE,
                            argument=argument.name,
                        )
                    result[argument.name] = self._convert(argument, args[index + 1], token)
                    supplied.add(argument.name)
                    index += 2
                case Switch() as switch:
                    result[switch.name] = True
                    index += 1
                case None:
                    raise self._unknown(path, token)

        for argument in self._named:
            if argument.name in self._mandatory and argument.name not in supplied:
                raise ArgumentError(
                    "Missing argument %s" % argument.label,
                    code=FaultCode.MISSING_NAMED,
                    argument=argument.name,
                )

        return result

    def run(self, argv=None):
        """
        parse argv (default: sys.argv[1:]; a string is split shell-style) and
        return the result, printing help (exit 0) or the error (exit 1) otherwise.
        """
        try:
            return self.parse(tokenize(argv))
        except CommandException as fault:
            trigger(fault)


__all__ = (
    "Command",
)
