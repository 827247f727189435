"""
Argclay command groups: route a token list to one of several named subcommands.

A CommandGroup consumes exactly one token per level to select a child, which is
either a Command (leaf) or another CommandGroup (interior node):

    manage = CommandGroup("Manage resources.").subcommand("create", create).subcommand("destroy", destroy)
    tool = CommandGroup("Example tool.").subcommand("person", person).subcommand("manage", manage)

    tool.parse(["manage", "destroy", "disk", "--confirm", "yes"])
    # {'manage': {'destroy': {'resource': 'disk', 'confirm': 'yes'}}}

Dispatch is exact and case-sensitive; there is no prefix matching.
"""
from types import MappingProxyType

from .commands import Command
from .distance import suggest
from .faults import *
from .utils import columns, quote, tokenize, usage, wants_help


class CommandGroup:
    """
    tree node mapping subcommand names to Command or CommandGroup children.

    the tree is built once with subcommand() and never mutated by parse().
    """

    def __init__(self, description=""):
        if not isinstance(description, str):
            raise TypeError("CommandGroup() description must be a string")
        self.description = description
        self._commands = {}

    def __repr__(self):
        return "CommandGroup(%r)" % self.description

    @property
    def commands(self):
        """read-only view of the registered subcommands."""
        return MappingProxyType(self._commands)

    def subcommand(self, name, command, /):
        """register a Command or CommandGroup under name (unique within this group)."""
        if not isinstance(name, str) or not name:
            raise TypeError("subcommand names must be non-empty strings")
        match command:
            case Command() | CommandGroup():
                pass
            case _:
                raise TypeError("subcommand() expects a Command or a CommandGroup, not %s" % type(command).__name__)
        if name in self._commands:
            raise CommandError("subcommand %r is already declared" % name)
        self._commands[name] = command
        return self

    def _fmt_usage(self, path):
        return usage(path, "<command>")

    def help(self, path=()):
        """render the help text listing every subcommand and its description."""
        sections = [self.description] if self.description else []
        sections.append(self._fmt_usage(path))
        if self._commands:
            rows = [(name, command.description) for name, command in self._commands.items()]
            sections.append("COMMANDS:\n%s" % columns(rows))
        return "\n\n".join(sections)

    def parse(self, args, skip=0):
        """
        select the subcommand named by args[skip] and parse the rest with it.

        returns {name: result-of-the-child}; raises ArgumentError or HelpRequest.
        """
        args = list(args)
        path = args[:skip]

        if skip >= len(args):
            raise ArgumentError(self.help(path), code=FaultCode.MISSING_COMMAND)

        name = args[skip]
        if name in self._commands:
            return {name: self._commands[name].parse(args, skip + 1)}

        if wants_help(args, skip):
            raise HelpRequest(self.help(path))

        message = "Unknown command %s" % quote(name)
        if (suggestion := suggest(name, self._commands)) is not None:
            message += "\n\nHELP:\n\tDid you mean %s?" % suggestion
        else:
            message += "\n\n" + self._fmt_usage(path)
        raise ArgumentError(message, code=FaultCode.UNKNOWN_COMMAND, token=name, suggestion=suggestion)

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
    "CommandGroup",
)
