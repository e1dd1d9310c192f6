"""
Reads the grammar of a program from its help text.

build(text) walks the help text line by line (see parseargv.grammar for the
line kinds) and returns the commands it declares, in declaration order:

- a `usage:` line opens a command; the positional slots on the same line
  are declared on it.
- option and switch lines that follow register their spellings on the open
  command.
- every line except separators is part of the help text of the command whose
  paragraph it belongs to. A '#' line ends the paragraph (and closes the open
  command); a second `usage:` line in the same paragraph starts a new one.

Broken help texts raise a DefinitionError carrying the line number.
"""
import logging

from .arguments import Option, Switch
from .commands import Command
from .faults import (
    DuplicateCommandError,
    DuplicateOptionError,
    DuplicateArgumentError,
    UsageLineMissingError,
)
from .grammar import LineKind, classify, scan_cardinals

logger = logging.getLogger(__name__)


class CommandBuilder:
    """
    mutable command under construction; finalize() freezes it into a Command.

    the help buffer is shared with build() so lines appended after the usage
    line still end up in the command's help text.
    """

    def __init__(self, words, help, /, *, line=None):
        self.words = tuple(words)
        self.help = help
        self.line = line
        self.cardinals = {}
        self.switches = {}

    @property
    def full_name(self):
        return " ".join(self.words)

    def _keys(self):
        return {target.key: target for target in self.switches.values()}

    def declare_cardinal(self, cardinal, /, *, line=None):
        name = cardinal.name
        if name in self.cardinals or name in self.switches or name in self._keys():
            raise DuplicateArgumentError(name, line=line)
        self.cardinals[name] = cardinal

    def declare(self, names, target, /, *, line=None):
        """
        register the spellings of one option or switch declaration.
        """
        if target.key in self.cardinals:
            raise DuplicateArgumentError(target.key, line=line)
        if (known := self._keys().get(target.key)) is not None and type(known) is not type(target):
            raise DuplicateArgumentError(target.key, line=line)
        for name in names:
            if name in self.switches:
                raise DuplicateOptionError(name, line=line)
            if name in self.cardinals:
                raise DuplicateArgumentError(name, line=line)
            self.switches[name] = target

    def declare_option(self, names, key, /, *, line=None):
        self.declare(names, Option(key), line=line)

    def declare_switch(self, names, key, /, *, line=None):
        self.declare(names, Switch(key), line=line)

    def finalize(self):
        lines = list(self.help)
        while lines and not lines[0].strip():
            del lines[0]
        while lines and not lines[-1].strip():
            del lines[-1]
        return Command(
            self.words,
            help="\n".join(lines),
            cardinals=self.cardinals,
            switches=self.switches,
            line=self.line
        )


def build(text, /):
    """
    read the commands declared by a help text.

    returns
    - tuple[Command, ...] in declaration order (names not yet organized).

    raises
    - DuplicateCommandError, DuplicateOptionError, DuplicateArgumentError,
      UsageLineMissingError.
    """
    if not isinstance(text, str):
        raise TypeError("help text must be a string")

    builders = {}
    current = None
    help = []
    owned = False

    for number, raw in enumerate(text.splitlines(), 1):
        line = classify(raw)
        match line.kind:
            case LineKind.SEPARATOR:
                current, help, owned = None, [], False
                continue
            case LineKind.COMMAND:
                name = " ".join(line.words)
                if name in builders:
                    raise DuplicateCommandError(name, line=number)
                if owned:
                    help = []
                current = builders[name] = CommandBuilder(line.words, help, line=number)
                owned = True
                for cardinal in scan_cardinals(line.remainder):
                    current.declare_cardinal(cardinal, line=number)
                logger.debug("command %r declared at line %d", name, number)
            case LineKind.OPTION:
                if current is None:
                    raise UsageLineMissingError(line=number)
                current.declare_option(line.names, line.key, line=number)
            case LineKind.SWITCH:
                if current is None:
                    raise UsageLineMissingError(line=number)
                current.declare_switch(line.names, line.key, line=number)
        help.append(line.text)

    return tuple(builder.finalize() for builder in builders.values())


__all__ = (
    "CommandBuilder",
    "build",
)
