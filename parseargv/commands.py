"""
parseargv command layer: the finalized grammar and command resolution.

What this module provides
- Command: immutable definition of one (sub)command read from a help text:
  its word path, local name, help text, positional slots (cardinals) and
  option/switch spellings (switches).
- organize(commands): pick the main command and validate that every other
  command is named "<main> <words...>"; returns a CommandModel.
- CommandModel: the whole grammar of a program. resolve(tokens) finds the
  (sub)command invoked by a command line, __invoke__(prompt) matches a whole
  command line and returns a Result.

Resolution rules
- An empty command line, or a grammar with a single command, always invokes
  the main command.
- Otherwise the leading tokens that do not start with '-' are candidate name
  words. The longest prefix of them that matches a sub-command's local name
  wins, so "foo bar" is preferred to "foo" when both exist.
- No candidate words → main command; candidates but no match → UnknownCommandError.

Commands are created by parseargv.builder and never mutated afterwards; use
copy.replace(command, name=...) to derive a renamed copy.
"""
import copy
import logging
import shlex
import sys
from collections.abc import Iterable, Sequence
from types import MappingProxyType

from .arguments import Switch
from .binder import bind
from .faults import (
    NoCommandDefinedError,
    NoDefaultCommandError,
    InvalidSubcommandNameError,
    UnknownCommandError,
    CommandError,
    trigger,
)
from .results import Result
from .utils import *

logger = logging.getLogger(__name__)


class Command:
    """
    immutable (sub)command definition.

    fields
    - words: tuple[str, ...], the command path (e.g. ("multi", "var", "add")).
    - full_name: the words joined by a space, unique within a CommandModel.
    - name: the local name, full_name without the "<main> " prefix.
    - help: help text of the command (blank border lines trimmed).
    - cardinals: ordered mapping slot name → Cardinal (binding order).
    - switches: mapping flag spelling (no dashes) → Option | Switch.
    - line: 1-based line of the usage header in the help text.
    """
    __slots__ = ("_words", "_name", "_help", "_cardinals", "_switches", "_line")
    __introspectable__ = ("name", "full_name", "cardinals", "switches")

    words = mirror("words")
    name = mirror("name")
    help = mirror("help")
    cardinals = mirror("cardinals")
    switches = mirror("switches")
    line = mirror("line")

    def __init__(self, words, /, *, name=Unset, help="", cardinals=(), switches=(), line=None):
        if isinstance(words, str):
            words = words.split()
        self._words = tuple(words)
        if not self._words:
            raise ValueError("command must have at least one word")
        self._name = coalesce(name, " ".join(self._words))
        self._help = help
        self._cardinals = dict(cardinals)
        self._switches = dict(switches)
        self._line = line

    @property
    def full_name(self):
        return " ".join(self._words)

    @property
    def options(self):
        """
        mapping Option | Switch → spellings (short first), in declaration order.
        """
        targets = {}
        for spelling, target in self._switches.items():
            targets.setdefault(target, []).append(spelling)
        return MappingProxyType({target: tuple(names) for target, names in targets.items()})

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self._words, **{
            "name": self._name,
            "help": self._help,
            "cardinals": self._cardinals,
            "switches": self._switches,
            "line": self._line,
        } | overrides)

    def __eq__(self, other):
        if not isinstance(other, Command):
            return NotImplemented
        return (
            self._words == other._words and
            self._name == other._name and
            self._help == other._help and
            self._cardinals == other._cardinals and
            self._switches == other._switches
        )

    def __hash__(self):
        return hash((self._words, self._name))

    def __str__(self):
        return self.full_name

    def __repr__(self):
        return "command(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


class CommandModel:
    """
    the whole grammar of a program: the main command plus its sub-commands.

    commands are ordered main first, then in declaration order.
    """
    __slots__ = ("_main", "_commands")

    main = mirror("main")
    commands = mirror("commands")

    def __init__(self, main, commands=(), /):
        self._main = main
        self._commands = (main, *(command for command in commands if command is not main))

    def __iter__(self):
        return iter(self._commands)

    def __len__(self):
        return len(self._commands)

    def __contains__(self, command):
        return command in self._commands

    def __repr__(self):
        return "command-model(main=%r, commands=%r)" % (self._main.full_name, [c.full_name for c in self._commands])

    def find(self, name, /):
        """
        look up a command by local name, full name, or a sequence of words.

        returns None when no command matches.
        """
        if isinstance(name, Sequence) and not isinstance(name, str):
            name = " ".join(name)
        if not isinstance(name, str):
            raise TypeError("find() argument must be a string or a sequence of strings")
        name = " ".join(name.split())
        for command in self._commands:
            if name in (command.name, command.full_name):
                return command
        return None

    def resolve(self, tokens, /):
        """
        determine the command invoked by a command line.

        parameters
        - tokens: Sequence[str], the command line without the program name.

        returns
        - tuple[Command, list[str]]: the invoked command and the tokens that
          remain after the command name words were consumed.

        raises
        - UnknownCommandError when leading name words match no sub-command.
        """
        tokens = list(tokens)
        if not tokens or len(self._commands) == 1:
            return self._main, tokens

        candidates = []
        for token in tokens:
            if token.startswith("-"):
                break
            candidates.append(token)

        if not candidates:
            return self._main, tokens

        # longest first so a parent name never shadows its own children
        for count in range(len(candidates), 0, -1):
            name = " ".join(candidates[:count])
            for command in self._commands[1:]:
                if command.name == name:
                    logger.debug("resolved command %r from %d token(s)", command.full_name, count)
                    return command, tokens[count:]

        raise UnknownCommandError(self._main.full_name, candidates[0])

    def __invoke__(self, prompt=Unset):
        """
        match a command line against this grammar.

        parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; will be split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, used verbatim.

        returns
        - Result of the invoked command, or whatever the installed error
          handler returns for a CommandError.

        raises
        - TypeError: when prompt is not Unset/str/Iterable[str].
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("__invoke__() argument must be a string or an iterable of strings")
        else:
            raise TypeError("__invoke__() argument must be a string or an iterable of strings")

        try:
            command, tokens = self.resolve(tokens)
            values = bind(command, tokens)
        except CommandError as fault:
            return trigger(fault, **self._hint())
        return Result(command, self, values)

    def _hint(self):
        if any(isinstance(target, Switch) and target.key == "help" for target in self._main.switches.values()):
            return {"hint": "try '%s --help' for more information" % self._main.full_name}
        return {}


def organize(commands, /):
    """
    build the CommandModel of a list of commands read from one help text.

    rules
    - no commands → NoCommandDefinedError.
    - a single command is the main command, whatever its name.
    - otherwise the first command whose name is a single word is the main
      command (none → NoDefaultCommandError); every other command must be
      named "<main> <words...>" (else InvalidSubcommandNameError) and gets
      the words after the main name as local name.
    """
    commands = list(commands)
    if not commands:
        raise NoCommandDefinedError()
    if len(commands) == 1:
        return CommandModel(commands[0])

    for main in commands:
        if len(main.words) == 1:
            break
    else:
        raise NoDefaultCommandError()

    prefix = main.full_name + " "
    children = []
    for command in commands:
        if command is main:
            continue
        if not command.full_name.startswith(prefix):
            raise InvalidSubcommandNameError(main.full_name, command.full_name, line=command.line)
        children.append(copy.replace(command, name=command.full_name.removeprefix(prefix)))

    logger.debug("organized %r with %d sub-command(s)", main.full_name, len(children))
    return CommandModel(main, children)


__all__ = (
    "Command",
    "CommandModel",
    "organize",
)
