"""
Binds the tokens of a command line to the options, switches and positional
slots of a resolved command.

Token forms, checked in this order:

    --              every following token is positional, verbatim
    --name          long switch or option (an option takes the next token)
    -n:value        inline value, also --name:value, -n=value, --name=value
    -abc            cluster of single letter flags, dispatched left to right
    anything else   positional

Inline switch values are true for y, yes, t, true and on, false otherwise.

When there are fewer positional tokens than slots, optional slots are
dropped right to left until the counts fit ("reduce"). The remaining slots
are then filled left to right; a variadic slot takes every token left.
"""
import logging
import re
from collections import deque

from .arguments import Switch
from .faults import (
    ArgumentMissingError,
    TooManyArgumentsError,
    UnknownOptionError,
    OptionArgumentMissingError,
)

logger = logging.getLogger(__name__)

_FLAG = r"[^\W_](?:[^\W_]|-)*"

_LONG = re.compile(rf"--(?P<name>{_FLAG})")
_INLINE = re.compile(rf"(?P<prefix>-{{1,2}})(?P<name>{_FLAG})[:=](?P<value>.*)", re.DOTALL)
_CLUSTER = re.compile(r"-(?P<names>[^\W_]+)")

TRUTHY = frozenset(("y", "yes", "t", "true", "on"))


def _flag(command, values, name, tokens, prefix):
    target = command.switches.get(name)
    if target is None:
        raise UnknownOptionError(command.full_name, prefix + name)
    if isinstance(target, Switch):
        values[target.key] = True
        return
    if not tokens or tokens[0].startswith("-"):
        raise OptionArgumentMissingError(command.full_name, target.key, prefix + name)
    values[target.key] = tokens.popleft()


def _inline(command, values, name, value, prefix):
    target = command.switches.get(name)
    if target is None:
        raise UnknownOptionError(command.full_name, prefix + name)
    if isinstance(target, Switch):
        values[target.key] = value in TRUTHY
    else:
        values[target.key] = value


def _reduce(command, count):
    slots = list(command.cardinals.values())
    while count < len(slots):
        for index in reversed(range(len(slots))):
            if not slots[index].required:
                del slots[index]
                break
        else:
            raise ArgumentMissingError(command.full_name, slots[count].name)
    return slots


def _assign(command, values, positionals):
    tokens = deque(positionals)
    for slot in _reduce(command, len(tokens)):
        if slot.variadic:
            if tokens:
                values[slot.name] = tuple(tokens)
                tokens.clear()
            elif slot.required:
                raise ArgumentMissingError(command.full_name, slot.name)
        elif tokens:
            values[slot.name] = tokens.popleft()
        elif slot.required:
            raise ArgumentMissingError(command.full_name, slot.name)
    if tokens:
        raise TooManyArgumentsError(command.full_name)


def bind(command, tokens, /):
    """
    bind a command line (without the command name words) to a command.

    returns
    - dict[str, str | bool | tuple[str, ...]]: the values by result key. every
      declared switch is present (False unless given), options and positional
      slots only when given.

    raises
    - UnknownOptionError, OptionArgumentMissingError, ArgumentMissingError,
      TooManyArgumentsError.
    """
    tokens = deque(tokens)
    values = {}
    positionals = []

    while tokens:
        token = tokens.popleft()
        if token == "--":
            positionals.extend(tokens)
            break
        if match := _LONG.fullmatch(token):
            _flag(command, values, match["name"], tokens, "--")
        elif match := _INLINE.fullmatch(token):
            _inline(command, values, match["name"], match["value"], match["prefix"])
        elif match := _CLUSTER.fullmatch(token):
            for name in match["names"]:
                _flag(command, values, name, tokens, "-")
        else:
            positionals.append(token)

    # the main command answers --help and --version without its arguments
    if " " in command.full_name or not (values.get("help") is True or values.get("version") is True):
        _assign(command, values, positionals)

    for target in command.switches.values():
        if isinstance(target, Switch):
            values.setdefault(target.key, False)

    logger.debug("bound %s to %r", sorted(values), command.full_name)
    return values


__all__ = (
    "TRUTHY",
    "bind",
)
