r"""
parseargv argument specifications.

Overview
- Cardinal: a positional slot declared on a usage line. Four variants:
  • <name>        required single
  • [<name>]      optional single
  • <name>...     required variadic (consumes all remaining positional tokens)
  • [<name>...]   optional variadic
- Option: binding target of a value-bearing option (e.g. -o, --opt <option>).
- Switch: binding target of a boolean option (e.g. -s, --switch).

Options and switches are keyed by every spelling in Command.switches; the
spellings of one declaration share a single target, so `-f` and `--format`
are synonyms because they bind the same result key.

Introspection & representation
- ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
  fields listed in __introspectable__ as read-only properties (see mirror()).

All specs are immutable value objects: equal fields compare equal and hash
alike.

Quick example:
    >>> Cardinal("files", required=False, variadic=True)
    cardinal(name='files', required=False, variadic=True)
    >>> str(Cardinal("files", required=False, variadic=True))
    '[<files>...]'
"""
import functools
import operator
import re

from .utils import *


class ArgumentType(type):
    """
    Metaclass of the argument specs.

    Responsibilities
    - derive a human-friendly __typename__ from the class name (camel-case split
      with hyphens) for consistent labels in reprs.
    - expose every name listed in __introspectable__ as a read-only property
      mirroring the private backing field (built via mirror(name)).
    - provide __repr__/__rich_repr__ built from the introspectable fields.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class Argument(metaclass=ArgumentType):
    __slots__ = ()

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())

    def __hash__(self):
        return hash((type(self), *self.__rich_repr__()))


class Cardinal(Argument):
    """
    positional slot declared by a usage line.

    fields
    - name: str, the result key (e.g. "file1").
    - required: bool, whether the slot must be satisfied.
    - variadic: bool, whether the slot takes all remaining positional tokens.
    """
    __slots__ = ("_name", "_required", "_variadic")
    __introspectable__ = ("name", "required", "variadic")

    def __init__(self, name, /, *, required=True, variadic=False):
        if not isinstance(name, str):
            raise TypeError("cardinal name must be a string")
        if not name:
            raise ValueError("cardinal name must be a non-empty string")
        self._name = name
        self._required = bool(required)
        self._variadic = bool(variadic)

    def __str__(self):
        usage = "<%s>%s" % (self._name, "..." * self._variadic)
        return usage if self._required else "[%s]" % usage


class Option(Argument):
    """
    value-bearing option target; the value is bound under key.
    """
    __slots__ = ("_key",)
    __introspectable__ = ("key",)

    def __init__(self, key, /):
        if not isinstance(key, str) or not key:
            raise ValueError("option key must be a non-empty string")
        self._key = key


class Switch(Argument):
    """
    boolean option target; the result under key is always True or False.
    """
    __slots__ = ("_key",)
    __introspectable__ = ("key",)

    def __init__(self, key, /):
        if not isinstance(key, str) or not key:
            raise ValueError("switch key must be a non-empty string")
        self._key = key


def spell(name, /):
    """
    return the command line spelling of a flag name: "-s" or "--switch".
    """
    return "-" + name if len(name) == 1 else "--" + name


__all__ = (
    "Argument",
    "Cardinal",
    "Option",
    "Switch",
    "spell",
)
