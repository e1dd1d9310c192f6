"""
The outcome of a successful invocation.

Result is a read-only mapping from result key to value:

- positional slots and options: the given string (a tuple of strings for
  variadic slots), absent when not given;
- switches: always present, True or False.

Beside the mapping protocol it knows the invoked command (help text, name),
the whole grammar (find_command) and offers typed access through convert().
"""
import logging
from collections.abc import Mapping

from .conversion import lookup
from .faults import ConversionError, ApplicationError, trigger
from .utils import *

logger = logging.getLogger(__name__)


class Result(Mapping):
    """
    read-only mapping of the values bound for one command line.

    attributes
    - command: the invoked Command.
    - model: the CommandModel the command belongs to.
    """
    __slots__ = ("_command", "_model", "_values")

    command = mirror("command")
    model = mirror("model")

    def __init__(self, command, model, values, /):
        self._command = command
        self._model = model
        self._values = dict(values)

    def __getitem__(self, key):
        return self._values[key]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __str__(self):
        return self._command.help

    def __repr__(self):
        return "result(command=%r, values=%r)" % (self._command.full_name, self._values)

    def __rich_repr__(self):
        yield "command", self._command.full_name
        yield "values", self._values

    @property
    def help(self):
        return self._command.help

    @property
    def command_name(self):
        """
        local name of the invoked command ("var add" for "multi var add").
        """
        return self._command.name

    @property
    def main(self):
        return self._model.main

    def member(self, key, /):
        return key in self._values

    def is_true(self, key, /):
        """
        True only when the value of key is the boolean True (a set switch).
        """
        return self._values.get(key) is True

    def to_dict(self):
        return dict(self._values)

    def find_command(self, name, /):
        """
        look up any command of the grammar (local name, full name or words).
        """
        return self._model.find(name)

    def convert(self, type, key, /, *args, default=None, **options):
        """
        convert the value of key with the converter registered for type.

        parameters
        - type: anything parseargv.conversion.lookup() accepts.
        - key: the result key.
        - args, options: passed on to the converter.
        - default: returned when key has no value.

        tuples of a variadic slot are converted element-wise into a list.
        conversion failures are surfaced through trigger(); the handler's result
        is returned in that case.
        """
        if key not in self._values:
            return default
        converter = lookup(type)
        command = self._command.full_name

        def error(message):
            raise ConversionError(command, message, key)

        value = self._values[key]
        try:
            if isinstance(value, tuple):
                return [converter(item, *args, error=error, **options) for item in value]
            return converter(value, *args, error=error, **options)
        except ConversionError as fault:
            logger.debug("conversion of %r failed: %s", key, fault.message)
            return trigger(fault)

    def error(self, message, /, **options):
        """
        report an application level error for the invoked command, e.g.
        result.error("file already exists").
        """
        return trigger(ApplicationError(self._command.full_name, message, **options))


__all__ = (
    "Result",
)
