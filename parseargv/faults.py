"""
parseargv faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing errors.
  Codes are grouped by domain to keep logs/searches predictable.
- DefinitionError and subclasses: raised while the grammar is read from a help
  text. They signal a broken help text (a programmer error), are plain
  ValueErrors and always propagate to the caller of parse()/invoke().
- CommandError and subclasses: raised while a command line is matched against a
  valid grammar (a user error). They carry the invoking command's full name,
  know how to render themselves with rich, and are funneled through the
  process-wide error handler by trigger().
- on_error(): install the handler; ConsoleHandler is the default one.

UX goals
- Messages read like the classic “<command>: <message>” diagnostics.
- Rendering adds a short title, the fault code and a single hint when known.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).
"""
import copy
import sys
import threading
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_COMMAND
    - options/switches (1111x)
      • UNKNOWN_OPTION, OPTION_ARGUMENT_MISSING
    - positionals (1112x)
      • ARGUMENT_MISSING, TOO_MANY_ARGUMENTS
    - delegated (1113x)
      • CONVERSION_FAILED, APPLICATION_ERROR
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND             = 11101

    # --- option/switch errors (11xxx) ---
    UNKNOWN_OPTION              = 11112
    OPTION_ARGUMENT_MISSING     = 11117

    # --- positional errors (11xxx) ---
    ARGUMENT_MISSING            = 11125
    TOO_MANY_ARGUMENTS          = 11126

    # --- delegated errors (11xxx) ---
    CONVERSION_FAILED           = 11131
    APPLICATION_ERROR           = 11132

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


# --- definition (help text) errors ---

class DefinitionError(ValueError):
    """
    base class of all errors found while reading the grammar of a help text.

    line is the 1-based line of the help text where the problem was found, or
    None when the problem is not bound to one line.
    """

    def __init__(self, message, /, *, line=None):
        super().__init__(message)
        self.line = line


class DuplicateCommandError(DefinitionError):
    def __init__(self, name, /, *, line=None):
        message = "command already defined - %s" % name
        if line is not None:
            message += " - line %d" % line
        super().__init__(message, line=line)
        self.name = name


class DuplicateOptionError(DefinitionError):
    def __init__(self, name, /, *, line=None):
        super().__init__("option already defined - %s" % name, line=line)
        self.name = name


class DuplicateArgumentError(DefinitionError):
    def __init__(self, name, /, *, line=None):
        super().__init__("argument already defined - %s" % name, line=line)
        self.name = name


class UsageLineMissingError(DefinitionError):
    def __init__(self, /, *, line=None):
        message = "options can only be defined after a 'usage' line"
        if line is not None:
            message += " - line %d" % line
        super().__init__(message, line=line)


class NoCommandDefinedError(DefinitionError):
    def __init__(self):
        super().__init__("help text does not define a valid command")


class NoDefaultCommandError(DefinitionError):
    def __init__(self):
        super().__init__("no default command defined")


class InvalidSubcommandNameError(DefinitionError):
    def __init__(self, main, name, /, *, line=None):
        super().__init__("invalid sub-command name for %s - %s" % (main, name), line=line)
        self.main = main
        self.name = name


# --- command line (user) errors ---

class CommandError(Exception):
    """
    base class of all errors caused by the command line of a user.

    attributes
    - command: full name of the command that was invoked (e.g. "multi var add").
    - message: the bare message, without the command prefix.
    - options: read-only rendering/context options (hint, fancy, colorful, ...).

    str(error) is "<command>: <message>".
    """
    code = FaultCode.APPLICATION_ERROR
    title = "error"

    def __init__(self, command, message, /, **options):
        super().__init__(command, message)
        self.command = command
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return "%s: %s" % (self.command, self.message)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style])

        prog = text(getattr(main, "__prog__", self.command), "prog-name")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize(), "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        parts = [message]
        if hint := self.options.get("hint"):
            parts.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if fancy:
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __trigger__(self):
        handler = _handler
        if handler is None:
            raise self
        return handler(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        fault = type(self).__new__(type(self), *self.args)
        fault.__dict__.update(self.__dict__)
        fault.options = MappingProxyType({**self.options, **overrides})
        return fault


class UnknownCommandError(CommandError):
    code = FaultCode.UNKNOWN_COMMAND
    title = "unknown command"

    def __init__(self, command, name, /, **options):
        super().__init__(command, "invalid command - %s" % name, **options)
        self.name = name


class ArgumentMissingError(CommandError):
    code = FaultCode.ARGUMENT_MISSING
    title = "missing argument"

    def __init__(self, command, name=None, /, **options):
        super().__init__(
            command,
            "argument missing" if name is None else "argument missing - <%s>" % name,
            **options
        )
        self.name = name


class TooManyArgumentsError(CommandError):
    code = FaultCode.TOO_MANY_ARGUMENTS
    title = "too many arguments"

    def __init__(self, command, /, **options):
        super().__init__(command, "too many arguments", **options)


class UnknownOptionError(CommandError):
    code = FaultCode.UNKNOWN_OPTION
    title = "unknown option"

    def __init__(self, command, name, /, **options):
        super().__init__(command, "unknown option - '%s'" % name, **options)
        self.name = name


class OptionArgumentMissingError(CommandError):
    code = FaultCode.OPTION_ARGUMENT_MISSING
    title = "missing option value"

    def __init__(self, command, name, option, /, **options):
        super().__init__(command, "argument <%s> missing - '%s'" % (name, option), **options)
        self.name = name
        self.option = option


class ConversionError(CommandError):
    code = FaultCode.CONVERSION_FAILED
    title = "invalid argument"

    def __init__(self, command, message, name, /, **options):
        super().__init__(command, "%s - <%s>" % (message, name), **options)
        self.name = name


class ApplicationError(CommandError):
    code = FaultCode.APPLICATION_ERROR
    title = "error"


class ConsoleHandler:
    """
    default error handler: render the fault on stderr and terminate.

    options
    - fancy: render the fault inside a rich Panel.
    - colorful: apply the styles (see CommandError.__rich__).
    - status: process exit status (non-zero).
    """

    def __init__(self, *, fancy=False, colorful=True, status=1):
        if not isinstance(status, int) or not status:
            raise ValueError("exit status must be a non-zero integer")
        self.fancy = fancy
        self.colorful = colorful
        self.status = status

    def __call__(self, fault, /):
        console.print(copy.replace(fault, fancy=self.fancy, colorful=self.colorful))
        sys.exit(self.status)

    def __repr__(self):
        return "console-handler(fancy=%r, colorful=%r, status=%r)" % (self.fancy, self.colorful, self.status)


_lock = threading.Lock()
_handler = ConsoleHandler()


def on_error(handler=Unset, /):
    """
    install the process-wide handler for command line errors.

    parameters
    - handler: Callable[[CommandError], Any] | None
      • callable → receives every CommandError surfaced by trigger(); its return
        value becomes the return value of the failing call (invoke, convert, ...).
      • None     → errors are re-raised to the caller.
      • omitted  → restore the default ConsoleHandler().

    returns
    - the previously installed handler (so callers can restore it).

    definition errors (DefinitionError) never reach the handler.
    """
    global _handler
    if handler is Unset:
        handler = ConsoleHandler()
    elif handler is not None and not callable(handler):
        raise TypeError("on_error() argument must be callable or None")
    with _lock:
        previous, _handler = _handler, handler
    return previous


def trigger(fault, /, **options):
    """
    surface a command line error with the given rendering/context options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandError).
    - options are merged into the fault via __replace__(**options) before triggering.
    - with no handler installed the fault is raised, otherwise the handler's
      result is returned.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    if not options:
        return fault.__trigger__()
    return copy.replace(fault, **options).__trigger__()


__all__ = (
    "DefinitionError",
    "DuplicateCommandError",
    "DuplicateOptionError",
    "DuplicateArgumentError",
    "UsageLineMissingError",
    "NoCommandDefinedError",
    "NoDefaultCommandError",
    "InvalidSubcommandNameError",
    "CommandError",
    "UnknownCommandError",
    "ArgumentMissingError",
    "TooManyArgumentsError",
    "UnknownOptionError",
    "OptionArgumentMissingError",
    "ConversionError",
    "ApplicationError",
    "ConsoleHandler",
    "FaultCode",
    "on_error",
    "trigger",
)
