r"""
Help text line classifier.

Every line of a help text is one of:

- SEPARATOR   first non-blank character is '#', starts a new help paragraph
              block (multi-command help texts).
- COMMAND     `usage: <words> ...`, declares a command; the words form the
              command path, the remainder holds positional declarations.
- OPTION      `  -o, --opt <option>   text` or `  --opt:<option>   text`.
- SWITCH      `  -s, --switch   text` or `  -s   text`.
- TEXT        anything else.

The patterns are tested in exactly that order; classify() is a pure function.

Positional declarations in the remainder of a usage line are read by
scan_cardinals():

    <name>          required single
    [<name>]        optional single
    <name>...       required variadic
    [<name>...]     optional variadic

Anything else on the usage line (e.g. "[options]") is ignored.
"""
import re
from enum import Enum
from typing import NamedTuple

from .arguments import Cardinal

# a flag name as written after '-' or '--': alphanumeric, '-' allowed inside
_FLAG = r"[^\W_](?:[^\W_]|-)*"
# the value placeholder of an option: lowercase word
_VALUE = r"[a-z][a-z0-9_-]*"

_SEPARATOR = re.compile(r"\s*#")
_COMMAND = re.compile(r"\s*usage:[ \t]+(?P<words>\w[\w-]*(?:[ \t]+\w[\w-]*)*)", re.IGNORECASE)
_OPTION = re.compile(rf"\s+-(?P<short>[^\W_]),[ \t]*--(?P<long>{_FLAG})[ :]<(?P<key>{_VALUE})>\s+\S")
_SIMPLE_OPTION = re.compile(rf"\s+-{{1,2}}(?P<flag>{_FLAG})[ :]<(?P<key>{_VALUE})>\s+\S")
_SWITCH = re.compile(rf"\s+-(?P<short>[^\W_]),[ \t]*--(?P<long>{_FLAG})\s+\S")
_SIMPLE_SWITCH = re.compile(rf"\s+-{{1,2}}(?P<flag>{_FLAG})\s+\S")

_CARDINAL = re.compile(r"(?P<optional>\[)?<(?P<name>[\w-]+)>(?P<variadic>\.\.\.)?(?(optional)\])")


class LineKind(Enum):
    SEPARATOR = "separator"
    COMMAND = "command"
    OPTION = "option"
    SWITCH = "switch"
    TEXT = "text"


class Line(NamedTuple):
    """
    classified help text line.

    - kind: LineKind
    - text: the raw line
    - words: command path (COMMAND only)
    - remainder: text after the command path (COMMAND only)
    - names: flag spellings without dashes, short first (OPTION/SWITCH)
    - key: result key the spellings bind to (OPTION/SWITCH)
    """
    kind: LineKind
    text: str
    words: tuple[str, ...] = ()
    remainder: str = ""
    names: tuple[str, ...] = ()
    key: str | None = None


def classify(text, /):
    """
    classify one help text line (without its line break).
    """
    if _SEPARATOR.match(text):
        return Line(LineKind.SEPARATOR, text)
    if match := _COMMAND.match(text):
        return Line(
            LineKind.COMMAND,
            text,
            words=tuple(match["words"].split()),
            remainder=text[match.end():]
        )
    if match := _OPTION.match(text):
        return Line(LineKind.OPTION, text, names=(match["short"], match["long"]), key=match["key"])
    if match := _SIMPLE_OPTION.match(text):
        return Line(LineKind.OPTION, text, names=(match["flag"],), key=match["key"])
    if match := _SWITCH.match(text):
        # both spellings bind to the long name
        return Line(LineKind.SWITCH, text, names=(match["short"], match["long"]), key=match["long"])
    if match := _SIMPLE_SWITCH.match(text):
        return Line(LineKind.SWITCH, text, names=(match["flag"],), key=match["flag"])
    return Line(LineKind.TEXT, text)


def scan_cardinals(remainder, /):
    """
    yield the positional slots declared in the remainder of a usage line, in order.
    """
    for match in _CARDINAL.finditer(remainder):
        yield Cardinal(
            match["name"],
            required=match["optional"] is None,
            variadic=match["variadic"] is not None
        )


__all__ = (
    "LineKind",
    "Line",
    "classify",
    "scan_cardinals",
)
