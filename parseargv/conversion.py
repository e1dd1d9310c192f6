r"""
parseargv conversions: turn command line strings into typed values.

A converter is a callable

    converter(value, *args, error, **options)

where value is the raw string, args/options are the extra arguments given
to Result.convert() and error(message) aborts the conversion. error() never
returns; the resulting ConversionError names the command and the result key.

Registry
- define(name, function) registers a converter, define(name, existing)
  creates an alias of a registered type; define(name) is the decorator form.
- lookup(type) resolves:
  • a registered name or type (e.g. "integer", int, "file", re.Pattern);
  • a list/tuple of strings: the value must be one of them;
  • a one element list/tuple, "array[type]" or "[type]": comma separated
    list converted element-wise;
  • a compiled regular expression: the value must match it ("match" as
    extra argument returns the match object instead of the string).
- Conversion[type] is a synonym for lookup(type).

Registration is guarded by a lock; lookups read the registry without one.
"""
import datetime
import logging
import numbers
import os
import re
import sys
import threading

from .utils import *

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_registry = {}


def define(name, function=Unset, /):
    """
    register a converter under name (a string or a type).

    forms
    - define(name, function)  → registers function.
    - define(name, existing)  → alias: existing is a registered name or type.
    - @define(name)           → decorator form of the first one.
    """
    if function is Unset:
        def decorator(function):
            define(name, function)
            return function
        return rename(decorator, "define")

    if not callable(function) or isinstance(function, type):
        function = lookup(function)
    with _lock:
        _registry[name] = function
    logger.debug("conversion %r defined", name)
    return function


def lookup(type, /):
    """
    return the converter for type; raises ValueError for unknown types.
    """
    if isinstance(type, re.Pattern):
        return _matcher(type)
    if isinstance(type, (list, tuple)):
        if len(type) == 1:
            return _array_of(lookup(type[0]))
        return _one_of([str(item).strip() for item in type])
    if (converter := _registry.get(type)) is not None:
        return converter
    if isinstance(type, str) and (match := re.fullmatch(r"\s*(?:array|list)?\[(.+)\]\s*", type)):
        return _array_of(lookup(match[1].strip()))
    raise ValueError("unknown conversion type - %r" % (type,))


class Conversion:
    """
    Conversion["integer"] is lookup("integer").
    """

    def __class_getitem__(cls, type):
        return lookup(type)

    def __init_subclass__(cls, **options):
        raise TypeError("type 'Conversion' is not an acceptable base type")


def _one_of(choices):
    message = "argument must be one of %s" % ", ".join("`%s`" % choice for choice in choices)

    @rename("one_of")
    def convert(value, *args, error, **options):
        if value in choices:
            return value
        error(message)

    return convert


def _matcher(pattern):
    @rename("matcher")
    def convert(value, *args, error, **options):
        if (match := pattern.search(value)) is not None:
            return match if "match" in args else value
        error("argument must match %s" % pattern.pattern)

    return convert


def _array_of(converter):
    @rename("array_of")
    def convert(value, *args, error, **options):
        return [converter(item, *args, error=error, **options) for item in array(value, error=error)]

    return convert


# --- numbers ---

_RESTRICTIONS = {
    "positive": lambda number: number > 0,
    "negative": lambda number: number < 0,
    "nonzero": lambda number: number != 0,
}

_FLOAT = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _restrict(number, restrictions, message, error):
    for restriction in restrictions:
        try:
            check = _RESTRICTIONS[restriction]
        except KeyError:
            raise ValueError("unknown number restriction - %r" % (restriction,)) from None
        if not check(number):
            error(message % restriction)
    return number


def integer(value, *args, error, **options):
    try:
        number = int(value, 10)
    except ValueError:
        error("argument have to be an integer")
    return _restrict(number, args, "%s integer number expected", error)


def float_number(value, *args, error, **options):
    # like strtod: the longest numeric prefix counts, "42.21.21" is 42.21
    if (match := _FLOAT.match(value)) is None:
        error("argument must be a float number")
    return _restrict(float(match[0]), args, "argument must be a %s float number", error)


def number(value, *args, error, **options):
    try:
        result = int(value, 10)
    except ValueError:
        try:
            result = float(value)
        except ValueError:
            error("argument have to be a number")
    return _restrict(result, args, "%s number expected", error)


def positive(value, *args, error, **options):
    return number(value, "positive", error=error)


def negative(value, *args, error, **options):
    return number(value, "negative", error=error)


def float_positive(value, *args, error, **options):
    return float_number(value, "positive", error=error)


def float_negative(value, *args, error, **options):
    return float_number(value, "negative", error=error)


_UNITS = "kmgtpezy"
_BYTE = re.compile(r"\s*(?P<number>\d+(?:\.\d+)?)\s*(?P<unit>[kmgtpezy]?)(?:b|byte|bytes)?\s*", re.IGNORECASE)


def byte(value, *args, error, **options):
    """
    byte count with an optional binary unit: "42", "42.21kByte", "1.5M", "2GB".
    """
    if (match := _BYTE.fullmatch(value)) is None:
        error("argument must be a byte number")
    factor = 1024 ** (_UNITS.index(match["unit"].lower()) + 1) if match["unit"] else 1
    if "." not in match["number"]:
        return int(match["number"]) * factor
    return int(float(match["number"]) * factor)


# --- strings ---

def string(value, *args, error, **options):
    if not value:
        error("argument can not be empty")
    return value


def upcase(value, *args, error, **options):
    return string(value, error=error).upper()


def downcase(value, *args, error, **options):
    return string(value, error=error).lower()


def capitalize(value, *args, error, **options):
    return string(value, error=error).capitalize()


def regexp(value, *args, error, **options):
    value = string(value, error=error)
    if len(value) > 1 and value.startswith("/") and value.endswith("/"):
        value = value[1:-1]
    try:
        return re.compile(value)
    except re.error as e:
        error("invalid regular expression; %s" % e)


def array(value, *args, error, **options):
    """
    comma separated list, optionally in brackets; blanks and duplicates are dropped.
    """
    if value.startswith("[") and value.endswith("]"):
        value = value[1:-1]
    items = list(dict.fromkeys(item.strip() for item in value.split(",")))
    if "" in items:
        items.remove("")
    if not items:
        error("argument can not be empty")
    return items


# --- files ---

_ATTRIBUTES = {
    "readable": lambda name: os.access(name, os.R_OK),
    "writable": lambda name: os.access(name, os.W_OK),
    "executable": lambda name: os.access(name, os.X_OK),
    "symlink": os.path.islink,
    "empty": lambda name: os.path.getsize(name) == 0,
}


def _check_attributes(name, attributes, kind, error):
    for attribute in attributes:
        try:
            check = _ATTRIBUTES[attribute]
        except KeyError:
            raise ValueError("unknown %s attribute - %r" % (kind, attribute)) from None
        if not check(name):
            error("%s is not %s" % (kind, attribute))


def file_name(value, *args, error, rel=None, **options):
    value = os.path.expanduser(string(value, error=error))
    if rel is not None:
        value = os.path.join(os.path.expanduser(rel), value)
    return os.path.abspath(value)


def file(value, *args, error, **options):
    name = file_name(value, error=error, **options)
    if not os.path.exists(name):
        error("file does not exist")
    if not os.path.isfile(name):
        error("argument must be a file")
    _check_attributes(name, args, "file", error)
    return name


def directory(value, *args, error, **options):
    name = file_name(value, error=error, **options)
    if not os.path.exists(name):
        error("directory does not exist")
    if not os.path.isdir(name):
        error("argument must be a directory")
    _check_attributes(name, args, "directory", error)
    return name


def file_content(value, *args, error, **options):
    """
    content of the named file; "-" reads standard input.
    """
    if value == "-":
        return sys.stdin.read()
    with open(file(value, *args, error=error, **options)) as stream:
        return stream.read()


# --- dates and times ---

_MONTHS = (
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
)
_MONTH = r"(?P<name>[a-z]{3,9})"
_DATES = tuple(re.compile(pattern, re.IGNORECASE) for pattern in (
    r"(?P<year>\d{4})[-/](?P<month>\d{1,2})[-/](?P<day>\d{1,2})",
    r"(?P<day>\d{1,2})\.(?P<month>\d{1,2})\.(?P<year>\d{4})",
    r"(?P<year>\d{4})(?P<month>\d{2})(?P<day>\d{2})",
    r"(?P<month>\d{2})(?P<day>\d{2})",
    r"(?P<day>\d{1,2})",
    rf"{_MONTH}[-. ]?(?P<day>\d{{1,2}})(?:[-., ]+(?P<year>\d{{4}}))?",
    rf"(?P<day>\d{{1,2}})[-. ]?{_MONTH}(?:[-., ]+(?P<year>\d{{4}}))?",
))
_TIME = re.compile(r"(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2}))?")
_ZONE = re.compile(
    r"(?:(?P<name>gmt|utc|z)\s*)?(?:(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?)?",
    re.IGNORECASE
)


def _parse_date(text, reference):
    """
    return (year, month, day) of a date text, completed from reference; None when no pattern matches.
    """
    for pattern in _DATES:
        if (match := pattern.fullmatch(text)) is None:
            continue
        fields = match.groupdict()
        if (name := fields.get("name")) is not None:
            if (month := name[:3].lower()) not in _MONTHS:
                return None
            fields["month"] = _MONTHS.index(month) + 1
        return (
            int(fields.get("year") or reference.year),
            int(fields.get("month") or reference.month),
            int(fields["day"]),
        )
    return None


def _parse_zone(text):
    if not text:
        return None
    if (match := _ZONE.fullmatch(text)) is None or not (match["name"] or match["sign"]):
        raise ValueError("invalid time zone - %r" % text)
    if not match["sign"]:
        return datetime.timezone.utc
    offset = datetime.timedelta(hours=int(match["hours"]), minutes=int(match["minutes"] or 0))
    return datetime.timezone(-offset if match["sign"] == "-" else offset)


def date(value, *args, error, reference=None, **options):
    """
    calendar date: "2022-01-02", "20220131", "0131" (month and day), "17"
    (day), "may-12", "1.april", "12.05.2022". missing parts come from
    reference (default: today).
    """
    reference = reference or datetime.date.today()
    try:
        if (fields := _parse_date(value.strip(), reference)) is None:
            error("argument must be a date")
        return datetime.date(*fields)
    except ValueError:
        error("argument must be a date")


def time(value, *args, error, reference=None, **options):
    """
    point in time: an optional date (see date()), an optional "HH:MM[:SS]"
    time and an optional zone ("GMT", "UTC", "utc+2", "+02:00"). without a
    zone a naive datetime is returned.
    """
    reference = reference or datetime.datetime.now()
    value = value.strip()
    try:
        return datetime.datetime.fromisoformat(value)
    except ValueError:
        pass
    try:
        if (match := _TIME.search(value)) is None:
            head, clock, tail = value, (0, 0, 0), ""
        else:
            head, tail = value[:match.start()].strip(), value[match.end():].strip()
            clock = (int(match["hour"]), int(match["minute"]), int(match["second"] or 0))
        if not head:
            fields = (reference.year, reference.month, reference.day)
        elif (fields := _parse_date(head, reference)) is None:
            error("argument must be a time")
        return datetime.datetime(*fields, *clock, tzinfo=_parse_zone(tail))
    except ValueError:
        error("argument must be a time")


for _name, _function in (
    ("integer", integer),
    ("float", float_number),
    ("number", number),
    ("positive", positive),
    ("negative", negative),
    ("float_positive", float_positive),
    ("float_negative", float_negative),
    ("byte", byte),
    ("string", string),
    ("upcase", upcase),
    ("downcase", downcase),
    ("capitalize", capitalize),
    ("regexp", regexp),
    ("array", array),
    ("file_name", file_name),
    ("file", file),
    ("directory", directory),
    ("file_content", file_content),
    ("date", date),
    ("time", time),
):
    define(_name, _function)

for _alias, _name in (
    ("int", "integer"),
    (int, "integer"),
    (float, "float"),
    (numbers.Number, "number"),
    ("str", "string"),
    (str, "string"),
    ("regex", "regexp"),
    (re.Pattern, "regexp"),
    ("list", "array"),
    (list, "array"),
    ("dir", "directory"),
    (datetime.date, "date"),
    (datetime.datetime, "time"),
):
    define(_alias, _name)

del _name, _function, _alias


__all__ = (
    "Conversion",
    "define",
    "lookup",
)
