"""
Entry points: read a grammar from a help text and match a command line.

    >>> result = invoke('''
    ... usage: test [options] <file>
    ...
    ...   -v, --verbose   print more
    ... ''', ["-v", "input.txt"])
    >>> result["file"], result["verbose"]
    ('input.txt', True)
"""
import logging

from .builder import build
from .commands import organize
from .utils import *

logger = logging.getLogger(__name__)


def parse(help, /):
    """
    read the grammar (a CommandModel) declared by a help text.

    DefinitionError subclasses are raised for broken help texts.
    """
    return organize(build(help))


def invoke(object, prompt=Unset, /):
    """
    match a command line against a grammar.

    parameters
    - object: a help text (str) or anything providing __invoke__(prompt),
      e.g. a CommandModel returned by parse().
    - prompt:
      • Unset: read sys.argv[1:].
      • str: split with shlex.split.
      • Iterable[str]: use items as tokens.

    returns
    - Result, or the return value of the installed error handler when the
      command line does not fit the grammar (see parseargv.on_error).
    """
    if isinstance(object, str):
        object = parse(object)
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)
    raise TypeError("invoke() argument must be a help text or provide an __invoke__ method")


__all__ = (
    "parse",
    "invoke",
)
