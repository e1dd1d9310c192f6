from rich.pretty import pprint

from parseargv import *

HELP = """\
Manage the variables of a project.

usage: vars [options] [<file>]

  -h, --help          display this help
  -v, --version       display version information

#
usage: vars set [options] <name> <value>

  -f, --force         overwrite an existing variable
  -s, --scope <scope> one of: user, project

#
usage: vars unset <names>...
"""


if __name__ == '__main__':
    result = invoke(HELP)
    pprint(result)
    if result.command_name == "set":
        pprint(result.convert(["user", "project"], "scope", default="project"))
