"""
check the syntax of help texts: python -m parseargv [options] <files>...
"""
import sys

from rich.console import Console

from . import __version__
from .arguments import Cardinal, Switch, spell
from .faults import DefinitionError
from .parsing import parse, invoke

__prog__ = "check"

HELP = """\
Test the syntax of your help text for parseargv.

Usage: check [options] <files>...

Options:
  -f, --format <format>   display format: default, json, usage
  -c, --command <name>    display command with <name> only
  -h, --help              display this help
  -v, --version           display version information
"""

console = Console()


def describe(command, /):
    """
    plain data description of a command (json friendly).
    """
    arguments = {}
    for name, cardinal in command.cardinals.items():
        arguments[name] = {
            "type": "argument_array" if cardinal.variadic else "argument",
            "required": cardinal.required,
        }
    for target, names in command.options.items():
        arguments[target.key] = {
            "type": "switch" if isinstance(target, Switch) else "option",
            "names": list(names),
        }
    return {
        "full_name": command.full_name,
        "name": command.name,
        "line": command.line,
        "help": command.help,
        "arguments": arguments,
    }


def _usage(command):
    parts = ["usage: %s" % command.full_name]
    for name, info in describe(command)["arguments"].items():
        match info["type"]:
            case "argument" | "argument_array":
                parts.append(str(Cardinal(
                    name,
                    required=info["required"],
                    variadic=info["type"] == "argument_array"
                )))
            case "option":
                parts.append("[%s <%s>]" % (", ".join(map(spell, info["names"])), name))
            case "switch":
                parts.append("[%s]" % ", ".join(map(spell, info["names"])))
    return " ".join(parts)


def _default(command):
    lines = ["%s: %s" % ("Command" if command.name == command.full_name else "Subcommand", command.name)]
    arguments = describe(command)["arguments"]
    if not arguments:
        return lines[0]
    width = max(map(len, arguments))
    for name, info in arguments.items():
        match info["type"]:
            case "argument":
                text = "argument: required" if info["required"] else "argument"
            case "argument_array":
                text = "arguments array: required" if info["required"] else "arguments array"
            case kind:
                text = "%s %s" % (kind, ", ".join(map(spell, info["names"])))
        lines.append("   %s   %s" % (name.ljust(width), text))
    return "\n".join(lines)


def main(prompt=None, /):
    args = invoke(HELP, sys.argv[1:] if prompt is None else prompt)

    if args["help"]:
        console.print(args.help, markup=False, highlight=False)
        return
    if args["version"]:
        console.print("check v%s" % __version__, markup=False, highlight=False)
        return

    try:
        model = parse("\n".join(args.convert("file_content", "files")))
    except DefinitionError as e:
        return args.error("invalid syntax - %s" % e)

    commands = list(model)
    if "name" in args:
        if (command := model.find(args.convert("string", "name"))) is None:
            return args.error("no such command - %s" % args["name"])
        commands = [command]

    match args.convert(["default", "json", "usage"], "format", default="default"):
        case "json":
            console.print_json(data=[
                {key: value for key, value in describe(command).items() if key != "help"}
                for command in commands
            ])
        case "usage":
            console.print("\n".join(map(_usage, commands)), markup=False, highlight=False)
        case _:
            console.print("\n\n".join(map(_default, commands)), markup=False, highlight=False)


if __name__ == '__main__':
    main()
