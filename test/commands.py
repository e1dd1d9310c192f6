"""
Command model tests (organization, resolution, sub-command invocation).

Scope
- Validate main command selection and sub-command naming rules.
- Validate longest-prefix resolution of command lines.
- Validate sub-command invocation end to end.

Conventions
- Test method names follow CamelCase per project convention.
- User errors are re-raised (on_error(None)) so they can be asserted.
"""

import copy
import unittest
from unittest import TestCase

from parseargv import invoke, parse, on_error, Command, CommandModel, organize
from parseargv.faults import (
    NoCommandDefinedError,
    NoDefaultCommandError,
    InvalidSubcommandNameError,
    DuplicateCommandError,
    UnknownCommandError,
    ArgumentMissingError,
)

MULTI = """\
### main command:

This is a definition for a multi-command CLI (like git).

Usage: multi [options] <command>

Commands:
  foo       foo command
  foo bar   foo subcommand bar
  help      help command

Options:
  -h, --help      shortcut for 'help' command
  -v, --version   'version' command shortcut

Use `multi help <command>` to get command specific help

### subcommand foo:

Header text for command foo.

Usage: multi foo [options] <parameter>

This is the 'foo' command. Notice there is a `foo bar` subcommand.

Options:
  -s, --switch             simple switch (boolean option)
  -o, --option <option>    option with parameter

#### subcommand foo bar:

Usage: multi foo bar [options] [<files>...]

This is the 'foo bar' command.

Options:
  -s, --switch            simple switch (boolean option)
  -o, --option:<option>   option with parameter

Usage: multi help [<command>...]

Show help or <command> specific help.
"""


class TestOrganize(TestCase):
    """Behavioral tests for organize()."""

    def testNoCommand(self):
        with self.assertRaises(NoCommandDefinedError) as context:
            organize([])
        self.assertEqual(str(context.exception), "help text does not define a valid command")

    def testSingleCommandIsMainWhateverItsName(self):
        model = organize([Command("multi foo")])
        self.assertEqual(model.main.full_name, "multi foo")
        self.assertEqual(len(model), 1)

    def testNoDefaultCommand(self):
        with self.assertRaises(NoDefaultCommandError):
            organize([Command("multi foo"), Command("multi bar")])

    def testInvalidSubcommandName(self):
        with self.assertRaises(InvalidSubcommandNameError) as context:
            organize([Command("multi"), Command("other x")])
        self.assertEqual(str(context.exception), "invalid sub-command name for multi - other x")

    def testSecondMainCommandIsInvalid(self):
        with self.assertRaises(InvalidSubcommandNameError):
            organize([Command("multi"), Command("other")])

    def testLocalNames(self):
        model = parse(MULTI)
        self.assertEqual([command.name for command in model], ["multi", "foo", "foo bar", "help"])
        self.assertEqual(model.find("foo bar").full_name, "multi foo bar")
        self.assertEqual(model.find(("multi", "help")).name, "help")
        self.assertIsNone(model.find("baz"))

    def testMainMayBeDeclaredLater(self):
        model = parse("usage: multi foo\n#\nusage: multi\n")
        self.assertEqual(model.main.full_name, "multi")
        self.assertEqual([command.name for command in model], ["multi", "foo"])

    def testReplaceCommand(self):
        command = Command("multi foo", help="text")
        renamed = copy.replace(command, name="foo")
        self.assertEqual(renamed.name, "foo")
        self.assertEqual(renamed.help, "text")
        self.assertEqual(command.name, "multi foo")


class TestResolve(TestCase):
    """Behavioral tests for CommandModel.resolve()."""

    def setUp(self):
        self.model = parse(MULTI)

    def testEmptyCommandLine(self):
        command, tokens = self.model.resolve([])
        self.assertIs(command, self.model.main)
        self.assertEqual(tokens, [])

    def testLeadingOptionSelectsMain(self):
        command, tokens = self.model.resolve(["-h", "foo"])
        self.assertIs(command, self.model.main)
        self.assertEqual(tokens, ["-h", "foo"])

    def testLongestPrefixWins(self):
        command, tokens = self.model.resolve(["foo", "bar", "-s", "file"])
        self.assertEqual(command.name, "foo bar")
        self.assertEqual(tokens, ["-s", "file"])

    def testShorterPrefix(self):
        command, tokens = self.model.resolve(["foo", "baz"])
        self.assertEqual(command.name, "foo")
        self.assertEqual(tokens, ["baz"])

    def testUnknownCommand(self):
        with self.assertRaises(UnknownCommandError) as context:
            self.model.resolve(["baz", "qux"])
        self.assertEqual(str(context.exception), "multi: invalid command - baz")

    def testPathLeavesArgumentsForBinding(self):
        model = parse("usage: multi <command>\n\nusage: multi var add <name> <value>")
        command, tokens = model.resolve(["var", "add", "x", "1"])
        self.assertEqual(command.name, "var add")
        self.assertEqual(tokens, ["x", "1"])
        self.assertEqual(invoke(model, ["var", "add", "x", "1"]).to_dict(), {"name": "x", "value": "1"})

    def testFlagOnUsageLineIsNotACommandWord(self):
        with self.assertRaises(DuplicateCommandError) as context:
            parse("usage: multi <command>\n  -v, --version  show version\n\nusage: multi --version")
        self.assertEqual(context.exception.line, 4)

    def testSingleCommandNeverResolvesNames(self):
        model = parse("usage: test <file>")
        command, tokens = model.resolve(["foo"])
        self.assertIs(command, model.main)
        self.assertEqual(tokens, ["foo"])


class TestSubcommands(TestCase):
    """End to end invocation of a multi-command help text."""

    def setUp(self):
        self.handler = on_error(None)

    def tearDown(self):
        on_error(self.handler)

    def testMainRequiresCommand(self):
        with self.assertRaises(ArgumentMissingError) as context:
            invoke(MULTI, [])
        self.assertEqual(str(context.exception), "multi: argument missing - <command>")

    def testMainHelp(self):
        result = invoke(MULTI, ["-h"])
        self.assertEqual(result.command_name, "multi")
        self.assertTrue(result.is_true("help"))
        self.assertFalse(result.is_true("version"))

    def testMainVersion(self):
        result = invoke(MULTI, "-v")
        self.assertTrue(result["version"])
        self.assertFalse(result["help"])

    def testFoo(self):
        result = invoke(MULTI, "foo -s -o opt arg1")
        self.assertEqual(result.command_name, "foo")
        self.assertEqual(result.to_dict(), {"switch": True, "option": "opt", "parameter": "arg1"})

    def testFooBar(self):
        result = invoke(MULTI, ["foo", "bar", "-s", "-o", "opt", "arg1"])
        self.assertEqual(result.command_name, "foo bar")
        self.assertEqual(result["files"], ("arg1",))

    def testHelpCommand(self):
        result = invoke(MULTI, ["help", "foo", "bar"])
        self.assertEqual(result.command_name, "help")
        self.assertEqual(result["command"], ("foo", "bar"))
        self.assertEqual(result.help, "Usage: multi help [<command>...]\n\nShow help or <command> specific help.")

    def testSubcommandHelpIsNotShortCircuited(self):
        model = parse("usage: multi\n#\nusage: multi foo <file>\n  -h, --help  help")
        with self.assertRaises(ArgumentMissingError):
            invoke(model, "foo --help")

    def testHelpTextOfSubcommandIncludesHeader(self):
        foo = parse(MULTI).find("foo")
        self.assertTrue(foo.help.startswith("Header text for command foo.\n\nUsage: multi foo"))
        self.assertTrue(foo.help.endswith("-o, --option <option>    option with parameter"))

    def testUnknownCommandThroughHandler(self):
        on_error(lambda fault: ("handled", str(fault), fault.options.get("hint")))
        self.assertEqual(
            invoke(MULTI, "baz"),
            ("handled", "multi: invalid command - baz", "try 'multi --help' for more information")
        )

    def testInvokeRejectsNonStringTokens(self):
        with self.assertRaises(TypeError):
            invoke(MULTI, ["foo", 1])

    def testInvokeRejectsUnknownObjects(self):
        with self.assertRaises(TypeError):
            invoke(42, [])

    def testModelIsReusable(self):
        model = parse(MULTI)
        self.assertIsInstance(model, CommandModel)
        self.assertEqual(invoke(model, "foo x")["parameter"], "x")
        self.assertEqual(invoke(model, "foo y")["parameter"], "y")


if __name__ == '__main__':
    unittest.main()
