"""
Grammar construction tests (help text → commands).

Scope
- Validate help text collection, paragraph separators and implicit splits.
- Validate definition errors and the line numbers they carry.

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from unittest import TestCase

from parseargv.arguments import Cardinal, Option, Switch
from parseargv.builder import CommandBuilder, build
from parseargv.faults import (
    DefinitionError,
    DuplicateCommandError,
    DuplicateOptionError,
    DuplicateArgumentError,
    UsageLineMissingError,
)


class TestBuild(TestCase):
    """Behavioral tests for build()."""

    def testSingleCommand(self):
        command, = build("usage: test [options] <file1> [<file2>]\n  -s, --switch  simple switch\n")
        self.assertEqual(command.words, ("test",))
        self.assertEqual(command.line, 1)
        self.assertEqual(list(command.cardinals), ["file1", "file2"])
        self.assertEqual(command.switches["s"], Switch("switch"))
        self.assertIs(command.switches["s"], command.switches["switch"])

    def testHelpTextIncludesHeaderLines(self):
        text = "Demo header.\n\nusage: test\n\nOptions:\n  -o, --opt <option>  option"
        command, = build(text)
        self.assertEqual(command.help, text)
        self.assertEqual(command.switches["opt"], Option("option"))

    def testHelpTextIsTrimmed(self):
        command, = build("\n\n  \nusage: test\n\nsome text\n\n\n")
        self.assertEqual(command.help, "usage: test\n\nsome text")

    def testSeparatorsSplitHelpTexts(self):
        main, foo = build(
            "# main\n"
            "usage: multi <command>\n"
            "main text\n"
            "### foo\n"
            "foo header\n"
            "usage: multi foo\n"
            "foo text\n"
        )
        self.assertEqual(main.help, "usage: multi <command>\nmain text")
        self.assertEqual(foo.help, "foo header\nusage: multi foo\nfoo text")

    def testSecondUsageLineStartsNewHelpText(self):
        main, help = build("usage: multi <command>\nmain text\n\nusage: multi help [<command>...]\nhelp text")
        self.assertEqual(main.help, "usage: multi <command>\nmain text")
        self.assertEqual(help.help, "usage: multi help [<command>...]\nhelp text")
        self.assertEqual(help.words, ("multi", "help"))
        self.assertEqual(help.line, 4)

    def testSeparatorClosesCommand(self):
        with self.assertRaises(UsageLineMissingError) as context:
            build("usage: test\n#\n  -s, --switch  simple switch")
        self.assertEqual(context.exception.line, 3)

    def testOptionBeforeUsageLine(self):
        with self.assertRaises(UsageLineMissingError) as context:
            build("  -s, --switch  simple switch\nusage: test")
        self.assertEqual(str(context.exception), "options can only be defined after a 'usage' line - line 1")

    def testDuplicateCommand(self):
        with self.assertRaises(DuplicateCommandError) as context:
            build("usage: test\n\nusage: test")
        self.assertEqual(context.exception.line, 3)
        self.assertEqual(str(context.exception), "command already defined - test - line 3")

    def testDuplicateOption(self):
        with self.assertRaises(DuplicateOptionError) as context:
            build("usage: test\n  -s, --switch  one\n  -s, --second  two")
        self.assertEqual(str(context.exception), "option already defined - s")

    def testDuplicateArgument(self):
        with self.assertRaises(DuplicateArgumentError) as context:
            build("usage: test <file1> <file1>")
        self.assertEqual(str(context.exception), "argument already defined - file1")

    def testOptionKeyCollidesWithArgument(self):
        with self.assertRaises(DuplicateArgumentError):
            build("usage: test <file>\n  -o, --output <file>  output file")

    def testOptionSpellingCollidesWithArgument(self):
        with self.assertRaises(DuplicateArgumentError):
            build("usage: test <file>\n  --file  a switch")

    def testDefinitionErrorsAreValueErrors(self):
        with self.assertRaises(ValueError):
            build("usage: test <a> <a>")
        self.assertTrue(issubclass(DuplicateArgumentError, DefinitionError))

    def testNoCommand(self):
        self.assertEqual(build("just some text\n"), ())


class TestCommandBuilder(TestCase):
    """Behavioral tests for the mutable builder."""

    def testFinalizeFreezesTables(self):
        builder = CommandBuilder(("test",), ["usage: test"], line=1)
        builder.declare_cardinal(Cardinal("file"))
        builder.declare_switch(("v", "verbose"), "verbose")
        command = builder.finalize()
        builder.declare_option(("o",), "output")
        self.assertNotIn("o", command.switches)
        with self.assertRaises(TypeError):
            command.switches["x"] = Switch("x")

    def testSwitchAndOptionCannotShareKey(self):
        builder = CommandBuilder(("test",), [])
        builder.declare_switch(("v",), "mode")
        with self.assertRaises(DuplicateArgumentError):
            builder.declare_option(("m",), "mode")


if __name__ == '__main__':
    unittest.main()
