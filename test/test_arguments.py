# python
"""
Argument and schema construction tests.

Scope
- Validate public specs (Flag, Option, Cardinal): names, keys, labels, usage, metadata.
- Validate Subcommand/Selector/Schema structural rules raised at construction.

Conventions
- Test method names follow CamelCase per project convention.
- Construction defects are TypeError (wrong kind) or ValueError (wrong value).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argot import Flag, Option, Cardinal, Schema, Selector, Subcommand, match
from argot.utils import Unset


class TestFlag(TestCase):
    """Behavioral tests for Flag specifications."""

    def testRequiresAtLeastOneName(self):
        with self.assertRaises(TypeError):
            Flag()

    def testRejectsMalformedNames(self):
        for name in ("verbose", "-vv", "--v", "---x", "--a=b", "-", "--"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                Flag(name)

    def testRejectsNonStringNames(self):
        with self.assertRaises(TypeError):
            Flag(1)

    def testRejectsDuplicateNames(self):
        with self.assertRaises(ValueError):
            Flag("-v", "-v")

    def testNamesKeepDeclarationOrder(self):
        flag = Flag("--ccc", "-x", "-y")
        self.assertEqual(flag.names, ("--ccc", "-x", "-y"))
        self.assertEqual(flag.shorts, ("-x", "-y"))
        self.assertEqual(flag.longs, ("--ccc",))

    def testUsageListsShortNamesFirst(self):
        self.assertEqual(Flag("--ccc", "-x", "-y", "-z").usage, "-x, -y, -z, --ccc")

    def testKeyFromFirstLongName(self):
        self.assertEqual(Flag("-n", "--no-checkout").key, "no_checkout")

    def testKeyFromFirstShortNameWithoutLong(self):
        self.assertEqual(Flag("-v", "-w").key, "v")

    def testPrimaryName(self):
        self.assertEqual(Flag("-a", "--all", "--every").primary, "--all")
        self.assertEqual(Flag("-a").primary, "-a")

    def testDefaults(self):
        self.assertIs(Flag("-v").default, False)
        self.assertEqual(Flag("-v", count=True).default, 0)

    def testCountMustBeBoolean(self):
        with self.assertRaises(TypeError):
            Flag("-v", count=1)

    def testUnicodeNames(self):
        self.assertEqual(Flag("-ä", "--größe").key, "größe")

    def testPropertiesAreReadOnly(self):
        flag = Flag("-v")
        with self.assertRaises(AttributeError):
            flag.names = ("-w",)

    def testRepr(self):
        self.assertEqual(repr(Flag("-v")), "flag(names=('-v',), count=False, conflicts=(), descr=None)")


class TestOption(TestCase):
    """Behavioral tests for Option specifications."""

    def testDefaultMetavar(self):
        self.assertEqual(Option("--ddd").usage, "--ddd <value>")

    def testCustomMetavar(self):
        self.assertEqual(Option("-l", "--log", metavar="level").usage, "-l, --log <level>")

    def testMetavarValidation(self):
        with self.assertRaises(TypeError):
            Option("--log", metavar=3)
        with self.assertRaises(ValueError):
            Option("--log", metavar=" ")

    def testTypeMustBeCallable(self):
        with self.assertRaises(TypeError):
            Option("--log", type="int")

    def testDefaults(self):
        self.assertIsNone(Option("--log").default)
        self.assertEqual(Option("--log", variadic=True).default, [])

    def testVariadicMustBeBoolean(self):
        with self.assertRaises(TypeError):
            Option("--log", variadic="yes")

    def testDescrValidation(self):
        self.assertIsNone(Option("--log").descr)
        self.assertEqual(Option("--log", descr="  set log level ").descr, "set log level")
        with self.assertRaises(ValueError):
            Option("--log", descr="  ")
        with self.assertRaises(TypeError):
            Option("--log", descr=None)

    def testConflictsNormalization(self):
        self.assertEqual(Option("--log", conflicts="output").conflicts, ("output",))
        self.assertEqual(Option("--log", conflicts=["a", "b", "a"]).conflicts, ("a", "b"))
        self.assertEqual(Option("--log").conflicts, ())

    def testConflictIdsMustBeHashable(self):
        with self.assertRaises(TypeError):
            Option("--log", conflicts=[["a"]])


class TestCardinal(TestCase):
    """Behavioral tests for Cardinal (positional) specifications."""

    def testUsageByArity(self):
        self.assertEqual(Cardinal("aaa").usage, "<aaa>")
        self.assertEqual(Cardinal("aaa", nargs="?").usage, "[<aaa>]")
        self.assertEqual(Cardinal("bbb", nargs="+").usage, "<bbb>...")
        self.assertEqual(Cardinal("bbb", nargs="*").usage, "[<bbb>...]")

    def testRequiredAndVariadic(self):
        self.assertEqual(
            [(c.required, c.variadic) for c in map(lambda nargs: Cardinal("x", nargs=nargs), (Unset, "?", "+", "*"))],
            [(True, False), (False, False), (True, True), (False, True)],
        )

    def testLabelAndKey(self):
        cardinal = Cardinal("value-b")
        self.assertEqual(cardinal.label, "<value-b>")
        self.assertEqual(cardinal.key, "value_b")

    def testNargsValidation(self):
        with self.assertRaises(ValueError):
            Cardinal("x", nargs="...")
        with self.assertRaises(TypeError):
            Cardinal("x", nargs=2)

    def testNameValidation(self):
        with self.assertRaises(TypeError):
            Cardinal(3)
        for name in ("", "-x", "a b", "<x>"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                Cardinal(name)

    def testDefaults(self):
        self.assertIsNone(Cardinal("x").default)
        self.assertEqual(Cardinal("x", nargs="*").default, [])


class TestSubcommandAndSelector(TestCase):
    """Construction rules for subcommands and selectors."""

    def testSubcommandNamesAndUsage(self):
        subcommand = Subcommand("list", "ls", "l", schema=Schema())
        self.assertEqual(subcommand.names, ("list", "ls", "l"))
        self.assertEqual(subcommand.usage, "list, ls, l")

    def testSubcommandRequiresSchema(self):
        with self.assertRaises(TypeError):
            Subcommand("list", schema="nope")

    def testSubcommandRejectsDuplicateAliases(self):
        with self.assertRaises(ValueError):
            Subcommand("list", "ls", "ls", schema=Schema())

    def testSelectorRejectsAliasCollisions(self):
        with self.assertRaises(ValueError):
            Selector(
                "action",
                Subcommand("remove", "rm", schema=Schema()),
                Subcommand("rename", "rm", schema=Schema()),
            )

    def testSelectorRequiresSubcommands(self):
        with self.assertRaises(TypeError):
            Selector("action")
        with self.assertRaises(TypeError):
            Selector("action", "add")

    def testSelectorLookupIsCaseSensitive(self):
        remove = Subcommand("remove", "rm", schema=Schema())
        selector = Selector("action", remove)
        self.assertIs(selector.lookup("rm"), remove)
        self.assertIsNone(selector.lookup("RM"))

    def testSelectorUsage(self):
        add = Subcommand("add", schema=Schema())
        self.assertEqual(Selector("action", add).usage, "<action>")
        self.assertEqual(Selector("action", add, optional=True).usage, "[<action>]")


class TestSchema(TestCase):
    """Construction rules for schemas."""

    def testAutoHelpAppendedAfterDeclaredOptions(self):
        force = Flag("--force")
        schema = Schema(force)
        self.assertEqual([switch.names for switch in schema.switches], [("--force",), ("-h", "--help")])
        self.assertIs(schema.lookup("--help"), schema.helper)
        self.assertEqual(schema.options, (force,))

    def testAutoHelpDisabled(self):
        schema = Schema(Flag("-h", "--host"), autohelp=False)
        self.assertIsNone(schema.helper)
        self.assertIsNone(schema.lookup("--help"))

    def testCustomHelpFlag(self):
        helper = Flag("-?", "--usage")
        self.assertIs(Schema(autohelp=helper).helper, helper)

    def testCountingHelpFlagRejected(self):
        with self.assertRaises(ValueError):
            Schema(autohelp=Flag("--usage", count=True))

    def testAutoVersionFollowsVersion(self):
        self.assertIsNone(Schema().versioner)
        self.assertEqual(Schema(version="1.0").versioner.names, ("-V", "--version"))
        self.assertIsNone(Schema(version="1.0", autoversion=False).versioner)

    def testAutoVersionRequiresVersion(self):
        with self.assertRaises(ValueError):
            Schema(autoversion=True)

    def testNameClashWithAutoHelp(self):
        with self.assertRaises(ValueError):
            Schema(Flag("-h", "--host"))

    def testDuplicateOptionNamesAcrossSpecs(self):
        with self.assertRaises(ValueError):
            Schema(Flag("-v", "--verbose"), Option("-v", "--value"))

    def testDuplicateResultKeys(self):
        with self.assertRaises(ValueError):
            Schema(Flag("--dry-run"), Cardinal("dry_run"))

    def testResultKeysCannotShadowResultAttributes(self):
        for argument in (Option("--items"), Cardinal("path"), Selector("command", Subcommand("add", schema=Schema())), Flag("--get")):
            with self.subTest(key=argument.key), self.assertRaises(ValueError):
                Schema(argument)

    def testAttributeAccessAgreesWithItemAccess(self):
        schema = Schema(Option("--entries"), Cardinal("target"), Cardinal("rest", nargs="*"))
        result = match(schema, ["--entries", "x", "p", "c"])
        for key in result:
            self.assertEqual(getattr(result, key), result[key])

    def testRejectsForeignArguments(self):
        with self.assertRaises(TypeError):
            Schema("--force")

    def testAtMostOneVariadicPositional(self):
        with self.assertRaises(TypeError):
            Schema(Cardinal("a", nargs="*"), Cardinal("b", nargs="+"))

    def testVariadicPositionalMayPrecedeRequiredOnes(self):
        schema = Schema(Cardinal("src", nargs="+"), Cardinal("dest"))
        self.assertEqual([argument.key for argument in schema.positionals], ["src", "dest"])

    def testSelectorMustBeLast(self):
        selector = Selector("action", Subcommand("add", schema=Schema()))
        with self.assertRaises(TypeError):
            Schema(selector, Cardinal("file"))

    def testSelectorExcludesVariadicPositional(self):
        selector = Selector("action", Subcommand("add", schema=Schema()))
        with self.assertRaises(TypeError):
            Schema(Cardinal("files", nargs="*"), selector)

    def testSelectorProperty(self):
        selector = Selector("action", Subcommand("add", schema=Schema()))
        self.assertIs(Schema(Flag("-v"), selector).selector, selector)
        self.assertIsNone(Schema(Cardinal("x")).selector)

    def testRequiredGroupNeedsMembers(self):
        with self.assertRaises(ValueError):
            Schema(Flag("-a", conflicts="files"), required="mode")

    def testRequiredGroupNormalization(self):
        schema = Schema(Flag("-a", conflicts="files"), Cardinal("c", nargs="*", conflicts="files"), required="files")
        self.assertEqual(schema.required, ("files",))
        self.assertEqual([member.key for member in schema.members("files")], ["a", "c"])

    def testOptionsAndPositionalsMayInterleave(self):
        schema = Schema(Cardinal("x"), Flag("-v"), Cardinal("y"))
        self.assertEqual([argument.key for argument in schema.arguments], ["v", "x", "y"])

    def testNameAndVersionValidation(self):
        with self.assertRaises(TypeError):
            Schema(name=1)
        with self.assertRaises(ValueError):
            Schema(name="  ")
        with self.assertRaises(ValueError):
            Schema(version="")


if __name__ == "__main__":
    unittest.main()
