"""
Arguments module behavioral tests.

Scope
- Validate Argument construction, normalization and read-only exposure.
- Validate the tagged variants produced for defaults and checks.
- Validate declaration faults raised for malformed or incompatible properties.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import re
import unittest
from unittest import TestCase

from declargs import (
    Argument,
    Literal,
    Computed,
    Predicate,
    Pattern,
    Builtin,
    label,
    DuplicateAliasError,
    InvalidNameError,
    InvalidPropertyError,
    IncompatiblePropertiesError,
    InvalidDefaultError,
    InvalidCheckError,
    FaultCode,
)
from declargs.utils import Unset


class TestArgument(TestCase):
    """Behavioral tests for plain Argument construction."""

    def testArgumentDefaults(self):
        a = Argument("foo")
        self.assertEqual(a.name, "foo")
        self.assertEqual(a.aliases, ())
        self.assertFalse(a.list)
        self.assertFalse(a.bool)
        self.assertIs(a.default, Unset)
        self.assertIs(a.check, Unset)
        self.assertIs(a.transform, Unset)
        self.assertIs(a.description, Unset)

    def testArgumentDescribeFallsBack(self):
        self.assertEqual(Argument("foo").describe(), "No Description")
        self.assertEqual(Argument("foo", description="  does foo ").describe(), "does foo")

    def testArgumentSingleAliasBecomesTuple(self):
        a = Argument("foo", alias="f")
        self.assertEqual(a.aliases, ("f",))
        self.assertEqual(a.names, ("foo", "f"))

    def testArgumentAliasIterable(self):
        a = Argument("foo", alias=["f", "fo0"])
        self.assertEqual(a.aliases, ("f", "fo0"))

    def testArgumentSwitchesAreNormalizedToBool(self):
        a = Argument("items", list=1)
        self.assertIs(a.list, True)
        self.assertIs(a.bool, False)

    def testArgumentIsReadOnly(self):
        a = Argument("foo")
        with self.assertRaises(AttributeError):
            a.name = "bar"

    def testArgumentRepr(self):
        self.assertTrue(repr(Argument("foo")).startswith("argument(name='foo', aliases=()"))

    def testArgumentRichRepr(self):
        fields = dict(Argument("foo", alias="f").__rich_repr__())
        self.assertEqual(fields["name"], "foo")
        self.assertEqual(fields["aliases"], ("f",))


class TestNames(TestCase):
    """Names and aliases must be non-empty strings."""

    def testNameWithDashAccepted(self):
        self.assertEqual(Argument("dry-run").name, "dry-run")

    def testNameWithWhitespaceAccepted(self):
        self.assertEqual(Argument("foo bar", alias="f b").names, ("foo bar", "f b"))

    def testEmptyNameRejected(self):
        with self.assertRaises(InvalidNameError):
            Argument("")

    def testNonStringNameRejected(self):
        with self.assertRaises(InvalidNameError):
            Argument(3)

    def testBadAliasRejected(self):
        with self.assertRaises(InvalidNameError) as caught:
            Argument("foo", alias=["f", ""])
        self.assertEqual(caught.exception.options["alias"], "")

    def testNonIterableAliasRejected(self):
        with self.assertRaises(InvalidPropertyError):
            Argument("foo", alias=7)

    def testRepeatedAliasRejected(self):
        with self.assertRaises(DuplicateAliasError):
            Argument("foo", alias=["f", "f"])

    def testAliasEqualToNameRejected(self):
        with self.assertRaises(DuplicateAliasError):
            Argument("foo", alias="foo")


class TestIncompatibleProperties(TestCase):
    """bool excludes check, transform and list."""

    def testBoolWithCheck(self):
        with self.assertRaises(IncompatiblePropertiesError) as caught:
            Argument("foo", bool=True, check="number")
        self.assertEqual(caught.exception.options["properties"], ("bool", "check"))
        self.assertEqual(caught.exception.options["code"], FaultCode.INCOMPATIBLE_PROPERTIES)

    def testBoolWithTransform(self):
        with self.assertRaises(IncompatiblePropertiesError):
            Argument("foo", bool=True, transform=str.upper)

    def testListWithBool(self):
        with self.assertRaises(IncompatiblePropertiesError):
            Argument("foo", bool=True, list=True)

    def testFalseBoolAllowsCheck(self):
        a = Argument("foo", bool=False, check="number")
        self.assertIs(a.check, Builtin.NUMBER)


class TestDefault(TestCase):
    """Defaults become Literal or Computed variants."""

    def testScalarDefaultIsLiteral(self):
        self.assertEqual(Argument("foo", default=3).default, Literal(3))

    def testStringDefaultIsLiteral(self):
        self.assertEqual(Argument("foo", default="abc").default, Literal("abc"))

    def testNoneDefaultIsLiteral(self):
        self.assertEqual(Argument("foo", default=None).default, Literal(None))

    def testCallableDefaultIsComputed(self):
        producer = lambda: ["a"]  # NOQA: E-731
        default = Argument("foo", default=producer).default
        self.assertIsInstance(default, Computed)
        self.assertIs(default.function, producer)

    def testPrebuiltVariantKept(self):
        self.assertEqual(Argument("foo", default=Literal("x")).default, Literal("x"))

    def testListDefaultRejected(self):
        with self.assertRaises(InvalidDefaultError):
            Argument("foo", default=["a", "b"])

    def testDictDefaultRejected(self):
        with self.assertRaises(InvalidDefaultError):
            Argument("foo", default={"a": 1})

    def testTupleDefaultRejected(self):
        with self.assertRaises(InvalidDefaultError):
            Argument("foo", default=("a",))

    def testPrebuiltCompositeLiteralRejected(self):
        with self.assertRaises(InvalidDefaultError):
            Argument("foo", list=True, default=Literal([]))

    def testPrebuiltStringLiteralKept(self):
        self.assertEqual(Argument("foo", default=Literal("abc")).default, Literal("abc"))

    def testPrebuiltComputedKept(self):
        self.assertEqual(Argument("foo", default=Computed(list)).default, Computed(list))

    def testComputedWithoutCallableRejected(self):
        with self.assertRaises(InvalidDefaultError):
            Argument("foo", default=Computed("now"))


class TestCheck(TestCase):
    """Checks become Predicate, Pattern or Builtin variants."""

    def testBuiltinNames(self):
        self.assertIs(Argument("a", check="number").check, Builtin.NUMBER)
        self.assertIs(Argument("b", check="file").check, Builtin.FILE)
        self.assertIs(Argument("c", check="dir").check, Builtin.DIR)

    def testCompiledPatternIsPattern(self):
        regex = re.compile(r"^\d+$")
        self.assertEqual(Argument("foo", check=regex).check, Pattern(regex))

    def testCallableIsPredicate(self):
        check = Argument("foo", check=str.isalpha).check
        self.assertIsInstance(check, Predicate)
        self.assertIs(check.function, str.isalpha)

    def testUnknownBuiltinRejected(self):
        with self.assertRaises(InvalidCheckError):
            Argument("foo", check="numbers")

    def testNonCallableRejected(self):
        with self.assertRaises(InvalidCheckError):
            Argument("foo", check=42)

    def testPrebuiltVariantsKept(self):
        regex = re.compile("x")
        self.assertEqual(Argument("a", check=Predicate(str.isdigit)).check, Predicate(str.isdigit))
        self.assertEqual(Argument("b", check=Pattern(regex)).check, Pattern(regex))

    def testPredicateWithoutCallableRejected(self):
        with self.assertRaises(InvalidCheckError):
            Argument("foo", check=Predicate(42))

    def testPatternWithoutCompiledRegexRejected(self):
        with self.assertRaises(InvalidCheckError):
            Argument("foo", check=Pattern(r"\d+"))

    def testLabels(self):
        self.assertEqual(label(Predicate(bool)), "predicate")
        self.assertEqual(label(Pattern(re.compile("x"))), "pattern")
        self.assertEqual(label(Builtin.DIR), "dir")
        with self.assertRaises(TypeError):
            label("number")


class TestHooks(TestCase):
    """transform and description validation."""

    def testTransformMustBeCallable(self):
        with self.assertRaises(InvalidPropertyError) as caught:
            Argument("foo", transform="upper")
        self.assertEqual(caught.exception.options["property"], "transform")

    def testTransformKept(self):
        self.assertIs(Argument("foo", transform=int).transform, int)

    def testEmptyDescriptionFallsBack(self):
        a = Argument("foo", description="")
        self.assertEqual(a.description, "")
        self.assertEqual(a.describe(), "No Description")

    def testDescriptionKeptVerbatim(self):
        a = Argument("foo", description="  the foo  ")
        self.assertEqual(a.describe(), "  the foo  ")

    def testNonStringDescriptionRejected(self):
        with self.assertRaises(InvalidPropertyError):
            Argument("foo", description=5)


if __name__ == "__main__":
    unittest.main()
