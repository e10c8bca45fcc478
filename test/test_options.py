"""
Options module behavioral tests (typed storage, defaults, bindings, validity).

Scope
- Validate Kind scalar checks and text coercion.
- Validate Option builders: defaults, multi-value, positional, external bindings,
  and their fail-fast kind checks.
- Validate set_value/get_value semantics for single and multi-value options.
- Validate is_valid() for defaults and multi-value minimums.

Conventions
- Test method names follow CamelCase per project convention.
- Options are built directly (no registry) unless registry behavior is under test.
"""
import unittest
from unittest import TestCase

from switchboard import (
    Kind,
    Option,
    KindMismatchError,
    InvalidNameError,
    InvalidSettingError,
    UnsetValueError,
    ValueIndexError,
    ConfigurationError,
)


class TestKind(TestCase):
    """Behavioral tests for Kind."""

    def testSwitchKinds(self):
        self.assertTrue(Kind.FLAG.switch)
        self.assertTrue(Kind.HELP.switch)
        self.assertFalse(Kind.INTEGER.switch)
        self.assertFalse(Kind.STRING.switch)

    def testIntegerRejectsBool(self):
        self.assertTrue(Kind.INTEGER.accepts(3))
        self.assertFalse(Kind.INTEGER.accepts(True))
        self.assertFalse(Kind.INTEGER.accepts("3"))

    def testFlagAcceptsOnlyBool(self):
        self.assertTrue(Kind.FLAG.accepts(False))
        self.assertFalse(Kind.FLAG.accepts(0))

    def testCoerceInteger(self):
        self.assertEqual(Kind.INTEGER.coerce("42"), 42)
        self.assertEqual(Kind.INTEGER.coerce("-7"), -7)
        self.assertEqual(Kind.INTEGER.coerce("+5"), 5)

    def testCoerceIntegerIsStrict(self):
        for text in ("abc", "12abc", " 12", "1_000", "", "1.5", "١٢", "３"):
            with self.subTest(text=text), self.assertRaises(ValueError):
                Kind.INTEGER.coerce(text)

    def testCoerceStringIsIdentity(self):
        self.assertEqual(Kind.STRING.coerce("-x=1"), "-x=1")

    def testCoerceSwitchRaises(self):
        with self.assertRaises(KindMismatchError):
            Kind.FLAG.coerce("1")


class TestOptionDeclaration(TestCase):
    """Construction-time validation of Option."""

    def testNamesExposed(self):
        o = Option(Kind.INTEGER, "count", "c", "how many")
        self.assertEqual(o.long_name, "count")
        self.assertEqual(o.short_name, "c")
        self.assertEqual(o.description, "how many")
        self.assertEqual(o.names, ("-c", "--count"))

    def testShortNameOptional(self):
        o = Option(Kind.STRING, "output")
        self.assertIsNone(o.short_name)
        self.assertEqual(o.names, ("--output",))
        self.assertEqual(o.description, "")

    def testLongNameWithDashesRejected(self):
        with self.assertRaises(InvalidNameError):
            Option(Kind.FLAG, "--verbose")

    def testLongNameWithEqualsRejected(self):
        with self.assertRaises(InvalidNameError):
            Option(Kind.FLAG, "a=b")

    def testShortNameMustBeOneCharacter(self):
        with self.assertRaises(InvalidNameError):
            Option(Kind.FLAG, "verbose", "vv")
        with self.assertRaises(InvalidNameError):
            Option(Kind.FLAG, "verbose", "=")

    def testKindMustBeKind(self):
        with self.assertRaises(KindMismatchError):
            Option("flag", "verbose")

    def testConfigurationErrorsShareBase(self):
        with self.assertRaises(ConfigurationError):
            Option(Kind.FLAG, "")


class TestOptionDefaults(TestCase):
    """Behavioral tests for defaults."""

    def testFlagDefaultsToFalse(self):
        o = Option(Kind.FLAG, "verbose")
        self.assertTrue(o.has_default())
        self.assertIs(o.get_value(), False)
        self.assertTrue(o.is_valid())

    def testHelpDefaultsToFalse(self):
        o = Option(Kind.HELP, "help", "h")
        self.assertIs(o.get_value(), False)
        self.assertTrue(o.is_valid())

    def testIntegerHasNoDefault(self):
        o = Option(Kind.INTEGER, "count")
        self.assertFalse(o.has_default())
        self.assertFalse(o.is_valid())
        with self.assertRaises(UnsetValueError):
            o.get_value()

    def testDefaultReturnedWhenUnset(self):
        o = Option(Kind.STRING, "name").with_default("anon")
        self.assertTrue(o.is_valid())
        self.assertEqual(o.get_value(), "anon")

    def testHelpDefaultRejected(self):
        o = Option(Kind.HELP, "help", "h")
        with self.assertRaises(KindMismatchError):
            o.with_default(True)
        with self.assertRaises(KindMismatchError):
            o.with_default(False)
        self.assertIs(o.get_value(), False)

    def testFlagDefaultOverride(self):
        o = Option(Kind.FLAG, "color").with_default(True)
        self.assertIs(o.get_value(), True)

    def testWrongKindDefaultRejected(self):
        with self.assertRaises(KindMismatchError):
            Option(Kind.FLAG, "verbose").with_default("yes")
        with self.assertRaises(KindMismatchError):
            Option(Kind.FLAG, "verbose").with_default(1)
        with self.assertRaises(KindMismatchError):
            Option(Kind.INTEGER, "count").with_default("1")
        with self.assertRaises(KindMismatchError):
            Option(Kind.INTEGER, "count").with_default(False)

    def testBuildersChain(self):
        o = Option(Kind.INTEGER, "count")
        self.assertIs(o.with_default(3), o)


class TestOptionStorage(TestCase):
    """set_value/get_value behavior."""

    def testRoundTripSingleValue(self):
        for kind, value in ((Kind.FLAG, True), (Kind.INTEGER, 12), (Kind.STRING, "text")):
            with self.subTest(kind=kind):
                o = Option(kind, "thing")
                o.set_value(value)
                self.assertEqual(o.get_value(), value)

    def testSingleValueOverwrites(self):
        o = Option(Kind.INTEGER, "count").with_default(1)
        o.set_value(2)
        o.set_value(3)
        self.assertEqual(o.get_value(), 3)
        self.assertEqual(o.count, 1)

    def testSetValueTypeMismatch(self):
        with self.assertRaises(KindMismatchError):
            Option(Kind.INTEGER, "count").set_value("3")
        with self.assertRaises(KindMismatchError):
            Option(Kind.STRING, "name").set_value(3)
        with self.assertRaises(KindMismatchError):
            Option(Kind.FLAG, "verbose").set_value("true")

    def testMultiValueAppends(self):
        o = Option(Kind.STRING, "file").with_multivalue()
        o.set_value("a").set_value("b")
        self.assertEqual(o.get_value(), ["a", "b"])
        self.assertEqual(o.get_value(1), "b")
        self.assertEqual(o.count, 2)

    def testMultiValueListIsACopy(self):
        o = Option(Kind.INTEGER, "n").with_multivalue()
        o.set_value(1)
        o.get_value().append(99)
        self.assertEqual(o.get_value(), [1])

    def testIndexOutOfRange(self):
        o = Option(Kind.INTEGER, "n").with_multivalue()
        o.set_value(1)
        with self.assertRaises(ValueIndexError):
            o.get_value(1)
        with self.assertRaises(ValueIndexError):
            o.get_value(-1)
        with self.assertRaises(IndexError):
            o.get_value(5)

    def testIndexOnSingleValueRejected(self):
        o = Option(Kind.INTEGER, "n").with_default(1)
        with self.assertRaises(KindMismatchError):
            o.get_value(0)


class TestOptionMultiValue(TestCase):
    """with_multivalue() rules and validity."""

    def testFlagCannotBeMultiValue(self):
        with self.assertRaises(KindMismatchError):
            Option(Kind.FLAG, "verbose").with_multivalue()
        with self.assertRaises(KindMismatchError):
            Option(Kind.HELP, "help").with_multivalue()

    def testNegativeMinimumRejected(self):
        with self.assertRaises(InvalidSettingError):
            Option(Kind.INTEGER, "n").with_multivalue(-1)

    def testValidityFollowsMinimum(self):
        o = Option(Kind.INTEGER, "n").with_multivalue(2)
        self.assertFalse(o.is_valid())
        o.set_value(1)
        self.assertFalse(o.is_valid())
        o.set_value(2)
        self.assertTrue(o.is_valid())

    def testZeroMinimumIsValidWhenEmpty(self):
        self.assertTrue(Option(Kind.STRING, "file").with_multivalue().is_valid())

    def testMinimumExposed(self):
        o = Option(Kind.STRING, "file").with_multivalue(3)
        self.assertTrue(o.multivalue)
        self.assertEqual(o.min_args, 3)

    def testCannotSwitchCardinalityAfterWrite(self):
        o = Option(Kind.INTEGER, "n")
        o.set_value(1)
        with self.assertRaises(InvalidSettingError):
            o.with_multivalue()


class TestOptionPositional(TestCase):
    """as_positional() rules."""

    def testIntegerAndStringCanBePositional(self):
        self.assertTrue(Option(Kind.INTEGER, "n").as_positional().positional)
        self.assertTrue(Option(Kind.STRING, "file").as_positional().positional)

    def testFlagCannotBePositional(self):
        with self.assertRaises(KindMismatchError):
            Option(Kind.FLAG, "verbose").as_positional()
        with self.assertRaises(KindMismatchError):
            Option(Kind.HELP, "help").as_positional()


class TestOptionBinding(TestCase):
    """External binding mirrors every write."""

    def testSingleValueSetterMirrors(self):
        store = {}
        o = Option(Kind.INTEGER, "count").bind_external(lambda value: store.__setitem__("count", value))
        o.set_value(4)
        o.set_value(5)
        self.assertEqual(store, {"count": 5})

    def testFlagSetterMirrors(self):
        received = []
        o = Option(Kind.FLAG, "verbose").bind_external(received.append)
        o.set_value(True)
        self.assertEqual(received, [True])

    def testSequenceMirrors(self):
        values = []
        o = Option(Kind.INTEGER, "n").with_multivalue().bind_external_sequence(values)
        o.set_value(1).set_value(2)
        self.assertEqual(values, [1, 2])

    def testSequenceIsNotOwned(self):
        values = [0]
        o = Option(Kind.INTEGER, "n").with_multivalue().bind_external_sequence(values)
        o.set_value(1)
        self.assertEqual(values, [0, 1])
        self.assertEqual(o.get_value(), [1])

    def testSetterMustBeCallable(self):
        with self.assertRaises(KindMismatchError):
            Option(Kind.INTEGER, "count").bind_external([])

    def testSequenceRequiresMultiValue(self):
        with self.assertRaises(KindMismatchError):
            Option(Kind.INTEGER, "count").bind_external_sequence([])

    def testSetterRejectedOnMultiValue(self):
        with self.assertRaises(KindMismatchError):
            Option(Kind.INTEGER, "n").with_multivalue().bind_external(print)

    def testMultiValueAfterSetterRejected(self):
        o = Option(Kind.INTEGER, "n").bind_external(print)
        with self.assertRaises(KindMismatchError):
            o.with_multivalue()

    def testFlagCannotBindSequence(self):
        with self.assertRaises(KindMismatchError):
            Option(Kind.FLAG, "verbose").bind_external_sequence([])

    def testSequenceMustBeMutable(self):
        with self.assertRaises(KindMismatchError):
            Option(Kind.STRING, "file").with_multivalue().bind_external_sequence(())

    def testRejectedWriteDoesNotReachBinding(self):
        received = []
        o = Option(Kind.INTEGER, "count").bind_external(received.append)
        with self.assertRaises(KindMismatchError):
            o.set_value("x")
        self.assertEqual(received, [])


if __name__ == "__main__":
    unittest.main()
