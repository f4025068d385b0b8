"""
Faults module behavioral tests (codes, hierarchy, options, rendering).

Scope
- Validate stable fault codes and their host normalization (__main__.__codes__).
- Validate the fault hierarchy (registration faults are ValueErrors, configuration
  faults are RuntimeErrors) and the titles shown to users.
- Validate options handling: read-only mapping, class defaults, copy.replace().
- Validate rich rendering in plain and fancy modes.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured through a colorless rich Console writing to a buffer.
"""

from __future__ import annotations

import copy
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from switchboard import (
    FaultCode,
    DispatchFault,
    DispatchWarning,
    CommandNotFoundError,
    ConfigurationError,
    DuplicateCommandError,
    DuplicateParameterError,
    EmptyInputError,
    MalformedParameterNameError,
    ParseError,
    RegistrationError,
    ResolutionError,
    ShadowedCommandWarning,
    SinkNotConfiguredError,
    UnknownParameterError,
    ValidationFailedError,
)


def render(renderable):
    buffer = io.StringIO()
    Console(file=buffer, color_system=None, width=200).print(renderable)
    return buffer.getvalue()


class TestFaultCodes(TestCase):
    """Behavioral tests for FaultCode and class-level metadata."""

    def testCodesAreStable(self):
        self.assertEqual(DuplicateCommandError.__code__, 10101)
        self.assertEqual(DuplicateParameterError.__code__, 10102)
        self.assertEqual(MalformedParameterNameError.__code__, 11101)
        self.assertEqual(EmptyInputError.__code__, 11102)
        self.assertEqual(CommandNotFoundError.__code__, 12101)
        self.assertEqual(UnknownParameterError.__code__, 12102)
        self.assertEqual(ValidationFailedError.__code__, 12103)
        self.assertEqual(SinkNotConfiguredError.__code__, 13101)
        self.assertEqual(ShadowedCommandWarning.__code__, 19101)

    def testCodesAreUnique(self):
        self.assertEqual(len(set(FaultCode)), len(FaultCode.__members__))

    def testNormalize(self):
        self.assertEqual(FaultCode.EMPTY_INPUT.normalize(), "11102")
        with mock.patch("__main__.__codes__", {FaultCode.EMPTY_INPUT: "E-EMPTY"}, create=True):
            self.assertEqual(FaultCode.EMPTY_INPUT.normalize(), "E-EMPTY")
            self.assertEqual(FaultCode.COMMAND_NOT_FOUND.normalize(), "12101")


class TestFaultHierarchy(TestCase):
    """Behavioral tests for fault families."""

    def testRegistrationFaults(self):
        for kind in (DuplicateCommandError, DuplicateParameterError):
            self.assertTrue(issubclass(kind, RegistrationError))
            self.assertTrue(issubclass(kind, ValueError))

    def testParseFaults(self):
        for kind in (MalformedParameterNameError, EmptyInputError):
            self.assertTrue(issubclass(kind, ParseError))

    def testResolutionFaults(self):
        for kind in (CommandNotFoundError, UnknownParameterError, ValidationFailedError):
            self.assertTrue(issubclass(kind, ResolutionError))

    def testConfigurationFaults(self):
        self.assertTrue(issubclass(SinkNotConfiguredError, ConfigurationError))
        self.assertTrue(issubclass(SinkNotConfiguredError, RuntimeError))

    def testEverythingIsADispatchFault(self):
        for kind in (RegistrationError, ParseError, ResolutionError, ConfigurationError):
            self.assertTrue(issubclass(kind, DispatchFault))

    def testWarnings(self):
        self.assertTrue(issubclass(ShadowedCommandWarning, DispatchWarning))
        self.assertTrue(issubclass(DispatchWarning, UserWarning))


class TestFaultOptions(TestCase):
    """Behavioral tests for fault messages and options."""

    def setUp(self):
        self.fault = UnknownParameterError("command 'greet' has no parameter defined 'bogus'", hint="run 'greet -help'", input="bogus")

    def testMessage(self):
        self.assertEqual(str(self.fault), "command 'greet' has no parameter defined 'bogus'")
        self.assertEqual(self.fault.message, str(self.fault))

    def testMessageMustBeAString(self):
        with self.assertRaises(TypeError):
            EmptyInputError(None)

    def testClassDefaults(self):
        self.assertEqual(self.fault.title, "unknown parameter")
        self.assertIs(self.fault.code, FaultCode.UNKNOWN_PARAMETER)
        self.assertEqual(self.fault.hint, "run 'greet -help'")
        self.assertIsNone(EmptyInputError("failed to read command").hint)

    def testOptionsOverrideDefaults(self):
        fault = EmptyInputError("nothing to do", title="nothing to do", code=FaultCode.COMMAND_NOT_FOUND)
        self.assertEqual(fault.title, "nothing to do")
        self.assertIs(fault.code, FaultCode.COMMAND_NOT_FOUND)

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            self.fault.options["input"] = "other"

    def testReplaceMergesOptions(self):
        replaced = copy.replace(self.fault, fancy=True)
        self.assertIsInstance(replaced, UnknownParameterError)
        self.assertIsNot(replaced, self.fault)
        self.assertEqual(replaced.message, self.fault.message)
        self.assertEqual(replaced.options["input"], "bogus")
        self.assertTrue(replaced.options["fancy"])
        self.assertNotIn("fancy", self.fault.options)

    def testWarningReplace(self):
        warning = ShadowedCommandWarning("command 'help' is shadowed", hint="rename it")
        replaced = copy.replace(warning, colorful=False)
        self.assertIsInstance(replaced, ShadowedCommandWarning)
        self.assertEqual(replaced.hint, "rename it")
        self.assertFalse(replaced.options["colorful"])


class TestFaultRendering(TestCase):
    """Behavioral tests for __rich__ rendering."""

    def testPlainRendering(self):
        fault = CommandNotFoundError("command 'grete' not found", hint="did you mean 'greet'?", colorful=False)
        lines = render(fault).splitlines()
        self.assertEqual(lines[0], "[ switchboard — 12101 | Command Not Found ]")
        self.assertEqual(lines[1], "command 'grete' not found")
        self.assertEqual(lines[2], " → did you mean 'greet'?")

    def testRenderingWithoutHint(self):
        lines = render(EmptyInputError("failed to read command", colorful=False)).splitlines()
        self.assertEqual(lines, ["[ switchboard — 11102 | Empty Input ]", "failed to read command"])

    def testHostProgramName(self):
        with mock.patch("__main__.__prog__", "greeter", create=True):
            output = render(EmptyInputError("failed to read command"))
        self.assertIn("[ greeter — 11102 | Empty Input ]", output)

    def testFancyRendering(self):
        output = render(ValidationFailedError("times could not be parsed as type int", fancy=True))
        self.assertIn("12103", output)
        self.assertIn("Invalid Value", output)
        self.assertIn("times could not be parsed as type int", output)
        self.assertIn("╭", output)

    def testWarningRendering(self):
        output = render(ShadowedCommandWarning("command 'help' is shadowed"))
        self.assertIn("19101", output)
        self.assertIn("Shadowed Command", output)


if __name__ == "__main__":
    unittest.main()
