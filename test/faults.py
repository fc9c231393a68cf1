# python
"""
Faults module behavioral tests.

Scope
- ParseFault message/options contract and copy.replace support.
- Rich rendering (plain and fancy) through a captured console.
- Ready-made handlers: report / reporter(...).
- Host hooks read from __main__ (__codes__, __docs__).

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argot import faults
from argot.faults import *


def sample(**options):
    return UnexpectedFormatError(
        "unexpected format for argument 'n' with parameter 'x' at first position",
        **{
            "title": "unexpected format",
            "code": FaultCode.UNEXPECTED_FORMAT,
            "hint": "'n' expects a signed integer",
            "prog": "cakes",
        } | options,
    )


class TestParseFault(TestCase):
    """Message, options and replacement."""

    def testMessageIsString(self):
        self.assertEqual(str(sample()), "unexpected format for argument 'n' with parameter 'x' at first position")

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            sample().options["code"] = FaultCode.UNKNOWN_FLAG

    def testReplaceKeepsTypeAndMergesOptions(self):
        fault = copy.replace(sample(), fancy=True)
        self.assertIsInstance(fault, UnexpectedFormatError)
        self.assertTrue(fault.options["fancy"])
        self.assertEqual(fault.options["prog"], "cakes")

    def testFaultsAreExceptions(self):
        for kind in (
                UnexpectedTerminationError,
                UnrecognizedFormatError,
                MalformedCommandError,
                UnknownCommandError,
                UnknownFlagError,
                UnexpectedFormatError,
        ):
            with self.subTest(kind=kind.__name__):
                self.assertTrue(issubclass(kind, ParseFault))
                self.assertTrue(issubclass(kind, Exception))


class TestRendering(TestCase):
    """Rich output of faults."""

    def render(self, fault, width=100):
        stream = io.StringIO()
        Console(file=stream, width=width).print(fault)
        return stream.getvalue()

    def testPlainRendering(self):
        output = self.render(sample(colorful=False))
        self.assertIn("[ cakes — 21131 | Unexpected Format ]", output)
        self.assertIn("with parameter 'x'", output)
        self.assertIn("→ 'n' expects a signed integer", output)

    def testFancyRendering(self):
        output = self.render(sample(fancy=True, colorful=False))
        self.assertIn("Unexpected Format", output)
        self.assertIn("╭", output)

    def testHostCodeLabels(self):
        with mock.patch("__main__.__codes__", {FaultCode.UNEXPECTED_FORMAT: "E-FMT"}, create=True):
            self.assertEqual(FaultCode.UNEXPECTED_FORMAT.normalize(), "E-FMT")
            self.assertIn("E-FMT", self.render(sample(colorful=False)))
        self.assertEqual(FaultCode.UNKNOWN_FLAG.normalize(), "21122")


class TestHandlers(TestCase):
    """report / reporter."""

    def setUp(self):
        self.stream = io.StringIO()
        patcher = mock.patch.object(faults, "console", Console(file=self.stream, width=100))
        patcher.start()
        self.addCleanup(patcher.stop)

    def testReportPrintsAndContinues(self):
        self.assertIsNone(report(sample()))
        self.assertIn("Unexpected Format", self.stream.getvalue())

    def testReporterCanTerminate(self):
        self.assertIs(reporter(terminate=True)(sample()), Outcome.TERMINATE)

    def testReporterWithoutColor(self):
        reporter(colorful=False)(sample())
        self.assertNotIn("\x1b[", self.stream.getvalue())

    def testReportRejectsOtherObjects(self):
        with self.assertRaises(TypeError):
            report("fault")


class TestGetdoc(TestCase):
    """Host documentation lookup."""

    def testMissingDocsIsNone(self):
        self.assertIsNone(getdoc(FaultCode.UNKNOWN_COMMAND))

    def testHostDocs(self):
        with mock.patch("__main__.__docs__", {FaultCode.UNKNOWN_COMMAND: "see --help"}, create=True):
            self.assertEqual(getdoc(FaultCode.UNKNOWN_COMMAND), "see --help")

    def testCodeRequired(self):
        with self.assertRaises(TypeError):
            getdoc(21121)


if __name__ == "__main__":
    unittest.main()
