"""
Argot faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse fault. Codes
  are grouped by domain to keep copy consistent and logs searchable.
- ParseFault: base type that carries a message + options and knows how to render
  itself in a friendly, lowercased, and actionable way.
- Outcome: what an error handler answers after receiving a fault.
- report() / reporter(): ready-made error handlers that print faults with rich.
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: every message names the token and its position so
  users can learn by trying (“at third position”, etc.).
- Soft but technical language: short titles, one-sentence bodies, a single hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The parser never raises these faults and never prints them. It builds one per
  problem and hands it to the host's error handler, which decides whether the
  scan continues (see Parser.parse).
- Hosts that want output pass report (or a reporter(...) variant) as the handler.
"""
import copy
from collections import defaultdict
from enum import Enum, IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the parser (stable identifiers).

    this enumeration is based on the Seralix Fault Codes convention:
    - numeric ranges encode domains (scan, shape, keys, values).
    - spacing leaves room for future additions without reshuffling existing codes.
    - normalize() allows host remapping to custom labels while keeping code-stability.

    grouping (by high-level domain)
    - scan (2110x)
      • UNEXPECTED_TERMINATION
    - shape (2111x)
      • UNRECOGNIZED_FORMAT, MALFORMED_COMMAND
    - keys (2112x)
      • UNKNOWN_COMMAND, UNKNOWN_FLAG
    - values (2113x)
      • UNEXPECTED_FORMAT
    """
    # --- scan errors (21xxx) ---
    UNEXPECTED_TERMINATION = 21101

    # --- token shape errors (21xxx) ---
    UNRECOGNIZED_FORMAT    = 21111
    MALFORMED_COMMAND      = 21112

    # --- key errors (21xxx) ---
    UNKNOWN_COMMAND        = 21121
    UNKNOWN_FLAG           = 21122

    # --- value errors (21xxx) ---
    UNEXPECTED_FORMAT      = 21131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class Outcome(Enum):
    """
    answer of an error handler: keep scanning or stop the parse right away.

    a handler that returns None is treated as CONTINUE.
    """
    CONTINUE = "continue"
    TERMINATE = "terminate"


class ParseFault(Exception):
    """
    one problem found while scanning the tokens.

    the message is the plain error record handed to the host; options carry the
    structured context (code, title, hint, token, index, input, param, prog) and
    the rendering switches (fancy, colorful, ratio).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog") or "program"), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.options["code"].normalize(), styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(str(self), styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint"), styler("hint")))

        if fancy:
            try:
                width = int((console.width - 4) * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(message, hint), title=header, title_align="left", width=width)

        return Group(header, message, hint)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnexpectedTerminationError(ParseFault): ...
class UnrecognizedFormatError(ParseFault): ...
class MalformedCommandError(ParseFault): ...
class UnknownCommandError(ParseFault): ...
class UnknownFlagError(ParseFault): ...
class UnexpectedFormatError(ParseFault): ...


def reporter(*, fancy=False, colorful=True, terminate=False):
    """
    build an error handler that prints each fault to the stderr console.

    options
    - fancy: render inside a rich panel instead of plain lines.
    - colorful: apply the styles (host overrides come from __main__.__styles__).
    - terminate: answer Outcome.TERMINATE to stop at the first fault; by default
      the handler returns None and the parse keeps going.
    """
    def report(fault, /):
        if not isinstance(fault, ParseFault):
            raise TypeError("report() argument must be a parse fault")
        console.print(copy.replace(fault, fancy=bool(fancy), colorful=bool(colorful)))
        if terminate:
            return Outcome.TERMINATE

    report.__doc__ = "print the fault to stderr and %s." % ("stop the parse" if terminate else "continue")
    return report


report = reporter()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ParseFault",
    "UnexpectedTerminationError",
    "UnrecognizedFormatError",
    "MalformedCommandError",
    "UnknownCommandError",
    "UnknownFlagError",
    "UnexpectedFormatError",
    "FaultCode",
    "Outcome",
    "reporter",
    "report",
    "getdoc",
)
