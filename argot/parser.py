"""
Argot parser: register destinations, scan tokens, report faults.

What this module provides
- Parser: the registry of flags and options plus the token scanner.
  • flag(...) / option(...): register entries bound to host-owned destinations.
  • parse(tokens, handler): scan argv-like tokens, store values, report faults.
  • helptext(...) / printhelp(...): enumerate flags and options for humans.
- Policy: what to do with keys that match no entry (ignore them or report them).

Token grammar
- Long option: '--name' (flag) | '--name=value' | '--name' 'value'
- Short option: '-c' (flag) | '-abc' (chained flags) | '-c=value' | '-c' 'value'
- Anything else (no prefix, a bare '-' or '--') is an unrecognized command format.

Quick start
    from dataclasses import dataclass
    from argot import Parser, Int32, report

    @dataclass
    class Options:
        speedy: bool = False
        cakes: Int32 = 0
        name: str = "Cakeman"
        required: Int32 | None = None

    options = Options()
    parser = Parser()
    parser.flag(options, "speedy", "s", "enable-speedy-mode", "This is a flag.")
    parser.option(options, "cakes", "n", "num-cakes", "The number of cakes.")
    parser.option(options, "name", long="cake-name", descr="Name your cake.")
    parser.option(options, "required", "r", "required", "This one is mandatory.")

    if not parser.parse(sys.argv, report) or options.required is None:
        parser.printhelp("My test program.")

Design notes
- Destinations are mutated in place as soon as their parameter converts;
  nothing is buffered.
- The parser never prints and never raises for user input: every fault goes to
  the handler, which answers Outcome.CONTINUE (or None) / Outcome.TERMINATE.
- Registration mistakes (bad keys, duplicates, unsupported types) are
  programming errors and raise TypeError/ValueError right away.
"""
import copy
import difflib
import functools
import operator
from enum import Enum

from rich.console import Console

from .arguments import Option, Flag
from .bindings import BooleanBinding, bind
from .faults import *
from .utils import *


class Policy(Enum):
    """
    handling of keys that match no registered entry.

    - IGNORE: skip them silently (their parameter, if any, is still consumed).
    - ERROR: report UnknownCommandError / UnknownFlagError through the handler.
    """
    IGNORE = "ignore"
    ERROR = "error"


@functools.cache  # Memoize to avoid recomputing common ordinals in messages
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth") for nicer phrasing.
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # Handle the “teens” exception: 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def _split(text, assign):
    """
    Split 'key=param' on the first delimiter; param is None when there is none.
    """
    key, found, param = text.partition(assign)
    return key, param if found else None


class Parser:
    """
    Registry of flags and options, and the scanner that fills them.

    Responsibilities
    - Registration: validates keys, enforces their uniqueness across flags and
      options (shared namespace), and keeps entries in registration order.
    - Scanning: parse() classifies every token, extracts inline or spaced
      parameters, and routes them to the matching entry (see Session).
    - Help: helptext()/printhelp() enumerate flags, then options.

    Lifecycle
    - Registration is append-only; entries live as long as the parser.
    - Destinations are referenced, never owned: the host keeps them alive.
    - Every parse() call runs in a fresh Session; only prog survives it.
    """

    SHORT = "-"
    LONG = "--"
    ASSIGN = "="

    flags = mirror("flags")
    options = mirror("options")
    prog = mirror("prog")

    def __init__(self):
        self._flags = []
        self._options = []
        self._prog = None

        # Lookup tables by key; the first registered entry wins when uniqueness
        # checks were skipped.
        self._flagkeys = {"short": {}, "long": {}}
        self._optionkeys = {"short": {}, "long": {}}

    def __repr__(self):
        return f"parser({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"

    def __rich_repr__(self):
        yield "prog", self.prog
        yield "flags", self.flags
        yield "options", self.options

    def _check(self, entry):
        """
        Raise ValueError when one of the entry's keys is already in use.
        """
        for kind in ("short", "long"):
            if (key := getattr(entry, kind)) is None:
                continue
            if key in self._flagkeys[kind] or key in self._optionkeys[kind]:
                delimiter = self.SHORT if kind == "short" else self.LONG
                raise ValueError(f"{type(entry).__typename__} key {delimiter + key!r} is already in use")

    def _record(self, entry, tables):
        """
        Record the entry in the lookup tables; the first entry per key wins.
        """
        for kind in ("short", "long"):
            if (key := getattr(entry, kind)) is not None:
                tables[kind].setdefault(key, entry)

    def flag(self, target, name, /, short=Unset, long=Unset, descr=Unset, *, default=False, unique=True):
        """
        Register a presence-only flag over a boolean destination.

        The destination is set to `default` right away; each time the flag is
        found on the command line it is set to `not default`. The slot must be
        annotated as bool or already hold a bool.

        Parameters
        - target, name: destination slot (object attribute or mapping key).
        - short / long: keys, used as -x / --word (at least one).
        - descr: help description.
        - default: bool, value while the flag is absent.
        - unique: check the keys against every registered entry.

        Returns
        - Flag: the registered entry.
        """
        if not isinstance(unique, bool):
            raise TypeError("flag() 'unique' must be a boolean")
        if not isinstance(binding := bind(target, name), BooleanBinding):
            raise TypeError(f"flag() destination {name!r} must be a boolean, not {binding.__typename__}")
        flag = Flag(binding, short, long, descr, default=default)
        if unique:
            self._check(flag)
        # Nothing is recorded until the default is stored.
        flag.binding.put(default)
        self._record(flag, self._flagkeys)
        self._flags.append(flag)
        return flag

    def option(self, target, name, /, short=Unset, long=Unset, descr=Unset, *, type=Unset, unique=True):
        """
        Register a value-bearing option over a typed destination.

        The binding kind follows the destination's declared type (see
        argot.bindings.bind); the current value becomes the default shown in
        help and is left untouched.

        Parameters
        - target, name: destination slot (object attribute or mapping key).
        - short / long: keys, used as -x / --word (at least one).
        - descr: help description.
        - type: explicit type (bool, int, Int32, Char, str | None, ...) that
          overrides annotation-based inference.
        - unique: check the keys against every registered entry.

        Returns
        - Option: the registered entry.
        """
        if not isinstance(unique, bool):
            raise TypeError("option() 'unique' must be a boolean")
        option = Option(bind(target, name, type), short, long, descr)
        if unique:
            self._check(option)
        self._record(option, self._optionkeys)
        self._options.append(option)
        return option

    def parse(self, tokens, handler, /, *, policy=Policy.IGNORE):
        """
        Scan argv-like tokens and fill the registered destinations.

        Parameters
        - tokens: Iterable[str], token 0 is the program name (kept as prog).
        - handler: Callable[[ParseFault], Outcome | None], receives each fault
          and decides whether the scan continues (None means continue).
        - policy: Policy, handling of unknown keys (ignored by default).

        Returns
        - bool: False when any fault was reported (even if the scan continued),
          True otherwise.
        """
        if not callable(handler):
            raise TypeError("parse() 'handler' must be callable")
        if not isinstance(policy, Policy):
            raise TypeError("parse() 'policy' must be a policy")
        tokens = list(tokens)
        if not tokens:
            raise ValueError("parse() 'tokens' must hold at least the program name")
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() 'tokens' must be strings")

        self._prog = tokens[0]
        return Session(self, tokens, handler, policy).run()

    def _helpline(self, entry):
        short = self.SHORT + entry.short if entry.short else "  "
        if entry.long:
            long = (" %s " % (self.LONG + entry.long)).ljust(26, ".")
        else:
            long = " " + "." * 25
        default = "[default: %8s] " % entry.default if entry.default is not None else " " * 20
        return (" " + short + long + default + (entry.descr or "")).rstrip()

    def helptext(self, descr=Unset, /):
        """
        Return the help text: an optional description, then flags, then options.

        Each entry is one line with its short key, its long key in a dotted
        column, its default display text and its description.
        """
        if not isinstance(descr, str | Unset):
            raise TypeError("helptext() argument must be a string")

        lines = ["-" * 40]
        if descr:
            lines.append(descr)
        if self._flags:
            lines.append("Flags:")
            lines.extend(map(self._helpline, self._flags))
        if self._options:
            lines.append("Arguments:")
            lines.extend(map(self._helpline, self._options))
        return "\n".join(lines) + "\n\n"

    def printhelp(self, descr=Unset, /, *, console=Unset):
        """
        Print helptext(descr) through a rich console (stdout by default).

        The text is printed verbatim: no markup, no highlighting, no wrapping.
        """
        console = coalesce(console, Console())
        if not isinstance(console, Console):
            raise TypeError("printhelp() 'console' must be a rich console")
        console.print(self.helptext(descr), markup=False, highlight=False, soft_wrap=True, end="")


class Session:
    """
    One run of Parser.parse: cursor, success flag and fault reporting.

    phases (per token, see run())
    - long form '--key[=param]': flag by long key, else option by long key.
    - short form '-abc' / '-c[=param]': chained flags first, else a
      one-character option.
    - anything else: unrecognized command format.

    termination
    - a known option whose parameter would be the next token, when there is no
      next token, stops the run at once whatever the handler answers.
    - otherwise the handler's Outcome decides after every reported fault.
    """

    def __init__(self, parser, tokens, handler, policy):
        self._parser = parser
        self._tokens = tokens
        self._handler = handler
        self._policy = policy
        self._cursor = 1
        self._index = 1
        self._success = True

    def run(self):
        parser = self._parser
        while self._cursor < len(self._tokens):
            self._index = self._cursor
            token = self._tokens[self._index]

            if len(token) > len(parser.LONG) and token.startswith(parser.LONG):
                proceed = self._long(token)
            elif len(token) > len(parser.SHORT) and token.startswith(parser.SHORT) and token != parser.LONG:
                proceed = self._short(token)
            else:
                proceed = self._report(UnrecognizedFormatError(
                    "unrecognized command format %r at %s position" % (token, _ordinal(self._index)),
                    title="unrecognized command format",
                    code=FaultCode.UNRECOGNIZED_FORMAT,
                    hint="prefix keys with '%s' or '%s' (for example: %sx or %sname=value)" % (
                        parser.SHORT, parser.LONG, parser.SHORT, parser.LONG
                    ),
                    token=token,
                ))

            if not proceed:
                return False
            self._cursor += 1
        return self._success

    def _next(self):
        """
        Consume and return the token after the cursor, or None at the end.
        """
        if self._cursor + 1 >= len(self._tokens):
            return None
        self._cursor += 1
        return self._tokens[self._cursor]

    def _report(self, fault):
        """
        Hand a fault to the handler; return True when the scan should go on.
        """
        self._success = False
        context = {
            "prog": self._parser.prog,
            "index": self._index,
            "docs": getdoc(fault.options["code"]),
        }
        fault = copy.replace(fault, **context | dict(fault.options))
        match outcome := self._handler(fault):
            case None | Outcome.CONTINUE:
                return True
            case Outcome.TERMINATE:
                return False
        raise TypeError("parse() handler must return an outcome or None, not %r" % type(outcome).__name__)

    def _terminate(self, token, key):
        """
        Report the missing trailing parameter; the run always stops here.
        """
        self._report(UnexpectedTerminationError(
            "unexpected termination, expected a parameter for command %r at %s position" % (token, _ordinal(self._index)),
            title="unexpected termination",
            code=FaultCode.UNEXPECTED_TERMINATION,
            hint="pass a value after %r (for example: %s <value> or %s=<value>)" % (token, token, token),
            token=token,
            input=key,
        ))
        return False

    def _unknown(self, key, token, keys):
        """
        An unmatched key: reported only under Policy.ERROR.
        """
        if self._policy is Policy.IGNORE:
            return True

        suggestions = difflib.get_close_matches(key, keys, 5)
        try:
            hint = "did you mean %r? check the program help for all commands" % suggestions[0]
        except IndexError:
            hint = "check the program help for all commands"
        return self._report(UnknownCommandError(
            "unrecognized command %r at %s position" % (key, _ordinal(self._index)),
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            hint=hint,
            token=token,
            input=key,
            suggestions=suggestions,
        ))

    def _dispatch(self, option, key, param, token, keys):
        """
        Route a parameter to an option (or to the unknown-key policy).
        """
        if option is None:
            return self._unknown(key, token, keys)
        if option.set(param):
            return True
        return self._report(UnexpectedFormatError(
            "unexpected format for argument %r with parameter %r at %s position" % (key, param, _ordinal(self._index)),
            title="unexpected format",
            code=FaultCode.UNEXPECTED_FORMAT,
            hint="%r expects %s" % (key, option.binding.__expects__),
            token=token,
            input=key,
            param=param,
        ))

    def _long(self, token):
        parser = self._parser
        key, param = _split(token[len(parser.LONG):], parser.ASSIGN)

        if param is None and (flag := parser._flagkeys["long"].get(key)) is not None:
            return flag.set()

        option = parser._optionkeys["long"].get(key)
        if param is None and (param := self._next()) is None:
            if option is not None:
                return self._terminate(token, key)
            return self._unknown(key, token, list(parser._optionkeys["long"]) + list(parser._flagkeys["long"]))

        return self._dispatch(option, key, param, token, list(parser._optionkeys["long"]))

    def _short(self, token):
        parser = self._parser

        # Chained flags: apply greedily until the first character that is not one.
        applied = False
        for char in token[len(parser.SHORT):]:
            if (flag := parser._flagkeys["short"].get(char)) is None:
                if applied and self._policy is Policy.ERROR:
                    return self._report(UnknownFlagError(
                        "unrecognized flag %r in %r at %s position" % (char, token, _ordinal(self._index)),
                        title="unknown flag",
                        code=FaultCode.UNKNOWN_FLAG,
                        hint="chained flags only accept flag keys (%s)" % (
                            ", ".join(map(repr, parser._flagkeys["short"])) or "none registered"
                        ),
                        token=token,
                        input=char,
                    ))
                break
            applied = flag.set()
        if applied:
            return True

        key, param = _split(token[len(parser.SHORT):], parser.ASSIGN)

        if len(key) != 1:
            if param is None:
                # The parameter still belongs to this command.
                self._next()
            return self._report(MalformedCommandError(
                "command %r at %s position has an unexpected format" % (token, _ordinal(self._index)),
                title="malformed command",
                code=FaultCode.MALFORMED_COMMAND,
                hint="single-dash commands take one character (for example: %sx=<value>); use %s for long keys" % (
                    parser.SHORT, parser.LONG
                ),
                token=token,
                input=key,
            ))

        option = parser._optionkeys["short"].get(key)
        if param is None and (param := self._next()) is None:
            if option is not None:
                return self._terminate(token, key)
            return self._unknown(key, token, list(parser._optionkeys["short"]) + list(parser._flagkeys["short"]))

        return self._dispatch(option, key, param, token, list(parser._optionkeys["short"]))


__all__ = (
    "Parser",
    "Policy",
)
