"""
Declargs parser: turn a token stream into positionals and argument values.

What this module provides
- Parser: reads tokens against a Registry and produces a ParseResult.
  • Any number of leading dashes: -name, --name and ---name are the same flag.
  • Inline (--name=value) and spaced (--name value) values.
  • Shortest unambiguous prefix of a canonical name selects the argument.
  • '--' switches every following token to positional.
  • List arguments split on ',' and accumulate across occurrences.
  • Checks run on raw elements, transforms run afterwards, defaults fill the gaps.
- ParseResult: (positionals, values) named tuple.
- parse(registry, tokens): one-shot shortcut.

Token grammar
- exactly '--'                     → literal separator (first occurrence only)
- -+(?P<key>[^-=]+)(=(?P<value>.+))? (whole token) → flag, optional inline value
- anything else                    → positional

Faults
- UnknownArgumentError, AmbiguousArgumentError, MissingValueError and
  ValidationFailedError abort the whole parse; nothing partial is returned.
- Messages lead with the ordinal position of the offending token.
- With shell=True faults are rendered through rich on stderr and the process
  exits with status 1 instead of raising.
"""
import difflib
import functools
import os.path
import re
import shlex
import sys
from collections import deque, namedtuple
from collections.abc import Iterable

from .arguments import Literal, Computed, Predicate, Pattern, Builtin, label
from .faults import *
from .registry import Registry
from .utils import *

_FLAG = re.compile(r"-+(?P<key>[^-=]+)(?:=(?P<value>.+))?")


class ParseResult(namedtuple("ParseResult", ("positionals", "values"))):
    """
    Outcome of one parse.

    - positionals: list[str] of leftover tokens in first-seen order.
    - values: dict of canonical name → value (a list for list arguments).
      A key is present when the argument was supplied or has a default.
    """
    __slots__ = ()


@functools.cache  # Memoize to avoid recomputing common ordinals in messages
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
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

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def _split(value):
    """
    Split a raw list value on ',' and strip each element; empty elements are kept.
    """
    return [element.strip() for element in value.split(",")]


class Parser:
    """
    Stateless parser bound to one Registry.

    Parameters
    - registry: Registry
      The declared arguments. Never mutated by the parser.
    - shell: bool
      When True, faults are rendered on stderr and the process exits (CLI mode).
      When False (default), faults are raised.
    - fancy: bool
      Render faults inside a rich Panel (shell mode only).
    - colorful: bool
      Style rendered faults (shell mode only).

    All per-parse state lives in local variables, so one Parser can serve
    concurrent parse() calls once its registry is no longer being defined.
    """

    registry = mirror("registry")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(self, registry, /, *, shell=False, fancy=False, colorful=True):
        if not isinstance(registry, Registry):
            raise TypeError("Parser() argument must be a registry")
        self._registry = registry
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's runtime options merged in.
        """
        trigger(fault, **options, shell=self._shell, fancy=self._fancy, colorful=self._colorful)

    def _resolve_name(self, key, index):
        """
        resolve a flag key to a canonical argument name.

        rules
        - an exact name or alias wins immediately, even when it is also a
          prefix of other names.
        - otherwise every canonical name starting with key is a candidate
          (aliases only ever match exactly).
        - no candidate → UnknownArgumentError (with close-match suggestions).
        - several candidates → AmbiguousArgumentError listing them sorted.
        """
        if key in self._registry:
            return self._registry[key].name

        matches = sorted(name for name in self._registry if name.startswith(key))

        if not matches:
            suggestions = difflib.get_close_matches(key, self._registry.keys(), 5)
            try:
                hint = "did you mean %r?" % suggestions[0]
            except IndexError:
                hint = "known arguments are %s" % (", ".join(self._registry) or "(none)")
            self.trigger(UnknownArgumentError(
                "unknown argument %r at %s position" % (key, _ordinal(index)),
                title="unknown argument",
                code=FaultCode.UNKNOWN_ARGUMENT,
                hint=hint,
                key=key,
                suggestions=tuple(suggestions),
                index=index,
                docs=getdoc(FaultCode.UNKNOWN_ARGUMENT),
            ))

        if len(matches) > 1:
            self.trigger(AmbiguousArgumentError(
                "argument %r at %s position is ambiguous, could be: %s" % (
                    key, _ordinal(index), ", ".join(matches)
                ),
                title="ambiguous argument",
                code=FaultCode.AMBIGUOUS_ARGUMENT,
                hint="type more of the name (for example: -%s)" % matches[0],
                key=key,
                candidates=tuple(matches),
                index=index,
                docs=getdoc(FaultCode.AMBIGUOUS_ARGUMENT),
            ))

        return matches[0]

    def _validate(self, argument, elements, index):
        """
        run the argument's check over every raw element.

        all failing elements are collected (in input order) before a single
        ValidationFailedError is surfaced.
        """
        match argument.check:
            case Predicate(function):
                failures = [element for element in elements if not function(element)]
            case Pattern(regex):
                failures = [element for element in elements if regex.search(element) is None]
            case Builtin.NUMBER:
                failures = [element for element in elements if re.search(r"\D", element)]
            case Builtin.FILE:
                failures = [element for element in elements if not os.path.isfile(element)]
            case Builtin.DIR:
                failures = [element for element in elements if not os.path.isdir(element)]
            case _:
                return

        if failures:
            kind = label(argument.check)
            self.trigger(ValidationFailedError(
                "validation failed for '%s=%s' at %s position: %s" % (
                    argument.name, kind, _ordinal(index), ", ".join(failures)
                ),
                title="validation failed",
                code=FaultCode.VALIDATION_FAILED,
                hint="check the value%s given to -%s" % ("s" * (len(failures) > 1), argument.name),
                name=argument.name,
                check=kind,
                values=tuple(failures),
                index=index,
                docs=getdoc(FaultCode.VALIDATION_FAILED),
            ))

    def _getvalues(self, argument, value, index):
        """
        turn the raw value of one flag occurrence into a list of final elements.

        - boolean: the inline value verbatim, else 1, or 0 when the argument
          declared a truthy default (a computed default counts as truthy and
          is not invoked). Truthiness is Python's: default="0" or "false" is a
          non-empty string and therefore truthy, so the bare flag yields 0.
        - list: comma-split and stripped.
        - scalar: a single element.
        checks run on the raw elements; transforms run afterwards.
        """
        if argument.bool:
            if value is not None:
                return [value]
            match argument.default:
                case Literal(default):
                    return [0 if default else 1]
                case Computed():
                    return [0]
                case _:
                    return [1]

        elements = _split(value) if argument.list else [value]

        self._validate(argument, elements, index)

        if argument.transform is Unset:
            return elements
        return [argument.transform(element) for element in elements]

    def parse(self, tokens=Unset, /):
        """
        parse tokens into a ParseResult.

        parameters
        - tokens:
          • Unset: read sys.argv[1:].
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized sequence used verbatim.

        returns
        - ParseResult(positionals, values)

        raises
        - TypeError: tokens is not Unset/str/Iterable[str].
        - UnknownArgumentError, AmbiguousArgumentError, MissingValueError,
          ValidationFailedError (library mode).
        """
        if tokens is Unset:
            tokens = sys.argv[1:]
        elif isinstance(tokens, str):
            tokens = shlex.split(tokens)
        elif isinstance(tokens, Iterable):
            tokens = list(tokens)
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")

        positionals = []
        values = {}
        literal = False

        tokens = deque(tokens)
        index = 0
        while tokens:
            token = tokens.popleft()
            index += 1

            if token == "--" and not literal:
                literal = True
            elif not literal and (match := _FLAG.fullmatch(token)):
                name = self._resolve_name(match["key"], index)
                argument = self._registry[name]
                value = match["value"]

                start = index
                if value is None and not argument.bool:
                    if not tokens:
                        self.trigger(MissingValueError(
                            "missing value for argument %r at %s position" % (name, _ordinal(index)),
                            title="missing value",
                            code=FaultCode.MISSING_VALUE,
                            hint="pass a value (for example: -%s=<value> or -%s <value>)" % (name, name),
                            name=name,
                            index=index,
                            docs=getdoc(FaultCode.MISSING_VALUE),
                        ))
                    value = tokens.popleft()
                    index += 1

                elements = self._getvalues(argument, value, start)

                if argument.list:
                    values.setdefault(name, []).extend(elements)
                else:
                    values[name] = elements[0]
            else:
                positionals.append(token)

        for name, default in self._registry.defaults.items():
            if name in values:
                continue
            match default:
                case Literal(value):
                    values[name] = value
                case Computed(function):
                    values[name] = function()

        return ParseResult(positionals, values)


def parse(registry, tokens=Unset, /, **options):
    """
    Convenience one-shot: Parser(registry, **options).parse(tokens).
    """
    return Parser(registry, **options).parse(tokens)


__all__ = (
    "Parser",
    "ParseResult",
    "parse",
)
