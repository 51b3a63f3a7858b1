"""
Declargs faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- ArgumentException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- DeclarationError / ParsingError: the two families raised by Registry.define()
  and Parser.parse() respectively.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first parse messages: every parse fault names the ordinal position of the
  offending token (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The registry and the parser build a fault and hand it to trigger(fault, **ctx).
- In non-shell mode, exceptions are raised; in shell mode, they are rendered via rich
  on stderr and the process exits with status 1.
"""
import copy
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - declarations (1110x)
      • DUPLICATE_NAME, DUPLICATE_ALIAS, INVALID_NAME, INVALID_PROPERTY,
        INCOMPATIBLE_PROPERTIES, INVALID_DEFAULT, INVALID_CHECK
    - name resolution (1111x)
      • UNKNOWN_ARGUMENT, AMBIGUOUS_ARGUMENT
    - values (1112x)
      • MISSING_VALUE, VALIDATION_FAILED

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- declaration errors (1110x) ---
    DUPLICATE_NAME          = 11101
    DUPLICATE_ALIAS         = 11102
    INVALID_NAME            = 11103
    INVALID_PROPERTY        = 11104
    INCOMPATIBLE_PROPERTIES = 11105
    INVALID_DEFAULT         = 11106
    INVALID_CHECK           = 11107

    # --- name resolution errors (1111x) ---
    UNKNOWN_ARGUMENT        = 11111
    AMBIGUOUS_ARGUMENT      = 11112

    # --- value errors (1112x) ---
    MISSING_VALUE           = 11121
    VALIDATION_FAILED       = 11122

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

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

        prog = text(getattr(main, "__prog__", os.path.basename(sys.argv[0]) or "declargs"), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.options["code"].normalize(), styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint"), styler("hint")))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left", width=console.width - 4)

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DeclarationError(ArgumentException): ...
class ParsingError(ArgumentException): ...

class DuplicateNameError(DeclarationError): ...
class DuplicateAliasError(DeclarationError): ...
class InvalidNameError(DeclarationError): ...
class InvalidPropertyError(DeclarationError): ...
class IncompatiblePropertiesError(DeclarationError): ...
class InvalidDefaultError(DeclarationError): ...
class InvalidCheckError(DeclarationError): ...

class UnknownArgumentError(ParsingError): ...
class AmbiguousArgumentError(ParsingError): ...
class MissingValueError(ParsingError): ...
class ValidationFailedError(ParsingError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgumentException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console and the process exits;
      otherwise, the fault is raised.

    typical options
    - shell, fancy, colorful, title, code, hint, docs, and any other structured
      payload the reporter may want to show (key/name/candidates/values/index).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArgumentException",
    "DeclarationError",
    "ParsingError",
    "DuplicateNameError",
    "DuplicateAliasError",
    "InvalidNameError",
    "InvalidPropertyError",
    "IncompatiblePropertiesError",
    "InvalidDefaultError",
    "InvalidCheckError",
    "UnknownArgumentError",
    "AmbiguousArgumentError",
    "MissingValueError",
    "ValidationFailedError",
    "FaultCode",
    "trigger",
    "getdoc",
)
