r"""
Declargs argument specifications.

Overview
- Specs
  • Argument: one declared command-line argument (canonical name, aliases, list/bool
    switches, default, check, transform, description).

- Tagged variants
  • Literal(value) | Computed(function): how a default is produced.
  • Predicate(function) | Pattern(regex) | Builtin.{NUMBER, FILE, DIR}: how values are checked.
  Raw user input (a plain value, a callable, a compiled regex, or a builtin name) is
  normalized into one of these variants once, on construction; consumers resolve them
  by case analysis (match statements) and never inspect raw types again.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes selected
    fields via read-only properties declared in __introspectable__.

Metadata (sanitized on construction)
- name: non-empty str.
- alias: str | Iterable[str] of non-empty strings; duplicates and the own name rejected.
- list / bool: truthiness, mutually exclusive.
- bool excludes check and transform.
- default: scalar literal or zero-argument callable; collections other than
  str/bytes must be wrapped in a callable so parses never share a mutable default.
- check: callable, compiled pattern, or one of "number", "file", "dir".
- transform: callable applied per element after validation.
- description: string, kept as given (empty falls back to "No Description").

Quick example:
    >>> from declargs.arguments import Argument
    >>> Argument("items", list=True, check="number", transform=int)
    argument(name='items', aliases=(), list=True, bool=False, ...)
"""
import builtins
import functools
import operator
import re
from collections import namedtuple
from collections.abc import Collection, Iterable
from enum import StrEnum

from .faults import *
from .utils import *

PROPERTIES = ("alias", "list", "bool", "default", "check", "transform", "description")
"""Every property name accepted by Argument and Registry.define()."""

NO_DESCRIPTION = "No Description"


class Literal(namedtuple("Literal", ("value",))):
    """
    Default variant: a plain value used as-is.
    """
    __slots__ = ()


class Computed(namedtuple("Computed", ("function",))):
    """
    Default variant: a zero-argument callable invoked once per parse that needs it.
    """
    __slots__ = ()


class Predicate(namedtuple("Predicate", ("function",))):
    """
    Check variant: an element passes when function(element) is truthy.
    """
    __slots__ = ()


class Pattern(namedtuple("Pattern", ("regex",))):
    """
    Check variant: an element passes when the compiled regex is found in it.
    """
    __slots__ = ()


class Builtin(StrEnum):
    """
    Check variant: one of the predefined validators.
    """
    NUMBER = "number"
    FILE = "file"
    DIR = "dir"


def label(check, /):
    """
    Return the label used in messages for a sanitized check variant.
    """
    match check:
        case Predicate():
            return "predicate"
        case Pattern():
            return "pattern"
        case Builtin():
            return check.value
        case _:
            raise TypeError("label() argument must be a check variant")


class ArgumentType(type):
    """
    Metaclass that turns specs into introspectable, read-only records.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - argument(name='verbose', aliases=('v',), list=False, bool=True, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers (e.g., rich.pretty).
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_names(cls, metadata, /):
    """
    Internal: validate the canonical name and normalize aliases into a tuple.

    Raises
    - InvalidNameError: when the name or an alias is not a non-empty string.
    - InvalidPropertyError: when 'alias' is neither a string nor an iterable of strings.
    - DuplicateAliasError: when an alias repeats or equals the canonical name.

    Names the flag grammar cannot spell (e.g., 'dry-run') are accepted; such an
    argument can only ever receive its default.
    """
    if not isinstance(name := metadata["name"], str) or not name:
        raise InvalidNameError(
            "%s name must be a non-empty string, not %r" % (cls.__typename__, name),
            title="invalid name",
            code=FaultCode.INVALID_NAME,
            hint="name the argument with a non-empty string",
            name=name,
        )

    aliases = metadata["alias"]
    if isinstance(aliases, str):
        aliases = (aliases,)
    elif not isinstance(aliases, Iterable):
        raise InvalidPropertyError(
            "%s %r 'alias' must be a string or an iterable of strings" % (cls.__typename__, name),
            title="invalid property",
            code=FaultCode.INVALID_PROPERTY,
            hint="pass alias='x' or alias=('x', 'y')",
            name=name,
            property="alias",
        )

    sanitized = []
    for alias in aliases:
        if not isinstance(alias, str) or not alias:
            raise InvalidNameError(
                "%s %r alias must be a non-empty string, not %r" % (cls.__typename__, name, alias),
                title="invalid name",
                code=FaultCode.INVALID_NAME,
                hint="use non-empty strings as aliases",
                name=name,
                alias=alias,
            )
        if alias == name or alias in sanitized:
            raise DuplicateAliasError(
                "%s %r alias %r duplicates one of its own names" % (cls.__typename__, name, alias),
                title="duplicate alias",
                code=FaultCode.DUPLICATE_ALIAS,
                hint="remove the repeated alias",
                name=name,
                alias=alias,
            )
        sanitized.append(alias)

    metadata["alias"] = tuple(sanitized)


def _sanitize_switches(cls, metadata, /):
    """
    Internal: normalize list/bool and reject property combinations that make no sense.
    """
    metadata["list"] = builtins.bool(metadata["list"])
    metadata["bool"] = builtins.bool(metadata["bool"])

    if metadata["bool"]:
        for property in ("check", "transform"):
            if metadata[property] is not Unset:
                raise IncompatiblePropertiesError(
                    "%s %r cannot combine 'bool' with %r" % (cls.__typename__, metadata["name"], property),
                    title="incompatible properties",
                    code=FaultCode.INCOMPATIBLE_PROPERTIES,
                    hint="boolean arguments take no %s; drop one of them" % property,
                    name=metadata["name"],
                    properties=("bool", property),
                )
        if metadata["list"]:
            raise IncompatiblePropertiesError(
                "%s %r properties 'list' and 'bool' are mutually exclusive" % (cls.__typename__, metadata["name"]),
                title="incompatible properties",
                code=FaultCode.INCOMPATIBLE_PROPERTIES,
                hint="an argument is either a list or a boolean switch",
                name=metadata["name"],
                properties=("list", "bool"),
            )


def _sanitize_default(cls, metadata, /):
    """
    Internal: turn a raw default into Literal(value) or Computed(function).

    Collections other than str/bytes are rejected: a shared list or dict would be
    handed to every parse by reference. Wrap them in a callable instead
    (e.g., default=list or default=lambda: ["a", "b"]).
    """
    match default := metadata["default"]:
        case UnsetType():
            return
        case Computed(function) if not callable(function):
            raise InvalidDefaultError(
                "%s %r computed default must wrap a callable, not %s" % (
                    cls.__typename__, metadata["name"], builtins.type(function).__name__
                ),
                title="invalid default",
                code=FaultCode.INVALID_DEFAULT,
                hint="pass a zero-argument function, for example Computed(list)",
                name=metadata["name"],
            )
        case Computed():
            return
        case Literal(value):
            pass
        case _ if callable(default):
            metadata["default"] = Computed(default)
            return
        case value:
            default = Literal(value)

    # prebuilt literals obey the same rule as raw values
    if isinstance(value, Collection) and not isinstance(value, str | bytes):
        raise InvalidDefaultError(
            "%s %r default must be a scalar or a callable, not %s" % (
                cls.__typename__, metadata["name"], builtins.type(value).__name__
            ),
            title="invalid default",
            code=FaultCode.INVALID_DEFAULT,
            hint="wrap the value in a callable, for example default=lambda: %r" % (value,),
            name=metadata["name"],
        )
    metadata["default"] = default


def _sanitize_check(cls, metadata, /):
    """
    Internal: turn a raw check into Predicate, Pattern or Builtin.
    """
    match check := metadata["check"]:
        case Predicate(function) if not callable(function):
            raise InvalidCheckError(
                "%s %r predicate must wrap a callable, not %s" % (
                    cls.__typename__, metadata["name"], builtins.type(function).__name__
                ),
                title="invalid check",
                code=FaultCode.INVALID_CHECK,
                hint="pass a function taking one value and returning a truth value",
                name=metadata["name"],
            )
        case Pattern(regex) if not isinstance(regex, re.Pattern):
            raise InvalidCheckError(
                "%s %r pattern must wrap a compiled regular expression, not %s" % (
                    cls.__typename__, metadata["name"], builtins.type(regex).__name__
                ),
                title="invalid check",
                code=FaultCode.INVALID_CHECK,
                hint="pass Pattern(re.compile(...)) or the compiled pattern itself",
                name=metadata["name"],
            )
        case UnsetType() | Predicate() | Pattern() | Builtin():
            pass
        case re.Pattern():
            metadata["check"] = Pattern(check)
        case str() if check in Builtin:
            metadata["check"] = Builtin(check)
        case _ if callable(check):
            metadata["check"] = Predicate(check)
        case _:
            raise InvalidCheckError(
                "%r is not a valid value for %s %r 'check'" % (check, cls.__typename__, metadata["name"]),
                title="invalid check",
                code=FaultCode.INVALID_CHECK,
                hint="use a callable, a compiled pattern, or one of %s" % ", ".join(repr(builtin.value) for builtin in Builtin),
                name=metadata["name"],
            )


def _sanitize_hooks(cls, metadata, /):
    """
    Internal: validate 'transform' and 'description'.
    """
    if metadata["transform"] is not Unset and not callable(metadata["transform"]):
        raise InvalidPropertyError(
            "%s %r 'transform' must be callable" % (cls.__typename__, metadata["name"]),
            title="invalid property",
            code=FaultCode.INVALID_PROPERTY,
            hint="pass a function taking one value and returning the new one",
            name=metadata["name"],
            property="transform",
        )

    if not isinstance(metadata["description"], str | Unset):
        raise InvalidPropertyError(
            "%s %r 'description' must be a string" % (cls.__typename__, metadata["name"]),
            title="invalid property",
            code=FaultCode.INVALID_PROPERTY,
            hint="describe the argument in a short sentence, or leave it out",
            name=metadata["name"],
            property="description",
        )


class Argument(metaclass=ArgumentType):
    """
    Declared command-line argument specification.

    An Argument is immutable once built: every field is exposed as a read-only
    property, defaults and checks are already normalized into their tagged
    variants, and aliases are a tuple.

    Properties
    - name: canonical identifier.
    - aliases: tuple of additional exact-match names.
    - list: values accumulate across occurrences and are comma-split.
    - bool: presence-only switch (value 1, or 0 when a truthy default is declared).
    - default: Unset | Literal | Computed.
    - check: Unset | Predicate | Pattern | Builtin.
    - transform: Unset | Callable.
    - description: Unset | str.
    """

    __introspectable__ = (
        "name",
        "aliases",
        "list",
        "bool",
        "default",
        "check",
        "transform",
        "description",
    )

    def __init__(
            self,
            name,
            /,
            *,
            alias=(),
            list=False,
            bool=False,
            default=Unset,
            check=Unset,
            transform=Unset,
            description=Unset,
    ):
        metadata = {
            "name": name,
            "alias": alias,
            "list": list,
            "bool": bool,
            "default": default,
            "check": check,
            "transform": transform,
            "description": description,
        }
        _sanitize_names(type(self), metadata)
        _sanitize_switches(type(self), metadata)
        _sanitize_default(type(self), metadata)
        _sanitize_check(type(self), metadata)
        _sanitize_hooks(type(self), metadata)

        metadata["aliases"] = metadata.pop("alias")
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def names(self):
        """
        The canonical name followed by every alias.
        """
        return (self._name, *self._aliases)

    def describe(self):
        """
        Return the description, falling back to "No Description" when absent or empty.
        """
        return coalesce(self._description, NO_DESCRIPTION) or NO_DESCRIPTION


__all__ = (
    # Specification
    "Argument",

    # Tagged variants
    "Literal",
    "Computed",
    "Predicate",
    "Pattern",
    "Builtin",

    # Helpers and constants
    "label",
    "PROPERTIES",
    "NO_DESCRIPTION",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType
