"""
Declargs schema registry: the set of arguments a parser understands.

What this module provides
- Registry: maps every canonical name and alias to its Argument, and every
  canonical name that declared a default to that default.
  • define(name, **properties): declare one argument (atomic: a failing
    definition leaves the registry untouched).
  • describe(): canonical name → description, for help renderers.
  • lookup by exact name or alias ([], in), iteration over canonical names.

Contract
- A registry is built once and then read; parsers never mutate it.
- define() is single-writer: concurrent definitions from several threads are
  not supported and must be serialized by the caller. Concurrent parses over a
  registry that is no longer being defined are safe.
- There is no process-wide registry: construct one and hand it to a Parser.

Quick start
    from declargs import Registry, Parser

    registry = Registry()
    registry.define("simple")
    registry.define("with_x", bool=True)
    registry.define("items", list=True, description="things to process")

    positionals, values = Parser(registry).parse(["-s", "value", "-w", "--items", "a,b, c"])
"""
from collections.abc import Mapping
from types import MappingProxyType

from .arguments import Argument, PROPERTIES
from .faults import *
from .utils import *


class Registry:
    """
    Name/alias table of declared arguments plus their defaults.

    Parameters
    - definitions: Unset | Mapping[str, Mapping[str, Any]]
      Optional mapping of name → properties, defined in iteration order.
    """

    def __init__(self, definitions=Unset, /):
        self._arguments = {}  # name or alias -> Argument
        self._canonicals = {}  # canonical name -> Argument, registration order
        self._defaults = {}  # canonical name -> Literal | Computed

        if definitions is not Unset:
            if not isinstance(definitions, Mapping):
                raise TypeError("Registry() argument must be a mapping of names to properties")
            for name, properties in definitions.items():
                self.define(name, **properties)

    @property
    def arguments(self):
        """
        Read-only view of canonical name → Argument, in registration order.
        """
        return MappingProxyType(self._canonicals)

    @property
    def defaults(self):
        """
        Read-only view of canonical name → default variant.
        """
        return MappingProxyType(self._defaults)

    def define(self, name, /, **properties):
        """
        Declare a new argument.

        Parameters
        - name: str
          Canonical name, unique across every name and alias of this registry.
        - **properties: any of alias, list, bool, default, check, transform, description.

        Returns
        - Argument: the registered specification.

        Raises
        - DuplicateNameError: the name is already a registered name or alias.
        - InvalidPropertyError: an unknown property, or a property of the wrong kind.
        - IncompatiblePropertiesError: bool with check/transform, or list with bool.
        - InvalidDefaultError: a collection default not wrapped in a callable.
        - InvalidCheckError: a check that is not a callable, a pattern or a builtin name.
        - DuplicateAliasError: an alias that is already taken, repeated, or equal to the name.
        - InvalidNameError: a name or alias that is not a non-empty string.
        """
        if isinstance(name, str) and name in self._arguments:
            raise DuplicateNameError(
                "argument %r is already defined" % name,
                title="duplicate name",
                code=FaultCode.DUPLICATE_NAME,
                hint="pick another name or extend the existing definition",
                name=name,
            )

        for property in properties:
            if property not in PROPERTIES:
                raise InvalidPropertyError(
                    "invalid argument property %r for %r" % (property, name),
                    title="invalid property",
                    code=FaultCode.INVALID_PROPERTY,
                    hint="valid properties are %s" % ", ".join(PROPERTIES),
                    name=name,
                    property=property,
                )

        argument = Argument(name, **properties)

        for alias in argument.aliases:
            if alias in self._arguments:
                raise DuplicateAliasError(
                    "cannot use alias %r for %r, name is already taken by argument %r" % (
                        alias, name, self._arguments[alias].name
                    ),
                    title="duplicate alias",
                    code=FaultCode.DUPLICATE_ALIAS,
                    hint="pick an alias that no other argument uses",
                    name=name,
                    alias=alias,
                )

        self._arguments.update(dict.fromkeys(argument.names, argument))
        self._canonicals[name] = argument
        if argument.default is not Unset:
            self._defaults[name] = argument.default
        return argument

    def describe(self):
        """
        Return a fresh dict of canonical name → description ("No Description" when absent).
        """
        return {name: argument.describe() for name, argument in self._canonicals.items()}

    def keys(self):
        """
        Every name and alias this registry resolves exactly.
        """
        return self._arguments.keys()

    def __getitem__(self, key):
        """
        Exact lookup by canonical name or alias (no prefix expansion).
        """
        return self._arguments[key]

    def __contains__(self, key):
        return key in self._arguments

    def __iter__(self):
        return iter(self._canonicals)

    def __len__(self):
        return len(self._canonicals)

    def __repr__(self):
        return "registry(%s)" % ", ".join(map(repr, self._canonicals))

    def __rich_repr__(self):
        for argument in self._canonicals.values():
            yield argument


__all__ = (
    "Registry",
)
