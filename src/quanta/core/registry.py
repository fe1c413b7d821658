"""Lookup tables from unit symbols to makers.

A `~registry.Registry` records named units and multiplier prefixes so that a
parser can turn text like 'km' into the maker for kilometers. Registries may
chain to a parent, which lets a specialized set of units (e.g., US survey
units) shadow a more general set without copying it.
"""

import collections.abc
import logging
import numbers
import typing

from quanta.core import iterables
from quanta.core import maker
from quanta.core import unit


logger = logging.getLogger(__name__)


class RegistrationError(Exception):
    """A symbol could not be registered."""

    def __init__(self, registry: str, symbol: str, reason: str) -> None:
        self.registry = registry
        self.symbol = symbol
        self.reason = reason

    def __str__(self) -> str:
        return (
            f"Can't register {self.symbol!r} in {self.registry}"
            f": {self.reason}"
        )


class Registry(collections.abc.Mapping):
    """A mapping from unit symbols and aliases to makers.

    The mapping interface covers symbols registered directly in this registry.
    Use `find` to resolve prefixed symbols and symbols of parent registries.
    """

    def __init__(self, name: str, parent: 'Registry'=None) -> None:
        self.name = name
        """The name of this registry, for display."""
        self.parent = parent
        """The registry to search after this one."""
        self._makers = {}
        self._prefixes = {}

    @property
    def prefixes(self) -> typing.Dict[str, typing.Callable]:
        """A copy of the prefixes registered directly in this registry."""
        return dict(self._prefixes)

    def primitive(self, symbol: str, *aliases: str) -> 'maker.Maker':
        """Declare and register a primitive unit."""
        self._check_available(symbol, *aliases)
        return self._register(symbol, unit.primitive(symbol), aliases)

    def derive(
        self,
        symbol: str,
        value: typing.Any,
        *aliases: str,
    ) -> 'maker.Maker':
        """Declare and register a unit that equals `value`.

        Raises
        ------
        `~unit.CyclicDefinitionError`
            `value` depends on the unit already registered as `symbol`.
        `~registry.RegistrationError`
            `symbol` or one of `aliases` is already registered.
        """
        existing = self._makers.get(symbol)
        if existing is not None and existing.unit is not None:
            target = existing.unit
            members = getattr(value, 'units', None)
            found = members is not None and any(
                this == target
                for member in members.numerator + members.denominator
                for this in (member, *unit.dependencies(member))
            )
            if found:
                raise unit.CyclicDefinitionError(
                    symbol,
                    f"the new definition depends on {self.name}[{symbol!r}]",
                )
        self._check_available(symbol, *aliases)
        return self._register(symbol, unit.derive(symbol, value), aliases)

    def register(self, this: 'maker.Maker', *aliases: str) -> 'maker.Maker':
        """Register an existing maker for a single named unit."""
        target = this.unit
        if target is None:
            raise RegistrationError(
                self.name,
                str(this),
                "only makers of a single unit can be registered",
            )
        self._check_available(target.symbol, *aliases)
        return self._register(target.symbol, this, aliases)

    def prefix(
        self,
        symbol: str,
        factor: numbers.Real,
        *aliases: str,
    ) -> typing.Callable[['maker.Maker'], 'maker.Maker']:
        """Declare and register a multiplier prefix."""
        for name in (symbol, *aliases):
            if name in self._prefixes:
                raise RegistrationError(
                    self.name, name, "prefix already registered"
                )
        apply = unit.prefix(symbol, factor)
        for name in (symbol, *aliases):
            self._prefixes[name] = apply
        logger.debug(
            "registered prefix %r = %s in %s", symbol, factor, self.name
        )
        return apply

    def find(self, name: str) -> typing.Optional['maker.Maker']:
        """Find the maker for `name`, or return `None`.

        The search tries, in order: an exact symbol or alias in this registry;
        the longest prefix in this registry whose remainder resolves through
        this registry; the parent registry.
        """
        if name in self._makers:
            return self._makers[name]
        ordered = sorted(self._prefixes, key=len, reverse=True)
        for symbol in ordered:
            rest = name[len(symbol):]
            if rest and name.startswith(symbol):
                if (found := self.find(rest)) and found.unit is not None:
                    return self._prefixes[symbol](found)
        if self.parent is not None:
            return self.parent.find(name)
        return None

    def _check_available(self, *names: str) -> None:
        """Raise an exception if any name is already registered."""
        for name in names:
            if name in self._makers:
                raise RegistrationError(
                    self.name, name, "symbol already registered"
                )

    def _register(
        self,
        symbol: str,
        this: 'maker.Maker',
        aliases: typing.Iterable[str],
    ) -> 'maker.Maker':
        """Record `this` under `symbol` and every alias."""
        for name in (symbol, *aliases):
            self._makers[name] = this
        logger.debug("registered %r in %s", symbol, self.name)
        return this

    def __getitem__(self, key: str) -> 'maker.Maker':
        """Get the maker registered under a symbol or alias."""
        if key in self._makers:
            return self._makers[key]
        raise KeyError(f"No unit {key!r} in {self.name}") from None

    def __iter__(self) -> typing.Iterator[str]:
        """Iterate over registered symbols and aliases."""
        return iter(self._makers)

    def __len__(self) -> int:
        """The number of registered symbols and aliases."""
        return len(self._makers)

    def __str__(self) -> str:
        symbols = iterables.show_at_most(6, self._makers, separator=', ')
        return f"{self.name}: {symbols}"

    def __repr__(self) -> str:
        parent = (
            f", parent={self.parent.name!r}" if self.parent is not None
            else ""
        )
        return f"{self.__class__.__qualname__}({self.name!r}{parent})"
