"""Named units and the functions that declare them.

A unit is either *named* or *prefixed*. A named unit is primitive when its
definition is the unitless scalar 1 and derived otherwise. A prefixed unit
scales another unit by a constant factor (e.g., 'k' + 'g' -> 'kg'). No other
kinds of unit exist, and units never change after construction: every unit
ratio that mentions a unit shares the same object.
"""

import abc
import logging
import numbers
import typing

from quanta.core import iterables
from quanta.core import maker
from quanta.core import quantity
from quanta.core import ratio


logger = logging.getLogger(__name__)


class CyclicDefinitionError(Exception):
    """A unit is defined, directly or transitively, in terms of itself."""

    def __init__(self, symbol: str, detail: str=None) -> None:
        self.symbol = symbol
        self.detail = detail

    def __str__(self) -> str:
        string = f"Unit {self.symbol!r} has a cyclic definition"
        if self.detail:
            string += f" ({self.detail})"
        return string


class PrefixError(TypeError):
    """A prefix was applied to something other than a single unit."""

    def __init__(self, prefix: str, target: typing.Any) -> None:
        self.prefix = prefix
        self.target = target

    def __str__(self) -> str:
        return (
            f"Prefix {self.prefix!r} must wrap a singular unit"
            f", not {str(self.target)!r}"
        )


class Unit(abc.ABC, iterables.ReprStrMixin):
    """Abstract base class for units.

    Concrete units must define `symbol` and `definition`. Everything else,
    including equality, derives from those two properties.
    """

    display = iterables.Display(
        __str__='{symbol}',
        __repr__="{symbol!r} = {definition}",
    )

    _units: 'ratio.UnitRatio'=None
    _depth: int=None
    _hash: int=None

    @property
    @abc.abstractmethod
    def symbol(self) -> str:
        """The name attached to this unit."""
        pass

    @property
    @abc.abstractmethod
    def definition(self) -> 'quantity.Quantity':
        """The quantity that one of this unit equals."""
        pass

    @property
    @abc.abstractmethod
    def kind(self) -> str:
        """One of 'primitive', 'derived', or 'prefixed'."""
        pass

    @property
    def is_primitive(self) -> bool:
        """True if this unit is defined as the unitless value 1."""
        definition = self.definition
        return definition.scalar == 1 and definition.units.is_empty

    @property
    def depth(self) -> int:
        """The number of definitions between this unit and its primitives."""
        if self._depth is None:
            self._depth = _compute_depth(self)
        return self._depth

    @property
    def scalar(self) -> int:
        """The scalar value of one of this unit."""
        return 1

    @property
    def units(self) -> 'ratio.UnitRatio':
        """The unit ratio containing only this unit."""
        if self._units is None:
            self._units = ratio.UnitRatio([self])
        return self._units

    @property
    def maker(self) -> 'maker.Maker':
        """A maker that attaches this unit to values."""
        return maker.Maker(1, self.units)

    def make(self, value: numbers.Real) -> 'quantity.Quantity':
        """Create a quantity of `value` in this unit."""
        return quantity.Quantity(value, self.units)

    def __eq__(self, other) -> bool:
        """True if both units have the same symbol and equal definitions."""
        if self is other:
            return True
        if not isinstance(other, Unit):
            return NotImplemented
        if self.symbol != other.symbol:
            return False
        return self.definition == other.definition

    def __hash__(self) -> int:
        """Called for hash(self). Consistent with structural equality."""
        if self._hash is None:
            self._hash = hash((self.symbol, self.definition))
        return self._hash


class NamedUnit(Unit):
    """A primitive or derived unit with its own symbol."""

    def __init__(
        self,
        symbol: str,
        definition: 'quantity.Quantity'=None,
    ) -> None:
        if not isinstance(symbol, str) or not symbol:
            raise ValueError(
                f"Unit symbol must be a non-empty string, not {symbol!r}"
            ) from None
        self._symbol = symbol
        self._definition = (
            quantity.Quantity(1) if definition is None
            else quantity.qualify(definition)
        )
        self._depth = _compute_depth(self)

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def definition(self) -> 'quantity.Quantity':
        return self._definition

    @property
    def kind(self) -> str:
        return 'primitive' if self.is_primitive else 'derived'


class PrefixedUnit(Unit):
    """A unit scaled by a named multiplier.

    The symbol of a prefixed unit is the concatenation of the prefix symbol and
    the inner unit's symbol. Its definition is `factor` of the inner unit.
    """

    display = iterables.Display(
        __str__='{symbol}',
        __repr__="{prefix!r} = {factor} {inner}",
    )

    def __init__(self, prefix: str, factor: numbers.Real, inner: Unit) -> None:
        self._prefix = prefix
        self._factor = factor
        self._inner = inner
        self._depth = _compute_depth(self)

    @property
    def prefix(self) -> str:
        """The symbol of the multiplier."""
        return self._prefix

    @property
    def factor(self) -> numbers.Real:
        """The value of the multiplier."""
        return self._factor

    @property
    def inner(self) -> Unit:
        """The unit that this prefix scales."""
        return self._inner

    @property
    def symbol(self) -> str:
        return f"{self._prefix}{self._inner.symbol}"

    @property
    def definition(self) -> 'quantity.Quantity':
        return self._inner.make(self._factor)

    @property
    def kind(self) -> str:
        return 'prefixed'


def _compute_depth(unit: Unit) -> int:
    """Compute the length of the longest definition chain below `unit`.

    Every unit in a definition already existed when the definition was built,
    so the depth of each is already known.
    """
    definition = unit.definition
    members = definition.units.numerator + definition.units.denominator
    if not members:
        return 0
    return 1 + max(member.depth for member in members)


def dependencies(unit: Unit) -> typing.Iterator[Unit]:
    """Iterate over every unit that `unit` is defined in terms of.

    The iteration is breadth-first and yields each distinct unit once.
    """
    seen = []
    pending = [unit]
    while pending:
        current = pending.pop(0)
        definition = current.definition
        for member in definition.units.numerator + definition.units.denominator:
            if not any(member is this for this in seen):
                seen.append(member)
                pending.append(member)
                yield member


def is_primitive(unit: typing.Optional[Unit]) -> bool:
    """True if `unit` exists and its definition is the unitless value 1."""
    if unit is None:
        return False
    return unit.is_primitive


def primitive(symbol: str) -> 'maker.Maker':
    """Create a maker for a new irreducible unit named `symbol`.

    Primitive units should be either the base units of a system or unitless
    fundamental constants.
    """
    return derive(symbol, maker.UNITY)


def derive(symbol: str, value: typing.Any) -> 'maker.Maker':
    """Create a maker for a new unit named `symbol` that equals `value`.

    Parameters
    ----------
    symbol : string
        The name to attach to the new unit.

    value : qualified object or real number
        The quantity that one of the new unit equals. This may be a
        `~quantity.Quantity`, a `~maker.Maker`, a `~unit.Unit`, a
        `~ratio.UnitRatio`, or a plain number.

    Returns
    -------
    `~maker.Maker`
        A maker that attaches the new unit to values.
    """
    new = NamedUnit(symbol, quantity.qualify(value))
    logger.debug("declared %s unit %r", new.kind, new)
    return new.maker


def prefix(
    symbol: str,
    factor: numbers.Real,
) -> typing.Callable[['maker.Maker'], 'maker.Maker']:
    """Create a function that applies a multiplier prefix to a unit.

    Parameters
    ----------
    symbol : string
        The symbol of the prefix (e.g., 'k').

    factor : real number
        The value of the prefix (e.g., 1000).

    Returns
    -------
    callable
        A function that accepts a maker for a single unit and returns a maker
        for the prefixed unit. It raises `~unit.PrefixError` if the given maker
        does not carry exactly one unit in its numerator.
    """
    def apply(inner: 'maker.Maker') -> 'maker.Maker':
        target = getattr(inner, 'unit', inner)
        if not isinstance(target, Unit):
            raise PrefixError(symbol, getattr(inner, 'units', inner))
        return PrefixedUnit(symbol, factor, target).maker
    apply.symbol = symbol
    apply.factor = factor
    return apply
