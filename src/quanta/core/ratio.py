"""Ratios of units and the algebra over them.

A `~ratio.UnitRatio` is the dimensional signature of a quantity: a product of
numerator units divided by a product of denominator units. Repeated entries
represent powers. Every ratio is stored in canceled form, sorted by symbol.
"""

import fractions
import logging
import numbers
import typing

from quanta.core import algebraic
from quanta.core import formatter
from quanta.core import iterables
from quanta.core import quantity
from quanta.core import unit


logger = logging.getLogger(__name__)


class ExponentError(ValueError):
    """An exponent was not an integer."""

    def __init__(self, exponent: typing.Any) -> None:
        self.exponent = exponent

    def __str__(self) -> str:
        return (
            f"Unit exponents must be integers, not {self.exponent!r}"
        )


def _symbol(this: 'unit.Unit') -> str:
    """Sort key for units."""
    return this.symbol


def _match_run(
    top: typing.List['unit.Unit'],
    bottom: typing.List['unit.Unit'],
) -> typing.Tuple[typing.List['unit.Unit'], typing.List['unit.Unit']]:
    """Cancel units within two runs that share a symbol.

    Each unit in `top` removes the first remaining unit in `bottom` that is
    structurally equal to it. The survivors of both runs keep their order.
    """
    remaining = list(bottom)
    survivors = []
    for this in top:
        for index, that in enumerate(remaining):
            if this == that:
                del remaining[index]
                break
        else:
            survivors.append(this)
    return survivors, remaining


def cancel(
    numerator: typing.Iterable['unit.Unit'],
    denominator: typing.Iterable['unit.Unit'],
) -> typing.Tuple[typing.Tuple['unit.Unit', ...], ...]:
    """Remove units that appear in both `numerator` and `denominator`.

    Both sequences are stably sorted by symbol and then merged run by run,
    where a run is a group of consecutive units with the same symbol. Units
    only cancel when they are structurally equal, so two units that share a
    symbol but differ in definition both survive.

    Returns
    -------
    tuple
        The canceled numerator and denominator, each a symbol-sorted tuple.
    """
    top = list(iterables.runs(sorted(numerator, key=_symbol), _symbol))
    bottom = list(iterables.runs(sorted(denominator, key=_symbol), _symbol))
    kept_top = []
    kept_bottom = []
    i = j = 0
    while i < len(top) and j < len(bottom):
        a = top[i][0].symbol
        b = bottom[j][0].symbol
        if a < b:
            kept_top.extend(top[i])
            i += 1
        elif b < a:
            kept_bottom.extend(bottom[j])
            j += 1
        else:
            survivors, remaining = _match_run(top[i], bottom[j])
            kept_top.extend(survivors)
            kept_bottom.extend(remaining)
            i += 1
            j += 1
    for run in top[i:]:
        kept_top.extend(run)
    for run in bottom[j:]:
        kept_bottom.extend(run)
    return tuple(kept_top), tuple(kept_bottom)


def _same_units(
    these: typing.Sequence['unit.Unit'],
    those: typing.Sequence['unit.Unit'],
) -> bool:
    """True if two symbol-sorted sequences hold the same units.

    Order within a run of equal symbols does not matter.
    """
    if len(these) != len(those):
        return False
    pairs = zip(
        iterables.runs(these, _symbol),
        iterables.runs(those, _symbol),
    )
    for this, that in pairs:
        if len(this) != len(that) or this[0].symbol != that[0].symbol:
            return False
        survivors, remaining = _match_run(this, that)
        if survivors or remaining:
            return False
    return True


def _exact(value: numbers.Real) -> fractions.Fraction:
    """Convert a real number to an exact fraction."""
    if algebraic.isinteger(value):
        return fractions.Fraction(int(value))
    if isinstance(value, numbers.Rational):
        return fractions.Fraction(value.numerator, value.denominator)
    return fractions.Fraction(float(value))


class UnitRatio:
    """A canceled ratio of units.

    Instances are immutable. Every operation returns a new ratio, and every
    new ratio cancels matching units in its numerator and denominator.
    """

    def __init__(
        self,
        numerator: typing.Iterable['unit.Unit']=(),
        denominator: typing.Iterable['unit.Unit']=(),
    ) -> None:
        self._numerator, self._denominator = cancel(numerator, denominator)

    @property
    def numerator(self) -> typing.Tuple['unit.Unit', ...]:
        """The units in the numerator, sorted by symbol."""
        return self._numerator

    @property
    def denominator(self) -> typing.Tuple['unit.Unit', ...]:
        """The units in the denominator, sorted by symbol."""
        return self._denominator

    @property
    def is_empty(self) -> bool:
        """True if this ratio has no units."""
        return not (self._numerator or self._denominator)

    @property
    def scalar(self) -> int:
        """The scalar value of a bare ratio."""
        return 1

    @property
    def units(self) -> 'UnitRatio':
        """This ratio, for compatibility with qualified objects."""
        return self

    def singular(self) -> typing.Optional['unit.Unit']:
        """The only unit in this ratio, if it is a single numerator unit."""
        if len(self._numerator) == 1 and not self._denominator:
            return self._numerator[0]
        return None

    def powers(self) -> typing.List[typing.Tuple['unit.Unit', int]]:
        """Group repeated units into (unit, exponent) pairs.

        Numerator groups come first, with positive exponents, followed by
        denominator groups, with negative exponents. Within each side, groups
        appear in symbol order.
        """
        groups = []
        for sign, units in ((1, self._numerator), (-1, self._denominator)):
            for run in iterables.runs(units, _symbol):
                counted = []
                for this in run:
                    for index, (that, count) in enumerate(counted):
                        if this == that:
                            counted[index] = (that, count + 1)
                            break
                    else:
                        counted.append((this, 1))
                groups.extend((this, sign * count) for this, count in counted)
        return groups

    def make(self, value: numbers.Real) -> 'quantity.Quantity':
        """Create a quantity of `value` in these units."""
        return quantity.Quantity(value, self)

    def reciprocal(self) -> 'UnitRatio':
        """Swap the numerator and denominator."""
        return UnitRatio(self._denominator, self._numerator)

    def equivalent(self, other: typing.Any) -> bool:
        """True if both ratios reduce to the same primitive units.

        This is weaker than equality: a named unit such as 'N' is equivalent
        to, but not equal to, the expression 'kg m / s^2'.
        """
        that = _as_ratio(other)
        if that is None:
            raise TypeError(
                f"Can't compare units to {type(other)}"
            ) from None
        if self == that:
            return True
        return self.reduce().units == that.reduce().units

    def reduce(self) -> 'quantity.Quantity':
        """Express this ratio in primitive units.

        Each pass replaces every non-primitive unit by its definition: the
        definition's scalar enters the accumulated factor, its numerator units
        join the side of the replaced unit, and its denominator units join the
        opposite side. Passes repeat until only primitive units remain.

        Returns
        -------
        `~quantity.Quantity`
            The accumulated factor in the canceled primitive units.

        Raises
        ------
        `~unit.CyclicDefinitionError`
            A definition chain was longer than the recorded unit depths allow.
        """
        pending = [(this, 1) for this in self._numerator]
        pending.extend((this, -1) for this in self._denominator)
        limit = 1 + max((this.depth for this, _ in pending), default=0)
        factor = fractions.Fraction(1)
        top = []
        bottom = []
        passes = 0
        while pending:
            passes += 1
            if passes > limit:
                raise unit.CyclicDefinitionError(
                    pending[0][0].symbol,
                    f"reduction of {self} exceeded {limit} passes",
                )
            logger.debug(
                "reduction pass %d of %s: %d units", passes, self, len(pending)
            )
            expanded = []
            for this, sign in pending:
                if this.is_primitive:
                    (top if sign > 0 else bottom).append(this)
                    continue
                definition = this.definition
                factor *= _exact(definition.scalar) ** sign
                expanded.extend((u, sign) for u in definition.units.numerator)
                expanded.extend((u, -sign) for u in definition.units.denominator)
            pending = expanded
        result = UnitRatio(top, bottom)
        logger.debug("reduced %s to %s %s", self, factor, result)
        return quantity.Quantity(float(factor), result)

    def __mul__(self, other):
        """Called for self * other."""
        that = _as_ratio(other)
        if that is None:
            return NotImplemented
        return UnitRatio(
            self._numerator + that._numerator,
            self._denominator + that._denominator,
        )

    def __rmul__(self, other):
        """Called for other * self."""
        that = _as_ratio(other)
        if that is None:
            return NotImplemented
        return that * self

    def __truediv__(self, other):
        """Called for self / other."""
        that = _as_ratio(other)
        if that is None:
            return NotImplemented
        return self * that.reciprocal()

    def __rtruediv__(self, other):
        """Called for other / self."""
        that = _as_ratio(other)
        if that is None:
            return NotImplemented
        return that * self.reciprocal()

    def __pow__(self, exponent):
        """Called for self ** exponent."""
        if not isinstance(exponent, algebraic.Real):
            return NotImplemented
        if not algebraic.isinteger(exponent):
            raise ExponentError(exponent)
        p = int(exponent)
        if p < 0:
            return self.reciprocal() ** -p
        return UnitRatio(self._numerator * p, self._denominator * p)

    def __eq__(self, other) -> bool:
        """True if both ratios hold the same units, without reduction."""
        if not isinstance(other, UnitRatio):
            return NotImplemented
        return (
            _same_units(self._numerator, other._numerator)
            and _same_units(self._denominator, other._denominator)
        )

    def __hash__(self) -> int:
        """Called for hash(self)."""
        return hash(
            (
                tuple(this.symbol for this in self._numerator),
                tuple(this.symbol for this in self._denominator),
            )
        )

    def __str__(self) -> str:
        """A simplified representation of these units."""
        return formatter.DEFAULT.format_units(self)

    def __repr__(self) -> str:
        """An unambiguous representation of these units."""
        numerator = ', '.join(repr(this) for this in self._numerator)
        denominator = ', '.join(repr(this) for this in self._denominator)
        return f"UnitRatio([{numerator}], [{denominator}])"


def _as_ratio(this: typing.Any) -> typing.Optional[UnitRatio]:
    """Get the ratio of a unit or ratio, if possible."""
    if isinstance(this, UnitRatio):
        return this
    if isinstance(this, unit.Unit):
        return this.units
    return None
