"""Quantities: a real scalar paired with a ratio of units.

Multiplication and division always succeed and simply combine units.
Addition, subtraction, and ordering require the operands to conform, meaning
that the right operand converts into the left operand's units with nothing
left over. Equality through `==` is strict and never converts; the `equal`,
`less`, and `approx` methods compare after conversion.
"""

import logging
import numbers
import operator as standard
import typing

import numpy

from quanta.core import algebraic
from quanta.core import formatter
from quanta.core import iterables
from quanta.core import ratio
from quanta.core import unit


logger = logging.getLogger(__name__)


class UnitConformanceError(ValueError):
    """Two sets of units do not conform to each other."""

    def __init__(
        self,
        this: 'ratio.UnitRatio',
        that: 'ratio.UnitRatio',
        remainder: 'ratio.UnitRatio'=None,
    ) -> None:
        self.this = this
        self.that = that
        self.remainder = remainder

    def __str__(self) -> str:
        string = f"Can't conform {str(self.that)!r} to {str(self.this)!r}"
        if self.remainder is not None:
            string += f" (remainder: {str(self.remainder)!r})"
        return string


class UnitConversionError(ValueError):
    """A conversion left units over."""

    def __init__(
        self,
        value: 'Quantity',
        target: typing.Any,
        remainder: 'ratio.UnitRatio',
    ) -> None:
        self.value = value
        self.target = target
        self.remainder = remainder

    def __str__(self) -> str:
        return (
            f"Can't convert {str(self.value)!r} to {str(self.target)!r}"
            f" (remainder: {str(self.remainder)!r})"
        )


def _qualify_or_none(obj: typing.Any) -> typing.Optional['Quantity']:
    """Helper for `~quantity.qualify`."""
    if isinstance(obj, Quantity):
        return obj
    if isinstance(obj, algebraic.Real):
        return Quantity(obj)
    if isinstance(obj, algebraic.Qualified):
        return Quantity(obj.scalar, obj.units)
    return None


def qualify(obj: typing.Any) -> 'Quantity':
    """Express a number or qualified object as a quantity.

    Parameters
    ----------
    obj
        A `~quantity.Quantity` (returned as-is), a real number (which becomes
        unitless), or any object with `scalar` and `units` attributes, such as
        a `~maker.Maker`, a `~unit.Unit`, or a `~ratio.UnitRatio`.

    Raises
    ------
    TypeError
        `obj` is none of the above.
    """
    result = _qualify_or_none(obj)
    if result is None:
        raise TypeError(f"Can't express {obj!r} as a quantity") from None
    return result


def _units_of(obj: typing.Any) -> 'ratio.UnitRatio':
    """Get the unit ratio of a unit, ratio, or qualified object."""
    if obj is None:
        return ratio.UnitRatio()
    if isinstance(obj, ratio.UnitRatio):
        return obj
    if isinstance(obj, unit.Unit):
        return obj.units
    return qualify(obj).units


class Quantity(algebraic.Quantity, iterables.ReprStrMixin):
    """A real scalar in some units."""

    display = iterables.Display(
        __repr__="scalar={scalar}, units={units!r}",
    )

    __array_ufunc__ = None

    def __init__(
        self,
        scalar: numbers.Real,
        units: typing.Union['ratio.UnitRatio', 'unit.Unit']=None,
    ) -> None:
        """
        Parameters
        ----------
        scalar : real number
            The numerical value of this quantity.

        units : `~ratio.UnitRatio` or `~unit.Unit`, optional
            The units of this quantity. The default is unitless.
        """
        if not isinstance(scalar, algebraic.Real):
            raise TypeError(
                f"Scalar must be a real number, not {type(scalar)}"
            ) from None
        if units is not None and not isinstance(
            units, (ratio.UnitRatio, unit.Unit)
        ):
            raise TypeError(
                f"Units must be a unit or unit ratio, not {type(units)}"
            ) from None
        self._scalar = scalar
        self._units = _units_of(units)

    @property
    def scalar(self) -> numbers.Real:
        """The numerical value of this quantity."""
        return self._scalar

    @property
    def units(self) -> 'ratio.UnitRatio':
        """The units of this quantity."""
        return self._units

    def implement(self, func: typing.Callable, mode: str, *others, **kwargs):
        """Implement a standard operation."""
        if mode == 'cast':
            if self._units.is_empty:
                return func(self._scalar)
            reduced = self.reduce()
            if reduced.units.is_empty:
                return func(reduced.scalar)
            raise TypeError(
                f"Can't convert {str(self)!r} to {func.__name__}"
            ) from None
        if mode == 'arithmetic':
            return Quantity(func(self._scalar, **kwargs), self._units)
        that = _qualify_or_none(others[0])
        if that is None:
            return NotImplemented
        if mode == 'comparison':
            return func(self._scalar, self._conform(that))
        if mode == 'forward':
            return self._combine(func, self, that, others[0])
        if mode == 'reverse':
            if func is standard.pow:
                return NotImplemented
            return self._combine(func, that, self, others[0])
        raise ValueError(f"Unknown operator mode {mode!r}")

    def _combine(
        self,
        func: typing.Callable,
        a: 'Quantity',
        b: 'Quantity',
        operand: typing.Any,
    ) -> 'Quantity':
        """Compute a binary operation on two quantities."""
        if func in (standard.add, standard.sub):
            return Quantity(func(a._scalar, a._conform(b)), a._units)
        if func in (standard.mul, standard.truediv):
            return Quantity(
                func(a._scalar, b._scalar),
                func(a._units, b._units),
            )
        if func is standard.pow:
            if not isinstance(operand, algebraic.Real):
                return NotImplemented
            if not algebraic.isinteger(operand):
                raise ratio.ExponentError(operand)
            p = int(operand)
            return Quantity(a._scalar ** p, a._units ** p)
        raise ValueError(f"Unsupported operation {func.__name__!r}")

    def _conform(self, other: 'Quantity') -> numbers.Real:
        """Express the scalar of `other` in the units of this quantity."""
        if other._units == self._units:
            return other._scalar
        converted, remainder = other.convert(self._units)
        if not remainder.is_empty:
            raise UnitConformanceError(self._units, other._units, remainder)
        return converted._scalar

    def __eq__(self, other) -> bool:
        """True if both quantities have equal scalars and identical units.

        This does not convert. Use `equal` to compare quantities in different
        but conformable units.
        """
        if not isinstance(other, (Quantity, algebraic.Real)):
            return NotImplemented
        that = qualify(other)
        return self._scalar == that._scalar and self._units == that._units

    def __hash__(self) -> int:
        """Called for hash(self)."""
        if self._units.is_empty:
            return hash(self._scalar)
        return hash((self._scalar, self._units))

    def equal(self, other: typing.Any) -> bool:
        """True if `other` equals this quantity after conversion.

        Raises
        ------
        `~quantity.UnitConformanceError`
            The quantities do not conform.
        """
        return self._scalar == self._conform(qualify(other))

    def less(self, other: typing.Any) -> bool:
        """True if this quantity is less than `other` after conversion."""
        return self._scalar < self._conform(qualify(other))

    def approx(self, other: typing.Any, tolerance: numbers.Real) -> bool:
        """True if `other` is within `tolerance` of this quantity.

        The comparison happens in the units of this quantity, and `tolerance`
        is an absolute difference in those units.
        """
        converted = self._conform(qualify(other))
        return bool(
            numpy.isclose(self._scalar, converted, rtol=0.0, atol=tolerance)
        )

    def convert(
        self,
        target: typing.Any,
    ) -> typing.Tuple['Quantity', 'ratio.UnitRatio']:
        """Convert this quantity to the units of `target`.

        Parameters
        ----------
        target
            Anything with units: a `~maker.Maker`, a `~unit.Unit`, a
            `~ratio.UnitRatio`, or a `~quantity.Quantity`. Only its units
            matter.

        Returns
        -------
        tuple
            The converted quantity and the primitive units that did not cancel
            against `target`. A non-empty remainder means that the conversion
            is dimensionally impossible, and the converted quantity is only
            partial.
        """
        units = _units_of(target)
        if self._units == units:
            return self, ratio.UnitRatio()
        reduced = (self._units / units).reduce()
        logger.debug(
            "converting %s to %s: factor %s, remainder %s",
            self, units, reduced.scalar, reduced.units,
        )
        result = Quantity(self._scalar * reduced.scalar, units)
        return result, reduced.units

    def reduce(self) -> 'Quantity':
        """Express this quantity in primitive units."""
        reduced = self._units.reduce()
        return Quantity(self._scalar * reduced.scalar, reduced.units)

    def reciprocal(self) -> 'Quantity':
        """Compute 1 / self."""
        return Quantity(1 / self._scalar, self._units.reciprocal())

    def format(self, using: 'formatter.Formatter'=None) -> str:
        """Render this quantity as text with the given formatter."""
        return (using or formatter.DEFAULT).format(self)

    def __format__(self, format_spec: str) -> str:
        """Apply `format_spec` to the scalar and append the units."""
        if not format_spec:
            return str(self)
        using = formatter.DEFAULT.configure(value_format=format_spec)
        return using.format(self)

    def __str__(self) -> str:
        """A simplified representation of this quantity."""
        return formatter.DEFAULT.format(self)


def must_convert(value: typing.Any, target: typing.Any) -> Quantity:
    """Convert `value` to the units of `target` or raise an exception.

    Raises
    ------
    `~quantity.UnitConversionError`
        The conversion left units over.
    """
    this = qualify(value)
    result, remainder = this.convert(target)
    if not remainder.is_empty:
        raise UnitConversionError(this, target, remainder)
    return result
