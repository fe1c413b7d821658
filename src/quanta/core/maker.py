"""Makers: callables that attach fixed units to values.

A maker pairs a scale factor with a unit ratio. Calling it with a value
produces a quantity of `value * scale` in those units. Makers compose with
`*`, `/`, and `**`, which makes them the natural way to write unit
expressions before any value exists::

    newton = kg * m / s**2
    force = newton(1.234)
"""

import numbers
import typing

from quanta.core import algebraic
from quanta.core import iterables
from quanta.core import quantity
from quanta.core import ratio
from quanta.core import unit


class Maker(algebraic.Multiplicative, iterables.ReprStrMixin):
    """A callable that creates quantities in fixed units."""

    __array_ufunc__ = None

    def __init__(
        self,
        scale: numbers.Real=1,
        units: typing.Union['ratio.UnitRatio', 'unit.Unit']=None,
    ) -> None:
        if not isinstance(scale, algebraic.Real):
            raise TypeError(
                f"Maker scale must be a real number, not {type(scale)}"
            ) from None
        self._scale = scale
        self._units = None if units is None else units.units

    def __call__(self, value: numbers.Real) -> 'quantity.Quantity':
        """Create a quantity of `value` in these units."""
        return quantity.Quantity(value * self._scale, self.units)

    @property
    def scalar(self) -> numbers.Real:
        """The factor that this maker applies to values."""
        return self._scale

    @property
    def units(self) -> 'ratio.UnitRatio':
        """The units that this maker attaches to values."""
        if self._units is None:
            self._units = ratio.UnitRatio()
        return self._units

    @property
    def unit(self) -> typing.Optional['unit.Unit']:
        """The single unit of this maker, if there is exactly one."""
        return self.units.singular()

    def __mul__(self, other):
        """Called for self * other."""
        if isinstance(other, Maker):
            return Maker(self._scale * other._scale, self.units * other.units)
        if isinstance(other, (unit.Unit, ratio.UnitRatio)):
            return Maker(self._scale, self.units * other.units)
        if isinstance(other, algebraic.Real):
            return Maker(self._scale * other, self.units)
        return NotImplemented

    def __rmul__(self, other):
        """Called for other * self."""
        if isinstance(other, (unit.Unit, ratio.UnitRatio)):
            return Maker(self._scale, other.units * self.units)
        if isinstance(other, algebraic.Real):
            return Maker(other * self._scale, self.units)
        return NotImplemented

    def __truediv__(self, other):
        """Called for self / other."""
        if isinstance(other, Maker):
            return Maker(self._scale / other._scale, self.units / other.units)
        if isinstance(other, (unit.Unit, ratio.UnitRatio)):
            return Maker(self._scale, self.units / other.units)
        if isinstance(other, algebraic.Real):
            return Maker(self._scale / other, self.units)
        return NotImplemented

    def __rtruediv__(self, other):
        """Called for other / self."""
        if isinstance(other, (unit.Unit, ratio.UnitRatio)):
            return Maker(1 / self._scale, other.units / self.units)
        if isinstance(other, algebraic.Real):
            return Maker(other / self._scale, self.units.reciprocal())
        return NotImplemented

    def __pow__(self, exponent):
        """Called for self ** exponent."""
        if not isinstance(exponent, algebraic.Real):
            return NotImplemented
        if not algebraic.isinteger(exponent):
            raise ratio.ExponentError(exponent)
        p = int(exponent)
        return Maker(self._scale ** p, self.units ** p)

    def __eq__(self, other) -> bool:
        """True if both makers have equal scales and identical units."""
        if not isinstance(other, Maker):
            return NotImplemented
        return self._scale == other._scale and self.units == other.units

    def __hash__(self) -> int:
        """Called for hash(self)."""
        return hash((self._scale, self.units))

    def __str__(self) -> str:
        """The units of this maker, or its scale if not unity."""
        if self._scale != 1 or self.units.is_empty:
            return "*%g" % self._scale
        return str(self.units)


def scalar(value: numbers.Real) -> Maker:
    """Create a maker that scales values by `value`, without units."""
    return Maker(value)


UNITY = scalar(1)
"""The maker that leaves values unchanged and unitless."""
