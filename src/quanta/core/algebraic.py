import abc
import math
import numbers
import operator as standard
import typing

import numpy


@typing.runtime_checkable
class Qualified(typing.Protocol):
    """Protocol for objects that carry a scalar and a unit ratio.

    Instance checks against this protocol will return `True` iff the instance
    has `scalar` and `units` attributes. It exists so that quantities, makers,
    units, and unit ratios may stand in for one another wherever an operation
    only needs "a number of some units".
    """

    __slots__ = ()

    @property
    @abc.abstractmethod
    def scalar(self) -> numbers.Real:
        pass

    @property
    @abc.abstractmethod
    def units(self):
        pass


Self = typing.TypeVar('Self', bound='Multiplicative')


class Multiplicative(abc.ABC):
    """Abstract base class for multiplicative objects."""

    __slots__ = ()

    @abc.abstractmethod
    def __mul__(self: Self, other) -> Self:
        pass

    @abc.abstractmethod
    def __rmul__(self: Self, other) -> Self:
        pass

    @abc.abstractmethod
    def __truediv__(self: Self, other) -> Self:
        pass

    @abc.abstractmethod
    def __rtruediv__(self: Self, other) -> Self:
        pass

    @abc.abstractmethod
    def __pow__(self: Self, other) -> Self:
        pass


class Real(abc.ABC):
    """Abstract base class for plain real-valued numbers.

    This is `numbers.Real` plus the numpy floating-point and integer scalar
    types, which arithmetic in this package treats as dimensionless.
    """


Real.register(numbers.Real)
Real.register(numpy.floating)
Real.register(numpy.integer)


def isinteger(this: typing.Any) -> bool:
    """True if `this` is usable as an integral exponent."""
    if isinstance(this, bool):
        return False
    return isinstance(this, (numbers.Integral, numpy.integer))


class Quantity(abc.ABC):
    """ABC for algebraic quantities.

    Concrete subclasses must define the built-in `__eq__` method and an
    `implement` method that computes the result of a given operation on specific
    operands. This class uses `implement` to define the unary, binary, and
    comparison operators, passing one of the following modes:

    - 'cast': convert to a built-in numeric type
    - 'arithmetic': unary operation on `self`
    - 'comparison': binary comparison between `self` and another operand
    - 'forward': binary operation with `self` as the left operand
    - 'reverse': binary operation with `self` as the right operand

    Concrete subclasses of this class are always true in a boolean sense.
    """

    def __bool__(self) -> bool:
        """Always true for a valid instance."""
        return True

    def __int__(self):
        """Called for int(self)."""
        return self.implement(int, 'cast')

    def __float__(self):
        """Called for float(self)."""
        return self.implement(float, 'cast')

    def __abs__(self):
        """Called for abs(self)."""
        return self.implement(abs, 'arithmetic')

    def __pos__(self):
        """Called for +self."""
        return self.implement(standard.pos, 'arithmetic')

    def __neg__(self):
        """Called for -self."""
        return self.implement(standard.neg, 'arithmetic')

    def __round__(self, ndigits: int=None):
        """Called for round(self)."""
        return self.implement(round, 'arithmetic', ndigits=ndigits)

    def __floor__(self):
        """Called for math.floor(self)."""
        return self.implement(math.floor, 'arithmetic')

    def __ceil__(self):
        """Called for math.ceil(self)."""
        return self.implement(math.ceil, 'arithmetic')

    def __ne__(self, other) -> bool:
        """Called for self != other."""
        return not self == other

    def __lt__(self, other) -> bool:
        """Called for self < other."""
        return self.implement(standard.lt, 'comparison', other)

    def __le__(self, other) -> bool:
        """Called for self <= other."""
        return self.implement(standard.le, 'comparison', other)

    def __gt__(self, other) -> bool:
        """Called for self > other."""
        return self.implement(standard.gt, 'comparison', other)

    def __ge__(self, other) -> bool:
        """Called for self >= other."""
        return self.implement(standard.ge, 'comparison', other)

    def __add__(self, other):
        """Called for self + other."""
        return self.implement(standard.add, 'forward', other)

    def __radd__(self, other):
        """Called for other + self."""
        return self.implement(standard.add, 'reverse', other)

    def __sub__(self, other):
        """Called for self - other."""
        return self.implement(standard.sub, 'forward', other)

    def __rsub__(self, other):
        """Called for other - self."""
        return self.implement(standard.sub, 'reverse', other)

    def __mul__(self, other):
        """Called for self * other."""
        return self.implement(standard.mul, 'forward', other)

    def __rmul__(self, other):
        """Called for other * self."""
        return self.implement(standard.mul, 'reverse', other)

    def __truediv__(self, other):
        """Called for self / other."""
        return self.implement(standard.truediv, 'forward', other)

    def __rtruediv__(self, other):
        """Called for other / self."""
        return self.implement(standard.truediv, 'reverse', other)

    def __pow__(self, other):
        """Called for self ** other."""
        return self.implement(standard.pow, 'forward', other)

    def __rpow__(self, other):
        """Called for other ** self."""
        return self.implement(standard.pow, 'reverse', other)

    @abc.abstractmethod
    def implement(self, func: typing.Callable, mode: str, *others, **kwargs):
        """Implement a standard operator."""
        pass
