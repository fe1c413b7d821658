"""Parse text such as '1.234 kg m/s^2' into quantities.

The grammar is small:

- an optional number (e.g., '23', '.23', '2.3e2', '-4', 'inf', 'nan');
- zero or more numerator units, separated by whitespace or '⋅';
- optionally, '/' or '⁄' followed by one or more denominator units.

Each unit may carry an integer exponent, written either as '^n' or with
superscript digits and an optional superscript minus (e.g., 's⁻²'). A negative
exponent moves the unit to the other side of the fraction. Unit names start
with a letter or a symbol character (e.g., '°') and continue with letters,
symbols, or decimal digits. Symbols are resolved through a
`~registry.Registry`.
"""

import logging
import re
import typing
import unicodedata

from quanta.core import formatter
from quanta.core import quantity
from quanta.core import ratio
from quanta.core import registry as registries
from quanta.core import unit


logger = logging.getLogger(__name__)


class UnitParsingError(ValueError):
    """Text could not be parsed as a quantity."""

    def __init__(self, string: str, position: int, reason: str) -> None:
        self.string = string
        self.position = position
        self.reason = reason

    def __str__(self) -> str:
        return (
            f"Can't parse {self.string!r} at offset {self.position}"
            f" ({self.string[:self.position]!r} here-> "
            f"{self.string[self.position:]!r}): {self.reason}"
        )


_NUMBER = re.compile(
    r"""
    [-+]?
    (?:
        (?:inf(?:inity)?|nan)(?![^\W\d_])
        |
        (?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?
    )
    """,
    re.VERBOSE | re.IGNORECASE,
)
_SPACES = re.compile(fr'[\s{formatter.DOT_OPERATOR}]*')
_CARET = re.compile(r'\^([-+]?\d+)')
_SUPERSCRIPT = re.compile(
    f'({formatter.SUPERSCRIPT_MINUS}?)([{formatter.SUPERSCRIPTS}]+)'
)
_FRACTION = ('/', formatter.FRACTION_SLASH)


def _starts_name(char: str) -> bool:
    """True if `char` may begin a unit name."""
    category = unicodedata.category(char)
    return category.startswith('L') or category == 'So'


def _continues_name(char: str) -> bool:
    """True if `char` may appear after the first character of a unit name."""
    category = unicodedata.category(char)
    return category.startswith('L') or category in {'So', 'Nd'}


Units = typing.List['unit.Unit']


class Parser:
    """A parser that resolves unit symbols through a registry."""

    def __init__(
        self,
        registry: registries.Registry=None,
        must_exist: bool=True,
    ) -> None:
        """
        Parameters
        ----------
        registry : `~registry.Registry`, optional
            The registry in which to look up unit symbols. If `must_exist` is
            false and this is omitted, the parser creates a private registry.

        must_exist : bool, default=True
            If true, unknown symbols are an error. If false, the parser
            registers each unknown symbol as a new primitive unit.
        """
        if registry is None and not must_exist:
            registry = registries.Registry('parsed')
        self.registry = registry
        self.must_exist = must_exist

    def parse(self, string: str) -> 'quantity.Quantity':
        """Parse `string` into a quantity.

        Raises
        ------
        `~parser.UnitParsingError`
            The string is malformed, contains an unknown unit, or has text
            after the units.
        """
        scalar, position = self._parse_number(string, 0)
        position = _SPACES.match(string, position).end()
        numerator, denominator, position = self._parse_line(string, position)
        if position < len(string) and string[position] in _FRACTION:
            start = position
            position = _SPACES.match(string, position + 1).end()
            below, above, position = self._parse_line(string, position)
            if not below and not above:
                raise UnitParsingError(
                    string, start, "missing units after fraction"
                )
            numerator.extend(above)
            denominator.extend(below)
        position = _SPACES.match(string, position).end()
        if position < len(string):
            raise UnitParsingError(string, position, "extra text after units")
        result = quantity.Quantity(
            scalar,
            ratio.UnitRatio(numerator, denominator),
        )
        logger.debug("parsed %r as %r", string, result)
        return result

    def _parse_number(self, string: str, position: int) -> tuple:
        """Parse the optional leading number."""
        if match := _NUMBER.match(string, position):
            return float(match[0]), match.end()
        if position < len(string) and string[position] in '+-':
            raise UnitParsingError(
                string, position + 1, "expected a number after the sign"
            )
        return 1.0, position

    def _parse_line(
        self,
        string: str,
        position: int,
    ) -> typing.Tuple[Units, Units, int]:
        """Parse a run of units with optional exponents.

        Units with negative exponents go into the second list.
        """
        same = []
        other = []
        while position < len(string) and _starts_name(string[position]):
            start = position
            position += 1
            while position < len(string) and _continues_name(string[position]):
                position += 1
            this = self._lookup(string, start, string[start:position])
            exponent, position = self._parse_exponent(string, position)
            if exponent > 0:
                same.extend([this] * exponent)
            else:
                other.extend([this] * -exponent)
            position = _SPACES.match(string, position).end()
        return same, other, position

    def _parse_exponent(self, string: str, position: int) -> tuple:
        """Parse an optional exponent after a unit name."""
        if match := _CARET.match(string, position):
            exponent = int(match[1])
        elif match := _SUPERSCRIPT.match(string, position):
            digits = ''.join(
                str(formatter.SUPERSCRIPTS.index(c)) for c in match[2]
            )
            exponent = -int(digits) if match[1] else int(digits)
        else:
            return 1, position
        if exponent == 0:
            raise UnitParsingError(string, position, "exponent must not be 0")
        return exponent, match.end()

    def _lookup(self, string: str, position: int, name: str) -> 'unit.Unit':
        """Get the unit for `name`, registering it if allowed."""
        found = self.registry.find(name) if self.registry is not None else None
        if found is not None and found.unit is not None:
            return found.unit
        if self.must_exist:
            raise UnitParsingError(string, position, f"unknown unit {name!r}")
        return self.registry.primitive(name).unit


def parse(
    string: str,
    registry: registries.Registry=None,
    must_exist: bool=True,
) -> 'quantity.Quantity':
    """Parse `string` into a quantity.

    This is a shortcut for ``Parser(registry, must_exist).parse(string)``.
    """
    return Parser(registry, must_exist).parse(string)
