"""Render quantities and unit ratios as text.

A `~formatter.Formatter` is an immutable set of rendering options. The module
provides `DEFAULT`, which renders quantities like ``1.234 kg m/s^2``; callers
who want something else create their own formatter, either directly or with
`~formatter.Formatter.configure`, and pass it where they need it.

Examples
--------
The same quantity in each of the available styles:

    plain: 1.234 kg m/s^2
    negative powers: 1.234 kg m s^-2
    unicode: 1.234 kg⋅m⁄s²
    mathml: <mn>1.234</mn> <mfrac><mrow><mi>kg</mi>...</mrow></mfrac>
    latex: 1.234 \\frac{\\mathrm{kg} \\cdot \\mathrm{m}}{\\mathrm{s}^{2}}
"""

import configparser
import numbers
import typing


DOT_OPERATOR = '⋅'
FRACTION_SLASH = '⁄'
SUPERSCRIPT_MINUS = '⁻'
SUPERSCRIPTS = '⁰¹²³⁴⁵⁶⁷⁸⁹'

_TO_SUPERSCRIPT = str.maketrans(
    '0123456789-',
    SUPERSCRIPTS + SUPERSCRIPT_MINUS,
)


def _plain_power(name: str, power: int) -> str:
    return name if power == 1 else f"{name}^{power}"


def _unicode_power(name: str, power: int) -> str:
    if power == 1:
        return name
    return name + str(power).translate(_TO_SUPERSCRIPT)


def _mathml_power(name: str, power: int) -> str:
    if power == 1:
        return name
    return f"<msup>{name}<mn>{power}</mn></msup>"


def _latex_power(name: str, power: int) -> str:
    if power == 1:
        return name
    return f"{name}^{{{power}}}"


_STYLES = {
    'plain': {
        'unit_separator': ' ',
        'fraction': '/',
        'power': _plain_power,
        'value': '{}',
        'name': '{}',
        'row': '{}',
        'ratio': '{numerator}{fraction}{denominator}',
    },
    'unicode': {
        'unit_separator': DOT_OPERATOR,
        'fraction': FRACTION_SLASH,
        'power': _unicode_power,
        'value': '{}',
        'name': '{}',
        'row': '{}',
        'ratio': '{numerator}{fraction}{denominator}',
    },
    'mathml': {
        'unit_separator': f'<mo>{DOT_OPERATOR}</mo>',
        'fraction': '',
        'power': _mathml_power,
        'value': '<mn>{}</mn>',
        'name': '<mi>{}</mi>',
        'row': '<mrow>{}</mrow>',
        'ratio': '<mfrac>{numerator}{denominator}</mfrac>',
    },
    'latex': {
        'unit_separator': ' \\cdot ',
        'fraction': '',
        'power': _latex_power,
        'value': '{}',
        'name': '\\mathrm{{{}}}',
        'row': '{}',
        'ratio': '\\frac{{{numerator}}}{{{denominator}}}',
    },
}
"""Rendering rules for each markup style."""


_OPTIONS = {
    'value_format': '',
    'unit_separator': None,
    'fraction': None,
    'gap': ' ',
    'negative_powers': False,
    'style': 'plain',
    'unit_name': None,
    'no_gap_for': (),
}
"""Default values of formatting options. `None` defers to the style."""


def _shortest(value: numbers.Real) -> str:
    """The shortest faithful text for `value`, without a trailing '.0'."""
    string = str(value)
    if string.endswith('.0'):
        return string[:-2]
    return string


def _symbol(this) -> str:
    return this.symbol


def _unquote(string: str) -> str:
    """Remove one level of matching quotes from a configuration value."""
    if len(string) >= 2 and string[0] == string[-1] and string[0] in '\'"':
        return string[1:-1]
    return string


class Formatter:
    """An immutable set of options for rendering quantities.

    Parameters
    ----------
    value_format : string, default=''
        How to render the scalar. An empty string selects the shortest text
        that represents the value. A string containing '%' is a printf-style
        template; anything else is a `format` specification (e.g., '.3f').

    unit_separator : string, optional
        The text between adjacent units. The default depends on `style`.

    fraction : string, optional
        The text between numerator and denominator units. The default depends
        on `style`. Markup styles build fractions from tags and ignore this.

    gap : string, default=' '
        The text between the scalar and the units.

    negative_powers : bool, default=False
        If true, render denominator units with negative exponents instead of
        as a fraction.

    style : {'plain', 'unicode', 'mathml', 'latex'}
        The markup style.

    unit_name : callable, optional
        A function that returns the text for a given unit. The default uses
        the unit's symbol.

    no_gap_for : iterable, optional
        Units (or makers) that follow the scalar without a gap (e.g., angular
        degrees).
    """

    def __init__(self, **options) -> None:
        unknown = set(options) - set(_OPTIONS)
        if unknown:
            raise TypeError(
                f"Unknown formatting option(s): {', '.join(sorted(unknown))}"
            ) from None
        values = {**_OPTIONS, **options}
        if values['style'] not in _STYLES:
            raise ValueError(
                f"Unknown formatting style {values['style']!r}"
            ) from None
        values['no_gap_for'] = tuple(values['no_gap_for'])
        self._options = values
        self._style = _STYLES[values['style']]
        self._no_gap = [this.units for this in values['no_gap_for']]

    @classmethod
    def from_config(cls, config: typing.Mapping[str, str]) -> 'Formatter':
        """Create a formatter from string-valued configuration options.

        This accepts the mapping of a '[format]' section in a configuration
        file. Values may be quoted to preserve surrounding whitespace.
        """
        options = {}
        for key, value in config.items():
            if key in {'unit_name', 'no_gap_for'} or key not in _OPTIONS:
                raise ValueError(
                    f"Can't configure {key!r} from a configuration file"
                ) from None
            text = _unquote(value.strip())
            if key == 'negative_powers':
                try:
                    options[key] = (
                        configparser.ConfigParser.BOOLEAN_STATES[text.lower()]
                    )
                except KeyError as err:
                    raise ValueError(
                        f"Not a boolean value for {key!r}: {value!r}"
                    ) from err
            else:
                options[key] = text
        return cls(**options)

    def configure(self, **options) -> 'Formatter':
        """Create a new formatter with updated options."""
        return Formatter(**{**self._options, **options})

    @property
    def options(self) -> typing.Dict[str, typing.Any]:
        """A copy of the options of this formatter."""
        return dict(self._options)

    def format(self, value: typing.Any) -> str:
        """Render a quantity, or a plain number, as text."""
        return self.sprintf(self._options['value_format'], value)

    def sprintf(self, template: str, value: typing.Any) -> str:
        """Render the scalar of `value` with `template`, then its units.

        See the `value_format` parameter for the meaning of `template`.
        """
        scalar = getattr(value, 'scalar', value)
        units = getattr(value, 'units', None)
        text = self._format_scalar(template, scalar)
        string = self._style['value'].format(text)
        if units is None or units.is_empty:
            return string
        if any(units == this for this in self._no_gap):
            gap = ''
        else:
            gap = self._options['gap']
        return string + gap + self._format_units(units, standalone=False)

    def format_units(self, units) -> str:
        """Render a unit ratio (or anything with units) as text.

        An empty numerator renders as '1' (e.g., '1/s').
        """
        return self._format_units(getattr(units, 'units', units), standalone=True)

    def _format_scalar(self, template: str, scalar: numbers.Real) -> str:
        """Helper for `sprintf`."""
        if not template:
            return _shortest(scalar)
        if '%' in template:
            return template % scalar
        return format(scalar, template)

    def _format_units(self, units, standalone: bool) -> str:
        """Helper for `format_units` and `sprintf`."""
        if units.is_empty:
            return ''
        top = [(u, p) for u, p in units.powers() if p > 0]
        bottom = [(u, -p) for u, p in units.powers() if p < 0]
        if self._options['negative_powers']:
            numerator = self._row(top, 1)
            if not bottom:
                return numerator
            denominator = self._row(bottom, -1)
            if not top:
                return denominator
            return numerator + self._separator + denominator
        if top:
            numerator = self._row(top, 1)
        elif standalone:
            numerator = self._style['value'].format('1')
        else:
            numerator = ''
        if not bottom:
            return numerator
        return self._style['ratio'].format(
            numerator=numerator,
            fraction=self._fraction,
            denominator=self._row(bottom, 1),
        )

    def _row(self, groups: typing.List[tuple], sign: int) -> str:
        """Render one side of a unit ratio."""
        power = self._style['power']
        parts = [
            power(self._name(this), sign * exponent)
            for this, exponent in groups
        ]
        return self._style['row'].format(self._separator.join(parts))

    def _name(self, this) -> str:
        """Render the name of a single unit."""
        namer = self._options['unit_name'] or _symbol
        return self._style['name'].format(namer(this))

    @property
    def _separator(self) -> str:
        if self._options['unit_separator'] is None:
            return self._style['unit_separator']
        return self._options['unit_separator']

    @property
    def _fraction(self) -> str:
        if self._options['fraction'] is None:
            return self._style['fraction']
        return self._options['fraction']

    def __eq__(self, other) -> bool:
        if not isinstance(other, Formatter):
            return NotImplemented
        return self._options == other._options

    def __hash__(self) -> int:
        return hash(tuple(sorted(self._options.items(), key=str)))

    def __repr__(self) -> str:
        changed = {
            k: v for k, v in self._options.items() if v != _OPTIONS[k]
        }
        args = ', '.join(f"{k}={v!r}" for k, v in changed.items())
        return f"Formatter({args})"


DEFAULT = Formatter()
"""The formatter behind `str` of quantities and unit ratios."""
