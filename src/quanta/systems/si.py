"""The International System of Units (SI).

Base units follow the 2019 redefinition: each derives from a fixed numerical
value of a constant in `~quanta.systems.natural`. The module also defines the
named derived units, every SI prefix, the defining constants expressed in SI
units, and conversions for time intervals and the Celsius scale.
"""

import datetime

from quanta.core import maker
from quanta.core import quantity
from quanta.core import registry as registries
from quanta.systems import natural


registry = registries.Registry('si')
"""The registry of SI units and prefixes."""


_prefixes = [
    {'symbol': 'Q', 'name': 'quetta', 'factor': 1e30},
    {'symbol': 'R', 'name': 'ronna', 'factor': 1e27},
    {'symbol': 'Y', 'name': 'yotta', 'factor': 1e24},
    {'symbol': 'Z', 'name': 'zetta', 'factor': 1e21},
    {'symbol': 'E', 'name': 'exa', 'factor': 1e18},
    {'symbol': 'P', 'name': 'peta', 'factor': 1e15},
    {'symbol': 'T', 'name': 'tera', 'factor': 1e12},
    {'symbol': 'G', 'name': 'giga', 'factor': 1e9},
    {'symbol': 'M', 'name': 'mega', 'factor': 1e6},
    {'symbol': 'k', 'name': 'kilo', 'factor': 1e3},
    {'symbol': 'h', 'name': 'hecto', 'factor': 1e2},
    {'symbol': 'da', 'name': 'deka', 'factor': 1e1},
    {'symbol': 'd', 'name': 'deci', 'factor': 1e-1},
    {'symbol': 'c', 'name': 'centi', 'factor': 1e-2},
    {'symbol': 'm', 'name': 'milli', 'factor': 1e-3},
    {'symbol': 'µ', 'name': 'micro', 'factor': 1e-6, 'aliases': ['u', 'μ']},
    {'symbol': 'n', 'name': 'nano', 'factor': 1e-9},
    {'symbol': 'p', 'name': 'pico', 'factor': 1e-12},
    {'symbol': 'f', 'name': 'femto', 'factor': 1e-15},
    {'symbol': 'a', 'name': 'atto', 'factor': 1e-18},
    {'symbol': 'z', 'name': 'zepto', 'factor': 1e-21},
    {'symbol': 'y', 'name': 'yocto', 'factor': 1e-24},
    {'symbol': 'r', 'name': 'ronto', 'factor': 1e-27},
    {'symbol': 'q', 'name': 'quecto', 'factor': 1e-30},
]
"""The SI prefixes, largest first."""


PREFIXES = {
    prefix['name']: registry.prefix(
        prefix['symbol'],
        prefix['factor'],
        *prefix.get('aliases', ()),
    ) for prefix in _prefixes
}
"""Functions that apply each SI prefix to a maker, by name."""

quetta = PREFIXES['quetta']
ronna = PREFIXES['ronna']
yotta = PREFIXES['yotta']
zetta = PREFIXES['zetta']
exa = PREFIXES['exa']
peta = PREFIXES['peta']
tera = PREFIXES['tera']
giga = PREFIXES['giga']
mega = PREFIXES['mega']
kilo = PREFIXES['kilo']
hecto = PREFIXES['hecto']
deka = PREFIXES['deka']
deci = PREFIXES['deci']
centi = PREFIXES['centi']
milli = PREFIXES['milli']
micro = PREFIXES['micro']
nano = PREFIXES['nano']
pico = PREFIXES['pico']
femto = PREFIXES['femto']
atto = PREFIXES['atto']
zepto = PREFIXES['zepto']
yocto = PREFIXES['yocto']
ronto = PREFIXES['ronto']
quecto = PREFIXES['quecto']


# Time
hertz = registry.derive('Hz', natural.caesium / 9192631770)
second = registry.derive('s', 1 / hertz)

# Length
metre = registry.derive('m', natural.c * second / 299792458)
meter = metre

# Mass
gram = registry.derive('g', natural.h * second / metre**2 / 6.62607015e-31)
kilogram = kilo(gram)

# Force and energy
newton = registry.derive('N', kilogram * metre / second**2)
joule = registry.derive('J', newton * metre)

# Electric current and charge
ampere = registry.derive('A', natural.e / second / 1.602176634e-19)
coulomb = registry.derive('C', ampere * second)

# Thermodynamic temperature
kelvin = registry.derive('K', joule / natural.k_B * 1.380649e-23)

# Amount of substance
mole = registry.primitive('mol')

# Luminous intensity
watt = registry.derive('W', joule / second)
steradian = registry.derive('sr', metre**2 / metre**2)
candela = registry.derive('cd', natural.Kcd * watt / steradian / 683)

# Named derived units
becquerel = registry.derive('Bq', 1 / second)
volt = registry.derive('V', watt / ampere)
farad = registry.derive('F', coulomb / volt)
gray = registry.derive('Gy', joule / kilogram)
henry = registry.derive('H', volt * second / ampere)
katal = registry.derive('kat', mole / second)
litre = registry.derive('L', centi(metre)**3 * 1000, 'l')
liter = litre
lumen = registry.derive('lm', candela * steradian)
lux = registry.derive('lx', lumen / metre**2)
ohm = registry.derive('Ω', volt / ampere, 'Ohm')
pascal = registry.derive('Pa', newton / metre**2)
radian = registry.derive('rad', metre / metre)
siemens = registry.derive('S', ampere / volt)
sievert = registry.derive('Sv', joule / kilogram)
tesla = registry.derive('T', volt * second / metre**2)
weber = registry.derive('Wb', joule / ampere)

# The degree Celsius is the same size as the kelvin. Only the zero of its
# scale differs, so use `from_celsius` and `to_celsius` for temperatures on
# either scale.
celsius = registry.derive('°C', kelvin, '℃', 'degC')


# Defining constants
caesium = quantity.must_convert(natural.caesium(1), hertz)
c = quantity.must_convert(natural.c(1), metre / second)
h = quantity.must_convert(natural.h(1), joule * second)
e = quantity.must_convert(natural.e(1), coulomb)
k = quantity.must_convert(natural.k_B(1), joule / kelvin)
NA = (maker.UNITY / mole)(6.02214076e23)
Kcd = quantity.must_convert(natural.Kcd(1), candela * steradian / watt)


ZERO_CELSIUS = 273.15
"""The temperature in kelvin of 0 °C."""


def from_duration(interval: datetime.timedelta) -> quantity.Quantity:
    """Express a time interval in seconds."""
    return second(interval.total_seconds())


def to_duration(value: quantity.Quantity) -> datetime.timedelta:
    """Convert a quantity of time to a time interval.

    Raises
    ------
    `~quantity.UnitConversionError`
        `value` is not a time.
    """
    seconds = quantity.must_convert(value, second)
    return datetime.timedelta(seconds=seconds.scalar)


def from_celsius(value: quantity.Quantity) -> quantity.Quantity:
    """Convert a temperature on the Celsius scale to the Kelvin scale.

    Raises
    ------
    `~quantity.UnitConversionError`
        `value` is not a temperature.
    """
    degrees = quantity.must_convert(value, celsius)
    return kelvin(degrees.scalar + ZERO_CELSIUS)


def to_celsius(value: quantity.Quantity) -> quantity.Quantity:
    """Convert a temperature on the Kelvin scale to the Celsius scale.

    Raises
    ------
    `~quantity.UnitConversionError`
        `value` is not a temperature.
    """
    kelvins = quantity.must_convert(value, kelvin)
    return celsius(kelvins.scalar - ZERO_CELSIUS)
