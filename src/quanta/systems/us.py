"""United States customary units.

The main `registry` holds the common units. Three child registries resolve the
symbols that mean something else in a narrower context: `survey` (the US
survey foot and mile), `fluid` (the fluid ounce), and `degree` (minutes and
seconds of arc). Each child falls back to `registry`, which in turn falls back
to `~quanta.systems.si.registry`.
"""

import math
import typing

import numpy

from quanta.core import maker
from quanta.core import quantity
from quanta.core import registry as registries
from quanta.systems import si


registry = registries.Registry('us', parent=si.registry)
"""The registry of US customary units."""

survey = registries.Registry('survey', parent=registry)
"""US survey units, which share symbols with their customary versions."""

fluid = registries.Registry('fluid', parent=registry)
"""Units of fluid volume that share symbols with units of mass."""

degree = registries.Registry('degree', parent=registry)
"""Subdivisions of the angular degree."""


# Length
inch = registry.derive('in', si.metre(0.0254), '"', '″')
pica = registry.derive('P̸', inch(1) / 6)
point = registry.derive('p', inch(1) / 72)
foot = registry.derive('ft', inch(12), "'", '′')
yard = registry.derive('yd', foot(3))
mile = registry.derive('mi', foot(5280))
fathom = registry.derive('ftm', yard(2))
nautical_mile = registry.derive('NM', si.metre(1852), 'nmi')

survey_foot = survey.derive('ft', si.metre(1200 / 3937))
survey_mile = survey.derive('mi', si.metre(6336000 / 3937))

# Area
acre = registry.derive('acre', (survey_foot**2)(43560))

# Volume
teaspoon = registry.derive('tsp', si.litre(4.92892159375 / 1000))
tablespoon = registry.derive('Tbsp', teaspoon(3))
fluid_ounce = fluid.derive('oz', tablespoon(2))
shot = registry.derive('jig', tablespoon(3))
cup = registry.derive('cp', fluid_ounce(8))
pint = registry.derive('pt', cup(2))
quart = registry.derive('qt', pint(2))
gallon = registry.derive('gal', quart(4))

# Mass
dram = registry.derive('dr', si.kilogram(0.0017718451953125))
ounce = registry.derive('oz', dram(16))
pound = registry.derive('lb', ounce(16))
ton = registry.derive('ton', pound(2000))

# Temperature, energy, and force
fahrenheit = registry.derive(
    '°F',
    si.celsius * maker.scalar(5 / 9),
    '℉',
    'degF',
)
calorie = registry.derive('cal', si.joule(4.184))
kilocalorie = registry.derive('kcal', si.joule(4184), 'Cal')
_acceleration = si.metre / si.second**2
pound_force = registry.derive('lbf', (pound * _acceleration)(9.80665))

# Time
second = si.second
minute = registry.derive('min', second(60))
hour = registry.derive('h', minute(60))
day = registry.derive('d', hour(24))

# Angle
arc_degree = registry.derive('°', si.radian(numpy.pi / 180), 'deg')
arc_minute = degree.derive("'", arc_degree(1) / 60)
arc_second = degree.derive('"', arc_minute(1) / 60)


FREEZING_FAHRENHEIT = 32
"""The temperature in degrees Fahrenheit of 0 °C."""


def to_dms(
    angle: quantity.Quantity,
) -> typing.Tuple[quantity.Quantity, quantity.Quantity, quantity.Quantity]:
    """Split an angle into whole degrees, whole minutes, and seconds.

    Raises
    ------
    `~quantity.UnitConversionError`
        `angle` is not an angle.
    """
    degrees = quantity.must_convert(angle, arc_degree).scalar
    whole = math.floor(degrees)
    minutes = (degrees - whole) * 60
    whole_minutes = math.floor(minutes)
    seconds = (minutes - whole_minutes) * 60
    return arc_degree(whole), arc_minute(whole_minutes), arc_second(seconds)


def to_celsius(value: quantity.Quantity) -> quantity.Quantity:
    """Convert a temperature on the Fahrenheit scale to the Celsius scale.

    Raises
    ------
    `~quantity.UnitConversionError`
        `value` is not a temperature.
    """
    degrees = quantity.must_convert(value, fahrenheit)
    shifted = fahrenheit(degrees.scalar - FREEZING_FAHRENHEIT)
    return quantity.must_convert(shifted, si.celsius)


def to_fahrenheit(value: quantity.Quantity) -> quantity.Quantity:
    """Convert a temperature on the Celsius scale to the Fahrenheit scale.

    Raises
    ------
    `~quantity.UnitConversionError`
        `value` is not a temperature.
    """
    degrees = quantity.must_convert(value, si.celsius)
    converted = quantity.must_convert(degrees, fahrenheit)
    return fahrenheit(converted.scalar + FREEZING_FAHRENHEIT)
