import datetime

import pytest

from quanta.core import parser
from quanta.core import quantity
from quanta.systems import natural
from quanta.systems import si


@pytest.fixture
def conversions():
    """Test cases for conversions between SI units."""
    return {
        # Length
        ('m', 'm'): 1.0, # trivial conversion
        ('km', 'm'): 1e3, # prefixed to base
        ('m', 'mm'): 1e3, # base to prefixed
        ('µm', 'nm'): 1e3, # prefixed to prefixed
        ('um', 'm'): 1e-6, # alias of a prefix
        ('dam', 'm'): 1e1, # two-character prefix
        # Mass
        ('kg', 'g'): 1e3,
        ('mg', 'kg'): 1e-6,
        # Volume
        ('L', 'm^3'): 1e-3,
        ('mL', 'cm^3'): 1.0,
        # Derived units
        ('N', 'kg m/s^2'): 1.0,
        ('J', 'N m'): 1.0,
        ('kW', 'J/s'): 1e3,
        ('5.123 km mg/s^2', 'N'): 5.123e-3,
        ('Pa', 'N m^-2'): 1.0,
        ('kWb', 'V s'): 1e3,
        ('mT', 'Wb/m^2'): 1e-3,
        ('Ω', 'V/A'): 1.0,
        ('MHz', 'Bq'): 1e6,
        # Velocity
        ('23 km/ks', 'm/s'): 23.0,
        ('km/s', 'm/s'): 1e3,
    }


@pytest.mark.systems
def test_conversions(conversions):
    """Convert between SI units given as text."""
    for (source, target), expected in conversions.items():
        value = parser.parse(source, si.registry)
        units = parser.parse(target, si.registry)
        result = quantity.must_convert(value, units)
        assert result.scalar == pytest.approx(expected), (source, target)
        assert result.units == units.units


@pytest.mark.systems
def test_nonconformable():
    """Dimensionally different units do not convert."""
    with pytest.raises(quantity.UnitConversionError):
        quantity.must_convert(si.metre(1), si.second)
    with pytest.raises(quantity.UnitConversionError):
        quantity.must_convert(si.joule(1), si.newton)


@pytest.mark.systems
def test_exact_prefixes():
    """Prefix factors that cancel give exactly 1."""
    value = si.kilo(si.metre)(1) / si.kilo(si.second)(1)
    result, remainder = value.convert(si.metre / si.second)
    assert result.scalar == 1
    assert remainder.is_empty


@pytest.mark.systems
def test_mass():
    """Grams and kilograms agree."""
    assert si.kilogram(2).approx(si.gram(2000), 1e-12)
    assert si.gram(2000).approx(si.kilogram(2), 1e-9)
    assert si.kilogram.unit.symbol == 'kg'


@pytest.mark.systems
def test_defining_constants():
    """The defining constants have their exact SI values."""
    cases = [
        (si.caesium, 9192631770),
        (si.c, 299792458),
        (si.h, 6.62607015e-34),
        (si.e, 1.602176634e-19),
        (si.k, 1.380649e-23),
        (si.NA, 6.02214076e23),
        (si.Kcd, 683),
    ]
    for constant, expected in cases:
        assert constant.scalar == pytest.approx(expected)
    assert si.c.units == (si.metre / si.second).units


@pytest.mark.systems
def test_natural():
    """Natural constants are primitive units."""
    for this in (natural.c, natural.h, natural.G, natural.k_B, natural.e):
        assert this.unit.is_primitive
    assert natural.registry.find('hbar') is natural.hbar
    reduced = natural.hbar(1).reduce()
    assert reduced.units == natural.h.units
    assert reduced.scalar == pytest.approx(0.15915494309189535)


@pytest.mark.systems
def test_dimensionless():
    """Units defined as ratios of the same unit are primitive."""
    assert si.radian.unit.is_primitive
    assert si.steradian.unit.is_primitive
    assert si.mole.unit.is_primitive


@pytest.mark.systems
def test_find():
    """SI symbols and prefixes resolve through the registry."""
    assert si.registry.find('m') is si.metre
    assert si.registry.find('Ohm') is si.ohm
    assert si.registry.find('l') is si.litre
    assert si.registry.find('ms').unit.inner == si.second.unit
    assert si.registry.find('μm').unit.inner == si.metre.unit
    assert si.registry.find('Gy') is si.gray
    assert si.registry.find('h') is None
    assert si.registry.find('da') is None
    assert si.PREFIXES['kilo'] is si.kilo
    assert len(si.PREFIXES) == 24


@pytest.mark.systems
def test_celsius():
    """Temperatures convert between the Celsius and Kelvin scales."""
    assert si.from_celsius(si.celsius(25)).scalar == pytest.approx(298.15)
    assert si.from_celsius(si.celsius(25)).units == si.kelvin.units
    assert si.to_celsius(si.kelvin(300)).scalar == pytest.approx(26.85)
    assert si.to_celsius(si.kelvin(0)).scalar == pytest.approx(-273.15)
    assert si.registry.find('degC') is si.celsius
    with pytest.raises(quantity.UnitConversionError):
        si.from_celsius(si.metre(1))


@pytest.mark.systems
def test_duration():
    """Time intervals convert to and from quantities of time."""
    interval = datetime.timedelta(minutes=2)
    assert si.from_duration(interval) == si.second(120.0)
    result = si.to_duration(si.kilo(si.second)(1.5))
    assert result == datetime.timedelta(seconds=1500)
    with pytest.raises(quantity.UnitConversionError):
        si.to_duration(si.metre(1))
