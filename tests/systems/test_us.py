import pytest

from quanta.core import parser
from quanta.core import quantity
from quanta.systems import si
from quanta.systems import us


@pytest.fixture
def conversions():
    """Test cases for conversions involving US customary units."""
    return {
        # Length
        ('ft', 'm'): 0.3048,
        ('mi', 'ft'): 5280.0,
        ('yd', 'in'): 36.0,
        ('in', 'p'): 72.0,
        ('ftm', 'ft'): 6.0,
        ('NM', 'km'): 1.852,
        ('km', 'mi'): 1 / 1.609344,
        # Volume
        ('gal', 'L'): 3.785411784,
        ('gal', 'cp'): 16.0,
        ('Tbsp', 'tsp'): 3.0,
        # Mass
        ('lb', 'kg'): 0.45359237,
        ('lb', 'oz'): 16.0,
        ('ton', 'lb'): 2000.0,
        # Force and energy
        ('lbf', 'N'): 4.4482216152605,
        ('kcal', 'J'): 4184.0,
        ('Cal', 'cal'): 1000.0,
        # Time
        ('d', 'h'): 24.0,
        ('h', 's'): 3600.0,
        ('60 mi/h', 'km/h'): 96.56064,
        # Angle
        ('°', 'rad'): 0.017453292519943295,
    }


@pytest.mark.systems
def test_conversions(conversions):
    """Convert between units given as text."""
    for (source, target), expected in conversions.items():
        value = parser.parse(source, us.registry)
        units = parser.parse(target, us.registry)
        result = quantity.must_convert(value, units)
        assert result.scalar == pytest.approx(expected), (source, target)


@pytest.mark.systems
def test_survey_units():
    """Survey units share symbols with, but differ from, customary units."""
    assert us.survey.find('mi') is us.survey_mile
    assert us.registry.find('mi') is us.mile
    assert us.survey_mile.unit.symbol == us.mile.unit.symbol
    assert us.survey_mile.unit != us.mile.unit
    ratio = quantity.must_convert(us.survey_mile(1), us.mile)
    assert ratio.scalar == pytest.approx(1.000002, abs=1e-7)
    product = us.mile(1) * us.survey_mile(1)
    assert len(product.units.numerator) == 2
    assert us.survey.find('in') is us.inch
    assert us.acre(1).approx((si.metre**2)(4046.8726), 1e-3)


@pytest.mark.systems
def test_contexts():
    """Child registries resolve ambiguous symbols."""
    assert us.registry.find('oz') is us.ounce
    assert us.fluid.find('oz') is us.fluid_ounce
    assert us.registry.find("'") is us.foot
    assert us.degree.find("'") is us.arc_minute
    assert us.registry.find('"') is us.inch
    assert us.degree.find('"') is us.arc_second
    assert us.registry.find('km').unit.inner == si.metre.unit
    result = parser.parse('8 oz', us.fluid)
    assert quantity.must_convert(result, us.cup).scalar == pytest.approx(1.0)


@pytest.mark.systems
def test_temperature():
    """Temperatures convert between the Fahrenheit and Celsius scales."""
    assert us.to_celsius(us.fahrenheit(212)).scalar == pytest.approx(100)
    assert us.to_celsius(us.fahrenheit(32)).scalar == pytest.approx(0)
    assert us.to_celsius(us.fahrenheit(-40)).scalar == pytest.approx(-40)
    assert us.to_celsius(us.fahrenheit(212)).units == si.celsius.units
    assert us.to_fahrenheit(si.celsius(100)).scalar == pytest.approx(212)
    assert us.to_fahrenheit(si.celsius(37)).scalar == pytest.approx(98.6)
    assert us.to_fahrenheit(si.celsius(0)).units == us.fahrenheit.units
    with pytest.raises(quantity.UnitConversionError):
        us.to_celsius(us.foot(1))


@pytest.mark.systems
def test_to_dms():
    """Decimal degrees split into degrees, minutes, and seconds."""
    degrees, minutes, seconds = us.to_dms(us.arc_degree(30.5125))
    assert degrees == us.arc_degree(30)
    assert minutes == us.arc_minute(30)
    assert seconds.scalar == pytest.approx(45)
    assert seconds.units == us.arc_second.units
    degrees, minutes, seconds = us.to_dms(si.radian(1))
    assert degrees.scalar == 57
    assert minutes.scalar == 17
    assert seconds.scalar == pytest.approx(44.806, abs=1e-3)
    with pytest.raises(quantity.UnitConversionError):
        us.to_dms(si.metre(1))


@pytest.mark.systems
def test_typography():
    """Picas and points divide the inch."""
    assert quantity.must_convert(us.inch(1), us.pica).scalar == pytest.approx(6)
    assert quantity.must_convert(us.pica(1), us.point).scalar == pytest.approx(12)
    assert us.registry.find('P̸') is us.pica
