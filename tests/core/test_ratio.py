import itertools

import pytest

from quanta.core import ratio
from quanta.core import unit


@pytest.fixture
def ratios(units):
    """Unit ratios for testing algebraic laws."""
    m, kg, s = (units[k].units for k in ('m', 'kg', 's'))
    return {
        'empty': ratio.UnitRatio(),
        'm': m,
        'm/s': m / s,
        'kg m/s^2': kg * m / s**2,
        'N': units['N'].units,
        'J': units['J'].units,
        'km/ks': units['km'].units / units['ks'].units,
        'mi': units['mi'].units,
        'survey mi': units['survey_mi'].units,
    }


@pytest.mark.ratio
def test_cancel(units):
    """Matching units cancel and survivors are sorted by symbol."""
    m, kg, s = (units[k].unit for k in ('m', 'kg', 's'))
    numerator, denominator = ratio.cancel([s, m, kg, m], [m, s, s])
    assert [u.symbol for u in numerator] == ['kg', 'm']
    assert [u.symbol for u in denominator] == ['s']
    assert ratio.cancel([], []) == ((), ())


@pytest.mark.ratio
def test_cancel_same_symbol(units):
    """Units with the same symbol but different definitions never cancel."""
    mi = units['mi'].unit
    survey = units['survey_mi'].unit
    numerator, denominator = ratio.cancel([mi], [survey])
    assert numerator == (mi,)
    assert denominator == (survey,)
    numerator, denominator = ratio.cancel([mi, survey, mi], [survey])
    assert len(numerator) == 2
    assert all(this == mi for this in numerator)
    assert denominator == ()
    numerator, denominator = ratio.cancel([survey, mi], [mi, mi])
    assert numerator == (survey,)
    assert denominator == (mi,)


@pytest.mark.ratio
def test_commutativity(ratios):
    """Multiplication of unit ratios commutes."""
    for a, b in itertools.product(ratios.values(), repeat=2):
        assert a * b == b * a


@pytest.mark.ratio
def test_inverse(ratios):
    """Dividing a product by one factor recovers the other."""
    for a, b in itertools.product(ratios.values(), repeat=2):
        assert (a * b) / b == a


@pytest.mark.ratio
def test_power(ratios):
    """Integer powers obey the usual laws."""
    for a in ratios.values():
        assert a**0 == ratio.UnitRatio()
        assert (a**0).is_empty
        assert a**1 == a
        for n in range(1, 4):
            assert a**n == a**(n-1) * a
            assert a**-n == (a**n).reciprocal()


@pytest.mark.ratio
def test_power_errors(ratios):
    """Unit ratios only accept integral exponents."""
    a = ratios['m/s']
    with pytest.raises(ratio.ExponentError):
        a ** 0.5
    with pytest.raises(ratio.ExponentError):
        a ** 2.0
    with pytest.raises(ValueError):
        a ** 1.5
    with pytest.raises(TypeError):
        a ** 'a'


@pytest.mark.ratio
def test_reciprocal(ratios):
    """The reciprocal swaps numerator and denominator."""
    a = ratios['kg m/s^2']
    b = a.reciprocal()
    assert b.numerator == a.denominator
    assert b.denominator == a.numerator
    assert (a * b).is_empty


@pytest.mark.ratio
def test_same_symbol_product(ratios, units):
    """Same-symbol units with different definitions both survive."""
    product = ratios['mi'] * ratios['survey mi']
    assert len(product.numerator) == 2
    assert units['mi'].unit in product.numerator
    assert units['survey_mi'].unit in product.numerator
    assert product != ratios['mi']**2
    assert product != ratios['survey mi']**2
    assert ratios['mi'] != ratios['survey mi']
    assert (ratios['mi'] / ratios['survey mi']).denominator


@pytest.mark.ratio
def test_singular(ratios, units):
    """Only a single numerator unit is singular."""
    assert ratios['m'].singular() == units['m'].unit
    assert ratios['m/s'].singular() is None
    assert ratios['empty'].singular() is None
    assert (ratios['m']**2).singular() is None


@pytest.mark.ratio
def test_powers(ratios, units):
    """Repeated units group into exponents."""
    kg, m, s = (units[k].unit for k in ('kg', 'm', 's'))
    assert ratios['kg m/s^2'].powers() == [(kg, 1), (m, 1), (s, -2)]
    assert (ratios['m']**3).powers() == [(m, 3)]
    mixed = ratios['mi'] * ratios['survey mi'] * ratios['mi']
    assert mixed.powers() == [
        (units['mi'].unit, 2),
        (units['survey_mi'].unit, 1),
    ]


@pytest.mark.ratio
def test_reduce_primitive(units):
    """A primitive unit reduces to itself with a factor of 1."""
    for key in ('m', 'kg', 's'):
        reduced = units[key].units.reduce()
        assert reduced.scalar == 1
        assert reduced.units == units[key].units


@pytest.mark.ratio
def test_reduce_derived(ratios):
    """Derived units reduce to primitive units."""
    reduced = ratios['kg m/s^2'].reduce()
    assert reduced.scalar == 1
    assert reduced.units == ratios['kg m/s^2']
    reduced = ratios['N'].reduce()
    assert reduced.scalar == 1
    assert reduced.units == ratios['kg m/s^2']
    reduced = ratios['J'].reduce()
    assert reduced.units == ratios['kg m/s^2'] * ratios['m']
    reduced = ratios['mi'].reduce()
    assert reduced.scalar == pytest.approx(1609.344)
    assert reduced.units == ratios['m']


@pytest.mark.ratio
def test_reduce_exact_prefixes(ratios):
    """Prefix factors that cancel mathematically cancel exactly."""
    reduced = ratios['km/ks'].reduce()
    assert reduced.scalar == 1
    assert reduced.units == ratios['m/s']


@pytest.mark.ratio
def test_equivalent(ratios):
    """Equivalence compares reduced units."""
    assert ratios['N'] != ratios['kg m/s^2']
    assert ratios['N'].equivalent(ratios['kg m/s^2'])
    assert ratios['km/ks'].equivalent(ratios['m/s'])
    assert ratios['mi'].equivalent(ratios['survey mi'])
    assert not ratios['J'].equivalent(ratios['N'])
    with pytest.raises(TypeError):
        ratios['N'].equivalent(1)


@pytest.mark.ratio
def test_cyclic_definition():
    """Reduction refuses to loop on a definition that was made cyclic."""
    a = unit.primitive('a').unit
    b = unit.derive('b', a).unit
    a._definition = b.make(2)
    with pytest.raises(unit.CyclicDefinitionError):
        b.units.reduce()


@pytest.mark.ratio
def test_hash(ratios, units):
    """Equal ratios have equal hashes."""
    m, s = units['m'].units, units['s'].units
    assert hash(m / s) == hash(s.reciprocal() * m)
    assert len({m / s, s.reciprocal() * m, ratios['m/s']}) == 1


@pytest.mark.ratio
def test_str(ratios):
    """Ratios render with the default formatter."""
    assert str(ratios['kg m/s^2']) == 'kg m/s^2'
    assert str(ratios['m/s'].reciprocal()) == 's/m'
    assert str(ratios['m']**-1) == '1/m'
    assert str(ratios['empty']) == ''
