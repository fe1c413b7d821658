import pytest

from quanta.core import unit


@pytest.fixture
def units():
    """A small, self-contained system of units.

    The primitive units are 'm', 'kg', and 's'. The remaining units derive
    from them, including two different units with the symbol 'mi'.
    """
    m = unit.primitive('m')
    kg = unit.primitive('kg')
    s = unit.primitive('s')
    kilo = unit.prefix('k', 1000)
    N = unit.derive('N', kg * m / s**2)
    J = unit.derive('J', N * m)
    ft = unit.derive('ft', m(0.3048))
    mi = unit.derive('mi', ft(5280))
    survey_mi = unit.derive('mi', m(6336000 / 3937))
    return {
        'm': m,
        'kg': kg,
        's': s,
        'kilo': kilo,
        'km': kilo(m),
        'ks': kilo(s),
        'N': N,
        'J': J,
        'ft': ft,
        'mi': mi,
        'survey_mi': survey_mi,
    }
