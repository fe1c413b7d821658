"""Fundamental physical constants as primitive units.

The 2019 definition of the SI fixes the numerical values of these constants,
which makes them the natural primitives from which `~quanta.systems.si`
derives its base units. Their SI values appear beside each declaration.
"""

import numpy

from quanta.core import registry as registries


registry = registries.Registry('natural')
"""The registry of natural constants."""

c = registry.primitive('c')
"""The speed of light in a vacuum (299792458 m/s)."""

h = registry.primitive('h')
"""The Planck constant (6.62607015e-34 J s)."""

hbar = registry.derive('ħ', h / (2 * numpy.pi), 'hbar')
"""The reduced Planck constant, h / 2π."""

G = registry.primitive('G')
"""The gravitational constant."""

k_B = registry.primitive('k_B')
"""The Boltzmann constant (1.380649e-23 J/K)."""

caesium = registry.primitive('∆νCs')
"""The caesium-133 hyperfine transition frequency (9192631770 Hz)."""

e = registry.primitive('e')
"""The elementary charge (1.602176634e-19 C)."""

Kcd = registry.primitive('Kcd')
"""The luminous efficacy of 540 THz radiation (683 lm/W)."""
