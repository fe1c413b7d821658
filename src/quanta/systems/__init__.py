"""Standard systems of units built on `quanta.core`."""
