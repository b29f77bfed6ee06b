
# Copyright 2024, Scott Smith.  MIT License (see LICENSE).

# Display conversions only.  Decoded channels always keep the unit the
# logger recorded; exports convert on the way out.

from dataclasses import dataclass, field
import math

import numpy as np


@dataclass
class Unit:
    symbol: str
    scale: float = 1 # Y this_units = X base units * scale + offset
    offset: float = 0
    aliases: list[str] = field(default_factory=list)

    def to_base(self, values):
        return np.subtract(values, self.offset) / self.scale

    def from_base(self, values):
        return np.multiply(values, self.scale) + self.offset

@dataclass
class UnitProperty:
    name: str
    units: list[Unit] # first entry is the base unit

properties = [
    UnitProperty('Velocity',
                 [Unit('m/s'),
                  Unit('km/h', 3.6, aliases=['kph', 'kmh']),
                  Unit('mph', 100/2.54/12/5280*3600)]),
    UnitProperty('Distance',
                 [Unit('m'),
                  Unit('km', 1e-3),
                  Unit('ft', 1 / (.0254*12)),
                  Unit('mile', 1 / (.0254*12*5280), aliases=['mi'])]),
    UnitProperty('Time',
                 [Unit('s', aliases=['sec']),
                  Unit('ms', 1000)]),
    UnitProperty('Temperature',
                 [Unit('K'),
                  Unit('C', offset=-273.15, aliases=['degC']),
                  Unit('F', 1.8, -459.67, aliases=['degF'])]),
    UnitProperty('Pressure',
                 [Unit('kPa'),
                  Unit('bar', 1e-2),
                  Unit('psi', 0.1450377)]),
    UnitProperty('Angle',
                 [Unit('rad'),
                  Unit('deg', 180 / math.pi, aliases=['degrees'])]),
    UnitProperty('Ratio',
                 [Unit('ratio'),
                  Unit('%', 100)]),
]

unit_map = {name.lower(): (prop, unit)
            for prop in properties
            for unit in prop.units
            for name in [unit.symbol] + unit.aliases}

def _lookup(unit):
    return unit_map.get(unit.lower(), (None, None))

def convert(values, from_unit, to_unit):
    """Convert between two units of one property; None if that isn't possible."""
    prop, old = _lookup(from_unit)
    new_prop, new = _lookup(to_unit)
    if prop is None or prop is not new_prop:
        return None
    if old is new:
        return values
    return new.from_base(old.to_base(values))

def known(unit):
    return unit.lower() in unit_map
