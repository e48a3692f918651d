""" 
MIT License

Copyright (c) 2021 Karl M. Laundal

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.


Magnetic flux density in selectable units, and derived field components.

GeoMagFlux wraps an Igrf engine and scales its output (nT) to the unit
of choice. MagFluxComponents collects the usual derived quantities: total
and horizontal intensity, inclination and declination.

"""

from collections import namedtuple
from enum import Enum

import numpy as np

from .igrf import Igrf

nanotesla_to_tesla = 1.0e-9      # [nT] -> [T]
nanotesla_to_microtesla = 1.0e-3 # [nT] -> [uT]
nanotesla_to_gauss = 1.0e-5      # [nT] -> [G]


class MagFluxUnit(Enum):
    NANOTESLA = 'nanotesla'
    MICROTESLA = 'microtesla'
    TESLA = 'tesla'
    GAUSS = 'gauss'
    SI = 'si'
    CGS = 'cgs'
    MKS = 'mks'
    MKSA = 'mksa'

    @property
    def scale(self):
        """ Factor that converts nT to this unit """
        return _SCALING[self][0]

    @property
    def symbol(self):
        return _SCALING[self][1]


_SCALING = {
    MagFluxUnit.NANOTESLA:  (1.0, 'nT'),
    MagFluxUnit.MICROTESLA: (nanotesla_to_microtesla, 'uT'),
    MagFluxUnit.TESLA:      (nanotesla_to_tesla, 'T'),
    MagFluxUnit.GAUSS:      (nanotesla_to_gauss, 'G'),
    MagFluxUnit.SI:         (nanotesla_to_tesla, 'T'),
    MagFluxUnit.CGS:        (nanotesla_to_gauss, 'G'),
    MagFluxUnit.MKS:        (nanotesla_to_tesla, 'T'),
    MagFluxUnit.MKSA:       (nanotesla_to_tesla, 'T'),
}


def get_inclination_declination(north, east, down, degrees = True):
    r"""
    Compute the inclination and declination angles of a magnetic field vector

    The inclination angle is defined as the angle between the magnetic field
    vector and the horizontal plane, positive downward:

    .. math::

        I = \arctan \frac{B_d}{\sqrt{B_n^2 + B_e^2}}

    And the declination angle is defined as the azimuth of the projection of
    the magnetic field vector onto the horizontal plane (starting from the
    northing direction, positive to the east and negative to the west):

    .. math::

        D = \arctan \frac{B_e}{B_n}

    Both are evaluated with arctan2, so a vertical field gives an
    inclination of +/- 90 degrees and a declination of 0.

    Parameters
    ----------
    north : float or array
        Northward component of the magnetic vector.
    east : float or array
        Eastward component of the magnetic vector.
    down : float or array
        Downward component of the magnetic vector.
    degrees : bool (optional)
        If True, the angles are returned in degrees.
        If False, the angles are returned in radians.
        Default True.

    Returns
    -------
    inclination : float or array
        Inclination angle of the magnetic vector.
    declination : float or array
        Declination angle of the magnetic vector.
    """
    horizontal_component = np.hypot(north, east)
    inclination = np.arctan2(down, horizontal_component)
    declination = np.arctan2(east, north)
    # Convert to degrees if needed
    if degrees:
        inclination = np.degrees(inclination)
        declination = np.degrees(declination)
    return inclination, declination


class MagFluxComponents(namedtuple('MagFluxComponents', ['north', 'east', 'down', 'total',
                                                         'horizontal', 'inclination', 'declination'])):
    """ Field vector components and the quantities derived from them """
    __slots__ = ()

    @classmethod
    def from_vector(cls, B, degrees = True):
        """
        Parameters
        ----------
        B : array
            field vector(s), shape (3, ...), north/east/down
        degrees : bool (optional)
            unit of the angles. Default True.
        """
        north, east, down = np.asarray(B)
        inclination, declination = get_inclination_declination(north, east, down, degrees = degrees)
        return cls(north, east, down,
                   np.sqrt(north**2 + east**2 + down**2), np.hypot(north, east),
                   inclination, declination)


class GeoMagFlux:
    """
    Magnetic flux density from an Igrf engine, in a selectable unit

    Parameters
    ----------
    engine : Igrf, optional
        engine to delegate to. Default is an IGRF-13 engine.
    unit : MagFluxUnit or string, optional
        output unit, e.g. MagFluxUnit.MICROTESLA or 'microtesla'.
        Default is SI (tesla).
    """

    def __init__(self, engine = None, unit = MagFluxUnit.SI):
        self._engine = engine if engine is not None else Igrf()
        self.unit = unit

    @property
    def engine(self):
        return self._engine

    @property
    def unit(self):
        return self._unit

    @unit.setter
    def unit(self, unit):
        self._unit = MagFluxUnit(unit)

    @property
    def symbol(self):
        return self._unit.symbol

    def field(self, epoch, position):
        """ Field (north, east, down) at position and epoch, in the selected unit. See Igrf.field """
        return self._engine.field(epoch, position) * self._unit.scale

    def components(self, epoch, position, degrees = True):
        """ MagFluxComponents at position and epoch, in the selected unit """
        return MagFluxComponents.from_vector(self.field(epoch, position), degrees = degrees)
