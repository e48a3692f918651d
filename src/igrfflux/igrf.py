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


IGRF field engine.

Example usage:
--------------
import numpy as np
from datetime import datetime
import igrfflux

igrf = igrfflux.Igrf() # IGRF-13

# GEODETIC
position = igrfflux.Geodetic(altitude = 0, longitude = 5.32415, latitude = 60.39299)
Bn, Be, Bd = igrf.field(datetime(2021, 3, 28), position) # north, east, down [nT]

# GEOCENTRIC
Bn, Be, Bd = igrf.field_geocentric(2021.25, latitude = 60, longitude = 4, radius = 6500)

# GRID
lon = np.array([20, 120, 220])
lat = np.array([[60], [-60]])
B = igrf.field_geodetic('2020-06-01', lat, lon) # shape (3, 2, 3)

"""

import logging

import numpy as np

from .coordinates import GeocentricSpherical, Geodetic, normalize
from .harmonics import rotate, synthesize
from .igrf13 import default_table
from .models import CoefficientTable, blend
from .readers import read_coefficients, read_shc

logger = logging.getLogger(__name__)


class Igrf:
    """
    Geomagnetic field from a table of IGRF coefficient snapshots

    The engine keeps no state between queries apart from the coefficient
    table, which is immutable, so one instance can be shared between
    threads.

    Parameters
    ----------
    table : CoefficientTable or iterable of CoefficientSnapshot, optional
        coefficients to use. Default is IGRF-13.
    """

    def __init__(self, table = None):
        if table is None:
            table = default_table()
        elif not isinstance(table, CoefficientTable):
            table = CoefficientTable(table)

        self._table = table
        logger.debug('IGRF engine with %r', table)

    @classmethod
    def from_stream(cls, stream):
        """ Make engine from a text stream in the NOAA coefficient file layout """
        return cls(read_coefficients(stream))

    @classmethod
    def from_file(cls, filename):
        """ Make engine from a coefficient file in the NOAA layout (e.g., igrf13coeffs.txt) """
        return cls(read_coefficients(filename))

    @classmethod
    def from_shc(cls, filename):
        """ Make engine from a .shc file """
        return cls(read_shc(filename))

    @property
    def table(self):
        return self._table

    @property
    def coverage(self):
        """ (first epoch, last epoch) of the coefficient table, in fractional years """
        return self._table.coverage

    def working_model(self, epoch):
        """
        Gauss coefficients at epoch

        Parameters
        ----------
        epoch : float or datetime-like
            fractional year, or anything to_yearfrac understands

        Returns
        -------
        model : CoefficientSnapshot
            interpolated or extrapolated snapshot at epoch

        Raises
        ------
        EmptyTable, NoBracketFound
        """
        lower, upper = self._table.select(epoch)
        return blend(epoch, lower, upper)

    def field(self, epoch, position):
        """
        Calculate IGRF model components

        Broadcasting rules apply for the coordinate arrays of the
        position, and the combined shape will be preserved.

        Parameters
        ----------
        epoch : float or datetime-like
            fractional year, or anything to_yearfrac understands
        position : GeocentricSpherical or Geodetic
            where to evaluate the field

        Returns
        -------
        B : array
            Magnetic field [nT], shape (3, ...): north, east and down
            components. For Geodetic positions north and down refer to the
            ellipsoid, for GeocentricSpherical positions to the sphere.

        Raises
        ------
        EmptyTable
            if the coefficient table is empty
        NoBracketFound
            if epoch is not covered by the coefficient table
        InvalidCoordinateKind
            if position is not a GeocentricSpherical or Geodetic
        """
        r, theta, delta = normalize(position)
        model = self.working_model(epoch)

        Br, Btheta, Bphi = synthesize(model.coefficients, r, theta, position.longitude)
        return np.array(rotate(Br, Btheta, Bphi, delta))

    def field_geodetic(self, epoch, latitude, longitude, altitude = 0.):
        """ Field [nT, north/east/down] at geodetic latitude [deg], longitude [deg] and altitude [km] """
        return self.field(epoch, Geodetic(altitude, longitude, latitude))

    def field_geocentric(self, epoch, latitude, longitude, radius):
        """ Field [nT, north/east/down] at geocentric latitude [deg], longitude [deg] and radius [km] """
        return self.field(epoch, GeocentricSpherical(radius, longitude, latitude))

    def field_ecef(self, epoch, x, y, z):
        """ Field [nT, north/east/down on the geocentric sphere] at ECEF position x, y, z [km] """
        return self.field(epoch, GeocentricSpherical.from_ecef(x, y, z))


def field(epoch, position):
    """
    Field [nT, north/east/down] at position and epoch, using IGRF-13

    See Igrf.field
    """
    return Igrf().field(epoch, position)
