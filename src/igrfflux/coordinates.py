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


Positions and conversion to geocentric spherical coordinates.

A position is one of two tagged variants:

GeocentricSpherical - radius [km], longitude [deg], geocentric latitude [deg]
Geodetic            - altitude above the WGS84 ellipsoid [km], longitude [deg],
                      geodetic latitude [deg]

normalize() turns either into the geocentric radius and colatitude used by
the spherical harmonic synthesis, plus the angle between the geodetic and
geocentric vertical, which is needed to rotate the field back to the local
north/east/down frame.

"""

from collections import namedtuple
from enum import Enum

import numpy as np

from .exceptions import InvalidCoordinateKind

# World Geodetic System 84 parameters:
WGS84_e2 = 0.00669437999014
WGS84_a  = 6378.137 # km
WGS84_b  = WGS84_a*np.sqrt(1 - WGS84_e2)


class CoordinateKind(Enum):
    GEOCENTRIC_SPHERICAL = 'geocentric_spherical'
    GEODETIC = 'geodetic'


class GeocentricSpherical(namedtuple('GeocentricSpherical', ['radius', 'longitude', 'latitude'])):
    """
    Position in geocentric spherical coordinates

    Parameters
    ----------
    radius : float or array
        distance from the center of the Earth [km]
    longitude : float or array
        longitude [deg], positive east
    latitude : float or array
        geocentric latitude [deg]
    """
    __slots__ = ()

    @property
    def kind(self):
        return CoordinateKind.GEOCENTRIC_SPHERICAL

    @classmethod
    def from_ecef(cls, x, y, z):
        """
        Make position from Earth-centered, Earth-fixed cartesian coordinates [km]
        """
        x, y, z = map(lambda c: np.asarray(c, dtype = np.float64), np.broadcast_arrays(x, y, z))
        radius = np.sqrt(x**2 + y**2 + z**2)
        longitude = np.degrees(np.arctan2(y, x))
        latitude = np.degrees(np.arctan2(z, np.sqrt(x**2 + y**2)))
        return cls(radius, longitude, latitude)


class Geodetic(namedtuple('Geodetic', ['altitude', 'longitude', 'latitude'])):
    """
    Position in geodetic coordinates, relative to the WGS84 ellipsoid

    Parameters
    ----------
    altitude : float or array
        height above the ellipsoid [km]
    longitude : float or array
        longitude [deg], positive east
    latitude : float or array
        geodetic latitude [deg]
    """
    __slots__ = ()

    @property
    def kind(self):
        return CoordinateKind.GEODETIC


def normalize(position):
    """
    Geocentric radius and colatitude of a position

    For geodetic positions, the conversion is done in closed form (no
    iterations) using the WGS84 semi-axes a and b. With theta the geodetic
    colatitude and h the altitude:

        rho**2 = a**2 sin**2(theta) + b**2 cos**2(theta)
        r      = sqrt((a**4 sin**2(theta) + b**4 cos**2(theta))/rho**2 + h**2 + 2 h rho)
        cos(delta) = (h + rho)/r
        sin(delta) = (a**2 - b**2)/rho sin(theta) cos(theta)/r

    and the geocentric colatitude is theta + delta.

    Parameters
    ----------
    position : GeocentricSpherical or Geodetic

    Returns
    -------
    r : array
        radius [km]
    theta : array
        geocentric colatitude [deg]
    delta : array
        angle [deg] between geocentric and geodetic vertical, zero for
        geocentric input

    Raises
    ------
    InvalidCoordinateKind
        if position is neither GeocentricSpherical nor Geodetic
    """
    kind = getattr(position, 'kind', None)

    if kind is CoordinateKind.GEOCENTRIC_SPHERICAL:
        r, lat = map(lambda c: np.asarray(c, dtype = np.float64), np.broadcast_arrays(position.radius, position.latitude))
        return r, 90. - lat, np.zeros_like(r)

    if kind is CoordinateKind.GEODETIC:
        h, lat = map(lambda c: np.asarray(c, dtype = np.float64), np.broadcast_arrays(position.altitude, position.latitude))

        aa, bb = WGS84_a**2, WGS84_b**2
        colat_rad = np.radians(90. - lat)
        sinth = np.sin(colat_rad)
        costh = np.cos(colat_rad)

        a2sin2 = aa * sinth**2
        b2cos2 = bb * costh**2
        rho2 = a2sin2 + b2cos2
        rho = np.sqrt(rho2)

        r = np.sqrt((aa * a2sin2 + bb * b2cos2) / rho2 + h**2 + 2 * h * rho)
        cos_delta = (h + rho) / r
        sin_delta = (aa - bb) / rho * sinth * costh / r

        # sin and cos of theta + delta
        sin_theta = sinth * cos_delta + costh * sin_delta
        cos_theta = costh * cos_delta - sinth * sin_delta

        theta = np.degrees(np.arctan2(sin_theta, cos_theta))
        delta = np.degrees(np.arctan2(sin_delta, cos_delta))
        return r, theta, delta

    raise InvalidCoordinateKind('unknown coordinate kind for position {!r}'.format(position))
