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


Pure Python IGRF magnetic flux density.

Here is a list of what the package provides:

Engine
------
Igrf                 - IGRF field engine (north/east/down field in nT)
field                - field at a position and epoch, using IGRF-13

Positions
---------
Geodetic             - altitude, longitude, latitude relative to WGS84
GeocentricSpherical  - radius, longitude, latitude on a sphere

Coefficients
------------
CoefficientSnapshot  - Gauss coefficients at one epoch
CoefficientTable     - ordered collection of snapshots
read_coefficients    - read coefficients in the NOAA layout
read_shc             - read .shc file

Units and components
--------------------
GeoMagFlux           - engine output in selectable unit
MagFluxComponents    - total, horizontal, inclination, declination

"""

from .coordinates import CoordinateKind, GeocentricSpherical, Geodetic, normalize
from .epochs import to_yearfrac, yearfrac_to_datetime
from .exceptions import (EmptyTable, ErrorKind, GeoMagError, InvalidCoordinateKind,
                         MalformedCoefficientStream, NoBracketFound)
from .flux import GeoMagFlux, MagFluxComponents, MagFluxUnit, get_inclination_declination
from .igrf import Igrf, field
from .igrf13 import default_table
from .models import CoefficientSnapshot, CoefficientTable, ModelKind, blend
from .readers import read_coefficients, read_shc

__version__ = '1.0.0'
