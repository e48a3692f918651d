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


Command line interface.

Usage:
------
igrfflux DATE LAT LON ALT [--unit UNIT] [--coefficients FILE] [--verbose]

e.g.

igrfflux 2020-01-01T00:00:00Z 40 -105 1655 --unit nanotesla

prints the position and the magnetic flux density vector (north, east,
down) at geodetic latitude LAT [deg], longitude LON [deg] and altitude ALT
[m] above the WGS84 ellipsoid, followed by the derived components.

"""

import argparse
import logging

from .coordinates import Geodetic
from .epochs import to_yearfrac
from .exceptions import GeoMagError
from .flux import GeoMagFlux, MagFluxUnit
from .igrf import Igrf
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def _epoch(value):
    try:
        return to_yearfrac(value)
    except (TypeError, ValueError) as e:
        raise argparse.ArgumentTypeError('invalid date {!r}: {}'.format(value, e))


def build_parser():
    parser = argparse.ArgumentParser(prog = 'igrfflux',
                                     description = 'Magnetic flux density from the International Geomagnetic Reference Field')
    parser.add_argument('date', type = _epoch, help = 'date and time, ISO 8601 (e.g. 2020-01-01T12:00:00Z) or fractional year')
    parser.add_argument('latitude', type = float, help = 'geodetic latitude [deg]')
    parser.add_argument('longitude', type = float, help = 'longitude [deg], positive east')
    parser.add_argument('altitude', type = float, help = 'height above the WGS84 ellipsoid [m]')
    parser.add_argument('--unit', default = MagFluxUnit.SI.value, choices = [unit.value for unit in MagFluxUnit],
                        help = 'output unit (default: %(default)s)')
    parser.add_argument('--coefficients', metavar = 'FILE',
                        help = 'coefficient file in the NOAA layout (default: built-in IGRF-13)')
    parser.add_argument('-v', '--verbose', action = 'store_true', help = 'log debug messages')
    return parser


def main(argv = None):
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    # the engine works in km
    position = Geodetic(args.altitude / 1000., args.longitude, args.latitude)
    try:
        engine = Igrf.from_file(args.coefficients) if args.coefficients else Igrf()
        flux = GeoMagFlux(engine, unit = args.unit)
        components = flux.components(args.date, position)
    except GeoMagError as e:
        logger.error('%s', e)
        return e.return_code
    except OSError as e:
        logger.error('could not read coefficients: %s', e)
        return 1

    symbol = flux.symbol
    print('Position: latitude {} deg, longitude {} deg, altitude {} m, epoch {:.4f}'.format(
          args.latitude, args.longitude, args.altitude, args.date))
    print('Magnetic Flux Density: {:.7g} {:.7g} {:.7g} [{}]'.format(
          components.north, components.east, components.down, symbol))
    for name in ('north', 'east', 'down', 'total', 'horizontal'):
        print('{:<12}{:.7g} {}'.format(name.capitalize() + ':', getattr(components, name), symbol))
    print('{:<12}{:.4f} deg'.format('Inclination:', components.inclination))
    print('{:<12}{:.4f} deg'.format('Declination:', components.declination))
    return 0
