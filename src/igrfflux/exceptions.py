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


Errors raised by igrfflux.

Every error carries an explicit kind (see ErrorKind) and a return code,
which the command line interface uses as exit status.

"""

from enum import Enum


class ErrorKind(Enum):
    """ Kinds of errors that a field query or a table construction can end with """
    EMPTY_TABLE = 'empty_table'
    NO_BRACKET_FOUND = 'no_bracket_found'
    INVALID_COORDINATE = 'invalid_coordinate'
    MALFORMED_STREAM = 'malformed_stream'


class GeoMagError(RuntimeError):
    """ Base class of igrfflux errors """
    kind = None
    return_code = 1

    def __init__(self, message):
        super().__init__('[GeoMagError]: ' + message)


class EmptyTable(GeoMagError):
    """ The coefficient table has no snapshots """
    kind = ErrorKind.EMPTY_TABLE
    return_code = 3


class NoBracketFound(GeoMagError):
    """ The requested epoch is not covered by the coefficient table """
    kind = ErrorKind.NO_BRACKET_FOUND
    return_code = 4

    def __init__(self, epoch, coverage):
        self.epoch = epoch
        self.coverage = coverage
        super().__init__('epoch {} is outside the coefficient coverage ({} to {})'.format(
                         epoch, *coverage))


class InvalidCoordinateKind(GeoMagError, TypeError):
    """ A position was not tagged with a known coordinate kind """
    kind = ErrorKind.INVALID_COORDINATE
    return_code = 5


class MalformedCoefficientStream(GeoMagError, ValueError):
    """
    Coefficient data could not be parsed

    Parameters
    ----------
    message : string
        what went wrong
    lineno : int, optional
        line number (starting at 1) where the problem was found
    """
    kind = ErrorKind.MALFORMED_STREAM
    return_code = 6

    def __init__(self, message, lineno = None):
        self.lineno = lineno
        if lineno is not None:
            message = 'line {}: {}'.format(lineno, message)
        super().__init__(message)
