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


Readers for spherical harmonic coefficient files.

Two layouts are supported:

read_coefficients - the multi-column layout used by NOAA/IAGA for the IGRF
                    coefficients (igrf13coeffs.txt and similar)
read_shc          - the .shc (spherical harmonic coefficient) layout

Both accept a filename or an open text stream, and both return a
CoefficientTable.

Parsing is best effort on the token level: tokens that are not numbers
where numbers are expected are skipped with a warning. Problems with the
structure of the file raise MalformedCoefficientStream.

"""

import logging
import os
import re
from contextlib import contextmanager

import numpy as np

from .exceptions import MalformedCoefficientStream
from .models import (MAX_DEGREE, N_COEFFICIENTS, CoefficientSnapshot,
                     CoefficientTable, ModelKind, coefficient_index)

logger = logging.getLogger(__name__)

MODEL_ROW = 'c/s'
EPOCH_ROW = 'g/h'
FILE_KINDS = {kind.value: kind for kind in (ModelKind.DEFINITIVE, ModelKind.PREDICTIVE,
                                            ModelKind.SECULAR_VARIATION)}

# epoch ranges like 2020-25 or 2020-2025
_EPOCH_RANGE = re.compile(r'^(\d{4})-(\d{1,4})$')


@contextmanager
def _lines(source):
    """ Iterate over lines of a file given by name, or of an open stream """
    if isinstance(source, (str, os.PathLike)):
        with open(source, 'r') as f:
            yield f
    else:
        yield source


def _parse_values(tokens, lineno):
    """ Convert tokens to floats, skipping tokens that are not numbers """
    values = []
    for token in tokens:
        try:
            values.append(float(token))
        except ValueError:
            logger.warning('line %d: skipping non-numeric token %r', lineno, token)
    return values


def _parse_epoch(token, lineno):
    """
    Convert an epoch token to fractional year

    A range token (e.g., 2020-25) is converted to the end of the range: the
    trailing digits replace the same number of trailing digits of the
    start year (rolling over if the result precedes the start year).
    Returns None for tokens that are not epochs.
    """
    match = _EPOCH_RANGE.match(token)
    if match:
        start, end = match.groups()
        year = int(start[:len(start) - len(end)] + end)
        if year < int(start) and len(end) < len(start): # e.g. 1995-00
            year += 10**len(end)
        if year <= int(start):
            raise MalformedCoefficientStream('epoch range {} does not end after it starts'.format(token), lineno)
        return float(year)

    values = _parse_values([token], lineno)
    return values[0] if values else None


def _parse_degree_order(tokens, lineno, gh = None):
    """
    Read degree and order from the two first tokens of a coefficient row

    If gh is None (shc layout) negative orders denote h coefficients.
    Returns n, m, gh
    """
    if len(tokens) < 2:
        raise MalformedCoefficientStream('coefficient row without degree and order', lineno)
    try:
        n, m = map(int, tokens[:2])
    except ValueError:
        raise MalformedCoefficientStream('could not read degree and order from {}'.format(tokens[:2]), lineno)

    if gh is None:
        gh = 'h' if m < 0 else 'g'
        m = abs(m)

    if not 1 <= n <= MAX_DEGREE:
        raise MalformedCoefficientStream('degree {} not in range 1 to {}'.format(n, MAX_DEGREE), lineno)
    if not 0 <= m <= n:
        raise MalformedCoefficientStream('order {} not in range 0 to {}'.format(m, n), lineno)
    if gh == 'h' and m == 0:
        raise MalformedCoefficientStream('h coefficient for order 0', lineno)

    return n, m, gh


def _make_table(epochs, kinds, coefficients):
    try:
        return CoefficientTable(CoefficientSnapshot(epoch, kind, c)
                                for epoch, kind, c in zip(epochs, kinds, coefficients))
    except ValueError as e:
        raise MalformedCoefficientStream(str(e)) from e


def read_coefficients(source):
    """
    Read coefficients in the NOAA/IAGA multi-column layout

    The layout is

        # comment lines
        c/s  n  m   IGRF   ...   DGRF   ...   IGRF       SV
        g/h  n  m  1900.0  ...  1945.0  ...  2020.0  2020-25
        g    1  0  -31543  ... -30594.0  ... -29404.8     5.7
        g    1  1   -2298  ...  -2285.0  ...  -1450.9     7.4
        h    1  1    5922  ...   5810.0  ...   4652.5   -25.9
        ...

    with one snapshot per column after n and m. A range in the epoch row
    (2020-25 for the secular variation) is read as the end of the range.

    Parameters
    ----------
    source : string, path or text stream
        coefficient file name, or an iterable of lines

    Returns
    -------
    table : CoefficientTable

    Raises
    ------
    MalformedCoefficientStream
        if the structure of the file is broken
    """

    kinds = []
    epochs = None
    coefficients = None
    n_rows = 0

    with _lines(source) as lines:
        for lineno, line in enumerate(lines, start = 1):
            tokens = line.split()
            if not tokens or tokens[0].startswith('#'):
                continue

            label = tokens[0].lower()
            if label == MODEL_ROW:
                if kinds:
                    raise MalformedCoefficientStream('more than one model row', lineno)
                kinds = [FILE_KINDS[t.upper()] for t in tokens[1:] if t.upper() in FILE_KINDS]
                if not kinds:
                    raise MalformedCoefficientStream('model row names no DGRF, IGRF or SV columns', lineno)
                coefficients = np.zeros((len(kinds), N_COEFFICIENTS))

            elif label == EPOCH_ROW:
                if not kinds:
                    raise MalformedCoefficientStream('epoch row before model row', lineno)
                if epochs is not None:
                    raise MalformedCoefficientStream('more than one epoch row', lineno)
                epochs = [_parse_epoch(t, lineno) for t in tokens[1:] if t not in ('n', 'm')]
                epochs = [epoch for epoch in epochs if epoch is not None]
                if len(epochs) != len(kinds):
                    raise MalformedCoefficientStream('{} epochs for {} models'.format(len(epochs), len(kinds)), lineno)

            elif label in ('g', 'h'):
                if epochs is None:
                    raise MalformedCoefficientStream('coefficient row before epoch row', lineno)
                n, m, gh = _parse_degree_order(tokens[1:3], lineno, gh = label)
                values = _parse_values(tokens[3:], lineno)
                if len(values) != len(kinds):
                    raise MalformedCoefficientStream('{} coefficients for {} models'.format(len(values), len(kinds)), lineno)
                coefficients[:, coefficient_index(n, m, gh)] = values
                n_rows += 1

            else:
                logger.debug('line %d: skipping row starting with %r', lineno, tokens[0])

    if not kinds:
        raise MalformedCoefficientStream('no model row ({}) found'.format(MODEL_ROW))
    if epochs is None:
        raise MalformedCoefficientStream('no epoch row ({}) found'.format(EPOCH_ROW))
    if n_rows == 0:
        raise MalformedCoefficientStream('no coefficient rows found')

    logger.debug('read %d coefficient rows for %d models', n_rows, len(kinds))
    return _make_table(epochs, kinds, coefficients)


def read_shc(source):
    """
    Read .shc (spherical harmonic coefficient) file

    The layout has comment lines starting with #, a line with parameters
    (N_MIN N_MAX NTIMES SP_ORDER N_STEPS), a line with the times of the
    models, and then one line per coefficient: degree, order and one value
    per time. Negative orders denote h coefficients.

    Parameters
    ----------
    source : string, path or text stream
        filename of .shc file, or an iterable of lines

    Returns
    -------
    table : CoefficientTable
        all snapshots are tagged as DEFINITIVE

    Raises
    ------
    MalformedCoefficientStream
        if the structure of the file is broken

    Note
    ----
    The .shc layout has no special treatment of "secular variation"
    coefficients. Instead, the SV coefficients of IGRF are used to make
    gauss coefficients at the end of the SV window when the file is made.
    """

    header = 2
    n_times = 0
    epochs, coefficients = None, None
    n_rows = 0

    with _lines(source) as lines:
        for lineno, line in enumerate(lines, start = 1):
            tokens = line.split()
            if not tokens or tokens[0].startswith('#'): # this is a header that we don't read
                continue

            if header == 2: # read parameters
                try:
                    n_min, n_max, n_times, sp_order, n_steps = map(int, tokens[:5])
                except ValueError:
                    raise MalformedCoefficientStream('could not read parameter line', lineno)
                if n_max > MAX_DEGREE:
                    raise MalformedCoefficientStream('maximum degree {} above {}'.format(n_max, MAX_DEGREE), lineno)
                header -= 1
                continue

            if header == 1: # read years
                epochs = _parse_values(tokens, lineno)
                if len(epochs) != n_times:
                    raise MalformedCoefficientStream('{} times for NTIMES = {}'.format(len(epochs), n_times), lineno)
                coefficients = np.zeros((n_times, N_COEFFICIENTS))
                header -= 1
                continue

            n, m, gh = _parse_degree_order(tokens[:2], lineno)
            values = _parse_values(tokens[2:], lineno)
            if len(values) != n_times:
                raise MalformedCoefficientStream('{} coefficients for {} times'.format(len(values), n_times), lineno)
            coefficients[:, coefficient_index(n, m, gh)] = values
            n_rows += 1

    if epochs is None or n_rows == 0:
        raise MalformedCoefficientStream('no coefficients found')

    logger.debug('read %d coefficient rows for %d times', n_rows, n_times)
    return _make_table(epochs, [ModelKind.DEFINITIVE] * n_times, coefficients)
