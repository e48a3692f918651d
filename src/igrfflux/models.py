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


Coefficient snapshots and tables.

A snapshot is one column of an IGRF coefficient file: an epoch, the kind
of model (DGRF, IGRF or SV) and 195 Gauss coefficients packed in the
canonical IGRF order

    g(1,0), g(1,1), h(1,1), g(2,0), g(2,1), h(2,1), g(2,2), h(2,2), ...

up to degree and order 13. A table is an ordered, immutable sequence of
snapshots. For a given epoch, the table selects the two snapshots that
bracket it, and blend() turns them into the working model for that epoch.

"""

import logging
from collections import namedtuple
from enum import Enum
from operator import attrgetter

import numpy as np
import pandas as pd

from .epochs import to_yearfrac, yearfrac_to_datetime
from .exceptions import EmptyTable, NoBracketFound

logger = logging.getLogger(__name__)

MAX_DEGREE = 13
N_COEFFICIENTS = MAX_DEGREE * (MAX_DEGREE + 2) # 195


class ModelKind(Enum):
    """ Kind of coefficient snapshot. File kinds use the coefficient file header tag as value """
    DEFINITIVE = 'DGRF'
    PREDICTIVE = 'IGRF'
    SECULAR_VARIATION = 'SV'
    INTERPOLATED = 'interpolated'
    EXTRAPOLATED = 'extrapolated'

    @property
    def is_working(self):
        return self in (ModelKind.INTERPOLATED, ModelKind.EXTRAPOLATED)


def coefficient_index(n, m, gh = 'g'):
    """
    Position of a Gauss coefficient in the packed coefficient array

    Parameters
    ----------
    n : int
        spherical harmonic degree, 1 <= n <= 13
    m : int
        spherical harmonic order, 0 <= m <= n
    gh : string
        'g' for cos terms, 'h' for sin terms (m must be > 0 for 'h')

    Returns
    -------
    index : int
    """
    assert 1 <= n <= MAX_DEGREE, 'degree out of range: {}'.format(n)
    assert 0 <= m <= n, 'order out of range: {}'.format(m)
    assert gh == 'g' or (gh == 'h' and m > 0), 'no {} coefficient for m = {}'.format(gh, m)

    # n**2 - 1 coefficients belong to degrees below n
    if m == 0:
        return n * n - 1
    return n * n - 1 + 2 * m - (gh == 'g')


def coefficient_keys():
    """ List of (gh, n, m) for each element of a packed coefficient array """
    keys = []
    for n in range(1, MAX_DEGREE + 1):
        for m in range(0, n + 1):
            keys.append(('g', n, m))
            if m > 0:
                keys.append(('h', n, m))
    return keys


class CoefficientSnapshot(namedtuple('CoefficientSnapshot', ['epoch', 'kind', 'coefficients'])):
    """
    Gauss coefficients at one epoch

    Parameters
    ----------
    epoch : float or datetime-like
        epoch of the snapshot, stored as fractional year
    kind : ModelKind or string
        kind of snapshot, e.g. ModelKind.DEFINITIVE or 'DGRF'
    coefficients : array
        195 coefficients in packed order [nT, or nT/year for SV]. The
        snapshot keeps a read-only copy.
    """
    __slots__ = ()

    def __new__(cls, epoch, kind, coefficients):
        coefficients = np.array(coefficients, dtype = np.float64)
        if coefficients.shape != (N_COEFFICIENTS, ):
            raise ValueError('expected {} coefficients, got array of shape {}'.format(
                             N_COEFFICIENTS, coefficients.shape))
        coefficients.flags.writeable = False
        return super().__new__(cls, to_yearfrac(epoch), ModelKind(kind), coefficients)

    def get(self, n, m, gh = 'g'):
        """ Return a single coefficient """
        return self.coefficients[coefficient_index(n, m, gh)]


class CoefficientTable:
    """
    Ordered, immutable collection of coefficient snapshots

    Parameters
    ----------
    snapshots : iterable of CoefficientSnapshot
        the snapshots are sorted by epoch. Epochs must be unique, and
        at most one secular variation snapshot is allowed, which must be
        the last one. An empty table can be made, but it can not be used
        to select models.

    Raises
    ------
    ValueError
        if the snapshots violate the rules above
    """

    def __init__(self, snapshots = ()):
        snapshots = tuple(sorted(snapshots, key = attrgetter('epoch')))
        epochs = np.array([s.epoch for s in snapshots], dtype = np.float64)

        if np.any(np.diff(epochs) <= 0):
            raise ValueError('coefficient snapshots must have unique epochs')

        for i, snapshot in enumerate(snapshots):
            if snapshot.kind.is_working:
                raise ValueError('{} snapshots can not be part of a table'.format(snapshot.kind.value))
            if snapshot.kind is ModelKind.SECULAR_VARIATION and i != len(snapshots) - 1:
                raise ValueError('secular variation snapshot must be the last in the table '
                                 '(found at epoch {})'.format(snapshot.epoch))

        epochs.flags.writeable = False
        self._snapshots = snapshots
        self._epochs = epochs

    def __len__(self):
        return len(self._snapshots)

    def __getitem__(self, i):
        return self._snapshots[i]

    def __iter__(self):
        return iter(self._snapshots)

    def __repr__(self):
        if not self._snapshots:
            return 'CoefficientTable([])'
        return 'CoefficientTable({} snapshots, {} to {})'.format(len(self), *self.coverage)

    @property
    def epochs(self):
        """ Read-only array of snapshot epochs (fractional years) """
        return self._epochs

    @property
    def coverage(self):
        """ (first epoch, last epoch) of the table """
        if not self._snapshots:
            raise EmptyTable('coefficient table has no snapshots')
        return self._epochs[0], self._epochs[-1]

    def select(self, epoch):
        """
        Find the snapshots that bracket epoch

        Parameters
        ----------
        epoch : float or datetime-like
            target epoch

        Returns
        -------
        lower : CoefficientSnapshot
            last snapshot with epoch before the target epoch
        upper : CoefficientSnapshot
            first snapshot with epoch at or after the target epoch

        Raises
        ------
        EmptyTable
            if the table has no snapshots
        NoBracketFound
            if epoch is at or before the first snapshot, or after the last
        """
        if not self._snapshots:
            raise EmptyTable('coefficient table has no snapshots')

        epoch = to_yearfrac(epoch)
        i = int(np.searchsorted(self._epochs, epoch, side = 'left'))
        if i == 0 or i == len(self._snapshots):
            raise NoBracketFound(epoch, self.coverage)

        lower, upper = self._snapshots[i - 1], self._snapshots[i]
        logger.debug('epoch %s bracketed by %s %s and %s %s', epoch,
                     lower.kind.value, lower.epoch, upper.kind.value, upper.epoch)
        return lower, upper

    def to_dataframes(self):
        """
        Gauss coefficients as data frames

        The data frames have time as index and spherical harmonic degree
        and order as columns. A secular variation snapshot is turned into
        the main field coefficients at its epoch (the end of the secular
        variation window).

        Returns
        -------
        g : DataFrame
            pandas DataFrame of gauss coefficients for cos terms.
        h : DataFrame
            pandas DataFrame of gauss coefficients for sin terms, zero for m = 0
        """
        snapshots = list(self._snapshots)
        if len(snapshots) > 1 and snapshots[-1].kind is ModelKind.SECULAR_VARIATION:
            snapshots[-1] = blend(snapshots[-1].epoch, snapshots[-2], snapshots[-1])

        keys = [(n, m) for n in range(1, MAX_DEGREE + 1) for m in range(n + 1)]
        coefficients = np.array([s.coefficients for s in snapshots]).reshape((-1, N_COEFFICIENTS))
        g = coefficients[:, [coefficient_index(n, m, 'g') for n, m in keys]]
        h = np.zeros_like(g)
        for i, (n, m) in enumerate(keys):
            if m > 0:
                h[:, i] = coefficients[:, coefficient_index(n, m, 'h')]

        index = pd.DatetimeIndex(yearfrac_to_datetime([s.epoch for s in snapshots]))
        columns = pd.MultiIndex.from_tuples(keys, names = ['n', 'm'])
        return pd.DataFrame(g, index = index, columns = columns), \
               pd.DataFrame(h, index = index, columns = columns)


def blend(epoch, lower, upper):
    """
    Make the working model for epoch from two bracketing snapshots

    If upper is a secular variation snapshot, the coefficients of lower
    are extrapolated linearly, using upper as the annual rate of change.
    Otherwise the coefficients are interpolated linearly between lower
    and upper.

    Parameters
    ----------
    epoch : float or datetime-like
        target epoch
    lower : CoefficientSnapshot
        snapshot before the target epoch
    upper : CoefficientSnapshot
        snapshot at or after the target epoch

    Returns
    -------
    model : CoefficientSnapshot
        snapshot of kind INTERPOLATED or EXTRAPOLATED at epoch
    """
    epoch = to_yearfrac(epoch)

    if upper.kind is ModelKind.SECULAR_VARIATION:
        dt = epoch - lower.epoch # years
        coefficients = lower.coefficients + dt * upper.coefficients
        kind = ModelKind.EXTRAPOLATED
    else:
        f = (epoch - lower.epoch) / (upper.epoch - lower.epoch)
        coefficients = lower.coefficients + f * (upper.coefficients - lower.coefficients)
        kind = ModelKind.INTERPOLATED

    return CoefficientSnapshot(epoch, kind, coefficients)
