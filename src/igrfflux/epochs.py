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


Epoch handling.

The engine works with fractional years (e.g., 2021-03-28 is 2021.2356).
The functions here convert between fractional years and the date and time
types people actually pass around (datetime, pandas Timestamp, numpy
datetime64, ISO 8601 strings).

"""

import numbers
import numpy as np
import pandas as pd


def is_leapyear(year):
    """ Check for leapyear (handles arrays and preserves shape)

    """

    # if array:
    if isinstance(year, np.ndarray):
        year = year.astype(np.int64)
        return (year % 4 == 0) & ((year % 100 != 0) | (year % 400 == 0))

    # if scalar:
    if year % 400 == 0:
        return True

    if year % 100 == 0:
        return False

    return year % 4 == 0


def yearfrac_to_datetime(fracyear):
    """
    Convert fraction of year to datetime

    Parameters
    ----------
    fracyear : iterable
        Date(s) in decimal year. E.g., 2021-03-28 is 2021.2356
        Must be an array, list or similar.

    Returns
    -------
    datetimes : array
        Array of datetimes
    """

    fracyear = np.asarray(fracyear, dtype = np.float64).flatten()
    year = np.floor(fracyear).astype(np.int64) # truncate fracyear to get year

    # time since beginning of year:
    delta_year = pd.to_timedelta((fracyear - year)*(365 + is_leapyear(year)), unit = 'D')
    # and beginning of years:
    start_year = pd.to_datetime(year.astype(str), format = '%Y')

    # adding them produces the datetime:
    return (start_year + delta_year).to_pydatetime()


def to_yearfrac(epoch):
    """
    Convert an epoch to fractional year

    Parameters
    ----------
    epoch : float, datetime, date, pandas.Timestamp, numpy.datetime64 or string
        Numbers are taken to be fractional years already. Strings must be
        in a format that pandas understands (ISO 8601 is safe). Timezone
        aware values are converted to UTC.

    Returns
    -------
    fracyear : float
        year + time elapsed since January 1 / length of that year

    Raises
    ------
    TypeError
        if epoch is None or of a type that can not be converted
    ValueError
        if epoch is a string that can not be parsed
    """

    if isinstance(epoch, numbers.Real):
        return float(epoch)

    if epoch is None:
        raise TypeError('epoch can not be None')

    t = pd.Timestamp(epoch)
    if t is pd.NaT:
        raise ValueError('epoch {!r} is not a valid time'.format(epoch))

    if t.tzinfo is not None:
        t = t.tz_convert('UTC').tz_localize(None)

    start = pd.Timestamp(year = t.year, month = 1, day = 1)
    end   = pd.Timestamp(year = t.year + 1, month = 1, day = 1)

    return t.year + (t - start) / (end - start)
