"""
Test IGRF field
"""
import os
import pytest
import numpy as np
import numpy.testing as npt
import pandas as pd
from pathlib import Path
from datetime import datetime
from concurrent.futures import ThreadPoolExecutor

import igrfflux
from igrfflux import (Igrf, Geodetic, GeocentricSpherical, CoefficientTable,
                      EmptyTable, NoBracketFound, InvalidCoordinateKind, ModelKind)

# Define paths to test directory and test data directory
TEST_DIR = Path(os.path.dirname(__file__))
TEST_DATA_DIR = TEST_DIR / "data"


def load_reference_field(date):
    """
    Loads the reference field values for a given date

    Available dates:
        * 2020-01-01
        * 2022-10-05

    Parameters
    ----------
    date : :class:`datetime.datetime` object
        Date of the reference values that will be loaded.

    Returns
    -------
    reference : :class:`pandas.Dataframe`
        Dataframe with geodetic positions and the north, east and down
        components of the IGRF at those positions on the given date.
    """
    df = pd.read_csv(TEST_DATA_DIR / "reference_field.csv")
    return df[df.date == date.strftime("%Y-%m-%d")]


@pytest.fixture(scope="module")
def engine():
    return Igrf()


class TestIGRFKnownValues:
    """
    Test the IGRF field against precomputed values
    """

    @pytest.mark.parametrize(
        "date",
        [datetime(2020, 1, 1), datetime(2022, 10, 5)],
        ids=["2020-01-01", "2022-10-05"],
    )
    def test_reference_grid(self, engine, date):
        """
        Test IGRF against the precomputed values

        The test on 2020-01-01 doesn't involve any interpolation on the
        dates, the test on 2022-10-05 extrapolates with the secular variation.
        """
        reference = load_reference_field(date)
        assert len(reference) == 60
        b_n, b_e, b_d = engine.field_geodetic(
            date,
            reference.latitude.values,
            reference.longitude.values,
            reference.altitude_km.values,
        )
        atol = 1e-2  # nT
        npt.assert_allclose(b_n, reference.b_n, rtol=0, atol=atol)
        npt.assert_allclose(b_e, reference.b_e, rtol=0, atol=atol)
        npt.assert_allclose(b_d, reference.b_d, rtol=0, atol=atol)

    def test_boulder(self, engine):
        """
        Boulder, Colorado, at the start of 2020
        """
        B = engine.field("2020-01-01T00:00:00Z", Geodetic(1.655, -105, 40))
        npt.assert_allclose(B, [20594.0, 2926.6, 47514.9], atol=1)

    @pytest.mark.parametrize(
        "epoch, position, expected",
        [
            [2017.25, Geodetic(0, 5.32415, 60.39299), (14997.4575, 233.2526, 48858.0677)],
            [1965.5, Geodetic(100, 170, -45), (18222.4372, 7190.5350, -54171.8041)],
            [2024.999, Geodetic(1.655, -105, 40), (20573.5436, 2731.8339, 46960.0280)],
            [2022.5, Geodetic(1.655, -105, 40), (20583.771, 2829.176, 47237.405)],
            [2020.0, Geodetic(0, 0, 0), (27540.009, -2242.112, -16012.4015)],
            [2020.0, GeocentricSpherical(6771.2, 30, 45), (18744.8295, 1867.9504, 36135.5148)],
            [1900.5, GeocentricSpherical(6371.2, -60, -30), (25233.0864, 3203.8458, -11253.9823)],
        ],
        ids=["bergen", "southern-1965", "end-of-sv", "sv-2022", "equator",
             "geocentric-2020", "geocentric-1900"],
    )
    def test_known_values(self, engine, epoch, position, expected):
        npt.assert_allclose(engine.field(epoch, position), expected, rtol=0, atol=1e-2)


class TestCoverage:
    """
    Test the epochs that the engine does and does not cover
    """

    def test_coverage(self, engine):
        assert engine.coverage == (1900.0, 2025.0)

    @pytest.mark.parametrize("epoch", [1800.0, 1900.0, 2025.5, 2075.0, datetime(2030, 1, 1)])
    def test_outside(self, engine, epoch):
        with pytest.raises(NoBracketFound) as excinfo:
            engine.field(epoch, Geodetic(0, 0, 0))
        assert excinfo.value.kind is igrfflux.ErrorKind.NO_BRACKET_FOUND
        assert excinfo.value.return_code == 4
        assert excinfo.value.coverage == (1900.0, 2025.0)

    @pytest.mark.parametrize("epoch", [1900.0001, 1950.0, 2025.0])
    def test_inside(self, engine, epoch):
        assert np.all(np.isfinite(engine.field(epoch, Geodetic(0, 0, 0))))

    def test_empty_table(self):
        empty = Igrf(CoefficientTable())
        with pytest.raises(EmptyTable):
            empty.field(2020.0, Geodetic(0, 0, 0))
        with pytest.raises(EmptyTable):
            empty.coverage


class TestContinuity:
    """
    The field must be continuous in time, including across the switch
    from interpolation to extrapolation
    """

    @pytest.mark.parametrize("epoch", [1950.0, 2000.0, 2015.0, 2020.0])
    def test_snapshot_epochs(self, engine, epoch):
        position = Geodetic(1.655, -105, 40)
        before = engine.field(epoch - 1e-7, position)
        at = engine.field(epoch, position)
        after = engine.field(epoch + 1e-7, position)
        npt.assert_allclose(before, at, atol=1e-3)
        npt.assert_allclose(after, at, atol=1e-3)

    def test_working_model_kinds(self, engine):
        assert engine.working_model(2010.5).kind is ModelKind.INTERPOLATED
        assert engine.working_model(2022.0).kind is ModelKind.EXTRAPOLATED
        assert engine.working_model(2020.0).kind is ModelKind.INTERPOLATED
        assert engine.working_model(2010.5).epoch == 2010.5


class TestPoles:
    """
    The field must be finite at the geographic poles
    """

    def test_north_pole(self, engine):
        """
        At colatitude 0 Bphi comes from cos(theta) P(n, m), which is zero
        for all orders m >= 1
        """
        at_pole = engine.field_geocentric(2020.0, 90, 0, 6371.2)
        near_pole = engine.field_geocentric(2020.0, 89.9999999, 0, 6371.2)
        assert np.all(np.isfinite(at_pole))
        npt.assert_allclose(at_pole, (1789.9085, 0, 56385.8000), rtol=0, atol=1e-2)
        # north and down are continuous through the pole
        npt.assert_allclose(at_pole[[0, 2]], near_pole[[0, 2]], rtol=0, atol=1e-2)

    def test_south_pole(self, engine):
        at_pole = engine.field_geocentric(2020.0, -90, 45, 6371.2)
        assert np.all(np.isfinite(at_pole))
        npt.assert_allclose(at_pole, (4081.4377, -16117.4356, -51675.0000), rtol=0, atol=1e-2)

    @pytest.mark.parametrize("latitude", [90, -90])
    def test_geodetic_pole(self, engine, latitude):
        assert np.all(np.isfinite(engine.field_geodetic(2015.0, latitude, 0, 0)))


class TestQueries:
    """
    Test the different ways of querying the engine
    """

    def test_position_forms(self, engine):
        B = engine.field(2021.25, Geodetic(10, 4, 60))
        npt.assert_allclose(engine.field_geodetic(2021.25, 60, 4, 10), B)
        B = engine.field(2021.25, GeocentricSpherical(6500, 4, 60))
        npt.assert_allclose(engine.field_geocentric(2021.25, 60, 4, 6500), B)

    def test_ecef(self, engine):
        npt.assert_allclose(engine.field_ecef(2020.0, 6771.2, 0, 0),
                            engine.field_geocentric(2020.0, 0, 0, 6771.2))
        npt.assert_allclose(engine.field_ecef(2020.0, 0, 0, 6771.2),
                            engine.field_geocentric(2020.0, 90, 0, 6771.2), atol=1e-6)
        npt.assert_allclose(engine.field_ecef(2020.0, -5000, 5000, 0),
                            engine.field_geocentric(2020.0, 0, 135, np.sqrt(2) * 5000))

    @pytest.mark.parametrize(
        "epoch",
        [datetime(2021, 1, 1), "2021-01-01", np.datetime64("2021-01-01"), pd.Timestamp("2021-01-01")],
        ids=["datetime", "string", "datetime64", "timestamp"],
    )
    def test_epoch_types(self, engine, epoch):
        position = Geodetic(0, 4, 60)
        npt.assert_allclose(engine.field(epoch, position), engine.field(2021.0, position))

    @pytest.mark.parametrize("position", [(0, 0, 0), [6371.2, 0, 0], None, "geodetic"])
    def test_invalid_position(self, engine, position):
        with pytest.raises(InvalidCoordinateKind):
            engine.field(2020.0, position)
        # the error is also a TypeError
        with pytest.raises(TypeError):
            engine.field(2020.0, position)

    def test_broadcasting(self, engine):
        lon = np.array([20, 120, 220])
        lat = np.array([[60], [-60]])
        B = engine.field_geodetic("2020-06-01", lat, lon)
        assert B.shape == (3, 2, 3)
        for i in range(2):
            for j in range(3):
                npt.assert_allclose(B[:, i, j], engine.field_geodetic("2020-06-01", lat[i, 0], lon[j]))

    def test_scalar_shape(self, engine):
        assert engine.field(2020.0, Geodetic(0, 0, 0)).shape == (3, )

    def test_module_level_field(self, engine):
        position = Geodetic(0.5, 5.32415, 60.39299)
        npt.assert_allclose(igrfflux.field(2019.3, position), engine.field(2019.3, position))

    def test_shared_between_threads(self, engine):
        """
        Queries from several threads give the same results as sequential queries
        """
        queries = [(1900.5 + 3.7 * i, Geodetic(i % 7, 10 * i - 180, 5 * i - 80)) for i in range(33)]
        expected = [engine.field(epoch, position) for epoch, position in queries]
        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(lambda q: engine.field(*q), queries))
        for result, B in zip(results, expected):
            npt.assert_array_equal(result, B)
