"""
Test the coefficient file readers
"""
import io
import os
import logging
import pytest
import numpy as np
import numpy.testing as npt
from pathlib import Path

from igrfflux import (Igrf, ModelKind, MalformedCoefficientStream, default_table,
                      read_coefficients, read_shc)
from igrfflux.exceptions import ErrorKind

# Define paths to test directory and test data directory
TEST_DIR = Path(os.path.dirname(__file__))
TEST_DATA_DIR = TEST_DIR / "data"

SMALL = """\
# two definitive models and a secular variation
c/s  n  m    DGRF    DGRF     SV
g/h  n  m  2010.0  2015.0  2015-20
g    1  0  -29496.6  -29441.5  10.3
g    1  1   -1586.4   -1501.8  18.1
h    1  1    4944.3    4795.9  -26.6
g    2  0   -2396.1   -2445.9  -8.7
"""

SHC = """\
# a small .shc file
# with two header comment lines
1 2 2 2 1
2010.0 2015.0
1  0 -29496.6 -29441.5
1  1  -1586.4  -1501.8
1 -1   4944.3   4795.9
2  0  -2396.1  -2445.9
2  2   1668.6   1676.4
2 -2   -717.9   -734.8
"""


class TestReadCoefficients:
    """
    Test reader for the NOAA/IAGA layout
    """

    def test_igrf13_file(self):
        """
        The IGRF-13 coefficient file gives the built-in table
        """
        table = read_coefficients(TEST_DATA_DIR / "igrf13coeffs.txt")
        reference = default_table()
        npt.assert_array_equal(table.epochs, reference.epochs)
        for snapshot, expected in zip(table, reference):
            assert snapshot.kind is expected.kind
            npt.assert_array_equal(snapshot.coefficients, expected.coefficients)

    def test_filename_and_stream(self):
        filename = str(TEST_DATA_DIR / "igrf13coeffs.txt")
        with open(filename) as f:
            from_stream = read_coefficients(f)
        from_name = read_coefficients(filename)
        npt.assert_array_equal(from_stream.epochs, from_name.epochs)
        npt.assert_array_equal(from_stream[-1].coefficients, from_name[-1].coefficients)

    def test_small(self):
        table = read_coefficients(io.StringIO(SMALL))
        npt.assert_array_equal(table.epochs, [2010.0, 2015.0, 2020.0])
        assert [s.kind for s in table] == [ModelKind.DEFINITIVE, ModelKind.DEFINITIVE,
                                           ModelKind.SECULAR_VARIATION]
        assert table[1].get(1, 1, "h") == 4795.9
        assert table[2].get(2, 0) == -8.7
        # coefficients that are not in the file are zero
        assert table[0].get(13, 13, "h") == 0.0

    def test_list_of_lines(self):
        table = read_coefficients(SMALL.splitlines())
        assert len(table) == 3

    @pytest.mark.parametrize(
        "first, token, expected",
        [
            ["2015.0", "2015-20", 2020.0],
            ["2020.0", "2020-2025", 2025.0],
            ["1995.0", "1995-00", 2000.0],
            ["2020.0", "2020-5", 2025.0],
        ],
    )
    def test_epoch_range(self, first, token, expected):
        stream = io.StringIO(
            "c/s n m IGRF SV\n"
            "g/h n m {} {}\n"
            "g 1 0 -29404.8 5.7\n".format(first, token)
        )
        table = read_coefficients(stream)
        assert table[-1].epoch == expected

    def test_non_numeric_token(self, caplog):
        """
        Tokens that are not numbers are skipped with a warning
        """
        stream = io.StringIO(SMALL.replace("-29441.5  10.3", "-29441.5 n/a 10.3"))
        with caplog.at_level(logging.WARNING, logger="igrfflux"):
            table = read_coefficients(stream)
        assert table[2].get(1, 0) == 10.3
        assert "n/a" in caplog.text

    def test_dipole_engine(self):
        """
        A file with only g(1, 0) gives the field of an axial dipole
        """
        stream = io.StringIO(
            "c/s n m IGRF IGRF\n"
            "g/h n m 2000.0 2010.0\n"
            "g 1 0 -30000 -30000\n"
        )
        engine = Igrf.from_stream(stream)
        npt.assert_allclose(engine.field_geocentric(2005.0, 0, 0, 6371.2), [30000, 0, 0], atol=1e-9)
        # at the north pole the field points down, with twice the strength
        npt.assert_allclose(engine.field_geocentric(2005.0, 90, 0, 6371.2), [0, 0, 60000], atol=1e-9)

    @pytest.mark.parametrize(
        "text",
        [
            "g/h n m 2010.0\ng 1 0 1\n",
            "c/s n m DGRF DGRF\ng 1 0 1 2\n",
            "c/s n m DGRF DGRF\ng/h n m 2010.0\ng 1 0 1 2\n",
            "c/s n m DGRF DGRF\ng/h n m 2010.0 2015.0\ng 1 0 1\n",
            "c/s n m DGRF DGRF\ng/h n m 2010.0 2015.0\ng 14 0 1 2\n",
            "c/s n m DGRF DGRF\ng/h n m 2010.0 2015.0\ng 2 3 1 2\n",
            "c/s n m DGRF DGRF\ng/h n m 2010.0 2015.0\nh 2 0 1 2\n",
            "c/s n m DGRF DGRF\ng/h n m 2010.0 2015.0\ng one 0 1 2\n",
            "c/s n m DGRF DGRF\ng/h n m 2010.0 2015.0\n",
            "c/s n m DGRF DGRF\ng/h n m 2010.0 2010.0\ng 1 0 1 2\n",
            "c/s n m SV DGRF\ng/h n m 2010-15 2020.0\ng 1 0 1 2\n",
            "c/s n m DGRF SV\ng/h n m 2020.0 2020-2015\ng 1 0 1 2\n",
            "c/s n m XGRF\ng/h n m 2010.0\ng 1 0 1\n",
            "c/s n m DGRF\nc/s n m DGRF\n",
            "",
        ],
        ids=[
            "no-model-row",
            "no-epoch-row",
            "epoch-count",
            "value-count",
            "degree",
            "order",
            "h-order-zero",
            "bad-degree",
            "no-coefficients",
            "duplicate-epochs",
            "sv-not-last",
            "backwards-range",
            "unknown-model",
            "two-model-rows",
            "empty",
        ],
    )
    def test_malformed(self, text):
        with pytest.raises(MalformedCoefficientStream) as excinfo:
            read_coefficients(io.StringIO(text))
        assert excinfo.value.kind is ErrorKind.MALFORMED_STREAM
        assert excinfo.value.return_code == 6
        # the error is also a ValueError
        assert isinstance(excinfo.value, ValueError)

    def test_malformed_line_number(self):
        text = SMALL.replace("g    2  0", "g    2  3")
        with pytest.raises(MalformedCoefficientStream) as excinfo:
            read_coefficients(io.StringIO(text))
        assert excinfo.value.lineno == 7
        assert "line 7" in str(excinfo.value)

    def test_engine_from_file(self):
        engine = Igrf.from_file(TEST_DATA_DIR / "igrf13coeffs.txt")
        npt.assert_allclose(engine.field_geodetic(2017.25, 60.39299, 5.32415),
                            Igrf().field_geodetic(2017.25, 60.39299, 5.32415))


class TestReadSHC:
    """
    Test reader for the .shc layout
    """

    def test_small(self):
        table = read_shc(io.StringIO(SHC))
        npt.assert_array_equal(table.epochs, [2010.0, 2015.0])
        assert all(s.kind is ModelKind.DEFINITIVE for s in table)
        assert table[0].get(1, 1, "h") == 4944.3
        assert table[1].get(2, 2, "h") == -734.8
        assert table[1].get(2, 2, "g") == 1676.4
        assert table[0].get(3, 0) == 0.0

    def test_same_as_noaa_layout(self):
        shc = read_shc(io.StringIO(SHC))
        noaa = read_coefficients(io.StringIO(SMALL))
        for i in range(2):
            npt.assert_array_equal(shc[i].coefficients[:4], noaa[i].coefficients[:4])

    def test_file(self, tmp_path):
        fname = tmp_path / "small.shc"
        fname.write_text(SHC)
        engine = Igrf.from_shc(fname)
        assert engine.coverage == (2010.0, 2015.0)
        with open(fname) as f:
            npt.assert_array_equal(read_shc(f).epochs, engine.table.epochs)

    @pytest.mark.parametrize(
        "text",
        [
            "1 14 1 1 1\n2010.0\n1 0 1\n",
            "1 2 2 2 1\n2010.0\n1 0 1 2\n",
            "1 2 2 2 1\n2010.0 2015.0\n1 0 1\n",
            "1 2 2 2 1\n2010.0 2015.0\n0 0 1 2\n",
            "one 2 2 2 1\n2010.0 2015.0\n1 0 1 2\n",
            "1 2 2 2 1\n2010.0 2015.0\n",
            "# only comments\n",
        ],
        ids=["max-degree", "times", "values", "degree", "parameters", "no-coefficients", "empty"],
    )
    def test_malformed(self, text):
        with pytest.raises(MalformedCoefficientStream):
            read_shc(io.StringIO(text))
