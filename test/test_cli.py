"""
Test the command line interface
"""
import os
import logging
import pytest
from pathlib import Path

from igrfflux.cli import build_parser, main

# Define paths to test directory and test data directory
TEST_DIR = Path(os.path.dirname(__file__))
TEST_DATA_DIR = TEST_DIR / "data"

BOULDER = ["2020-01-01T00:00:00Z", "40", "-105", "1655"]  # altitude in metres


@pytest.fixture(autouse=True)
def reset_logging():
    """
    main() configures the igrfflux logger, undo that after each test
    """
    yield
    logger = logging.getLogger("igrfflux")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def read_output(text):
    """
    Dictionary with the values of the 'Name: value unit' lines of the output
    """
    values = {}
    for line in text.splitlines():
        name, _, rest = line.partition(":")
        if name in ("North", "East", "Down", "Total", "Horizontal", "Inclination", "Declination"):
            values[name] = float(rest.split()[0])
    return values


def test_parser():
    args = build_parser().parse_args(BOULDER + ["--unit", "gauss"])
    assert args.date == 2020.0
    assert (args.latitude, args.longitude, args.altitude) == (40.0, -105.0, 1655.0)
    assert args.unit == "gauss"
    assert args.coefficients is None
    assert not args.verbose


def test_boulder(capsys):
    assert main(BOULDER + ["--unit", "nanotesla"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Position: latitude 40.0 deg, longitude -105.0 deg, altitude 1655.0 m, epoch 2020.0000")
    assert "Magnetic Flux Density: 20594 2926.557 47514.89 [nT]" in out
    values = read_output(out)
    assert values["North"] == pytest.approx(20594.0, abs=0.01)
    assert values["East"] == pytest.approx(2926.557, abs=0.01)
    assert values["Down"] == pytest.approx(47514.89, abs=0.01)
    assert values["Total"] == pytest.approx(51868.51, abs=0.01)
    assert values["Horizontal"] == pytest.approx(20800.91, abs=0.01)
    assert values["Inclination"] == pytest.approx(66.3573, abs=1e-4)
    assert values["Declination"] == pytest.approx(8.0880, abs=1e-4)


def test_default_unit(capsys):
    assert main(BOULDER) == 0
    out = capsys.readouterr().out
    assert "[T]" in out
    assert read_output(out)["North"] == pytest.approx(2.0594e-5, rel=1e-4)


def test_coefficient_file(capsys):
    assert main(BOULDER + ["--unit", "microtesla"]) == 0
    builtin = read_output(capsys.readouterr().out)
    coefficients = str(TEST_DATA_DIR / "igrf13coeffs.txt")
    assert main(BOULDER + ["--unit", "microtesla", "--coefficients", coefficients]) == 0
    assert read_output(capsys.readouterr().out) == builtin


def test_outside_coverage(capsys):
    assert main(["1800-01-01", "40", "-105", "0"]) == 4
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "outside the coefficient coverage" in captured.err


def test_malformed_coefficients(tmp_path, capsys):
    fname = tmp_path / "broken.txt"
    fname.write_text("c/s n m IGRF\ng 1 0 -29404.8\n")
    assert main(BOULDER + ["--coefficients", str(fname)]) == 6
    assert "line 2" in capsys.readouterr().err


def test_missing_coefficients(tmp_path, capsys):
    assert main(BOULDER + ["--coefficients", str(tmp_path / "missing.txt")]) == 1
    assert "could not read coefficients" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv",
    [
        ["not-a-date", "40", "-105", "0"],
        ["2020-01-01", "north", "-105", "0"],
        BOULDER + ["--unit", "furlong"],
        BOULDER[:3],
    ],
    ids=["date", "latitude", "unit", "missing-altitude"],
)
def test_bad_arguments(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2


def test_verbose(capsys):
    assert main(BOULDER + ["--verbose"]) == 0
    assert "DEBUG" in capsys.readouterr().err


def test_altitude_in_metres(capsys):
    """
    The altitude argument is in metres, 400 km is given as 400000
    """
    assert main(["2020-01-01", "40", "-105", "400000", "--unit", "nanotesla"]) == 0
    high = read_output(capsys.readouterr().out)
    assert main(BOULDER + ["--unit", "nanotesla"]) == 0
    ground = read_output(capsys.readouterr().out)
    assert high["Total"] < 0.9 * ground["Total"]
    assert ground["North"] == pytest.approx(20594.0, abs=1)
