"""
Test units, derived components, inclination and declination
"""
import pytest
import numpy as np
import numpy.testing as npt

from igrfflux import (GeoMagFlux, MagFluxComponents, MagFluxUnit, Igrf, Geodetic,
                      get_inclination_declination)

BOULDER = Geodetic(1.655, -105, 40)
BOULDER_2020 = (20594.0034, 2926.5571, 47514.8927)  # nT, north/east/down


@pytest.mark.parametrize("degrees", (True, False))
@pytest.mark.parametrize(
    "geomagnetic_field, inclination, declination",
    [
        [(0, 0, 1), 90, 0],
        [(0, 0, -1), -90, 0],
        [(1, 1, 0), 0, 45],
        [(1, -1, 0), 0, -45],
        [(1, 1, np.sqrt(2)), 45, 45],
        [(1, 1, -np.sqrt(2)), -45, 45],
        [(16_308.1, -2_938.0, 52_741.9), 72.5582, -10.2126],
    ],
)
def test_inclination_declination(degrees, geomagnetic_field, inclination, declination):
    """
    Test inclination and declination with known values.

    The last values were obtained by one of the online calculators.
    """
    if not degrees:
        inclination = np.radians(inclination)
        declination = np.radians(declination)
    inc, dec = get_inclination_declination(*geomagnetic_field, degrees=degrees)
    npt.assert_allclose([inc, dec], [inclination, declination], rtol=5e-5)


def test_inclination_declination_arrays():
    north, east, down = np.array([[1, 1], [0, 0]]), np.array([[1, -1], [0, 0]]), np.array([[0, 0], [1, -1]])
    inc, dec = get_inclination_declination(north, east, down)
    npt.assert_allclose(inc, [[0, 0], [90, -90]])
    npt.assert_allclose(dec, [[45, -45], [0, 0]])


class TestUnits:
    @pytest.mark.parametrize(
        "unit, scale, symbol",
        [
            [MagFluxUnit.NANOTESLA, 1.0, "nT"],
            [MagFluxUnit.MICROTESLA, 1e-3, "uT"],
            [MagFluxUnit.TESLA, 1e-9, "T"],
            [MagFluxUnit.GAUSS, 1e-5, "G"],
            [MagFluxUnit.SI, 1e-9, "T"],
            [MagFluxUnit.CGS, 1e-5, "G"],
            [MagFluxUnit.MKS, 1e-9, "T"],
            [MagFluxUnit.MKSA, 1e-9, "T"],
        ],
    )
    def test_scale(self, unit, scale, symbol):
        assert unit.scale == scale
        assert unit.symbol == symbol

    def test_from_string(self):
        assert MagFluxUnit("microtesla") is MagFluxUnit.MICROTESLA
        with pytest.raises(ValueError):
            MagFluxUnit("furlong")


class TestGeoMagFlux:
    @pytest.fixture(scope="class")
    def flux(self):
        return GeoMagFlux(Igrf(), unit=MagFluxUnit.NANOTESLA)

    def test_default_unit(self):
        flux = GeoMagFlux()
        assert flux.unit is MagFluxUnit.SI
        assert flux.symbol == "T"
        npt.assert_allclose(flux.field(2020.0, BOULDER), np.array(BOULDER_2020) * 1e-9, rtol=1e-6)

    @pytest.mark.parametrize("unit, scale", [["microtesla", 1e-3], ["gauss", 1e-5], [MagFluxUnit.TESLA, 1e-9]])
    def test_units(self, unit, scale):
        flux = GeoMagFlux(unit=unit)
        npt.assert_allclose(flux.field(2020.0, BOULDER), np.array(BOULDER_2020) * scale, rtol=1e-6)

    def test_change_unit(self):
        flux = GeoMagFlux(unit="nanotesla")
        flux.unit = "microtesla"
        assert flux.symbol == "uT"
        with pytest.raises(ValueError):
            flux.unit = "furlong"

    def test_components(self, flux):
        components = flux.components(2020.0, BOULDER)
        assert isinstance(components, MagFluxComponents)
        npt.assert_allclose(components[:3], BOULDER_2020, atol=1e-2)
        npt.assert_allclose(components.horizontal, 20800.9065, atol=1e-2)
        npt.assert_allclose(components.total, 51868.5140, atol=1e-2)
        npt.assert_allclose(components.inclination, 66.35732, atol=1e-4)
        npt.assert_allclose(components.declination, 8.08799, atol=1e-4)

    def test_components_radians(self, flux):
        components = flux.components(2020.0, BOULDER, degrees=False)
        npt.assert_allclose(components.inclination, np.radians(66.35732), atol=1e-6)

    def test_components_grid(self, flux):
        position = Geodetic(0, np.array([0, 90, 180]), np.array([[-45], [45]]))
        components = flux.components(2020.0, position)
        assert components.total.shape == components.declination.shape == (2, 3)
        npt.assert_allclose(components.total**2,
                            components.horizontal**2 + components.down**2)

    def test_from_vector(self):
        components = MagFluxComponents.from_vector([3., 4., 12.])
        assert components.total == 13.
        assert components.horizontal == 5.
        npt.assert_allclose(components.declination, np.degrees(np.arctan2(4., 3.)))
