"""Tests for RF units, Fresnel primitives and path loss helpers."""

from __future__ import annotations

import pytest

from terrain_diffraction.contracts import DomainError, InputError
from terrain_diffraction.rf.fresnel import (
    fresnel_first_zone_max,
    fresnel_kirchhoff_loss_approx,
    fresnel_kirchhoff_parameter,
    fresnel_zone_radius,
)
from terrain_diffraction.rf.path_loss import (
    EARTH_RADIUS_M,
    foliage_loss,
    free_space_attenuation,
    free_space_path_loss,
    great_circle_distance,
    line_of_sight_distance,
)
from terrain_diffraction.rf.units import (
    Attenuation,
    Distance,
    Frequency,
    dbm_to_milliwatt,
    frequency_to_wavelength,
    milliwatt_to_dbm,
    wavelength_to_frequency,
)

TOL = 0.002


def test_dbm_milliwatt_conversions() -> None:
    """Power decibels use the 10 log10 scale."""
    assert dbm_to_milliwatt(0.0) == pytest.approx(1.0, abs=TOL)
    assert dbm_to_milliwatt(10.0) == pytest.approx(10.0, abs=TOL)
    assert dbm_to_milliwatt(-20.0) == pytest.approx(0.01, abs=TOL)
    assert milliwatt_to_dbm(1.0) == pytest.approx(0.0, abs=TOL)
    assert milliwatt_to_dbm(0.01) == pytest.approx(-20.0, abs=TOL)


def test_attenuation_ratios() -> None:
    """Field ratios use 20 log10 and power ratios 10 log10."""
    assert Attenuation(20.0).field_ratio() == pytest.approx(10.0)
    assert Attenuation(20.0).power_ratio() == pytest.approx(100.0)
    assert Attenuation.from_field_ratio(10.0).db == pytest.approx(20.0)
    assert (Attenuation(3.0) + Attenuation(4.5)).db == pytest.approx(7.5)


def test_frequency_wavelength_round_trip() -> None:
    """Wavelength and frequency convert through the speed of light."""
    wavelength = frequency_to_wavelength(Frequency.from_mhz(433.0))

    assert wavelength.meters == pytest.approx(0.6924, abs=1e-3)
    assert wavelength_to_frequency(wavelength).mhz == pytest.approx(433.0)


def test_units_do_not_coerce() -> None:
    """Passing a distance where a frequency is expected fails loudly."""
    with pytest.raises(TypeError, match="Frequency"):
        frequency_to_wavelength(Distance(10.0))  # type: ignore[arg-type]
    with pytest.raises(InputError):
        Frequency(0.0)
    with pytest.raises(InputError):
        Distance(-1.0)


@pytest.mark.parametrize(
    ("freq", "meters", "expected_db"),
    [
        (Frequency.from_ghz(2.4), 1e0, 40.05),
        (Frequency.from_ghz(2.4), 1e3, 100.05),
        (Frequency.from_ghz(2.4), 1e6, 160.05),
        (Frequency.from_mhz(433.0), 1e3, 85.178),
        (Frequency.from_mhz(433.0), 1e6, 145.178),
    ],
)
def test_free_space_path_loss(freq: Frequency, meters: float, expected_db: float) -> None:
    """Free-space loss matches precalculated reference values."""
    assert free_space_path_loss(freq, Distance(meters)).db == pytest.approx(expected_db, abs=0.01)


def test_free_space_attenuation_is_linear_form() -> None:
    """The linear loss is the power ratio of the decibel loss."""
    freq, dist = Frequency.from_ghz(2.4), Distance(1e3)

    assert free_space_attenuation(freq, dist) == pytest.approx(free_space_path_loss(freq, dist).power_ratio())


def test_great_circle_distance() -> None:
    """Auckland to Wellington is roughly 493 km."""
    d = great_circle_distance(-36.8485, 174.7633, -41.2865, 174.7762, EARTH_RADIUS_M)

    assert d.meters == pytest.approx(493.4e3, abs=1e3)


def test_line_of_sight_distance_includes_altitude() -> None:
    """Altitude difference lengthens the path."""
    ground = great_circle_distance(0.0, 0.0, 0.0, 0.01, EARTH_RADIUS_M + 500.0)
    los = line_of_sight_distance(0.0, 0.0, 0.0, 0.0, 0.01, 1000.0)

    assert los.meters > ground.meters
    assert los.meters == pytest.approx((ground.meters**2 + 1000.0**2) ** 0.5)


def test_fresnel_first_zone_max() -> None:
    """Reference first zone radii at 2.4 GHz."""
    assert fresnel_first_zone_max(Frequency.from_ghz(2.4), Distance(10e3)) == pytest.approx(17.6718, abs=TOL)
    assert fresnel_first_zone_max(Frequency.from_ghz(2.4), Distance(100e3)) == pytest.approx(55.883, abs=TOL)


def test_fresnel_zone_radius_peaks_at_midpoint() -> None:
    """The zone radius at the midpoint equals the first-zone maximum."""
    freq = Frequency.from_ghz(2.4)
    mid = fresnel_zone_radius(Distance(5e3), Distance(5e3), freq)

    assert mid == pytest.approx(fresnel_first_zone_max(freq, Distance(10e3)))
    assert fresnel_zone_radius(Distance(1e3), Distance(9e3), freq) < mid
    assert fresnel_zone_radius(Distance(5e3), Distance(5e3), freq, order=2) == pytest.approx(mid * 2**0.5)


def test_fresnel_zone_radius_requires_distance_much_greater_than_wavelength() -> None:
    """Distances within ten wavelengths are outside the approximation."""
    with pytest.raises(DomainError, match="distances >> wavelength"):
        fresnel_zone_radius(Distance(1.0), Distance(100.0), Frequency.from_mhz(433.0))


def test_fresnel_kirchhoff_parameter() -> None:
    """Reference diffraction parameter for a slightly cleared path."""
    v = fresnel_kirchhoff_parameter(Frequency.from_mhz(900.0), Distance.from_km(8.0), Distance.from_km(12.0), -0.334)

    assert v == pytest.approx(-0.012, abs=0.0002)


def test_fresnel_kirchhoff_loss_approx() -> None:
    """Reference loss near grazing incidence."""
    assert fresnel_kirchhoff_loss_approx(-0.012).db == pytest.approx(5.93, abs=TOL * 5)


def test_fresnel_kirchhoff_loss_rejects_low_parameter() -> None:
    """The approximation is undefined below v = -0.7."""
    with pytest.raises(DomainError, match="below the approximation range"):
        fresnel_kirchhoff_loss_approx(-0.8)


def test_foliage_loss_bands() -> None:
    """Weissberger switches formula at 14 m of foliage."""
    freq = Frequency.from_ghz(1.0)

    assert foliage_loss(freq, Distance(10.0)).db == pytest.approx(4.5)
    assert foliage_loss(freq, Distance(100.0)).db == pytest.approx(1.33 * 100.0**0.588)
    assert foliage_loss(freq, Distance(0.0)).db == 0.0


def test_foliage_loss_range_checks() -> None:
    """Frequency and depth must be inside the model's validity range."""
    with pytest.raises(DomainError, match="Weissberger"):
        foliage_loss(Frequency.from_mhz(100.0), Distance(10.0))
    with pytest.raises(DomainError, match="Weissberger"):
        foliage_loss(Frequency.from_ghz(1.0), Distance(500.0))
