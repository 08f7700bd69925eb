"""Tests for the Bullington two-horizon reduction."""

from __future__ import annotations

import math

import pytest

from terrain_diffraction.contracts import DomainError, HorizonAngles, InputError
from terrain_diffraction.diffraction.bullington import (
    bullington_loss,
    find_horizon_angles,
    solve_knife_edge,
    terrain_to_bullington,
)
from terrain_diffraction.geometry.normalize import terrain_to_path_xy
from terrain_diffraction.rf.units import Distance, Frequency


def test_isosceles_triangle() -> None:
    """Equal 45 degree horizons over a 10 m baseline meet 5 m up at the middle."""
    edge = solve_knife_edge(HorizonAngles(math.pi / 4, math.pi / 4), 10.0)

    assert edge.height_m == pytest.approx(5.0)
    assert edge.distance_m == pytest.approx(5.0)
    assert edge.d2_m == pytest.approx(5.0)


def test_single_peak_reduces_to_itself() -> None:
    """One obstruction on a level path is its own equivalent knife edge."""
    edge = terrain_to_bullington(10.0, 10.0, Distance(100.0), [10.0, 10.0, 0.0, 25.0, 0.0, 10.0])

    assert edge.distance_m == pytest.approx(60.0)
    assert edge.height_m == pytest.approx(15.0)


def test_two_peaks_meet_between_them() -> None:
    """Separate horizons from each end produce an apex above both peaks."""
    terrain = [0.0, 20.0, 0.0, 0.0, 20.0, 0.0]
    edge = terrain_to_bullington(0.0, 0.0, Distance(50.0), terrain)

    # horizon rays through (10, 20) and (40, 20) cross at x = 25, y = 50
    assert edge.distance_m == pytest.approx(25.0)
    assert edge.height_m == pytest.approx(50.0)


def test_horizon_angles_are_chosen_independently() -> None:
    """Each endpoint keeps its own steepest ray."""
    profile = terrain_to_path_xy(0.0, 0.0, Distance(50.0), [0.0, 20.0, 0.0, 0.0, 4.0, 0.0])
    angles = find_horizon_angles(profile)

    assert angles.theta1_rad == pytest.approx(math.atan2(20.0, 10.0))
    assert angles.theta2_rad == pytest.approx(math.atan2(20.0, 40.0))


def test_clear_path_gives_edge_below_sightline() -> None:
    """Terrain entirely below the sightline yields a negative equivalent height."""
    edge = terrain_to_bullington(50.0, 50.0, Distance(100.0), [50.0, 40.0, 30.0, 35.0, 50.0])

    assert edge.height_m < 0.0
    assert 0.0 < edge.distance_m < 100.0


def test_endpoints_only_profile_is_rejected() -> None:
    """Without interior samples there are no horizon rays to intersect."""
    profile = terrain_to_path_xy(0.0, 0.0, Distance(10.0), [0.0, 0.0])

    with pytest.raises(InputError, match="interior"):
        find_horizon_angles(profile)


def test_parallel_rays_are_degenerate() -> None:
    """Terrain lying exactly on the sightline gives parallel rays and no apex."""
    with pytest.raises(DomainError, match="parallel"):
        terrain_to_bullington(0.0, 0.0, Distance(40.0), [0.0, 0.0, 0.0, 0.0, 0.0])


def test_angles_summing_past_pi_are_rejected() -> None:
    """Horizon angles must leave a positive third angle."""
    with pytest.raises(DomainError, match="triangle"):
        solve_knife_edge(HorizonAngles(math.pi / 2, math.pi / 2), 10.0)


def test_loss_for_obstructed_path() -> None:
    """An obstruction well into the first zone costs more than 6 dB."""
    terrain = [0.0, 0.0, 40.0, 0.0, 0.0]
    result = bullington_loss(30.0, 30.0, Distance(4000.0), Frequency.from_mhz(900.0), terrain)

    assert result.method == "bullington"
    assert result.knife_edge.height_m == pytest.approx(10.0)
    assert result.v > 0.0
    assert result.loss_db > 6.0
