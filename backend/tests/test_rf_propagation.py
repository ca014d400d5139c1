"""Tests for the indoor link-budget model."""

import math

import numpy as np
import pytest

from wifisim.schemas.access_point import Point, WiFiBand
from wifisim.schemas.wall import WallMaterial, WallSegment
from wifisim.schemas.zone import EnvironmentZone, ZoneType
from wifisim.services.rf_propagation import (
    MAX_DISTANCE_M,
    MIN_DISTANCE_M,
    calculate_distance_m,
    calculate_path_loss,
    calculate_wall_loss,
    received_signal_dbm,
    received_signal_grid,
)

FREQ_24 = WiFiBand.GHZ_24.default_frequency_mhz
FREQ_5 = WiFiBand.GHZ_5.default_frequency_mhz
FREQ_6 = WiFiBand.GHZ_6.default_frequency_mhz


def rssi(target_x, target_y=0.0, walls=(), zones=(), frequency=FREQ_24):
    return received_signal_dbm(20.0, 2.0, frequency, 0.0, 0.0, target_x, target_y, 100.0, walls, zones)


def test_reference_scenario():
    # 10 m at 2437 MHz: PL = 20*log10(2437) - 27.55 + 35 = 75.19 dB
    assert rssi(1000.0) == pytest.approx(-53.19, abs=0.01)


def test_path_loss_at_one_meter_is_frequency_term():
    expected = 20 * math.log10(FREQ_5) - 27.55
    assert calculate_path_loss(1.0, FREQ_5) == pytest.approx(expected)


def test_signal_decreases_with_distance():
    values = [rssi(x) for x in (50.0, 200.0, 500.0, 1000.0, 3000.0)]
    assert all(near > far for near, far in zip(values, values[1:]))


def test_higher_band_attenuates_more_in_free_space():
    assert rssi(1000.0, frequency=FREQ_24) > rssi(1000.0, frequency=FREQ_5)


def test_distance_is_clamped():
    assert calculate_distance_m(0, 0, 0, 0, 100.0) == pytest.approx(MIN_DISTANCE_M)
    assert calculate_distance_m(0, 0, 1e12, 0, 100.0) == pytest.approx(MAX_DISTANCE_M)


def test_signal_at_ap_position_is_finite():
    assert math.isfinite(rssi(0.0))


class TestWalls:
    def wall(self, x, material=WallMaterial.DRYWALL, **kwargs):
        return WallSegment(
            start=Point(x=x, y=-100), end=Point(x=x, y=100), material=material, **kwargs
        )

    def test_single_wall_subtracts_material_loss(self):
        drywall = self.wall(500)
        assert rssi(1000.0) - rssi(1000.0, walls=[drywall]) == pytest.approx(3.0)

    def test_wall_losses_add(self):
        walls = [self.wall(500), self.wall(700, WallMaterial.BRICK)]
        assert rssi(1000.0) - rssi(1000.0, walls=walls) == pytest.approx(3.0 + 11.0)

    def test_wall_loss_is_per_band(self):
        walls = [self.wall(500)]
        assert rssi(1000.0, frequency=FREQ_5) - rssi(1000.0, walls=walls, frequency=FREQ_5) == pytest.approx(5.0)
        assert rssi(1000.0, frequency=FREQ_6) - rssi(1000.0, walls=walls, frequency=FREQ_6) == pytest.approx(7.0)

    def test_wall_behind_target_is_ignored(self):
        assert rssi(400.0, walls=[self.wall(500)]) == pytest.approx(rssi(400.0))

    def test_target_on_wall_is_not_occluded(self):
        assert rssi(500.0, walls=[self.wall(500)]) == pytest.approx(rssi(500.0))

    def test_inner_lining_adds_to_outer_material(self):
        lined = self.wall(500, WallMaterial.BRICK, inner_material=WallMaterial.DRYWALL)
        assert rssi(1000.0) - rssi(1000.0, walls=[lined]) == pytest.approx(14.0)

    def test_custom_material_uses_user_loss(self):
        custom = self.wall(500, WallMaterial.CUSTOM, custom_loss_24ghz_db=9.5)
        assert rssi(1000.0) - rssi(1000.0, walls=[custom]) == pytest.approx(9.5)

    def test_wall_loss_over_grid(self):
        xs = np.array([400.0, 1000.0])
        ys = np.zeros(2)
        loss = calculate_wall_loss(0.0, 0.0, xs, ys, [self.wall(500)], FREQ_24)
        assert loss.tolist() == [0.0, 3.0]


class TestZones:
    def zone(self, zone_type, x1=800, y1=-100, x2=1200, y2=100):
        return EnvironmentZone(
            type=zone_type, corner1=Point(x=x1, y=y1), corner2=Point(x=x2, y=y2)
        )

    def test_outdoor_zone_boosts(self):
        zones = [self.zone(ZoneType.OUTDOOR)]
        assert rssi(1000.0, zones=zones) - rssi(1000.0) == pytest.approx(4.0)

    def test_kitchen_stacks_band_extra(self):
        zones = [self.zone(ZoneType.KITCHEN)]
        assert rssi(1000.0, zones=zones) - rssi(1000.0) == pytest.approx(-7.0)
        assert rssi(1000.0, zones=zones, frequency=FREQ_6) - rssi(1000.0, frequency=FREQ_6) == pytest.approx(-2.0)

    def test_zone_with_swapped_corners(self):
        zones = [self.zone(ZoneType.OUTDOOR, 1200, 100, 800, -100)]
        assert rssi(1000.0, zones=zones) - rssi(1000.0) == pytest.approx(4.0)

    def test_zone_crossed_by_path_applies(self):
        zones = [self.zone(ZoneType.STEEL_FRAME, 400, -50, 600, 50)]
        assert rssi(1000.0, zones=zones) - rssi(1000.0) == pytest.approx(-8.0)

    def test_zone_off_path_is_ignored(self):
        zones = [self.zone(ZoneType.STEEL_FRAME, 400, 200, 600, 300)]
        assert rssi(1000.0, zones=zones) == pytest.approx(rssi(1000.0))


def test_grid_and_point_results_agree():
    walls = [WallSegment(start=Point(x=500, y=-100), end=Point(x=500, y=100))]
    xs = np.array([[250.0, 1000.0]])
    ys = np.array([[0.0, 0.0]])

    grid = received_signal_grid(20.0, 2.0, FREQ_24, 0.0, 0.0, xs, ys, 100.0, walls)

    assert grid.shape == (1, 2)
    assert grid[0, 0] == pytest.approx(rssi(250.0, walls=walls))
    assert grid[0, 1] == pytest.approx(rssi(1000.0, walls=walls))
