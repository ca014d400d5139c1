"""Indoor link-budget model.

Received signal for one AP -> target path:

    RSSI = Pt + Gt - PL(d) - Lwalls + Mzones

with the log-distance path loss

    PL(d) = 20*log10(f_MHz) - 27.55 + 10*n*log10(d_m),  n = 3.5

n = 2.0 (free space) would keep every client at the top MCS regardless of
distance, which hides wall and zone effects; 3.5 is the residential indoor
exponent.

Targets may be a single point or numpy arrays of points; the grid builder and
the per-client association engine both go through
:func:`received_signal_grid`.
"""

import math
from typing import Sequence, Union

import numpy as np

from wifisim.schemas.wall import WallSegment
from wifisim.schemas.zone import EnvironmentZone
from wifisim.services.geometry import (
    segments_intersect_strict,
    segment_intersects_rect_inclusive,
)

PATH_LOSS_EXPONENT = 3.5
FSPL_CONSTANT_DB = -27.55  # 20*log10(4*pi/c) with f in MHz and d in m

MIN_DISTANCE_M = 0.1  # avoids log10(0) at the AP position
MAX_DISTANCE_M = 5000.0

Coordinate = Union[float, np.ndarray]


def calculate_distance_m(
    ap_x: float, ap_y: float,
    target_x: Coordinate, target_y: Coordinate,
    pixels_per_meter: float
):
    """Euclidean pixel distance converted to meters and clamped."""
    dx = np.subtract(target_x, ap_x)
    dy = np.subtract(target_y, ap_y)
    distance_m = np.sqrt(dx * dx + dy * dy) / pixels_per_meter
    return np.clip(distance_m, MIN_DISTANCE_M, MAX_DISTANCE_M)


def calculate_path_loss(distance_m, frequency_mhz: float):
    """
    Indoor log-distance path loss in dB.

    Args:
        distance_m: Distance in meters (already clamped)
        frequency_mhz: Carrier frequency in MHz

    Returns:
        Path loss in dB (same shape as distance_m)
    """
    frequency_term = 20.0 * math.log10(frequency_mhz) + FSPL_CONSTANT_DB
    return frequency_term + 10.0 * PATH_LOSS_EXPONENT * np.log10(distance_m)


def calculate_wall_loss(
    ap_x: float, ap_y: float,
    target_x: Coordinate, target_y: Coordinate,
    walls: Sequence[WallSegment],
    frequency_mhz: float
):
    """Sum of wall attenuation for every wall the AP -> target ray crosses."""
    total_loss_db = np.zeros(np.broadcast(target_x, target_y).shape)
    ap = (ap_x, ap_y)
    target = (target_x, target_y)

    for wall in walls:
        crossed = segments_intersect_strict(
            ap, target,
            (wall.start.x, wall.start.y),
            (wall.end.x, wall.end.y),
        )
        if np.any(crossed):
            total_loss_db = total_loss_db + np.where(
                crossed, wall.attenuation_for_frequency(frequency_mhz), 0.0
            )

    return total_loss_db


def calculate_zone_modifier(
    ap_x: float, ap_y: float,
    target_x: Coordinate, target_y: Coordinate,
    zones: Sequence[EnvironmentZone],
    frequency_mhz: float
):
    """Net dBm modifier of every zone the AP -> target ray starts in, ends in or crosses."""
    total_modifier_db = np.zeros(np.broadcast(target_x, target_y).shape)
    ap = (ap_x, ap_y)
    target = (target_x, target_y)

    for zone in zones:
        affected = segment_intersects_rect_inclusive(ap, target, zone.rect)
        if np.any(affected):
            total_modifier_db = total_modifier_db + np.where(
                affected, zone.type.modifier_for_frequency(frequency_mhz), 0.0
            )

    return total_modifier_db


def received_signal_grid(
    tx_power_dbm: float,
    antenna_gain_dbi: float,
    frequency_mhz: float,
    ap_x: float, ap_y: float,
    target_x: Coordinate, target_y: Coordinate,
    pixels_per_meter: float,
    walls: Sequence[WallSegment] = (),
    zones: Sequence[EnvironmentZone] = ()
) -> np.ndarray:
    """
    Received signal strength (dBm) at one or many target positions.

    Args:
        tx_power_dbm: Transmit power of the band
        antenna_gain_dbi: AP antenna gain
        frequency_mhz: Band center frequency
        ap_x, ap_y: AP position in pixels
        target_x, target_y: Target position(s) in pixels, scalars or arrays
        pixels_per_meter: Floor-plan scale
        walls: Wall segments that may occlude the path
        zones: Environment zones that may modify the path

    Returns:
        Array of RSSI values broadcast over the target coordinates
    """
    distance_m = calculate_distance_m(ap_x, ap_y, target_x, target_y, pixels_per_meter)
    path_loss_db = calculate_path_loss(distance_m, frequency_mhz)
    wall_loss_db = calculate_wall_loss(ap_x, ap_y, target_x, target_y, walls, frequency_mhz)
    zone_modifier_db = calculate_zone_modifier(
        ap_x, ap_y, target_x, target_y, zones, frequency_mhz
    )

    return (
        tx_power_dbm +
        antenna_gain_dbi -
        path_loss_db -
        wall_loss_db +
        zone_modifier_db
    )


def received_signal_dbm(
    tx_power_dbm: float,
    antenna_gain_dbi: float,
    frequency_mhz: float,
    ap_x: float, ap_y: float,
    target_x: float, target_y: float,
    pixels_per_meter: float,
    walls: Sequence[WallSegment] = (),
    zones: Sequence[EnvironmentZone] = ()
) -> float:
    """Received signal strength (dBm) at a single target position."""
    return float(received_signal_grid(
        tx_power_dbm, antenna_gain_dbi, frequency_mhz,
        ap_x, ap_y, target_x, target_y,
        pixels_per_meter, walls, zones
    ))
