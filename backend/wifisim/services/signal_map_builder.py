"""Dense-grid signal map builder for heat-map visualization."""

import logging
import math
import time
from typing import Optional, Sequence, Tuple

import numpy as np

from wifisim.core.config import settings
from wifisim.schemas.access_point import AccessPoint, WiFiBand
from wifisim.schemas.signal_map import MAX_SIGNAL_DBM, NO_SIGNAL_DBM, SignalMap
from wifisim.schemas.survey import FloorPlan, SurveySnapshot
from wifisim.schemas.wall import WallSegment
from wifisim.schemas.zone import EnvironmentZone
from wifisim.services.rf_propagation import received_signal_grid

logger = logging.getLogger(__name__)


def grid_dimensions(width: float, height: float, resolution: int) -> Tuple[int, int]:
    """Return (cols, rows) for a floor plan; the last row/column covers the far edge."""
    cols = math.ceil(width / resolution) + 1
    rows = math.ceil(height / resolution) + 1
    return cols, rows


class SignalMapBuilder:
    """
    Evaluates the link budget at every grid cell for every enabled band of
    every AP and keeps the strongest server per cell, per band.

    Cost is O(bands x APs x cells x (walls + zones)); run it through
    :class:`wifisim.services.recompute.RecomputeScheduler` or the Celery task,
    never on an interactive thread.
    """

    def __init__(self, resolution: Optional[int] = None):
        if resolution is None:
            resolution = settings.DEFAULT_GRID_RESOLUTION
        self.resolution = resolution
        if self.resolution <= 0:
            raise ValueError(f"Grid resolution must be positive, got {self.resolution}")

    def compute(
        self,
        floor_plan: FloorPlan,
        access_points: Sequence[AccessPoint],
        walls: Sequence[WallSegment] = (),
        zones: Sequence[EnvironmentZone] = (),
        resolution: Optional[int] = None
    ) -> SignalMap:
        """
        Build the signal map for the given floor plan.

        Args:
            floor_plan: Pixel dimensions and scale
            access_points: APs to simulate (disabled bands are skipped)
            walls: Occluding wall segments
            zones: Environment zones
            resolution: Overrides the builder's resolution for this call

        Returns:
            SignalMap with one grid per WiFiBand, clamped to [-120, 30] dBm
        """
        if resolution is None:
            resolution = self.resolution
        if resolution <= 0:
            raise ValueError(f"Grid resolution must be positive, got {resolution}")

        started = time.perf_counter()
        cols, rows = grid_dimensions(floor_plan.width, floor_plan.height, resolution)

        # Cell (row, col) is evaluated at pixel (col * res, row * res)
        cell_x, cell_y = np.meshgrid(
            np.arange(cols, dtype=np.float64) * resolution,
            np.arange(rows, dtype=np.float64) * resolution,
        )

        band_grids = {}
        for band in WiFiBand:
            grid = np.full((rows, cols), NO_SIGNAL_DBM, dtype=np.float64)

            for ap in access_points:
                band_config = ap.band_config(band)
                if band_config is None:
                    continue

                signal = received_signal_grid(
                    band_config.tx_power_dbm,
                    ap.antenna_gain_dbi,
                    band_config.frequency_mhz,
                    ap.position.x, ap.position.y,
                    cell_x, cell_y,
                    floor_plan.pixels_per_meter,
                    walls,
                    zones,
                )
                # Best server wins
                np.maximum(grid, signal, out=grid)

            band_grids[band] = np.clip(grid, NO_SIGNAL_DBM, MAX_SIGNAL_DBM).astype(np.float32)

        elapsed = time.perf_counter() - started
        logger.info(
            f"Signal map computed: {cols}x{rows} cells @ {resolution}px, "
            f"{len(access_points)} APs, {len(walls)} walls, {len(zones)} zones "
            f"in {elapsed:.3f}s"
        )

        return SignalMap(
            cols=cols,
            rows=rows,
            resolution=resolution,
            band_grids=band_grids,
        )


def compute_signal_map(
    survey: SurveySnapshot,
    resolution: Optional[int] = None
) -> SignalMap:
    """Build a signal map from a survey snapshot."""
    if survey.floor_plan is None:
        raise ValueError("A floor plan is required to compute a signal map")

    builder = SignalMapBuilder(resolution)
    return builder.compute(
        survey.floor_plan,
        survey.access_points,
        survey.walls,
        survey.zones,
    )
