"""Signal map value object produced by the grid simulation."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

import numpy as np

from wifisim.schemas.access_point import WiFiBand

# Lowest stored value; anything at or below this is "no signal".
NO_SIGNAL_DBM = -120.0
MAX_SIGNAL_DBM = 30.0


@dataclass(frozen=True)
class SignalMap:
    """Best received signal (dBm) on a regular grid, one grid per band.

    Each grid is a read-only float32 array of shape ``(rows, cols)`` in
    row-major order. Cell ``(row, col)`` holds the value computed at floor-plan
    pixel ``(col * resolution, row * resolution)``.

    Read values through :meth:`signal_at`, :meth:`best_signal_at` and :meth:`grid` only.
    """
    cols: int
    rows: int
    resolution: int  # floor-plan pixels per grid cell on each axis
    band_grids: Mapping[WiFiBand, np.ndarray] = field(repr=False)

    def __post_init__(self):
        grids = {}
        for band, grid in self.band_grids.items():
            frozen = np.array(grid, dtype=np.float32, copy=True, order="C")
            if frozen.shape != (self.rows, self.cols):
                raise ValueError(
                    f"Grid for {band.value} has shape {frozen.shape}, "
                    f"expected {(self.rows, self.cols)}"
                )
            frozen.flags.writeable = False
            grids[band] = frozen
        object.__setattr__(self, "band_grids", MappingProxyType(grids))

    def _cell(self, x: float, y: float):
        col = min(max(int(np.floor(x / self.resolution)), 0), self.cols - 1)
        row = min(max(int(np.floor(y / self.resolution)), 0), self.rows - 1)
        return row, col

    def signal_at(self, band: WiFiBand, x: float, y: float) -> float:
        """Signal strength for ``band`` at floor-plan pixel ``(x, y)``."""
        grid: Optional[np.ndarray] = self.band_grids.get(band)
        if grid is None:
            return NO_SIGNAL_DBM
        row, col = self._cell(x, y)
        return float(grid[row, col])

    def best_signal_at(self, x: float, y: float) -> float:
        """Strongest signal across all bands at floor-plan pixel ``(x, y)``."""
        best = NO_SIGNAL_DBM
        for band in WiFiBand:
            best = max(best, self.signal_at(band, x, y))
        return best

    def grid(self, band: Optional[WiFiBand] = None) -> np.ndarray:
        """Read-only ``(rows, cols)`` grid for ``band``, or the best across bands for None."""
        if band is not None:
            grid = self.band_grids.get(band)
            if grid is not None:
                return grid
        best = np.full((self.rows, self.cols), NO_SIGNAL_DBM, dtype=np.float32)
        if band is None:
            for grid in self.band_grids.values():
                np.maximum(best, grid, out=best)
        best.flags.writeable = False
        return best
