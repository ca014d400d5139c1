"""Heatmap visualization and coverage statistics for signal maps."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import LinearSegmentedColormap
from typing import Dict, Optional, List, Tuple
import os

from wifisim.core.config import settings
from wifisim.schemas.access_point import WiFiBand
from wifisim.schemas.signal_map import NO_SIGNAL_DBM, SignalMap


# Red (weak) -> Orange -> Yellow -> Light green -> Green (strong)
SIGNAL_COLORMAP = LinearSegmentedColormap.from_list(
    'signal_strength',
    [
        (0.898, 0.224, 0.208),  # -90 dBm
        (1.0, 0.439, 0.263),    # -80 dBm
        (1.0, 0.933, 0.345),    # -70 dBm
        (0.612, 0.800, 0.396),  # -60 dBm
        (0.180, 0.490, 0.196),  # -50 dBm and above
    ]
)

# Lower bound (dBm) of each coverage class, strongest first
COVERAGE_CLASSES: List[Tuple[str, float]] = [
    ("excellent", -50.0),
    ("good", -60.0),
    ("fair", -70.0),
    ("weak", -80.0),
]


def sample_signal_grid(signal_map: SignalMap, band: Optional[WiFiBand] = None) -> np.ndarray:
    """
    Read every cell of a signal map into a (rows, cols) array.

    Args:
        signal_map: Map to sample
        band: Band to read, or None for the best signal across bands

    Returns:
        Read-only float32 array of dBm values
    """
    return signal_map.grid(band)


def generate_heatmap_image(
    signal_map: SignalMap,
    output_path: str,
    band: Optional[WiFiBand] = None,
    background_image: Optional[str] = None,
    ap_positions: Optional[List[Tuple[float, float]]] = None,
    vmin: Optional[float] = None,
    vmax: Optional[float] = None,
    alpha: float = 0.7,
    dpi: int = 150
) -> str:
    """
    Generate a heatmap visualization of signal strength.

    Args:
        signal_map: Simulated signal map
        output_path: Where to save the image
        band: Band to render, or None for best-of-all-bands
        background_image: Optional path to floor plan for overlay
        ap_positions: Optional list of AP pixel positions to mark
        vmin: Minimum signal for colormap (dBm); weaker cells are transparent
        vmax: Maximum signal for colormap (dBm)
        alpha: Heatmap transparency (0-1)
        dpi: Output image DPI

    Returns:
        Path to generated image
    """
    vmin = settings.HEATMAP_MIN_DBM if vmin is None else vmin
    vmax = settings.HEATMAP_MAX_DBM if vmax is None else vmax

    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    grid = sample_signal_grid(signal_map, band)
    masked = np.ma.masked_less_equal(grid, vmin)

    # Extent in floor-plan pixels; cell centers sit on multiples of resolution
    res = signal_map.resolution
    width_px = (signal_map.cols - 1) * res
    height_px = (signal_map.rows - 1) * res
    extent = [-res / 2, width_px + res / 2, height_px + res / 2, -res / 2]

    fig_width = signal_map.cols / 100.0 * 4
    fig_height = signal_map.rows / 100.0 * 4
    fig, ax = plt.subplots(figsize=(max(8, fig_width), max(6, fig_height)))

    if background_image and os.path.exists(background_image):
        bg_img = plt.imread(background_image)
        ax.imshow(bg_img, extent=[0, width_px, height_px, 0], alpha=0.4)

    im = ax.imshow(
        masked,
        cmap=SIGNAL_COLORMAP,
        aspect='auto',
        vmin=vmin,
        vmax=vmax,
        alpha=alpha,
        extent=extent,
        interpolation='bilinear'
    )

    cbar = plt.colorbar(im, ax=ax, shrink=0.8, pad=0.02)
    cbar.set_label('Signal Strength (dBm)', rotation=270, labelpad=15)

    if ap_positions:
        for i, (ax_px, ay_px) in enumerate(ap_positions):
            ax.plot(ax_px, ay_px, 'b^', markersize=15, markeredgecolor='white', markeredgewidth=2)
            ax.annotate(
                f'AP{i+1}',
                (ax_px, ay_px),
                textcoords="offset points",
                xytext=(0, 10),
                ha='center',
                fontsize=10,
                fontweight='bold',
                color='blue'
            )

    ax.set_xlim(extent[0], extent[1])
    ax.set_ylim(extent[2], extent[3])  # Flip Y axis
    title_band = band.label if band is not None else "all bands"
    ax.set_title(f'WiFi Signal Coverage ({title_band})')
    ax.set_xticks([])
    ax.set_yticks([])

    plt.tight_layout()
    plt.savefig(output_path, dpi=dpi, bbox_inches='tight', facecolor='white')
    plt.close(fig)

    return output_path


def generate_coverage_report(
    signal_map: SignalMap,
    band: Optional[WiFiBand] = None,
    threshold_dbm: Optional[float] = None
) -> dict:
    """
    Generate a coverage report with statistics.

    Args:
        signal_map: Simulated signal map
        band: Band to report on, or None for best-of-all-bands
        threshold_dbm: Minimum acceptable signal strength

    Returns:
        Dictionary with coverage statistics
    """
    threshold_dbm = settings.COVERAGE_THRESHOLD_DBM if threshold_dbm is None else threshold_dbm
    grid = sample_signal_grid(signal_map, band)
    total_cells = grid.size

    breakdown = {}
    upper = np.inf
    for name, lower in COVERAGE_CLASSES:
        cells = int(np.sum((grid >= lower) & (grid < upper)))
        breakdown[name] = {
            "cells": cells,
            "percentage": float(cells / total_cells * 100),
            "threshold": f">= {lower} dBm" if np.isinf(upper) else f"{lower} to {upper} dBm",
        }
        upper = lower

    dead_cells = int(np.sum(grid < upper))
    breakdown["dead_zone"] = {
        "cells": dead_cells,
        "percentage": float(dead_cells / total_cells * 100),
        "threshold": f"< {upper} dBm",
    }

    valid_signals = grid[grid > NO_SIGNAL_DBM]
    has_signal = valid_signals.size > 0

    return {
        "band": band.value if band is not None else None,
        "total_cells": total_cells,
        "coverage_breakdown": breakdown,
        "total_coverage_percent": float((total_cells - dead_cells) / total_cells * 100),
        "acceptable_coverage_percent": float(np.sum(grid >= threshold_dbm) / total_cells * 100),
        "signal_statistics": {
            "mean": float(np.mean(valid_signals)) if has_signal else NO_SIGNAL_DBM,
            "median": float(np.median(valid_signals)) if has_signal else NO_SIGNAL_DBM,
            "std": float(np.std(valid_signals)) if has_signal else 0.0,
            "min": float(np.min(valid_signals)) if has_signal else NO_SIGNAL_DBM,
            "max": float(np.max(valid_signals)) if has_signal else NO_SIGNAL_DBM,
        }
    }


def generate_band_reports(
    signal_map: SignalMap,
    band: Optional[WiFiBand] = None,
    threshold_dbm: Optional[float] = None
) -> Dict[str, dict]:
    """
    Coverage reports keyed by band value.

    With no band given, every simulated band is reported plus a "best" entry
    taken over all bands.
    """
    if band is not None:
        return {band.value: generate_coverage_report(signal_map, band, threshold_dbm)}

    reports = {
        simulated.value: generate_coverage_report(signal_map, simulated, threshold_dbm)
        for simulated in WiFiBand
        if simulated in signal_map.band_grids
    }
    reports["best"] = generate_coverage_report(signal_map, None, threshold_dbm)
    return reports
