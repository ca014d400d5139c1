"""2D intersection primitives for ray vs wall and ray vs zone tests.

Every function accepts scalars or numpy arrays for the segment endpoints and
broadcasts, so a single AP position can be tested against a whole grid of
cell positions at once. Results are numpy booleans (0-d for scalar input).
"""

from typing import Tuple, Union

import numpy as np

from wifisim.schemas.zone import Rect

Coordinate = Union[float, np.ndarray]
Point2D = Tuple[Coordinate, Coordinate]

PARALLEL_EPSILON = 1e-10
ENDPOINT_EPSILON = 1e-6


def _solve(p1: Point2D, p2: Point2D, p3: Point2D, p4: Point2D):
    """Parametric solve of p1 + t*(p2-p1) == p3 + u*(p4-p3).

    Returns (valid, t, u); ``valid`` is False for parallel or degenerate
    segments, where t and u are meaningless.
    """
    d1x = np.subtract(p2[0], p1[0])
    d1y = np.subtract(p2[1], p1[1])
    d2x = np.subtract(p4[0], p3[0])
    d2y = np.subtract(p4[1], p3[1])

    denom = d1x * d2y - d1y * d2x
    valid = np.abs(denom) >= PARALLEL_EPSILON
    safe_denom = np.where(valid, denom, 1.0)

    ox = np.subtract(p3[0], p1[0])
    oy = np.subtract(p3[1], p1[1])
    t = (ox * d2y - oy * d2x) / safe_denom
    u = (ox * d1y - oy * d1x) / safe_denom
    return valid, t, u


def segments_intersect_strict(p1: Point2D, p2: Point2D, p3: Point2D, p4: Point2D):
    """True where segment p1-p2 crosses p3-p4 at an interior point of both.

    Touches within ENDPOINT_EPSILON of either segment's ends do not count, so
    an AP standing on a wall line or a ray ending on a wall is not occluded.
    """
    valid, t, u = _solve(p1, p2, p3, p4)
    lo, hi = ENDPOINT_EPSILON, 1.0 - ENDPOINT_EPSILON
    return valid & (t > lo) & (t < hi) & (u > lo) & (u < hi)


def segments_intersect_inclusive(p1: Point2D, p2: Point2D, p3: Point2D, p4: Point2D):
    """True where segment p1-p2 meets p3-p4, endpoints included."""
    valid, t, u = _solve(p1, p2, p3, p4)
    return valid & (t >= 0.0) & (t <= 1.0) & (u >= 0.0) & (u <= 1.0)


def point_in_rect(p: Point2D, rect: Rect):
    """True where p lies inside or on the border of ``rect``."""
    x, y = p
    return (
        (np.asarray(x) >= rect.left) & (np.asarray(x) <= rect.right)
        & (np.asarray(y) >= rect.top) & (np.asarray(y) <= rect.bottom)
    )


def segment_intersects_rect_inclusive(p1: Point2D, p2: Point2D, rect: Rect):
    """True where segment p1-p2 starts in, ends in, or crosses ``rect``."""
    top_left = (rect.left, rect.top)
    top_right = (rect.right, rect.top)
    bottom_right = (rect.right, rect.bottom)
    bottom_left = (rect.left, rect.bottom)
    return (
        point_in_rect(p1, rect)
        | point_in_rect(p2, rect)
        | segments_intersect_inclusive(p1, p2, top_left, top_right)
        | segments_intersect_inclusive(p1, p2, top_right, bottom_right)
        | segments_intersect_inclusive(p1, p2, bottom_right, bottom_left)
        | segments_intersect_inclusive(p1, p2, bottom_left, top_left)
    )
