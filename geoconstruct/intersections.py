"""Closed-form intersection resolvers.

Every resolver takes the resolved vectors of the defining points (any of which
may be ``None`` when that point does not exist) and returns the intersection
as a fresh ``(2,)`` array, or ``None`` when no real solution exists. A zero
denominator is reported as non-existence, never as an exception.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from .logging_utils import apply_debug_logging
from .vectors import Vector, norm_sq, vec2

logger = logging.getLogger(__name__)


def intersect_lines(
    p1: Optional[Vector],
    p2: Optional[Vector],
    p3: Optional[Vector],
    p4: Optional[Vector],
    *,
    eps: float = 0.0,
) -> Optional[Vector]:
    """Intersect line ``p1p2`` with line ``p3p4``."""

    if p1 is None or p2 is None or p3 is None or p4 is None:
        return None

    den = (p1[0] - p2[0]) * (p3[1] - p4[1]) - (p1[1] - p2[1]) * (p3[0] - p4[0])
    if abs(den) <= eps:
        return None
    num1 = p1[0] * p2[1] - p1[1] * p2[0]
    num2 = p3[0] * p4[1] - p3[1] * p4[0]
    x = (num1 * (p3[0] - p4[0]) - (p1[0] - p2[0]) * num2) / den
    y = (num1 * (p3[1] - p4[1]) - (p1[1] - p2[1]) * num2) / den
    return vec2(x, y)


def intersect_line_circle(
    p1: Optional[Vector],
    p2: Optional[Vector],
    center: Optional[Vector],
    edge: Optional[Vector],
    toggle: bool = False,
    *,
    eps: float = 0.0,
) -> Optional[Vector]:
    """Intersect line ``p1p2`` with the circle around ``center`` through ``edge``.

    Both solutions come from the same expression; ``toggle`` flips the sign
    of the square-root term. The x term is scaled by ``sign(d.y)`` (with
    ``sign(0) == +1``) and the y term by ``|d.y|``, so for a horizontal line
    through the center ``toggle=False`` lands on the side ``p1 -> p2`` points
    to. A tangent line yields the touching point for both toggles.
    """

    if p1 is None or p2 is None or center is None or edge is None:
        return None

    r_sq = norm_sq(edge - center)
    a = p1 - center
    b = p2 - center
    d = b - a
    dr_sq = norm_sq(d)
    if dr_sq <= eps:
        return None
    det = a[0] * b[1] - b[0] * a[1]

    discriminant = r_sq * dr_sq - det * det
    if discriminant < 0:
        return None
    disc_sqrt = math.sqrt(discriminant)
    sgn = -1.0 if d[1] < 0 else 1.0
    sign = -1.0 if toggle else 1.0
    x = (det * d[1] + sign * sgn * d[0] * disc_sqrt) / dr_sq
    y = (-det * d[0] + sign * abs(d[1]) * disc_sqrt) / dr_sq
    return vec2(x, y) + center


def intersect_circle_line(
    center: Optional[Vector],
    edge: Optional[Vector],
    p1: Optional[Vector],
    p2: Optional[Vector],
    toggle: bool = False,
    *,
    eps: float = 0.0,
) -> Optional[Vector]:
    return intersect_line_circle(p1, p2, center, edge, toggle, eps=eps)


def intersect_circles(
    c1: Optional[Vector],
    e1: Optional[Vector],
    c2: Optional[Vector],
    e2: Optional[Vector],
    toggle: bool = False,
    *,
    eps: float = 0.0,
) -> Optional[Vector]:
    """Intersect the circle ``(c1, e1)`` with the circle ``(c2, e2)``.

    ``toggle=False`` selects the solution on the right of the directed center
    line ``c1 -> c2``; ``toggle=True`` the one on its left. Concentric circles
    never intersect.
    """

    if c1 is None or e1 is None or c2 is None or e2 is None:
        return None

    r1_sq = norm_sq(e1 - c1)
    r2_sq = norm_sq(e2 - c2)
    axis = c2 - c1
    d = math.sqrt(norm_sq(axis))
    if d <= eps:
        return None

    l = (r1_sq - r2_sq + d * d) / (2.0 * d)
    h_sq = r1_sq - l * l
    if h_sq < 0:
        return None
    h = math.sqrt(h_sq)
    if toggle:
        h = -h

    base = c1 + axis * (l / d)
    offset = axis * (h / d)
    return base + np.array([offset[1], -offset[0]], dtype=float)


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "intersect_lines",
    "intersect_line_circle",
    "intersect_circle_line",
    "intersect_circles",
]
