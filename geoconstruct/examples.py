"""Ready-made constructions driven by a single moving point."""

from __future__ import annotations

import math
from typing import Callable, Dict, Optional

from .config import ConstructionConfig
from .construction import Construction
from .entities import PointSource
from .vectors import Vector, vec2


def orbit_driver(radius: float = 100.0, period_ms: float = 8000.0, phase: float = 0.3) -> Callable[[float], Vector]:
    """Return a time function moving a point around the origin."""

    def _position(time_ms: float) -> Vector:
        angle = phase + 2.0 * math.pi * time_ms / period_ms
        return vec2(radius * math.cos(angle), radius * math.sin(angle))

    return _position


def build_hexagon(driver: Optional[PointSource] = None, config: Optional[ConstructionConfig] = None) -> Construction:
    """Regular hexagon inscribed in the circle around ``O`` through ``U``.

    The vertices ``A``..``F`` are laid off with the compass from the two ends
    of the diameter through ``U``.
    """

    return (
        Construction(config, default_style="violet")
        .add_point("O", vec2(0.0, 0.0))
        .add_point("U", driver if driver is not None else orbit_driver())
        .add_line("OU", "O", "U")
        .add_circle("Cir", "O", "U")
        .add_intersection("A", "OU", "Cir", True, True)
        .add_intersection("D", "OU", "Cir", False, True)
        .add_circle("C1", "A", "O")
        .add_circle("C2", "D", "O")
        .add_intersection("B", "Cir", "C1", False, True)
        .add_intersection("C", "Cir", "C2", True, True)
        .add_intersection("E", "Cir", "C2", False, True)
        .add_intersection("F", "Cir", "C1", True, True)
        .add_line("AB", "A", "B", True, True, "magenta")
        .add_line("BC", "B", "C", True, True)
        .add_line("CD", "C", "D", True, True, "magenta")
        .add_line("DE", "D", "E", True, True)
        .add_line("EF", "E", "F", True, True, "magenta")
        .add_line("FA", "F", "A", True, True)
    )


def build_showcase(driver: Optional[PointSource] = None, config: Optional[ConstructionConfig] = None) -> Construction:
    """Every primitive and compound construction, hung off one moving point."""

    return (
        Construction(config)
        .add_point("mouse", driver if driver is not None else orbit_driver(60.0), True)
        .add_point("up", vec2(0.0, -100.0))
        .add_point("right", vec2(100.0, 0.0))
        .add_point("left", vec2(-100.0, 0.0))
        .add_line("horiz", "left", "right")
        .add_line("verti", "up", "mouse")
        .add_line("lu", "left", "up")
        .add_intersection("center", "horiz", "verti")
        .add_circle("circ", "right", "mouse")
        .add_intersection("c1", "lu", "circ", True)
        .add_intersection("c2", "lu", "circ", False)
        .add_circle("circ2", "c1", "center")
        .add_intersection("ci1", "circ", "circ2", True)
        .add_intersection("ci2", "circ", "circ2", False)
        .add_line("cil", "ci1", "ci2")
        .add_midpoint("pbp", "left", "ci2", True)
        .add_circumcenter("cc", "up", "center", "left", True)
        .add_line("pbpcc", "pbp", "cc", True, True, "orange")
        .add_circle_from_edge_points("circum", "up", "right", "mouse", True)
        .add_erected_perpendicular("perp", "mouse", "horiz", "left", True)
    )


EXAMPLES: Dict[str, Callable[..., Construction]] = {
    "hexagon": build_hexagon,
    "showcase": build_showcase,
}
