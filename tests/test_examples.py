import math

import numpy as np
import pytest

from geoconstruct import EXAMPLES, build_hexagon, build_showcase, orbit_driver
from geoconstruct.vectors import vec2

VERTICES = ["A", "B", "C", "D", "E", "F"]


def test_hexagon_vertices_for_fixed_driver():
    c = build_hexagon(vec2(100.0, 0.0))
    c.tick()

    h = 100.0 * math.sqrt(3.0) / 2.0
    expected = {
        "A": (-100.0, 0.0),
        "B": (-50.0, h),
        "C": (50.0, h),
        "D": (100.0, 0.0),
        "E": (50.0, -h),
        "F": (-50.0, -h),
    }
    for name, point in expected.items():
        assert np.allclose(c.get_object(name).get_vector(), point), name
    assert not c.diagnostics


@pytest.mark.parametrize("time_ms", [0.0, 1234.0, 4000.0, 7999.0])
def test_hexagon_stays_regular_while_driver_moves(time_ms):
    c = build_hexagon(orbit_driver(radius=100.0))
    c.tick(time_ms)

    vertices = [c.get_object(name).get_vector() for name in VERTICES]
    for vertex in vertices:
        assert np.linalg.norm(vertex) == pytest.approx(100.0)
    for first, second in zip(vertices, vertices[1:] + vertices[:1]):
        assert np.linalg.norm(second - first) == pytest.approx(100.0)


def test_hexagon_styles():
    c = build_hexagon(vec2(100.0, 0.0))

    assert c.get_object("AB").style == "magenta"
    assert c.get_object("BC").style == "violet"
    assert c.get_object("Cir").visible is False
    assert c.get_object("AB").segment


def test_orbit_driver_position():
    driver = orbit_driver(radius=2.0, period_ms=4000.0, phase=0.0)

    assert np.allclose(driver(0.0), [2.0, 0.0])
    assert np.allclose(driver(1000.0), [0.0, 2.0])


def test_showcase_builds_cleanly():
    c = build_showcase()
    c.tick(0.0)

    assert not c.diagnostics
    for name in ("mouse", "center", "cc", "circum", "perp"):
        assert name in c
    assert c.get_object("cc").exists()
    assert c.get_object("circum").geometry() is not None
    assert c.get_object("perp").endpoints() is not None


def test_showcase_perpendicular_is_vertical_through_driver():
    c = build_showcase(vec2(30.0, 40.0))
    c.tick()

    direction = c.get_object("perp").direction()
    assert direction[0] == pytest.approx(0.0, abs=1e-9)
    assert np.allclose(c.get_object("center").get_vector(), [150.0 / 7.0, 0.0])


def test_examples_registry():
    assert set(EXAMPLES) == {"hexagon", "showcase"}
    assert EXAMPLES["hexagon"] is build_hexagon
