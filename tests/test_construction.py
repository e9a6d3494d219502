import logging

import numpy as np
import pytest

from geoconstruct import (
    Circle,
    CirclesIntersectionPoint,
    Construction,
    ConstructionConfig,
    DuplicateNameError,
    EntityKind,
    InvalidIntersectionError,
    Line,
    LineCircleIntersectionPoint,
    LinesIntersectionPoint,
    ReservedNameError,
    UnknownReferenceError,
    get_construction_config,
    set_construction_config,
)
from geoconstruct.vectors import vec2


def _square() -> Construction:
    return (
        Construction()
        .add_point("A", vec2(0, 0))
        .add_point("B", vec2(1, 0))
        .add_point("C", vec2(0, 1))
        .add_point("D", vec2(1, 1))
    )


def test_builder_chains_and_keeps_insertion_order():
    c = (
        _square()
        .add_line("AD", "A", "D")
        .add_line("BC", "B", "C", True, True)
        .add_circle("circ", "A", "B")
    )

    assert c.names() == ["A", "B", "C", "D", "AD", "BC", "circ"]
    assert list(c) == c.names()
    assert len(c) == 7
    assert "AD" in c and "XY" not in c
    assert c.get_object("BC").segment
    assert c.get_object("BC").visible
    assert c.get_object("XY") is None
    assert [name for name, _ in c.points()] == ["A", "B", "C", "D"]
    assert not c.diagnostics


def test_entities_hold_references_not_names():
    c = _square().add_line("AD", "A", "D")

    line = c.get_object("AD")

    assert line.point1 is c.get_object("A")
    assert line.point2 is c.get_object("D")
    assert c.name_of(line.point2) == "D"


@pytest.mark.parametrize(
    "first, second, expected_type",
    [
        ("AD", "BC", LinesIntersectionPoint),
        ("AD", "circ", LineCircleIntersectionPoint),
        ("circ", "AD", LineCircleIntersectionPoint),
        ("circ", "circ2", CirclesIntersectionPoint),
    ],
)
def test_add_intersection_dispatches_on_kinds(first, second, expected_type):
    c = (
        _square()
        .add_line("AD", "A", "D")
        .add_line("BC", "B", "C")
        .add_circle("circ", "A", "B")
        .add_circle("circ2", "B", "A")
        .add_intersection("X", first, second)
    )

    point = c.get_object("X")
    assert isinstance(point, expected_type)
    assert point.kind is EntityKind.POINT
    assert not c.diagnostics


def test_circle_line_order_does_not_change_solution():
    c = (
        _square()
        .add_line("AD", "A", "D")
        .add_circle("circ", "A", "B")
        .add_intersection("X", "AD", "circ", True)
        .add_intersection("Y", "circ", "AD", True)
    )

    assert np.allclose(c.get_object("X").get_vector(), c.get_object("Y").get_vector())
    assert c.get_object("Y").line is c.get_object("AD")


def test_diagonals_of_unit_square_meet_in_middle():
    c = (
        _square()
        .add_line("AD", "A", "D")
        .add_line("BC", "B", "C")
        .add_intersection("M", "AD", "BC")
    )

    assert np.allclose(c.get_object("M").get_vector(), [0.5, 0.5])


def test_unknown_reference_is_recorded_and_skipped(caplog):
    caplog.set_level(logging.WARNING, logger="geoconstruct.construction")
    c = _square().add_line("l", "A", "missing")

    assert "l" not in c
    assert [d.kind for d in c.diagnostics] == ["unknown-reference"]
    assert c.diagnostics[0].name == "missing"
    assert "Construction usage error (unknown-reference)" in caplog.text


def test_unregistered_target_cascades_diagnostics():
    c = (
        _square()
        .add_line("l", "A", "missing")
        .add_line("m", "B", "C")
        .add_intersection("X", "l", "m")
    )

    assert "X" not in c
    assert [d.kind for d in c.diagnostics] == ["unknown-reference", "unknown-reference"]


def test_reference_of_wrong_kind_is_rejected():
    c = _square().add_line("AD", "A", "D").add_circle("circ", "AD", "B")

    assert "circ" not in c
    assert "expected a point" in c.diagnostics[0].message


def test_intersection_involving_point_is_a_usage_error():
    c = _square().add_line("AD", "A", "D").add_intersection("X", "A", "AD")

    assert "X" not in c
    assert c.diagnostics[0].kind == "invalid-intersection"


def test_duplicate_name_keeps_first_registration():
    c = _square().add_point("A", vec2(5, 5))

    assert np.allclose(c.get_object("A").get_vector(), [0.0, 0.0])
    assert c.diagnostics[0].kind == "duplicate-name"


def test_reserved_separator_is_rejected_in_user_names():
    c = _square().add_point("A#1", vec2(5, 5))

    assert "A#1" not in c
    assert c.diagnostics[0].kind == "reserved-name"


@pytest.mark.parametrize(
    "build, error",
    [
        (lambda c: c.add_line("l", "A", "missing"), UnknownReferenceError),
        (lambda c: c.add_point("A", vec2(1, 1)), DuplicateNameError),
        (lambda c: c.add_point("A#b", vec2(1, 1)), ReservedNameError),
        (lambda c: c.add_intersection("X", "A", "B"), InvalidIntersectionError),
    ],
)
def test_strict_mode_raises_usage_errors(build, error):
    c = Construction(ConstructionConfig(strict=True)).add_point("A", vec2(0, 0)).add_point("B", vec2(1, 0))

    with pytest.raises(error):
        build(c)
    assert not c.diagnostics


def test_add_object_registers_entities_built_from_members():
    c = _square()
    line = Line(c.get_object("A"), c.get_object("D"), segment=True)
    circle = Circle(c.get_object("A"), c.get_object("B"))

    c.add_object("AD", line).add_object("circ", circle).add_intersection("X", "AD", "circ")

    assert c.get_object("AD") is line
    assert np.allclose(c.get_object("X").get_vector(), [np.sqrt(0.5), np.sqrt(0.5)])
    assert not c.diagnostics


def test_add_object_rejects_foreign_entities():
    c = _square()
    other = Construction().add_point("P", vec2(2, 2))

    c.add_object("P", other.get_object("P"))
    c.add_object("l", Line(c.get_object("A"), other.get_object("P")))

    assert "P" not in c and "l" not in c
    assert [d.kind for d in c.diagnostics] == ["foreign-entity", "foreign-entity"]


def test_default_style_applies_when_no_style_given():
    c = (
        Construction(default_style="gray")
        .add_point("A", vec2(0, 0))
        .add_point("B", vec2(1, 0), True, "red")
    )

    assert c.get_object("A").style == "gray"
    assert c.get_object("B").style == "red"


def test_config_defaults_are_copied_into_new_constructions():
    previous = get_construction_config()
    try:
        set_construction_config(ConstructionConfig(intermediates_visible=True, default_style="blue"))
        c = Construction()
        assert c.intermediates_visible
        assert c.default_style == "blue"
        assert Construction(intermediates_visible=False).intermediates_visible is False
    finally:
        set_construction_config(previous)

    assert Construction().default_style is None


def test_config_eps_reaches_intersection_points():
    c = (
        Construction(ConstructionConfig(eps=1e-9))
        .add_point("A", vec2(0, 0))
        .add_point("B", vec2(1, 0))
        .add_point("C", vec2(0, 1))
        .add_point("D", vec2(1, 1 + 1e-12))
        .add_line("AB", "A", "B")
        .add_line("CD", "C", "D")
        .add_intersection("X", "AB", "CD")
    )

    assert c.get_object("X").eps == 1e-9
    assert c.get_object("X").get_vector() is None


def test_tick_recomputes_moving_construction():
    position = np.array([0.0, 3.0])
    c = (
        Construction()
        .add_point("O", vec2(0, 0))
        .add_point("E", vec2(1, 0))
        .add_point("P", vec2(-3, 0))
        .add_point("Q", position)
        .add_line("PQ", "P", "Q")
        .add_circle("circ", "O", "E")
        .add_intersection("X", "PQ", "circ")
    )
    c.tick()
    assert c.get_object("X").get_vector() is None

    position[1] = 0.0
    assert c.get_object("X").get_vector() is None

    generation = c.tick()
    assert generation == c.context.generation
    assert np.allclose(c.get_object("X").get_vector(), [1.0, 0.0])


def test_non_existence_propagates_without_errors():
    c = (
        _square()
        .add_line("AB", "A", "B")
        .add_line("CD", "C", "D")
        .add_intersection("X", "AB", "CD", visible=True)
        .add_line("XA", "X", "A")
        .add_circle("circX", "X", "B")
        .add_circle("circA", "A", "B")
        .add_intersection("Y", "XA", "circA")
        .add_intersection("Z", "circX", "circA", True)
        .add_midpoint("M", "X", "A")
        .add_line("YZ", "Y", "Z")
        .add_intersection("W", "YZ", "AB")
    )

    assert not c.diagnostics
    assert c.get_object("X").get_vector() is None
    assert c.get_object("XA").endpoints() is None
    assert c.get_object("circX").geometry() is None
    for name in ("Y", "Z", "M", "W"):
        assert c.get_object(name).get_vector() is None


def test_str_lists_entities_with_dependencies():
    c = _square().add_line("AD", "A", "D")

    text = str(c)

    assert text.startswith("Construction[")
    assert "AD: Line(A, D)" in text
    assert str(Construction()) == "Construction[]"
