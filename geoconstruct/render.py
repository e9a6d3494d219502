"""Boundary between a construction and whatever draws it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Protocol, Union

from .entities import EntityKind
from .vectors import Vector

if TYPE_CHECKING:  # pragma: no cover
    from .construction import Construction


class Renderer(Protocol):
    """Draws resolved geometry. Styles are passed through untouched."""

    def draw_point(self, name: str, position: Vector, style: Any) -> None:
        ...

    def draw_line(self, name: str, start: Vector, end: Vector, segment: bool, style: Any) -> None:
        ...

    def draw_circle(self, name: str, center: Vector, radius: float, style: Any) -> None:
        ...


@dataclass(frozen=True)
class PointGeometry:
    name: str
    position: Vector
    style: Any = None

    def draw_on(self, renderer: Renderer) -> None:
        renderer.draw_point(self.name, self.position, self.style)


@dataclass(frozen=True)
class LineGeometry:
    name: str
    start: Vector
    end: Vector
    segment: bool
    style: Any = None

    def draw_on(self, renderer: Renderer) -> None:
        renderer.draw_line(self.name, self.start, self.end, self.segment, self.style)


@dataclass(frozen=True)
class CircleGeometry:
    name: str
    center: Vector
    radius: float
    style: Any = None

    def draw_on(self, renderer: Renderer) -> None:
        renderer.draw_circle(self.name, self.center, self.radius, self.style)


Geometry = Union[PointGeometry, LineGeometry, CircleGeometry]


def collect_geometry(construction: "Construction", include_hidden: bool = False) -> List[Geometry]:
    """Resolve every drawable entity for the current tick, in insertion order.

    Entities that are not visible are skipped unless ``include_hidden``;
    entities that do not exist are always skipped. This does not tick.
    """

    records: List[Geometry] = []
    for name, entity in construction.items():
        if not (include_hidden or entity.visible):
            continue
        if entity.kind is EntityKind.POINT:
            position = entity.get_vector()  # type: ignore[union-attr]
            if position is not None:
                records.append(PointGeometry(name, position, entity.style))
        elif entity.kind is EntityKind.LINE:
            ends = entity.endpoints()  # type: ignore[union-attr]
            if ends is not None:
                records.append(LineGeometry(name, ends[0], ends[1], entity.segment, entity.style))  # type: ignore[union-attr]
        else:
            geometry = entity.geometry()  # type: ignore[union-attr]
            if geometry is not None:
                records.append(CircleGeometry(name, geometry[0], geometry[1], entity.style))
    return records


__all__ = [
    "Renderer",
    "PointGeometry",
    "LineGeometry",
    "CircleGeometry",
    "Geometry",
    "collect_geometry",
]
