"""Points, lines and circles making up a construction graph."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Tuple, Union

from .evaluation import EvaluationContext
from .intersections import intersect_circles, intersect_line_circle, intersect_lines
from .vectors import Vector, VectorLike, as_vec2, distance, frozen

TimeFunction = Callable[[float], Optional[VectorLike]]
PointSource = Union[VectorLike, TimeFunction]


class EntityKind(enum.Enum):
    POINT = "point"
    LINE = "line"
    CIRCLE = "circle"


class Point(ABC):
    """A point whose position is resolved lazily and cached per generation.

    ``get_vector`` returns a read-only ``(2,)`` array or ``None`` when the
    point does not exist. The outcome, including ``None``, is computed at most
    once per generation of the owning :class:`EvaluationContext`.
    """

    kind = EntityKind.POINT

    def __init__(self, context: EvaluationContext, visible: bool = False, style: Any = None) -> None:
        self.context = context
        self.visible = visible
        self.style = style
        self._cached_generation: Optional[int] = None
        self._value: Optional[Vector] = None

    @property
    def cached(self) -> bool:
        return self._cached_generation == self.context.generation

    def reset(self) -> None:
        self._cached_generation = None
        self._value = None

    def get_vector(self) -> Optional[Vector]:
        generation = self.context.generation
        if self._cached_generation != generation:
            self._value = frozen(self.calc_vector())
            self._cached_generation = generation
        return self._value

    def exists(self) -> bool:
        return self.get_vector() is not None

    def dependencies(self) -> Tuple["Entity", ...]:
        return ()

    @abstractmethod
    def calc_vector(self) -> Optional[Vector]:
        """Compute the position from the current state of the dependencies."""


class FreePoint(Point):
    """An axiom: a fixed vector or a function of the current time in ms.

    A fixed array is re-read on every resolution, so updating it in place
    between ticks moves the point.
    """

    def __init__(
        self,
        context: EvaluationContext,
        vector: PointSource,
        visible: bool = False,
        style: Any = None,
    ) -> None:
        super().__init__(context, visible, style)
        self.vector = vector

    def calc_vector(self) -> Optional[Vector]:
        value = self.vector(self.context.millis()) if callable(self.vector) else self.vector
        if value is None:
            return None
        return as_vec2(value)

    def __repr__(self) -> str:
        return f"FreePoint({self.vector!r})"


class Line:
    """A straight line through two points, optionally drawn as a segment.

    A line has no cache of its own; its geometry is read from ``point1`` and
    ``point2`` every time.
    """

    kind = EntityKind.LINE

    def __init__(
        self,
        point1: Point,
        point2: Point,
        segment: bool = False,
        visible: bool = False,
        style: Any = None,
    ) -> None:
        self.point1 = point1
        self.point2 = point2
        self.segment = segment
        self.visible = visible
        self.style = style

    def dependencies(self) -> Tuple["Entity", ...]:
        return (self.point1, self.point2)

    def endpoints(self) -> Optional[Tuple[Vector, Vector]]:
        p1 = self.point1.get_vector()
        p2 = self.point2.get_vector()
        if p1 is None or p2 is None:
            return None
        return p1, p2

    def direction(self) -> Optional[Vector]:
        ends = self.endpoints()
        if ends is None:
            return None
        return ends[1] - ends[0]

    def __repr__(self) -> str:
        return f"Line({self.point1!r}, {self.point2!r}, segment={self.segment})"


class Circle:
    """A circle drawn by a compass set at ``center`` and opened to ``edge``."""

    kind = EntityKind.CIRCLE

    def __init__(self, center: Point, edge: Point, visible: bool = False, style: Any = None) -> None:
        self.center = center
        self.edge = edge
        self.visible = visible
        self.style = style

    def dependencies(self) -> Tuple["Entity", ...]:
        return (self.center, self.edge)

    def center_vector(self) -> Optional[Vector]:
        return self.center.get_vector()

    def radius(self) -> Optional[float]:
        geometry = self.geometry()
        return None if geometry is None else geometry[1]

    def geometry(self) -> Optional[Tuple[Vector, float]]:
        c = self.center.get_vector()
        e = self.edge.get_vector()
        if c is None or e is None:
            return None
        return c, distance(c, e)

    def __repr__(self) -> str:
        return f"Circle({self.center!r}, {self.edge!r})"


class LinesIntersectionPoint(Point):
    def __init__(
        self,
        context: EvaluationContext,
        line1: Line,
        line2: Line,
        visible: bool = False,
        style: Any = None,
        *,
        eps: float = 0.0,
    ) -> None:
        super().__init__(context, visible, style)
        self.line1 = line1
        self.line2 = line2
        self.eps = eps

    def dependencies(self) -> Tuple["Entity", ...]:
        return (self.line1, self.line2)

    def calc_vector(self) -> Optional[Vector]:
        return intersect_lines(
            self.line1.point1.get_vector(),
            self.line1.point2.get_vector(),
            self.line2.point1.get_vector(),
            self.line2.point2.get_vector(),
            eps=self.eps,
        )


class LineCircleIntersectionPoint(Point):
    """One of the up to two points where ``line`` meets ``circle``."""

    def __init__(
        self,
        context: EvaluationContext,
        line: Line,
        circle: Circle,
        toggle: bool = False,
        visible: bool = False,
        style: Any = None,
        *,
        eps: float = 0.0,
    ) -> None:
        super().__init__(context, visible, style)
        self.line = line
        self.circle = circle
        self.toggle = toggle
        self.eps = eps

    def dependencies(self) -> Tuple["Entity", ...]:
        return (self.line, self.circle)

    def calc_vector(self) -> Optional[Vector]:
        return intersect_line_circle(
            self.line.point1.get_vector(),
            self.line.point2.get_vector(),
            self.circle.center.get_vector(),
            self.circle.edge.get_vector(),
            self.toggle,
            eps=self.eps,
        )


class CirclesIntersectionPoint(Point):
    """One of the up to two points where ``circle1`` meets ``circle2``."""

    def __init__(
        self,
        context: EvaluationContext,
        circle1: Circle,
        circle2: Circle,
        toggle: bool = False,
        visible: bool = False,
        style: Any = None,
        *,
        eps: float = 0.0,
    ) -> None:
        super().__init__(context, visible, style)
        self.circle1 = circle1
        self.circle2 = circle2
        self.toggle = toggle
        self.eps = eps

    def dependencies(self) -> Tuple["Entity", ...]:
        return (self.circle1, self.circle2)

    def calc_vector(self) -> Optional[Vector]:
        return intersect_circles(
            self.circle1.center.get_vector(),
            self.circle1.edge.get_vector(),
            self.circle2.center.get_vector(),
            self.circle2.edge.get_vector(),
            self.toggle,
            eps=self.eps,
        )


Entity = Union[Point, Line, Circle]


__all__ = [
    "EntityKind",
    "Entity",
    "Point",
    "FreePoint",
    "Line",
    "Circle",
    "LinesIntersectionPoint",
    "LineCircleIntersectionPoint",
    "CirclesIntersectionPoint",
    "PointSource",
    "TimeFunction",
]
