"""Fluent builder for compass-and-straightedge constructions."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .config import ConstructionConfig, get_construction_config
from .entities import (
    Circle,
    CirclesIntersectionPoint,
    Entity,
    EntityKind,
    FreePoint,
    Line,
    LineCircleIntersectionPoint,
    LinesIntersectionPoint,
    Point,
    PointSource,
)
from .errors import (
    ConstructionError,
    Diagnostic,
    DuplicateNameError,
    ForeignEntityError,
    InvalidIntersectionError,
    ReservedNameError,
)
from .evaluation import EvaluationContext
from .registry import Registry

if TYPE_CHECKING:  # pragma: no cover
    from .render import Renderer

logger = logging.getLogger(__name__)

_IntersectionFactory = Callable[[EvaluationContext, Any, Any, bool, bool, Any, float], Point]


def _lines_intersection(context, first, second, toggle, visible, style, eps) -> Point:
    return LinesIntersectionPoint(context, first, second, visible, style, eps=eps)


def _line_circle_intersection(context, first, second, toggle, visible, style, eps) -> Point:
    return LineCircleIntersectionPoint(context, first, second, toggle, visible, style, eps=eps)


def _circle_line_intersection(context, first, second, toggle, visible, style, eps) -> Point:
    return LineCircleIntersectionPoint(context, second, first, toggle, visible, style, eps=eps)


def _circles_intersection(context, first, second, toggle, visible, style, eps) -> Point:
    return CirclesIntersectionPoint(context, first, second, toggle, visible, style, eps=eps)


_INTERSECTIONS: Dict[Tuple[EntityKind, EntityKind], _IntersectionFactory] = {
    (EntityKind.LINE, EntityKind.LINE): _lines_intersection,
    (EntityKind.LINE, EntityKind.CIRCLE): _line_circle_intersection,
    (EntityKind.CIRCLE, EntityKind.LINE): _circle_line_intersection,
    (EntityKind.CIRCLE, EntityKind.CIRCLE): _circles_intersection,
}


class Construction:
    """A named, build-once graph of points, lines and circles.

    Every ``add_*`` method resolves its arguments by name, registers the new
    entity and returns the construction so calls can be chained. Usage errors
    (unknown or ill-typed references, duplicate names, intersections involving
    points) are recorded in :attr:`diagnostics` and logged, leaving the target
    name unregistered; with ``strict`` configured they are raised instead.

    Positions are resolved lazily. Call :meth:`tick` once per frame before
    querying so that every cached position is recomputed.
    """

    def __init__(
        self,
        config: Optional[ConstructionConfig] = None,
        *,
        intermediates_visible: Optional[bool] = None,
        default_style: Any = None,
        context: Optional[EvaluationContext] = None,
    ) -> None:
        self.config = config if config is not None else get_construction_config()
        self.intermediates_visible = (
            self.config.intermediates_visible if intermediates_visible is None else intermediates_visible
        )
        self.default_style = self.config.default_style if default_style is None else default_style
        self.context = context or EvaluationContext()
        self.diagnostics: List[Diagnostic] = []
        self._registry = Registry()
        self._expansion_depth = 0

    # ------------------------------------------------------------------
    # registry access

    def get_object(self, name: str) -> Optional[Entity]:
        handle = self._registry.handle(name)
        if handle is None:
            return None
        return self._registry.entity(handle)

    def name_of(self, entity: Entity) -> Optional[str]:
        handle = self._registry.handle_of(entity)
        if handle is None:
            return None
        return self._registry.name(handle)

    def names(self) -> List[str]:
        return list(self._registry)

    def items(self) -> Iterator[Tuple[str, Entity]]:
        return self._registry.items()

    def points(self) -> Iterator[Tuple[str, Point]]:
        for name, entity in self._registry.items():
            if entity.kind is EntityKind.POINT:
                yield name, entity  # type: ignore[misc]

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    def __iter__(self) -> Iterator[str]:
        return iter(self._registry)

    def __str__(self) -> str:
        if not len(self._registry):
            return "Construction[]"
        lines = ["Construction["]
        for name, entity in self._registry.items():
            deps = ", ".join(self.name_of(dep) or "?" for dep in entity.dependencies())
            lines.append(f"  {name}: {type(entity).__name__}({deps})")
        lines.append("]")
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # evaluation

    def tick(self, time_ms: Optional[float] = None) -> int:
        """Start a new evaluation pass, invalidating every cached position."""

        return self.context.advance(time_ms)

    def draw(self, renderer: "Renderer", time_ms: Optional[float] = None) -> None:
        """Tick once, then hand every drawable entity that exists to ``renderer``."""

        from .render import collect_geometry

        self.tick(time_ms)
        for record in collect_geometry(self, include_hidden=self.intermediates_visible):
            record.draw_on(renderer)

    # ------------------------------------------------------------------
    # primitives

    def add_object(self, name: str, entity: Entity) -> "Construction":
        """Register an entity built outside the fluent API.

        Its dependencies must already belong to this construction.
        """

        try:
            self._check_foreign(name, entity)
            self._register(name, entity)
        except ConstructionError as exc:
            self._report(exc)
        return self

    def add_point(
        self, name: str, vector: PointSource, visible: bool = False, style: Any = None
    ) -> "Construction":
        """Add a free point at ``vector`` or at ``vector(time_ms)`` when callable.

        The vector only positions this point; everything built on top of it
        must go through lines, circles and their intersections.
        """

        try:
            self._register(name, FreePoint(self.context, vector, visible, self._style(style)))
        except ConstructionError as exc:
            self._report(exc)
        return self

    def add_line(
        self,
        name: str,
        point1: str,
        point2: str,
        visible: bool = False,
        segment: bool = False,
        style: Any = None,
    ) -> "Construction":
        try:
            p1 = self._registry.lookup_kind(point1, EntityKind.POINT)
            p2 = self._registry.lookup_kind(point2, EntityKind.POINT)
            self._register(name, Line(p1, p2, segment, visible, self._style(style)))  # type: ignore[arg-type]
        except ConstructionError as exc:
            self._report(exc)
        return self

    def add_circle(
        self, name: str, center: str, edge: str, visible: bool = False, style: Any = None
    ) -> "Construction":
        try:
            c = self._registry.lookup_kind(center, EntityKind.POINT)
            e = self._registry.lookup_kind(edge, EntityKind.POINT)
            self._register(name, Circle(c, e, visible, self._style(style)))  # type: ignore[arg-type]
        except ConstructionError as exc:
            self._report(exc)
        return self

    def add_intersection(
        self,
        name: str,
        object1: str,
        object2: str,
        toggle: bool = False,
        visible: bool = False,
        style: Any = None,
    ) -> "Construction":
        """Add the point where two lines/circles meet.

        When two solutions exist ``toggle`` picks one of them; it is ignored
        for two lines.
        """

        try:
            first = self._registry.lookup(object1)
            second = self._registry.lookup(object2)
            factory = _INTERSECTIONS.get((first.kind, second.kind))
            if factory is None:
                raise InvalidIntersectionError(
                    name,
                    f"cannot intersect {object1!r} ({first.kind.value}) "
                    f"with {object2!r} ({second.kind.value}): intersection involves a point",
                )
            point = factory(
                self.context, first, second, toggle, visible, self._style(style), self.config.eps
            )
            self._register(name, point)
        except ConstructionError as exc:
            self._report(exc)
        return self

    # ------------------------------------------------------------------
    # compound constructions

    def add_perpendicular_bisector(
        self, name: str, point1: str, point2: str, visible: bool = False, style: Any = None
    ) -> "Construction":
        """Add the perpendicular bisector of ``point1``-``point2`` as line ``name``."""

        if not self._precheck(name, (point1, point2)):
            return self
        c1, c2, p1, p2 = self._aux(name, "c1", "c2", "p1", "p2")
        logger.info("Expanding perpendicular bisector %s of %s-%s", name, point1, point2)
        with self._expansion():
            (
                self.add_circle(c1, point1, point2)
                .add_circle(c2, point2, point1)
                .add_intersection(p1, c1, c2, False)
                .add_intersection(p2, c1, c2, True)
                .add_line(name, p1, p2, visible, False, style)
            )
        return self

    def add_midpoint(
        self, name: str, point1: str, point2: str, visible: bool = False, style: Any = None
    ) -> "Construction":
        if not self._precheck(name, (point1, point2)):
            return self
        line, bisector = self._aux(name, "l", "pb")
        logger.info("Expanding midpoint %s of %s-%s", name, point1, point2)
        with self._expansion():
            (
                self.add_line(line, point1, point2)
                .add_perpendicular_bisector(bisector, point1, point2)
                .add_intersection(name, line, bisector, False, visible, style)
            )
        return self

    def add_circumcenter(
        self,
        name: str,
        point1: str,
        point2: str,
        point3: str,
        visible: bool = False,
        style: Any = None,
    ) -> "Construction":
        if not self._precheck(name, (point1, point2, point3)):
            return self
        pb1, pb2 = self._aux(name, "pb1", "pb2")
        logger.info("Expanding circumcenter %s of %s, %s, %s", name, point1, point2, point3)
        with self._expansion():
            (
                self.add_perpendicular_bisector(pb1, point1, point2)
                .add_perpendicular_bisector(pb2, point1, point3)
                .add_intersection(name, pb1, pb2, False, visible, style)
            )
        return self

    def add_circle_from_edge_points(
        self,
        name: str,
        point1: str,
        point2: str,
        point3: str,
        visible: bool = False,
        style: Any = None,
    ) -> "Construction":
        """Add the circle through three points, centered at their circumcenter."""

        if not self._precheck(name, (point1, point2, point3)):
            return self
        (center,) = self._aux(name, "cc")
        logger.info("Expanding circle %s through %s, %s, %s", name, point1, point2, point3)
        with self._expansion():
            (
                self.add_circumcenter(center, point1, point2, point3)
                .add_circle(name, center, point1, visible, style)
            )
        return self

    def add_erected_perpendicular(
        self,
        name: str,
        point: str,
        line: str,
        point_on_line: str,
        visible: bool = False,
        style: Any = None,
    ) -> "Construction":
        """Add the line through ``point`` perpendicular to ``line``.

        ``point_on_line`` sets the compass opening of the first circle; the
        resulting line does not depend on which point of ``line`` is used as
        long as the circle cuts the line twice.
        """

        if not self._precheck(name, (point, point_on_line), lines=(line,)):
            return self
        c1, p1, p2, c2, c3, p3 = self._aux(name, "c1", "p1", "p2", "c2", "c3", "p3")
        logger.info("Expanding perpendicular %s through %s to %s", name, point, line)
        with self._expansion():
            (
                self.add_circle(c1, point, point_on_line)
                .add_intersection(p1, line, c1, False)
                .add_intersection(p2, line, c1, True)
                .add_circle(c2, p1, p2)
                .add_circle(c3, p2, p1)
                .add_intersection(p3, c2, c3, False)
                .add_line(name, p3, point, visible, False, style)
            )
        return self

    # ------------------------------------------------------------------
    # helpers

    def _style(self, style: Any) -> Any:
        return self.default_style if style is None else style

    def _aux(self, name: str, *suffixes: str) -> Tuple[str, ...]:
        return tuple(f"{name}{self.config.separator}{suffix}" for suffix in suffixes)

    @contextmanager
    def _expansion(self) -> Iterator[None]:
        self._expansion_depth += 1
        try:
            yield
        finally:
            self._expansion_depth -= 1

    def _check_name(self, name: str) -> None:
        if self._expansion_depth == 0 and self.config.separator in name:
            raise ReservedNameError(
                name,
                f"name {name!r} contains the reserved separator {self.config.separator!r}",
            )

    def _register(self, name: str, entity: Entity) -> None:
        self._check_name(name)
        self._registry.register(name, entity)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Registered %s %r", entity.kind.value, name)

    def _precheck(self, name: str, points: Sequence[str], lines: Sequence[str] = ()) -> bool:
        """Validate a compound's target name and inputs before expanding it."""

        try:
            self._check_name(name)
            if name in self._registry:
                raise DuplicateNameError(name, f"name {name!r} is already registered")
            for point in points:
                self._registry.lookup_kind(point, EntityKind.POINT)
            for line in lines:
                self._registry.lookup_kind(line, EntityKind.LINE)
        except ConstructionError as exc:
            self._report(exc)
            return False
        return True

    def _check_foreign(self, name: str, entity: Entity) -> None:
        if isinstance(entity, Point) and entity.context is not self.context:
            raise ForeignEntityError(name, f"{name!r} belongs to another construction")
        for dep in entity.dependencies():
            if self._registry.handle_of(dep) is None:
                raise ForeignEntityError(
                    name, f"{name!r} depends on {dep!r}, which is not part of this construction"
                )

    def _report(self, error: ConstructionError) -> None:
        if self.config.strict:
            raise error
        self.diagnostics.append(Diagnostic.from_error(error))
        logger.warning("Construction usage error (%s): %s", error.kind, error.message)


__all__ = ["Construction"]
