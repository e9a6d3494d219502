"""TikZ renderer for one resolved tick of a construction."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Tuple

from ..vectors import Vector, to_tuple
from .utils import latex_escape

if TYPE_CHECKING:  # pragma: no cover
    from ..construction import Construction

GS_DOT_RADIUS_PT = 1.4
NORMALIZED_SPAN = 8.0

standalone_tpl = r"""\documentclass[border=2pt]{standalone}
\usepackage[utf8]{inputenc}
\usepackage{tikz}
\tikzset{
  gs/dot radius/.store in=\gsDotR,       gs/dot radius=1.4pt,
  gs/line width/.store in=\gsLW,         gs/line width=0.8pt,
  ptlabel/.style={font=\footnotesize, inner sep=1pt},
  carrier/.style={line width=\gsLW},
  circle/.style={line width=\gsLW},
}
\pgfdeclarelayer{bg}\pgfdeclarelayer{fg}\pgfsetlayers{bg,main,fg}
\begin{document}
%s%s
\end{document}
"""

Coord = Tuple[float, float]


@dataclass
class _Drawn:
    points: List[Tuple[str, Coord, Any]] = field(default_factory=list)
    lines: List[Tuple[str, Coord, Coord, bool, Any]] = field(default_factory=list)
    circles: List[Tuple[str, Coord, float, Any]] = field(default_factory=list)


class TikzRenderer:
    """Collects drawn geometry and emits it as a ``tikzpicture``.

    A string style is passed to TikZ as an extra draw option (e.g. a colour
    name); any other style is ignored.
    """

    def __init__(self) -> None:
        self._drawn = _Drawn()

    def draw_point(self, name: str, position: Vector, style: Any) -> None:
        self._drawn.points.append((name, to_tuple(position), style))

    def draw_line(self, name: str, start: Vector, end: Vector, segment: bool, style: Any) -> None:
        self._drawn.lines.append((name, to_tuple(start), to_tuple(end), segment, style))

    def draw_circle(self, name: str, center: Vector, radius: float, style: Any) -> None:
        self._drawn.circles.append((name, to_tuple(center), float(radius), style))

    def render(self, *, scale: float = 1.0, normalize: bool = True) -> str:
        drawn = self._drawn
        extent = list(_extent_points(drawn))
        cx, cy, factor = _normalization(extent) if normalize else (0.0, 0.0, 1.0)

        def tr(pt: Coord) -> Coord:
            return ((pt[0] - cx) * factor, (pt[1] - cy) * factor)

        scene_diag = _scene_bbox_diag(_coords_bbox(tr(pt) for pt in extent))

        lines: List[str] = [f"\\begin{{tikzpicture}}[scale={_format_float(scale)}]"]
        lines.append("  \\begin{pgfonlayer}{main}")
        for _, start, end, segment, style in drawn.lines:
            a, b = tr(start), tr(end)
            if not segment:
                extended = _extend_line(a, b, scene_diag)
                if extended is None:
                    continue
                a, b = extended
            lines.append(
                f"    \\draw[{_styles('carrier', style)}] {_coord(a)} -- {_coord(b)};"
            )
        for _, center, radius, style in drawn.circles:
            r = radius * factor
            if r <= 0:
                continue
            lines.append(
                f"    \\draw[{_styles('circle', style)}] {_coord(tr(center))} circle ({_format_float(r)});"
            )
        lines.append("  \\end{pgfonlayer}")
        lines.append("")
        lines.append("  \\begin{pgfonlayer}{fg}")
        for name, position, style in drawn.points:
            at = _coord(tr(position))
            fill = f"[{style}]" if isinstance(style, str) and style else ""
            lines.append(f"    \\fill{fill} {at} circle ({GS_DOT_RADIUS_PT}pt);")
            lines.append(f"    \\node[ptlabel, above right] at {at} {{{latex_escape(name)}}};")
        lines.append("  \\end{pgfonlayer}")
        lines.append("\\end{tikzpicture}")
        return "\n".join(lines)


def generate_tikz_code(
    construction: "Construction",
    *,
    time_ms: Optional[float] = None,
    scale: float = 1.0,
    normalize: bool = True,
) -> str:
    """Draw one tick of ``construction`` and return it as a ``tikzpicture``."""

    renderer = TikzRenderer()
    construction.draw(renderer, time_ms)
    return renderer.render(scale=scale, normalize=normalize)


def generate_tikz_document(
    construction: "Construction",
    *,
    time_ms: Optional[float] = None,
    title: Optional[str] = None,
    normalize: bool = True,
) -> str:
    """Render a standalone LaTeX document for one tick of ``construction``."""

    header = ""
    if title:
        header = "\\noindent\\textbf{" + latex_escape(title.strip()) + "}\\par\\vspace{4pt}\n"
    tikz_code = generate_tikz_code(construction, time_ms=time_ms, normalize=normalize)
    return standalone_tpl % (header, tikz_code)


def _extent_points(drawn: _Drawn) -> Iterable[Coord]:
    for _, position, _ in drawn.points:
        yield position
    for _, start, end, _, _ in drawn.lines:
        yield start
        yield end
    for _, (x, y), radius, _ in drawn.circles:
        yield (x - radius, y - radius)
        yield (x + radius, y + radius)


def _normalization(points: List[Coord]) -> Tuple[float, float, float]:
    if not points:
        return 0.0, 0.0, 1.0
    min_x, max_x, min_y, max_y = _coords_bbox(points)
    span = max(max_x - min_x, max_y - min_y, 1e-9)
    return 0.5 * (min_x + max_x), 0.5 * (min_y + max_y), NORMALIZED_SPAN / span


def _coords_bbox(points: Iterable[Coord]) -> Tuple[float, float, float, float]:
    pts = list(points)
    if not pts:
        return (0.0, 0.0, 0.0, 0.0)
    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    return (min(xs), max(xs), min(ys), max(ys))


def _scene_bbox_diag(bbox: Tuple[float, float, float, float]) -> float:
    min_x, max_x, min_y, max_y = bbox
    return math.hypot(max_x - min_x, max_y - min_y)


def _extend_line(a: Coord, b: Coord, length: float) -> Optional[Tuple[Coord, Coord]]:
    # An infinite line is drawn from a - dir to a + dir with |dir| = scene diagonal.
    dx, dy = b[0] - a[0], b[1] - a[1]
    norm = math.hypot(dx, dy)
    if norm <= 0:
        return None
    k = max(length, norm) / norm
    return (a[0] - dx * k, a[1] - dy * k), (a[0] + dx * k, a[1] + dy * k)


def _styles(base: str, style: Any) -> str:
    if isinstance(style, str) and style:
        return f"{base}, {style}"
    return base


def _coord(pt: Coord) -> str:
    return f"({_format_float(pt[0])}, {_format_float(pt[1])})"


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for TikZ output")
    formatted = f"{value:.4f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted
