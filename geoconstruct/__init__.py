from .config import ConstructionConfig, get_construction_config, set_construction_config
from .construction import Construction
from .entities import (
    Circle,
    CirclesIntersectionPoint,
    EntityKind,
    FreePoint,
    Line,
    LineCircleIntersectionPoint,
    LinesIntersectionPoint,
    Point,
)
from .errors import (
    ConstructionError,
    Diagnostic,
    DuplicateNameError,
    ForeignEntityError,
    InvalidIntersectionError,
    ReservedNameError,
    UnknownReferenceError,
)
from .evaluation import EvaluationContext
from .intersections import (
    intersect_circle_line,
    intersect_circles,
    intersect_line_circle,
    intersect_lines,
)
from .render import CircleGeometry, LineGeometry, PointGeometry, Renderer, collect_geometry
from .tikz_codegen import TikzRenderer, generate_tikz_code, generate_tikz_document
from .examples import EXAMPLES, build_hexagon, build_showcase, orbit_driver
from .vectors import vec2

__all__ = [
    'Construction',
    'ConstructionConfig',
    'get_construction_config',
    'set_construction_config',
    'EvaluationContext',
    'EntityKind',
    'Point',
    'FreePoint',
    'Line',
    'Circle',
    'LinesIntersectionPoint',
    'LineCircleIntersectionPoint',
    'CirclesIntersectionPoint',
    'intersect_lines',
    'intersect_line_circle',
    'intersect_circle_line',
    'intersect_circles',
    'ConstructionError',
    'UnknownReferenceError',
    'DuplicateNameError',
    'ReservedNameError',
    'InvalidIntersectionError',
    'ForeignEntityError',
    'Diagnostic',
    'Renderer',
    'PointGeometry',
    'LineGeometry',
    'CircleGeometry',
    'collect_geometry',
    'TikzRenderer',
    'generate_tikz_code',
    'generate_tikz_document',
    'EXAMPLES',
    'build_hexagon',
    'build_showcase',
    'orbit_driver',
    'vec2',
]
