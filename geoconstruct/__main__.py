import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from geoconstruct import (
    EXAMPLES,
    CircleGeometry,
    LineGeometry,
    PointGeometry,
    collect_geometry,
    generate_tikz_document,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _format_record(record) -> str:
    if isinstance(record, PointGeometry):
        x, y = record.position
        return f"  point {record.name}: ({x:.6f}, {y:.6f})"
    if isinstance(record, LineGeometry):
        kind = "segment" if record.segment else "line"
        (ax, ay), (bx, by) = record.start, record.end
        return f"  {kind} {record.name}: ({ax:.6f}, {ay:.6f}) -> ({bx:.6f}, {by:.6f})"
    if isinstance(record, CircleGeometry):
        cx, cy = record.center
        return f"  circle {record.name}: center=({cx:.6f}, {cy:.6f}) r={record.radius:.6f}"
    raise TypeError(f"unexpected geometry record {record!r}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Play a bundled compass-and-straightedge construction")
    parser.add_argument("example", choices=sorted(EXAMPLES), help="Construction to play")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=1,
        help="Number of ticks to evaluate (default: 1)",
    )
    parser.add_argument(
        "--step-ms",
        type=float,
        default=500.0,
        help="Simulated milliseconds between ticks (default: 500)",
    )
    parser.add_argument(
        "--show-hidden",
        action="store_true",
        help="Also report intermediate (invisible) objects",
    )
    parser.add_argument(
        "--tikz-output-path",
        help="Write a standalone TikZ document for the last tick to the given path",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    construction = EXAMPLES[args.example]()
    construction.intermediates_visible = args.show_hidden
    logger.info("Built %s with %d object(s)", args.example, len(construction))
    logger.debug("%s", construction)
    if construction.diagnostics:
        for diagnostic in construction.diagnostics:
            logger.warning("Diagnostic: %s", diagnostic)

    time_ms = 0.0
    for tick in range(max(args.ticks, 1)):
        time_ms = tick * args.step_ms
        generation = construction.tick(time_ms)
        records = collect_geometry(construction, include_hidden=args.show_hidden)
        logger.info("Tick %d (generation %d): %d drawable object(s)", tick, generation, len(records))
        print(f"Tick {tick} @ {time_ms:.0f} ms:")
        for record in records:
            print(_format_record(record))

    if args.tikz_output_path:
        output_path = Path(args.tikz_output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing TikZ document to %s", output_path)
        document = generate_tikz_document(construction, time_ms=time_ms, title=args.example)
        output_path.write_text(document, encoding="utf-8")
        print(f"TikZ document written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
