"""Compute a spirograph pattern and print its points as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QApplication, QLabel

from drawing import render_pattern_image
from localisation import default_language, shape_label, tr
from shape_dsl import DslParseError, parse_shape_expression
from shape_geometry import ParametricShape
from spirogen_math import DEFAULT_BACKEND, generate_pattern_points, get_backend, list_backends
from spirogen_request import PatternRequest, PatternRequestError, load_request

Point = Tuple[float, float]
_LOGGER = logging.getLogger(__name__)

EXIT_REQUEST_ERROR = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="spirogen", description=__doc__)
    parser.add_argument("guide", nargs="?", help="Guide shape, e.g. C(10) or R(2,0.3).")
    parser.add_argument("wheel", nargs="?", help="Wheel shape, e.g. C(3).")
    parser.add_argument(
        "--config",
        type=Path,
        help="JSON request file; replaces the positional shapes and pen options.",
    )
    parser.add_argument("--inside", action="store_true", help="Roll the wheel inside the guide.")
    parser.add_argument("--pen-radius", type=float, default=1.0, help="Pen offset in [0, 1].")
    parser.add_argument("--pen-theta", type=float, default=0.0, help="Pen angle in radians.")
    parser.add_argument("--backend", default=DEFAULT_BACKEND, help="Math backend to use.")
    parser.add_argument("--lang", default=default_language(), help="Language for messages.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level.")
    parser.add_argument("--preview", action="store_true", help="Show the pattern in a window.")
    parser.add_argument(
        "--list-backends",
        action="store_true",
        help="List the math backends and exit.",
    )
    args = parser.parse_args(argv)
    if not args.list_backends and args.config is None and (args.guide is None or args.wheel is None):
        parser.error("GUIDE and WHEEL are required unless --config is given")
    return args


def request_from_args(args: argparse.Namespace) -> PatternRequest:
    if args.config is not None:
        return load_request(args.config)
    guide = parse_shape_expression(args.guide)
    wheel = parse_shape_expression(args.wheel)
    return PatternRequest(
        guide=guide.kind,
        wheel=wheel.kind,
        guide_radius=guide.radius,
        wheel_radius=wheel.radius,
        pen_radius=args.pen_radius,
        pen_theta=args.pen_theta,
        guide_param=guide.param,
        wheel_param=wheel.param,
        inside=args.inside,
    )


def show_preview(points: List[Point], request: PatternRequest, guide: ParametricShape, lang: str) -> int:
    app = QApplication.instance() or QApplication(sys.argv[:1])
    image = render_pattern_image(points, guide=guide)
    label = QLabel()
    label.setPixmap(QPixmap.fromImage(image))
    label.setWindowTitle(
        f"{tr(lang, 'preview_title')}: "
        f"{shape_label(request.guide, lang)} / {shape_label(request.wheel, lang)}"
    )
    label.show()
    return app.exec()


def _print_json(data: dict) -> None:
    sys.stdout.write(json.dumps(data))
    sys.stdout.write("\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_backends:
        for backend in list_backends():
            status = "" if backend.available else " (unavailable)"
            print(f"{backend.name}\t{backend.label}{status}")
        return 0

    try:
        get_backend(args.backend)
    except ValueError as exc:
        _LOGGER.error("%s", exc)
        _print_json({"message": str(exc)})
        return EXIT_REQUEST_ERROR

    try:
        request = request_from_args(args)
        guide, wheel = request.build_shapes()
    except PatternRequestError as exc:
        _print_json({"message": exc.localised(args.lang)})
        return EXIT_REQUEST_ERROR
    except (DslParseError, OSError, json.JSONDecodeError) as exc:
        _print_json({"message": str(exc)})
        return EXIT_REQUEST_ERROR

    points = generate_pattern_points(
        guide,
        wheel,
        inside=request.inside,
        pen_theta=request.pen_theta,
        pen_radius=request.pen_radius,
        backend=args.backend,
    )

    _print_json({"points": [[x, y] for x, y in points]})
    if args.preview:
        return show_preview(points, request, guide, args.lang)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
