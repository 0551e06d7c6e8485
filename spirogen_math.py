from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, List, Tuple

from math_backends import numba_backend, python_backend
from math_backends.python_backend import PATTERN_SAMPLES, SAMPLE_STEP
from rolling import transform_for_pen, transform_for_wheel
from shape_geometry import Circle, ParametricShape, Rod, build_shape
from spirogen_request import PatternRequest
from vector_math import Coordinate, Transform2D, linspace

Point = Tuple[float, float]
_LOGGER = logging.getLogger(__name__)

DEFAULT_BACKEND = "python"


@dataclass(frozen=True)
class MathBackend:
    name: str
    label: str
    available: bool
    generator: Callable[..., List[Point]]


_BACKENDS: dict[str, MathBackend] = {}


def register_backend(backend: MathBackend) -> None:
    _BACKENDS[backend.name] = backend


def list_backends(*, available_only: bool = False) -> list[MathBackend]:
    backends = list(_BACKENDS.values())
    if available_only:
        backends = [b for b in backends if b.available]
    return sorted(backends, key=lambda b: b.name)


def get_backend(name: str) -> MathBackend:
    backend = _BACKENDS.get(name)
    if backend is None:
        raise ValueError(f"Unknown math backend: {name}")
    if not backend.available:
        raise ValueError(f"Math backend not available: {name}")
    return backend


def generate_pattern_points(
    guide: ParametricShape,
    wheel: ParametricShape,
    *,
    inside: bool,
    pen_theta: float,
    pen_radius: float,
    backend: str = DEFAULT_BACKEND,
) -> List[Point]:
    """
    Pen positions while ``wheel`` rolls three times round ``guide``.

    Shapes are assumed valid; see ``generate_pattern`` for the checked entry
    point.
    """
    selected = get_backend(backend)
    _LOGGER.debug(
        "Generating pattern with %s backend: guide=%r wheel=%r inside=%s",
        selected.name,
        guide,
        wheel,
        inside,
    )
    return selected.generator(
        guide,
        wheel,
        inside=inside,
        pen_theta=pen_theta,
        pen_radius=pen_radius,
    )


def generate_pattern(request: PatternRequest, backend: str = DEFAULT_BACKEND) -> List[Point]:
    """Validate ``request`` and return its 300 pattern points, in order."""
    guide, wheel = request.build_shapes()
    return generate_pattern_points(
        guide,
        wheel,
        inside=request.inside,
        pen_theta=request.pen_theta,
        pen_radius=request.pen_radius,
        backend=backend,
    )


register_backend(
    MathBackend(
        name="python",
        label="Python",
        available=True,
        generator=python_backend.generate_pattern_points,
    )
)
register_backend(
    MathBackend(
        name="numba",
        label="Numba",
        available=numba_backend.NUMBA_AVAILABLE,
        generator=numba_backend.generate_pattern_points,
    )
)


__all__ = [
    "Circle",
    "Coordinate",
    "DEFAULT_BACKEND",
    "MathBackend",
    "PATTERN_SAMPLES",
    "ParametricShape",
    "Rod",
    "SAMPLE_STEP",
    "Transform2D",
    "build_shape",
    "generate_pattern",
    "generate_pattern_points",
    "get_backend",
    "linspace",
    "list_backends",
    "register_backend",
    "transform_for_pen",
    "transform_for_wheel",
]
