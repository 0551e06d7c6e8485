from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Callable, Dict, List, Optional

from vector_math import Coordinate, linspace

NORMAL_EPSILON = 1e-4
RASTER_FRACTION = 0.95

SHAPE_CIRCLE = "Circle"
SHAPE_ROD = "Rod"


class ParametricShape:
    """
    Closed curve parametrised by arc length, centred on its own origin.

    Subclasses provide ``parametric``, ``perimeter``, ``min_radius`` and
    ``max_radius``; rasterisation and normals are shared (see the module
    level ``rasterise`` and ``normal_at``).
    """

    def parametric(self, s: float) -> Coordinate:
        raise NotImplementedError

    def perimeter(self) -> float:
        raise NotImplementedError

    def min_radius(self) -> float:
        """Smallest radius of curvature along the curve."""
        raise NotImplementedError

    def max_radius(self) -> float:
        """Largest radius of curvature along the curve (inf on straight edges)."""
        raise NotImplementedError

    def rasterise(self, resolution: int) -> List[Coordinate]:
        return rasterise(self, resolution)

    def normal_at(self, s: float) -> Coordinate:
        return normal_at(self, s)


def rasterise(shape: ParametricShape, resolution: int) -> List[Coordinate]:
    """
    ``resolution + 1`` points along the curve.

    Stops at 95% of the perimeter so that a naive polyline of the result does
    not close on itself.
    """
    return [
        shape.parametric(s)
        for s in linspace(0.0, shape.perimeter() * RASTER_FRACTION, resolution)
    ]


def normal_at(shape: ParametricShape, s: float) -> Coordinate:
    """Outward unit normal at arc length ``s``, from a backward difference."""
    tangent = shape.parametric(s) - shape.parametric(s - NORMAL_EPSILON)
    return tangent.rotated(-math.pi * 0.5).normalised()


@dataclass(frozen=True)
class Circle(ParametricShape):
    radius: float

    def perimeter(self) -> float:
        return 2.0 * math.pi * self.radius

    def min_radius(self) -> float:
        return self.radius

    def max_radius(self) -> float:
        return self.radius

    def parametric(self, s: float) -> Coordinate:
        t = (s / self.perimeter()) % 1.0
        if t < 0.0:
            t += 1.0
        return Coordinate(
            self.radius * math.cos(2.0 * math.pi * t),
            self.radius * math.sin(2.0 * math.pi * t),
        )


@dataclass(frozen=True)
class Rod(ParametricShape):
    """Stadium: two semicircular caps joined by two straight edges."""

    major_radius: float  # centre to cap
    aspect_ratio: float  # width / length, in (0, 1)

    @property
    def side_length(self) -> float:
        return 2.0 * self.major_radius * (1.0 - self.aspect_ratio)

    @property
    def cap_radius(self) -> float:
        return self.aspect_ratio * 2.0 * self.major_radius

    def perimeter(self) -> float:
        return 2.0 * math.pi * self.cap_radius + 4.0 * self.side_length

    def min_radius(self) -> float:
        return self.cap_radius

    def max_radius(self) -> float:
        return math.inf

    def parametric(self, s: float) -> Coordinate:
        side_length = self.side_length
        cap_radius = self.cap_radius
        cap_length = math.pi * cap_radius

        # s = 0 sits in the middle of the top edge
        perim = self.perimeter()
        t = (perim + s - side_length) % perim
        if t < 0.0:
            t += perim

        if t < cap_length:
            # cap centred on x = -side_length
            alpha = t / cap_radius
            return Coordinate(
                -cap_radius * math.sin(alpha) - side_length,
                cap_radius * math.cos(alpha),
            )
        if t < cap_length + 2.0 * side_length:
            # bottom edge
            return Coordinate(-side_length + t - cap_length, -cap_radius)
        if t < 2.0 * cap_length + 2.0 * side_length:
            # cap centred on x = +side_length
            alpha = (t - 2.0 * side_length) / cap_radius
            return Coordinate(
                -cap_radius * math.sin(alpha) + side_length,
                cap_radius * math.cos(alpha),
            )
        # top edge
        return Coordinate(3.0 * side_length - t + 2.0 * cap_length, cap_radius)


def build_circle(radius: float, param: Optional[float] = None) -> Circle:
    return Circle(radius)


def build_rod(radius: float, param: Optional[float] = None) -> Rod:
    return Rod(radius, 1.0 if param is None else param)


SHAPE_BUILDERS: Dict[str, Callable[[float, Optional[float]], ParametricShape]] = {
    SHAPE_CIRCLE: build_circle,
    SHAPE_ROD: build_rod,
}

# kinds that cannot be built without their extra parameter
SHAPES_WITH_PARAM = frozenset({SHAPE_ROD})


def shape_needs_param(kind: str) -> bool:
    return kind in SHAPES_WITH_PARAM


def build_shape(kind: str, radius: float, param: Optional[float] = None) -> ParametricShape:
    """
    Build a fresh shape of the named kind. Inputs are not validated here.
    """
    try:
        builder = SHAPE_BUILDERS[kind]
    except KeyError:
        raise ValueError(f"Unknown shape kind: {kind}") from None
    return builder(radius, param)


def wheel_fits_inside(wheel: ParametricShape, guide: ParametricShape) -> bool:
    return wheel.max_radius() <= guide.min_radius()
