from __future__ import annotations

from typing import List, Tuple

from rolling import transform_for_pen, transform_for_wheel
from shape_geometry import ParametricShape
from vector_math import Coordinate

Point = Tuple[float, float]

# three turns of the guide, a hundredth of its perimeter apart
PATTERN_SAMPLES = 300
SAMPLE_STEP = 0.01


def sample_arc_lengths(guide: ParametricShape) -> List[float]:
    perimeter = guide.perimeter()
    return [perimeter * SAMPLE_STEP * i for i in range(PATTERN_SAMPLES)]


def generate_pattern_points(
    guide: ParametricShape,
    wheel: ParametricShape,
    *,
    inside: bool,
    pen_theta: float,
    pen_radius: float,
) -> List[Point]:
    """
    Reference implementation: compose the wheel placement and the pen offset
    for every sample and map the wheel's origin through them.
    """
    trans_pen = transform_for_pen(wheel, pen_theta, pen_radius)
    origin = Coordinate.origin()

    points: List[Point] = []
    for s in sample_arc_lengths(guide):
        trans_wheel = transform_for_wheel(wheel, guide, inside, s)
        points.append((trans_wheel @ trans_pen @ origin).as_tuple())
    return points
