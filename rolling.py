from __future__ import annotations

import math

from shape_geometry import ParametricShape, normal_at
from vector_math import Transform2D


def wheel_arc_length(s: float, inside: bool) -> float:
    """Arc length on the wheel in contact after rolling ``s`` along the guide.

    Outside the guide the wheel turns the other way round relative to its
    own parametrisation.
    """
    return s if inside else -s


def contact_rotation(
    wheel: ParametricShape,
    guide: ParametricShape,
    inside: bool,
    s: float,
) -> float:
    """Angle that turns the wheel's contact normal onto the guide's one."""
    s_wheel = wheel_arc_length(s, inside)
    norm_guide = normal_at(guide, s)
    norm_wheel = normal_at(wheel, s_wheel)
    # outside, the wheel's outward face has to point back at the guide
    return norm_guide.heading() - norm_wheel.heading() + (0.0 if inside else math.pi)


def transform_for_wheel(
    wheel: ParametricShape,
    guide: ParametricShape,
    inside: bool,
    s: float,
) -> Transform2D:
    """
    Place ``wheel`` in contact with ``guide`` after rolling, without slipping,
    a distance ``s`` along the guide's perimeter.

    The returned transform maps the wheel's own frame into the guide's frame.
    """
    s_wheel = wheel_arc_length(s, inside)
    theta = contact_rotation(wheel, guide, inside, s)

    t = Transform2D.identity()

    # align the normals
    t = Transform2D.rotation_xy(theta) @ t

    # carry the wheel to the guide's contact point
    t = Transform2D.translation(guide.parametric(s)) @ t

    # back off by the wheel's own contact spoke, rotated into place and
    # flipped, so both contact points coincide
    spoke = Transform2D.rotation_xy(math.pi + theta) @ wheel.parametric(s_wheel)
    t = Transform2D.translation(spoke) @ t

    return t


def transform_for_pen(
    wheel: ParametricShape,
    theta: float,
    radius: float,
) -> Transform2D:
    """
    Offset from the wheel's centre to the pen.

    ``theta`` in [0, 2pi] picks the point on the wheel's rim, ``radius`` in
    [0, 1] scales from the centre (0) to that rim point (1).
    """
    s = 0.5 * theta / math.pi * wheel.perimeter()
    radius = min(max(radius, 0.0), 1.0)
    return Transform2D.translation(wheel.parametric(s) * radius)
