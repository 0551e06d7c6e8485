from __future__ import annotations

import importlib.util
import logging
import math
from typing import List, Optional, Tuple

from math_backends import python_backend
from rolling import transform_for_pen
from shape_geometry import NORMAL_EPSILON, Circle, ParametricShape, Rod

Point = Tuple[float, float]
_LOGGER = logging.getLogger(__name__)

NUMBA_AVAILABLE = importlib.util.find_spec("numba") is not None
if NUMBA_AVAILABLE:
    import numba
    import numpy as np

_SHAPE_CIRCLE = 0
_SHAPE_ROD = 1


def _numba_shape_data(shape: ParametricShape) -> Optional[Tuple[int, float, float]]:
    """(kind, first field, second field), or None for shapes it cannot handle."""
    if isinstance(shape, Circle):
        return (_SHAPE_CIRCLE, float(shape.radius), 0.0)
    if isinstance(shape, Rod):
        return (_SHAPE_ROD, float(shape.major_radius), float(shape.aspect_ratio))
    return None


if NUMBA_AVAILABLE:

    @numba.njit(cache=True)
    def _parametric_numba(
        kind: int,
        a: float,
        b: float,
        s_values: np.ndarray,
    ) -> tuple[np.ndarray, np.ndarray]:
        n = len(s_values)
        xs = np.empty(n, dtype=np.float64)
        ys = np.empty(n, dtype=np.float64)
        for i in range(n):
            s = s_values[i]
            if kind == _SHAPE_CIRCLE:
                perim = 2.0 * math.pi * a
                t = (s / perim) % 1.0
                if t < 0.0:
                    t += 1.0
                xs[i] = a * math.cos(2.0 * math.pi * t)
                ys[i] = a * math.sin(2.0 * math.pi * t)
            else:
                side_length = 2.0 * a * (1.0 - b)
                cap_radius = b * 2.0 * a
                cap_length = math.pi * cap_radius
                perim = 2.0 * math.pi * cap_radius + 4.0 * side_length
                t = (perim + s - side_length) % perim
                if t < 0.0:
                    t += perim
                if t < cap_length:
                    alpha = t / cap_radius
                    xs[i] = -cap_radius * math.sin(alpha) - side_length
                    ys[i] = cap_radius * math.cos(alpha)
                elif t < cap_length + 2.0 * side_length:
                    xs[i] = -side_length + t - cap_length
                    ys[i] = -cap_radius
                elif t < 2.0 * cap_length + 2.0 * side_length:
                    alpha = (t - 2.0 * side_length) / cap_radius
                    xs[i] = -cap_radius * math.sin(alpha) + side_length
                    ys[i] = cap_radius * math.cos(alpha)
                else:
                    xs[i] = 3.0 * side_length - t + 2.0 * cap_length
                    ys[i] = cap_radius
        return xs, ys


    @numba.njit(cache=True)
    def _normal_headings_numba(
        kind: int,
        a: float,
        b: float,
        s_values: np.ndarray,
        eps: float,
    ) -> np.ndarray:
        x1, y1 = _parametric_numba(kind, a, b, s_values)
        x0, y0 = _parametric_numba(kind, a, b, s_values - eps)
        n = len(s_values)
        out = np.empty(n, dtype=np.float64)
        cos_q = math.cos(-0.5 * math.pi)
        sin_q = math.sin(-0.5 * math.pi)
        for i in range(n):
            tx = x1[i] - x0[i]
            ty = y1[i] - y0[i]
            out[i] = math.atan2(tx * sin_q + ty * cos_q, tx * cos_q - ty * sin_q)
        return out


    @numba.njit(cache=True)
    def _pattern_numba(
        guide_kind: int,
        guide_a: float,
        guide_b: float,
        wheel_kind: int,
        wheel_a: float,
        wheel_b: float,
        inside: bool,
        s_values: np.ndarray,
        pen_x: float,
        pen_y: float,
        eps: float,
    ) -> tuple[np.ndarray, np.ndarray]:
        if inside:
            s_wheel = s_values.copy()
            flip = 0.0
        else:
            s_wheel = -s_values
            flip = math.pi

        gx, gy = _parametric_numba(guide_kind, guide_a, guide_b, s_values)
        wx, wy = _parametric_numba(wheel_kind, wheel_a, wheel_b, s_wheel)
        head_g = _normal_headings_numba(guide_kind, guide_a, guide_b, s_values, eps)
        head_w = _normal_headings_numba(wheel_kind, wheel_a, wheel_b, s_wheel, eps)

        n = len(s_values)
        out_x = np.empty(n, dtype=np.float64)
        out_y = np.empty(n, dtype=np.float64)
        for i in range(n):
            theta = head_g[i] - head_w[i] + flip
            cos_t = math.cos(theta)
            sin_t = math.sin(theta)
            cos_f = math.cos(math.pi + theta)
            sin_f = math.sin(math.pi + theta)
            # guide point + rotated pen offset + flipped wheel spoke
            out_x[i] = gx[i] + (cos_t * pen_x - sin_t * pen_y) + (cos_f * wx[i] - sin_f * wy[i])
            out_y[i] = gy[i] + (sin_t * pen_x + cos_t * pen_y) + (sin_f * wx[i] + cos_f * wy[i])
        return out_x, out_y


def generate_pattern_points(
    guide: ParametricShape,
    wheel: ParametricShape,
    *,
    inside: bool,
    pen_theta: float,
    pen_radius: float,
) -> List[Point]:
    guide_data = _numba_shape_data(guide)
    wheel_data = _numba_shape_data(wheel)
    if not NUMBA_AVAILABLE or guide_data is None or wheel_data is None:
        _LOGGER.debug("Numba backend falling back to python for %r / %r", guide, wheel)
        return python_backend.generate_pattern_points(
            guide,
            wheel,
            inside=inside,
            pen_theta=pen_theta,
            pen_radius=pen_radius,
        )

    pen = transform_for_pen(wheel, pen_theta, pen_radius).matrix
    s_values = np.array(python_backend.sample_arc_lengths(guide), dtype=np.float64)
    px, py = _pattern_numba(
        guide_data[0],
        guide_data[1],
        guide_data[2],
        wheel_data[0],
        wheel_data[1],
        wheel_data[2],
        bool(inside),
        s_values,
        float(pen[0, 2]),
        float(pen[1, 2]),
        NORMAL_EPSILON,
    )
    return [(float(x), float(y)) for x, y in zip(px, py)]
