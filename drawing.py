from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from PySide6.QtCore import QPointF
from PySide6.QtGui import QColor, QImage, QPainter, QPen

from shape_geometry import ParametricShape
from vector_math import Transform2D

Point = Tuple[float, float]

SHAPE_RESOLUTION = 200


def compute_view_scale(points: Sequence[Point], width: int, height: int, margin_ratio: float = 0.45) -> float:
    """Compute a uniform scale so that ``points`` fit inside the viewport.

    The returned scale keeps aspect ratio, applies the requested margin, and
    returns ``1.0`` when there is nothing to draw.
    """

    if not points:
        return 1.0

    max_x = max(abs(x) for x, _ in points) or 1.0
    max_y = max(abs(y) for _, y in points) or 1.0
    sx = (width * margin_ratio) / max_x
    sy = (height * margin_ratio) / max_y
    return min(sx, sy)


def _map_points(points: Iterable[Point], scale: float, offset: Tuple[float, float]) -> List[QPointF]:
    # y grows downwards on screen
    dx, dy = offset
    return [QPointF(x * scale + dx, -y * scale + dy) for (x, y) in points]


def draw_polyline(
    painter: QPainter,
    points: Sequence[Point],
    *,
    color: str = "#1f77b4",
    width: float = 0.0,
    scale: float = 1.0,
    offset: Tuple[float, float] = (0.0, 0.0),
) -> None:
    """Draw an open polyline with cosmetic width by default."""

    if len(points) < 2:
        return
    pen = QPen(QColor(color))
    pen.setWidthF(width)
    painter.setPen(pen)
    painter.drawPolyline(_map_points(points, scale, offset))


def draw_shape(
    painter: QPainter,
    shape: ParametricShape,
    transform: Optional[Transform2D] = None,
    *,
    resolution: int = SHAPE_RESOLUTION,
    color: str = "#808080",
    scale: float = 1.0,
    offset: Tuple[float, float] = (0.0, 0.0),
) -> None:
    """Draw the outline of ``shape``, placed by ``transform`` when given."""

    outline = shape.rasterise(resolution)
    if transform is not None:
        outline = transform @ outline
    draw_polyline(
        painter,
        [point.as_tuple() for point in outline],
        color=color,
        scale=scale,
        offset=offset,
    )


def render_pattern_image(
    points: Sequence[Point],
    width: int = 512,
    height: int = 512,
    *,
    guide: Optional[ParametricShape] = None,
    color: str = "#1f77b4",
    guide_color: str = "#808080",
    background: str = "#ffffff",
) -> QImage:
    """Render a pattern, and optionally its guide, centred in a new image."""

    image = QImage(width, height, QImage.Format.Format_ARGB32)
    image.fill(QColor(background))

    extent = list(points)
    if guide is not None:
        extent.extend(point.as_tuple() for point in guide.rasterise(SHAPE_RESOLUTION))
    scale = compute_view_scale(extent, width, height)
    offset = (width / 2.0, height / 2.0)

    painter = QPainter(image)
    try:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        if guide is not None:
            draw_shape(painter, guide, color=guide_color, scale=scale, offset=offset)
        draw_polyline(painter, points, color=color, scale=scale, offset=offset)
    finally:
        painter.end()
    return image
