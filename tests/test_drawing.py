import math

from drawing import compute_view_scale, render_pattern_image
from shape_geometry import Circle
from spirogen_math import generate_pattern_points


def test_compute_view_scale_fits_points():
    points = [(10.0, 0.0), (-5.0, 2.0), (0.0, -4.0)]
    scale = compute_view_scale(points, 200, 100, margin_ratio=0.5)
    assert math.isclose(scale, min(100 / 10.0, 50 / 4.0))
    assert all(abs(x) * scale <= 100 and abs(y) * scale <= 50 for x, y in points)


def test_compute_view_scale_without_points():
    assert compute_view_scale([], 640, 480) == 1.0


def test_render_pattern_image(qapp):
    guide = Circle(10.0)
    points = generate_pattern_points(guide, Circle(3.0), inside=False, pen_theta=0.0, pen_radius=0.5)
    image = render_pattern_image(points, 96, 64, guide=guide, background="#ffffff")
    assert image.width() == 96
    assert image.height() == 64

    inked = 0
    for x in range(image.width()):
        for y in range(image.height()):
            if image.pixelColor(x, y).name() != "#ffffff":
                inked += 1
    assert inked > 0
    # the pattern is centred: the corners stay blank
    assert image.pixelColor(0, 0).name() == "#ffffff"
    assert image.pixelColor(95, 63).name() == "#ffffff"
