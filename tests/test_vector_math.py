import math

import numpy as np

from vector_math import Coordinate, Transform2D, linspace


def _close(a: Coordinate, b: Coordinate, tol: float = 1e-9) -> bool:
    return math.isclose(a.x, b.x, abs_tol=tol) and math.isclose(a.y, b.y, abs_tol=tol)


def test_coordinate_arithmetic():
    a = Coordinate(1.0, 2.0)
    b = Coordinate(3.0, -1.0)
    assert a + b == Coordinate(4.0, 1.0)
    assert a - b == Coordinate(-2.0, 3.0)
    assert a * 2.0 == Coordinate(2.0, 4.0)
    assert 2.0 * a == Coordinate(2.0, 4.0)
    assert b / 2.0 == Coordinate(1.5, -0.5)
    assert Coordinate.origin() == Coordinate(0.0, 0.0)


def test_coordinate_magnitude_heading_and_normalised():
    v = Coordinate(3.0, 4.0)
    assert math.isclose(v.magnitude(), 5.0)
    assert math.isclose(v.normalised().magnitude(), 1.0)
    assert math.isclose(Coordinate(0.0, 2.0).heading(), math.pi / 2)
    assert math.isclose(Coordinate(-1.0, -1.0).heading(), -3 * math.pi / 4)


def test_normalised_null_vector_is_nan():
    n = Coordinate.origin().normalised()
    assert math.isnan(n.x) and math.isnan(n.y)


def test_rotated_quarter_turn():
    assert _close(Coordinate(1.0, 0.0).rotated(math.pi / 2), Coordinate(0.0, 1.0))
    assert _close(Coordinate(0.0, 1.0).rotated(-math.pi / 2), Coordinate(1.0, 0.0))


def test_constructors():
    assert np.array_equal(Transform2D.identity().matrix, np.eye(3))
    assert np.array_equal(Transform2D.null().matrix, np.zeros((3, 3)))
    t = Transform2D.translation(Coordinate(2.0, -3.0))
    assert t @ Coordinate(1.0, 1.0) == Coordinate(3.0, -2.0)


def test_composition_applies_right_operand_first():
    rot = Transform2D.rotation_xy(math.pi / 2)
    move = Transform2D.translation(Coordinate(1.0, 0.0))
    p = Coordinate(1.0, 0.0)

    assert _close((move @ rot) @ p, Coordinate(1.0, 1.0))
    assert _close((rot @ move) @ p, Coordinate(0.0, 2.0))


def test_composition_matches_sequential_application():
    transforms = [
        Transform2D.rotation_xy(0.3),
        Transform2D.translation(Coordinate(-2.0, 5.0)),
        Transform2D.rotation_xy(-1.7),
        Transform2D.translation(Coordinate(0.5, 0.25)),
    ]
    composed = Transform2D.identity()
    for t in transforms:
        composed = t @ composed

    for p in [Coordinate(0.0, 0.0), Coordinate(1.0, -2.0), Coordinate(-3.5, 4.0)]:
        expected = p
        for t in transforms:
            expected = t @ expected
        assert _close(composed @ p, expected)


def test_composition_is_associative():
    a = Transform2D.rotation_xy(0.4)
    b = Transform2D.translation(Coordinate(1.0, 2.0))
    c = Transform2D.rotation_xy(2.1)
    assert ((a @ b) @ c).allclose(a @ (b @ c))
    assert not (a @ b).allclose(b @ a)


def test_transform_applied_to_sequence():
    t = Transform2D.translation(Coordinate(1.0, 1.0))
    points = [Coordinate(0.0, 0.0), Coordinate(2.0, 3.0)]
    assert t @ points == [Coordinate(1.0, 1.0), Coordinate(3.0, 4.0)]


def test_transform_matrix_is_read_only():
    t = Transform2D.identity()
    assert not t.matrix.flags.writeable


def test_linspace_counts_and_endpoints():
    values = linspace(0.0, 1.0, 4)
    assert values == [0.0, 0.25, 0.5, 0.75, 1.0]
    assert len(linspace(-2.0, 3.0, 17)) == 18
    assert linspace(1.5, 9.0, 0) == [1.5]
