from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable, List, Tuple

import numpy as np

Point = Tuple[float, float]


@dataclass(frozen=True)
class Coordinate:
    """A 2D point, or the vector from the origin to it."""

    x: float
    y: float

    @classmethod
    def origin(cls) -> "Coordinate":
        return cls(0.0, 0.0)

    def __add__(self, other: "Coordinate") -> "Coordinate":
        return Coordinate(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Coordinate") -> "Coordinate":
        return self + other * -1.0

    def __mul__(self, scalar: float) -> "Coordinate":
        return Coordinate(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Coordinate":
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> "Coordinate":
        return self * (1.0 / scalar)

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def normalised(self) -> "Coordinate":
        """Unit vector along this one. The null vector gives NaN components."""
        mag = self.magnitude()
        if mag == 0:
            return Coordinate(math.nan, math.nan)
        return Coordinate(self.x / mag, self.y / mag)

    def heading(self) -> float:
        """Signed angle from the positive x axis, in (-pi, pi]."""
        return math.atan2(self.y, self.x)

    def rotated(self, theta: float) -> "Coordinate":
        return Transform2D.rotation_xy(theta) @ self

    def as_tuple(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True, eq=False)
class Transform2D:
    """
    Affine map of the plane in homogeneous coordinates.

    ``matrix`` is indexed by (row, col). Composition ``a @ b`` applies ``b``
    first, then ``a``.
    """

    matrix: np.ndarray

    def __post_init__(self) -> None:
        matrix = np.array(self.matrix, dtype=np.float64)
        if matrix.shape != (3, 3):
            raise ValueError(f"Transform2D needs a 3x3 matrix, got {matrix.shape}")
        matrix.setflags(write=False)
        object.__setattr__(self, "matrix", matrix)

    @classmethod
    def identity(cls) -> "Transform2D":
        return cls(np.eye(3))

    @classmethod
    def null(cls) -> "Transform2D":
        return cls(np.zeros((3, 3)))

    @classmethod
    def rotation_xy(cls, theta: float) -> "Transform2D":
        cos = math.cos(theta)
        sin = math.sin(theta)
        return cls(
            [
                [cos, -sin, 0.0],
                [sin, cos, 0.0],
                [0.0, 0.0, 1.0],
            ]
        )

    @classmethod
    def translation(cls, dr: Coordinate) -> "Transform2D":
        return cls(
            [
                [1.0, 0.0, dr.x],
                [0.0, 1.0, dr.y],
                [0.0, 0.0, 1.0],
            ]
        )

    def apply(self, point: Coordinate) -> Coordinate:
        m = self.matrix
        return Coordinate(
            float(m[0, 0] * point.x + m[0, 1] * point.y + m[0, 2]),
            float(m[1, 0] * point.x + m[1, 1] * point.y + m[1, 2]),
        )

    def __matmul__(
        self, other: "Transform2D | Coordinate | Iterable[Coordinate]"
    ) -> "Transform2D | Coordinate | List[Coordinate]":
        if isinstance(other, Transform2D):
            # full 3x3 product, the bottom row is not assumed to be (0, 0, 1)
            return Transform2D(self.matrix @ other.matrix)
        if isinstance(other, Coordinate):
            return self.apply(other)
        return [self.apply(point) for point in other]

    def allclose(self, other: "Transform2D", atol: float = 1e-9) -> bool:
        return bool(np.allclose(self.matrix, other.matrix, atol=atol))


def linspace(lower: float, upper: float, count: int) -> List[float]:
    """
    ``count + 1`` evenly spaced values from ``lower`` to ``upper`` inclusive.
    """
    if count <= 0:
        return [lower]
    return [lower + (upper - lower) * i / count for i in range(count + 1)]
