from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Optional

from shape_geometry import SHAPE_CIRCLE, SHAPE_ROD, ParametricShape, build_shape

_NUM_RE = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"


@dataclass(frozen=True)
class ShapeSpec:
    kind: str
    radius: float
    param: Optional[float] = None

    def build(self) -> ParametricShape:
        return build_shape(self.kind, self.radius, self.param)


class DslParseError(ValueError):
    pass


def normalize_dsl_text(expr: str) -> str:
    return "".join(ch for ch in expr if not ch.isspace()).upper()


def parse_shape_expression(expr: str) -> ShapeSpec:
    """
    ``C(radius)`` for a circle, ``R(major_radius,aspect_ratio)`` for a rod.

    Case and whitespace are ignored. Values are not range-checked here.
    """
    cleaned = normalize_dsl_text(expr)
    if not cleaned:
        raise DslParseError("Empty expression")

    circle_match = re.fullmatch(rf"C\(({_NUM_RE})\)", cleaned)
    if circle_match:
        return ShapeSpec(SHAPE_CIRCLE, float(circle_match.group(1)))

    rod_match = re.fullmatch(rf"R\(({_NUM_RE}),({_NUM_RE})\)", cleaned)
    if rod_match:
        return ShapeSpec(SHAPE_ROD, float(rod_match.group(1)), float(rod_match.group(2)))

    raise DslParseError(f"Unrecognized shape expression: {expr}")

