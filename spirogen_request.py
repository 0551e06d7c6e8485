"""
Pattern requests: the validated inputs of the pattern generator.

The geometry in ``shape_geometry`` and ``rolling`` trusts its inputs; every
check on user-supplied values lives here, in the order the service has always
applied them (missing parameter, radii, shape parameters, pen, fit).
"""

from __future__ import annotations

from dataclasses import MISSING, dataclass, fields
import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from localisation import DEFAULT_LANGUAGE, tr
from shape_geometry import (
    SHAPE_BUILDERS,
    SHAPE_ROD,
    ParametricShape,
    build_shape,
    shape_needs_param,
    wheel_fits_inside,
)

_LOGGER = logging.getLogger(__name__)

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


class PatternRequestError(ValueError):
    """A request the generator refuses; the message is meant for the caller."""

    key = "error_invalid_request"

    def __init__(self, key: Optional[str] = None, **fields: Any) -> None:
        if key is not None:
            self.key = key
        self.fields = fields
        super().__init__(tr(DEFAULT_LANGUAGE, self.key, **fields))

    def localised(self, lang: str) -> str:
        return tr(lang, self.key, **self.fields)


class UnknownShapeError(PatternRequestError):
    key = "error_unknown_shape"


class MissingParameterError(PatternRequestError):
    key = "error_missing_param"


class InvalidShapeParameterError(PatternRequestError):
    key = "error_non_positive_radius"


class PenParameterError(PatternRequestError):
    key = "error_pen_radius_range"


class InfeasibleFitError(PatternRequestError):
    key = "error_wheel_does_not_fit"


@dataclass
class PatternRequest:
    guide: str                  # Circle / Rod
    wheel: str                  # Circle / Rod
    guide_radius: float
    wheel_radius: float
    pen_radius: float           # 0 = wheel centre, 1 = wheel rim
    pen_theta: float            # radians, 0 .. 2pi
    guide_param: Optional[float] = None  # aspect ratio, required for Rod
    wheel_param: Optional[float] = None
    inside: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PatternRequest":
        """
        Build a request from JSON or query-string values.

        Numbers may be given as strings and ``inside`` as a boolean word.
        Unknown keys are ignored.
        """
        values: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data or data[f.name] is None:
                if f.default is MISSING:
                    raise MissingParameterError("error_missing_field", field=f.name)
                continue
            raw = data[f.name]
            if f.name in ("guide", "wheel"):
                values[f.name] = str(raw).strip()
            elif f.name == "inside":
                values[f.name] = _parse_bool(f.name, raw)
            else:
                values[f.name] = _parse_float(f.name, raw)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def validate(self) -> None:
        try:
            self._validate()
        except PatternRequestError as exc:
            _LOGGER.debug("Rejected pattern request %r: %s", self, exc)
            raise

    def _validate(self) -> None:
        for role, kind, param in (
            ("guide", self.guide, self.guide_param),
            ("wheel", self.wheel, self.wheel_param),
        ):
            if kind not in SHAPE_BUILDERS:
                raise UnknownShapeError(role=role, kind=kind)
            if param is None and shape_needs_param(kind):
                raise MissingParameterError(role=role, kind=kind)

        for name in ("guide_radius", "wheel_radius", "guide_param", "wheel_param"):
            value = getattr(self, name)
            if value is not None and math.isinf(value):
                raise InvalidShapeParameterError("error_not_a_number", field=name, value=value)
        if not (self.guide_radius > 0.0 and self.wheel_radius > 0.0):
            raise InvalidShapeParameterError()
        for role, kind, param in (
            ("guide", self.guide, self.guide_param),
            ("wheel", self.wheel, self.wheel_param),
        ):
            if param is None:
                continue
            if not param > 0.0:
                raise InvalidShapeParameterError("error_non_positive_param")
            if kind == SHAPE_ROD and param >= 1.0:
                raise InvalidShapeParameterError("error_aspect_ratio_range", role=role)

        if not 0.0 <= self.pen_radius <= 1.0:
            raise PenParameterError()
        if not 0.0 <= self.pen_theta <= 2.0 * math.pi:
            raise PenParameterError("error_pen_theta_range")

    def build_shapes(self) -> Tuple[ParametricShape, ParametricShape]:
        """Validate, then build fresh (guide, wheel) shapes and check the fit."""
        self.validate()
        guide = build_shape(self.guide, self.guide_radius, self.guide_param)
        wheel = build_shape(self.wheel, self.wheel_radius, self.wheel_param)
        if self.inside and not wheel_fits_inside(wheel, guide):
            exc = InfeasibleFitError()
            _LOGGER.debug("Rejected pattern request %r: %s", self, exc)
            raise exc
        return guide, wheel


def _parse_float(name: str, raw: Any) -> float:
    if isinstance(raw, bool):
        raise InvalidShapeParameterError("error_not_a_number", field=name, value=raw)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidShapeParameterError("error_not_a_number", field=name, value=raw) from None
    if not math.isfinite(value):
        raise InvalidShapeParameterError("error_not_a_number", field=name, value=raw)
    return value


def _parse_bool(name: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise InvalidShapeParameterError("error_not_a_boolean", field=name, value=raw)


def load_request(path: Path | str) -> PatternRequest:
    with Path(path).open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    return PatternRequest.from_dict(data)
