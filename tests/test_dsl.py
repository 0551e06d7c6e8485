import pytest

from shape_dsl import DslParseError, ShapeSpec, normalize_dsl_text, parse_shape_expression
from shape_geometry import Circle, Rod


def test_normalize_dsl_text_uppercases_and_strips():
    assert normalize_dsl_text(" c( 96 ) ") == "C(96)"


def test_parse_circle_expression_case_insensitive():
    spec = parse_shape_expression("c(10)")
    assert spec == ShapeSpec("Circle", 10.0)
    assert spec.build() == Circle(10.0)


def test_parse_rod_expression():
    spec = parse_shape_expression("R( 2 , .3 )")
    assert spec == ShapeSpec("Rod", 2.0, 0.3)
    assert spec.build() == Rod(2.0, 0.3)


def test_parse_accepts_exponents_and_signs():
    assert parse_shape_expression("C(1e-3)").radius == pytest.approx(0.001)
    # range checks belong to the request, not the parser
    assert parse_shape_expression("C(-4)").radius == -4.0


@pytest.mark.parametrize("expr", ["", "   ", "C()", "C(1,2)", "R(2)", "P4(120,96/24)", "circle(3)"])
def test_parse_rejects_unknown_expressions(expr):
    with pytest.raises(DslParseError):
        parse_shape_expression(expr)
