import numpy as np
import pytest

from expreval.core.operators import (
    BINARY_OPERATORS,
    FUNCTION_ALIASES,
    NAMED_CONSTANTS,
    UNARY_OPERATORS,
    compose_left_argument,
    compose_right_argument,
    compose_unary,
    compose_unary_binary,
)


def test_operators_primitives():
    assert BINARY_OPERATORS["-"](5.0, 3.0) == 2.0
    assert BINARY_OPERATORS["/"](6.0, 3.0) == 2.0
    assert BINARY_OPERATORS["^"](2.0, 3.0) == 8.0
    assert UNARY_OPERATORS["cbrt"](27.0) == pytest.approx(3.0)
    assert UNARY_OPERATORS["ln"](NAMED_CONSTANTS["e"]) == pytest.approx(1.0)
    assert UNARY_OPERATORS["abs"](-4.0) == 4.0
    assert str(BINARY_OPERATORS["%"]) == "(a % b)"
    assert str(UNARY_OPERATORS["sqrt"]) == "sqrt(a)"


def test_operators_modulus_truncates_operands():
    mod = BINARY_OPERATORS["%"]
    assert mod(7.0, 3.0) == 1.0
    assert mod(7.9, 2.5) == 1.0
    assert mod(-7.0, 3.0) == -1.0
    assert mod(7.0, -3.0) == 1.0
    with np.errstate(all="ignore"):
        assert np.isnan(mod(5.0, 0.0))


def test_operators_tables_are_read_only():
    with pytest.raises(TypeError):
        BINARY_OPERATORS["+"] = BINARY_OPERATORS["-"]  # type:ignore
    with pytest.raises(TypeError):
        UNARY_OPERATORS["sin"] = UNARY_OPERATORS["cos"]  # type:ignore
    assert FUNCTION_ALIASES["tg"] == "tan"
    assert FUNCTION_ALIASES["atg"] == "atan"


def test_operators_compose_unary():
    op = compose_unary(UNARY_OPERATORS["sqrt"], UNARY_OPERATORS["abs"])
    assert op.arity == 1
    assert op(-16.0) == 4.0
    assert str(op) == "sqrt(abs(a))"
    assert op.name == "sqrt.abs"
    assert repr(op) == "<ComposedUnaryOperator sqrt(abs(a))>"


def test_operators_compose_unary_binary():
    op = compose_unary_binary(UNARY_OPERATORS["abs"], BINARY_OPERATORS["-"])
    assert op.arity == 2
    assert op(1.0, 4.0) == 3.0
    assert str(op) == "abs((a - b))"


def test_operators_compose_arguments():
    sub = BINARY_OPERATORS["-"]
    right = compose_right_argument(sub, UNARY_OPERATORS["abs"])
    assert right(1.0, -4.0) == -3.0
    assert str(right) == "(a - abs(b))"

    both = compose_left_argument(right, UNARY_OPERATORS["sqrt"])
    assert both(16.0, -1.0) == 3.0
    assert str(both) == "(sqrt(a) - abs(b))"
    assert both.describe("x", "y") == "(sqrt(x) - abs(y))"
