import pytest

from expreval.core.evaluator import evaluate
from expreval.core.nodes import (
    BinaryFunctionNode,
    ConstantNode,
    ParameterNode,
    UnaryFunctionNode,
)
from expreval.core.parser import ExpressionParser
from expreval.rules import ComposeBinaryRule, ComposeUnaryRule, FoldConstantsRule


def test_rules_codes_and_names():
    for rule, code in [
        (FoldConstantsRule(), "CF"),
        (ComposeBinaryRule(), "CB"),
        (ComposeUnaryRule(), "CU"),
    ]:
        assert rule.code == code
        assert rule.name != "Abstract Base Rule"


def test_rules_fold_constants():
    parser = ExpressionParser()
    rule = FoldConstantsRule()
    tree = parser.parse("x + sqrt(16) * 2")
    nodes = rule.find_nodes(tree)
    # sqrt(16), then the product that holds it
    assert [n.name for n in nodes] == ["sqrt", "multiply"]
    product = nodes[-1]
    change = rule.apply_to(product)
    assert isinstance(change.result, ConstantNode)
    assert change.result.value == 8.0
    # The result is spliced into the parent's slot
    assert tree.right is change.result
    assert change.result.parent is tree
    assert str(tree) == "(x + 8)"


def test_rules_fold_constants_skips_parameters_and_leaves():
    rule = FoldConstantsRule()
    assert rule.can_apply_to(ExpressionParser().parse("x + 1")) is False
    assert rule.can_apply_to(ConstantNode(1)) is False
    assert rule.can_apply_to(ParameterNode("x")) is False


def test_rules_apply_to_rejects_unmatched_nodes():
    with pytest.raises(ValueError):
        ComposeUnaryRule().apply_to(ParameterNode("x"))


def test_rules_compose_binary_right_then_left():
    tree = ExpressionParser().parse("sin(x) - cos(y)")
    rule = ComposeBinaryRule()
    assert rule.can_apply_to(tree)
    result = rule.apply_to(tree).result
    assert isinstance(result, BinaryFunctionNode)
    assert isinstance(result.left, ParameterNode) and result.left.identifier == "x"
    assert isinstance(result.right, ParameterNode) and result.right.identifier == "y"
    assert str(result) == "(sin(x) - cos(y))"
    assert len(result.to_list()) == 3
    params = {"x": 0.3, "y": 1.2}
    assert evaluate(result, params) == pytest.approx(evaluate(tree, params))


def test_rules_compose_binary_single_side():
    rule = ComposeBinaryRule()
    tree = ExpressionParser().parse("x ^ abs(y)")
    result = rule.apply_to(tree).result
    assert str(result.operator) == "(a ^ abs(b))"
    assert evaluate(result, {"x": 2.0, "y": -3.0}) == 8.0

    tree = ExpressionParser().parse("abs(x) / y")
    result = rule.apply_to(tree).result
    assert str(result.operator) == "(abs(a) / b)"
    assert evaluate(result, {"x": -9.0, "y": 3.0}) == 3.0

    # Nothing to absorb, or everything is constant
    assert rule.can_apply_to(ExpressionParser().parse("x + y")) is False
    assert rule.can_apply_to(ExpressionParser().parse("sin(1) + 2")) is False


def test_rules_compose_unary():
    rule = ComposeUnaryRule()
    tree = ExpressionParser().parse("sqrt abs x")
    result = rule.apply_to(tree).result
    assert isinstance(result, UnaryFunctionNode)
    assert isinstance(result.child, ParameterNode)
    assert str(result) == "sqrt(abs(x))"
    assert evaluate(result, {"x": -16.0}) == 4.0

    tree = ExpressionParser().parse("abs(x - y)")
    result = rule.apply_to(tree).result
    assert isinstance(result, BinaryFunctionNode)
    assert str(result) == "abs((x - y))"
    assert evaluate(result, {"x": 1.0, "y": 4.0}) == 3.0

    assert rule.can_apply_to(ExpressionParser().parse("sin x")) is False
    assert rule.can_apply_to(ExpressionParser().parse("sin(cos 1)")) is False


def test_rules_change_keeps_parent_link():
    tree = ExpressionParser().parse("2 * sin(cos(x))")
    unary = tree.right
    change = ComposeUnaryRule().apply_to(unary)
    assert tree.right is change.result
    assert change.result.parent is tree
