import pytest

from expreval.core.errors import (
    InvalidSyntax,
    MaxDepthExceeded,
    MissingOperand,
    TrailingTokens,
    UnmatchedParenthesis,
    UnterminatedParenthesis,
)
from expreval.core.evaluator import evaluate
from expreval.core.nodes import ConstantNode, ExpressionNode, ParameterNode
from expreval.core.parser import ExpressionParser


def postfix_names(text: str):
    return [node.name for node in ExpressionParser().to_postfix(text)]


def test_parser_to_postfix():
    expects = [
        ("1 + 2 * 3", ["1", "2", "3", "multiply", "add"]),
        ("(1 + 2) * 3", ["1", "2", "add", "3", "multiply"]),
        ("8 - 4 - 2", ["8", "4", "subtract", "2", "subtract"]),
        ("2^3^2", ["2", "3", "power", "2", "power"]),
        ("sin x^2", ["x", "sin", "2", "power"]),
        ("sin cos x", ["x", "cos", "sin"]),
        ("-5 + 3", ["0", "5", "subtract", "3", "add"]),
        ("7 % 2 / 3", ["7", "2", "modulus", "3", "divide"]),
    ]
    for text, names in expects:
        assert postfix_names(text) == names, text


def test_parser_to_string():
    parser = ExpressionParser()
    expects = [
        ("2 - x", "(2 - x)"),
        ("sin(x) * 2", "(sin(x) * 2)"),
        ("2(3 + 4)", "(2 * (3 + 4))"),
        ("a / b / c", "((a / b) / c)"),
        ("sqrt 2.5", "sqrt(2.5)"),
    ]
    for text, output in expects:
        assert str(parser.parse(text)) == output


def test_parser_builds_complete_trees():
    parser = ExpressionParser()
    for text in ["x^2 + a*x + 1/sin(x)", "(1+1)(1+1)", "-(x - 1)", "abs(-2) % 3"]:
        tree = parser.parse(text)
        assert isinstance(tree, ExpressionNode)
        assert tree.has_placeholder() is False
        assert tree.parent is None


def test_parser_operand_order():
    """the left source operand is the left child of a binary function"""
    tree = ExpressionParser().parse("a - b")
    assert isinstance(tree.left, ParameterNode) and tree.left.identifier == "a"
    assert isinstance(tree.right, ParameterNode) and tree.right.identifier == "b"


def test_parser_empty_input():
    parser = ExpressionParser()
    for text in ["", "   ", "()", "( )"]:
        tree = parser.parse(text)
        assert isinstance(tree, ConstantNode)
        assert tree.value == 0.0


def test_parser_exceptions():
    parser = ExpressionParser()
    expectations = [
        ("sin(", UnterminatedParenthesis),
        (")", UnmatchedParenthesis),
        ("3+", MissingOperand),
        ("sin", MissingOperand),
        ("3+*4", MissingOperand),
        ("2*-3", MissingOperand),
        ("2x", TrailingTokens),
        ("x(1)", TrailingTokens),
        ("2 (3)", TrailingTokens),
        ("4+3+3     3", TrailingTokens),
        ("(1 2)", TrailingTokens),
    ]
    for in_str, out_err in expectations:
        with pytest.raises(out_err):
            parser.parse(in_str)
        # Every error above is a syntax error
        with pytest.raises(InvalidSyntax):
            parser.parse(in_str)


def test_parser_state_survives_errors():
    """a failed parse does not leave stale tokens behind"""
    parser = ExpressionParser()
    with pytest.raises(InvalidSyntax):
        parser.parse("(1 + (2 3))")
    assert str(parser.parse("1 + 2")) == "(1 + 2)"
    assert parser.depth == 0


def test_parser_tokens_cache():
    parser = ExpressionParser()
    first = parser.tokenize("1 + 2")
    first.pop()
    assert len(parser.tokenize("1 + 2")) == 4
    parser.clear_cache()
    assert len(parser.tokenize("1 + 2")) == 4


def test_parser_max_depth():
    parser = ExpressionParser(max_depth=3)
    assert parser.parse("1 + 2 * 3") is not None
    with pytest.raises(MaxDepthExceeded):
        parser.parse("1 + 2 * 3 ^ 4")
    with pytest.raises(MaxDepthExceeded):
        parser.parse("((((1))))")
    # Unbounded by default
    deep = "(" * 50 + "1" + ")" * 50
    assert evaluate(ExpressionParser().parse(deep)) == 1.0
