from typing import cast

from ..core.nodes import BinaryFunctionNode, ExpressionNode, UnaryFunctionNode
from ..core.operators import compose_left_argument, compose_right_argument
from ..core.rule import BaseRule, ExpressionChangeRule


class ComposeBinaryRule(BaseRule):
    """Absorb unary functions applied to the arguments of a binary function
    into the binary function itself.

    A right child `g` turns `f(a, g(b))` into one node over `a` and `b`. Then a
    left child `h` is absorbed the same way, so `sin(x) + cos(y)` collapses
    from three function nodes into one `add[sin,cos]` node over `x` and `y`.
    """

    @property
    def name(self) -> str:
        return "Binary Composition"

    @property
    def code(self) -> str:
        return "CB"

    def can_apply_to(self, node: ExpressionNode) -> bool:
        if not isinstance(node, BinaryFunctionNode) or node.is_foldable():
            return False
        return isinstance(node.left, UnaryFunctionNode) or isinstance(
            node.right, UnaryFunctionNode
        )

    def apply_to(self, node: ExpressionNode) -> ExpressionChangeRule:
        change = super().apply_to(node)
        change.save_parent()
        result = cast(BinaryFunctionNode, node)
        if isinstance(result.right, UnaryFunctionNode):
            inner = result.right
            result = BinaryFunctionNode(
                compose_right_argument(result.operator, inner.operator),
                result.left,
                inner.child,
            )
        if isinstance(result.left, UnaryFunctionNode):
            inner = result.left
            result = BinaryFunctionNode(
                compose_left_argument(result.operator, inner.operator),
                inner.child,
                result.right,
            )
        return change.done(result)
