from typing import cast

from ..core.nodes import BinaryFunctionNode, ExpressionNode, UnaryFunctionNode
from ..core.operators import compose_unary, compose_unary_binary
from ..core.rule import BaseRule, ExpressionChangeRule


class ComposeUnaryRule(BaseRule):
    """Merge a unary function with the function node below it.

    `sin(cos(x))` becomes a single unary node over `x`, and `sqrt(x + y)`
    becomes a single binary node over `x` and `y`.
    """

    @property
    def name(self) -> str:
        return "Unary Composition"

    @property
    def code(self) -> str:
        return "CU"

    def can_apply_to(self, node: ExpressionNode) -> bool:
        if not isinstance(node, UnaryFunctionNode):
            return False
        child = node.child
        if child.is_foldable():
            return False
        return isinstance(child, (UnaryFunctionNode, BinaryFunctionNode))

    def apply_to(self, node: ExpressionNode) -> ExpressionChangeRule:
        change = super().apply_to(node)
        change.save_parent()
        outer = cast(UnaryFunctionNode, node)
        child = outer.child
        result: ExpressionNode
        if isinstance(child, UnaryFunctionNode):
            result = UnaryFunctionNode(
                compose_unary(outer.operator, child.operator), child.child
            )
        else:
            binary = cast(BinaryFunctionNode, child)
            result = BinaryFunctionNode(
                compose_unary_binary(outer.operator, binary.operator),
                binary.left,
                binary.right,
            )
        return change.done(result)
