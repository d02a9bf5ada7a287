from ..core.evaluator import evaluate
from ..core.nodes import (
    BinaryFunctionNode,
    ConstantNode,
    ExpressionNode,
    UnaryFunctionNode,
)
from ..core.rule import BaseRule, ExpressionChangeRule


class FoldConstantsRule(BaseRule):
    """Replace a function whose subtree holds only constants with the constant
    it evaluates to.

    `sqrt(16) + 2*3` becomes `10`
    """

    @property
    def name(self) -> str:
        return "Constant Folding"

    @property
    def code(self) -> str:
        return "CF"

    def can_apply_to(self, node: ExpressionNode) -> bool:
        return isinstance(node, (UnaryFunctionNode, BinaryFunctionNode)) and (
            node.is_foldable()
        )

    def apply_to(self, node: ExpressionNode) -> ExpressionChangeRule:
        change = super().apply_to(node)
        change.save_parent()
        return change.done(ConstantNode(evaluate(node)))
