from typing import List, Optional

from ..rules import ComposeBinaryRule, ComposeUnaryRule, FoldConstantsRule
from .nodes import ExpressionNode
from .rule import BaseRule


class ExpressionOptimizer:
    """Rewrite a tree into an equivalent one that is faster to evaluate.

    A single postorder pass visits each node after its children have been
    rewritten, and offers it to every rule in order. A rule sees the node as
    left by the previous rules, so a binary node can have both of its
    argument functions absorbed in the same visit.
    """

    rules: List[BaseRule]

    def __init__(self, rules: Optional[List[BaseRule]] = None):
        if rules is None:
            rules = [FoldConstantsRule(), ComposeBinaryRule(), ComposeUnaryRule()]
        self.rules = rules

    def optimize(self, node: ExpressionNode) -> ExpressionNode:
        """Optimize the tree rooted at `node` and return the new root"""
        if node.left is not None:
            node.set_left(self.optimize(node.left))
        if node.right is not None:
            node.set_right(self.optimize(node.right))
        for rule in self.rules:
            if rule.can_apply_to(node):
                change = rule.apply_to(node)
                assert change.result is not None
                node = change.result
        return node
