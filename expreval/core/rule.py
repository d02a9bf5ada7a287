from typing import List, Optional

from .nodes import ExpressionNode


class BaseRule:
    """Basic tree rewrite rule. Subclasses decide which nodes they match with
    `can_apply_to` and build the replacement node in `apply_to`."""

    @property
    def name(self) -> str:
        """Readable rule name used for debug and description outputs"""
        return "Abstract Base Rule"

    @property
    def code(self) -> str:
        """Short code for debug rendering. Should be two letters."""
        return "XX"

    def find_nodes(self, expression: ExpressionNode) -> List[ExpressionNode]:
        """Find all nodes in an expression that can have this rule applied to them,
        in postorder."""
        nodes: List[ExpressionNode] = []

        def visit_fn(node, depth, data):
            if self.can_apply_to(node):
                nodes.append(node)

        expression.visit_postorder(visit_fn)
        return nodes

    def can_apply_to(self, node: ExpressionNode) -> bool:
        """User-specified function that returns True/False if a rule can be
        applied to a given node.

        !!!warning "Performance Point"

            `can_apply_to` is called for every node of every optimized tree
            and should be implemented as efficiently as possible.
        """
        return False

    def apply_to(self, node: ExpressionNode) -> "ExpressionChangeRule":
        """Apply the rule transformation to the given node, and return a
        ExpressionChangeRule object that captures the input/output states
        for the change."""
        if not self.can_apply_to(node):
            raise ValueError("Cannot apply {} to {}".format(self.name, node))

        return ExpressionChangeRule(self, node)


class ExpressionChangeRule:
    """Object describing the change to an expression tree from a rule transformation"""

    rule: BaseRule
    node: Optional[ExpressionNode]
    result: Optional[ExpressionNode]
    _save_parent: Optional[ExpressionNode]
    _save_side: Optional[str]

    def __init__(self, rule: BaseRule, node: ExpressionNode = None):
        self.rule = rule
        self.node = node
        self.result = None
        self._save_parent = None
        self._save_side = None

    def save_parent(
        self, parent: ExpressionNode = None, side: Optional[str] = None
    ) -> "ExpressionChangeRule":
        """Note the parent of the node being modified, and set it as the parent of the
        rule output automatically."""
        if self.node and parent is None:
            parent = self.node.parent

        self._save_parent = parent
        if parent:
            self._save_side = side or parent.get_side(self.node)

        return self

    def done(self, node: ExpressionNode) -> "ExpressionChangeRule":
        """Set the result of a change to the given node. Restore the parent
        if `save_parent` was called."""
        if self._save_parent and self._save_side:
            self._save_parent.set_side(node, self._save_side)
        self.result = node
        return self
