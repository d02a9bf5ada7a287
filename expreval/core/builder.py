from typing import List, Optional, Sequence

from .errors import MaxDepthExceeded, MissingOperand, TrailingTokens
from .nodes import ConstantNode, ExpressionNode


class TreeBuilder:
    """Assemble a tree from symbols listed in postfix order.

    Function symbols arrive with placeholder children. The builder walks the
    symbols from last to first: the last symbol is the root, and every
    following symbol fills the next open slot of the nearest unfinished
    ancestor. The build fails when slots are still open once the symbols run
    out, or when symbols remain once every slot is filled.
    """

    max_depth: Optional[int]

    def __init__(self, max_depth: Optional[int] = None):
        self.max_depth = max_depth

    def build(self, symbols: Sequence[ExpressionNode]) -> ExpressionNode:
        if len(symbols) == 0:
            return ConstantNode(0.0)

        ordered = list(reversed(symbols))
        root = ordered[0]
        # Ancestors of the next symbol, root first. Nodes stay on the stack
        # until their slots are full.
        stack: List[ExpressionNode] = [root] if root.open_sides() else []
        for symbol in ordered[1:]:
            while stack and not stack[-1].open_sides():
                stack.pop()
            if not stack:
                raise TrailingTokens(
                    f'Unexpected operand "{symbol}" without an operator'
                )
            if self.max_depth is not None and len(stack) + 1 > self.max_depth:
                raise MaxDepthExceeded(
                    f"Expression is nested deeper than {self.max_depth} levels"
                )
            stack[-1].fill(symbol)
            if symbol.open_sides():
                stack.append(symbol)

        if any(node.open_sides() for node in stack):
            raise MissingOperand("Function or operator without arguments")
        return root
