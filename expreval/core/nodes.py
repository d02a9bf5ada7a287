from typing import List, Optional, Type, TypeVar, cast

import numpy as np

from .errors import InternalInvariantError
from .evaluator import EvaluationContext
from .operators import BinaryOperator, UnaryOperator
from .tree import LEFT, RIGHT, STOP, BinaryTreeNode

NodeTypeKeys = {
    "placeholder": 0,
    "constant": 1,
    "parameter": 2,
    "unary_function": 3,
    "binary_function": 4,
}

NodeType = TypeVar("NodeType", bound="ExpressionNode")


class ExpressionNode(BinaryTreeNode):
    """Expression tree node. Every concrete node is exactly one of the
    subclasses below, and its arity is fixed by its type.
    """

    left: Optional["ExpressionNode"]
    right: Optional["ExpressionNode"]
    parent: Optional["ExpressionNode"]

    @property
    def type_id(self) -> int:
        raise NotImplementedError("must be implemented in subclass")

    def evaluate(self, context: EvaluationContext) -> float:
        """Evaluate the subtree, resolving parameters through `context`"""
        raise NotImplementedError("must be implemented in subclass")

    def is_foldable(self) -> bool:
        """True when every leaf reachable from this node is a constant."""
        return False

    def open_sides(self) -> List[str]:
        """Child sides still holding a placeholder, in the order the tree
        builder fills them."""
        return []

    def fill(self, child: "ExpressionNode") -> "ExpressionNode":
        """Put `child` into the next open side and return `self`"""
        sides = self.open_sides()
        if not sides:
            raise ValueError(f"{self.__class__.__name__} has no open child slots")
        return cast(ExpressionNode, self.set_side(child, sides[0]))

    def to_list(self, visit: str = "preorder") -> List["ExpressionNode"]:
        """Convert this node hierarchy into a list."""
        results: List[ExpressionNode] = []

        def visit_fn(node, depth, data):
            return results.append(node)

        if visit == "inorder":
            self.visit_inorder(visit_fn)
        elif visit == "preorder":
            self.visit_preorder(visit_fn)
        elif visit == "postorder":
            self.visit_postorder(visit_fn)
        else:
            raise ValueError(f"invalid visit order: {visit}")
        return results

    def find_type(self, instanceType: Type[NodeType]) -> List[NodeType]:
        """Find nodes in this tree by type."""
        results = []

        def visit_fn(node, depth, data):
            if isinstance(node, instanceType):
                return results.append(node)

        self.visit_inorder(visit_fn)
        return results

    def has_placeholder(self) -> bool:
        """True if a placeholder survives anywhere in this tree"""
        found = False

        def visit_fn(node, depth, data):
            nonlocal found
            if isinstance(node, PlaceholderNode):
                found = True
                return STOP

        self.visit_preorder(visit_fn)
        return found


class PlaceholderNode(ExpressionNode):
    """Marks a child slot that the tree builder has not filled yet."""

    @property
    def type_id(self) -> int:
        return NodeTypeKeys["placeholder"]

    @property
    def name(self) -> str:
        return "_"

    def evaluate(self, context: EvaluationContext) -> float:
        raise InternalInvariantError(
            "Found a placeholder during evaluation; the tree was not fully built"
        )

    def __str__(self) -> str:
        return self.name


class ConstantNode(ExpressionNode):
    """A Constant value node, where the value is accessible as `node.value`"""

    value: float

    def __init__(self, value: float = 0.0):
        super().__init__()
        self.value = float(value)

    @property
    def type_id(self) -> int:
        return NodeTypeKeys["constant"]

    @property
    def name(self) -> str:
        if np.isfinite(self.value) and self.value % 1 == 0:
            return f"{int(self.value)}"
        return np.format_float_positional(self.value, trim="-")

    def clone(self) -> "ConstantNode":
        return ConstantNode(self.value)

    def evaluate(self, context: EvaluationContext) -> float:
        return self.value

    def is_foldable(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.name


class ParameterNode(ExpressionNode):
    identifier: str

    def __init__(self, identifier: str = "x"):
        super().__init__()
        if not isinstance(identifier, str) or len(identifier) != 1:
            raise ValueError(f"parameter names must be 1 character: {identifier!r}")
        self.identifier = identifier

    @property
    def type_id(self) -> int:
        return NodeTypeKeys["parameter"]

    @property
    def name(self) -> str:
        return self.identifier

    def clone(self) -> "ParameterNode":
        return ParameterNode(self.identifier)

    def evaluate(self, context: EvaluationContext) -> float:
        return context.resolve(self.identifier)

    def __str__(self) -> str:
        return self.identifier


class UnaryFunctionNode(ExpressionNode):
    """Applies a one-argument operator to its only child, which is stored on
    the left side."""

    operator: UnaryOperator

    def __init__(self, operator: UnaryOperator, child: ExpressionNode = None):
        super().__init__()
        self.operator = operator
        self.set_left(child if child is not None else PlaceholderNode())

    @property
    def type_id(self) -> int:
        return NodeTypeKeys["unary_function"]

    @property
    def name(self) -> str:
        return self.operator.name

    @property
    def child(self) -> ExpressionNode:
        return cast(ExpressionNode, self.left)

    def clone(self) -> "UnaryFunctionNode":
        return UnaryFunctionNode(self.operator, self.child.clone())

    def evaluate(self, context: EvaluationContext) -> float:
        return self.operator(self.child.evaluate(context))

    def is_foldable(self) -> bool:
        return self.child.is_foldable()

    def open_sides(self) -> List[str]:
        return [LEFT] if isinstance(self.left, PlaceholderNode) else []

    def __str__(self) -> str:
        return self.operator.describe(str(self.child))


class BinaryFunctionNode(ExpressionNode):
    """Applies a two-argument operator as `operator(left, right)`"""

    operator: BinaryOperator

    def __init__(
        self,
        operator: BinaryOperator,
        left: ExpressionNode = None,
        right: ExpressionNode = None,
    ):
        super().__init__()
        self.operator = operator
        self.set_left(left if left is not None else PlaceholderNode())
        self.set_right(right if right is not None else PlaceholderNode())

    @property
    def type_id(self) -> int:
        return NodeTypeKeys["binary_function"]

    @property
    def name(self) -> str:
        return self.operator.name

    def clone(self) -> "BinaryFunctionNode":
        left, right = cast(ExpressionNode, self.left), cast(ExpressionNode, self.right)
        return BinaryFunctionNode(self.operator, left.clone(), right.clone())

    def evaluate(self, context: EvaluationContext) -> float:
        left, right = cast(ExpressionNode, self.left), cast(ExpressionNode, self.right)
        return self.operator(left.evaluate(context), right.evaluate(context))

    def is_foldable(self) -> bool:
        left, right = cast(ExpressionNode, self.left), cast(ExpressionNode, self.right)
        return left.is_foldable() and right.is_foldable()

    def open_sides(self) -> List[str]:
        # Postfix symbols are consumed last-first, so the right operand
        # arrives before the left one.
        return [
            side
            for side, child in ((RIGHT, self.right), (LEFT, self.left))
            if isinstance(child, PlaceholderNode)
        ]

    def __str__(self) -> str:
        return self.operator.describe(str(self.left), str(self.right))
