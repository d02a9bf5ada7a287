from typing import Callable, List, Optional

# Returned by a visit function to end the traversal early
STOP = "stop"
# Child side names
LEFT = "left"
RIGHT = "right"

VisitFunction = Callable[["BinaryTreeNode", int, object], Optional[str]]


class BinaryTreeNode:
    """Base node of expression trees.

    A node owns at most two children and points back at its parent, so that a
    rewrite can put a replacement node into the slot the old one occupied.
    Children must only be attached through `set_left`, `set_right` or
    `set_side`, which keep the parent links consistent.
    """

    left: Optional["BinaryTreeNode"]
    right: Optional["BinaryTreeNode"]
    parent: Optional["BinaryTreeNode"]

    def __init__(
        self,
        left: "BinaryTreeNode" = None,
        right: "BinaryTreeNode" = None,
        parent: "BinaryTreeNode" = None,
    ):
        self.left = None
        self.right = None
        self.set_left(left)
        self.set_right(right)
        self.parent = parent

    def clone(self):
        """Deep copy of this subtree. The copy is detached from any parent."""
        result = self.__class__()
        if self.left:
            result.set_left(self.left.clone())
        if self.right:
            result.set_right(self.right.clone())
        return result

    def is_leaf(self) -> bool:
        return not self.left and not self.right

    def __str__(self):
        return "{} {}".format(self.left, self.right)

    @property
    def name(self) -> str:
        """Short label for the node, used when listing a tree"""
        return "BinaryTreeNode"

    # ## Traversal
    #
    # Each visit function receives `(node, depth, data)`, where depth counts
    # from 0 at the node the traversal started on. A visit that returns STOP
    # ends the whole traversal, and STOP is returned to the caller.

    def visit_preorder(self, visit_fn: VisitFunction, depth=0, data=None):
        """Node, then left subtree, then right subtree"""
        if visit_fn and visit_fn(self, depth, data) == STOP:
            return STOP
        for child in (self.left, self.right):
            if child and child.visit_preorder(visit_fn, depth + 1, data) == STOP:
                return STOP

    def visit_inorder(self, visit_fn: VisitFunction, depth=0, data=None):
        """Left subtree, then node, then right subtree"""
        if self.left and self.left.visit_inorder(visit_fn, depth + 1, data) == STOP:
            return STOP
        if visit_fn and visit_fn(self, depth, data) == STOP:
            return STOP
        if self.right and self.right.visit_inorder(visit_fn, depth + 1, data) == STOP:
            return STOP

    def visit_postorder(self, visit_fn: VisitFunction, depth=0, data=None):
        """Left subtree, then right subtree, then node. Every child is seen
        before its parent, which is the order rewrites need."""
        for child in (self.left, self.right):
            if child and child.visit_postorder(visit_fn, depth + 1, data) == STOP:
                return STOP
        if visit_fn and visit_fn(self, depth, data) == STOP:
            return STOP

    def get_root(self) -> "BinaryTreeNode":
        result = self
        while result.parent:
            result = result.parent
        return result

    # ## Children

    def set_left(self, child: "BinaryTreeNode" = None) -> "BinaryTreeNode":
        """Attach `child` on the left and make this node its parent"""
        return self._attach(LEFT, child)

    def set_right(self, child: "BinaryTreeNode" = None) -> "BinaryTreeNode":
        """Attach `child` on the right and make this node its parent"""
        return self._attach(RIGHT, child)

    def _attach(self, side: str, child: Optional["BinaryTreeNode"]) -> "BinaryTreeNode":
        if child is self:
            raise ValueError("nodes cannot be their own children")
        setattr(self, side, child)
        if child:
            child.parent = self
        return self

    def get_side(self, child: "BinaryTreeNode") -> str:
        """Which side of this node holds `child`"""
        if child is self.left:
            return LEFT
        if child is self.right:
            return RIGHT
        raise ValueError("BinaryTreeNode.get_side: not a child of this node")

    def set_side(self, child: "BinaryTreeNode", side: str) -> "BinaryTreeNode":
        if side == LEFT:
            return self.set_left(child)
        if side == RIGHT:
            return self.set_right(child)
        raise ValueError("BinaryTreeNode.set_side: Invalid side")

    def get_children(self) -> List["BinaryTreeNode"]:
        """Present children, left first"""
        return [child for child in (self.left, self.right) if child]
