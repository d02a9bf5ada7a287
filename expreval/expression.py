from typing import Callable, Dict, Optional

from wasabi import msg

from .config import BuildPolicy, ExpressionConfig
from .core.evaluator import evaluate
from .core.nodes import ExpressionNode
from .core.optimizer import ExpressionOptimizer
from .core.parser import ExpressionParser

UnaryFunction = Callable[[float], float]


def _check_name(name: str) -> str:
    if not isinstance(name, str) or len(name) != 1:
        raise ValueError(f"parameter names must be 1 character: {name!r}")
    return name


class Expression:
    """A parsed formula plus the values assigned to its parameters.

    Build it once, then evaluate it as many times as needed:

    ```python
    expr = Expression("a*x^2 + 1").set_param("a", 2.0)
    expr.eval("x", 3.0)  # 19.0
    ```

    The parameter dictionary survives rebuilding the same instance from new
    text. Building is atomic: when the new text fails to parse, the previous
    tree is kept.
    """

    config: ExpressionConfig
    _root: Optional[ExpressionNode]
    _dictionary: Dict[str, float]

    def __init__(
        self,
        source: Optional[str] = None,
        policy: Optional[BuildPolicy] = None,
        *,
        config: Optional[ExpressionConfig] = None,
    ):
        if config is None:
            config = ExpressionConfig()
        if not isinstance(config, ExpressionConfig):
            raise ValueError("config must be an ExpressionConfig instance")
        self.config = config
        self._root = None
        self._dictionary = {}
        if source is not None:
            self.build(source, policy)

    @property
    def root(self) -> Optional[ExpressionNode]:
        return self._root

    @property
    def dictionary(self) -> Dict[str, float]:
        """A copy of the assigned parameter values"""
        return dict(self._dictionary)

    @property
    def node_count(self) -> int:
        return len(self._root.to_list()) if self._root is not None else 0

    def __bool__(self) -> bool:
        return self._root is not None

    def build(self, source: str, policy: Optional[BuildPolicy] = None) -> "Expression":
        """Replace the tree with one parsed from `source`, optionally followed
        by an optimizer pass."""
        if policy is None:
            policy = self.config.policy
        parser = ExpressionParser(max_depth=self.config.max_depth)
        root = parser.parse(source)
        if self.config.verbose:
            msg.info(f"Built '{source}' ({len(root.to_list())} nodes)")
        if policy == BuildPolicy.BUILD_AND_OPTIMIZE:
            root = self._optimize_tree(root)
        self._root = root
        return self

    def optimize(self) -> "Expression":
        """Run one optimizer pass over the tree. Does nothing without a tree."""
        if self._root is not None:
            self._root = self._optimize_tree(self._root)
        return self

    def _optimize_tree(self, root: ExpressionNode) -> ExpressionNode:
        before = len(root.to_list()) if self.config.verbose else 0
        root = ExpressionOptimizer().optimize(root)
        if self.config.verbose:
            msg.good(f"Optimized tree: {before} -> {len(root.to_list())} nodes")
        return root

    def set_param(self, name: str, value: float) -> "Expression":
        """Assign (or reassign) the value of a parameter"""
        self._dictionary[_check_name(name)] = float(value)
        return self

    def eval(
        self, name: Optional[str] = None, value: Optional[float] = None
    ) -> Optional[float]:
        """Evaluate the tree, or return None if there is no tree.

        With `name` and `value`, parameters called `name` evaluate to `value`
        and all others come from the dictionary."""
        if name is not None:
            _check_name(name)
            if value is None:
                raise ValueError(f"a value is required to bind '{name}'")
        if self._root is None:
            return None
        return evaluate(self._root, self._dictionary, name, value)

    def as_unary(self, name: Optional[str] = None) -> Optional[UnaryFunction]:
        """Return a function of one argument that evaluates the expression with
        `name` bound to the argument, or None if there is no tree.

        The function works on a snapshot of the tree and parameter values, so
        later changes to this expression do not affect it."""
        name = _check_name(name if name is not None else self.config.free_variable)
        if self._root is None:
            return None
        snapshot = self.clone()

        def unary(value: float) -> float:
            result = snapshot.eval(name, value)
            assert result is not None
            return result

        return unary

    def clone(self) -> "Expression":
        result = Expression(config=self.config)
        result._root = self._root.clone() if self._root is not None else None
        result._dictionary = dict(self._dictionary)
        return result

    def __repr__(self) -> str:
        return f"<Expression {self._root}>"


def compute(
    source: str, name: Optional[str] = None, value: Optional[float] = None
) -> Optional[float]:
    """Build `source` and evaluate it once, optionally binding `name` to
    `value`."""
    return Expression(source).eval(name, value)


def parse_function(
    source: str, name: str = "x", policy: BuildPolicy = BuildPolicy.BUILD
) -> Optional[UnaryFunction]:
    """Build `source` and return it as a function of the parameter `name`"""
    return Expression(source, policy).as_unary(name)
