from .about import __version__
from .config import BuildPolicy, ExpressionConfig
from .core.builder import TreeBuilder
from .core.errors import (
    ExpressionException,
    InternalInvariantError,
    InvalidNumber,
    InvalidParameterName,
    InvalidSyntax,
    MaxDepthExceeded,
    MissingOperand,
    TrailingTokens,
    UnassignedParameter,
    UnmatchedParenthesis,
    UnterminatedParenthesis,
)
from .core.evaluator import EvaluationContext, evaluate
from .core.nodes import (
    BinaryFunctionNode,
    ConstantNode,
    ExpressionNode,
    ParameterNode,
    PlaceholderNode,
    UnaryFunctionNode,
)
from .core.operators import BINARY_OPERATORS, UNARY_OPERATORS
from .core.optimizer import ExpressionOptimizer
from .core.parser import ExpressionParser
from .core.tokenizer import Tokenizer
from .expression import Expression, compute, parse_function
