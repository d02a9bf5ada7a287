from enum import Enum
from typing import Optional

from pydantic import BaseModel, conint, constr


class BuildPolicy(str, Enum):
    """Whether building an expression is followed by an optimizer pass"""

    BUILD = "build"
    BUILD_AND_OPTIMIZE = "optimize"


class ExpressionConfig(BaseModel):
    class Config:
        extra = "forbid"

    # Policy used by `Expression.build` when none is passed
    policy: BuildPolicy = BuildPolicy.BUILD
    # The parameter bound by `Expression.as_unary` when no name is passed
    free_variable: constr(min_length=1, max_length=1) = "x"  # type:ignore
    # Reject trees (and parenthesis nesting) deeper than this. Unbounded when None
    max_depth: Optional[conint(gt=0)] = None  # type:ignore
    # Print build and optimize details with wasabi
    verbose: bool = False
