from typing import Optional


class ExpressionException(Exception):
    def __init__(self, message: str):
        self.message = message

    def __str__(self):
        return self.message


# ## Syntax errors (raised while building a tree)


class InvalidSyntax(ExpressionException):
    pass


class InvalidNumber(InvalidSyntax):
    pass


class UnterminatedParenthesis(InvalidSyntax):
    pass


class UnmatchedParenthesis(InvalidSyntax):
    pass


class InvalidParameterName(InvalidSyntax):
    pass


class MissingOperand(InvalidSyntax):
    pass


class TrailingTokens(InvalidSyntax):
    pass


# ## Evaluation errors


class UnassignedParameter(ExpressionException):
    name: Optional[str]

    def __init__(self, name: Optional[str]):
        super().__init__(f"Unassigned parameter {name}")
        self.name = name


class InternalInvariantError(ExpressionException):
    """A tree reached evaluation with a structural defect that the builder
    should never have produced."""


class MaxDepthExceeded(ExpressionException):
    pass
