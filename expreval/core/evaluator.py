from typing import TYPE_CHECKING, Mapping, Optional

import numpy as np

from .errors import UnassignedParameter

if TYPE_CHECKING:
    from .nodes import ExpressionNode


class EvaluationContext:
    """Resolves parameter names while a tree is being evaluated.

    When a `free_variable` is given, parameters with that name evaluate to
    `value` directly and bypass the dictionary. Every other name is looked up
    in `dictionary`, and a missing name raises `UnassignedParameter`.
    """

    __slots__ = ("dictionary", "free_variable", "value")

    def __init__(
        self,
        dictionary: Optional[Mapping[str, float]] = None,
        free_variable: Optional[str] = None,
        value: Optional[float] = None,
    ):
        if free_variable is not None and value is None:
            raise ValueError(f"a value is required to bind '{free_variable}'")
        self.dictionary = dictionary if dictionary is not None else {}
        self.free_variable = free_variable
        self.value = value

    def resolve(self, name: str) -> float:
        if name == self.free_variable:
            return self.value  # type:ignore
        try:
            return self.dictionary[name]
        except KeyError:
            raise UnassignedParameter(name) from None


def evaluate(
    node: "ExpressionNode",
    dictionary: Optional[Mapping[str, float]] = None,
    free_variable: Optional[str] = None,
    value: Optional[float] = None,
) -> float:
    """Evaluate a tree to a float.

    Domain and range problems (division by zero, roots of negative numbers,
    inverse trig outside [-1, 1]) are not errors. They produce NaN or
    +/-inf the way IEEE arithmetic does.
    """
    context = EvaluationContext(dictionary, free_variable, value)
    with np.errstate(all="ignore"):
        return float(node.evaluate(context))
