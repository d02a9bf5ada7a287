"""Operator tables and the composition algebra used by function nodes.

Every function stored on a tree node is an `Operator`. Primitive operators wrap
a numpy ufunc. The optimizer merges adjacent function nodes by composing their
operators, and the composed operators keep references to their parts so that a
collapsed tree can still be inspected and described.
"""
from types import MappingProxyType
from typing import Callable, Mapping, Optional

import numpy as np


class Operator:
    """A callable function of `arity` floating point arguments."""

    name: str
    arity: int = 0

    def describe(self, *args: str) -> str:
        """Render this operator applied to the given argument texts."""
        raise NotImplementedError("must be implemented in subclass")

    def __call__(self, *args: float) -> float:
        raise NotImplementedError("must be implemented in subclass")

    def __str__(self) -> str:
        return self.describe(*["a", "b"][: self.arity])

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self}>"


class UnaryOperator(Operator):
    arity = 1

    def __init__(self, name: str, fn: Callable[[float], float]):
        self.name = name
        self.fn = fn

    def describe(self, *args: str) -> str:
        return f"{self.name}({args[0]})"

    def __call__(self, *args: float) -> float:
        return self.fn(args[0])


class BinaryOperator(Operator):
    arity = 2

    def __init__(self, symbol: str, name: str, fn: Callable[[float, float], float]):
        self.symbol = symbol
        self.name = name
        self.fn = fn

    def describe(self, *args: str) -> str:
        return f"({args[0]} {self.symbol} {args[1]})"

    def __call__(self, *args: float) -> float:
        return self.fn(args[0], args[1])


# ## Composition


class ComposedUnaryOperator(UnaryOperator):
    """outer(inner(a))"""

    def __init__(self, outer: UnaryOperator, inner: UnaryOperator):
        self.outer = outer
        self.inner = inner
        self.name = f"{outer.name}.{inner.name}"

    def describe(self, *args: str) -> str:
        return self.outer.describe(self.inner.describe(args[0]))

    def __call__(self, *args: float) -> float:
        return self.outer(self.inner(args[0]))


class ComposedBinaryOperator(BinaryOperator):
    """outer(inner(a, b))"""

    def __init__(self, outer: UnaryOperator, inner: BinaryOperator):
        self.outer = outer
        self.inner = inner
        self.symbol = inner.symbol
        self.name = f"{outer.name}.{inner.name}"

    def describe(self, *args: str) -> str:
        return self.outer.describe(self.inner.describe(args[0], args[1]))

    def __call__(self, *args: float) -> float:
        return self.outer(self.inner(args[0], args[1]))


class ArgumentComposedOperator(BinaryOperator):
    """base(left(a), right(b)) where either argument function may be absent"""

    def __init__(
        self,
        base: BinaryOperator,
        left: Optional[UnaryOperator] = None,
        right: Optional[UnaryOperator] = None,
    ):
        self.base = base
        self.left = left
        self.right = right
        self.symbol = base.symbol
        parts = [p.name for p in (left, right) if p is not None]
        self.name = f"{base.name}[{','.join(parts)}]"

    def describe(self, *args: str) -> str:
        one = self.left.describe(args[0]) if self.left is not None else args[0]
        two = self.right.describe(args[1]) if self.right is not None else args[1]
        return self.base.describe(one, two)

    def __call__(self, *args: float) -> float:
        one = self.left(args[0]) if self.left is not None else args[0]
        two = self.right(args[1]) if self.right is not None else args[1]
        return self.base(one, two)


def compose_unary(outer: UnaryOperator, inner: UnaryOperator) -> UnaryOperator:
    return ComposedUnaryOperator(outer, inner)


def compose_unary_binary(outer: UnaryOperator, inner: BinaryOperator) -> BinaryOperator:
    return ComposedBinaryOperator(outer, inner)


def compose_right_argument(base: BinaryOperator, fn: UnaryOperator) -> BinaryOperator:
    """f(a, g(b))"""
    return ArgumentComposedOperator(base, right=fn)


def compose_left_argument(base: BinaryOperator, fn: UnaryOperator) -> BinaryOperator:
    """f(h(a), b)"""
    return ArgumentComposedOperator(base, left=fn)


# ## Primitive tables


def _modulus(one: float, two: float) -> float:
    # Both operands truncate toward zero, and the sign follows the dividend
    return np.fmod(np.trunc(one), np.trunc(two))


BINARY_OPERATORS: Mapping[str, BinaryOperator] = MappingProxyType(
    {
        "+": BinaryOperator("+", "add", np.add),
        "-": BinaryOperator("-", "subtract", np.subtract),
        "*": BinaryOperator("*", "multiply", np.multiply),
        "/": BinaryOperator("/", "divide", np.true_divide),
        "%": BinaryOperator("%", "modulus", _modulus),
        "^": BinaryOperator("^", "power", np.power),
    }
)

UNARY_OPERATORS: Mapping[str, UnaryOperator] = MappingProxyType(
    {
        "sin": UnaryOperator("sin", np.sin),
        "cos": UnaryOperator("cos", np.cos),
        "tan": UnaryOperator("tan", np.tan),
        "asin": UnaryOperator("asin", np.arcsin),
        "acos": UnaryOperator("acos", np.arccos),
        "atan": UnaryOperator("atan", np.arctan),
        "ln": UnaryOperator("ln", np.log),
        "exp": UnaryOperator("exp", np.exp),
        "abs": UnaryOperator("abs", np.absolute),
        "sqrt": UnaryOperator("sqrt", np.sqrt),
        "cbrt": UnaryOperator("cbrt", np.cbrt),
    }
)

# Alternate spellings accepted by the tokenizer
FUNCTION_ALIASES: Mapping[str, str] = MappingProxyType({"tg": "tan", "atg": "atan"})

NAMED_CONSTANTS: Mapping[str, float] = MappingProxyType({"pi": np.pi, "e": np.e})
