from typing import Dict, List, Optional

from .builder import TreeBuilder
from .errors import MaxDepthExceeded, MissingOperand, TrailingTokens
from .nodes import (
    BinaryFunctionNode,
    ConstantNode,
    ExpressionNode,
    ParameterNode,
    UnaryFunctionNode,
)
from .operators import BINARY_OPERATORS, UNARY_OPERATORS
from .tokenizer import (
    Token,
    TokenConstant,
    TokenDivide,
    TokenEOF,
    TokenExponent,
    TokenFunction,
    TokenGroup,
    Tokenizer,
    TokenMinus,
    TokenModulus,
    TokenMultiply,
    TokenNone,
    TokenParameter,
    TokenPlus,
    insert_implicit_multiplication,
)


class TokenSet:
    """TokenSet objects are bitmask combinations for checking to see
    if a token is part of a valid set. """

    tokens: int

    def __init__(self, source: int):
        self.tokens = source

    def add(self, addTokens: int) -> "TokenSet":
        """Add tokens to self set and return a TokenSet representing
        their combination of flags."""
        return TokenSet(self.tokens | addTokens)

    def contains(self, type: int) -> bool:
        """Returns true if the given type is part of this set"""
        return (self.tokens & type) != 0


# Precedence checks
_IS_SUM: TokenSet = TokenSet(TokenPlus | TokenMinus)
_IS_PRODUCT: TokenSet = TokenSet(TokenMultiply | TokenDivide | TokenModulus)
_IS_POWER: TokenSet = TokenSet(TokenExponent)
_IS_FUNCTION: TokenSet = TokenSet(TokenFunction)
_IS_OPERATOR: TokenSet = _IS_SUM.add(_IS_PRODUCT.tokens | _IS_POWER.tokens)


# NOTE: This cannot be shared between threads because it stores state in self.current_token and self.tokens
class ExpressionParser:
    """Parser for converting text into expression trees. Trees encode the order of
    operations for an input, and allow evaluating it to determine the expression
    value.

    ### Grammar Rules

    Symbols:
    ```
    ( )    == Non-terminal
    { }*   == 0 or more occurrences
    [ ]    == Mandatory (1 must occur)
    |      == logical OR
    " "    == Terminal symbol (literal)
    ```

    Rules:
    ```
    (Primary)  = [ (Constant) | "pi" | "e" | (Parameter) | "(" (Sum) ")" ]
    (Prefixed) = { (Function) }* (Primary)
    (Power)    = (Prefixed) { "^" (Prefixed) }*
    (Product)  = (Power) { "*" | "/" | "%" (Power) }*
    (Sum)      = (Product) { "+" | "-" (Product) }*
    (start)    = (Sum)
    ```

    Every level is left-associative, including `^`, so `2^3^2` is `(2^3)^2`.
    A function applies to the single primary that follows it, so `sin x^2`
    is `(sin x)^2`. A group or input that starts with an operator gets an
    implicit leading zero, which makes `-5 + 3` read as `0 - 5 + 3`.

    The grammar rules emit nodes in postfix order and a `TreeBuilder` links
    them into a tree, checking that every function has its arguments.
    """

    _tokens_cache: Dict[str, List[Token]]
    tokens: List[Token]
    current_token: Token
    depth: int

    def __init__(self, max_depth: Optional[int] = None):
        self.tokenizer = Tokenizer()
        self.builder = TreeBuilder(max_depth=max_depth)
        self.max_depth = max_depth
        self.tokens = []
        self.current_token = Token("", TokenNone)
        self.depth = 0
        self.clear_cache()

    def clear_cache(self):
        self._tokens_cache = {}

    def tokenize(self, input_text: str) -> List[Token]:
        if input_text not in self._tokens_cache:
            self._tokens_cache[input_text] = self.tokenizer.tokenize(input_text)
        return self._tokens_cache[input_text][:]

    def parse(self, input_text: str) -> ExpressionNode:
        """Parse a string representation of an expression into a tree
        that can be later evaluated.

        Returns : The evaluatable expression tree.
        """
        return self.builder.build(self.to_postfix(input_text))

    def to_postfix(self, input_text: str) -> List[ExpressionNode]:
        """Parse text into a list of nodes ordered children-first. Function
        nodes in the list still have placeholder children."""
        output: List[ExpressionNode] = []
        if input_text.strip() != "":
            self.depth = 0
            self.parse_group(insert_implicit_multiplication(input_text), output)
        return output

    def parse_group(self, text: str, output: List[ExpressionNode]):
        """Parse the text of a whole input or of a parenthesized group. The
        current token state is restored afterwards so groups can nest."""
        saved = (self.tokens, self.current_token)
        self.depth += 1
        try:
            if self.max_depth is not None and self.depth > self.max_depth:
                raise MaxDepthExceeded(
                    f"Parentheses are nested deeper than {self.max_depth} levels"
                )
            tokens = self.tokenize(text)
            if _IS_OPERATOR.contains(tokens[0].type):
                tokens.insert(0, Token(0.0, TokenConstant))
            self.tokens = tokens
            self.current_token = Token("", TokenNone)
            self.next()
            self.parse_sum(output)
            leftover = ""
            while self.current_token.type != TokenEOF:
                leftover = f"{leftover}{self.current_token.value}"
                self.next()
            if leftover != "":
                raise TrailingTokens("Trailing characters: {}".format(leftover))
        finally:
            self.depth -= 1
            self.tokens, self.current_token = saved

    def parse_sum(self, output: List[ExpressionNode]):
        self.parse_product(output)
        while self.check(_IS_SUM):
            symbol = str(self.current_token.value)
            self.eat(self.current_token.type)
            self.parse_product(output)
            output.append(BinaryFunctionNode(BINARY_OPERATORS[symbol]))

    def parse_product(self, output: List[ExpressionNode]):
        self.parse_power(output)
        while self.check(_IS_PRODUCT):
            symbol = str(self.current_token.value)
            self.eat(self.current_token.type)
            self.parse_power(output)
            output.append(BinaryFunctionNode(BINARY_OPERATORS[symbol]))

    def parse_power(self, output: List[ExpressionNode]):
        self.parse_prefixed(output)
        while self.check(_IS_POWER):
            symbol = str(self.current_token.value)
            self.eat(self.current_token.type)
            self.parse_prefixed(output)
            output.append(BinaryFunctionNode(BINARY_OPERATORS[symbol]))

    def parse_prefixed(self, output: List[ExpressionNode]):
        functions = []
        while self.check(_IS_FUNCTION):
            functions.append(UNARY_OPERATORS[str(self.current_token.value)])
            self.eat(TokenFunction)
        self.parse_primary(output)
        # The innermost function is applied first
        for operator in reversed(functions):
            output.append(UnaryFunctionNode(operator))

    def parse_primary(self, output: List[ExpressionNode]):
        token = self.current_token
        if token.type == TokenConstant:
            output.append(ConstantNode(float(token.value)))
            self.eat(TokenConstant)
        elif token.type == TokenParameter:
            output.append(ParameterNode(str(token.value)))
            self.eat(TokenParameter)
        elif token.type == TokenGroup:
            self.eat(TokenGroup)
            self.parse_group(str(token.value), output)
        elif token.type == TokenEOF:
            # Nothing to emit. The builder reports the operator that is left
            # without its argument.
            return
        else:
            raise MissingOperand(
                "Expected a number, parameter or parenthesis but got: {}".format(
                    token.value
                )
            )

    def next(self) -> bool:
        """Assign the next token in the queue to `self.current_token`.

        Return True if there are still more tokens in the queue, or False if there
        are no more tokens to look at."""
        self.current_token = self.tokens.pop(0)
        return self.current_token.type != TokenEOF

    def eat(self, type: int) -> bool:
        """Move on to the next token if the current one has the given type,
        otherwise raise a syntax error."""
        if self.current_token.type != type:
            raise MissingOperand("Missing: {}".format(type))

        return self.next()

    def check(self, tokens: TokenSet) -> bool:
        """Check if the `self.current_token` is a member of a set Token types"""
        return tokens.contains(self.current_token.type)
