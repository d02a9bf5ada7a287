import re
from typing import Dict, List, Optional, Union

from .errors import (
    InvalidNumber,
    InvalidParameterName,
    InvalidSyntax,
    UnmatchedParenthesis,
    UnterminatedParenthesis,
)
from .operators import FUNCTION_ALIASES, NAMED_CONSTANTS

# # Tokenizer

# ##Constants

# Define the known types of tokens for the Tokenizer.
TokensMap: Dict[str, int] = {
    "None": 1 << 0,
    "Constant": 1 << 1,
    "Parameter": 1 << 2,
    "Plus": 1 << 3,
    "Minus": 1 << 4,
    "Multiply": 1 << 5,
    "Divide": 1 << 6,
    "Modulus": 1 << 7,
    "Exponent": 1 << 8,
    "Group": 1 << 9,
    "Function": 1 << 10,
    "EOF": 1 << 11,
}

TokenNone = TokensMap["None"]
TokenConstant = TokensMap["Constant"]
TokenParameter = TokensMap["Parameter"]
TokenPlus = TokensMap["Plus"]
TokenMinus = TokensMap["Minus"]
TokenMultiply = TokensMap["Multiply"]
TokenDivide = TokensMap["Divide"]
TokenModulus = TokensMap["Modulus"]
TokenExponent = TokensMap["Exponent"]
TokenGroup = TokensMap["Group"]
TokenFunction = TokensMap["Function"]
TokenEOF = TokensMap["EOF"]

OPERATOR_TOKENS: Dict[str, int] = {
    "+": TokenPlus,
    "-": TokenMinus,
    "*": TokenMultiply,
    "/": TokenDivide,
    "%": TokenModulus,
    "^": TokenExponent,
}

_NUMBER = re.compile(r"(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
# An exponent marker with a sign but no digits, or a second decimal point
_BAD_NUMBER_TAIL = re.compile(r"\.|[eE][+-](?!\d)")
_FUNCTION = re.compile(r"a?sin|a?cos|a?t(?:an|g)|ln|exp|abs|sqrt|cbrt")
_PI = re.compile(r"pi", re.IGNORECASE)
_IMPLICIT_MULTIPLY = re.compile(r"(?<=[\d)])\(")


class Token:
    value: Union[str, float]
    type: int

    def __init__(self, value: Union[str, float], type: int):
        self.value = value
        self.type = type

    def __str__(self):
        return "[type={}],[value={}]".format(self.type, self.value)


class TokenContext:
    tokens: List[Token]
    index: int
    buffer: str
    chunk: str

    def __init__(
        self,
        *,
        tokens: Optional[List[Token]] = None,
        index: int = 0,
        buffer: str = "",
        chunk: str = "",
    ):
        self.tokens = tokens if tokens is not None else []
        self.index = index
        self.buffer = buffer
        self.chunk = chunk


def insert_implicit_multiplication(text: str) -> str:
    """Insert `*` where a digit or a closing parenthesis directly precedes an
    opening parenthesis, e.g. `2(3+4)` becomes `2*(3+4)`.

    Nothing is inserted between a number and a letter, so `2x` is left as is."""
    return _IMPLICIT_MULTIPLY.sub("*(", text)


class Tokenizer:
    """The Tokenizer produces a list of tokens from an input string.

    Parenthesized text is not tokenized here. It becomes a single `Group`
    token holding the enclosed substring, which the parser tokenizes and
    parses recursively."""

    # ###Token Utilities

    def is_space(self, c: str) -> bool:
        return c.isspace()

    def is_parameter_char(self, c: str) -> bool:
        """Could this character be part of a parameter name"""
        return not (
            c.isspace()
            or ("0" <= c and c <= "9")
            or c == "."
            or c in OPERATOR_TOKENS
            or c == "("
            or c == ")"
        )

    def eat_token(self, context: TokenContext, typeFn) -> str:
        """Eat all of the characters of a given type from the front of the stream
        until a different type is hit, and return the text."""
        res = ""
        for ch in context.chunk:
            if not typeFn(ch):
                return res
            res = res + ch

        return res

    def tokenize(self, buffer: str) -> List[Token]:
        """Return an array of `Token`s from a given string input.
        This raises an `InvalidSyntax` subclass if the input cannot be tokenized."""
        context = TokenContext(buffer=buffer, chunk=buffer)
        while context.chunk:
            (
                self.identify_constants(context)
                or self.identify_operators(context)
                or self.identify_groups(context)
                or self.identify_functions(context)
                or self.identify_named_constants(context)
                or self.identify_parameters(context)
            )
            context.chunk = context.buffer[context.index :]

        context.tokens.append(Token("", TokenEOF))
        return context.tokens

    def identify_constants(self, context: TokenContext) -> int:
        """Identify and tokenize a number literal."""
        ch = context.chunk[0]
        if not (("0" <= ch and ch <= "9") or ch == "."):
            return 0

        match = _NUMBER.match(context.chunk)
        if match is None:
            raise InvalidNumber(f"Malformed number literal in: {context.buffer}")
        text = match.group(0)
        if _BAD_NUMBER_TAIL.match(context.chunk, len(text)):
            raise InvalidNumber(
                f'Malformed number literal "{text}" in: {context.buffer}'
            )
        context.tokens.append(Token(float(text), TokenConstant))
        context.index += len(text)
        return len(text)

    def identify_operators(self, context: TokenContext) -> bool:
        """Identify and tokenize operators, skipping whitespace."""
        ch = context.chunk[0]
        if self.is_space(ch):
            pass
        elif ch in OPERATOR_TOKENS:
            context.tokens.append(Token(ch, OPERATOR_TOKENS[ch]))
        elif ch == ")":
            raise UnmatchedParenthesis(
                f"Closed parenthesis without an opening one in: {context.buffer}"
            )
        else:
            return False
        context.index = context.index + 1
        return True

    def identify_groups(self, context: TokenContext) -> bool:
        """Find the parenthesis matching an opening one and tokenize the text
        between them as a single group."""
        if context.chunk[0] != "(":
            return False

        counter = 1
        index = 1
        while index < len(context.chunk):
            if context.chunk[index] == "(":
                counter += 1
            elif context.chunk[index] == ")":
                counter -= 1
            if counter == 0:
                break
            index += 1

        if counter != 0:
            raise UnterminatedParenthesis(
                f"Unterminated parenthesis in: {context.buffer}"
            )
        context.tokens.append(Token(context.chunk[1:index], TokenGroup))
        context.index += index + 1
        return True

    def identify_functions(self, context: TokenContext) -> bool:
        match = _FUNCTION.match(context.chunk)
        if match is None:
            return False

        name = match.group(0)
        context.tokens.append(Token(FUNCTION_ALIASES.get(name, name), TokenFunction))
        context.index += len(name)
        return True

    def identify_named_constants(self, context: TokenContext) -> bool:
        """Identify `pi` and Euler's number `e`"""
        if _PI.match(context.chunk):
            context.tokens.append(Token(NAMED_CONSTANTS["pi"], TokenConstant))
            context.index += 2
            return True
        if context.chunk[0] == "e":
            context.tokens.append(Token(NAMED_CONSTANTS["e"], TokenConstant))
            context.index += 1
            return True
        return False

    def identify_parameters(self, context: TokenContext) -> bool:
        """Identify a single character parameter. Any longer run of unknown
        characters is an error."""
        run = self.eat_token(context, self.is_parameter_char)
        if len(run) > 1:
            raise InvalidParameterName(
                f'"{run}" Unexpected token in parsing (parameter names must be '
                "1 character long)"
            )
        if not run.isprintable():
            raise InvalidSyntax(f"Invalid character {run!r} in: {context.buffer!r}")
        context.tokens.append(Token(run, TokenParameter))
        context.index += 1
        return True
