"""Tokenization of infix arithmetic expressions.

Formally, the tokens of an infix expression can be defined as

```
<token>  ::= <number>          ; maximal run of digits with at most one decimal point: 3, 3.25, .5, 5.
           | <operator>        ; "+", "-", "*" or "/" (see operators.py)
           | "(" | ")"
```

Whitespace between tokens is skipped and never required: scanning is purely positional, so `3+4` and `3 + 4` produce
the same tokens. Unary minus is not a token of its own: `-3` tokenizes as an operator followed by a number (and is then
rejected by the parser).
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional, Union

from infixcalc.lang.error import ParseError
from infixcalc.pure.operators import is_operator


DIGITS = "0123456789"
DECIMAL_POINT = "."


class TokenType(Enum):
    NUMBER = auto()
    OPERATOR = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()


@dataclass(frozen=True)
class Token:
    """A single token. start and end are offsets into the scanned expression, used for error messages."""
    type: TokenType
    value: Optional[Union[float, str]]
    start: int
    end: int

    def __str__(self):
        if self.type is TokenType.LEFT_PAREN:
            return "("
        elif self.type is TokenType.RIGHT_PAREN:
            return ")"
        elif self.type is TokenType.NUMBER:
            return f"{self.value:g}"
        return self.value


class Tokenizer:
    """Scans an expression left to right. Iterating over a Tokenizer lazily yields Tokens, raising ParseError at the
    first character that cannot start a token.
    """

    def __init__(self, expr):
        self.expr = expr
        self.pos = 0

    @property
    def current(self):
        return self.expr[self.pos] if self.pos < len(self.expr) else None

    def advance(self):
        self.pos += 1

    def skip_spaces(self):
        while self.current is not None and self.current.isspace():
            self.advance()

    def number(self):
        """Scans the maximal run of digits and decimal points at self.pos into a NUMBER token."""
        start = self.pos
        while self.current is not None and (self.current in DIGITS or self.current == DECIMAL_POINT):
            self.advance()

        numeral = self.expr[start:self.pos]
        if numeral.count(DECIMAL_POINT) > 1:
            raise ParseError("malformed number '{1}'", (self.expr, numeral), start=start, end=self.pos)
        try:
            value = float(numeral)
        except ValueError:
            raise ParseError("malformed number '{1}'", (self.expr, numeral), start=start, end=self.pos)

        return Token(TokenType.NUMBER, value, start, self.pos)

    def single(self, type_):
        token = Token(type_, self.current, self.pos, self.pos + 1)
        self.advance()
        return token

    def __iter__(self) -> Iterator[Token]:
        while True:
            self.skip_spaces()
            char = self.current

            if char is None:
                return
            elif char in DIGITS or char == DECIMAL_POINT:
                yield self.number()
            elif char == "(":
                yield self.single(TokenType.LEFT_PAREN)
            elif char == ")":
                yield self.single(TokenType.RIGHT_PAREN)
            elif is_operator(char):
                yield self.single(TokenType.OPERATOR)
            else:
                raise ParseError("unexpected character '{1}'", (self.expr, char), start=self.pos, end=self.pos + 1)


def tokenize(expr) -> List[Token]:
    """Returns all tokens in expr. Raises ParseError if expr contains something that is not a token."""
    return list(Tokenizer(expr))
