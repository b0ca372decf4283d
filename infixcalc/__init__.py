"""Infix arithmetic calculator: a shunting-yard parser that builds expression trees, plus the shell around it.

Basic program flow:
    1. Tokenizer: scans the raw string into numbers, operators and parentheses (see pure/lexical.py)
    2. Parser: builds an expression tree from the tokens using operator precedence (see pure/parser.py)
    3. Evaluation: the tree evaluates itself bottom-up (see pure/tree.py)

"""

from infixcalc.lang.error import (CalcException, DivisionByZeroError, EvaluationError, InvalidOperatorError,
                                  ParseError)
from infixcalc.pure.lexical import Token, TokenType, tokenize
from infixcalc.pure.operators import OperatorPrecedence, precedence
from infixcalc.pure.parser import Parser, parse
from infixcalc.pure.tree import BinaryOperationNode, ExpressionNode, NumberNode

__version__ = "0.1.0"


def calculate(expr):
    """Parses and evaluates infix expression expr, returning a float."""
    return parse(expr).evaluate()


__all__ = [
    "calculate", "parse", "tokenize", "precedence",
    "Parser", "Token", "TokenType", "OperatorPrecedence",
    "ExpressionNode", "NumberNode", "BinaryOperationNode",
    "CalcException", "ParseError", "EvaluationError", "DivisionByZeroError", "InvalidOperatorError",
]
