"""Shunting-yard parser: converts an infix expression into an expression tree in a single left-to-right pass.

Two stacks are kept while scanning tokens:
    1. operands: subtrees that have already been built (ExpressionNodes)
    2. operators: operator and "(" tokens that are waiting for their right-hand operand

Whenever an operator is resolved ("reduced"), it is popped along with the top two operands and replaced by a single
BinaryOperationNode on the operand stack. An incoming operator first reduces every pending operator of greater or equal
precedence, which is what makes operators of equal precedence left-associative. Parentheses shield their contents: an
open parenthesis has precedence 0, so reduction always stops at it.

Operands and operators must alternate: a number or "(" is expected at the start, after "(" and after an operator, and
an operator or ")" everywhere else. This rejects prefix and postfix operators such as `-3 4` or `2 3 +`.

Source: https://en.wikipedia.org/wiki/Shunting_yard_algorithm
"""

from infixcalc.lang.error import ParseError
from infixcalc.pure.lexical import Tokenizer, TokenType
from infixcalc.pure.operators import precedence
from infixcalc.pure.tree import BinaryOperationNode, NumberNode


class Parser:
    """Parses a single expression. Stacks are reset every time parse is called."""

    def __init__(self, expr):
        self.expr = expr
        self.operands = []
        self.operators = []
        self.expect_operand = True  # whether the next token must be a number or "("
        self.last = None            # last token scanned, for errors at the end of input

    def reduce(self):
        """Pops the top operator and the top two operands, pushing the BinaryOperationNode that combines them."""
        op = self.operators.pop()
        if len(self.operands) < 2:
            raise ParseError("missing operand for '{1}'", (self.expr, op.value), start=op.start, end=op.end)

        right = self.operands.pop()
        left = self.operands.pop()
        self.operands.append(BinaryOperationNode(op.value, left, right, self.expr, op.start, op.end))

    def close_paren(self, token):
        """Reduces everything up to the matching "(", then discards it."""
        while self.operators and self.operators[-1].type is not TokenType.LEFT_PAREN:
            self.reduce()

        if not self.operators:
            raise ParseError("unbalanced parentheses: no '(' matches this ')'", self.expr, start=token.start,
                             end=token.end)
        self.operators.pop()

    def push_operator(self, token):
        while (self.operators and self.operators[-1].type is not TokenType.LEFT_PAREN
               and precedence(self.operators[-1].value) >= precedence(token.value)):
            self.reduce()
        self.operators.append(token)

    def check_position(self, token):
        """Raises ParseError if token can't follow the previous token. An operand (number or "(") is expected at the
        start, after "(" and after an operator; an operator or ")" is expected everywhere else.
        """
        is_operand = token.type in (TokenType.NUMBER, TokenType.LEFT_PAREN)
        if self.expect_operand and not is_operand:
            raise ParseError("missing operand before '{1}'", (self.expr, str(token)), start=token.start,
                             end=token.end)
        elif not self.expect_operand and is_operand:
            raise ParseError("missing operator before '{1}'", (self.expr, str(token)), start=token.start,
                             end=token.end)

        self.expect_operand = token.type in (TokenType.OPERATOR, TokenType.LEFT_PAREN)
        self.last = token

    def parse(self):
        """Returns the root ExpressionNode of self.expr. Raises ParseError if self.expr is malformed."""
        self.operands = []
        self.operators = []
        self.expect_operand = True
        self.last = None

        for token in Tokenizer(self.expr):
            self.check_position(token)

            if token.type is TokenType.NUMBER:
                self.operands.append(NumberNode(token.value, self.expr, token.start, token.end))
            elif token.type is TokenType.LEFT_PAREN:
                self.operators.append(token)
            elif token.type is TokenType.RIGHT_PAREN:
                self.close_paren(token)
            else:
                self.push_operator(token)

        if self.last is None:
            raise ParseError("expression cannot be empty", self.expr)
        elif self.expect_operand:
            raise ParseError("missing operand after '{1}'", (self.expr, str(self.last)), start=self.last.start,
                             end=self.last.end)

        while self.operators:
            if self.operators[-1].type is TokenType.LEFT_PAREN:
                paren = self.operators[-1]
                raise ParseError("unbalanced parentheses: '(' is never closed", self.expr, start=paren.start,
                                 end=paren.end)
            self.reduce()

        return self.operands.pop()


def parse(expr):
    """Converts infix expression expr into an expression tree. Raises ParseError on malformed input."""
    return Parser(expr).parse()
