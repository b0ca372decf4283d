"""Expression trees built by the parser.

```
<expression> ::= <number>                              ; NumberNode (leaf)
               | <expression> <operator> <expression>  ; BinaryOperationNode (internal node, see operators.py)
```

Nodes are immutable once built and each node is owned by exactly one parent, so a tree can be evaluated any number of
times and always gives the same value. Source offsets are kept on every node for error messages but take no part in
comparisons: two trees are equal when they have the same shape, operators and values.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from infixcalc.lang.error import DivisionByZeroError, InvalidOperatorError


class ExpressionNode(ABC):
    """Superclass of the two kinds of expression tree node."""

    @abstractmethod
    def evaluate(self):
        """Returns the value of the tree rooted at this node as a float."""

    @property
    @abstractmethod
    def nodes(self):
        """Children of this node, left to right."""

    @property
    def depth(self):
        """Height of the tree rooted at this node (a lone number has depth 1)."""
        return 1 + max((node.depth for node in self.nodes), default=0)

    def display(self, indents=0):
        """Recursively displays expression tree with readable format.

        Format:
        BinaryOperationNode(operator='<operator>', nodes=[
            NumberNode(value=<value>),
            BinaryOperationNode(operator='<operator>', nodes=[
                ...
            ])
        ])
        """
        result = f"{'    ' * indents}{self._label()}"
        if self.nodes:
            result = result[:-1] + ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}])"
        return result

    @abstractmethod
    def _label(self):
        ...


@dataclass(frozen=True)
class NumberNode(ExpressionNode):
    value: float
    source: str = field(default="", repr=False, compare=False)
    start: int = field(default=0, repr=False, compare=False)
    end: int = field(default=-1, repr=False, compare=False)

    def evaluate(self):
        return self.value

    @property
    def nodes(self):
        return ()

    def _label(self):
        return f"NumberNode(value={self.value:g})"

    def __str__(self):
        return f"{self.value:g}"


@dataclass(frozen=True)
class BinaryOperationNode(ExpressionNode):
    """Applies operator to the values of left and right. The operator is not checked here: a tree built by hand with
    an unsupported operator fails when it is evaluated.
    """
    operator: str
    left: ExpressionNode
    right: ExpressionNode
    source: str = field(default="", repr=False, compare=False)
    start: int = field(default=0, repr=False, compare=False)
    end: int = field(default=-1, repr=False, compare=False)

    def evaluate(self):
        left = self.left.evaluate()
        right = self.right.evaluate()

        if self.operator == "+":
            return left + right
        elif self.operator == "-":
            return left - right
        elif self.operator == "*":
            return left * right
        elif self.operator == "/":
            if right == 0.0:  # also true for -0.0
                raise DivisionByZeroError("division by zero", self.source, start=self.start, end=self.end)
            return left / right

        raise InvalidOperatorError("unknown operator '{1}'", (self.source, str(self.operator)), start=self.start,
                                   end=self.end)

    @property
    def nodes(self):
        return self.left, self.right

    def _label(self):
        return f"BinaryOperationNode(operator='{self.operator}')"

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"
