"""Binary operators supported in infix expressions and their binding power.

```
<operator> ::= "+" | "-"   ; precedence 1
             | "*" | "/"   ; precedence 2
```

All operators are left-associative: operators of equal precedence group from the left, so 10 - 3 - 2 = (10 - 3) - 2.
"""


class OperatorPrecedence:
    """Maps each operator to its precedence. Anything that is not an operator (notably '(') gets 0, the lowest binding
    power, which is what stops reduction at an open parenthesis.
    """
    PRECEDENCE = {
        "+": 1,
        "-": 1,
        "*": 2,
        "/": 2
    }

    def __call__(self, op):
        return OperatorPrecedence.PRECEDENCE.get(op, 0)


precedence = OperatorPrecedence()


def is_operator(char):
    """Whether or not char is one of the supported binary operators."""
    return char in OperatorPrecedence.PRECEDENCE
