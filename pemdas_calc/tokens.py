# tokens.py
"""Token model shared by the tokenizer, the postfix converter and the evaluator."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Union


class Operator(Enum):
    """Operators understood by the calculator.

    NEGATE is unary minus. It never appears in raw input; the tokenizer
    produces it from a '-' that cannot be a subtraction.
    """
    ADD = '+'
    SUBTRACT = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    POWER = '^'
    PERCENT = '%'
    NEGATE = 'neg'

    @property
    def symbol(self) -> str:
        return '-' if self is Operator.NEGATE else self.value

    @property
    def is_unary(self) -> bool:
        return self in UNARY_OPERATORS


# Explicit operator precedence map. Higher number = binds tighter.
PRECEDENCE: Dict[Operator, int] = {
    Operator.ADD: 1,
    Operator.SUBTRACT: 1,
    Operator.MULTIPLY: 2,
    Operator.DIVIDE: 2,
    Operator.NEGATE: 3,
    Operator.POWER: 4,
    Operator.PERCENT: 5,
}

RIGHT_ASSOCIATIVE: FrozenSet[Operator] = frozenset({
    Operator.POWER,
    Operator.NEGATE,
    Operator.PERCENT,
})

UNARY_OPERATORS: FrozenSet[Operator] = frozenset({
    Operator.NEGATE,
    Operator.PERCENT,
})

# Characters that become an operator token straight from the input.
SYMBOL_TO_OPERATOR: Dict[str, Operator] = {
    op.value: op for op in Operator if op is not Operator.NEGATE
}


@dataclass(frozen=True)
class NumberToken:
    """A numeric literal."""
    value: float

    def __repr__(self) -> str:
        return f"NumberToken({self.value!r})"

@dataclass(frozen=True)
class OperatorToken:
    """An operator, binary or unary."""
    op: Operator

    def __repr__(self) -> str:
        return f"OperatorToken({self.op.name})"

@dataclass(frozen=True)
class LeftParen:
    def __repr__(self) -> str:
        return "LeftParen"

@dataclass(frozen=True)
class RightParen:
    def __repr__(self) -> str:
        return "RightParen"


Token = Union[NumberToken, OperatorToken, LeftParen, RightParen]

LPAREN = LeftParen()
RPAREN = RightParen()
