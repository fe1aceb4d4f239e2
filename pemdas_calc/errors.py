# errors.py
"""
Error taxonomy for the calculator pipeline.

Every failure raised by the core is a subclass of CalculatorError and carries
an ErrorKind, so callers can branch on the kind of failure without parsing
message text. The three families map to the three pipeline stages:

- LexError:   raised by the tokenizer
- ParseError: raised by the postfix converter
- EvalError:  raised by the postfix evaluator
"""

from enum import Enum
from typing import Optional

from .tokens import Operator


class ErrorKind(Enum):
    """Closed set of failure kinds the pipeline can report."""
    MULTIPLE_DECIMAL_POINTS = 'multiple_decimal_points'
    UNKNOWN_CHARACTER = 'unknown_character'
    UNMATCHED_RIGHT_PAREN = 'unmatched_right_paren'
    UNMATCHED_LEFT_PAREN = 'unmatched_left_paren'
    MISSING_OPERAND = 'missing_operand'
    DIVISION_BY_ZERO = 'division_by_zero'
    MALFORMED_EXPRESSION = 'malformed_expression'


# ---------------------------
# Base classes
# ---------------------------

class CalculatorError(Exception):
    """Base class for calculator errors."""
    kind: ErrorKind

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

class LexError(CalculatorError):
    """Raised when tokenization fails."""
    pass

class ParseError(CalculatorError):
    """Raised when the infix to postfix conversion fails."""
    pass

class EvalError(CalculatorError):
    """Raised when postfix evaluation fails."""
    pass


# ---------------------------
# Concrete errors
# ---------------------------

class MultipleDecimalPoints(LexError):
    kind = ErrorKind.MULTIPLE_DECIMAL_POINTS

    def __init__(self, literal: str):
        self.literal = literal
        super().__init__(f"Invalid number: multiple decimal points in '{literal}'")

class UnknownCharacter(LexError):
    kind = ErrorKind.UNKNOWN_CHARACTER

    def __init__(self, char: str):
        self.char = char
        super().__init__(f"Unknown character: {char}")

class UnmatchedRightParen(ParseError):
    kind = ErrorKind.UNMATCHED_RIGHT_PAREN

    def __init__(self):
        super().__init__("Mismatched parentheses: unexpected ')'")

class UnmatchedLeftParen(ParseError):
    kind = ErrorKind.UNMATCHED_LEFT_PAREN

    def __init__(self):
        super().__init__("Mismatched parentheses: unclosed '('")

class MissingOperand(EvalError):
    kind = ErrorKind.MISSING_OPERAND

    def __init__(self, operator: Optional[Operator] = None):
        self.operator = operator
        if operator is None:
            target = "operator"
        elif operator is Operator.NEGATE:
            target = "unary minus"
        else:
            target = f"'{operator.symbol}'"
        super().__init__(f"Invalid expression: missing operand for {target}")

class DivisionByZero(EvalError):
    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self):
        super().__init__("Division by zero!")

class MalformedExpression(EvalError):
    kind = ErrorKind.MALFORMED_EXPRESSION

    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(
            "Invalid expression: malformed expression or missing operators "
            f"({depth} values left on the stack)"
        )
