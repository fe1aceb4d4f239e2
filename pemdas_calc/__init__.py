"""PEMDAS calculator: tokenizer -> shunting-yard converter -> postfix evaluator."""

__version__ = "2.0.0"

from .core import evaluate_expression, evaluate_postfix, to_postfix, tokenize
from .errors import (
    CalculatorError,
    DivisionByZero,
    ErrorKind,
    EvalError,
    LexError,
    MalformedExpression,
    MissingOperand,
    MultipleDecimalPoints,
    ParseError,
    UnknownCharacter,
    UnmatchedLeftParen,
    UnmatchedRightParen,
)
from .tokens import LPAREN, RPAREN, LeftParen, NumberToken, Operator, OperatorToken, RightParen, Token
from .tracing import ConsoleTracer, LoggingTracer, TraceEvent
