# core.py
"""
Expression pipeline: tokenizer -> infix-to-postfix converter -> postfix evaluator.

Each stage is a pure function of its input. Failures are raised as subclasses
of CalculatorError (see errors.py) and abort the stage with no partial result.
Every stage accepts an optional tracer (see tracing.py) that is called at
well-defined points; passing none changes nothing about the result.
"""

import logging
import math
from typing import List, Optional

from .errors import (
    DivisionByZero,
    MalformedExpression,
    MissingOperand,
    MultipleDecimalPoints,
    UnknownCharacter,
    UnmatchedLeftParen,
    UnmatchedRightParen,
)
from .tokens import (
    LPAREN,
    PRECEDENCE,
    RIGHT_ASSOCIATIVE,
    RPAREN,
    SYMBOL_TO_OPERATOR,
    LeftParen,
    NumberToken,
    Operator,
    OperatorToken,
    RightParen,
    Token,
)
from .tracing import TraceEvent, Tracer

logger = logging.getLogger(__name__)


# ---------------------------
# Tokenizer
# ---------------------------

# ASCII only: str.isdigit and str.isspace also accept other Unicode characters.
DIGITS = frozenset("0123456789")
WHITESPACE = frozenset(" \t\n\r\v\f")

class Tokenizer:
    """Single left-to-right scan of an expression into tokens.

    A '-' is unary minus (NEGATE) when it opens the expression or follows an
    operator or '('; otherwise it is subtraction. The decision looks at the
    previously emitted token, not at the raw characters.
    """

    def __init__(self, text: str, tracer: Optional[Tracer] = None):
        self.text = text
        self.pos = 0
        self.len = len(text)
        self.tracer = tracer
        self.tokens: List[Token] = []

    def _peek(self, n: int = 0) -> str:
        i = self.pos + n
        return self.text[i] if i < self.len else ''

    def _advance(self, n: int = 1) -> None:
        self.pos += n

    def _emit(self, token: Token) -> None:
        self.tokens.append(token)
        if self.tracer is not None:
            self.tracer(TraceEvent('tokenize', 'emit', token))

    def _minus_is_unary(self) -> bool:
        if not self.tokens:
            return True
        prev = self.tokens[-1]
        return isinstance(prev, (OperatorToken, LeftParen))

    def _read_number(self) -> NumberToken:
        start = self.pos
        has_dot = False
        while True:
            ch = self._peek()
            if ch in DIGITS:
                self._advance()
            elif ch == '.':
                if has_dot:
                    raise MultipleDecimalPoints(self.text[start:self.pos + 1])
                has_dot = True
                self._advance()
            else:
                break
        return NumberToken(float(self.text[start:self.pos]))

    def tokenize(self) -> List[Token]:
        while True:
            ch = self._peek()
            if ch == '':
                break
            if ch in WHITESPACE:
                self._advance()
            elif ch in DIGITS or (ch == '.' and self._peek(1) in DIGITS):
                self._emit(self._read_number())
            elif ch == '-' and self._minus_is_unary():
                self._emit(OperatorToken(Operator.NEGATE))
                self._advance()
            elif ch in SYMBOL_TO_OPERATOR:
                self._emit(OperatorToken(SYMBOL_TO_OPERATOR[ch]))
                self._advance()
            elif ch == '(':
                self._emit(LPAREN)
                self._advance()
            elif ch == ')':
                self._emit(RPAREN)
                self._advance()
            else:
                raise UnknownCharacter(ch)
        return self.tokens


def tokenize(text: str, tracer: Optional[Tracer] = None) -> List[Token]:
    """Convert raw text into a list of tokens."""
    return Tokenizer(text, tracer).tokenize()


# ---------------------------
# Postfix converter (shunting-yard)
# ---------------------------

def _should_pop(top: Token, incoming: Operator) -> bool:
    if not isinstance(top, OperatorToken):
        return False
    if incoming in RIGHT_ASSOCIATIVE:
        return PRECEDENCE[top.op] > PRECEDENCE[incoming]
    return PRECEDENCE[top.op] >= PRECEDENCE[incoming]


def to_postfix(tokens: List[Token], tracer: Optional[Tracer] = None) -> List[Token]:
    """Reorder infix tokens into postfix (RPN) order.

    The output never contains parentheses. Raises UnmatchedRightParen or
    UnmatchedLeftParen when the parentheses do not balance.
    """
    output: List[Token] = []
    stack: List[Token] = []

    def emit(token: Token) -> None:
        output.append(token)
        if tracer is not None:
            tracer(TraceEvent('postfix', 'emit', token))

    for tok in tokens:
        if isinstance(tok, NumberToken):
            emit(tok)
        elif isinstance(tok, OperatorToken):
            while stack and _should_pop(stack[-1], tok.op):
                emit(stack.pop())
            stack.append(tok)
        elif isinstance(tok, LeftParen):
            stack.append(tok)
        elif isinstance(tok, RightParen):
            while stack and not isinstance(stack[-1], LeftParen):
                emit(stack.pop())
            if not stack:
                raise UnmatchedRightParen()
            stack.pop()

    while stack:
        top = stack.pop()
        if isinstance(top, LeftParen):
            raise UnmatchedLeftParen()
        emit(top)

    return output


# ---------------------------
# Postfix evaluator
# ---------------------------

def _power(x: float, y: float) -> float:
    # Mirror C pow(): overflow and domain problems yield inf/nan, not exceptions.
    try:
        return math.pow(x, y)
    except OverflowError:
        if x < 0 and y.is_integer() and y % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        # 0 ** negative is a pole whose sign follows x for odd integer y;
        # negative ** fractional has no real value
        if x == 0:
            odd = y.is_integer() and y % 2 == 1
            return math.copysign(math.inf, x) if odd else math.inf
        return math.nan


def apply_operation(x: float, y: float, op: Operator) -> float:
    """Apply a binary operator to x and y, in source order (x op y)."""
    if op is Operator.ADD:
        return x + y
    if op is Operator.SUBTRACT:
        return x - y
    if op is Operator.MULTIPLY:
        return x * y
    if op is Operator.DIVIDE:
        if y == 0:
            raise DivisionByZero()
        return x / y
    if op is Operator.POWER:
        return _power(x, y)
    raise ValueError(f"Not a binary operator: {op}")


def evaluate_postfix(postfix: List[Token], tracer: Optional[Tracer] = None) -> float:
    """Evaluate a postfix token list with an operand stack."""
    stack: List[float] = []

    for tok in postfix:
        if isinstance(tok, NumberToken):
            stack.append(tok.value)
            if tracer is not None:
                tracer(TraceEvent('evaluate', 'push', tok))
            continue

        # parentheses only reach here when a caller builds the postfix list by hand
        if not isinstance(tok, OperatorToken):
            raise MalformedExpression(len(stack))

        op = tok.op
        if op.is_unary:
            if not stack:
                raise MissingOperand(op)
            x = stack.pop()
            result = -x if op is Operator.NEGATE else x / 100.0
            operands = (x,)
        else:
            if len(stack) < 2:
                raise MissingOperand(op)
            y = stack.pop()
            x = stack.pop()
            result = apply_operation(x, y, op)
            operands = (x, y)

        stack.append(result)
        if tracer is not None:
            tracer(TraceEvent('evaluate', 'apply', tok, operands, result))

    if len(stack) != 1:
        raise MalformedExpression(len(stack))

    return stack[0]


# ---------------------------
# Pipeline
# ---------------------------

def evaluate_expression(text: str, tracer: Optional[Tracer] = None) -> float:
    """Evaluate one infix expression: tokenize -> postfix -> evaluate.

    Raises a CalculatorError subclass (LexError, ParseError or EvalError)
    on failure. Holds no state between calls.
    """
    logger.debug(f"Evaluating expression {text!r}")
    tokens = tokenize(text, tracer)
    postfix = to_postfix(tokens, tracer)
    result = evaluate_postfix(postfix, tracer)
    logger.debug(f"Expression {text!r} evaluated to {result!r}")
    return result
