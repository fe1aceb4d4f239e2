# tracing.py
"""
Optional step-by-step instrumentation for the calculator pipeline.

A tracer is any callable taking a TraceEvent. The pipeline functions accept
one as an optional argument and call it at fixed points:

- tokenize: every token emitted
- postfix:  every token appended to the postfix output
- evaluate: every number pushed and every operator applied
"""

import logging
import math
import sys
from dataclasses import dataclass
from typing import Callable, Optional, TextIO, Tuple

from .tokens import LeftParen, NumberToken, Operator, OperatorToken, RightParen, Token

logger = logging.getLogger(__name__)

STAGE_HEADERS = {
    'tokenize': "After Tokenization",
    'postfix': "Postfix Conversion",
    'evaluate': "Evaluation",
}


def format_number(value: float) -> str:
    """Render a float the way a person would type it: 3.0 -> '3', 0.5 -> '0.5'."""
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class TraceEvent:
    """One observable step of the pipeline."""
    stage: str
    action: str
    token: Token
    operands: Tuple[float, ...] = ()
    result: Optional[float] = None

    def describe(self) -> str:
        tok = self.token
        if self.action == 'push':
            return f"Push {format_number(tok.value)} onto stack"
        if self.action == 'apply':
            op = tok.op
            if op is Operator.NEGATE:
                (x,) = self.operands
                return f"Unary minus applied: -{format_number(x)} -> pushed {format_number(self.result)}"
            if op is Operator.PERCENT:
                (x,) = self.operands
                return f"Percent applied: {format_number(x)}% -> pushed {format_number(self.result)}"
            x, y = self.operands
            return f"Applying {op.symbol} to {format_number(x)} and {format_number(y)} -> {format_number(self.result)}"
        # emitted token
        if isinstance(tok, NumberToken):
            return f"Number: {format_number(tok.value)}"
        if isinstance(tok, OperatorToken):
            return f"Operator: {'u' if tok.op is Operator.NEGATE else tok.op.symbol}"
        if isinstance(tok, LeftParen):
            return "Paren: ("
        if isinstance(tok, RightParen):
            return "Paren: )"
        return repr(tok)


Tracer = Callable[[TraceEvent], None]


class ConsoleTracer:
    """Writes trace events to a stream, with a header before each stage."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self._stage: Optional[str] = None

    def __call__(self, event: TraceEvent) -> None:
        out = self.stream or sys.stdout
        if event.stage != self._stage:
            if self._stage is not None:
                print("-----------------------------------", file=out)
            self._stage = event.stage
            print(f"--- Debug: {STAGE_HEADERS.get(event.stage, event.stage)} ---", file=out)
        print(event.describe(), file=out)

    def reset(self) -> None:
        """Forget the current stage so the next expression starts with a fresh header."""
        if self._stage is not None:
            print("-----------------------------------", file=self.stream or sys.stdout)
        self._stage = None


class LoggingTracer:
    """Sends trace events to the module logger at DEBUG level."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def __call__(self, event: TraceEvent) -> None:
        self.log.debug(f"[{event.stage}] {event.describe()}")
