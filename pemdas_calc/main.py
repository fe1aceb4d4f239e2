# main.py
"""
Interactive front end for the PEMDAS calculator.

The REPL reads one line at a time, intercepts the reserved commands 'help'
and 'exit', and hands everything else to evaluate_expression(). Results are
printed as "Answer: <value>", failures as "Error: <message>" on stderr; an
error never ends the session.

Line input goes through prompt_toolkit (with file-backed history) unless a
read_line callable is injected, which is how the tests drive the loop.
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from . import __version__
from .config import CalculatorConfig, load_config
from .core import evaluate_expression
from .errors import CalculatorError
from .tracing import ConsoleTracer, format_number

logger = logging.getLogger(__name__)

EXIT_COMMAND = 'exit'
HELP_COMMAND = 'help'

BANNER = (
    "------ Welcome to Calculator 2.0 ------\n"
    "Available operations (PEMDAS): (), %, ^, *, /, +, -. Negative numbers supported!\n"
    "Type 'exit' to close program. Type 'help' for hints."
)

HELP_TEXT = (
    "Enter any mathematical expression using numbers and any of the following operations: "
    "(), %, ^, *, /, +, -.\n"
    "Precedence (high -> low): %  ^  unary -  * /  + -\n"
    "  ^ is right-associative: 2^3^2 == 2^(3^2) == 512\n"
    "  % divides the value before it by 100: 50% == 0.5\n"
    "  -3^2 == -(3^2) == -9\n"
    "Type 'exit' to close program."
)

GOODBYE = "Program finished with exit code 0."


def format_result(value: float) -> str:
    return f"Answer: {format_number(value)}"


class REPL:
    """Read-Eval-Print Loop for the calculator."""

    def __init__(self, config: Optional[CalculatorConfig] = None,
                 read_line: Optional[Callable[[str], str]] = None):
        self.config = config or CalculatorConfig()
        self._read_line = read_line
        self.tracer = ConsoleTracer() if self.config.trace else None

    def read_line(self, prompt: str) -> str:
        if self._read_line is None:
            session = PromptSession(history=FileHistory(self.config.history_file))
            self._read_line = session.prompt
        return self._read_line(prompt)

    def greet(self) -> None:
        print(BANNER)

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """Evaluate a single line (either command or expression). Returns (ok, output).

        Raises EOFError for the 'exit' command so the loop can shut down.
        """
        s = line.strip()
        if not s:
            return True, ""
        if s == EXIT_COMMAND:
            raise EOFError()
        if s == HELP_COMMAND:
            return True, HELP_TEXT

        try:
            result = evaluate_expression(s, self.tracer)
            return True, format_result(result)
        except CalculatorError as e:
            logger.info(f"Rejected expression {s!r}: {e.kind.value}")
            return False, f"Error: {e.message}"
        finally:
            if self.tracer is not None:
                self.tracer.reset()

    def repl_loop(self) -> None:
        """Interactive loop; returns on 'exit' or end of input."""
        if self.config.banner:
            self.greet()
        while True:
            try:
                line = self.read_line(self.config.prompt)
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                break
            try:
                ok, out = self.evaluate_line(line)
            except EOFError:
                break
            if not out:
                continue
            print(out, file=sys.stdout if ok else sys.stderr)
        print(GOODBYE)


# ---------------------------
# Entry point
# ---------------------------

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pemdas-calc", description="An interactive PEMDAS calculator.")
    parser.add_argument(
        "expression",
        nargs="?",
        help="Evaluate this expression once and exit instead of starting the REPL.",
    )
    parser.add_argument("--trace", action="store_true", default=None, help="Print each pipeline step.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Don't print the initial banner.")
    parser.add_argument("--log-level", type=str, help="Logging level (DEBUG, INFO, WARNING, ...).")
    parser.add_argument("-v", "--version", action="version", version=f"pemdas-calc {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    overrides = {}
    if args.trace:
        overrides['trace'] = True
    if args.quiet:
        overrides['banner'] = False
    if args.log_level:
        overrides['log_level'] = args.log_level
    config = load_config()
    if overrides:
        config = CalculatorConfig(**{**config.model_dump(), **overrides})

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    repl = REPL(config)
    if args.expression is not None:
        try:
            ok, out = repl.evaluate_line(args.expression)
        except EOFError:
            # 'exit' given as the one-shot expression
            return 0
        if out:
            print(out, file=sys.stdout if ok else sys.stderr)
        return 0 if ok else 1

    repl.repl_loop()
    return 0


if __name__ == '__main__':
    sys.exit(main())
