# test_tracing.py

import io
import logging

from pemdas_calc.core import evaluate_expression, evaluate_postfix, to_postfix, tokenize
from pemdas_calc.tokens import LPAREN, NumberToken, Operator, OperatorToken
from pemdas_calc.tracing import ConsoleTracer, LoggingTracer, TraceEvent, format_number


class Recorder:
    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)


def test_format_number():
    assert format_number(3.0) == "3"
    assert format_number(-9.0) == "-9"
    assert format_number(0.5) == "0.5"
    assert format_number(-0.0) == "0"
    assert format_number(float('inf')) == "inf"
    assert format_number(1e20) == "1e+20"

def test_tokenizer_reports_each_emitted_token():
    rec = Recorder()
    toks = tokenize("-(1+2)", rec)
    assert [e.token for e in rec.events] == toks
    assert {(e.stage, e.action) for e in rec.events} == {('tokenize', 'emit')}

def test_converter_reports_output_tokens_only():
    rec = Recorder()
    out = to_postfix(tokenize("(1+2)*3"), rec)
    assert [e.token for e in rec.events] == out
    assert all(e.token is not LPAREN for e in rec.events)

def test_evaluator_reports_pushes_and_applications():
    rec = Recorder()
    postfix = [NumberToken(1.0), NumberToken(2.0), OperatorToken(Operator.ADD)]
    result = evaluate_postfix(postfix, rec)
    assert result == 3.0
    assert [e.action for e in rec.events] == ['push', 'push', 'apply']
    applied = rec.events[-1]
    assert applied.operands == (1.0, 2.0)
    assert applied.result == 3.0

def test_tracer_does_not_change_result():
    rec = Recorder()
    assert evaluate_expression("2^3^2", rec) == evaluate_expression("2^3^2")
    stages = [e.stage for e in rec.events]
    assert stages.index('postfix') > stages.index('tokenize')
    assert stages[-1] == 'evaluate'

def test_describe_matches_console_wording():
    push = TraceEvent('evaluate', 'push', NumberToken(3.0))
    assert push.describe() == "Push 3 onto stack"

    neg = TraceEvent('evaluate', 'apply', OperatorToken(Operator.NEGATE), (3.0,), -3.0)
    assert neg.describe() == "Unary minus applied: -3 -> pushed -3"

    pct = TraceEvent('evaluate', 'apply', OperatorToken(Operator.PERCENT), (50.0,), 0.5)
    assert pct.describe() == "Percent applied: 50% -> pushed 0.5"

    add = TraceEvent('evaluate', 'apply', OperatorToken(Operator.ADD), (1.0, 2.0), 3.0)
    assert add.describe() == "Applying + to 1 and 2 -> 3"

    assert TraceEvent('tokenize', 'emit', NumberToken(3.0)).describe() == "Number: 3"
    assert TraceEvent('tokenize', 'emit', OperatorToken(Operator.NEGATE)).describe() == "Operator: u"
    assert TraceEvent('tokenize', 'emit', LPAREN).describe() == "Paren: ("

def test_console_tracer_prints_stage_headers():
    buf = io.StringIO()
    tracer = ConsoleTracer(buf)
    evaluate_expression("1+2", tracer)
    tracer.reset()
    text = buf.getvalue()
    assert "--- Debug: After Tokenization ---" in text
    assert "--- Debug: Postfix Conversion ---" in text
    assert "Applying + to 1 and 2 -> 3" in text
    assert text.count("--- Debug: After Tokenization ---") == 1

def test_logging_tracer_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="pemdas_calc.tracing"):
        evaluate_expression("4*5", LoggingTracer())
    assert "[evaluate] Applying * to 4 and 5 -> 20" in caplog.text
