from __future__ import annotations

import logging

from conslisp import LispValue, SExpression
from conslisp.builtins import register
from conslisp.errors import LispSyntaxError
from conslisp.evaluation.evaluator import evaluate
from conslisp.reader.parser import Cursor, check_balance, parse, parse_object
from conslisp.reader.tokenizer import tokenize
from conslisp.session import EvaluationSession
from conslisp.types.environment import Environment

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Owns the root environment and the diagnostic session.
    Definitions persist across calls; each line or top-level form is one
    evaluation request.
    """
    def __init__(self, prelude: str | None = None):
        self.env = Environment()
        register(self.env)
        self.session = EvaluationSession()

        if prelude:
            self.eval_source(prelude)

    def read(self, line: str) -> tuple[SExpression, list[str]]:
        """Parse one object from `line`; returns it with any leftover tokens.

        Raises LispSyntaxError when the brackets do not balance.
        """
        tokens = tokenize(line, self.session)
        if check_balance(tokens) != 0:
            raise LispSyntaxError("Unbalanced parentheses.")
        expr, cursor = parse(tokens)
        return expr, cursor.remaining

    def evaluate(self, expr: SExpression) -> LispValue:
        """Evaluate one top-level form in the root environment."""
        self.session.reset()
        return evaluate(expr, self.env, self.session)

    def eval_line(self, line: str) -> LispValue:
        """Read and evaluate the first object on `line`.

        Extra objects after it are reported, not evaluated.
        """
        expr, leftover = self.read(line)
        result = self.evaluate(expr)
        if leftover:
            self.session.report(f"extraneous input: {leftover[0]}...")
        return result

    def eval_source(self, source: str) -> list[LispValue]:
        """Evaluate every top-level form in `source`, which may span lines."""
        tokens = tokenize(source, self.session)
        if check_balance(tokens) != 0:
            raise LispSyntaxError("Unbalanced parentheses.")
        cursor = Cursor(tokens)
        results = []
        while not cursor.at_end:
            expr = parse_object(cursor)
            logger.debug("evaluating top-level form at token %d", cursor.position)
            results.append(self.evaluate(expr))
        return results
