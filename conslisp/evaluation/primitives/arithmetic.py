"""Variadic integer arithmetic and comparison.

(+ 1 2 3), (< a b c), ... Each operand form is resolved left to right: an
Integer literal is used as is, anything else is evaluated once and must yield
an Integer. Arithmetic folds right-nested, (op a b c) == (op a (op b c));
comparisons must hold between every adjacent pair.

Any non-integer operand, no operands at all, or division by zero make the
whole expression #f. The failure value is deliberately the same as false.
"""

from __future__ import annotations

import operator
from typing import Callable, Optional

from conslisp import EvaluatorFn, LispValue, SExpression
from conslisp.session import EvaluationSession
from conslisp.types.environment import Environment
from conslisp.types.symbol import FALSE, boolean
from conslisp.types.value import Pair, get_value, iter_list, wrap_int64

BinaryOp = Callable[[int, int], int]
CompareOp = Callable[[int, int], bool]


def _operand(
    expr: SExpression, env: Environment, session: EvaluationSession, evaluate_fn: EvaluatorFn
) -> Optional[int]:
    n = get_value(expr, int)
    if n is not None:
        return n
    return get_value(evaluate_fn(expr, env, session), int)


def _operands(
    args: SExpression, env: Environment, session: EvaluationSession, evaluate_fn: EvaluatorFn
) -> Optional[list[int]]:
    """All operands as ints, or None as soon as one is not an Integer."""
    if not isinstance(args, Pair):
        return None
    values = []
    for expr in iter_list(args):
        n = _operand(expr, env, session, evaluate_fn)
        if n is None:
            return None
        values.append(n)
    return values


def truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _arithmetic(op: BinaryOp):
    def form(
        args: SExpression,
        env: Environment,
        session: EvaluationSession,
        evaluate_fn: EvaluatorFn,
    ) -> LispValue:
        values = _operands(args, env, session, evaluate_fn)
        if values is None:
            return FALSE
        result = values[-1]
        try:
            for n in reversed(values[:-1]):
                result = wrap_int64(op(n, result))
        except ZeroDivisionError:
            return FALSE
        return result

    return form


def _comparison(op: CompareOp):
    def form(
        args: SExpression,
        env: Environment,
        session: EvaluationSession,
        evaluate_fn: EvaluatorFn,
    ) -> LispValue:
        values = _operands(args, env, session, evaluate_fn)
        if values is None:
            return FALSE
        return boolean(all(op(a, b) for a, b in zip(values, values[1:])))

    return form


add_form = _arithmetic(operator.add)
sub_form = _arithmetic(operator.sub)
mul_form = _arithmetic(operator.mul)
div_form = _arithmetic(truncating_div)

gt_form = _comparison(operator.gt)
lt_form = _comparison(operator.lt)
ge_form = _comparison(operator.ge)
le_form = _comparison(operator.le)
eq_form = _comparison(operator.eq)
ne_form = _comparison(operator.ne)
