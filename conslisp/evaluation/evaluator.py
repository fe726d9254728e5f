"""Core evaluator for the conslisp interpreter.

Plain recursive reduction, no tail-call handling. Dispatch order:

1. absent, reserved sentinel or constant -> returned unchanged
2. symbol -> resolved through the environment chain (NIL when unbound)
3. pair -> `quote` and `lambda` are handled here; any other head is resolved
   or evaluated to a procedure and applied to the unevaluated argument list

Failures never raise: they come back as the #error / #nil / #f sentinels and
flow onward like any other value.
"""

from __future__ import annotations

from typing import Optional

from conslisp import SExpression, LispValue
from conslisp.session import EvaluationSession
from conslisp.types.environment import Environment, NOT_FOUND
from conslisp.types.symbol import ERROR, NIL, Symbol, is_reserved
from conslisp.types.value import Closure, NativeProcedure, Pair, is_constant, iter_list
from conslisp.evaluation.primitives import PRIMITIVES

QUOTE = Symbol("quote")
LAMBDA = Symbol("lambda")


def evaluate(
    expr: SExpression, env: Environment, session: Optional[EvaluationSession] = None
) -> LispValue:
    """Reduce `expr` to a value in `env`.

    `session` collects diagnostics; the caller resets it before each
    top-level request.
    """
    if session is None:
        session = EvaluationSession()

    if expr is None or is_reserved(expr) or is_constant(expr):
        return expr

    if isinstance(expr, Symbol):
        value = env.resolve(expr, session)
        return NIL if value is NOT_FOUND else value

    if not isinstance(expr, Pair):
        # Procedure values are self-evaluating
        return expr

    first = expr.head
    if first is None or is_reserved(first) or is_constant(first):
        return ERROR

    if isinstance(first, Symbol):
        if first == QUOTE:
            return quote(expr.tail)
        if first == LAMBDA:
            return make_closure(expr.tail, env)
        procedure = env.resolve(first, session)
        if procedure is NOT_FOUND:
            return ERROR
    elif isinstance(first, Pair):
        # ((lambda (x) ...) arg): evaluate the operator position first
        procedure = evaluate(first, env, session)
    else:
        procedure = first

    return apply_procedure(procedure, expr.tail, env, session)


def quote(args: SExpression) -> LispValue:
    """(quote x) -> x; (quote a b ...) -> (a b ...); (quote) -> NIL."""
    if isinstance(args, Pair):
        return args.head if args.tail is NIL else args
    return NIL


def make_closure(args: SExpression, env: Environment) -> Optional[Closure]:
    """(lambda params body...) -> Closure; None when no body is given."""
    if not isinstance(args, Pair) or not isinstance(args.tail, Pair):
        return None
    return Closure(args.head, args.tail, env)


def apply_procedure(
    procedure: LispValue, args: SExpression, env: Environment, session: EvaluationSession
) -> LispValue:
    """Apply `procedure` to the unevaluated `args` in the caller's `env`."""
    if isinstance(procedure, Closure):
        return invoke_closure(procedure, args, env, session)
    if isinstance(procedure, NativeProcedure):
        return PRIMITIVES[procedure.kind](args, env, session, evaluate)
    return ERROR


def invoke_closure(
    closure: Closure, args: SExpression, env: Environment, session: EvaluationSession
) -> LispValue:
    frame = Environment.from_call_frame(
        closure.params, args, closure.env, env, evaluate, session
    )
    # The frame is dropped on return unless a closure built in the body kept it
    return evaluate_sequence(closure.body, frame, session)


def evaluate_sequence(
    forms: SExpression, env: Environment, session: EvaluationSession
) -> LispValue:
    """Evaluate each form in order and return the last value (None if empty)."""
    result: LispValue = None
    for form in iter_list(forms):
        result = evaluate(form, env, session)
    return result
