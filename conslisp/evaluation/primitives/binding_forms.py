from typing import Optional

from conslisp import EvaluatorFn
from conslisp import SExpression, LispValue
from conslisp.session import EvaluationSession
from conslisp.types.environment import Environment
from conslisp.types.symbol import ERROR, NIL, Symbol
from conslisp.types.value import Pair


def _name_and_value(args: SExpression) -> Optional[tuple[Symbol, SExpression]]:
    if not isinstance(args, Pair) or not isinstance(args.tail, Pair):
        return None
    if not isinstance(args.head, Symbol):
        return None
    return args.head, args.tail.head


def define_form(
    args: SExpression,
    env: Environment,
    session: EvaluationSession,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (define name value)
    Always binds in the innermost scope, creating or overwriting.
    """
    operands = _name_and_value(args)
    if operands is None:
        return ERROR

    name, val_expr = operands
    value = evaluate_fn(val_expr, env, session)
    env.define(name, value)
    return value


def setq_form(
    args: SExpression,
    env: Environment,
    session: EvaluationSession,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (setq name value)
    Only overwrites a binding some enclosing scope already has.
    """
    operands = _name_and_value(args)
    if operands is None:
        return ERROR

    name, val_expr = operands
    value = evaluate_fn(val_expr, env, session)
    if env.assign(name, value):
        return value
    session.report(f"Variable '{name}' does not exist.")
    return NIL
