"""List processing primitives: car, cdr, cons, list, length, null, atom, append."""

from conslisp import EvaluatorFn
from conslisp import SExpression, LispValue
from conslisp.session import EvaluationSession
from conslisp.types.environment import Environment
from conslisp.types.symbol import ERROR, NIL, boolean
from conslisp.types.value import Pair, from_iterable, is_atom, is_proper_list, iter_list, list_length


def _single_value(
    args: SExpression, env: Environment, session: EvaluationSession, evaluate_fn: EvaluatorFn
):
    return evaluate_fn(args.head, env, session)


def car_form(
    args: SExpression,
    env: Environment,
    session: EvaluationSession,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if not isinstance(args, Pair):
        return None
    value = _single_value(args, env, session, evaluate_fn)
    if not isinstance(value, Pair):
        return ERROR
    return value.head


def cdr_form(
    args: SExpression,
    env: Environment,
    session: EvaluationSession,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if not isinstance(args, Pair):
        return None
    value = _single_value(args, env, session, evaluate_fn)
    if not isinstance(value, Pair):
        return ERROR
    return value.tail


def cons_form(
    args: SExpression,
    env: Environment,
    session: EvaluationSession,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if not isinstance(args, Pair) or not isinstance(args.tail, Pair):
        return ERROR
    first = evaluate_fn(args.head, env, session)
    rest = evaluate_fn(args.tail.head, env, session)
    return Pair(first, rest)


def list_form(
    args: SExpression,
    env: Environment,
    session: EvaluationSession,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    return from_iterable(evaluate_fn(e, env, session) for e in iter_list(args))


def length_form(
    args: SExpression,
    env: Environment,
    session: EvaluationSession,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if not isinstance(args, Pair):
        return ERROR
    value = _single_value(args, env, session, evaluate_fn)
    if value is NIL:
        return 0
    if not isinstance(value, Pair):
        return ERROR
    return list_length(value)


def null_form(
    args: SExpression,
    env: Environment,
    session: EvaluationSession,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if not isinstance(args, Pair):
        return ERROR
    value = _single_value(args, env, session, evaluate_fn)
    return boolean(value is NIL or value is None)


def atom_form(
    args: SExpression,
    env: Environment,
    session: EvaluationSession,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if not isinstance(args, Pair):
        return ERROR
    return boolean(is_atom(_single_value(args, env, session, evaluate_fn)))


def append_form(
    args: SExpression,
    env: Environment,
    session: EvaluationSession,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(append l1 l2 ...): a fresh list of all elements; each argument must be a list."""
    items = []
    for expr in iter_list(args):
        value = evaluate_fn(expr, env, session)
        if not is_proper_list(value):
            return ERROR
        items.extend(iter_list(value))
    return from_iterable(items)
