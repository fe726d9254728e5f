from conslisp import EvaluatorFn
from conslisp import SExpression, LispValue
from conslisp.session import EvaluationSession
from conslisp.types.environment import Environment
from conslisp.types.symbol import ERROR, FALSE, boolean
from conslisp.types.value import Pair, iter_list


def if_form(
    args: SExpression,
    env: Environment,
    session: EvaluationSession,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """(if test then [else]); only #f selects the else branch."""
    if not isinstance(args, Pair) or not isinstance(args.tail, Pair):
        return ERROR

    test = evaluate_fn(args.head, env, session)
    branches = args.tail
    if test is not FALSE:
        return evaluate_fn(branches.head, env, session)
    if isinstance(branches.tail, Pair):
        return evaluate_fn(branches.tail.head, env, session)
    return None


def begin_form(
    args: SExpression,
    env: Environment,
    session: EvaluationSession,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    result: LispValue = None
    for form in iter_list(args):
        result = evaluate_fn(form, env, session)
    return result


def not_form(
    args: SExpression,
    env: Environment,
    session: EvaluationSession,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if not isinstance(args, Pair):
        return ERROR
    return boolean(evaluate_fn(args.head, env, session) is FALSE)
