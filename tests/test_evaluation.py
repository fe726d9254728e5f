import pytest

from conslisp.evaluation.evaluator import evaluate
from conslisp.reader.parser import read
from conslisp.types.environment import Environment
from conslisp.types.symbol import Symbol, TRUE, FALSE, NIL, ERROR
from conslisp.types.value import Closure, NativeProcedure, Pair, Primitive, from_iterable


def L(*items):
    return from_iterable(items)


# -----------------------------------------------------
# Self-evaluation and lookup
# -----------------------------------------------------

def test_self_evaluating_values(env, session):
    assert evaluate(1, env, session) == 1
    assert evaluate(3.14, env, session) == 3.14
    assert evaluate("hello", env, session) == "hello"
    assert evaluate(None, env, session) is None
    for sentinel in (TRUE, FALSE, NIL, ERROR):
        assert evaluate(sentinel, env, session) is sentinel


def test_symbol_lookup(run, env):
    env.define("x", 42)
    assert run("x") == 42
    assert run("nil") is NIL
    assert run("#t") is TRUE
    assert run("car") == NativeProcedure(Primitive.CAR)


def test_undefined_symbol_yields_nil_with_diagnostic(run, session):
    assert run("nowhere") is NIL
    assert session.diagnostics == ["Undefined symbol 'nowhere'"]


def test_undefined_symbol_reported_once_per_request(run, session):
    assert run("(list ghost ghost (+ ghost 1))") == L(NIL, NIL, FALSE)
    assert session.diagnostics == ["Undefined symbol 'ghost'"]
    run("ghost")
    assert session.diagnostics == ["Undefined symbol 'ghost'", "Undefined symbol 'ghost'"]


# -----------------------------------------------------
# Dispatch failures
# -----------------------------------------------------

@pytest.mark.parametrize("source", ["(1 2)", '("f" 1)', "(#t 1)", "(#nil)", "(#error 1)"])
def test_constant_or_sentinel_head_is_an_error(run, source):
    assert run(source) is ERROR


def test_unbound_operator_is_an_error(run, session):
    assert run("(frobnicate 1)") is ERROR
    assert session.diagnostics == ["Undefined symbol 'frobnicate'"]


def test_non_procedure_operator_is_an_error(run, env):
    env.define("n", 3)
    assert run("(n 1 2)") is ERROR


def test_error_flows_on_as_a_value(run):
    assert run("(list (1 2) 3)") == L(ERROR, 3)


# -----------------------------------------------------
# quote / lambda
# -----------------------------------------------------

def test_quote(run):
    assert run("(quote a)") == Symbol("a")
    assert run("(quote (1 2 3))") == L(1, 2, 3)
    assert run("(quote a b)") == L(Symbol("a"), Symbol("b"))
    assert run("(quote)") is NIL
    assert run("(quote (undefined_thing))") == L(Symbol("undefined_thing"))


def test_lambda_builds_closure_over_current_env(run, env):
    closure = run("(lambda (a b) (+ a b))")
    assert isinstance(closure, Closure)
    assert closure.params == L(Symbol("a"), Symbol("b"))
    assert closure.body == L(L(Symbol("+"), Symbol("a"), Symbol("b")))
    assert closure.env is env


@pytest.mark.parametrize("source", ["(lambda)", "(lambda (x))", "(lambda . 1)"])
def test_malformed_lambda_is_absent(run, source):
    assert run(source) is None


def test_immediate_lambda_application(run, env):
    before = set(env.local_names())
    assert run("((lambda (a b) (+ a b)) 3 4)") == 7
    # The call frame does not leak into the root environment
    assert set(env.local_names()) == before


def test_lambda_with_no_params(run):
    assert run("((lambda () 5))") == 5


def test_lambda_body_forms_run_in_order(run):
    assert run("((lambda (x) (define y (* x 2)) (+ y 1)) 5)") == 11


def test_variadic_lambda(run):
    assert run("((lambda args args) 1 (+ 1 1) 3)") == L(1, 2, 3)
    assert run("((lambda args (length args)))") == 0


def test_missing_argument_is_undefined_on_use(run, session):
    assert run("((lambda (a b) b) 1)") is NIL
    assert session.diagnostics == ["Undefined symbol 'b'"]


def test_missing_argument_does_not_see_global_of_same_name(run, session):
    run("(define b 7)")
    assert run("((lambda (a b) b) 1)") is NIL
    assert session.diagnostics == ["Undefined symbol 'b'"]
    assert run("((lambda (a b) (setq b 3) b) 1)") == 3
    assert run("b") == 7


def test_extra_arguments_are_ignored(run):
    assert run("((lambda (a) a) 1 2 3)") == 1


def test_named_function_and_recursion(run):
    run("(define fact (lambda (n) (if (<= n 1) 1 (* n (fact (- n 1))))))")
    assert run("(fact 10)") == 3628800


def test_closures_capture_defining_environment(run):
    run("(define make_adder (lambda (n) (lambda (x) (+ x n))))")
    run("(define add5 (make_adder 5))")
    run("(define n 100)")
    assert run("(add5 1)") == 6


def test_arguments_evaluate_in_caller_scope(run):
    run("(define show (lambda (v) v))")
    run("(define outer (lambda (local) (show local)))")
    assert run("(outer 9)") == 9


def test_counter_closure_keeps_state(run):
    run("(define make_counter (lambda () ((lambda (count) (lambda () (setq count (+ count 1)))) 0)))")
    run("(define tick (make_counter))")
    assert [run("(tick)") for _ in range(3)] == [1, 2, 3]


# -----------------------------------------------------
# if / begin / not
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(if #f 1 2)", 2),
        ("(if #t 1 2)", 1),
        ("(if 0 1 2)", 1),
        ("(if () 1 2)", 1),
        ("(if (< 1 2) 10 20)", 10),
        ("(if (> 1 2) 10 20)", 20),
        ("(if (+ 1 x_undefined) 10 20)", 20),
    ],
)
def test_if(run, source, expected):
    assert run(source) == expected


def test_if_without_else(run):
    assert run("(if #f 1)") is None
    assert run("(if #t 1)") == 1


@pytest.mark.parametrize("source", ["(if)", "(if #t)"])
def test_if_arity_errors(run, source):
    assert run(source) is ERROR


def test_begin_returns_last_value(run):
    assert run("(begin (define a 10) (define b 20) (+ a b))") == 30
    assert run("(begin 1 2)") == 2
    assert run("(begin 7)") == 7
    assert run("(begin)") is None


def test_not(run):
    assert run("(not #f)") is TRUE
    assert run("(not #t)") is FALSE
    assert run("(not 0)") is FALSE
    assert run("(not (+ 1 #t))") is TRUE


# -----------------------------------------------------
# define / setq
# -----------------------------------------------------

def test_define_and_lookup(run, env):
    assert run("(define x 5) ") == 5
    assert run("x") == 5
    # Visible from a fresh call frame chained to env
    frame = Environment(env)
    assert evaluate(read("x"), frame) == 5


def test_define_overwrites(run):
    run("(define x 1)")
    run("(define x 2)")
    assert run("x") == 2


def test_define_inside_function_is_local(run, env):
    run("(define x 1)")
    run("((lambda () (define x 99)))")
    assert run("x") == 1


def test_setq_updates_outer_binding(run):
    run("(define x 1)")
    run("((lambda () (setq x 99)))")
    assert run("x") == 99


def test_setq_on_undeclared_name(run, env, session):
    assert run("(setq never_defined 3)") is NIL
    assert "never_defined" not in env
    assert session.diagnostics[-1] == "Variable 'never_defined' does not exist."


@pytest.mark.parametrize("source", ["(define)", "(define x)", "(define 1 2)", '(setq "x" 2)', "(setq y)"])
def test_binding_arity_errors(run, source):
    assert run(source) is ERROR


# -----------------------------------------------------
# Pair-headed expressions
# -----------------------------------------------------

def test_computed_operator(run):
    run("(define pick (lambda (flag) (if flag car cdr)))")
    assert run("((pick #t) (quote (1 2)))") == 1
    assert run("((pick #f) (quote (1 2)))") == L(2)


def test_computed_non_procedure_is_error(run):
    assert run("((+ 1 2) 3)") is ERROR


def test_procedure_value_at_head(env, session):
    expr = Pair(NativeProcedure(Primitive.ADD), L(1, 2))
    assert evaluate(expr, env, session) == 3
