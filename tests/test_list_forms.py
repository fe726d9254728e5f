import pytest

from conslisp.types.symbol import Symbol, TRUE, FALSE, NIL, ERROR
from conslisp.types.value import Pair, from_iterable


def L(*items):
    return from_iterable(items)


def test_car_and_cdr(run):
    assert run("(car (quote (1 2 3)))") == 1
    assert run("(cdr (quote (1 2 3)))") == L(2, 3)
    assert run("(cdr (quote (1)))") is NIL
    assert run("(car (car (quote ((a b) c))))") == Symbol("a")


@pytest.mark.parametrize("source", ["(car 1)", "(cdr 1)", "(car ())", '(cdr "ab")'])
def test_car_cdr_of_non_pair_is_error(run, source):
    assert run(source) is ERROR


def test_car_cdr_without_argument_is_absent(run):
    assert run("(car)") is None
    assert run("(cdr)") is None


def test_cons(run):
    assert run("(cons 1 (quote (2 3)))") == L(1, 2, 3)
    assert run("(cons 1 ())") == L(1)
    assert run("(cons 1 2)") == Pair(1, 2)
    assert run("(cons 1)") is ERROR


def test_list(run):
    assert run("(list 1 (+ 1 1) 3)") == L(1, 2, 3)
    assert run("(list)") is NIL
    assert run("(list (list 1) 2)") == L(L(1), 2)


def test_length(run):
    assert run("(length (list 1 2 3))") == 3
    assert run("(length ())") == 0
    assert run("(length 5)") is ERROR
    assert run("(length)") is ERROR


def test_null(run):
    assert run("(null ())") is TRUE
    assert run("(null nil)") is TRUE
    assert run("(null (list 1))") is FALSE
    assert run("(null 0)") is FALSE


def test_atom(run):
    assert run("(atom 1)") is TRUE
    assert run("(atom (quote a))") is TRUE
    assert run("(atom ())") is TRUE
    assert run("(atom (list 1))") is FALSE


def test_append(run):
    assert run("(append (list 1 2) (list 3) () (list 4 5))") == L(1, 2, 3, 4, 5)
    assert run("(append)") is NIL
    assert run("(append (list 1) 2)") is ERROR


def test_append_copies_its_arguments(run):
    run("(define xs (list 1 2))")
    run("(define ys (append xs (list 3)))")
    assert run("xs") == L(1, 2)
    assert run("ys") == L(1, 2, 3)


def test_recursive_list_function(run):
    run("(define sum (lambda (xs) (if (null xs) 0 (+ (car xs) (sum (cdr xs))))))")
    assert run("(sum (list 1 2 3 4))") == 10
