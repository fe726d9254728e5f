"""Runtime value variants for conslisp.

Every datum is one of: Integer (`int`), Float (`float`), StringLiteral
(`str`), Symbol, NativeProcedure, Pair or Closure. Only Pair is not an atom.
Lists are right-nested Pairs terminated by the NIL sentinel.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, Optional

from conslisp import LispValue, SExpression
from conslisp.types.symbol import NIL


class Primitive(Enum):
    """Closed set of built-in operations, keyed by the name they are bound to."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    EQ = "eq"
    NE = "ne"
    BEGIN = "begin"
    IF = "if"
    NOT = "not"
    DEFINE = "define"
    SETQ = "setq"
    CAR = "car"
    CDR = "cdr"
    CONS = "cons"
    LIST = "list"
    LENGTH = "length"
    NULL = "null"
    ATOM = "atom"
    APPEND = "append"


class NativeProcedure:
    """Handle to a built-in operation. Receives its argument forms unevaluated."""

    __slots__ = ("kind",)

    def __init__(self, kind: Primitive):
        self.kind = kind

    def __eq__(self, other) -> bool:
        return isinstance(other, NativeProcedure) and self.kind is other.kind

    def __hash__(self) -> int:
        return hash(self.kind)

    def __repr__(self) -> str:
        return f"NativeProcedure({self.kind.value!r})"


class Pair:
    """The cons cell. Treated as immutable once built."""

    __slots__ = ("head", "tail")

    def __init__(self, head: LispValue, tail: LispValue = NIL):
        self.head = head
        self.tail = tail

    def __eq__(self, other) -> bool:
        # Structural, iterative along the tail so long lists do not recurse
        a, b = self, other
        while isinstance(a, Pair) and isinstance(b, Pair):
            if a is b:
                return True
            if a.head != b.head:
                return False
            a, b = a.tail, b.tail
        if isinstance(a, Pair) or isinstance(b, Pair):
            return False
        return a == b

    __hash__ = None

    def __iter__(self) -> Iterator[LispValue]:
        return iter_list(self)

    def __repr__(self) -> str:
        return f"Pair({self.head!r}, {self.tail!r})"


class Closure:
    """A lambda: parameter list, list of body forms, and the defining environment."""

    __slots__ = ("params", "body", "env")

    def __init__(self, params: SExpression, body: SExpression, env):
        self.params = params
        self.body = body
        # Shared with every other holder; lives as long as the closure does
        self.env = env

    def __repr__(self) -> str:
        return "<Lambda>"


def is_integer(value: LispValue) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_atom(value: LispValue) -> bool:
    return not isinstance(value, Pair)


def is_constant(value: LispValue) -> bool:
    """Self-evaluating data: Integer, Float and StringLiteral."""
    return is_integer(value) or isinstance(value, (float, str))


def get_value(value: LispValue, kind: type) -> Optional[LispValue]:
    """Test-and-extract: `value` if it is of variant `kind`, otherwise None.

    Never raises on a mismatch; callers branch on the result.
    """
    if kind is int:
        return value if is_integer(value) else None
    return value if isinstance(value, kind) else None


def head(value: LispValue) -> Optional[LispValue]:
    return value.head if isinstance(value, Pair) else None


def tail(value: LispValue) -> Optional[LispValue]:
    return value.tail if isinstance(value, Pair) else None


def from_iterable(items: Iterable[LispValue], last: LispValue = NIL) -> LispValue:
    """Build a right-nested list of `items` ending in `last`."""
    result = last
    for item in reversed(list(items)):
        result = Pair(item, result)
    return result


def iter_list(value: LispValue) -> Iterator[LispValue]:
    """Yield the heads along a Pair chain; stops at the first non-Pair tail."""
    while isinstance(value, Pair):
        yield value.head
        value = value.tail


def is_proper_list(value: LispValue) -> bool:
    while isinstance(value, Pair):
        value = value.tail
    return value is NIL


def list_length(value: LispValue) -> int:
    return sum(1 for _ in iter_list(value))


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def wrap_int64(n: int) -> int:
    """Reduce `n` into the signed 64-bit range, two's complement style."""
    return ((n - INT64_MIN) % 2**64) + INT64_MIN
