"""Render values as Lisp text for the REPL."""

from __future__ import annotations

from conslisp import LispValue
from conslisp.types.symbol import NIL, Symbol
from conslisp.types.value import Closure, NativeProcedure, Pair, is_integer


def to_lisp_string(value: LispValue) -> str:
    if value is None:
        return "null"
    if isinstance(value, Closure):
        return "<Lambda>"
    if isinstance(value, NativeProcedure):
        return f"<builtin {value.kind.value}>"
    if isinstance(value, Pair):
        return _list_to_string(value)
    if is_integer(value):
        return str(value)
    if isinstance(value, float):
        return "%f" % value
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, Symbol):
        return value.id
    return repr(value)


def _list_to_string(value: Pair) -> str:
    parts = []
    cur: LispValue = value
    while isinstance(cur, Pair):
        parts.append(to_lisp_string(cur.head))
        cur = cur.tail
    if cur is None or cur is NIL:
        return f"({' '.join(parts)})"
    return f"({' '.join(parts)} . {to_lisp_string(cur)})"
