from __future__ import annotations
import sys


class Symbol:
    __slots__ = ("id",)

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash and reduce memory
        self.id = sys.intern(name)

    def __eq__(self, other: Symbol) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id


# Reserved constants. The evaluator compares these by identity, so the reader
# must hand out these exact instances (see make_symbol).
TRUE = Symbol("#t")
FALSE = Symbol("#f")
NIL = Symbol("#nil")
ERROR = Symbol("#error")

RESERVED: dict[str, Symbol] = {s.id: s for s in (TRUE, FALSE, NIL, ERROR)}


def make_symbol(name: str) -> Symbol:
    """Return the reserved singleton for `name`, or a fresh Symbol."""
    return RESERVED.get(name) or Symbol(name)


def is_reserved(value) -> bool:
    return value is TRUE or value is FALSE or value is NIL or value is ERROR


def boolean(flag: bool) -> Symbol:
    return TRUE if flag else FALSE
