"""Initial bindings for the root environment."""

from __future__ import annotations

from conslisp.types.environment import Environment
from conslisp.types.symbol import FALSE, NIL, TRUE, Symbol
from conslisp.types.value import NativeProcedure, Primitive


def register(env: Environment) -> None:
    """Register the constants and every primitive into the given environment."""
    env.update({Symbol(kind.value): NativeProcedure(kind) for kind in Primitive})
    env.define(Symbol("nil"), NIL)
    env.define(Symbol("#t"), TRUE)
    env.define(Symbol("#f"), FALSE)
