"""Runtime environment for conslisp.

The Environment stores bindings of Symbols to evaluated Lisp values and supports
nested scopes via an `outer` link. The root environment lives for the whole
process; one call frame is created per closure invocation and dropped when the
call returns, unless a closure created inside it captured it.
"""

from __future__ import annotations

import logging
from io import StringIO
from typing import Iterator, Optional

from conslisp import EvaluatorFn, LispValue, SExpression
from conslisp.errors import LispInvalidSymbol
from conslisp.types.symbol import NIL, Symbol, is_reserved
from conslisp.types.value import Pair, from_iterable, iter_list

logger = logging.getLogger(__name__)


class NotFoundType:
    def __repr__(self): return "<not found>"
    def __bool__(self): return False


NOT_FOUND = NotFoundType()


def _key(name: Symbol | str) -> Symbol:
    if isinstance(name, Symbol):
        return name
    if isinstance(name, str):
        return Symbol(name)
    raise LispInvalidSymbol(f"Cannot bind {name!r} as a symbol")


class Environment:
    """Hierarchical mapping from Symbols to Lisp values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer

    @classmethod
    def from_call_frame(
        cls,
        params: SExpression,
        args: SExpression,
        outer: Environment,
        caller: Environment,
        evaluate_fn: EvaluatorFn,
        session=None,
    ) -> Environment:
        """Build the frame for one closure invocation.

        `outer` is the closure's captured environment; argument expressions are
        evaluated in `caller`. A bare symbol as `params` receives the list of
        all evaluated arguments. Otherwise parameters and arguments are walked
        in lockstep: extra arguments are ignored, a missing one leaves its
        parameter declared in the frame but unassigned (NOT_FOUND).
        """
        frame = cls(outer)

        def rest(exprs: SExpression) -> LispValue:
            return from_iterable(evaluate_fn(e, caller, session) for e in iter_list(exprs))

        if isinstance(params, Symbol):
            if not is_reserved(params):
                frame.vars[params] = rest(args)
            return frame

        while isinstance(params, Pair):
            param = params.head
            bindable = isinstance(param, Symbol) and not is_reserved(param)
            if isinstance(args, Pair):
                if bindable:
                    frame.vars[param] = evaluate_fn(args.head, caller, session)
                args = args.tail
            elif bindable:
                # Shadows any outer binding; reads as undefined until assigned
                frame.vars[param] = NOT_FOUND
            params = params.tail

        # Dotted (a b . rest) parameter list, only reachable through cons
        if isinstance(params, Symbol) and params is not NIL and not is_reserved(params):
            frame.vars[params] = rest(args)
        return frame

    def resolve(self, name: Symbol | str, session=None) -> LispValue:
        """Look up `name` along the chain.

        Returns NOT_FOUND on a miss after reporting an undefined symbol
        (deduplicated per top-level request when a session is given).
        """
        key = _key(name)
        env: Optional[Environment] = self
        while env is not None:
            if key in env.vars:
                value = env.vars[key]
                if value is not NOT_FOUND:
                    return value
                # Declared parameter that received no argument
                break
            env = env.outer
        if session is not None:
            session.undefined_symbol(key.id)
        else:
            logger.warning("Undefined symbol '%s'", key.id)
        return NOT_FOUND

    def bind(self, name: Symbol | str, value: LispValue, current_scope_only: bool) -> bool:
        """Bind `name` to `value`.

        An existing local binding is overwritten in place. Otherwise, with
        `current_scope_only` the binding is created here (define); without it
        the enclosing scopes are searched and False is returned when none of
        them declares the name (assignment).
        """
        key = _key(name)
        env: Optional[Environment] = self
        while env is not None:
            if key in env.vars:
                env.vars[key] = value
                return True
            if current_scope_only:
                env.vars[key] = value
                return True
            env = env.outer
        return False

    def define(self, name: Symbol | str, value: LispValue) -> None:
        self.bind(name, value, current_scope_only=True)

    def assign(self, name: Symbol | str, value: LispValue) -> bool:
        return self.bind(name, value, current_scope_only=False)

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.vars[_key(k)] = v

    def local_names(self) -> Iterator[str]:
        return (k.id for k in self.vars)

    def __contains__(self, name: Symbol | str) -> bool:
        return _key(name) in self.vars

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as buffer:
                env._write_vars(buffer)
                chain.append(buffer.getvalue())
            env = env.outer
        return f"<Environment chain: {' -> '.join(chain)}>"
