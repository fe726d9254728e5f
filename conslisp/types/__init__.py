from conslisp.types.symbol import Symbol, TRUE, FALSE, NIL, ERROR, make_symbol, is_reserved
from conslisp.types.value import (
    Primitive,
    NativeProcedure,
    Pair,
    Closure,
    is_atom,
    is_constant,
    get_value,
    head,
    tail,
    from_iterable,
    iter_list,
)
from conslisp.types.environment import Environment, NOT_FOUND
