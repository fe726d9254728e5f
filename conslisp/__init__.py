# Core type aliases for the conslisp data model.
# Runtime values are plain Python int/float/str plus the classes in
# conslisp.types (Symbol, Pair, Closure, NativeProcedure). `None` stands for an
# absent value: an empty input, a missing `if` branch, an empty `begin`.
#
# Naming guidance:
# - SExpression: unevaluated forms handed to the evaluator and primitives.
# - LispValue:  evaluated runtime values.
# Both resolve to `Any`; code and data share one representation.

from typing import Any, Callable

LispValue = Any
SExpression = LispValue

# Evaluator function type handed to primitives: (expr, env, session) -> value
EvaluatorFn = Callable[..., LispValue]

__version__ = "0.1.0"
