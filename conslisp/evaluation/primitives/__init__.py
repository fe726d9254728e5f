"""Registry of primitive operations for the conslisp evaluator.

Maps each Primitive kind to the function implementing it. Every function
receives its argument forms unevaluated, `(args, env, session, evaluate_fn)`,
and decides for itself what to evaluate and in which order.
"""

from conslisp.types.value import Primitive
from conslisp.evaluation.primitives.arithmetic import (
    add_form, sub_form, mul_form, div_form,
    gt_form, lt_form, ge_form, le_form, eq_form, ne_form,
)
from conslisp.evaluation.primitives.binding_forms import define_form, setq_form
from conslisp.evaluation.primitives.control_forms import if_form, begin_form, not_form
from conslisp.evaluation.primitives.list_forms import (
    car_form, cdr_form, cons_form, list_form,
    length_form, null_form, atom_form, append_form,
)

PRIMITIVES = {
    Primitive.ADD: add_form,
    Primitive.SUB: sub_form,
    Primitive.MUL: mul_form,
    Primitive.DIV: div_form,
    Primitive.GT: gt_form,
    Primitive.LT: lt_form,
    Primitive.GE: ge_form,
    Primitive.LE: le_form,
    Primitive.EQ: eq_form,
    Primitive.NE: ne_form,
    Primitive.BEGIN: begin_form,
    Primitive.IF: if_form,
    Primitive.NOT: not_form,
    Primitive.DEFINE: define_form,
    Primitive.SETQ: setq_form,
    Primitive.CAR: car_form,
    Primitive.CDR: cdr_form,
    Primitive.CONS: cons_form,
    Primitive.LIST: list_form,
    Primitive.LENGTH: length_form,
    Primitive.NULL: null_form,
    Primitive.ATOM: atom_form,
    Primitive.APPEND: append_form,
}
