"""
Symbolic (SymPy) rendition of expression trees.

The tree is rebuilt with ``evaluate=False`` so its shape survives, then
``doit()`` folds it with SymPy's exact integers. Truncating division has
no SymPy primitive, so it is a custom ``Function`` that only evaluates once
both arguments are concrete integers.
"""
import sympy as sp

from errors import ArithmeticFault
from token_model import ExprBinary, ExprUnary, Number, Operator, Value


class TruncDiv(sp.Function):
    """Integer quotient rounded toward zero."""

    nargs = 2

    @classmethod
    def eval(cls, lhs, rhs):
        if lhs.is_Integer and rhs.is_Integer:
            a, b = int(lhs), int(rhs)
            if b == 0:
                raise ArithmeticFault(f"division by zero: {a} / 0")
            quotient = abs(a) // abs(b)
            return sp.Integer(quotient if (a < 0) == (b < 0) else -quotient)
        return None


def to_sympy(value: Value) -> sp.Expr:
    """Unevaluated SymPy expression with the same shape as *value*."""
    if isinstance(value, Number):
        return sp.Integer(value.value)
    if isinstance(value, ExprUnary):
        return sp.Mul(sp.Integer(-1), to_sympy(value.operand), evaluate=False)
    if isinstance(value, ExprBinary):
        lhs, rhs = to_sympy(value.lhs), to_sympy(value.rhs)
        if value.op is Operator.ADD:
            return sp.Add(lhs, rhs, evaluate=False)
        if value.op is Operator.SUB:
            return sp.Add(lhs, sp.Mul(sp.Integer(-1), rhs, evaluate=False), evaluate=False)
        if value.op is Operator.MUL:
            return sp.Mul(lhs, rhs, evaluate=False)
        return TruncDiv(lhs, rhs, evaluate=False)
    raise TypeError(f"not an expression tree: {value!r}")


def evaluate_symbolic(value: Value) -> int:
    """Fold *value* through SymPy; unbounded, so no overflow check."""
    result = to_sympy(value).doit()
    if not result.is_Integer:
        raise ValueError(f"symbolic evaluation did not reduce to an integer: {result}")
    return int(result)


def render(value: Value) -> str:
    return sp.srepr(to_sympy(value))
