"""
Bottom-up evaluation of an expression tree with 32-bit signed semantics.

Intermediate results are exact Python ints checked against the int32 range
after every operation, so overflow surfaces as ArithmeticFault rather than
silently wrapping. Division truncates toward zero.
"""
from errors import ArithmeticFault
from token_model import I32, ExprBinary, ExprUnary, Number, Operator, Value


def _checked(result: int, what: str) -> int:
    if not I32.min <= result <= I32.max:
        raise ArithmeticFault(f"integer overflow in {what}: {result} is outside int32")
    return result


def truncating_div(lhs: int, rhs: int) -> int:
    """Integer division rounding toward zero (7 / -2 == -3)."""
    if rhs == 0:
        raise ArithmeticFault(f"division by zero: {lhs} / 0")
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient


def apply_binary(op: Operator, lhs: int, rhs: int) -> int:
    if op is Operator.ADD:
        result = lhs + rhs
    elif op is Operator.SUB:
        result = lhs - rhs
    elif op is Operator.MUL:
        result = lhs * rhs
    elif op is Operator.DIV:
        result = truncating_div(lhs, rhs)
    else:
        raise ValueError(f"{op!r} is not a binary operator")
    return _checked(result, f"{lhs} {op.symbol} {rhs}")


def evaluate(value: Value) -> int:
    """Evaluate *value* to an int, raising ArithmeticFault on /0 or overflow."""
    if isinstance(value, Number):
        return value.value
    if isinstance(value, ExprBinary):
        return apply_binary(value.op, evaluate(value.lhs), evaluate(value.rhs))
    if isinstance(value, ExprUnary):
        operand = evaluate(value.operand)
        return _checked(-operand, f"-({operand})")
    raise TypeError(f"not an expression tree: {value!r}")
