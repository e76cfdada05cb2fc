"""
Tree construction: split a priority-annotated token list at its
minimum-priority token, recursively, until only values remain.

Also the inverse direction: ``flatten_tree`` walks a tree back into infix
token order and ``to_infix`` renders it as fully parenthesised text.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from errors import MalformedInput, PriorityTieAmbiguity
from flag_bus import FlagBus
from token_model import ExprBinary, ExprUnary, Number, Operator, Token, Value
from utils.trace_helpers import add_traceback


def find_root(tokens: Sequence[Token]) -> Tuple[int, bool]:
    """Return (index of the first minimum-priority token, whether it is tied)."""
    if not tokens:
        raise MalformedInput("cannot find the root of an empty token list")
    min_idx = 0
    tied = False
    for idx in range(1, len(tokens)):
        if tokens[idx].priority < tokens[min_idx].priority:
            min_idx = idx
            tied = False
        elif tokens[idx].priority == tokens[min_idx].priority:
            tied = True
    return min_idx, tied


def _tied_indices(tokens: Sequence[Token], priority: int) -> List[int]:
    return [i for i, tok in enumerate(tokens) if tok.priority == priority]


def build_tree(tokens: Sequence[Token], *, strict_ties: Optional[bool] = None,
               tracer=None) -> Value:
    """
    Build the expression tree for a priority-annotated token list.

    Ties are broken by lowest index. With *strict_ties* (or the
    ``strict_ties`` flag when the argument is None) a tie raises
    PriorityTieAmbiguity instead; otherwise it is recorded on *tracer*.
    """
    if strict_ties is None:
        strict_ties = bool(FlagBus.get('strict_ties', False))
    return _build(tokens, 0, strict_ties, tracer)


def _build(tokens: Sequence[Token], offset: int, strict_ties: bool, tracer) -> Value:
    # can't split an empty range
    if not tokens:
        raise MalformedInput(f"missing operand at position {offset}")

    root_idx, tied = find_root(tokens)
    root = tokens[root_idx]
    if root.is_value:
        if len(tokens) != 1:
            raise MalformedInput(
                f"value {root.kind.value} at position {offset + root_idx} "
                f"is not separated from its neighbours by an operator"
            )
        return root.kind

    if tied:
        indices = [offset + i for i in _tied_indices(tokens, root.priority)]
        if strict_ties:
            raise PriorityTieAmbiguity(indices, root.priority)
        if tracer is not None:
            add_traceback(tracer, 'priority_tie',
                          f'priority {root.priority} shared by {indices}, '
                          f'root taken at {offset + root_idx}')

    op = root.kind
    if op is Operator.NEG:
        if root_idx != 0:
            raise MalformedInput(f"negation at position {offset + root_idx} follows a value")
        return ExprUnary(_build(tokens[1:], offset + 1, strict_ties, tracer))
    lhs = _build(tokens[:root_idx], offset, strict_ties, tracer)
    rhs = _build(tokens[root_idx + 1:], offset + root_idx + 1, strict_ties, tracer)
    return ExprBinary(lhs, rhs, op)


def flatten_tree(value: Value) -> List[Token]:
    """Walk a tree back into an infix token list (priorities reset to 0)."""
    if isinstance(value, Number):
        return [Token(value)]
    if isinstance(value, ExprUnary):
        return [Token(Operator.NEG)] + flatten_tree(value.operand)
    if isinstance(value, ExprBinary):
        return flatten_tree(value.lhs) + [Token(value.op)] + flatten_tree(value.rhs)
    raise TypeError(f"not an expression tree: {value!r}")


def to_infix(value: Value) -> str:
    """Render *value* with explicit parentheses, e.g. ``((3 * 2) + 5)``."""
    if isinstance(value, Number):
        return str(value.value)
    if isinstance(value, ExprUnary):
        return f"-{to_infix(value.operand)}"
    if isinstance(value, ExprBinary):
        return f"({to_infix(value.lhs)} {value.op.symbol} {to_infix(value.rhs)})"
    raise TypeError(f"not an expression tree: {value!r}")
