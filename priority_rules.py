"""
Priority assignment: one left-to-right pass that turns a flat token list
into a priority landscape whose minimum marks the root operator.

Only operator tokens drive the pass; value tokens only receive increments.
Each operator is handled with the priorities as they stand when the scan
reaches it.

Two rule sets are known:

    local   NEG   p[i+1] = p[i] + 1
            * /   p[i-1] += 1, p[i+1] += 1
            + -   left walk until the previous + or -, right walk to the end
    scoped  NEG   p[i+1] = p[i] + 1
            * /   p[i+1] += 1, left walk until the previous + or -
            + -   every token to the left, right walk until the next + or -

``local`` groups every binary operator to the right (1 - 2 - 3 == 2).
``scoped`` gives the conventional left-to-right grouping.
"""
from typing import Callable, Dict, List, Optional

from errors import MalformedInput
from token_model import Operator, Token
from utils.rule_manager import get_rule_set

# Binding power, larger binds tighter. Used by the reference parser.
PRIORITY = {
    Operator.NEG: 3,
    Operator.MUL: 2, Operator.DIV: 2,
    Operator.ADD: 1, Operator.SUB: 1,
}


def precedence_of(op: Operator) -> int:
    return PRIORITY.get(op, 0)


def _neighbour(tokens: List[Token], idx: int, offset: int) -> Token:
    """Return tokens[idx + offset]; a missing neighbour means malformed input."""
    target = idx + offset
    if not 0 <= target < len(tokens):
        raise MalformedInput(
            f"{tokens[idx].kind.name} at position {idx} is missing its "
            f"{'left' if offset < 0 else 'right'} operand"
        )
    return tokens[target]


def _negate_rule(tokens: List[Token], idx: int) -> None:
    _neighbour(tokens, idx, 1).priority = tokens[idx].priority + 1


def _bump_left_run(tokens: List[Token], idx: int) -> None:
    """Increment tokens[idx-1], tokens[idx-2], ... until a + or - is met."""
    for i in range(idx - 1, -1, -1):
        if tokens[i].is_additive:
            break
        tokens[i].priority += 1


def _bump_right_run(tokens: List[Token], idx: int) -> None:
    """Increment tokens[idx+1], tokens[idx+2], ... until a + or - is met."""
    for i in range(idx + 1, len(tokens)):
        if tokens[i].is_additive:
            break
        tokens[i].priority += 1


def _local_pass(tokens: List[Token]) -> None:
    for idx, token in enumerate(tokens):
        op = token.operator
        if op is None:
            continue
        if op is Operator.NEG:
            _negate_rule(tokens, idx)
        elif op.is_multiplicative:
            _neighbour(tokens, idx, -1).priority += 1
            _neighbour(tokens, idx, 1).priority += 1
        else:
            _bump_left_run(tokens, idx)
            for right in tokens[idx + 1:]:
                right.priority += 1


def _scoped_pass(tokens: List[Token]) -> None:
    for idx, token in enumerate(tokens):
        op = token.operator
        if op is None:
            continue
        if op is Operator.NEG:
            _negate_rule(tokens, idx)
        elif op.is_multiplicative:
            _neighbour(tokens, idx, -1)
            _neighbour(tokens, idx, 1).priority += 1
            _bump_left_run(tokens, idx)
        else:
            for left in tokens[:idx]:
                left.priority += 1
            _bump_right_run(tokens, idx)


RULE_SETS: Dict[str, Callable[[List[Token]], None]] = {
    'local': _local_pass,
    'scoped': _scoped_pass,
}


def parse_priorities(tokens: List[Token], rule_set: Optional[str] = None) -> None:
    """
    Assign priorities to *tokens* in place.

    Parameters
    ----------
    tokens   : flat token list, values and operators alternating, NEG only
               in prefix position.
    rule_set : 'local' or 'scoped'; defaults to utils.rule_manager's
               active rule set.

    Raises MalformedInput when NEG, * or / sit at a boundary of the list.
    """
    name = rule_set or get_rule_set()
    try:
        rule_pass = RULE_SETS[name]
    except KeyError:
        raise ValueError(f"unknown rule set {name!r}; choose one of {sorted(RULE_SETS)}") from None
    rule_pass(tokens)
